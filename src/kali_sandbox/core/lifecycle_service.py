"""Core lifecycle service — sequences every sandbox subcommand.

The service delegates all side effects to an
:class:`~kali_sandbox.core.protocols.Orchestrator` and a
:class:`~kali_sandbox.core.protocols.Workspace` injected at
construction time.  It is responsible for:

* Ordering precondition checks before any effect.
* Deciding when first-run scaffolding happens.
* Ensuring the data directory is only ever removed by ``uninstall``.

Guarantees
----------
* No ``print()``, no direct filesystem or subprocess access.
* Every failure surfaces as a :class:`~kali_sandbox.exceptions.SandboxError`.
"""

from __future__ import annotations

from pathlib import Path

import structlog

from kali_sandbox.core.models import (
    CONTAINER_NAME,
    Outcome,
    SandboxSettings,
    StartResult,
)
from kali_sandbox.core.protocols import Orchestrator, PathChooser, Workspace
from kali_sandbox.core.templates import render_project_files

log = structlog.get_logger(__name__)


class LifecycleService:
    """Drives start / stop / access / uninstall for a single sandbox.

    Parameters
    ----------
    orchestrator:
        Any object satisfying the :class:`Orchestrator` protocol.
    workspace:
        Any object satisfying the :class:`Workspace` protocol.
    """

    def __init__(self, orchestrator: Orchestrator, workspace: Workspace) -> None:
        self._orchestrator: Orchestrator = orchestrator
        self._workspace: Workspace = workspace

    # ------------------------------------------------------------------
    # start
    # ------------------------------------------------------------------

    def start(
        self,
        settings: SandboxSettings,
        *,
        choose_paths: PathChooser | None = None,
    ) -> StartResult:
        """Scaffold the project if needed, then bring the environment up.

        *choose_paths* is consulted only when the project directory does
        not exist and the paths were neither overridden nor pre-accepted.

        Raises
        ------
        RuntimeNotFoundError, ComposeNotFoundError
            When the tooling is missing.
        OrchestrationError
            When ``up`` fails.
        """
        compose = self._orchestrator.detect_compose()
        paths = settings.paths

        if not self._workspace.project_exists(paths):
            interactive = not (settings.overridden or settings.assume_yes)
            if interactive and choose_paths is not None:
                paths = choose_paths(paths)
                log.debug(
                    "paths_chosen",
                    project_dir=str(paths.project_dir),
                    data_dir=str(paths.data_dir),
                )

        written: tuple[Path, ...] = ()
        if not self._workspace.manifest_exists(paths):
            log.info("scaffolding_project", project_dir=str(paths.project_dir))
            files = render_project_files(paths, compose)
            created = self._workspace.write_scaffold(paths, files)
            launcher = self._workspace.install_launcher(paths)
            if launcher is not None:
                created.append(launcher)
            written = tuple(created)

        log.info("bringing_up", project_dir=str(paths.project_dir))
        self._orchestrator.bring_up(paths.project_dir)
        return StartResult(paths=paths, compose=compose, scaffolded=written)

    # ------------------------------------------------------------------
    # stop
    # ------------------------------------------------------------------

    def stop(self, settings: SandboxSettings) -> Outcome:
        """Bring the environment down; the data directory is untouched."""
        self._orchestrator.detect_compose()
        paths = settings.paths

        if not self._workspace.manifest_exists(paths):
            log.info("stop_skipped", reason="no manifest", project_dir=str(paths.project_dir))
            return Outcome.NOTHING_TO_DO

        log.info("bringing_down", project_dir=str(paths.project_dir))
        self._orchestrator.bring_down(paths.project_dir)
        return Outcome.DONE

    # ------------------------------------------------------------------
    # access
    # ------------------------------------------------------------------

    def access(self, settings: SandboxSettings) -> int:
        """Open a shell in the running container and return its status.

        Liveness is not checked first; the runtime reports it.
        """
        self._orchestrator.require_runtime()
        log.debug("exec_shell", container=CONTAINER_NAME, project_dir=str(settings.paths.project_dir))
        return self._orchestrator.exec_shell(CONTAINER_NAME)

    # ------------------------------------------------------------------
    # uninstall
    # ------------------------------------------------------------------

    def uninstall(self, settings: SandboxSettings) -> Outcome:
        """Tear down containers, network and volumes, then delete both dirs.

        A failing teardown aborts before anything is deleted.
        """
        self._orchestrator.detect_compose()
        paths = settings.paths

        if not self._workspace.project_exists(paths):
            log.info("uninstall_skipped", reason="no project", project_dir=str(paths.project_dir))
            return Outcome.NOTHING_TO_DO

        log.info("tearing_down", project_dir=str(paths.project_dir))
        self._orchestrator.bring_down(paths.project_dir, remove_volumes=True)

        removed = self._workspace.remove(paths)
        log.info("removed", paths=[str(p) for p in removed])
        return Outcome.DONE
