"""docker / compose backed implementation of
:class:`~kali_sandbox.core.protocols.Orchestrator`.

This module is the **only** place in the codebase that runs lifecycle
commands against the container runtime.  Non-zero exits from ``up``
and ``down`` are re-raised as
:class:`~kali_sandbox.exceptions.OrchestrationError`; ``exec`` returns
its status unchanged.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path

import structlog

from kali_sandbox.core.models import ComposeCommand
from kali_sandbox.exceptions import OrchestrationError
from kali_sandbox.infra import docker_detector

log = structlog.get_logger(__name__)


class ComposeOrchestrator:
    """Concrete :class:`Orchestrator` that shells out to docker.

    Output is not captured: build logs and the interactive shell go
    straight to the user's terminal.  The compose form is probed once
    and cached for the lifetime of the instance.
    """

    def __init__(self, compose: ComposeCommand | None = None) -> None:
        self._compose: ComposeCommand | None = compose

    # ------------------------------------------------------------------
    # Tooling
    # ------------------------------------------------------------------

    def require_runtime(self) -> None:
        docker_detector.require_runtime()

    def detect_compose(self) -> ComposeCommand:
        if self._compose is None:
            self._compose = docker_detector.detect_compose()
            log.debug("compose_detected", command=self._compose.display)
        return self._compose

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def bring_up(self, project_dir: Path) -> None:
        """Run ``<compose> up -d --build`` in *project_dir*."""
        self._compose_call(project_dir, ("up", "-d", "--build"), action="start")

    def bring_down(self, project_dir: Path, *, remove_volumes: bool = False) -> None:
        """Run ``<compose> down`` (with ``-v`` when *remove_volumes*)."""
        args: tuple[str, ...] = ("down", "-v") if remove_volumes else ("down",)
        self._compose_call(project_dir, args, action="stop")

    def exec_shell(self, container_name: str) -> int:
        """Run ``docker exec -it <container_name> bash`` attached to the TTY."""
        argv = [docker_detector.RUNTIME_BINARY, "exec", "-it", container_name, "bash"]
        return self._run(argv, cwd=None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _compose_call(
        self,
        project_dir: Path,
        args: Sequence[str],
        *,
        action: str,
    ) -> None:
        compose = self.detect_compose()
        argv = [*compose.argv, *args]
        returncode = self._run(argv, cwd=project_dir)
        if returncode != 0:
            raise OrchestrationError(
                f"Failed to {action} the sandbox: '{' '.join(argv)}' exited with status {returncode}.",
                returncode=returncode,
                hint=f"Check the output above, or run it manually from {project_dir}.",
            )

    @staticmethod
    def _run(argv: list[str], *, cwd: Path | None) -> int:
        log.debug("run", argv=argv, cwd=str(cwd) if cwd else None)
        try:
            completed = subprocess.run(argv, cwd=cwd, check=False)
        except OSError as exc:
            raise OrchestrationError(
                f"Could not run '{argv[0]}': {exc}",
                returncode=127,
            ) from exc
        log.debug("exited", argv=argv, returncode=completed.returncode)
        return completed.returncode
