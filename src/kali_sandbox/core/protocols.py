"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from kali_sandbox.core.models import ComposeCommand, SandboxPaths


class Orchestrator(Protocol):
    """Contract for the external container runtime and its compose command.

    Implementations must map every backend failure to a
    :class:`~kali_sandbox.exceptions.SandboxError` subclass.
    """

    def require_runtime(self) -> None:
        """Ensure the container runtime binary is available.

        Raises
        ------
        RuntimeNotFoundError
            When the runtime cannot be located.
        """
        ...  # pragma: no cover

    def detect_compose(self) -> ComposeCommand:
        """Ensure the runtime is present and return the compose form to use.

        Raises
        ------
        RuntimeNotFoundError
            When the runtime cannot be located.
        ComposeNotFoundError
            When neither compose form is usable.
        """
        ...  # pragma: no cover

    def bring_up(self, project_dir: Path) -> None:
        """Build if necessary and start the environment in the background.

        Raises
        ------
        OrchestrationError
            When the compose command exits non-zero.
        """
        ...  # pragma: no cover

    def bring_down(self, project_dir: Path, *, remove_volumes: bool = False) -> None:
        """Stop and remove the environment's containers and network.

        Raises
        ------
        OrchestrationError
            When the compose command exits non-zero.
        """
        ...  # pragma: no cover

    def exec_shell(self, container_name: str) -> int:
        """Attach an interactive shell and return its exit status."""
        ...  # pragma: no cover


class Workspace(Protocol):
    """Contract for the filesystem holding a sandbox project."""

    def project_exists(self, paths: SandboxPaths) -> bool:
        ...  # pragma: no cover

    def manifest_exists(self, paths: SandboxPaths) -> bool:
        ...  # pragma: no cover

    def write_scaffold(
        self,
        paths: SandboxPaths,
        files: Mapping[str, str],
    ) -> list[Path]:
        """Create both directories and write each missing file.

        Existing files are left untouched.  Returns the paths written.

        Raises
        ------
        ScaffoldError
            When a directory or file cannot be created.
        """
        ...  # pragma: no cover

    def install_launcher(self, paths: SandboxPaths) -> Path | None:
        """Place an executable copy of the CLI entry point in the project.

        Returns ``None`` when a launcher is already there.
        """
        ...  # pragma: no cover

    def remove(self, paths: SandboxPaths) -> list[Path]:
        """Recursively delete both directories; returns what was removed."""
        ...  # pragma: no cover


PathChooser = Callable[[SandboxPaths], SandboxPaths]
"""Interactive first-run hook: receives the defaults, returns the choice."""
