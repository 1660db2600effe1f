"""Filesystem implementation of :class:`~kali_sandbox.core.protocols.Workspace`.

All ``OSError`` raised while creating or removing project files is
re-raised as :class:`~kali_sandbox.exceptions.ScaffoldError`.
"""

from __future__ import annotations

import shutil
from collections.abc import Mapping
from pathlib import Path

import structlog

from kali_sandbox.core.models import SandboxPaths
from kali_sandbox.core.templates import render_launcher
from kali_sandbox.exceptions import ScaffoldError

log = structlog.get_logger(__name__)

LAUNCHER_MODE: int = 0o755


class FilesystemWorkspace:
    """Reads and writes sandbox projects on the local filesystem."""

    def __init__(self, interpreter: str | None = None) -> None:
        self._interpreter: str | None = interpreter

    def project_exists(self, paths: SandboxPaths) -> bool:
        return paths.project_dir.is_dir()

    def manifest_exists(self, paths: SandboxPaths) -> bool:
        return paths.manifest.is_file()

    def write_scaffold(
        self,
        paths: SandboxPaths,
        files: Mapping[str, str],
    ) -> list[Path]:
        """Create both directories, then write every file not already present."""
        written: list[Path] = []
        try:
            paths.data_dir.mkdir(parents=True, exist_ok=True)
            paths.project_dir.mkdir(parents=True, exist_ok=True)
            for name, content in files.items():
                target = paths.project_dir / name
                if target.exists():
                    log.debug("scaffold_kept", path=str(target))
                    continue
                target.write_text(content, encoding="utf-8")
                written.append(target)
        except OSError as exc:
            raise ScaffoldError(
                f"Could not create project files in {paths.project_dir}: {exc}",
                hint="Check that the directory is writable.",
            ) from exc
        log.debug("scaffold_written", files=[str(p) for p in written])
        return written

    def install_launcher(self, paths: SandboxPaths) -> Path | None:
        """Write the executable launcher unless one is already present."""
        target = paths.launcher
        if target.exists():
            return None
        try:
            target.write_text(render_launcher(paths, self._interpreter), encoding="utf-8")
            target.chmod(LAUNCHER_MODE)
        except OSError as exc:
            raise ScaffoldError(
                f"Could not install the management launcher at {target}: {exc}",
            ) from exc
        return target

    def remove(self, paths: SandboxPaths) -> list[Path]:
        removed: list[Path] = []
        for directory in (paths.project_dir, paths.data_dir):
            if not directory.exists():
                continue
            try:
                shutil.rmtree(directory)
            except OSError as exc:
                raise ScaffoldError(
                    f"Could not remove {directory}: {exc}",
                    hint="Remove it manually, using sudo if the container created root-owned files.",
                ) from exc
            removed.append(directory)
        return removed
