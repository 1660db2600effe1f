"""Shared pytest fixtures and configuration for the kali-sandbox test suite.

Guidelines
----------
* No docker, no network, no real privilege in any test.
* subprocess and ``shutil.which`` are mocked at the infra boundary.
* Filesystem effects are confined to ``tmp_path``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from kali_sandbox.cli.log_config import configure_logging
from kali_sandbox.core.models import (
    ComposeCommand,
    SandboxPaths,
    SandboxSettings,
)


class FakeOrchestrator:
    """Records every call; ``up_returncode`` / ``down_returncode`` simulate failures."""

    def __init__(self, *, compose: ComposeCommand | None = None, shell_status: int = 0) -> None:
        self.compose = compose or ComposeCommand(argv=("docker", "compose"))
        self.shell_status = shell_status
        self.calls: list[tuple] = []
        self.fail_with: Exception | None = None

    def require_runtime(self) -> None:
        self.calls.append(("require_runtime",))

    def detect_compose(self) -> ComposeCommand:
        self.calls.append(("detect_compose",))
        return self.compose

    def bring_up(self, project_dir: Path) -> None:
        self.calls.append(("up", project_dir))
        if self.fail_with is not None:
            raise self.fail_with

    def bring_down(self, project_dir: Path, *, remove_volumes: bool = False) -> None:
        self.calls.append(("down", project_dir, remove_volumes))
        if self.fail_with is not None:
            raise self.fail_with

    def exec_shell(self, container_name: str) -> int:
        self.calls.append(("exec", container_name))
        return self.shell_status

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture(autouse=True)
def _quiet_logging() -> None:
    configure_logging(verbose=False)


@pytest.fixture()
def sandbox_paths(tmp_path: Path) -> SandboxPaths:
    return SandboxPaths(
        project_dir=tmp_path / "home" / "kali_sandbox",
        data_dir=tmp_path / "home" / "sandbox",
    )


@pytest.fixture()
def settings(sandbox_paths: SandboxPaths) -> SandboxSettings:
    return SandboxSettings(paths=sandbox_paths, overridden=True)


@pytest.fixture()
def orchestrator() -> FakeOrchestrator:
    return FakeOrchestrator()
