"""Tests for the filesystem workspace (infra/workspace.py)."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kali_sandbox.core.models import SandboxPaths
from kali_sandbox.exceptions import ScaffoldError
from kali_sandbox.infra.workspace import FilesystemWorkspace


@pytest.fixture()
def workspace() -> FilesystemWorkspace:
    return FilesystemWorkspace(interpreter="/usr/bin/python3")


class TestExistence:
    def test_absent(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        assert workspace.project_exists(sandbox_paths) is False
        assert workspace.manifest_exists(sandbox_paths) is False

    def test_project_without_manifest(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        sandbox_paths.project_dir.mkdir(parents=True)
        assert workspace.project_exists(sandbox_paths) is True
        assert workspace.manifest_exists(sandbox_paths) is False


class TestWriteScaffold:
    def test_creates_both_directories(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        written = workspace.write_scaffold(sandbox_paths, {"Dockerfile": "FROM x\n"})
        assert sandbox_paths.project_dir.is_dir()
        assert sandbox_paths.data_dir.is_dir()
        assert written == [sandbox_paths.project_dir / "Dockerfile"]

    def test_existing_files_untouched(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        sandbox_paths.project_dir.mkdir(parents=True)
        (sandbox_paths.project_dir / "README.md").write_text("mine")
        written = workspace.write_scaffold(
            sandbox_paths,
            {"README.md": "generated", "Dockerfile": "FROM x\n"},
        )
        assert (sandbox_paths.project_dir / "README.md").read_text() == "mine"
        assert [p.name for p in written] == ["Dockerfile"]

    def test_os_error_wrapped(self, workspace: FilesystemWorkspace, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a dir")
        paths = SandboxPaths(project_dir=blocker / "project", data_dir=tmp_path / "data")
        with pytest.raises(ScaffoldError, match="Could not create project files"):
            workspace.write_scaffold(paths, {"Dockerfile": "FROM x\n"})


class TestInstallLauncher:
    def test_executable_launcher(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        sandbox_paths.project_dir.mkdir(parents=True)
        target = workspace.install_launcher(sandbox_paths)
        assert target == sandbox_paths.project_dir / "manage.py"
        assert os.access(target, os.X_OK)
        assert target.read_text().startswith("#!/usr/bin/python3\n")
        assert repr(str(sandbox_paths.project_dir)) in target.read_text()

    def test_existing_launcher_kept(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        sandbox_paths.project_dir.mkdir(parents=True)
        sandbox_paths.launcher.write_text("# custom")
        assert workspace.install_launcher(sandbox_paths) is None
        assert sandbox_paths.launcher.read_text() == "# custom"


class TestRemove:
    def test_removes_both(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        (sandbox_paths.project_dir / "nested").mkdir(parents=True)
        (sandbox_paths.data_dir / "deep" / "er").mkdir(parents=True)
        removed = workspace.remove(sandbox_paths)
        assert removed == [sandbox_paths.project_dir, sandbox_paths.data_dir]
        assert not sandbox_paths.project_dir.exists()
        assert not sandbox_paths.data_dir.exists()

    def test_missing_data_dir_skipped(self, workspace: FilesystemWorkspace, sandbox_paths: SandboxPaths) -> None:
        sandbox_paths.project_dir.mkdir(parents=True)
        assert workspace.remove(sandbox_paths) == [sandbox_paths.project_dir]

    @patch("kali_sandbox.infra.workspace.shutil.rmtree", side_effect=PermissionError("root-owned"))
    def test_os_error_wrapped(
        self,
        _mock_rmtree: MagicMock,
        workspace: FilesystemWorkspace,
        sandbox_paths: SandboxPaths,
    ) -> None:
        sandbox_paths.project_dir.mkdir(parents=True)
        with pytest.raises(ScaffoldError, match="Could not remove") as exc_info:
            workspace.remove(sandbox_paths)
        assert exc_info.value.hint is not None
