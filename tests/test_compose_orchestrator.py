"""Tests for the subprocess-backed orchestrator (infra/compose_orchestrator.py).

:func:`subprocess.run` is mocked; the compose form is injected so no
detection probe runs.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kali_sandbox.core.models import ComposeCommand
from kali_sandbox.exceptions import OrchestrationError
from kali_sandbox.infra.compose_orchestrator import ComposeOrchestrator

_RUN = "kali_sandbox.infra.compose_orchestrator.subprocess.run"

PLUGIN = ComposeCommand(argv=("docker", "compose"))
LEGACY = ComposeCommand(argv=("docker-compose",))


def _completed(returncode: int = 0) -> subprocess.CompletedProcess[bytes]:
    return subprocess.CompletedProcess(args=[], returncode=returncode)


class TestBringUp:
    @patch(_RUN, return_value=_completed(0))
    def test_plugin_up_builds_detached_in_project_dir(self, mock_run: MagicMock, tmp_path: Path) -> None:
        ComposeOrchestrator(PLUGIN).bring_up(tmp_path)
        mock_run.assert_called_once_with(
            ["docker", "compose", "up", "-d", "--build"],
            cwd=tmp_path,
            check=False,
        )

    @patch(_RUN, return_value=_completed(0))
    def test_legacy_up(self, mock_run: MagicMock, tmp_path: Path) -> None:
        ComposeOrchestrator(LEGACY).bring_up(tmp_path)
        assert mock_run.call_args.args[0] == ["docker-compose", "up", "-d", "--build"]

    @patch(_RUN, return_value=_completed(3))
    def test_nonzero_exit_raises(self, _mock_run: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(OrchestrationError, match="exited with status 3") as exc_info:
            ComposeOrchestrator(PLUGIN).bring_up(tmp_path)
        assert exc_info.value.returncode == 3

    @patch(_RUN, side_effect=FileNotFoundError("docker"))
    def test_unrunnable_binary_raises(self, _mock_run: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(OrchestrationError, match="Could not run 'docker'") as exc_info:
            ComposeOrchestrator(PLUGIN).bring_up(tmp_path)
        assert exc_info.value.returncode == 127


class TestBringDown:
    @patch(_RUN, return_value=_completed(0))
    def test_down(self, mock_run: MagicMock, tmp_path: Path) -> None:
        ComposeOrchestrator(PLUGIN).bring_down(tmp_path)
        assert mock_run.call_args.args[0] == ["docker", "compose", "down"]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    @patch(_RUN, return_value=_completed(0))
    def test_down_with_volumes(self, mock_run: MagicMock, tmp_path: Path) -> None:
        ComposeOrchestrator(LEGACY).bring_down(tmp_path, remove_volumes=True)
        assert mock_run.call_args.args[0] == ["docker-compose", "down", "-v"]

    @patch(_RUN, return_value=_completed(1))
    def test_failure_raises(self, _mock_run: MagicMock, tmp_path: Path) -> None:
        with pytest.raises(OrchestrationError, match="Failed to stop"):
            ComposeOrchestrator(PLUGIN).bring_down(tmp_path)


class TestExecShell:
    @patch(_RUN, return_value=_completed(0))
    def test_exec_interactive_bash(self, mock_run: MagicMock) -> None:
        assert ComposeOrchestrator(PLUGIN).exec_shell("kali_container") == 0
        mock_run.assert_called_once_with(
            ["docker", "exec", "-it", "kali_container", "bash"],
            cwd=None,
            check=False,
        )

    @patch(_RUN, return_value=_completed(1))
    def test_status_returned_not_raised(self, _mock_run: MagicMock) -> None:
        assert ComposeOrchestrator(LEGACY).exec_shell("kali_container") == 1


class TestDetection:
    @patch("kali_sandbox.infra.compose_orchestrator.docker_detector.detect_compose", return_value=LEGACY)
    def test_detects_once_and_caches(self, mock_detect: MagicMock) -> None:
        orchestrator = ComposeOrchestrator()
        assert orchestrator.detect_compose() is LEGACY
        assert orchestrator.detect_compose() is LEGACY
        mock_detect.assert_called_once()

    @patch("kali_sandbox.infra.compose_orchestrator.docker_detector.require_runtime")
    def test_require_runtime_delegates(self, mock_require: MagicMock) -> None:
        ComposeOrchestrator().require_runtime()
        mock_require.assert_called_once()
