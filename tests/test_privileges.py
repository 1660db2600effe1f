"""Tests for the docker privilege probe (infra/privileges.py)."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from kali_sandbox.exceptions import PrivilegeError
from kali_sandbox.infra import privileges

_MODULE = "kali_sandbox.infra.privileges"


class TestHasDockerPrivilege:
    @patch(f"{_MODULE}.os.geteuid", return_value=0)
    def test_root_is_privileged(self, _mock_euid: MagicMock) -> None:
        assert privileges.has_docker_privilege() is True

    @patch(f"{_MODULE}._group_names", return_value={"alice", "docker"})
    @patch(f"{_MODULE}.os.geteuid", return_value=1000)
    def test_docker_group_member(self, _mock_euid: MagicMock, _mock_groups: MagicMock) -> None:
        assert privileges.has_docker_privilege() is True

    @patch(f"{_MODULE}._group_names", return_value={"alice", "dockerish"})
    @patch(f"{_MODULE}.os.geteuid", return_value=1000)
    def test_similar_group_name_is_not_enough(self, _mock_euid: MagicMock, _mock_groups: MagicMock) -> None:
        assert privileges.has_docker_privilege() is False


class TestGroupNames:
    @patch(f"{_MODULE}.grp.getgrgid")
    @patch(f"{_MODULE}.os.getgroups", return_value=[1000, 998, 4242])
    @patch(f"{_MODULE}.os.getegid", return_value=1000)
    def test_resolves_names_and_skips_unknown(
        self,
        _mock_egid: MagicMock,
        _mock_groups: MagicMock,
        mock_getgrgid: MagicMock,
    ) -> None:
        known = {1000: "alice", 998: "docker"}

        def lookup(gid: int) -> MagicMock:
            if gid not in known:
                raise KeyError(gid)
            entry = MagicMock()
            entry.gr_name = known[gid]
            return entry

        mock_getgrgid.side_effect = lookup
        assert privileges._group_names() == {"alice", "docker"}


class TestRequirePrivileges:
    @patch(f"{_MODULE}.has_docker_privilege", return_value=True)
    def test_passes_silently(self, _mock: MagicMock) -> None:
        privileges.require_privileges(["start"])

    @patch(f"{_MODULE}.has_docker_privilege", return_value=False)
    def test_raises_with_guidance(self, _mock: MagicMock) -> None:
        with pytest.raises(PrivilegeError, match="'docker' group") as exc_info:
            privileges.require_privileges(["start"])
        hint = exc_info.value.hint
        assert hint is not None
        assert "sudo usermod -aG docker $USER" in hint
        assert "sudo kali-sandbox start" in hint
