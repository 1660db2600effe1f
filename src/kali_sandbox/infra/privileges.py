"""Infrastructure: may the current process manage the docker daemon?

Membership of the ``docker`` group or an effective uid of 0 is
required.  The probe reads process credentials and the group database
only; nothing is executed.
"""

from __future__ import annotations

import grp
import os

import structlog

from kali_sandbox.exceptions import PrivilegeError

log = structlog.get_logger(__name__)

DOCKER_GROUP: str = "docker"


def _group_names() -> set[str]:
    """Names of every group the current process belongs to."""
    names: set[str] = set()
    for gid in {os.getegid(), *os.getgroups()}:
        try:
            names.add(grp.getgrgid(gid).gr_name)
        except KeyError:
            continue
    return names


def is_elevated() -> bool:
    return os.geteuid() == 0


def has_docker_privilege() -> bool:
    """Return ``True`` when running as root or as a ``docker`` group member."""
    if is_elevated():
        return True
    groups = _group_names()
    log.debug("group_membership", groups=sorted(groups))
    return DOCKER_GROUP in groups


def require_privileges(argv: list[str] | None = None) -> None:
    """Raise :class:`PrivilegeError` unless :func:`has_docker_privilege`.

    *argv* is echoed in the ``sudo`` suggestion of the hint.
    """
    if has_docker_privilege():
        return

    rerun = " ".join(["sudo", "kali-sandbox", *(argv or [])])
    raise PrivilegeError(
        f"You must be in the '{DOCKER_GROUP}' group or run this command with sudo.",
        hint="\n".join(
            (
                f"To add yourself to the docker group, run: sudo usermod -aG {DOCKER_GROUP} $USER",
                "You will need to log out and log back in for the changes to take effect.",
                f"Alternatively, run: {rerun}",
            )
        ),
    )
