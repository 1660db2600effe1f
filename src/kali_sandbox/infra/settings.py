"""Infrastructure: resolve :class:`~kali_sandbox.core.models.SandboxSettings`.

Precedence for each directory is command-line option, then environment
variable, then the default under the invoking user's home.

The invoking user's home is used even under ``sudo`` so that elevation
never redirects generated files into root's home directory.
"""

from __future__ import annotations

import os
import pwd
from collections.abc import Mapping
from pathlib import Path

import structlog

from kali_sandbox.core.models import (
    DATA_DIR_ENV,
    PROJECT_DIR_ENV,
    SandboxPaths,
    SandboxSettings,
)

log = structlog.get_logger(__name__)

DEFAULT_PROJECT_DIRNAME: str = "kali_sandbox"
DEFAULT_DATA_DIRNAME: str = "sandbox"


def invoking_user_home(
    environ: Mapping[str, str] | None = None,
    *,
    euid: int | None = None,
) -> Path:
    """Return the home directory of the user who invoked the command.

    Under ``sudo`` (effective uid 0 with ``SUDO_USER`` set) this is the
    password-database home of ``SUDO_USER``; otherwise the process home.
    """
    env = os.environ if environ is None else environ
    effective = os.geteuid() if euid is None else euid
    sudo_user = env.get("SUDO_USER")

    if effective == 0 and sudo_user:
        try:
            return Path(pwd.getpwnam(sudo_user).pw_dir)
        except KeyError:
            log.warning("sudo_user_unknown", sudo_user=sudo_user)

    home = env.get("HOME")
    if home:
        return Path(home)
    return Path(pwd.getpwuid(effective).pw_dir)


def default_paths(home: Path) -> SandboxPaths:
    return SandboxPaths(
        project_dir=home / DEFAULT_PROJECT_DIRNAME,
        data_dir=home / DEFAULT_DATA_DIRNAME,
    )


def expand_path(raw: str, home: Path) -> Path:
    """Expand a leading ``~`` against *home* and make *raw* absolute."""
    if raw == "~":
        path = home
    elif raw.startswith("~/"):
        path = home / raw[2:]
    else:
        path = Path(raw)
    if not path.is_absolute():
        path = Path.cwd() / path
    return Path(os.path.normpath(path))


def resolve_settings(
    *,
    project_dir: str | None = None,
    data_dir: str | None = None,
    assume_yes: bool = False,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> SandboxSettings:
    """Build the per-invocation settings.

    Empty strings, whether passed as options or set in the environment,
    count as unset.
    """
    env = os.environ if environ is None else environ
    base = home if home is not None else invoking_user_home(env)
    defaults = default_paths(base)

    raw_project = project_dir or env.get(PROJECT_DIR_ENV) or None
    raw_data = data_dir or env.get(DATA_DIR_ENV) or None

    paths = SandboxPaths(
        project_dir=expand_path(raw_project, base) if raw_project else defaults.project_dir,
        data_dir=expand_path(raw_data, base) if raw_data else defaults.data_dir,
    )
    log.debug(
        "settings_resolved",
        project_dir=str(paths.project_dir),
        data_dir=str(paths.data_dir),
        home=str(base),
    )
    return SandboxSettings(
        paths=paths,
        overridden=raw_project is not None or raw_data is not None,
        assume_yes=assume_yes,
    )
