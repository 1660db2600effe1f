"""Infrastructure: docker runtime and compose command detection.

This module is responsible for locating the ``docker`` binary on the
system PATH, choosing between the compose plugin (``docker compose``)
and the legacy standalone ``docker-compose`` binary, and providing
installation guidance when either is missing.

Rules
-----
* Binary lookup via :func:`shutil.which`.
* The only subprocess is the ``docker compose version`` capability probe.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import structlog

from kali_sandbox.core.models import ComposeCommand
from kali_sandbox.exceptions import ComposeNotFoundError, RuntimeNotFoundError

log = structlog.get_logger(__name__)

RUNTIME_BINARY: str = "docker"
LEGACY_COMPOSE_BINARY: str = "docker-compose"

PLUGIN_COMPOSE = ComposeCommand(argv=(RUNTIME_BINARY, "compose"))
LEGACY_COMPOSE = ComposeCommand(argv=(LEGACY_COMPOSE_BINARY,))

_PROBE_TIMEOUT_SECONDS: float = 15.0


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of a binary detection probe.

    Attributes
    ----------
    found : bool
        Whether the binary was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool.  Empty when
        it is already present.
    """

    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------

def detect_runtime() -> ToolStatus:
    """Probe the system for the ``docker`` binary.

    Returns a :class:`ToolStatus` regardless of whether docker is
    present — the caller decides whether to abort.
    """
    result = shutil.which(RUNTIME_BINARY)

    if result is not None:
        resolved = Path(result).resolve()
        return ToolStatus(
            found=True,
            path=resolved,
            install_commands=(),
        )

    return ToolStatus(
        found=False,
        path=None,
        install_commands=_runtime_install_commands(),
    )


def require_runtime() -> Path:
    """Locate docker or raise :class:`RuntimeNotFoundError`."""
    status = detect_runtime()
    if not status.found or status.path is None:
        raise RuntimeNotFoundError(
            "Docker is required. Install Docker and try again.",
            hint=_install_hint("Install Docker Engine using one of:", status.install_commands),
        )
    return status.path


# ---------------------------------------------------------------------------
# Compose
# ---------------------------------------------------------------------------

def _plugin_available() -> bool:
    """Return ``True`` when ``docker compose version`` exits 0."""
    try:
        completed = subprocess.run(
            [*PLUGIN_COMPOSE.argv, "version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
            timeout=_PROBE_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        log.debug("compose_plugin_probe_failed", error=str(exc))
        return False
    log.debug("compose_plugin_probe", returncode=completed.returncode)
    return completed.returncode == 0


def detect_compose() -> ComposeCommand:
    """Return the compose form to use, preferring the plugin.

    Raises
    ------
    RuntimeNotFoundError
        When docker itself is missing.
    ComposeNotFoundError
        When neither compose form is usable.
    """
    require_runtime()

    if _plugin_available():
        return PLUGIN_COMPOSE
    if shutil.which(LEGACY_COMPOSE_BINARY) is not None:
        log.debug("compose_legacy_selected")
        return LEGACY_COMPOSE

    raise ComposeNotFoundError(
        "No docker-compose found.",
        hint=_install_hint(
            "Install Docker Engine + Compose plugin or docker-compose:",
            _compose_install_commands(),
        ),
    )


# ---------------------------------------------------------------------------
# Install guidance
# ---------------------------------------------------------------------------

def _install_hint(heading: str, commands: tuple[str, ...]) -> str | None:
    if not commands:
        return None
    return "\n".join([heading, *(f"  {cmd}" for cmd in commands)])


def _runtime_install_commands() -> tuple[str, ...]:
    return (
        "sudo apt install docker.io",
        "sudo dnf install docker",
        "sudo pacman -S docker",
    )


def _compose_install_commands() -> tuple[str, ...]:
    return (
        "sudo apt install docker-compose-plugin",
        "sudo dnf install docker-compose-plugin",
        "sudo pacman -S docker-compose",
    )
