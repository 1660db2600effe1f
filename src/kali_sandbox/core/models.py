"""Domain models for kali-sandbox.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O, zero dependencies on
external packages, and are built once per invocation.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


CONTAINER_NAME: str = "kali_container"
"""Fixed name of the running environment, used by ``access``."""

SERVICE_NAME: str = "kali"
NETWORK_NAME: str = "kali_net"
SUBNET: str = "169.16.138.0/24"
STATIC_ADDRESS: str = "169.16.138.3"
DATA_MOUNT_POINT: str = "/mnt"

BASE_IMAGE: str = "kalilinux/kali-rolling"
PACKAGES: tuple[str, ...] = (
    "net-tools",
    "iproute2",
    "iputils-ping",
    "curl",
    "nmap",
    "nano",
    "dnsutils",
    "git",
    "python3",
    "python3-pip",
)

DOCKERFILE_NAME: str = "Dockerfile"
MANIFEST_NAME: str = "docker-compose.yml"
GUIDE_NAME: str = "README.md"
LAUNCHER_NAME: str = "manage.py"

PROJECT_DIR_ENV: str = "KALI_SANDBOX_DIR"
DATA_DIR_ENV: str = "KALI_SANDBOX_DATA_DIR"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SandboxPaths:
    """The two directories a sandbox lives in."""

    project_dir: Path
    """Holds the generated Dockerfile, compose manifest, guide and launcher."""

    data_dir: Path
    """Bind-mounted to :data:`DATA_MOUNT_POINT`; survives recreation."""

    @property
    def manifest(self) -> Path:
        return self.project_dir / MANIFEST_NAME

    @property
    def launcher(self) -> Path:
        return self.project_dir / LAUNCHER_NAME


# ---------------------------------------------------------------------------
# Orchestration command
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ComposeCommand:
    """The detected compose invocation form.

    ``("docker", "compose")`` for the plugin, ``("docker-compose",)``
    for the legacy standalone binary.
    """

    argv: tuple[str, ...]

    @property
    def display(self) -> str:
        """Shell form used in the generated guide and in messages."""
        return " ".join(self.argv)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SandboxSettings:
    """Configuration resolved once at startup and passed to every handler."""

    paths: SandboxPaths
    overridden: bool = False
    """``True`` when either directory came from a flag or environment variable."""

    assume_yes: bool = False
    """Skip the interactive first-run prompt and accept ``paths``."""


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

class Outcome(enum.Enum):
    """What a lifecycle operation ended up doing."""

    DONE = "done"
    NOTHING_TO_DO = "nothing-to-do"


@dataclass(frozen=True, slots=True)
class StartResult:
    """Summary of a completed ``start`` for the CLI to report."""

    paths: SandboxPaths
    compose: ComposeCommand
    scaffolded: tuple[Path, ...] = ()
    """Files written during this run; empty when the project already existed."""
