"""Pure renderers for the files a new sandbox project is scaffolded with.

Every function here is a string transform: no filesystem access, no
subprocess, no printing.  The infra workspace writes the results.
"""

from __future__ import annotations

import sys
from typing import Any

import yaml

from kali_sandbox.core.models import (
    BASE_IMAGE,
    CONTAINER_NAME,
    DATA_DIR_ENV,
    DATA_MOUNT_POINT,
    DOCKERFILE_NAME,
    GUIDE_NAME,
    MANIFEST_NAME,
    NETWORK_NAME,
    PACKAGES,
    PROJECT_DIR_ENV,
    SERVICE_NAME,
    STATIC_ADDRESS,
    SUBNET,
    ComposeCommand,
    SandboxPaths,
)


# ---------------------------------------------------------------------------
# Dockerfile
# ---------------------------------------------------------------------------

def render_dockerfile(
    base_image: str = BASE_IMAGE,
    packages: tuple[str, ...] = PACKAGES,
) -> str:
    """Render the image definition.

    Installs *packages* non-interactively on top of *base_image* and
    leaves ``bash`` as the default command.
    """
    package_lines = "".join(f"    {name} \\\n" for name in packages)
    return (
        f"FROM {base_image}\n"
        "\n"
        "ENV DEBIAN_FRONTEND=noninteractive\n"
        "\n"
        "RUN apt update && apt install -y \\\n"
        f"{package_lines}"
        "    && apt clean\n"
        "\n"
        "# Set the default shell to bash\n"
        'CMD ["/bin/bash"]\n'
    )


# ---------------------------------------------------------------------------
# Compose manifest
# ---------------------------------------------------------------------------

def build_manifest(paths: SandboxPaths) -> dict[str, Any]:
    """Return the compose manifest as plain data."""
    return {
        "services": {
            SERVICE_NAME: {
                "build": ".",
                "container_name": CONTAINER_NAME,
                "networks": {
                    NETWORK_NAME: {"ipv4_address": STATIC_ADDRESS},
                },
                "volumes": [f"{paths.data_dir}:{DATA_MOUNT_POINT}"],
                "tty": True,
                "stdin_open": True,
            },
        },
        "networks": {
            NETWORK_NAME: {
                "driver": "bridge",
                "ipam": {"config": [{"subnet": SUBNET}]},
            },
        },
    }


def render_manifest(paths: SandboxPaths) -> str:
    """Serialise :func:`build_manifest` as YAML, preserving key order."""
    return yaml.safe_dump(
        build_manifest(paths),
        sort_keys=False,
        default_flow_style=False,
    )


# ---------------------------------------------------------------------------
# Usage guide
# ---------------------------------------------------------------------------

def render_guide(paths: SandboxPaths, compose: ComposeCommand) -> str:
    """Render ``README.md`` with the resolved absolute paths embedded."""
    project = paths.project_dir
    launcher = paths.launcher
    cmd = compose.display
    fence = "```"
    return f"""\
# Kali Docker Sandbox — Break Code, Not Your System

## Overview
An isolated Kali Linux environment for safe script testing, debugging, and
experimentation without risking your host system's dependencies.

## Project location
- Project dir: {project}
- Persistent data: {paths.data_dir} (mounted to {DATA_MOUNT_POINT} inside container)

## Quick start (from the project directory)
{fence}bash
cd "{project}"
# start
{cmd} up -d
# stop
{cmd} down
# view logs
{cmd} logs -f
# access container
docker exec -it {CONTAINER_NAME} bash
{fence}

## Use the included management script
A launcher for the management tool has been placed in your project directory at:
{fence}bash
{launcher}
{fence}
You will need to either be in the docker group or use `sudo`.
{fence}bash
# with sudo
sudo "{launcher}" start
# as a user in the docker group
"{launcher}" start
{fence}

## Why use this tool
- Host-safe: Avoid breaking host dependencies.
- Persistent storage: Files survive container restarts ({DATA_MOUNT_POINT}).
- Custom network: Test networking scenarios in isolation.
- Quick to set up and remove for iterative script testing.
"""


# ---------------------------------------------------------------------------
# Launcher
# ---------------------------------------------------------------------------

def render_launcher(paths: SandboxPaths, interpreter: str | None = None) -> str:
    """Render the ``manage.py`` entry point bound to *interpreter*.

    The launcher pins *paths* through the directory variables unless the
    caller's environment already sets them, so a custom location chosen
    on first start is found again by ``stop`` and ``uninstall``.
    """
    python = interpreter or sys.executable or "/usr/bin/env python3"
    return (
        f"#!{python}\n"
        '"""Manage this Kali sandbox (start, stop, access, uninstall)."""\n'
        "\n"
        "import os\n"
        "\n"
        "from kali_sandbox.cli.app import cli\n"
        "\n"
        'if __name__ == "__main__":\n'
        f"    os.environ.setdefault({PROJECT_DIR_ENV!r}, {str(paths.project_dir)!r})\n"
        f"    os.environ.setdefault({DATA_DIR_ENV!r}, {str(paths.data_dir)!r})\n"
        "    cli()\n"
    )


# ---------------------------------------------------------------------------
# Aggregate
# ---------------------------------------------------------------------------

def render_project_files(
    paths: SandboxPaths,
    compose: ComposeCommand,
) -> dict[str, str]:
    """Map file name to content for every scaffolded definition file."""
    return {
        DOCKERFILE_NAME: render_dockerfile(),
        MANIFEST_NAME: render_manifest(paths),
        GUIDE_NAME: render_guide(paths, compose),
    }
