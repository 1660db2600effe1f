"""Interactive first-run directory setup for the CLI layer.

This module is responsible for:

* Offering the default project and data directories.
* Asking for a custom project path when the defaults are declined.
* Re-prompting until a valid path is given.

Validation is a pure check on the filesystem (no writes); the chosen
paths are returned to the lifecycle service, which does the scaffolding.
"""

from __future__ import annotations

import os
from typing import Any

from kali_sandbox.cli.console import console, escape
from kali_sandbox.core.models import SandboxPaths
from kali_sandbox.exceptions import (
    EnvironmentError,
    InvalidPathError,
    SetupCancelledError,
)
from kali_sandbox.infra.settings import expand_path, invoking_user_home

CUSTOM_DATA_DIRNAME: str = "sandbox_data"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive prompts."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


# ---------------------------------------------------------------------------
# Validation (no prompting)
# ---------------------------------------------------------------------------

def validate_project_path(raw: str | None) -> SandboxPaths:
    """Turn user input into sandbox paths or raise :class:`InvalidPathError`.

    A leading ``~`` refers to the invoking user's home, even under sudo.
    The data directory of a custom project is ``<project>/sandbox_data``.
    """
    text = (raw or "").strip()
    if not text:
        raise InvalidPathError("Path cannot be empty.")

    project = expand_path(text, invoking_user_home())
    parent = project.parent
    if not parent.is_dir() or not os.access(parent, os.W_OK):
        raise InvalidPathError(
            f"The parent directory '{parent}' does not exist or is not writable.",
        )
    return SandboxPaths(project_dir=project, data_dir=project / CUSTOM_DATA_DIRNAME)


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def prompt_for_paths(defaults: SandboxPaths) -> SandboxPaths:
    """Ask whether to use *defaults*; otherwise collect a custom path.

    Loops until the defaults are accepted or a valid custom path is
    entered.

    Raises
    ------
    SetupCancelledError
        If the user cancels a prompt (Ctrl+C / Esc returns ``None``).
    """
    questionary = _import_questionary()

    console.notice("Project files not found. Let's set up the directories.")
    while True:
        use_default: bool | None = questionary.confirm(
            f"Do you want to use the default path: {defaults.project_dir}?",
            default=True,
        ).ask()
        if use_default is None:
            raise SetupCancelledError("Setup cancelled.")
        if use_default:
            return defaults

        answer: str | None = questionary.text(
            "Enter the full path for the Kali Docker project:",
        ).ask()
        if answer is None:
            raise SetupCancelledError("Setup cancelled.")

        try:
            return validate_project_path(answer)
        except InvalidPathError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
