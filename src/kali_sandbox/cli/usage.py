"""``kali-sandbox help`` — usage summary.

Renders the command list, global options and the two directory
variables with their current values.  Uses Rich tables when available
and falls back to aligned plain text.  Output goes to stdout.
Never mutates state.
"""

from __future__ import annotations

import sys

from kali_sandbox.cli.console import escape, stdout_console as console
from kali_sandbox.core.models import (
    CONTAINER_NAME,
    DATA_DIR_ENV,
    PROJECT_DIR_ENV,
    SandboxPaths,
)
from kali_sandbox.version import __version__

PROG: str = "kali-sandbox"

COMMANDS: tuple[tuple[str, str], ...] = (
    ("start", "Builds and starts the Kali sandbox container."),
    ("stop", "Stops and removes the sandbox container and network."),
    ("access", "Enters the running container's bash shell."),
    ("uninstall", "Removes all project files, containers, and persistent data."),
    ("help", "Displays this help message."),
)

OPTIONS: tuple[tuple[str, str], ...] = (
    ("--project-dir PATH", f"Project directory (overrides {PROJECT_DIR_ENV})."),
    ("--data-dir PATH", f"Persistent data directory (overrides {DATA_DIR_ENV})."),
    ("-y, --yes", "Use the resolved directories without asking on first start."),
    ("-v, --verbose", "Log every docker command that is run."),
    ("-V, --version", "Show the version and exit."),
)


def _banner_lines() -> list[str]:
    rule = "=" * 40
    return [rule, f"      {PROG} {__version__}", rule]


def _config_rows(paths: SandboxPaths) -> list[tuple[str, str]]:
    return [
        (f"{PROJECT_DIR_ENV}=", f"(default: {paths.project_dir})"),
        (f"{DATA_DIR_ENV}=", f"(default: {paths.data_dir})"),
    ]


def _print_plain_usage(paths: SandboxPaths) -> None:
    """Render usage without Rich."""
    out = sys.stdout
    for line in _banner_lines():
        print(line, file=out)
    print(f"Usage: {PROG} [options] [command]", file=out)
    print(file=out)
    print("Commands:", file=out)
    for name, text in COMMANDS:
        print(f"  {name:<10} - {text}", file=out)
    print(file=out)
    print("Options:", file=out)
    for flag, text in OPTIONS:
        print(f"  {flag:<20} {text}", file=out)
    print(file=out)
    print("Configuration:", file=out)
    print("  You can override the default directories by setting these environment variables:", file=out)
    for name, value in _config_rows(paths):
        print(f"  {name:<24} {value}", file=out)
    print(file=out)
    print(f"Manual container access: docker exec -it {CONTAINER_NAME} bash", file=out)
    print(file=out)


def print_usage(paths: SandboxPaths) -> None:
    """Print the usage summary for the resolved *paths*."""
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_usage(paths)
        return

    for line in _banner_lines():
        console.print(f"[blue]{line}[/blue]")
    console.print(f"[yellow]Usage: {PROG} \\[options] \\[command][/yellow]")
    console.print()

    commands = Table(title="Commands", show_header=False, box=None, title_style="bold blue", title_justify="left")
    commands.add_column(style="green", min_width=10)
    commands.add_column()
    for name, text in COMMANDS:
        commands.add_row(name, text)
    console.print(commands)
    console.print()

    options = Table(title="Options", show_header=False, box=None, title_style="bold blue", title_justify="left")
    options.add_column(style="cyan", min_width=20)
    options.add_column()
    for flag, text in OPTIONS:
        options.add_row(flag, text)
    console.print(options)
    console.print()

    console.print("[bold blue]Configuration:[/bold blue]")
    console.print("  You can override the default directories by setting these environment variables:")
    for name, value in _config_rows(paths):
        console.print(f"  [yellow]{name}[/yellow]  {escape(value)}")
    console.print()
    console.print(
        f"[yellow]* Manual container access: docker exec -it {CONTAINER_NAME} bash[/yellow]",
    )
    console.print()
