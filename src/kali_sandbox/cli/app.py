"""CLI application entry point and command routing for kali-sandbox.

This module is the **sole error boundary** for the entire application.
It catches :class:`~kali_sandbox.exceptions.SandboxError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages via Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the
  :class:`~kali_sandbox.core.lifecycle_service.LifecycleService`.
* Settings are resolved once per invocation and passed explicitly to
  each handler.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from typing import NoReturn

from kali_sandbox.cli import exit_codes
from kali_sandbox.cli.console import console, escape
from kali_sandbox.cli.log_config import configure_logging
from kali_sandbox.cli.usage import PROG, print_usage
from kali_sandbox.core.lifecycle_service import LifecycleService
from kali_sandbox.core.models import Outcome, SandboxPaths, SandboxSettings
from kali_sandbox.exceptions import SandboxError
from kali_sandbox.infra.privileges import require_privileges
from kali_sandbox.infra.settings import resolve_settings
from kali_sandbox.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

class _ArgumentsRejected(Exception):
    """Raised by :class:`_ArgumentParser` in place of exiting with status 2."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise _ArgumentsRejected(message)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The command is a free-form positional and the caller uses
    ``parse_known_args`` so that an unknown command, flag or extra
    argument prints our own usage (exit 1) rather than argparse's
    error (exit 2).
    """
    parser = _ArgumentParser(
        prog=PROG,
        description="Manage an isolated Kali Linux Docker sandbox.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-h", "--help", action="store_true", dest="show_help")
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--project-dir", default=None, metavar="PATH")
    parser.add_argument("--data-dir", default=None, metavar="PATH")
    parser.add_argument("-y", "--yes", action="store_true", dest="assume_yes")
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("command", nargs="?", default=None)
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _build_service() -> LifecycleService:
    from kali_sandbox.infra.compose_orchestrator import ComposeOrchestrator
    from kali_sandbox.infra.workspace import FilesystemWorkspace

    return LifecycleService(ComposeOrchestrator(), FilesystemWorkspace())


def _handle_start(settings: SandboxSettings) -> int:
    """Scaffold on first use, then build and start the container."""
    from kali_sandbox.cli.path_prompt import prompt_for_paths

    service = _build_service()
    result = service.start(settings, choose_paths=prompt_for_paths)

    if result.scaffolded:
        console.step(f"Created project files in {result.paths.project_dir}.")
    console.step("Kali sandbox is now running.")
    console.notice(f"Use '{result.paths.launcher} access' to enter the container.")
    return exit_codes.SUCCESS


def _handle_stop(settings: SandboxSettings) -> int:
    outcome = _build_service().stop(settings)
    if outcome is Outcome.NOTHING_TO_DO:
        console.notice(
            f"Project not found at '{settings.paths.project_dir}'. Nothing to stop.",
        )
        return exit_codes.SUCCESS
    console.step("Kali sandbox stopped.")
    return exit_codes.SUCCESS


def _handle_access(settings: SandboxSettings) -> int:
    """Exit status is whatever ``docker exec`` returned."""
    console.step("Accessing Kali container...")
    return _build_service().access(settings)


def _handle_uninstall(settings: SandboxSettings) -> int:
    outcome = _build_service().uninstall(settings)
    if outcome is Outcome.NOTHING_TO_DO:
        console.notice("Project directory not found. Nothing to uninstall.")
        return exit_codes.SUCCESS
    console.danger("Removed Kali sandbox containers, network and volumes.")
    console.danger(f"Removed project directory: {settings.paths.project_dir}")
    console.danger(f"Removed persistent data directory: {settings.paths.data_dir}")
    console.step("Uninstallation complete.")
    return exit_codes.SUCCESS


_HANDLERS: dict[str, Callable[[SandboxSettings], int]] = {
    "start": _handle_start,
    "stop": _handle_stop,
    "access": _handle_access,
    "uninstall": _handle_uninstall,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def _reject(message: str, paths: SandboxPaths) -> int:
    console.print(f"[red]{escape(message)}[/red]")
    print_usage(paths)
    return exit_codes.GENERAL_ERROR


def main(argv: list[str] | None = None) -> int:
    """Run the kali-sandbox CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    raw_args = sys.argv[1:] if argv is None else list(argv)
    try:
        args, extra = _build_parser().parse_known_args(raw_args)
    except _ArgumentsRejected as exc:
        configure_logging(verbose=False)
        return _reject(f"Invalid arguments: {exc}", resolve_settings().paths)

    configure_logging(verbose=args.verbose)
    settings = resolve_settings(
        project_dir=args.project_dir,
        data_dir=args.data_dir,
        assume_yes=args.assume_yes,
    )

    if extra:
        return _reject(f"Invalid command: {extra[0]}", settings.paths)

    command: str | None = args.command
    if args.show_help or command == "help":
        print_usage(settings.paths)
        return exit_codes.SUCCESS

    if command is None:
        print_usage(settings.paths)
        return exit_codes.GENERAL_ERROR

    handler = _HANDLERS.get(command)
    if handler is None:
        return _reject(f"Invalid command: {command}", settings.paths)

    require_privileges(raw_args)
    return handler(settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SandboxError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {escape(type(exc).__name__)}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
