"""CLI console helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``help``, ``--version``) remain
functional even when Rich is not installed.

Text that did not originate here (paths, command words, exception
messages) must pass through :func:`escape` before it is embedded in
markup.
"""

from __future__ import annotations

import re
import sys
from typing import Any, TextIO

from kali_sandbox.exceptions import EnvironmentError

_MARKUP_TAG = re.compile(r"(?<!\\)\[/?[a-z][a-z ]*\]")


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise EnvironmentError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console(*, stderr: bool = True) -> Any:
	"""Create a Rich console instance targeting stderr (or stdout)."""
	console_class = _load_rich_console_class()
	return console_class(stderr=stderr, highlight=False)


def escape(text: object) -> str:
	"""Make *text* safe to interpolate into console markup."""
	try:
		from rich.markup import escape as rich_escape
	except ModuleNotFoundError:
		return str(text).replace("[", "\\[")
	return rich_escape(str(text))


def strip_markup(text: str) -> str:
	"""Drop ``[bold red]``-style tags for plain-text output."""
	return _MARKUP_TAG.sub("", text).replace("\\[", "[")


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback.

	Status helpers (``step``, ``notice``, ``danger``) take plain text and
	escape it themselves.
	"""

	def __init__(self, *, stderr: bool = True) -> None:
		self._stderr = stderr

	def _stream(self) -> TextIO:
		return sys.stderr if self._stderr else sys.stdout

	def print(self, *objects: object) -> None:
		"""Render with Rich when available, else plain print."""
		try:
			rich_console = get_rich_console(stderr=self._stderr)
		except EnvironmentError:
			print(
				*(strip_markup(o) if isinstance(o, str) else o for o in objects),
				file=self._stream(),
			)
			return
		rich_console.print(*objects, soft_wrap=True)

	def step(self, message: str) -> None:
		"""Progress line, e.g. ``* Starting Kali sandbox...``."""
		self.print(f"[green]* {escape(message)}[/green]")

	def notice(self, message: str) -> None:
		self.print(f"[yellow]* {escape(message)}[/yellow]")

	def danger(self, message: str) -> None:
		"""Announce a destructive step."""
		self.print(f"[red]* {escape(message)}[/red]")


console = _ConsoleProxy()
stdout_console = _ConsoleProxy(stderr=False)
