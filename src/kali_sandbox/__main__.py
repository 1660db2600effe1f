"""Allow ``python -m kali_sandbox`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m kali_sandbox`` behaves identically to the
``kali-sandbox`` console script.
"""

from __future__ import annotations

from kali_sandbox.cli.app import cli

if __name__ == "__main__":
    cli()
