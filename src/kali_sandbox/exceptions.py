"""Custom exception hierarchy for kali-sandbox.

All exceptions that cross layer boundaries must inherit from
:class:`SandboxError`.  Raw OS and subprocess exceptions must NEVER
propagate beyond the infrastructure layer — they must be caught and
re-raised as a typed subclass defined here.

Hierarchy
---------
SandboxError
├── PrivilegeError
├── EnvironmentError
│   ├── RuntimeNotFoundError
│   └── ComposeNotFoundError
├── InvalidPathError
├── SetupCancelledError
├── ScaffoldError
└── OrchestrationError
"""

from __future__ import annotations


class SandboxError(Exception):
    """Base exception for all kali-sandbox errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Preconditions ---------------------------------------------------------

class PrivilegeError(SandboxError):
    """Raised when the caller may not manage the docker daemon."""


class EnvironmentError(SandboxError):
    """Raised when a required runtime dependency is not available."""


class RuntimeNotFoundError(EnvironmentError):
    """Raised when the ``docker`` binary cannot be located on PATH."""


class ComposeNotFoundError(EnvironmentError):
    """Raised when neither ``docker compose`` nor ``docker-compose`` works."""


# --- Interactive setup -----------------------------------------------------

class InvalidPathError(SandboxError):
    """Raised when a user-supplied project path fails validation."""


class SetupCancelledError(SandboxError):
    """Raised when the user aborts the first-run path prompt."""


# --- Filesystem ------------------------------------------------------------

class ScaffoldError(SandboxError):
    """Raised when project files cannot be written or removed."""


# --- External commands -----------------------------------------------------

class OrchestrationError(SandboxError):
    """Raised when a docker / compose invocation exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int = returncode
        """Exit status reported by the failed external command."""
