"""Infrastructure layer — external system integration.

This layer wraps all interaction with the operating system, the docker
runtime and its compose command.  Every raw OS or subprocess exception
must be caught here and re-raised as a
:class:`~kali_sandbox.exceptions.SandboxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from kali_sandbox.infra.compose_orchestrator import ComposeOrchestrator
from kali_sandbox.infra.docker_detector import (
    ToolStatus,
    detect_compose,
    detect_runtime,
    require_runtime,
)
from kali_sandbox.infra.privileges import has_docker_privilege, require_privileges
from kali_sandbox.infra.settings import invoking_user_home, resolve_settings
from kali_sandbox.infra.workspace import FilesystemWorkspace

__all__: list[str] = [
    "ComposeOrchestrator",
    "FilesystemWorkspace",
    "ToolStatus",
    "detect_compose",
    "detect_runtime",
    "has_docker_privilege",
    "invoking_user_home",
    "require_privileges",
    "require_runtime",
    "resolve_settings",
]
