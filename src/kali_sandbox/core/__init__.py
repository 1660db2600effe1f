"""Core / service layer — lifecycle sequencing and pure data transformations.

Rules
-----
* No ``print()`` calls.
* No direct filesystem or subprocess I/O; side effects go through protocols.
* No imports from ``cli`` or ``infra``.
"""

from kali_sandbox.core.lifecycle_service import LifecycleService
from kali_sandbox.core.models import (
    ComposeCommand,
    Outcome,
    SandboxPaths,
    SandboxSettings,
    StartResult,
)
from kali_sandbox.core.protocols import Orchestrator, PathChooser, Workspace

__all__: list[str] = [
    "ComposeCommand",
    "LifecycleService",
    "Orchestrator",
    "Outcome",
    "PathChooser",
    "SandboxPaths",
    "SandboxSettings",
    "StartResult",
    "Workspace",
]
