"""ProGuard process backends."""

from proguard_runner.orchestrator.backend.base import (
    ProguardBackend,
    ProguardRunRequest,
    ProguardRunResult,
)
from proguard_runner.orchestrator.backend.cli_backend import BackendRunError, ProguardCliBackend

__all__ = [
    "BackendRunError",
    "ProguardBackend",
    "ProguardCliBackend",
    "ProguardRunRequest",
    "ProguardRunResult",
]
