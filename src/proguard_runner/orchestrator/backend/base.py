"""Backend interface for ProGuard process execution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(slots=True)
class ProguardRunRequest:
    """Inputs required to execute one ProGuard process."""

    command: list[str]
    timeout_seconds: int
    env: dict[str, str] | None = None
    shutdown_requested: Callable[[], bool] | None = None
    graceful_shutdown_seconds: int | None = None


@dataclass(slots=True)
class ProguardRunResult:
    """Execution outcome from backend runner."""

    exit_code: int
    timed_out: bool
    command: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0 and not self.timed_out


class ProguardBackend(Protocol):
    """Protocol implemented by backend runners."""

    def run(self, request: ProguardRunRequest) -> ProguardRunResult:
        """Run ProGuard and return execution metadata."""
