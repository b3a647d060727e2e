"""Launching ProGuard and routing its output into logging."""

from proguard_runner.orchestrator.lines import LineSplitter
from proguard_runner.orchestrator.services import ProguardService

__all__ = ["LineSplitter", "ProguardService"]
