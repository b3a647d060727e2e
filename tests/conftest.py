"""Shared test fixtures."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

import pytest

from proguard_runner.config import Settings
from proguard_runner.orchestrator.backend import ProguardRunRequest, ProguardRunResult

_ECHO_TOOL_COMMAND = [sys.executable, "-m", "proguard_runner.orchestrator.backend.echo_tool"]


@dataclass
class RecordingBackend:
    """Backend double that records requests instead of spawning processes."""

    exit_code: int = 0
    timed_out: bool = False
    requests: list[ProguardRunRequest] = field(default_factory=list)

    def run(self, request: ProguardRunRequest) -> ProguardRunResult:
        self.requests.append(request)
        return ProguardRunResult(
            exit_code=self.exit_code,
            timed_out=self.timed_out,
            command=list(request.command),
        )


@pytest.fixture()
def recording_backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture()
def echo_launcher():
    """Launcher that runs the local echo tool instead of java."""

    def _launch(_settings: Settings, arguments: list[str]) -> list[str]:
        return [*_ECHO_TOOL_COMMAND, *arguments]

    return _launch


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "PROGUARD_RUNNER_CLASSPATH",
        "PROGUARD_RUNNER_JAVA_HOME",
        "PROGUARD_RUNNER_JVM_ARGS",
        "PROGUARD_RUNNER_MAIN_CLASS",
        "PROGUARD_RUNNER_TIMEOUT_SECONDS",
        "PROGUARD_RUNNER_GRACEFUL_SHUTDOWN_SECONDS",
        "PROGUARD_RUNNER_ECHO_EXIT_CODE",
        "JAVA_HOME",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
