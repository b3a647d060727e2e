"""Controllers for ProGuard CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from proguard_runner.config import Settings
from proguard_runner.orchestrator.backend import ProguardBackend
from proguard_runner.orchestrator.services import ProguardService
from proguard_runner.task.definition import load_task


@dataclass(slots=True)
class ProguardArgumentsCommand:
    """CLI input for printing serialized arguments."""

    definition_path: Path
    java_home: Path | None = None


@dataclass(slots=True)
class ProguardFilesCommand:
    """CLI input for listing resolved input, library and output files."""

    definition_path: Path


@dataclass(slots=True)
class ProguardRunCommand:
    """CLI input for one ProGuard run."""

    definition_path: Path
    java_home: Path | None = None
    timeout_seconds: int | None = None


@dataclass(slots=True)
class ProguardRunOutcome:
    """Run result rendered for the CLI."""

    success: bool
    lines: list[str]


class ProguardCliController:
    """Translate CLI commands into service calls and printable lines."""

    def __init__(self, backend: ProguardBackend | None = None) -> None:
        self._backend = backend

    def arguments(self, command: ProguardArgumentsCommand) -> list[str]:
        settings = Settings.from_env(java_home=command.java_home)
        service = ProguardService(settings=settings, backend=self._backend)
        return service.arguments(load_task(command.definition_path))

    def files(self, command: ProguardFilesCommand) -> list[str]:
        task = load_task(command.definition_path)
        lines: list[str] = []
        for title, paths in (
            ("inputs", task.input_classpath()),
            ("libraries", task.library_classpath()),
            ("outputs", task.output_classpath()),
        ):
            lines.append(f"{title}: {len(paths)}")
            lines.extend(f"  {path}" for path in paths)
        return lines

    def run(self, command: ProguardRunCommand) -> ProguardRunOutcome:
        settings = Settings.from_env(java_home=command.java_home)
        if command.timeout_seconds is not None:
            settings = replace(settings, timeout_seconds=command.timeout_seconds)
        settings.validate_for_run()

        task = load_task(command.definition_path)
        result = ProguardService(settings=settings, backend=self._backend).run(task)
        if result.succeeded:
            return ProguardRunOutcome(success=True, lines=["ProGuard finished successfully."])
        if result.timed_out:
            return ProguardRunOutcome(
                success=False,
                lines=[f"ProGuard timed out after {settings.timeout_seconds} seconds."],
            )
        return ProguardRunOutcome(
            success=False,
            lines=[f"ProGuard exited with code {result.exit_code}."],
        )
