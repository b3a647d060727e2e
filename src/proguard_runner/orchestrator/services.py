"""Service layer tying task serialization to process execution."""

from __future__ import annotations

import logging
from collections.abc import Callable

from proguard_runner.config import Settings
from proguard_runner.orchestrator.backend import (
    ProguardBackend,
    ProguardCliBackend,
    ProguardRunRequest,
    ProguardRunResult,
)
from proguard_runner.orchestrator.launcher import build_command, jmods_dir
from proguard_runner.task.arguments import RenderedTask, render_task
from proguard_runner.task.models import ProguardTask

logger = logging.getLogger(__name__)


class ProguardService:
    """Serialize a task and run ProGuard for it."""

    def __init__(
        self,
        *,
        settings: Settings,
        backend: ProguardBackend | None = None,
        launcher: Callable[[Settings, list[str]], list[str]] = build_command,
    ) -> None:
        self._settings = settings
        self._backend = backend or ProguardCliBackend()
        self._launcher = launcher

    def arguments(self, task: ProguardTask) -> list[str]:
        return self.render(task).arguments

    def render(self, task: ProguardTask) -> RenderedTask:
        return render_task(task, jmods_dir=jmods_dir(self._settings))

    def run(
        self,
        task: ProguardTask,
        *,
        shutdown_requested: Callable[[], bool] | None = None,
    ) -> ProguardRunResult:
        """Run ProGuard; configuration errors surface before any process starts."""

        rendered = self.render(task)
        logger.debug("ProGuard arguments: %s", rendered.arguments)
        _prepare_output_locations(rendered)

        command = self._launcher(self._settings, rendered.arguments)
        result = self._backend.run(
            ProguardRunRequest(
                command=command,
                timeout_seconds=self._settings.timeout_seconds,
                shutdown_requested=shutdown_requested,
                graceful_shutdown_seconds=self._settings.graceful_shutdown_seconds,
            ),
        )
        if result.succeeded:
            logger.info("ProGuard finished successfully")
        elif result.timed_out:
            logger.error("ProGuard was stopped before completion")
        else:
            logger.error("ProGuard failed with exit code %d", result.exit_code)
        return result


def _prepare_output_locations(rendered: RenderedTask) -> None:
    for path in (*rendered.output_archives, *rendered.report_files):
        path.parent.mkdir(parents=True, exist_ok=True)
    for directory in rendered.output_directories:
        directory.mkdir(parents=True, exist_ok=True)
