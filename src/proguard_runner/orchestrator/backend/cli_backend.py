"""Subprocess-based backend running the ProGuard command line tool."""

from __future__ import annotations

import logging
import os
import subprocess
import threading
import time
from collections.abc import Callable
from typing import IO

from proguard_runner.orchestrator.backend.base import ProguardRunRequest, ProguardRunResult
from proguard_runner.orchestrator.lines import LineSplitter

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 8_192
_TIMEOUT_EXIT_CODE = 124


class BackendRunError(RuntimeError):
    """Backend execution error with retryability hint."""

    def __init__(self, message: str, *, transient: bool) -> None:
        super().__init__(message)
        self.transient = transient


class ProguardCliBackend:
    """Run ProGuard as a child process and log its output line by line.

    Standard output goes to ``stdout_sink`` (info log by default) and standard
    error to ``stderr_sink`` (error log by default). Each stream is drained on
    its own thread through its own ``LineSplitter``.
    """

    def __init__(
        self,
        *,
        stdout_sink: Callable[[str], None] | None = None,
        stderr_sink: Callable[[str], None] | None = None,
        poll_interval_seconds: float = 0.1,
    ) -> None:
        self._stdout_sink = stdout_sink or logger.info
        self._stderr_sink = stderr_sink or logger.error
        self._poll_interval_seconds = poll_interval_seconds

    def run(self, request: ProguardRunRequest) -> ProguardRunResult:
        if not request.command:
            raise BackendRunError("ProGuard command is empty.", transient=False)

        env = os.environ.copy()
        if request.env:
            env.update(request.env)

        try:
            process = subprocess.Popen(  # noqa: S603
                request.command,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as error:
            raise BackendRunError(
                f"ProGuard launcher not found: {request.command[0]}",
                transient=False,
            ) from error
        except OSError as error:
            raise BackendRunError(
                f"ProGuard failed to start: {error}",
                transient=True,
            ) from error

        pumps = [
            _start_pump(process.stdout, LineSplitter(self._stdout_sink), name="proguard-stdout"),
            _start_pump(process.stderr, LineSplitter(self._stderr_sink), name="proguard-stderr"),
        ]
        try:
            exit_code, timed_out = self._wait(process, request)
        except BaseException:
            _terminate_process(process)
            raise
        finally:
            for pump in pumps:
                pump.join()
        return ProguardRunResult(
            exit_code=exit_code,
            timed_out=timed_out,
            command=list(request.command),
        )

    def _wait(self, process: subprocess.Popen[bytes], request: ProguardRunRequest) -> tuple[int, bool]:
        start_monotonic = time.monotonic()
        shutdown_deadline: float | None = None
        graceful_seconds = max(0, request.graceful_shutdown_seconds or 0)

        while True:
            returncode = process.poll()
            if returncode is not None:
                return returncode, False

            now = time.monotonic()
            if now - start_monotonic >= request.timeout_seconds:
                logger.error("ProGuard timed out after %d seconds", request.timeout_seconds)
                _terminate_process(process)
                return _TIMEOUT_EXIT_CODE, True

            if request.shutdown_requested is not None and request.shutdown_requested():
                if shutdown_deadline is None:
                    logger.warning("Shutdown requested, waiting up to %d seconds", graceful_seconds)
                    shutdown_deadline = now + graceful_seconds
                if now >= shutdown_deadline:
                    _terminate_process(process)
                    return _TIMEOUT_EXIT_CODE, True

            time.sleep(self._poll_interval_seconds)


def _start_pump(stream: IO[bytes] | None, splitter: LineSplitter, *, name: str) -> threading.Thread:
    thread = threading.Thread(target=_pump, args=(stream, splitter), daemon=True, name=name)
    thread.start()
    return thread


def _pump(stream: IO[bytes] | None, splitter: LineSplitter) -> None:
    if stream is None:
        return
    with stream, splitter:
        while True:
            chunk = stream.read1(_CHUNK_SIZE)  # type: ignore[attr-defined]
            if not chunk:
                break
            splitter.write(chunk)


def _terminate_process(process: subprocess.Popen[bytes]) -> None:
    try:
        process.terminate()
    except OSError:
        return
    try:
        process.wait(timeout=2)
    except subprocess.TimeoutExpired:
        try:
            process.kill()
        except OSError:
            return
        process.wait(timeout=2)
