"""Runtime configuration for launching ProGuard."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from pathlib import Path

DEFAULT_MAIN_CLASS = "proguard.ProGuard"


@dataclass(slots=True)
class Settings:
    """How the ProGuard process is launched and supervised."""

    classpath: tuple[Path, ...] = ()
    java_home: Path | None = None
    jvm_args: tuple[str, ...] = ()
    main_class: str = DEFAULT_MAIN_CLASS
    timeout_seconds: int = 3_600
    graceful_shutdown_seconds: int = 10

    @classmethod
    def from_env(cls, java_home: Path | None = None) -> Settings:
        """Load settings from environment with defaults for a local JDK."""

        return cls(
            classpath=_collect_classpath(),
            java_home=java_home or _env_path("PROGUARD_RUNNER_JAVA_HOME") or _env_path("JAVA_HOME"),
            jvm_args=tuple(shlex.split(os.getenv("PROGUARD_RUNNER_JVM_ARGS", ""))),
            main_class=os.getenv("PROGUARD_RUNNER_MAIN_CLASS", DEFAULT_MAIN_CLASS).strip(),
            timeout_seconds=_env_int("PROGUARD_RUNNER_TIMEOUT_SECONDS", 3_600),
            graceful_shutdown_seconds=_env_int("PROGUARD_RUNNER_GRACEFUL_SHUTDOWN_SECONDS", 10),
        )

    def validate_for_run(self) -> None:
        """Raise configuration error if ProGuard cannot be launched with these settings."""

        if not self.classpath:
            raise ValueError(
                "ProGuard classpath is empty. Set PROGUARD_RUNNER_CLASSPATH to the ProGuard jar(s).",
            )
        if not self.main_class:
            raise ValueError("PROGUARD_RUNNER_MAIN_CLASS must not be empty.")
        if self.timeout_seconds <= 0:
            raise ValueError("PROGUARD_RUNNER_TIMEOUT_SECONDS must be > 0.")
        if self.graceful_shutdown_seconds < 0:
            raise ValueError("PROGUARD_RUNNER_GRACEFUL_SHUTDOWN_SECONDS must be >= 0.")


def _collect_classpath() -> tuple[Path, ...]:
    raw = os.getenv("PROGUARD_RUNNER_CLASSPATH", "").strip()
    if not raw:
        return ()
    return tuple(Path(part.strip()) for part in raw.split(os.pathsep) if part.strip())


def _env_path(name: str) -> Path | None:
    value = os.getenv(name, "").strip()
    if not value:
        return None
    return Path(value)


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as error:
        raise ValueError(f"Invalid integer value for {name}: {value!r}") from error
