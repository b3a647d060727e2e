"""Java command line used to start ProGuard."""

from __future__ import annotations

import os
from pathlib import Path

from proguard_runner.config import Settings


def java_executable(settings: Settings) -> str:
    if settings.java_home is None:
        return "java"
    name = "java.exe" if os.name == "nt" else "java"
    return str(settings.java_home / "bin" / name)


def jmods_dir(settings: Settings) -> Path | None:
    """Directory holding the JDK's ``.jmod`` files, when a Java home is known."""

    if settings.java_home is None:
        return None
    return settings.java_home / "jmods"


def build_command(settings: Settings, arguments: list[str]) -> list[str]:
    classpath = os.pathsep.join(str(path) for path in settings.classpath)
    return [
        java_executable(settings),
        *settings.jvm_args,
        "-cp",
        classpath,
        settings.main_class,
        *arguments,
    ]
