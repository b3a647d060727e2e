from __future__ import annotations

import os
from pathlib import Path

import allure
import pytest

from proguard_runner.config import DEFAULT_MAIN_CLASS, Settings

pytestmark = [
    allure.epic("ProGuard Runner"),
    allure.feature("Configuration"),
]


def test_from_env_defaults(clean_env: pytest.MonkeyPatch) -> None:
    settings = Settings.from_env()

    assert settings.classpath == ()
    assert settings.java_home is None
    assert settings.jvm_args == ()
    assert settings.main_class == DEFAULT_MAIN_CLASS
    assert settings.timeout_seconds == 3600


def test_from_env_parses_values(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv(
        "PROGUARD_RUNNER_CLASSPATH",
        os.pathsep.join([str(tmp_path / "proguard-base.jar"), "", str(tmp_path / "core.jar")]),
    )
    clean_env.setenv("PROGUARD_RUNNER_JVM_ARGS", "-Xmx2g '-Dname=a b'")
    clean_env.setenv("PROGUARD_RUNNER_TIMEOUT_SECONDS", "90")
    clean_env.setenv("JAVA_HOME", str(tmp_path / "jdk"))

    settings = Settings.from_env()

    assert settings.classpath == (tmp_path / "proguard-base.jar", tmp_path / "core.jar")
    assert settings.jvm_args == ("-Xmx2g", "-Dname=a b")
    assert settings.timeout_seconds == 90
    assert settings.java_home == tmp_path / "jdk"


def test_java_home_precedence(clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
    clean_env.setenv("JAVA_HOME", str(tmp_path / "system"))
    clean_env.setenv("PROGUARD_RUNNER_JAVA_HOME", str(tmp_path / "runner"))

    assert Settings.from_env().java_home == tmp_path / "runner"
    assert Settings.from_env(java_home=tmp_path / "cli").java_home == tmp_path / "cli"


def test_from_env_rejects_invalid_integer(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("PROGUARD_RUNNER_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ValueError, match="PROGUARD_RUNNER_TIMEOUT_SECONDS"):
        Settings.from_env()


def test_validate_for_run_requires_classpath() -> None:
    with pytest.raises(ValueError, match="classpath is empty"):
        Settings().validate_for_run()


def test_validate_for_run_rejects_non_positive_timeout() -> None:
    with pytest.raises(ValueError, match="TIMEOUT_SECONDS"):
        Settings(classpath=(Path("proguard.jar"),), timeout_seconds=0).validate_for_run()


def test_validate_for_run_accepts_complete_settings() -> None:
    Settings(classpath=(Path("proguard.jar"),)).validate_for_run()
