from __future__ import annotations

from pathlib import Path

import allure
import pytest

from proguard_runner.task.arguments import build_arguments
from proguard_runner.task.models import (
    FileCollection,
    OutputEntry,
    ProguardTask,
    TaskFrozenError,
    resolve_location,
)

pytestmark = [
    allure.epic("ProGuard Runner"),
    allure.feature("Task Model"),
]


def test_new_task_has_one_implicit_group() -> None:
    task = ProguardTask()

    assert len(task.groups) == 1
    assert task.groups[0].inputs == ()
    assert task.groups[0].outputs == ()


def test_shortcuts_target_first_group(tmp_path: Path) -> None:
    task = ProguardTask()
    task.add_group()
    task.add_input(tmp_path / "a.jar")
    task.add_output(tmp_path / "b.jar")

    assert len(task.groups[0].inputs) == 1
    assert len(task.groups[0].outputs) == 1
    assert task.groups[1].inputs == ()


def test_configure_callback_receives_new_entry(tmp_path: Path) -> None:
    task = ProguardTask()

    def configure(entry: OutputEntry) -> None:
        entry.directory = tmp_path / "classes"
        entry.filter = "**.class"

    entry = task.add_output(configure=configure)

    assert entry is task.groups[0].outputs[0]
    assert entry.directory == tmp_path / "classes"
    assert entry.filter == "**.class"
    assert entry.archive_file is None


def test_file_collection_keeps_order_and_drops_duplicates(tmp_path: Path) -> None:
    collection = FileCollection(tmp_path / "b.jar", [tmp_path / "a.jar", tmp_path / "b.jar"])
    collection.add(lambda: str(tmp_path / "c.jar"), None)

    assert collection.files() == [tmp_path / "b.jar", tmp_path / "a.jar", tmp_path / "c.jar"]


def test_resolve_location_handles_values_and_callables(tmp_path: Path) -> None:
    assert resolve_location(None) is None
    assert resolve_location(lambda: None) is None
    assert resolve_location(str(tmp_path / "x")) == tmp_path / "x"
    assert resolve_location(lambda: tmp_path / "y") == tmp_path / "y"


def test_flattened_classpaths(tmp_path: Path) -> None:
    task = ProguardTask()
    task.add_input(tmp_path / "a.jar", tmp_path / "b.jar")
    task.add_output(tmp_path / "out.jar")
    group = task.add_group()
    group.add_input(tmp_path / "c.jar")
    group.add_output(directory=tmp_path / "out-dir")
    group.add_output(archive_file=lambda: None)
    task.add_library(tmp_path / "lib.jar")

    assert task.input_classpath() == [tmp_path / "a.jar", tmp_path / "b.jar", tmp_path / "c.jar"]
    assert task.output_classpath() == [tmp_path / "out.jar", tmp_path / "out-dir"]
    assert task.library_classpath() == [tmp_path / "lib.jar"]


def test_task_is_frozen_after_serialization(tmp_path: Path) -> None:
    task = ProguardTask()
    entry = task.add_input(tmp_path / "app.jar")
    output = task.add_output(tmp_path / "out.jar")
    build_arguments(task)

    assert task.frozen
    mutations = [
        lambda: task.add_group(),
        lambda: task.add_input(tmp_path / "x.jar"),
        lambda: task.add_output(tmp_path / "y.jar"),
        lambda: task.add_library(tmp_path / "lib.jar"),
        lambda: task.add_rule("-dontwarn"),
        lambda: task.add_rules_file(tmp_path / "rules.pro"),
        lambda: task.add_jdk_module("java.base"),
        lambda: entry.classpath.add(tmp_path / "more.jar"),
        lambda: setattr(entry, "filter", "!x/**"),
        lambda: setattr(output, "directory", tmp_path / "dir"),
        lambda: setattr(task, "mapping_file", tmp_path / "mapping.txt"),
    ]
    for mutate in mutations:
        with pytest.raises(TaskFrozenError):
            mutate()


def test_failed_serialization_still_freezes_task() -> None:
    task = ProguardTask()

    with pytest.raises(ValueError):
        build_arguments(task)

    with pytest.raises(TaskFrozenError, match="already serialized"):
        task.add_rule("-dontshrink")
