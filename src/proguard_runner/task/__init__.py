"""ProGuard task model, argument serialization and definition files."""

from proguard_runner.task.arguments import ProguardConfigError, build_arguments, render_task
from proguard_runner.task.definition import TaskDefinitionError, load_task
from proguard_runner.task.models import (
    FileCollection,
    InputEntry,
    InputOutputGroup,
    LibraryEntry,
    OutputEntry,
    ProguardTask,
    TaskFrozenError,
)

__all__ = [
    "FileCollection",
    "InputEntry",
    "InputOutputGroup",
    "LibraryEntry",
    "OutputEntry",
    "ProguardConfigError",
    "ProguardTask",
    "TaskDefinitionError",
    "TaskFrozenError",
    "build_arguments",
    "load_task",
    "render_task",
]
