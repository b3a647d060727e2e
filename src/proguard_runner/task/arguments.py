"""Render a ProguardTask into ProGuard command line arguments."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from proguard_runner.task.models import JDK_MODULE_FILTER, ProguardTask, resolve_location

FILE_OPTIONS: tuple[tuple[str, str], ...] = (
    ("-applymapping", "mapping_input_file"),
    ("-obfuscationdictionary", "obfuscation_dictionary"),
    ("-classobfuscationdictionary", "class_obfuscation_dictionary"),
    ("-packageobfuscationdictionary", "package_obfuscation_dictionary"),
    ("-printconfiguration", "configuration_file"),
    ("-printmapping", "mapping_file"),
    ("-printseeds", "seeds_file"),
    ("-printusage", "usage_file"),
    ("-dump", "dump_file"),
)

FORCE_PROCESSING = "-forceprocessing"

REPORT_FILE_ATTRIBUTES = frozenset(
    {"configuration_file", "mapping_file", "seeds_file", "usage_file", "dump_file"},
)


class ProguardConfigError(ValueError):
    """Task configuration that cannot be turned into a ProGuard invocation."""

    def __init__(
        self,
        message: str,
        *,
        group_index: int | None = None,
        output_index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.group_index = group_index
        self.output_index = output_index


def quote_path(path: Path, filter: str = "") -> str:  # noqa: A002
    """Quote an absolute path so spaces and parentheses survive ProGuard parsing."""

    quoted = f"'{path}'"
    if filter:
        return f"{quoted}({filter})"
    return quoted


@dataclass(slots=True)
class RenderedTask:
    """Arguments plus the output locations resolved while producing them."""

    arguments: list[str] = field(default_factory=list)
    output_archives: list[Path] = field(default_factory=list)
    output_directories: list[Path] = field(default_factory=list)
    report_files: list[Path] = field(default_factory=list)


def build_arguments(task: ProguardTask, *, jmods_dir: Path | None = None) -> list[str]:
    """Serialize ``task`` into arguments, validating group and output structure."""

    return render_task(task, jmods_dir=jmods_dir).arguments


def render_task(task: ProguardTask, *, jmods_dir: Path | None = None) -> RenderedTask:
    """Serialize ``task``, resolving every lazy location exactly once.

    The task is frozen first; a failed validation leaves no usable arguments.
    """

    task.freeze()
    rendered = RenderedTask()
    arguments = rendered.arguments

    def add_jar(kind: str, path: Path, filter: str) -> None:  # noqa: A002
        arguments.append(f"-{kind}jars")
        arguments.append(quote_path(path, filter))

    def add_file(option: str, path: Path) -> None:
        arguments.append(option)
        arguments.append(quote_path(path))

    groups = task.groups
    for group_index, group in enumerate(groups):
        input_added = False
        for entry in group.inputs:
            for path in entry.classpath:
                add_jar("in", path, entry.filter)
                input_added = True
        if not input_added:
            raise ProguardConfigError(
                f"groups[{group_index}].inputs classpath did not contain any files.",
                group_index=group_index,
            )
        if not group.outputs and len(groups) > 1:
            raise ProguardConfigError(
                f"groups[{group_index}].outputs are empty although multiple groups are configured.",
                group_index=group_index,
            )
        for output_index, output in enumerate(group.outputs):
            archive_file = resolve_location(output.archive_file)
            directory = resolve_location(output.directory)
            location = f"groups[{group_index}].outputs[{output_index}]"
            if archive_file is not None and directory is not None:
                raise ProguardConfigError(
                    f"In {location} both archive_file and directory are configured.",
                    group_index=group_index,
                    output_index=output_index,
                )
            if archive_file is None and directory is None:
                raise ProguardConfigError(
                    f"In {location} neither archive_file nor directory is configured.",
                    group_index=group_index,
                    output_index=output_index,
                )
            if archive_file is not None:
                rendered.output_archives.append(archive_file)
                add_jar("out", archive_file, output.filter)
            else:
                rendered.output_directories.append(directory)
                add_jar("out", directory, output.filter)

    for library in task.libraries:
        for path in library.classpath:
            add_jar("library", path, library.filter)

    if task.jdk_modules:
        if jmods_dir is None:
            raise ProguardConfigError(
                "JDK modules are configured but no Java installation is known "
                "(set PROGUARD_RUNNER_JAVA_HOME or JAVA_HOME).",
            )
        for module in task.jdk_modules:
            add_jar("library", Path(jmods_dir).absolute() / f"{module}.jmod", JDK_MODULE_FILTER)

    for option, attribute in FILE_OPTIONS:
        path = resolve_location(getattr(task, attribute))
        if path is None:
            continue
        if attribute in REPORT_FILE_ATTRIBUTES:
            rendered.report_files.append(path)
        add_file(option, path)

    for rules_file in task.rules_files:
        add_file("-include", rules_file)

    arguments.extend(task.rules)
    arguments.append(FORCE_PROCESSING)
    return rendered
