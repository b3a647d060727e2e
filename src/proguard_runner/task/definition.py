"""Load ProguardTask definitions from TOML files."""

from __future__ import annotations

import glob
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from proguard_runner.task.arguments import FILE_OPTIONS
from proguard_runner.task.models import InputOutputGroup, ProguardTask

_FILE_OPTION_KEYS = tuple(attribute for _, attribute in FILE_OPTIONS)
_GLOB_CHARS = frozenset("*?[")
_TOP_LEVEL_KEYS = frozenset(
    {
        "groups",
        "inputs",
        "outputs",
        "libraries",
        "jdk_modules",
        "rules_files",
        "rules",
        *_FILE_OPTION_KEYS,
    },
)
_CLASSPATH_ENTRY_KEYS = frozenset({"classpath", "filter"})
_OUTPUT_ENTRY_KEYS = frozenset({"archive_file", "directory", "filter"})
_GROUP_KEYS = frozenset({"inputs", "outputs"})


class TaskDefinitionError(ValueError):
    """Malformed task definition file."""


def load_task(path: Path) -> ProguardTask:
    """Read a TOML task definition; relative paths resolve against its directory."""

    try:
        with path.open("rb") as handle:
            payload = tomllib.load(handle)
    except tomllib.TOMLDecodeError as error:
        raise TaskDefinitionError(f"Invalid TOML in {path}: {error}") from error
    return build_task(payload, base_dir=path.absolute().parent)


def build_task(payload: dict[str, Any], *, base_dir: Path) -> ProguardTask:
    """Build a task from an already parsed definition mapping."""

    _reject_unknown_keys(payload, _TOP_LEVEL_KEYS, "task definition")
    task = ProguardTask()

    groups = _table_list(payload, "groups", "task definition")
    if groups and ("inputs" in payload or "outputs" in payload):
        raise TaskDefinitionError(
            "Use either top-level 'inputs'/'outputs' or 'groups', not both.",
        )
    if groups:
        for group_index, group_payload in enumerate(groups):
            where = f"groups[{group_index}]"
            _reject_unknown_keys(group_payload, _GROUP_KEYS, where)
            group = task.groups[0] if group_index == 0 else task.add_group()
            _fill_group(group, group_payload, where=where, base_dir=base_dir)
    else:
        _fill_group(task.groups[0], payload, where="task definition", base_dir=base_dir)

    for index, library in enumerate(_table_list(payload, "libraries", "task definition")):
        where = f"libraries[{index}]"
        _reject_unknown_keys(library, _CLASSPATH_ENTRY_KEYS, where)
        task.add_library(
            *_path_sources(library, "classpath", where, base_dir),
            filter=_string(library, "filter", where),
        )

    task.add_jdk_module(*_string_list(payload, "jdk_modules", "task definition"))
    task.add_rules_file(*_path_sources(payload, "rules_files", "task definition", base_dir))
    task.add_rule(*_string_list(payload, "rules", "task definition"))
    for key in _FILE_OPTION_KEYS:
        if key in payload:
            setattr(task, key, _location(payload, key, "task definition", base_dir))
    return task


def _fill_group(
    group: InputOutputGroup,
    payload: dict[str, Any],
    *,
    where: str,
    base_dir: Path,
) -> None:
    for index, entry in enumerate(_table_list(payload, "inputs", where)):
        entry_where = f"{where}.inputs[{index}]"
        _reject_unknown_keys(entry, _CLASSPATH_ENTRY_KEYS, entry_where)
        group.add_input(
            *_path_sources(entry, "classpath", entry_where, base_dir),
            filter=_string(entry, "filter", entry_where),
        )
    for index, entry in enumerate(_table_list(payload, "outputs", where)):
        entry_where = f"{where}.outputs[{index}]"
        _reject_unknown_keys(entry, _OUTPUT_ENTRY_KEYS, entry_where)
        group.add_output(
            archive_file=_location(entry, "archive_file", entry_where, base_dir),
            directory=_location(entry, "directory", entry_where, base_dir),
            filter=_string(entry, "filter", entry_where),
        )


def _reject_unknown_keys(payload: dict[str, Any], allowed: frozenset[str], where: str) -> None:
    unknown = sorted(set(payload) - allowed)
    if unknown:
        raise TaskDefinitionError(f"Unknown key(s) in {where}: {', '.join(unknown)}")


def _table_list(payload: dict[str, Any], key: str, where: str) -> list[dict[str, Any]]:
    value = payload.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise TaskDefinitionError(f"{where}.{key} must be an array of tables.")
    return value


def _string(payload: dict[str, Any], key: str, where: str) -> str:
    value = payload.get(key, "")
    if not isinstance(value, str):
        raise TaskDefinitionError(f"{where}.{key} must be a string.")
    return value


def _string_list(payload: dict[str, Any], key: str, where: str) -> list[str]:
    value = payload.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TaskDefinitionError(f"{where}.{key} must be a string or an array of strings.")
    return value


def _location(payload: dict[str, Any], key: str, where: str, base_dir: Path) -> Path | None:
    if key not in payload:
        return None
    value = _string(payload, key, where)
    if not value.strip():
        raise TaskDefinitionError(f"{where}.{key} must not be empty.")
    return base_dir / value


def _path_sources(
    payload: dict[str, Any],
    key: str,
    where: str,
    base_dir: Path,
) -> list[Path | Callable[[], list[Path]]]:
    sources: list[Path | Callable[[], list[Path]]] = []
    for value in _string_list(payload, key, where):
        if _GLOB_CHARS.intersection(value):
            sources.append(_glob_source(base_dir, value))
        else:
            sources.append(base_dir / value)
    return sources


def _glob_source(base_dir: Path, pattern: str) -> Callable[[], list[Path]]:
    def expand() -> list[Path]:
        full_pattern = str(base_dir / pattern)
        return [Path(match) for match in sorted(glob.glob(full_pattern, recursive=True))]

    return expand
