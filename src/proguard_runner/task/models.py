"""File-aware model of one ProGuard invocation.

Only the ProGuard parameters that deal with files are modelled explicitly.
Everything else is passed through as free-form rules. Paths may be given
lazily (zero-argument callables); they are resolved and validated only when
the task is serialized into arguments.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any, Generic, TypeVar

FileLocation = str | os.PathLike[str] | Callable[[], "str | os.PathLike[str] | None"] | None

JDK_MODULE_FILTER = "!**.jar;!module-info.class"

_T = TypeVar("_T")


class TaskFrozenError(RuntimeError):
    """Raised when a task is modified after it has been serialized."""


class _MutationGuard:
    __slots__ = ("frozen",)

    def __init__(self) -> None:
        self.frozen = False

    def check(self, action: str) -> None:
        if self.frozen:
            raise TaskFrozenError(f"Cannot {action}: task was already serialized.")


class _Guarded(Generic[_T]):
    """Attribute that can only be assigned while the owning task is mutable."""

    def __init__(self, default: _T) -> None:
        self._default = default
        self._name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self._name = name

    def __get__(self, instance: Any, owner: type | None = None) -> _T:
        if instance is None:
            return self  # type: ignore[return-value]
        return instance.__dict__.get(self._name, self._default)

    def __set__(self, instance: Any, value: _T) -> None:
        instance._guard.check(f"set {self._name}")
        instance.__dict__[self._name] = value


def resolve_location(location: FileLocation) -> Path | None:
    """Resolve a file location to an absolute path, or ``None`` when unset."""

    value: Any = location
    if callable(value):
        value = value()
    if value is None:
        return None
    return Path(value).absolute()


class FileCollection:
    """Ordered set of files and directories resolved on demand.

    A source is a path, an iterable of sources, or a zero-argument callable
    returning a source. Duplicates keep their first position.
    """

    def __init__(self, *sources: Any, guard: _MutationGuard | None = None) -> None:
        self._guard = guard or _MutationGuard()
        self._sources: list[Any] = list(sources)

    def add(self, *sources: Any) -> FileCollection:
        self._guard.check("add files")
        self._sources.extend(sources)
        return self

    def files(self) -> list[Path]:
        resolved: list[Path] = []
        seen: set[Path] = set()
        for source in self._sources:
            for path in _flatten(source):
                if path in seen:
                    continue
                seen.add(path)
                resolved.append(path)
        return resolved

    def __iter__(self) -> Iterator[Path]:
        return iter(self.files())


def _flatten(source: Any) -> Iterable[Path]:
    if source is None:
        return
    if callable(source):
        yield from _flatten(source())
        return
    if isinstance(source, (str, os.PathLike)):
        yield Path(source).absolute()
        return
    for item in source:
        yield from _flatten(item)


class InputEntry:
    """Archives and/or directories passed as ``-injars``."""

    filter = _Guarded("")

    def __init__(self, guard: _MutationGuard) -> None:
        self._guard = guard
        self.classpath = FileCollection(guard=guard)


class LibraryEntry(InputEntry):
    """Archives and/or directories passed as ``-libraryjars``."""


class OutputEntry:
    """Target passed as ``-outjars``.

    ``archive_file`` and ``directory`` are mutually exclusive; exactly one must
    be set by the time the task is serialized.
    """

    archive_file: _Guarded[FileLocation] = _Guarded(None)
    directory: _Guarded[FileLocation] = _Guarded(None)
    filter = _Guarded("")

    def __init__(self, guard: _MutationGuard) -> None:
        self._guard = guard

    def archive_file_or_directory(self) -> Path | None:
        archive_file = resolve_location(self.archive_file)
        if archive_file is not None:
            return archive_file
        return resolve_location(self.directory)


def _configured(entry: _T, configure: Callable[[_T], None] | None) -> _T:
    if configure is not None:
        configure(entry)
    return entry


class InputOutputGroup:
    """Inputs processed by ProGuard into a matching set of outputs."""

    def __init__(self, guard: _MutationGuard) -> None:
        self._guard = guard
        self._inputs: list[InputEntry] = []
        self._outputs: list[OutputEntry] = []

    @property
    def inputs(self) -> tuple[InputEntry, ...]:
        return tuple(self._inputs)

    @property
    def outputs(self) -> tuple[OutputEntry, ...]:
        return tuple(self._outputs)

    def add_input(
        self,
        *sources: Any,
        filter: str = "",  # noqa: A002
        configure: Callable[[InputEntry], None] | None = None,
    ) -> InputEntry:
        """Append an input entry and optionally configure it."""

        self._guard.check("add input")
        entry = InputEntry(self._guard)
        entry.classpath.add(*sources)
        entry.filter = filter
        self._inputs.append(entry)
        return _configured(entry, configure)

    def add_output(
        self,
        archive_file: FileLocation = None,
        directory: FileLocation = None,
        *,
        filter: str = "",  # noqa: A002
        configure: Callable[[OutputEntry], None] | None = None,
    ) -> OutputEntry:
        """Append an output entry and optionally configure it."""

        self._guard.check("add output")
        entry = OutputEntry(self._guard)
        entry.archive_file = archive_file
        entry.directory = directory
        entry.filter = filter
        self._outputs.append(entry)
        return _configured(entry, configure)


class ProguardTask:
    """Mutable description of one ProGuard run.

    A task starts with one implicit input/output group; ``add_input`` and
    ``add_output`` target that first group. Once serialized, the task is
    frozen and rejects further changes.
    """

    mapping_input_file: _Guarded[FileLocation] = _Guarded(None)
    obfuscation_dictionary: _Guarded[FileLocation] = _Guarded(None)
    class_obfuscation_dictionary: _Guarded[FileLocation] = _Guarded(None)
    package_obfuscation_dictionary: _Guarded[FileLocation] = _Guarded(None)
    configuration_file: _Guarded[FileLocation] = _Guarded(None)
    mapping_file: _Guarded[FileLocation] = _Guarded(None)
    seeds_file: _Guarded[FileLocation] = _Guarded(None)
    usage_file: _Guarded[FileLocation] = _Guarded(None)
    dump_file: _Guarded[FileLocation] = _Guarded(None)

    def __init__(self) -> None:
        self._guard = _MutationGuard()
        self._groups: list[InputOutputGroup] = [InputOutputGroup(self._guard)]
        self._libraries: list[LibraryEntry] = []
        self._jdk_modules: list[str] = []
        self._rules: list[str] = []
        self.rules_files = FileCollection(guard=self._guard)

    @property
    def groups(self) -> tuple[InputOutputGroup, ...]:
        return tuple(self._groups)

    @property
    def libraries(self) -> tuple[LibraryEntry, ...]:
        return tuple(self._libraries)

    @property
    def jdk_modules(self) -> tuple[str, ...]:
        return tuple(self._jdk_modules)

    @property
    def rules(self) -> tuple[str, ...]:
        return tuple(self._rules)

    @property
    def frozen(self) -> bool:
        return self._guard.frozen

    def freeze(self) -> None:
        self._guard.frozen = True

    def add_group(
        self,
        configure: Callable[[InputOutputGroup], None] | None = None,
    ) -> InputOutputGroup:
        """Append a new input/output group and optionally configure it."""

        self._guard.check("add input/output group")
        group = InputOutputGroup(self._guard)
        self._groups.append(group)
        return _configured(group, configure)

    def add_input(
        self,
        *sources: Any,
        filter: str = "",  # noqa: A002
        configure: Callable[[InputEntry], None] | None = None,
    ) -> InputEntry:
        return self._groups[0].add_input(*sources, filter=filter, configure=configure)

    def add_output(
        self,
        archive_file: FileLocation = None,
        directory: FileLocation = None,
        *,
        filter: str = "",  # noqa: A002
        configure: Callable[[OutputEntry], None] | None = None,
    ) -> OutputEntry:
        return self._groups[0].add_output(
            archive_file,
            directory,
            filter=filter,
            configure=configure,
        )

    def add_library(
        self,
        *sources: Any,
        filter: str = "",  # noqa: A002
        configure: Callable[[LibraryEntry], None] | None = None,
    ) -> LibraryEntry:
        self._guard.check("add library")
        entry = LibraryEntry(self._guard)
        entry.classpath.add(*sources)
        entry.filter = filter
        self._libraries.append(entry)
        return _configured(entry, configure)

    def add_jdk_module(self, *names: str) -> None:
        self._guard.check("add JDK module")
        self._jdk_modules.extend(names)

    def add_rules_file(self, *sources: Any) -> None:
        self.rules_files.add(*sources)

    def add_rule(self, *rules: str) -> None:
        self._guard.check("add rule")
        self._rules.extend(rules)

    def input_classpath(self) -> list[Path]:
        """All input files and directories across groups, in argument order."""

        return [path for group in self._groups for entry in group.inputs for path in entry.classpath]

    def output_classpath(self) -> list[Path]:
        """All configured output archives and directories across groups."""

        resolved = (
            entry.archive_file_or_directory() for group in self._groups for entry in group.outputs
        )
        return [path for path in resolved if path is not None]

    def library_classpath(self) -> list[Path]:
        return [path for entry in self._libraries for path in entry.classpath]
