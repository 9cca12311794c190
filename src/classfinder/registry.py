"""Named class registries and the process-wide registry table.

A ``ClassFinder`` owns one registry name, the loading context it was created
with, and an immutable snapshot of resolved classes. ``reload()`` rebuilds the
snapshot off to the side and publishes it with a single attribute assignment,
so readers never lock and never observe a half-built snapshot.

``RegistryTable`` maps names to finders with get-or-create semantics: at most
one ``ClassFinder`` is ever constructed per name, even when several threads
ask for the same unseen name at once. The context passed by the first caller
is bound for good; later callers passing a different context get the existing
finder unchanged.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field

import structlog

from classfinder.config import Settings
from classfinder.context import LoadingContext, PathContext, locate
from classfinder.index import parse_index
from classfinder.names import validate_name
from classfinder.resolver import resolve_all

log = structlog.get_logger()


class ClassFinder:
    def __init__(self, name: str, context: LoadingContext) -> None:
        self._name = validate_name(name)
        self._context = context
        self._classes: tuple[type, ...] = ()
        self.reload()

    @property
    def name(self) -> str:
        return self._name

    @property
    def context(self) -> LoadingContext:
        return self._context

    def reload(self) -> None:
        """Rescan every index resource and replace the snapshot.

        Raises ``ResourceIOError`` if a resource cannot be enumerated or read;
        the previous snapshot is then left in place.
        """
        resources = 0
        names: list[str] = []
        for resource in locate(self._context, self._name):
            resources += 1
            names.extend(parse_index(resource, registry=self._name))

        if not resources:
            log.warning("classfinder_index_missing", registry=self._name)

        snapshot = resolve_all(self._context, names, registry=self._name)
        self._classes = snapshot
        log.info(
            "classfinder_loaded",
            registry=self._name,
            resources=resources,
            entries=len(names),
            classes=len(snapshot),
        )

    def get_classes(self) -> tuple[type, ...]:
        """The current snapshot. Call again after ``reload()`` for fresh data."""
        return self._classes

    def __iter__(self) -> Iterator[type]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, cls: object) -> bool:
        return cls in self._classes

    def __repr__(self) -> str:
        return f"ClassFinder(name={self._name!r}, classes={len(self._classes)})"


def default_context(settings: Settings | None = None) -> PathContext:
    """Ambient loading context: ``sys.path`` plus configured extra paths."""
    settings = settings or Settings()
    search = settings.search
    return PathContext(
        None if search.include_sys_path else [],
        extra_paths=search.extra_paths,
    )


@dataclass
class _Pending:
    """Construction lock for one name, kept while any caller is using it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class RegistryTable:
    """Process-scoped table of ``ClassFinder`` instances keyed by name."""

    def __init__(self, context_factory: Callable[[], LoadingContext] | None = None) -> None:
        self._context_factory = context_factory or default_context
        self._finders: dict[str, ClassFinder] = {}
        # Guards _finders writes and _creating; never held during construction.
        self._lock = threading.Lock()
        # Per-name construction locks, so building one registry does not
        # block lookups or construction of any other. An entry lives only
        # while some caller holds or waits on it.
        self._creating: dict[str, _Pending] = {}

    def get_instance(self, name: str, context: LoadingContext | None = None) -> ClassFinder:
        validate_name(name)

        finder = self._finders.get(name)
        if finder is not None:
            return self._hit(finder, context)

        with self._lock:
            finder = self._finders.get(name)
            if finder is not None:
                return self._hit(finder, context)
            pending = self._creating.setdefault(name, _Pending())
            pending.users += 1

        try:
            with pending.lock:
                finder = self._finders.get(name)
                if finder is not None:
                    return self._hit(finder, context)
                # A failed construction stores nothing; the next caller retries.
                finder = ClassFinder(
                    name, context if context is not None else self._context_factory()
                )
                with self._lock:
                    self._finders[name] = finder
                return finder
        finally:
            with self._lock:
                pending.users -= 1
                if not pending.users and self._creating.get(name) is pending:
                    del self._creating[name]

    def _hit(self, finder: ClassFinder, context: LoadingContext | None) -> ClassFinder:
        if context is not None and context is not finder.context:
            log.debug("classfinder_context_ignored", registry=finder.name)
        return finder

    def names(self) -> list[str]:
        return sorted(self._finders)

    def clear(self) -> None:
        with self._lock:
            self._finders.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._finders

    def __len__(self) -> int:
        return len(self._finders)


_table: RegistryTable | None = None
_table_lock = threading.Lock()


def get_table() -> RegistryTable:
    """The process-wide table, created on first use."""
    global _table
    if _table is None:
        with _table_lock:
            if _table is None:
                _table = RegistryTable()
    return _table


def get_instance(name: str, context: LoadingContext | None = None) -> ClassFinder:
    """Return the process-wide ``ClassFinder`` for ``name``, building it once."""
    return get_table().get_instance(name, context)
