"""Resolution of fully-qualified class names to class objects.

A name is either a dotted path (``package.module.Class``, nested attributes
allowed) or the entry-point form ``package.module:Class``. Each name resolves
independently: a name that cannot be imported becomes a ``Skipped`` result
and a warning, never an exception, so one stale index line cannot abort a
whole scan.
"""

from __future__ import annotations

import importlib
from collections.abc import Iterable
from dataclasses import dataclass
from types import ModuleType
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from classfinder.context import LoadingContext

log = structlog.get_logger()


@dataclass(frozen=True)
class Resolved:
    qualified_name: str
    cls: type


@dataclass(frozen=True)
class Skipped:
    qualified_name: str
    reason: str


def _import(module_name: str) -> ModuleType | None:
    try:
        return importlib.import_module(module_name)
    except ImportError:
        # Covers both a missing module and a module whose own imports are
        # missing (optional dependency not installed in this deployment).
        return None


def _walk(obj: object, attrs: list[str]) -> type | None:
    for attr in attrs:
        try:
            obj = getattr(obj, attr)
        except AttributeError:
            return None
    return obj if isinstance(obj, type) else None


def import_class(qualified_name: str) -> type | None:
    """Import and return the class named by ``qualified_name``, or ``None``."""
    module_name, sep, attr_path = qualified_name.partition(":")
    if sep:
        attrs = attr_path.split(".")
        if not all(p.isidentifier() for p in module_name.split(".") + attrs):
            return None
        module = _import(module_name)
        return None if module is None else _walk(module, attrs)

    parts = qualified_name.split(".")
    if len(parts) < 2 or not all(p.isidentifier() for p in parts):
        return None
    # Longest importable prefix wins: "a.b.C" tries "a.b" before "a".
    for i in range(len(parts) - 1, 0, -1):
        module = _import(".".join(parts[:i]))
        if module is not None:
            return _walk(module, parts[i:])
    return None


def resolve_name(context: LoadingContext, qualified_name: str) -> Resolved | Skipped:
    cls = context.resolve(qualified_name)
    if cls is None:
        return Skipped(qualified_name, "not found")
    return Resolved(qualified_name, cls)


def resolve_all(
    context: LoadingContext,
    qualified_names: Iterable[str],
    *,
    registry: str | None = None,
) -> tuple[type, ...]:
    """Resolve every name, dropping unresolvable ones.

    The result is de-duplicated with first-seen order kept, so the same class
    listed by two contributing index files appears once.
    """
    found: dict[type, None] = {}
    for qualified_name in qualified_names:
        result = resolve_name(context, qualified_name)
        if isinstance(result, Skipped):
            log.warning(
                "class_unresolved",
                registry=registry,
                qualified_name=result.qualified_name,
                reason=result.reason,
            )
            continue
        found.setdefault(result.cls, None)
    return tuple(found)
