"""Loading contexts: where index files are found and how names are resolved.

A loading context answers two questions: which index resources exist for a
relative path (every one of them, not just the first, since several artifacts
on the search path may each ship an index under the same registry name), and
which class a fully-qualified name refers to.

``PathContext`` is the default. It walks a search path made of directories and
zip archives (wheels, eggs, zipapps), by default ``sys.path`` as it stands at
enumeration time. Names are resolved through the regular import system, so
classes listed in an index must be importable in the current interpreter.
"""

from __future__ import annotations

import io
import os
import sys
import zipfile
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

import structlog

from classfinder.errors import ResourceIOError
from classfinder.names import index_path
from classfinder.resolver import import_class

log = structlog.get_logger()


@runtime_checkable
class IndexResource(Protocol):
    @property
    def location(self) -> str: ...

    def open(self) -> BinaryIO:
        """Open the resource for reading. The caller closes the stream."""
        ...


@runtime_checkable
class LoadingContext(Protocol):
    def iter_resources(self, relative_path: str) -> Iterator[IndexResource]: ...

    def resolve(self, qualified_name: str) -> type | None: ...


@dataclass(frozen=True)
class FileResource:
    path: Path

    @property
    def location(self) -> str:
        return str(self.path)

    def open(self) -> BinaryIO:
        return self.path.open("rb")


@dataclass(frozen=True)
class ArchiveResource:
    archive: Path
    member: str

    @property
    def location(self) -> str:
        return f"{self.archive}!/{self.member}"

    def open(self) -> BinaryIO:
        # Index files are small; the member is read eagerly so no archive
        # handle outlives this call.
        try:
            with zipfile.ZipFile(self.archive) as archive:
                return io.BytesIO(archive.read(self.member))
        except KeyError as exc:
            raise FileNotFoundError(f"No member {self.member!r} in {self.archive}") from exc
        except zipfile.BadZipFile as exc:
            raise OSError(f"Not a readable zip archive: {self.archive}") from exc


class PathContext:
    """Search a list of directories and zip archives for index resources.

    ``paths=None`` means "the ambient search path": ``sys.path`` is re-read on
    every enumeration so entries added at runtime are picked up by ``reload()``.
    """

    def __init__(
        self,
        paths: Iterable[str | os.PathLike[str]] | None = None,
        *,
        extra_paths: Iterable[str | os.PathLike[str]] = (),
    ) -> None:
        self._paths = None if paths is None else tuple(os.fspath(p) for p in paths)
        self._extra_paths = tuple(os.fspath(p) for p in extra_paths)

    @property
    def search_path(self) -> list[str]:
        base = list(sys.path) if self._paths is None else list(self._paths)
        return base + list(self._extra_paths)

    def iter_resources(self, relative_path: str) -> Iterator[IndexResource]:
        seen: set[Path] = set()
        for entry in self.search_path:
            # An empty sys.path entry means the current directory.
            root = Path(entry or os.curdir).absolute()
            if root in seen:
                continue
            seen.add(root)

            if root.is_dir():
                candidate = root / relative_path
                if candidate.is_file():
                    yield FileResource(candidate)
            elif zipfile.is_zipfile(root):
                with zipfile.ZipFile(root) as archive:
                    try:
                        archive.getinfo(relative_path)
                    except KeyError:
                        continue
                yield ArchiveResource(root, relative_path)

    def resolve(self, qualified_name: str) -> type | None:
        return import_class(qualified_name)

    def __repr__(self) -> str:
        source = "sys.path" if self._paths is None else list(self._paths)
        return f"PathContext(paths={source!r}, extra_paths={list(self._extra_paths)!r})"


def locate(context: LoadingContext, name: str) -> Iterator[IndexResource]:
    """Enumerate every index resource for registry ``name``.

    The name is validated before anything touches the filesystem. The returned
    iterator is lazy and single-use; each call starts a fresh enumeration.
    Enumeration failures surface as ``ResourceIOError``.
    """
    relative_path = index_path(name)
    return _enumerate(context, name, relative_path)


def _enumerate(context: LoadingContext, name: str, relative_path: str) -> Iterator[IndexResource]:
    try:
        for resource in context.iter_resources(relative_path):
            log.debug("index_resource_found", registry=name, resource=resource.location)
            yield resource
    except (OSError, zipfile.BadZipFile) as exc:
        raise ResourceIOError(
            f"Cannot enumerate index resources for {relative_path!r}",
            registry=name,
        ) from exc
