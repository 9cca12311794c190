"""Index file format.

An index file is UTF-8 text listing one fully-qualified class name per line.
Runs of newlines separate entries, surrounding whitespace is ignored, blank
lines are dropped. There is no header, comment syntax or escaping.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from classfinder.errors import ResourceIOError
from classfinder.names import index_path

if TYPE_CHECKING:
    from classfinder.context import IndexResource

_SEPARATOR = re.compile(r"\n+")


def parse_index(resource: IndexResource, *, registry: str | None = None) -> Iterator[str]:
    """Yield the class names listed in ``resource``, in file order.

    The stream is closed on every exit path, including when the consumer
    abandons the iterator part way through.
    """
    try:
        with resource.open() as stream:
            text = stream.read().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ResourceIOError(
            f"Cannot read index resource {resource.location}",
            registry=registry or "",
            location=resource.location,
        ) from exc

    for piece in _SEPARATOR.split(text):
        entry = piece.strip()
        if entry:
            yield entry


def write_index(root: str | Path, name: str, qualified_names: Iterable[str]) -> Path:
    """Write the index file for registry ``name`` under build output ``root``.

    Duplicates are dropped, first occurrence kept. Returns the written path.
    """
    target = Path(root) / index_path(name)
    target.parent.mkdir(parents=True, exist_ok=True)
    entries = dict.fromkeys(n.strip() for n in qualified_names)
    entries.pop("", None)
    target.write_text("".join(f"{entry}\n" for entry in entries), encoding="utf-8")
    return target
