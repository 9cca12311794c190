"""Registry name validation and index resource paths."""

from __future__ import annotations

import re

from classfinder.errors import InvalidNameError

INDEX_DIR = "META-INF/classfinder"

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def validate_name(name: str) -> str:
    """Return ``name`` unchanged if it is a safe path segment, else raise."""
    if not isinstance(name, str) or _NAME_PATTERN.fullmatch(name) is None:
        raise InvalidNameError(name, _NAME_PATTERN.pattern)
    return name


def index_path(name: str) -> str:
    """Relative resource path of the index file for registry ``name``."""
    return f"{INDEX_DIR}/{validate_name(name)}"
