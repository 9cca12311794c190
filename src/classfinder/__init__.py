"""Runtime lookup of classes listed in build-time index files."""

from __future__ import annotations

from classfinder.context import IndexResource, LoadingContext, PathContext
from classfinder.errors import ClassFinderError, ErrorCode, InvalidNameError, ResourceIOError
from classfinder.names import validate_name
from classfinder.registry import ClassFinder, RegistryTable, get_instance, get_table

__all__ = [
    # registry
    "ClassFinder",
    "RegistryTable",
    "get_instance",
    "get_table",
    # contexts
    "LoadingContext",
    "IndexResource",
    "PathContext",
    # names
    "validate_name",
    # errors
    "ClassFinderError",
    "ErrorCode",
    "InvalidNameError",
    "ResourceIOError",
]
