"""Error taxonomy.

Callers only ever see two failures: an invalid registry name, or an I/O error
while enumerating or reading index resources. Unresolvable class names and
registries with no index files are not errors; they are logged and degrade to
a smaller snapshot.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    INVALID_NAME = "INVALID_NAME"
    RESOURCE_IO_ERROR = "RESOURCE_IO_ERROR"


class ClassFinderError(Exception):
    """Base class for every error raised across the package boundary."""

    code: ErrorCode
    recoverable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class InvalidNameError(ClassFinderError, ValueError):
    code = ErrorCode.INVALID_NAME
    recoverable = False

    def __init__(self, name: object, pattern: str) -> None:
        super().__init__(f"Invalid registry name {name!r}: must match {pattern}")
        self.name = name


class ResourceIOError(ClassFinderError, RuntimeError):
    """Enumerating or reading an index resource failed.

    Raised from the populate pipeline with the underlying ``OSError`` chained
    as ``__cause__``. Not retried internally.
    """

    code = ErrorCode.RESOURCE_IO_ERROR
    recoverable = True

    def __init__(self, message: str, *, registry: str, location: str | None = None) -> None:
        super().__init__(message)
        self.registry = registry
        self.location = location
