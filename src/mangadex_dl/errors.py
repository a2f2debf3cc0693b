"""
Error taxonomy for mangadex-dl.

Every error holds a single context message. Errors are wrapped with more
context as they cross component boundaries using ``with_context`` and
``raise ... from``, so the ``__cause__`` chain reads like
``download manga <id>: download <chapter>: save page <file>: <reason>``.
"""

from __future__ import annotations

from typing import Optional


class MangaDexDLError(Exception):
    """Base class for all errors raised by mangadex-dl."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation

    def with_context(self, message: str) -> "MangaDexDLError":
        """Return a new error of the same kind carrying an outer context.

        The caller is expected to raise it ``from self``.
        """
        return type(self)(message, operation=self.operation)

    def __str__(self) -> str:
        return self.message


class TransportError(MangaDexDLError):
    """Network or HTTP failure, including request-build failures."""


class DataShapeError(MangaDexDLError):
    """The remote API returned a record missing a required field."""


class FilesystemError(MangaDexDLError):
    """Directory creation or atomic write failure."""


def format_error_chain(exc: BaseException) -> str:
    """Join an exception and its causes into one ``a: b: c`` line."""
    parts: list[str] = []
    current: Optional[BaseException] = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        if not parts or parts[-1] != text:
            parts.append(text)
        current = current.__cause__ or (
            None if current.__suppress_context__ else current.__context__
        )
    return ": ".join(parts)


__all__ = [
    "MangaDexDLError",
    "TransportError",
    "DataShapeError",
    "FilesystemError",
    "format_error_chain",
]
