from __future__ import annotations

from enum import Enum

_KEY_NOT_FOUND_MARKERS = ("Requested entity was not found", "404")


class ErrorKind(str, Enum):
    key_not_found = "key_not_found"
    generic = "generic"


class RecommendationError(RuntimeError):
    """Raised when the grounded recommendation call cannot be completed."""


def classify_search_error(exc: BaseException) -> ErrorKind:
    """Map a failed recommendation call onto the user-facing error kinds."""
    message = str(exc) or repr(exc)
    if any(marker in message for marker in _KEY_NOT_FOUND_MARKERS):
        return ErrorKind.key_not_found
    return ErrorKind.generic
