"""Error types.

Query providers never raise: a failed lookup is an empty answer. These errors
exist for the one place where the caller must hear about a problem, which is
loading the reference catalog at startup.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    CATALOG_NOT_FOUND = "CATALOG_NOT_FOUND"
    CATALOG_UNREADABLE = "CATALOG_UNREADABLE"


class TFWRSenseError(Exception):
    """Raised when startup loading fails."""

    def __init__(self, code: ErrorCode, message: str, recoverable: bool = False) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recoverable = recoverable
