"""Kardex exception hierarchy.

Ingestion failures are raised with the offending value attached so callers
can log and report them without re-parsing messages.
"""

from __future__ import annotations

from typing import Any, Optional


class KardexError(Exception):
    """Base exception for all kardex ingestion failures."""


class KardexConfigError(KardexError):
    """Raised for invalid runtime configuration."""


class InvalidPayload(KardexError):
    """Raised when a payload is rejected before any transaction is opened."""

    def __init__(self, message: str, details: Optional[list[dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.details = details or []


class MalformedCode(KardexError):
    """Raised when a compact code cannot be decoded."""

    def __init__(self, code: Any, message: Optional[str] = None) -> None:
        super().__init__(message or f"Malformed period code: {code!r}")
        self.code = code
