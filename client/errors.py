"""Errors raised by catalog gateways."""

from __future__ import annotations


class CatalogClientError(RuntimeError):
    """Base class for failures while fetching from the catalog."""


class TransportError(CatalogClientError):
    """Raised when the endpoint is unreachable, times out or answers with a non-success status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(CatalogClientError):
    """Raised when a response body is not well-formed for the expected contract."""
