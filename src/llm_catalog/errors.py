"""Failure types raised inside the catalog pipeline.

Adapters catch ``CatalogError`` at their boundary and fall back to the empty
catalog, so none of these reach callers of ``list_models``.
"""

from __future__ import annotations

from typing import Optional


class CatalogError(Exception):
    """Pipeline failure with a stable error code."""

    def __init__(self, error_code: str, message: str) -> None:
        super().__init__(message)
        self.error_code = error_code


class FetchError(CatalogError):
    """The /models request did not produce a JSON body."""


class FetchTimeoutError(FetchError):
    def __init__(self, message: str) -> None:
        super().__init__("timeout", message)


class FetchConnectionError(FetchError):
    """DNS, refused connection, TLS or other transport-level failure."""

    def __init__(self, message: str) -> None:
        super().__init__("connection_error", message)


class FetchStatusError(FetchError):
    """Non-2xx response."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__("http_status", message)
        self.status_code = status_code


class FetchParseError(FetchError):
    def __init__(self, message: str) -> None:
        super().__init__("invalid_json", message)


class DecodeError(CatalogError):
    """Body does not match the provider's documented response shape."""

    def __init__(self, message: str) -> None:
        super().__init__("schema_mismatch", message)


class UnknownProviderError(ValueError):
    """Caller asked for a provider id no adapter is registered for."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"Unknown provider '{provider}'")
        self.provider = provider
