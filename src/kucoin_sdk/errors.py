"""
errors.py – Exception hierarchy for the KuCoin SDK.

    KucoinError
    ├── InvalidEndpoint   – malformed path / method, raised before signing
    ├── SigningError      – empty secret / message, unknown key version
    ├── TransportError    – no HTTP response (timeout, DNS, reset)
    ├── HttpError         – HTTP response with a non-2xx status
    ├── ApiError          – 2xx response whose envelope code is not "200000"
    └── PaginationError   – a page fetch failed; carries the pages fetched so far

Only TransportError and 5xx HttpError are ever retried (see paging.py).
"""

from __future__ import annotations

from typing import Any, Optional


class KucoinError(Exception):
    """Base class for every error raised by this SDK."""


class InvalidEndpoint(KucoinError):
    """Endpoint path or HTTP method cannot be signed."""


class SigningError(KucoinError):
    """Signature or passphrase could not be computed."""


class TransportError(KucoinError):
    """Raised when no HTTP response was obtained."""

    def __init__(self, message: str, *, url: str = "", cause: Optional[BaseException] = None) -> None:
        self.url   = url
        self.cause = cause
        location = f" ({url})" if url else ""
        super().__init__(f"{message}{location}")


class HttpError(KucoinError):
    """Raised when KuCoin answers with a non-2xx HTTP status."""

    def __init__(
        self,
        status_code: int,
        body: str,
        *,
        method: str = "",
        url: str = "",
        message: str = "",
    ) -> None:
        self.status_code = status_code
        self.body        = body
        self.method      = method.upper()
        self.url         = url
        location = f" {self.method} {self.url}" if url else ""
        detail   = message or body
        super().__init__(f"HTTP error [{status_code}]{location}: {detail}")


class ApiError(KucoinError):
    """Raised when the JSON envelope carries a non-success ``code``."""

    def __init__(
        self,
        code: Optional[str],
        message: str,
        *,
        method: str = "",
        url: str = "",
    ) -> None:
        self.code    = code
        self.message = message
        self.method  = method.upper()
        self.url     = url
        location = f" {self.method} {self.url}" if url else ""
        if code is None:
            super().__init__(f"KuCoin API error{location}: {message}")
        else:
            super().__init__(f"KuCoin API error{location}: {code} - {message}")


class PaginationError(KucoinError):
    """
    Raised when a page fetch fails part-way through a paged listing.

    ``pages`` holds every PageResult fetched before the failure and
    ``cause`` the error that stopped the walk (also chained as __cause__).
    """

    def __init__(self, pages: list[Any], cause: Exception) -> None:
        self.pages = pages
        self.cause = cause
        super().__init__(f"Pagination stopped after {len(pages)} page(s): {cause}")
