"""
paging.py – Pagination and retry policy for KuCoin list endpoints.

Offset-paged endpoints (ledgers, deposits, sub-accounts …) answer with

    {"currentPage": 1, "pageSize": 50, "totalNum": 120, "totalPage": 3, "items": [...]}

Paginator walks such an endpoint one page at a time:

    FETCHING ──ok──► HAS_MORE ──sleep(delay)──► FETCHING
        │                │
        │                └── max_pages reached ──► stop (state stays HAS_MORE)
        ├── last page ─────────────────────────► EXHAUSTED
        └── KucoinError / bad page ────────────► FAILED  (PaginationError raised)

``fetch_page`` is called afresh for every page so each page gets its own
timestamp and signature.  When a fetch fails, or a page does not
validate, PaginationError carries every page fetched before the failure.

The cursor moves forward from its own position, never from the page
number the server echoes back.  A walk left at HAS_MORE because the
consumer stopped iterating resumes on the next iteration or collect();
a walk stopped by max_pages does not.

call_with_retries() is the single-call policy: retry TransportError and
5xx HttpError a bounded number of times with a fixed delay, surface
everything else immediately.

Usage
-----
    def fetch(cursor: PageCursor) -> PageResult:
        data = client._request("GET", "/api/v1/deposits",
                               params={"currentPage": cursor.current_page,
                                       "pageSize": cursor.page_size})
        return PageResult.model_validate(data)

    pages = Paginator(fetch, page_size=50, max_pages=10, delay=0.2).collect()
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, TypeVar

from pydantic import ValidationError

from .errors import HttpError, KucoinError, PaginationError, TransportError
from .types import PageResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

FetchPage      = Callable[["PageCursor"], PageResult]
AsyncFetchPage = Callable[["PageCursor"], Awaitable[PageResult]]


# ---------------------------------------------------------------------------
# Retry policy
# ---------------------------------------------------------------------------

def is_retryable(exc: BaseException) -> bool:
    """Transport failures and 5xx responses are worth another attempt."""
    if isinstance(exc, TransportError):
        return True
    return isinstance(exc, HttpError) and exc.status_code >= 500


def call_with_retries(
    fn: Callable[[], T],
    *,
    retries: int = 0,
    delay: float = 0.0,
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Call ``fn`` and retry retryable failures up to ``retries`` times.

    ``fn`` must rebuild the request (and its signature) on every call.
    The last error is raised once attempts are exhausted.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except KucoinError as exc:
            if attempt >= retries or not is_retryable(exc):
                raise
            attempt += 1
            logger.warning(
                "Retryable failure (%s) – retry %d/%d in %.2f s",
                exc, attempt, retries, delay,
            )
            (sleep or time.sleep)(delay)


async def async_call_with_retries(
    fn: Callable[[], Awaitable[T]],
    *,
    retries: int = 0,
    delay: float = 0.0,
) -> T:
    """Async version of call_with_retries(); sleeps with asyncio.sleep."""
    attempt = 0
    while True:
        try:
            return await fn()
        except KucoinError as exc:
            if attempt >= retries or not is_retryable(exc):
                raise
            attempt += 1
            logger.warning(
                "Retryable failure (%s) – retry %d/%d in %.2f s",
                exc, attempt, retries, delay,
            )
            await asyncio.sleep(delay)


# ---------------------------------------------------------------------------
# Pagination state
# ---------------------------------------------------------------------------

@unique
class PageState(str, Enum):
    FETCHING  = "fetching"
    HAS_MORE  = "has_more"
    EXHAUSTED = "exhausted"
    FAILED    = "failed"


@dataclass
class PageCursor:
    """Position of a Paginator; mutated only by the Paginator itself."""
    current_page: int           = 1
    page_size:    int           = 50
    total_pages:  Optional[int] = None


class _PaginatorBase:
    def __init__(
        self,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
        delay: float = 0.0,
        retries: int = 0,
        retry_delay: float = 0.0,
        start_page: int = 1,
    ) -> None:
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"max_pages must be positive, got {max_pages}")
        if start_page < 1:
            raise ValueError(f"start_page must be >= 1, got {start_page}")

        self.cursor      = PageCursor(current_page=start_page, page_size=page_size)
        self.max_pages   = max_pages
        self.delay       = delay
        self.retries     = retries
        self.retry_delay = retry_delay
        self.state       = PageState.FETCHING
        self.pages: list[PageResult] = []
        self.error: Optional[Exception] = None

    @property
    def done(self) -> bool:
        return self.state is not PageState.FETCHING

    @property
    def items(self) -> list:
        """All items of the pages fetched so far, in page order."""
        return [item for page in self.pages for item in page.items]

    def _at_page_limit(self) -> bool:
        return self.max_pages is not None and len(self.pages) >= self.max_pages

    def _resume(self) -> None:
        # an abandoned iteration leaves HAS_MORE with the cursor already advanced
        if self.state is PageState.HAS_MORE and not self._at_page_limit():
            self.state = PageState.FETCHING

    def _fail(self, exc: Exception) -> PaginationError:
        self.state = PageState.FAILED
        self.error = exc
        logger.warning(
            "Pagination failed on page %d after %d page(s): %s",
            self.cursor.current_page, len(self.pages), exc,
        )
        return PaginationError(list(self.pages), exc)

    def _advance(self, page: PageResult) -> bool:
        """Record ``page``; returns True when another page should be fetched."""
        self.pages.append(page)
        current = self.cursor.current_page
        self.cursor.total_pages = page.total_page
        if page.current_page is not None and page.current_page != current:
            logger.debug("Requested page %d, server echoed page %d", current, page.current_page)

        if page.total_page is None or current >= page.total_page:
            self.state = PageState.EXHAUSTED
            return False

        self.state = PageState.HAS_MORE
        if self._at_page_limit():
            logger.debug("Stopping at max_pages=%d (%d/%d)", self.max_pages, current, page.total_page)
            return False

        self.cursor.current_page = current + 1
        return True


class Paginator(_PaginatorBase):
    """
    Lazy, synchronous walk over an offset-paged endpoint.

    Parameters
    ----------
    fetch_page  : Callable[[PageCursor], PageResult]; must sign a fresh request
    page_size   : items per page requested from the server
    max_pages   : stop after this many pages (None = until the last page)
    delay       : seconds to sleep between pages
    retries     : per-page retries for transport / 5xx failures
    retry_delay : fixed seconds between those retries
    """

    def __init__(self, fetch_page: FetchPage, **kwargs) -> None:
        super().__init__(**kwargs)
        self._fetch_page = fetch_page

    def __iter__(self) -> Iterator[PageResult]:
        self._resume()
        while self.state is PageState.FETCHING:
            logger.debug("Fetching page %d (size %d)", self.cursor.current_page, self.cursor.page_size)
            try:
                page = call_with_retries(
                    lambda: self._fetch_page(self.cursor),
                    retries=self.retries,
                    delay=self.retry_delay,
                )
            except (KucoinError, ValidationError) as exc:
                raise self._fail(exc) from exc

            more = self._advance(page)
            yield page
            if not more:
                return
            if self.delay > 0:
                time.sleep(self.delay)
            self.state = PageState.FETCHING

    def collect(self) -> list[PageResult]:
        """Fetch every remaining page and return all pages fetched."""
        for _ in self:
            pass
        return self.pages


class AsyncPaginator(_PaginatorBase):
    """
    Async version of Paginator; ``fetch_page`` returns an awaitable.

    Cancelling the consuming task aborts the walk at the current await
    point; pages fetched so far stay available on ``.pages``.
    """

    def __init__(self, fetch_page: AsyncFetchPage, **kwargs) -> None:
        super().__init__(**kwargs)
        self._fetch_page = fetch_page

    async def __aiter__(self) -> AsyncIterator[PageResult]:
        self._resume()
        while self.state is PageState.FETCHING:
            logger.debug("Fetching page %d (size %d)", self.cursor.current_page, self.cursor.page_size)
            try:
                page = await async_call_with_retries(
                    lambda: self._fetch_page(self.cursor),
                    retries=self.retries,
                    delay=self.retry_delay,
                )
            except (KucoinError, ValidationError) as exc:
                raise self._fail(exc) from exc

            more = self._advance(page)
            yield page
            if not more:
                return
            if self.delay > 0:
                await asyncio.sleep(self.delay)
            self.state = PageState.FETCHING

    async def collect(self) -> list[PageResult]:
        async for _ in self:
            pass
        return self.pages
