"""
client.py – Unified KucoinClient façade.

Single entry point that owns the async REST client, wired to one
KucoinAuth instance so credentials and the clock offset are managed once.

Usage
-----
    import asyncio
    from kucoin_sdk import KucoinClient

    async def main() -> None:
        async with KucoinClient() as client:          # credentials from KC_API_*
            await client.rest.sync_time()
            for acct in await client.rest.get_spot_accounts(currency="USDT"):
                print(acct.type, acct.available)

    asyncio.run(main())
"""

from __future__ import annotations

from typing import Optional

from .auth import KucoinAuth, credentials_from_env
from .rest import AsyncKucoinRestClient
from .types import Credentials


class KucoinClient:
    """
    Unified façade for the KuCoin SDK.

    Parameters
    ----------
    credentials  : Credentials; read from KC_API_* environment variables
                   when omitted
    rest_timeout : HTTP timeout in seconds for REST requests
    retries      : automatic retries for GET requests
    page_delay   : delay in seconds between pages of paged endpoints
    """

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        *,
        rest_timeout: float = 3.0,
        retries: int = 2,
        page_delay: float = 0.0,
    ) -> None:
        self._auth = KucoinAuth(credentials if credentials is not None else credentials_from_env())
        self.rest  = AsyncKucoinRestClient(
            auth=self._auth,
            timeout=rest_timeout,
            retries=retries,
            page_delay=page_delay,
        )
        self._closed = False

    # ------------------------------------------------------------------
    # Async context manager
    # ------------------------------------------------------------------

    async def __aenter__(self) -> "KucoinClient":
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the REST session; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        await self.rest.close()

    # ------------------------------------------------------------------
    # Convenience: direct access to the shared auth object
    # ------------------------------------------------------------------

    @property
    def auth(self) -> KucoinAuth:
        """The shared KucoinAuth instance (useful for signing by hand)."""
        return self._auth

    @property
    def base_url(self) -> str:
        return self._auth.base_url
