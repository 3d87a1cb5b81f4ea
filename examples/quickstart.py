"""
examples/quickstart.py – End-to-end demo of the KuCoin SDK.

Walks through:
  1. Loading credentials from the environment
  2. Syncing the signing clock with KuCoin's server time
  3. Fetching public market data (ticker, candles)
  4. Reading spot account balances (signed GET)
  5. Walking the account ledger page by page
  6. Validating a limit order against the test endpoint (nothing is placed)
  7. Doing the same with the async façade

HOW TO RUN
----------
    export KC_API_KEY="your_api_key"
    export KC_API_SECRET="your_api_secret"
    export KC_API_PASSPHRASE="your_passphrase"
    python examples/quickstart.py

    Set KC_API_ENDPOINT to point at another REST host.
"""

from __future__ import annotations

import asyncio
import logging

from kucoin_sdk import (
    AddOrderRequest,
    ApiError,
    KlineInterval,
    KucoinAuth,
    KucoinClient,
    KucoinError,
    KucoinRestClient,
    OrderType,
    PaginationError,
    Side,
    credentials_from_env,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s – %(message)s",
)
logger = logging.getLogger("quickstart")

SYMBOL = "BTC-USDT"


# ---------------------------------------------------------------------------
# Part 1 – sync REST client
# ---------------------------------------------------------------------------

def rest_demo() -> None:
    logger.info("=== REST demo ===")

    auth = KucoinAuth(credentials_from_env())
    with KucoinRestClient(auth=auth, page_delay=0.2) as client:
        offset = client.sync_time()
        logger.info("Clock offset vs KuCoin: %d ms", offset)

        ticker = client.get_ticker(SYMBOL)
        if ticker:
            logger.info("%s  bid=%s  ask=%s  last=%s", SYMBOL, ticker.best_bid, ticker.best_ask, ticker.price)

        candles = client.get_klines(SYMBOL, KlineInterval.HOUR_1)
        logger.info("Fetched %d hourly candles", len(candles))

        for acct in client.get_spot_accounts():
            logger.info("  %-6s %-6s available=%s", acct.type, acct.currency, acct.available)

        try:
            entries = client.get_spot_ledger(currency="USDT", page_size=50, max_pages=3)
            logger.info("Ledger: %d entries", len(entries))
        except PaginationError as exc:
            logger.warning("Ledger walk stopped after %d page(s): %s", len(exc.pages), exc.cause)

        order = AddOrderRequest(
            symbol=SYMBOL,
            type=OrderType.LIMIT,
            side=Side.BUY,
            price="1",          # far below market
            size="0.0001",
            post_only=True,
        )
        try:
            resp = client.add_order_test(order)
            logger.info("Test order accepted: orderId=%s clientOid=%s", resp.order_id, resp.client_oid)
        except ApiError as exc:
            logger.warning("Test order rejected: code=%s msg=%s", exc.code, exc.message)


# ---------------------------------------------------------------------------
# Part 2 – async façade
# ---------------------------------------------------------------------------

async def async_demo() -> None:
    logger.info("=== async demo ===")

    async with KucoinClient() as client:
        await client.rest.sync_time()
        open_symbols = await client.rest.get_symbols_with_open_orders()
        logger.info("Symbols with open orders: %s", open_symbols or "none")

        page = await client.rest.get_trade_history(SYMBOL, limit=10)
        for fill in page.items:
            logger.info("  fill %s  %s %s @ %s", fill.trade_id, fill.side, fill.size, fill.price)


if __name__ == "__main__":
    try:
        rest_demo()
        asyncio.run(async_demo())
    except KucoinError as exc:
        logger.error("KuCoin request failed: %s", exc)
