"""
KuCoin SDK – Python SDK for the KuCoin REST API.

Provides:
  - Unified façade                     (client.py  → KucoinClient)
  - Request encoding + HMAC signing    (signing.py → build_headers)
  - Credentials + clock offset         (auth.py    → KucoinAuth)
  - Typed Pydantic v2 models           (types.py)
  - Synchronous REST client            (rest.py    → KucoinRestClient)
  - Async REST client                  (rest.py    → AsyncKucoinRestClient)
  - Pagination + retry policy          (paging.py  → Paginator)
  - Error taxonomy                     (errors.py  → KucoinError)

Quickstart
----------
    import asyncio
    from kucoin_sdk import KucoinClient

    async def main() -> None:
        async with KucoinClient() as client:
            await client.rest.sync_time()
            print(await client.rest.get_spot_accounts(currency="USDT"))

    asyncio.run(main())
"""

from .types import (
    # Credentials
    Credentials,
    KeyVersion,
    DEFAULT_BASE_URL,
    # Enums
    Side,
    OrderType,
    TimeInForce,
    SelfTradePrevention,
    TradeType,
    KlineInterval,
    # Paging
    PageResult,
    # Orders
    AddOrderRequest,
    AddStopOrderRequest,
    AddOcoOrderRequest,
    OrderResponse,
    BatchOrderResult,
    CancelOrderResponse,
    CancelAllResponse,
    Order,
    Fill,
    OrdersPage,
    FillsPage,
    # Stop and OCO orders
    CancelledOrders,
    StopOrder,
    OcoOrder,
    OcoLeg,
    OcoOrderDetail,
    # Account
    AccountSummary,
    ApiKeyInfo,
    SpotAccount,
    AccountDetail,
    LedgerEntry,
    # Margin
    MarginAsset,
    CrossMarginAccount,
    IsolatedMarginPosition,
    IsolatedMarginAccount,
    # Sub-accounts
    SubAccount,
    AddSubAccountResponse,
    SubAccountAsset,
    SubAccountBalance,
    # Deposits
    DepositAddress,
    Deposit,
    # Market data
    Ticker,
    TickerSnapshot,
    SymbolInfo,
    CurrencyChain,
    Currency,
    Announcement,
    Kline,
)
from .errors import (
    KucoinError,
    InvalidEndpoint,
    SigningError,
    TransportError,
    HttpError,
    ApiError,
    PaginationError,
)
from .signing import SigningContext, SignedRequest, build_headers, encode_request, sign, encrypt_passphrase
from .auth import KucoinAuth, credentials_from_env
from .paging import Paginator, AsyncPaginator, PageCursor, PageState, call_with_retries
from .rest import KucoinRestClient, AsyncKucoinRestClient
from .client import KucoinClient

__all__ = [
    # Credentials
    "Credentials",
    "KeyVersion",
    "DEFAULT_BASE_URL",
    # Enums
    "Side",
    "OrderType",
    "TimeInForce",
    "SelfTradePrevention",
    "TradeType",
    "KlineInterval",
    # Paging
    "PageResult",
    # Orders
    "AddOrderRequest",
    "AddStopOrderRequest",
    "AddOcoOrderRequest",
    "OrderResponse",
    "BatchOrderResult",
    "CancelOrderResponse",
    "CancelAllResponse",
    "Order",
    "Fill",
    "OrdersPage",
    "FillsPage",
    # Stop and OCO orders
    "CancelledOrders",
    "StopOrder",
    "OcoOrder",
    "OcoLeg",
    "OcoOrderDetail",
    # Account
    "AccountSummary",
    "ApiKeyInfo",
    "SpotAccount",
    "AccountDetail",
    "LedgerEntry",
    # Margin
    "MarginAsset",
    "CrossMarginAccount",
    "IsolatedMarginPosition",
    "IsolatedMarginAccount",
    # Sub-accounts
    "SubAccount",
    "AddSubAccountResponse",
    "SubAccountAsset",
    "SubAccountBalance",
    # Deposits
    "DepositAddress",
    "Deposit",
    # Market data
    "Ticker",
    "TickerSnapshot",
    "SymbolInfo",
    "CurrencyChain",
    "Currency",
    "Announcement",
    "Kline",
    # Errors
    "KucoinError",
    "InvalidEndpoint",
    "SigningError",
    "TransportError",
    "HttpError",
    "ApiError",
    "PaginationError",
    # Signing
    "SigningContext",
    "SignedRequest",
    "build_headers",
    "encode_request",
    "sign",
    "encrypt_passphrase",
    # Auth
    "KucoinAuth",
    "credentials_from_env",
    # Paging
    "Paginator",
    "AsyncPaginator",
    "PageCursor",
    "PageState",
    "call_with_retries",
    # REST
    "KucoinRestClient",
    "AsyncKucoinRestClient",
    # Unified façade
    "KucoinClient",
]

__version__ = "0.1.0"
