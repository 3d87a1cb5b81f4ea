"""
rest.py – REST clients (sync and async) for the KuCoin API.

Every call goes through the same pipeline:

    sign (private endpoints only) ──► execute (one HTTP call) ──► unwrap_envelope

KuCoin wraps every response in ``{"code": "200000", "data": ...}``.
unwrap_envelope() returns ``data`` and raises:

  - HttpError      on a non-2xx status (or a 2xx body that is not JSON)
  - ApiError       on a 2xx body whose ``code`` is missing or not "200000"

execute() / async_execute() raise TransportError when no response was
obtained at all.  They never retry; the clients retry GET requests only
(transport errors and 5xx), re-signing on each attempt.  POST and DELETE
are never retried automatically.

Usage – sync
------------
    from kucoin_sdk import KucoinAuth, KucoinRestClient, credentials_from_env

    client   = KucoinRestClient(auth=KucoinAuth(credentials_from_env()))
    accounts = client.get_spot_accounts(currency="USDT")

Usage – async
-------------
    async with AsyncKucoinRestClient(auth=auth) as client:
        await client.sync_time()
        resp = await client.add_order(order)
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests

from .auth import KucoinAuth
from .errors import ApiError, HttpError, SigningError, TransportError
from .paging import AsyncPaginator, PageCursor, Paginator, async_call_with_retries, call_with_retries
from .signing import encode_request
from .types import (
    DEFAULT_BASE_URL,
    SUCCESS_CODE,
    AccountDetail,
    AccountSummary,
    AddOcoOrderRequest,
    AddOrderRequest,
    AddStopOrderRequest,
    AddSubAccountResponse,
    Announcement,
    ApiKeyInfo,
    BatchOrderResult,
    CancelAllResponse,
    CancelledOrders,
    CancelOrderResponse,
    CrossMarginAccount,
    Currency,
    Deposit,
    DepositAddress,
    FillsPage,
    IsolatedMarginAccount,
    Kline,
    KlineInterval,
    LedgerEntry,
    OcoOrder,
    OcoOrderDetail,
    Order,
    OrderResponse,
    OrdersPage,
    PageResult,
    SpotAccount,
    StopOrder,
    SubAccount,
    SubAccountBalance,
    SymbolInfo,
    Ticker,
    TickerSnapshot,
    TradeType,
    _validate_symbol,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Request defaults
# ---------------------------------------------------------------------------

_DEFAULT_TIMEOUT_S     = 3.0
_DEFAULT_RETRIES       = 2
_DEFAULT_RETRY_DELAY_S = 0.5
_RETRY_METHODS         = {"GET"}
_BODY_PREVIEW          = 300
_MAX_BATCH_ORDERS      = 20


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------

def unwrap_envelope(status_code: int, text: str, *, method: str = "", url: str = "") -> Any:
    """Classify one HTTP response and return the envelope's ``data``."""
    text = text or ""
    if not 200 <= status_code < 300:
        raise HttpError(status_code, text[:_BODY_PREVIEW], method=method, url=url)

    try:
        payload = json.loads(text)
    except ValueError as exc:
        raise HttpError(
            status_code,
            text[:_BODY_PREVIEW],
            method=method,
            url=url,
            message="Invalid JSON in response",
        ) from exc

    if not isinstance(payload, dict) or "code" not in payload:
        raise ApiError(
            None,
            "Invalid API response structure: missing 'code' field.",
            method=method,
            url=url,
        )

    code = str(payload["code"])
    if code != SUCCESS_CODE:
        message = payload.get("msg") or "No error message provided."
        raise ApiError(code, str(message), method=method, url=url)

    return payload.get("data")


# ---------------------------------------------------------------------------
# Executors – exactly one HTTP call each
# ---------------------------------------------------------------------------

def execute(
    session: requests.Session,
    method: str,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    body: str = "",
    timeout: float = _DEFAULT_TIMEOUT_S,
) -> Any:
    """Send one request with requests and return the unwrapped ``data``."""
    method_u = method.upper()
    try:
        resp = session.request(
            method_u,
            url,
            headers=dict(headers or {}),
            data=body.encode("utf-8") if body else None,
            timeout=timeout,
        )
    except requests.Timeout as exc:
        raise TransportError(f"Timeout after {timeout:.1f} s calling {method_u}", url=url, cause=exc) from exc
    except requests.RequestException as exc:
        raise TransportError(f"Network error calling {method_u}: {exc}", url=url, cause=exc) from exc

    logger.debug("%s %s -> HTTP %d", method_u, url, resp.status_code)
    return unwrap_envelope(resp.status_code, resp.text, method=method_u, url=url)


async def async_execute(
    session: Any,
    method: str,
    url: str,
    *,
    headers: Optional[Mapping[str, str]] = None,
    body: str = "",
    timeout: float = _DEFAULT_TIMEOUT_S,
) -> Any:
    """Send one request on an aiohttp.ClientSession and return the unwrapped ``data``."""
    import aiohttp   # lazy import – only needed for async usage
    from yarl import URL

    method_u = method.upper()
    try:
        # encoded=True: send the query string byte-for-byte as it was signed
        async with session.request(
            method_u,
            URL(url, encoded=True),
            headers=dict(headers or {}),
            data=body.encode("utf-8") if body else None,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as resp:
            status = resp.status
            text   = await resp.text()
    except asyncio.TimeoutError as exc:
        raise TransportError(f"Timeout after {timeout:.1f} s calling {method_u}", url=url, cause=exc) from exc
    except aiohttp.ClientError as exc:
        raise TransportError(f"Network error calling {method_u}: {exc}", url=url, cause=exc) from exc

    logger.debug("%s %s -> HTTP %d", method_u, url, status)
    return unwrap_envelope(status, text, method=method_u, url=url)


# ---------------------------------------------------------------------------
# Parsing helpers (shared by sync and async clients)
# ---------------------------------------------------------------------------

def _segment(value: Any) -> str:
    """Escape a value used as a path segment (order id, client oid …)."""
    return quote(str(value), safe="")


def _check_symbol(symbol: str) -> str:
    if not isinstance(symbol, str) or not symbol:
        raise ValueError("symbol must be a non-empty string (e.g. 'BTC-USDT')")
    return _validate_symbol(symbol)


def _check_limit(limit: int) -> int:
    if not 1 <= limit <= 100:
        raise ValueError(f"limit must be an integer between 1 and 100, got {limit}")
    return limit


def _batch_body(orders: list[AddOrderRequest]) -> dict:
    if not 1 <= len(orders) <= _MAX_BATCH_ORDERS:
        raise ValueError(f"order batch must hold 1 to {_MAX_BATCH_ORDERS} orders, got {len(orders)}")
    return {"orderList": [o.to_body() for o in orders]}


def _join_ids(order_ids: Optional[list[str]]) -> Optional[str]:
    """Comma-join order ids for the batch endpoints; None when there are none."""
    return ",".join(order_ids) if order_ids else None


def _page_query(params: Mapping[str, Any], cursor: PageCursor) -> dict[str, Any]:
    return {**params, "currentPage": cursor.current_page, "pageSize": cursor.page_size}


def _parse_list(model: Any, data: Any) -> list:
    return [model.model_validate(item) for item in (data or [])]


def _parse_klines(data: Any) -> list[Kline]:
    return [Kline.from_row(row) for row in (data or [])]


def _parse_all_tickers(data: Any) -> list[TickerSnapshot]:
    return _parse_list(TickerSnapshot, (data or {}).get("ticker"))


def _parse_open_symbols(data: Any) -> list[str]:
    return list((data or {}).get("symbols") or [])


def _optional_symbol(symbol: Optional[str]) -> Optional[str]:
    return None if symbol is None else _check_symbol(symbol)


# ---------------------------------------------------------------------------
# Shared request preparation
# ---------------------------------------------------------------------------

class _RestBase:
    def __init__(
        self,
        auth: Optional[KucoinAuth],
        timeout: float,
        *,
        base_url: Optional[str],
        retries: int,
        retry_delay: float,
        page_delay: float,
    ) -> None:
        self._auth        = auth
        self._timeout     = timeout
        self._base_url    = (base_url or (auth.base_url if auth else DEFAULT_BASE_URL)).rstrip("/")
        self._retries     = retries
        self._retry_delay = retry_delay
        self._page_delay  = page_delay

    def _prepare(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        body: Optional[Any],
        public: bool,
    ) -> tuple[str, dict[str, str], str]:
        """Return (url, headers, body) for one attempt; signs afresh every time."""
        if public:
            # unsigned: only the encoded path and body are needed
            ctx = encode_request(method, path, params, body, timestamp_ms=0)
            headers = {"Content-Type": "application/json"} if ctx.body_string else {}
            return self._base_url + ctx.request_path, headers, ctx.body_string

        if self._auth is None:
            raise SigningError(f"{method.upper()} {path} requires credentials; pass auth=KucoinAuth(...)")
        signed = self._auth.sign_request(method, path, params=params, body=body)
        return self._base_url + signed.path, signed.headers, signed.body

    def _retries_for(self, method: str) -> int:
        return self._retries if method.upper() in _RETRY_METHODS else 0


# ---------------------------------------------------------------------------
# Synchronous client
# ---------------------------------------------------------------------------

class KucoinRestClient(_RestBase):
    """
    Synchronous REST client for KuCoin.

    Parameters
    ----------
    auth        : KucoinAuth; may be None when only public endpoints are used
    timeout     : per-request HTTP timeout in seconds (default 3.0)
    base_url    : override for the REST host (defaults to the credentials' base_url)
    retries     : automatic retries for GET requests on transport / 5xx failures
    retry_delay : fixed delay in seconds between those retries
    page_delay  : delay in seconds between pages of paged endpoints
    session     : requests.Session to use (one is created otherwise)
    """

    def __init__(
        self,
        auth: Optional[KucoinAuth] = None,
        timeout: float = _DEFAULT_TIMEOUT_S,
        *,
        base_url: Optional[str] = None,
        retries: int = _DEFAULT_RETRIES,
        retry_delay: float = _DEFAULT_RETRY_DELAY_S,
        page_delay: float = 0.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(
            auth,
            timeout,
            base_url=base_url,
            retries=retries,
            retry_delay=retry_delay,
            page_delay=page_delay,
        )
        self._session = session or requests.Session()

    def __enter__(self) -> "KucoinRestClient":
        return self

    def __exit__(self, *_: Any) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    # ------------------------------------------------------------------
    # Internal request helpers
    # ------------------------------------------------------------------

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        body: Optional[Any],
        public: bool,
    ) -> Any:
        url, headers, body_str = self._prepare(method, path, params, body, public)
        logger.debug("%s %s  (%d byte body)", method.upper(), url, len(body_str))
        return execute(self._session, method, url, headers=headers, body=body_str, timeout=self._timeout)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
        public: bool = False,
    ) -> Any:
        """
        Send a request, retrying GETs on transport / 5xx failures.

        Parameters
        ----------
        method  : "GET", "POST" or "DELETE"
        path    : endpoint path starting with "/"
        params  : query parameters (order preserved, None values dropped)
        body    : JSON body for POST
        public  : skip signing (market-data endpoints)
        """
        return call_with_retries(
            lambda: self._send(method, path, params, body, public),
            retries=self._retries_for(method),
            delay=self._retry_delay,
        )

    def _paginate(
        self,
        path: str,
        params: Mapping[str, Any],
        *,
        page_size: int,
        max_pages: Optional[int],
        public: bool = False,
    ) -> list:
        """Fetch every page of an offset-paged endpoint; returns all items."""
        def fetch_page(cursor: PageCursor) -> PageResult:
            data = self._request("GET", path, params=_page_query(params, cursor), public=public)
            return PageResult.model_validate(data or {})

        paginator = Paginator(fetch_page, page_size=page_size, max_pages=max_pages, delay=self._page_delay)
        paginator.collect()
        return paginator.items

    # ------------------------------------------------------------------
    # Server time
    # ------------------------------------------------------------------

    def get_server_time(self) -> int:
        """KuCoin server time in Unix milliseconds (public)."""
        return int(self._request("GET", "/api/v1/timestamp", public=True))

    def sync_time(self) -> int:
        """Align the signing clock with KuCoin's; returns the offset in ms."""
        if self._auth is None:
            raise SigningError("sync_time() requires credentials; pass auth=KucoinAuth(...)")
        return self._auth.apply_server_time(self.get_server_time())

    # ------------------------------------------------------------------
    # Account & funding (private)
    # ------------------------------------------------------------------

    def get_account_summary_info(self) -> AccountSummary:
        return AccountSummary.model_validate(self._request("GET", "/api/v2/user-info") or {})

    def get_apikey_info(self) -> ApiKeyInfo:
        return ApiKeyInfo.model_validate(self._request("GET", "/api/v1/user/api-key"))

    def get_spot_account_type(self) -> bool:
        """True when the account trades through high-frequency (HF) accounts."""
        return bool(self._request("GET", "/api/v1/hf/accounts/opened"))

    def get_spot_accounts(self, currency: Optional[str] = None, type: Optional[str] = None) -> list[SpotAccount]:
        data = self._request("GET", "/api/v1/accounts", params={"currency": currency, "type": type})
        return _parse_list(SpotAccount, data)

    def get_spot_account_detail(self, account_id: str) -> AccountDetail:
        data = self._request("GET", f"/api/v1/accounts/{_segment(account_id)}")
        return AccountDetail.model_validate(data)

    def get_spot_ledger(
        self,
        currency: Optional[str] = None,
        direction: Optional[str] = None,
        biz_type: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[LedgerEntry]:
        """Account ledger entries, walked page by page (timestamps in ms)."""
        params = {
            "currency":  currency,
            "direction": direction,
            "bizType":   biz_type,
            "startAt":   start_at,
            "endAt":     end_at,
        }
        items = self._paginate("/api/v1/accounts/ledgers", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(LedgerEntry, items)

    # ------------------------------------------------------------------
    # Margin accounts (private)
    # ------------------------------------------------------------------

    def get_cross_margin_account(
        self,
        quote_currency: str = "USDT",
        query_type: str = "MARGIN",
    ) -> CrossMarginAccount:
        """Cross-margin balances valued in ``quote_currency``; query_type is MARGIN, MARGIN_V2 or ALL."""
        data = self._request(
            "GET",
            "/api/v3/margin/accounts",
            params={"quoteCurrency": quote_currency, "queryType": query_type},
        )
        return CrossMarginAccount.model_validate(data or {})

    def get_isolated_margin_account(
        self,
        symbol: Optional[str] = None,
        quote_currency: str = "USDT",
        query_type: str = "ISOLATED",
    ) -> IsolatedMarginAccount:
        """Isolated-margin positions, all symbols unless ``symbol`` is given."""
        params = {
            "symbol":        _optional_symbol(symbol),
            "quoteCurrency": quote_currency,
            "queryType":     query_type,
        }
        return IsolatedMarginAccount.model_validate(self._request("GET", "/api/v3/isolated/accounts", params=params) or {})

    # ------------------------------------------------------------------
    # Spot orders (private)
    # ------------------------------------------------------------------

    def add_order(self, order: AddOrderRequest) -> OrderResponse:
        """Place a spot order."""
        data = self._request("POST", "/api/v1/hf/orders", body=order.to_body())
        return OrderResponse.model_validate(data)

    def add_order_test(self, order: AddOrderRequest) -> OrderResponse:
        """Validate and sign an order against the test endpoint; nothing is placed."""
        data = self._request("POST", "/api/v1/hf/orders/test", body=order.to_body())
        return OrderResponse.model_validate(data)

    def add_order_batch(self, orders: list[AddOrderRequest]) -> list[BatchOrderResult]:
        """Place up to 20 orders in one call; results keep the submission order."""
        data = self._request("POST", "/api/v1/hf/orders/multi", body=_batch_body(orders))
        return _parse_list(BatchOrderResult, data)

    def cancel_order_by_order_id(self, order_id: str, symbol: str) -> CancelOrderResponse:
        data = self._request(
            "DELETE",
            f"/api/v1/hf/orders/{_segment(order_id)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return CancelOrderResponse.model_validate(data or {})

    def cancel_order_by_client_oid(self, client_oid: str, symbol: str) -> CancelOrderResponse:
        data = self._request(
            "DELETE",
            f"/api/v1/hf/orders/client-order/{_segment(client_oid)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return CancelOrderResponse.model_validate(data or {})

    def cancel_partial_order(self, order_id: str, symbol: str, cancel_size: str) -> CancelOrderResponse:
        data = self._request(
            "DELETE",
            f"/api/v1/hf/orders/cancel/{_segment(order_id)}",
            params={"symbol": _check_symbol(symbol), "cancelSize": cancel_size},
        )
        return CancelOrderResponse.model_validate(data or {})

    def cancel_all_orders_by_symbol(self, symbol: str) -> str:
        return str(self._request("DELETE", "/api/v1/hf/orders", params={"symbol": _check_symbol(symbol)}))

    def cancel_all_orders(self) -> CancelAllResponse:
        return CancelAllResponse.model_validate(self._request("DELETE", "/api/v1/hf/orders/cancelAll") or {})

    def get_order_by_order_id(self, order_id: str, symbol: str) -> Order:
        data = self._request(
            "GET",
            f"/api/v1/hf/orders/{_segment(order_id)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return Order.model_validate(data)

    def get_order_by_client_oid(self, client_oid: str, symbol: str) -> Order:
        data = self._request(
            "GET",
            f"/api/v1/hf/orders/client-order/{_segment(client_oid)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return Order.model_validate(data)

    def get_open_orders(self, symbol: str) -> list[Order]:
        data = self._request("GET", "/api/v1/hf/orders/active", params={"symbol": _check_symbol(symbol)})
        return _parse_list(Order, data)

    def get_symbols_with_open_orders(self) -> list[str]:
        return _parse_open_symbols(self._request("GET", "/api/v1/hf/orders/active/symbols"))

    def get_closed_orders(
        self,
        symbol: str,
        side: Optional[str] = None,
        type: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        limit: int = 20,
        last_id: Optional[int] = None,
    ) -> OrdersPage:
        """One cursor page of closed orders; pass ``page.last_id`` back to continue."""
        params = {
            "symbol":  _check_symbol(symbol),
            "side":    side,
            "type":    type,
            "startAt": start_at,
            "endAt":   end_at,
            "lastId":  last_id,
            "limit":   _check_limit(limit),
        }
        return OrdersPage.model_validate(self._request("GET", "/api/v1/hf/orders/done", params=params) or {})

    def get_trade_history(
        self,
        symbol: str,
        order_id: Optional[str] = None,
        side: Optional[str] = None,
        type: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        limit: int = 20,
        last_id: Optional[int] = None,
    ) -> FillsPage:
        params = {
            "symbol":  _check_symbol(symbol),
            "orderId": order_id,
            "side":    side,
            "type":    type,
            "startAt": start_at,
            "endAt":   end_at,
            "lastId":  last_id,
            "limit":   _check_limit(limit),
        }
        return FillsPage.model_validate(self._request("GET", "/api/v1/hf/fills", params=params) or {})

    # ------------------------------------------------------------------
    # Stop orders (private)
    # ------------------------------------------------------------------

    def add_stop_order(self, order: AddStopOrderRequest) -> OrderResponse:
        data = self._request("POST", "/api/v1/stop-order", body=order.to_body())
        return OrderResponse.model_validate(data)

    def cancel_stop_order_by_order_id(self, order_id: str) -> CancelledOrders:
        data = self._request("DELETE", f"/api/v1/stop-order/{_segment(order_id)}")
        return CancelledOrders.model_validate(data or {})

    def cancel_stop_order_by_client_oid(self, client_oid: str, symbol: Optional[str] = None) -> CancelledOrders:
        data = self._request(
            "DELETE",
            "/api/v1/stop-order/cancelOrderByClientOid",
            params={"clientOid": client_oid, "symbol": _optional_symbol(symbol)},
        )
        return CancelledOrders.model_validate(data or {})

    def cancel_stop_orders(
        self,
        symbol: Optional[str] = None,
        trade_type: Optional[TradeType] = None,
        order_ids: Optional[list[str]] = None,
    ) -> CancelledOrders:
        """Cancel stop orders in bulk; with no filter every stop order goes."""
        params = {
            "symbol":    _optional_symbol(symbol),
            "tradeType": trade_type,
            "orderIds":  _join_ids(order_ids),
        }
        return CancelledOrders.model_validate(self._request("DELETE", "/api/v1/stop-order/cancel", params=params) or {})

    def get_stop_order_by_order_id(self, order_id: str) -> StopOrder:
        return StopOrder.model_validate(self._request("GET", f"/api/v1/stop-order/{_segment(order_id)}"))

    def get_stop_order_by_client_oid(self, client_oid: str, symbol: Optional[str] = None) -> list[StopOrder]:
        data = self._request(
            "GET",
            "/api/v1/stop-order/queryOrderByClientOid",
            params={"clientOid": client_oid, "symbol": _optional_symbol(symbol)},
        )
        return _parse_list(StopOrder, data)

    def get_stop_order_list(
        self,
        symbol: Optional[str] = None,
        side: Optional[str] = None,
        type: Optional[str] = None,
        trade_type: Optional[TradeType] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        order_ids: Optional[list[str]] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[StopOrder]:
        """Untriggered stop orders, walked page by page (timestamps in ms)."""
        params = {
            "symbol":    _optional_symbol(symbol),
            "side":      side,
            "type":      type,
            "tradeType": trade_type,
            "startAt":   start_at,
            "endAt":     end_at,
            "orderIds":  _join_ids(order_ids),
        }
        items = self._paginate("/api/v1/stop-order", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(StopOrder, items)

    # ------------------------------------------------------------------
    # OCO orders (private)
    # ------------------------------------------------------------------

    def add_oco_order(self, order: AddOcoOrderRequest) -> OrderResponse:
        data = self._request("POST", "/api/v3/oco/order", body=order.to_body())
        return OrderResponse.model_validate(data)

    def cancel_oco_order_by_order_id(self, order_id: str) -> CancelledOrders:
        data = self._request("DELETE", f"/api/v3/oco/order/{_segment(order_id)}")
        return CancelledOrders.model_validate(data or {})

    def cancel_oco_order_by_client_oid(self, client_oid: str) -> CancelledOrders:
        data = self._request("DELETE", f"/api/v3/oco/client-order/{_segment(client_oid)}")
        return CancelledOrders.model_validate(data or {})

    def cancel_oco_orders(self, order_ids: Optional[list[str]] = None, symbol: Optional[str] = None) -> CancelledOrders:
        params = {"orderIds": _join_ids(order_ids), "symbol": _optional_symbol(symbol)}
        return CancelledOrders.model_validate(self._request("DELETE", "/api/v3/oco/orders", params=params) or {})

    def get_oco_order_by_order_id(self, order_id: str) -> OcoOrder:
        return OcoOrder.model_validate(self._request("GET", f"/api/v3/oco/order/{_segment(order_id)}"))

    def get_oco_order_by_client_oid(self, client_oid: str) -> OcoOrder:
        return OcoOrder.model_validate(self._request("GET", f"/api/v3/oco/client-order/{_segment(client_oid)}"))

    def get_oco_order_detail(self, order_id: str) -> OcoOrderDetail:
        """The OCO pair together with its two legs."""
        return OcoOrderDetail.model_validate(self._request("GET", f"/api/v3/oco/order/details/{_segment(order_id)}"))

    def get_oco_order_list(
        self,
        symbol: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        order_ids: Optional[list[str]] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[OcoOrder]:
        params = {
            "symbol":   _optional_symbol(symbol),
            "startAt":  start_at,
            "endAt":    end_at,
            "orderIds": _join_ids(order_ids),
        }
        items = self._paginate("/api/v3/oco/orders", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(OcoOrder, items)

    # ------------------------------------------------------------------
    # Sub-accounts (private)
    # ------------------------------------------------------------------

    def add_subaccount(
        self,
        password: str,
        sub_name: str,
        access: str,
        remarks: Optional[str] = None,
    ) -> AddSubAccountResponse:
        body = {"password": password, "subName": sub_name, "access": access}
        if remarks is not None:
            body["remarks"] = remarks
        return AddSubAccountResponse.model_validate(self._request("POST", "/api/v2/sub/user/created", body=body))

    def get_subaccount_list(self, *, page_size: int = 100, max_pages: Optional[int] = None) -> list[SubAccount]:
        items = self._paginate("/api/v2/sub/user", {}, page_size=page_size, max_pages=max_pages)
        return _parse_list(SubAccount, items)

    def get_subaccount_balance(self, sub_user_id: str, include_base_amount: bool = False) -> SubAccountBalance:
        data = self._request(
            "GET",
            f"/api/v1/sub-accounts/{_segment(sub_user_id)}",
            params={"includeBaseAmount": include_base_amount},
        )
        return SubAccountBalance.model_validate(data)

    # ------------------------------------------------------------------
    # Deposits (private)
    # ------------------------------------------------------------------

    def add_deposit_address(
        self,
        currency: str,
        chain: Optional[str] = None,
        to: Optional[str] = None,
        amount: Optional[str] = None,
    ) -> DepositAddress:
        body = {k: v for k, v in {"currency": currency, "chain": chain, "to": to, "amount": amount}.items() if v is not None}
        return DepositAddress.model_validate(self._request("POST", "/api/v3/deposit-address/create", body=body))

    def get_deposit_addresses(
        self,
        currency: str,
        chain: Optional[str] = None,
        amount: Optional[str] = None,
    ) -> list[DepositAddress]:
        data = self._request(
            "GET",
            "/api/v3/deposit-addresses",
            params={"currency": currency, "amount": amount, "chain": chain},
        )
        return _parse_list(DepositAddress, data)

    def get_deposit_history(
        self,
        currency: str,
        status: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[Deposit]:
        params = {"currency": currency, "status": status, "startAt": start_at, "endAt": end_at}
        items = self._paginate("/api/v1/deposits", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(Deposit, items)

    # ------------------------------------------------------------------
    # Market data (public)
    # ------------------------------------------------------------------

    def get_ticker(self, symbol: str) -> Optional[Ticker]:
        data = self._request(
            "GET", "/api/v1/market/orderbook/level1", params={"symbol": _check_symbol(symbol)}, public=True,
        )
        return Ticker.model_validate(data) if data else None

    def get_all_tickers(self) -> list[TickerSnapshot]:
        return _parse_all_tickers(self._request("GET", "/api/v1/market/allTickers", public=True))

    def get_symbols(self, market: Optional[str] = None) -> list[SymbolInfo]:
        data = self._request("GET", "/api/v2/symbols", params={"market": market}, public=True)
        return _parse_list(SymbolInfo, data)

    def get_klines(
        self,
        symbol: str,
        interval: KlineInterval = KlineInterval.HOUR_1,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
    ) -> list[Kline]:
        """Candles, newest first; ``start_at`` / ``end_at`` in Unix seconds."""
        params = {
            "type":    KlineInterval(interval),
            "symbol":  _check_symbol(symbol),
            "startAt": start_at,
            "endAt":   end_at,
        }
        return _parse_klines(self._request("GET", "/api/v1/market/candles", params=params, public=True))

    def get_currency(self, currency: str, chain: Optional[str] = None) -> Currency:
        """Precision and per-chain deposit / withdrawal limits of one currency."""
        data = self._request("GET", f"/api/v3/currencies/{_segment(currency)}", params={"chain": chain}, public=True)
        return Currency.model_validate(data)

    def get_all_currencies(self) -> list[Currency]:
        return _parse_list(Currency, self._request("GET", "/api/v3/currencies", public=True))

    def get_announcements(
        self,
        ann_type: str = "latest-announcements",
        lang: str = "en_US",
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[Announcement]:
        """Exchange announcements, newest first (times in ms)."""
        params = {"annType": ann_type, "lang": lang, "startTime": start_time, "endTime": end_time}
        items = self._paginate(
            "/api/v3/announcements", params, page_size=page_size, max_pages=max_pages, public=True,
        )
        return _parse_list(Announcement, items)


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------

class AsyncKucoinRestClient(_RestBase):
    """
    Async REST client for KuCoin (aiohttp-based).

    Same endpoints and policies as KucoinRestClient.  Signing stays
    synchronous; only the HTTP call and the delays are awaited.

    Usage
    -----
        async with AsyncKucoinRestClient(auth=auth) as client:
            ledger = await client.get_spot_ledger(currency="USDT", max_pages=3)
    """

    def __init__(
        self,
        auth: Optional[KucoinAuth] = None,
        timeout: float = _DEFAULT_TIMEOUT_S,
        *,
        base_url: Optional[str] = None,
        retries: int = _DEFAULT_RETRIES,
        retry_delay: float = _DEFAULT_RETRY_DELAY_S,
        page_delay: float = 0.0,
        session: Any = None,
    ) -> None:
        super().__init__(
            auth,
            timeout,
            base_url=base_url,
            retries=retries,
            retry_delay=retry_delay,
            page_delay=page_delay,
        )
        self._session: Any = session   # aiohttp.ClientSession, created on first use

    async def __aenter__(self) -> "AsyncKucoinRestClient":
        return self

    async def __aexit__(self, *_: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    # ------------------------------------------------------------------
    # Internal async request helpers
    # ------------------------------------------------------------------

    def _get_session(self) -> Any:
        import aiohttp

        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def _send(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]],
        body: Optional[Any],
        public: bool,
    ) -> Any:
        url, headers, body_str = self._prepare(method, path, params, body, public)
        logger.debug("%s %s  (%d byte body)", method.upper(), url, len(body_str))
        return await async_execute(
            self._get_session(), method, url, headers=headers, body=body_str, timeout=self._timeout,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
        public: bool = False,
    ) -> Any:
        return await async_call_with_retries(
            lambda: self._send(method, path, params, body, public),
            retries=self._retries_for(method),
            delay=self._retry_delay,
        )

    async def _paginate(
        self,
        path: str,
        params: Mapping[str, Any],
        *,
        page_size: int,
        max_pages: Optional[int],
        public: bool = False,
    ) -> list:
        async def fetch_page(cursor: PageCursor) -> PageResult:
            data = await self._request("GET", path, params=_page_query(params, cursor), public=public)
            return PageResult.model_validate(data or {})

        paginator = AsyncPaginator(fetch_page, page_size=page_size, max_pages=max_pages, delay=self._page_delay)
        await paginator.collect()
        return paginator.items

    # ------------------------------------------------------------------
    # Server time
    # ------------------------------------------------------------------

    async def get_server_time(self) -> int:
        return int(await self._request("GET", "/api/v1/timestamp", public=True))

    async def sync_time(self) -> int:
        if self._auth is None:
            raise SigningError("sync_time() requires credentials; pass auth=KucoinAuth(...)")
        return self._auth.apply_server_time(await self.get_server_time())

    # ------------------------------------------------------------------
    # Account & funding
    # ------------------------------------------------------------------

    async def get_account_summary_info(self) -> AccountSummary:
        return AccountSummary.model_validate(await self._request("GET", "/api/v2/user-info") or {})

    async def get_apikey_info(self) -> ApiKeyInfo:
        return ApiKeyInfo.model_validate(await self._request("GET", "/api/v1/user/api-key"))

    async def get_spot_account_type(self) -> bool:
        return bool(await self._request("GET", "/api/v1/hf/accounts/opened"))

    async def get_spot_accounts(self, currency: Optional[str] = None, type: Optional[str] = None) -> list[SpotAccount]:
        data = await self._request("GET", "/api/v1/accounts", params={"currency": currency, "type": type})
        return _parse_list(SpotAccount, data)

    async def get_spot_account_detail(self, account_id: str) -> AccountDetail:
        data = await self._request("GET", f"/api/v1/accounts/{_segment(account_id)}")
        return AccountDetail.model_validate(data)

    async def get_spot_ledger(
        self,
        currency: Optional[str] = None,
        direction: Optional[str] = None,
        biz_type: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[LedgerEntry]:
        params = {
            "currency":  currency,
            "direction": direction,
            "bizType":   biz_type,
            "startAt":   start_at,
            "endAt":     end_at,
        }
        items = await self._paginate("/api/v1/accounts/ledgers", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(LedgerEntry, items)

    # ------------------------------------------------------------------
    # Margin accounts
    # ------------------------------------------------------------------

    async def get_cross_margin_account(
        self,
        quote_currency: str = "USDT",
        query_type: str = "MARGIN",
    ) -> CrossMarginAccount:
        data = await self._request(
            "GET",
            "/api/v3/margin/accounts",
            params={"quoteCurrency": quote_currency, "queryType": query_type},
        )
        return CrossMarginAccount.model_validate(data or {})

    async def get_isolated_margin_account(
        self,
        symbol: Optional[str] = None,
        quote_currency: str = "USDT",
        query_type: str = "ISOLATED",
    ) -> IsolatedMarginAccount:
        params = {
            "symbol":        _optional_symbol(symbol),
            "quoteCurrency": quote_currency,
            "queryType":     query_type,
        }
        return IsolatedMarginAccount.model_validate(await self._request("GET", "/api/v3/isolated/accounts", params=params) or {})

    # ------------------------------------------------------------------
    # Spot orders
    # ------------------------------------------------------------------

    async def add_order(self, order: AddOrderRequest) -> OrderResponse:
        data = await self._request("POST", "/api/v1/hf/orders", body=order.to_body())
        return OrderResponse.model_validate(data)

    async def add_order_test(self, order: AddOrderRequest) -> OrderResponse:
        data = await self._request("POST", "/api/v1/hf/orders/test", body=order.to_body())
        return OrderResponse.model_validate(data)

    async def add_order_batch(self, orders: list[AddOrderRequest]) -> list[BatchOrderResult]:
        data = await self._request("POST", "/api/v1/hf/orders/multi", body=_batch_body(orders))
        return _parse_list(BatchOrderResult, data)

    async def cancel_order_by_order_id(self, order_id: str, symbol: str) -> CancelOrderResponse:
        data = await self._request(
            "DELETE",
            f"/api/v1/hf/orders/{_segment(order_id)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return CancelOrderResponse.model_validate(data or {})

    async def cancel_order_by_client_oid(self, client_oid: str, symbol: str) -> CancelOrderResponse:
        data = await self._request(
            "DELETE",
            f"/api/v1/hf/orders/client-order/{_segment(client_oid)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return CancelOrderResponse.model_validate(data or {})

    async def cancel_partial_order(self, order_id: str, symbol: str, cancel_size: str) -> CancelOrderResponse:
        data = await self._request(
            "DELETE",
            f"/api/v1/hf/orders/cancel/{_segment(order_id)}",
            params={"symbol": _check_symbol(symbol), "cancelSize": cancel_size},
        )
        return CancelOrderResponse.model_validate(data or {})

    async def cancel_all_orders_by_symbol(self, symbol: str) -> str:
        return str(await self._request("DELETE", "/api/v1/hf/orders", params={"symbol": _check_symbol(symbol)}))

    async def cancel_all_orders(self) -> CancelAllResponse:
        return CancelAllResponse.model_validate(await self._request("DELETE", "/api/v1/hf/orders/cancelAll") or {})

    async def get_order_by_order_id(self, order_id: str, symbol: str) -> Order:
        data = await self._request(
            "GET",
            f"/api/v1/hf/orders/{_segment(order_id)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return Order.model_validate(data)

    async def get_order_by_client_oid(self, client_oid: str, symbol: str) -> Order:
        data = await self._request(
            "GET",
            f"/api/v1/hf/orders/client-order/{_segment(client_oid)}",
            params={"symbol": _check_symbol(symbol)},
        )
        return Order.model_validate(data)

    async def get_open_orders(self, symbol: str) -> list[Order]:
        data = await self._request("GET", "/api/v1/hf/orders/active", params={"symbol": _check_symbol(symbol)})
        return _parse_list(Order, data)

    async def get_symbols_with_open_orders(self) -> list[str]:
        return _parse_open_symbols(await self._request("GET", "/api/v1/hf/orders/active/symbols"))

    async def get_closed_orders(
        self,
        symbol: str,
        side: Optional[str] = None,
        type: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        limit: int = 20,
        last_id: Optional[int] = None,
    ) -> OrdersPage:
        params = {
            "symbol":  _check_symbol(symbol),
            "side":    side,
            "type":    type,
            "startAt": start_at,
            "endAt":   end_at,
            "lastId":  last_id,
            "limit":   _check_limit(limit),
        }
        return OrdersPage.model_validate(await self._request("GET", "/api/v1/hf/orders/done", params=params) or {})

    async def get_trade_history(
        self,
        symbol: str,
        order_id: Optional[str] = None,
        side: Optional[str] = None,
        type: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        limit: int = 20,
        last_id: Optional[int] = None,
    ) -> FillsPage:
        params = {
            "symbol":  _check_symbol(symbol),
            "orderId": order_id,
            "side":    side,
            "type":    type,
            "startAt": start_at,
            "endAt":   end_at,
            "lastId":  last_id,
            "limit":   _check_limit(limit),
        }
        return FillsPage.model_validate(await self._request("GET", "/api/v1/hf/fills", params=params) or {})

    # ------------------------------------------------------------------
    # Stop orders
    # ------------------------------------------------------------------

    async def add_stop_order(self, order: AddStopOrderRequest) -> OrderResponse:
        data = await self._request("POST", "/api/v1/stop-order", body=order.to_body())
        return OrderResponse.model_validate(data)

    async def cancel_stop_order_by_order_id(self, order_id: str) -> CancelledOrders:
        data = await self._request("DELETE", f"/api/v1/stop-order/{_segment(order_id)}")
        return CancelledOrders.model_validate(data or {})

    async def cancel_stop_order_by_client_oid(self, client_oid: str, symbol: Optional[str] = None) -> CancelledOrders:
        data = await self._request(
            "DELETE",
            "/api/v1/stop-order/cancelOrderByClientOid",
            params={"clientOid": client_oid, "symbol": _optional_symbol(symbol)},
        )
        return CancelledOrders.model_validate(data or {})

    async def cancel_stop_orders(
        self,
        symbol: Optional[str] = None,
        trade_type: Optional[TradeType] = None,
        order_ids: Optional[list[str]] = None,
    ) -> CancelledOrders:
        params = {
            "symbol":    _optional_symbol(symbol),
            "tradeType": trade_type,
            "orderIds":  _join_ids(order_ids),
        }
        return CancelledOrders.model_validate(await self._request("DELETE", "/api/v1/stop-order/cancel", params=params) or {})

    async def get_stop_order_by_order_id(self, order_id: str) -> StopOrder:
        return StopOrder.model_validate(await self._request("GET", f"/api/v1/stop-order/{_segment(order_id)}"))

    async def get_stop_order_by_client_oid(self, client_oid: str, symbol: Optional[str] = None) -> list[StopOrder]:
        data = await self._request(
            "GET",
            "/api/v1/stop-order/queryOrderByClientOid",
            params={"clientOid": client_oid, "symbol": _optional_symbol(symbol)},
        )
        return _parse_list(StopOrder, data)

    async def get_stop_order_list(
        self,
        symbol: Optional[str] = None,
        side: Optional[str] = None,
        type: Optional[str] = None,
        trade_type: Optional[TradeType] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        order_ids: Optional[list[str]] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[StopOrder]:
        params = {
            "symbol":    _optional_symbol(symbol),
            "side":      side,
            "type":      type,
            "tradeType": trade_type,
            "startAt":   start_at,
            "endAt":     end_at,
            "orderIds":  _join_ids(order_ids),
        }
        items = await self._paginate("/api/v1/stop-order", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(StopOrder, items)

    # ------------------------------------------------------------------
    # OCO orders
    # ------------------------------------------------------------------

    async def add_oco_order(self, order: AddOcoOrderRequest) -> OrderResponse:
        data = await self._request("POST", "/api/v3/oco/order", body=order.to_body())
        return OrderResponse.model_validate(data)

    async def cancel_oco_order_by_order_id(self, order_id: str) -> CancelledOrders:
        data = await self._request("DELETE", f"/api/v3/oco/order/{_segment(order_id)}")
        return CancelledOrders.model_validate(data or {})

    async def cancel_oco_order_by_client_oid(self, client_oid: str) -> CancelledOrders:
        data = await self._request("DELETE", f"/api/v3/oco/client-order/{_segment(client_oid)}")
        return CancelledOrders.model_validate(data or {})

    async def cancel_oco_orders(self, order_ids: Optional[list[str]] = None, symbol: Optional[str] = None) -> CancelledOrders:
        params = {"orderIds": _join_ids(order_ids), "symbol": _optional_symbol(symbol)}
        return CancelledOrders.model_validate(await self._request("DELETE", "/api/v3/oco/orders", params=params) or {})

    async def get_oco_order_by_order_id(self, order_id: str) -> OcoOrder:
        return OcoOrder.model_validate(await self._request("GET", f"/api/v3/oco/order/{_segment(order_id)}"))

    async def get_oco_order_by_client_oid(self, client_oid: str) -> OcoOrder:
        return OcoOrder.model_validate(await self._request("GET", f"/api/v3/oco/client-order/{_segment(client_oid)}"))

    async def get_oco_order_detail(self, order_id: str) -> OcoOrderDetail:
        return OcoOrderDetail.model_validate(await self._request("GET", f"/api/v3/oco/order/details/{_segment(order_id)}"))

    async def get_oco_order_list(
        self,
        symbol: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        order_ids: Optional[list[str]] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[OcoOrder]:
        params = {
            "symbol":   _optional_symbol(symbol),
            "startAt":  start_at,
            "endAt":    end_at,
            "orderIds": _join_ids(order_ids),
        }
        items = await self._paginate("/api/v3/oco/orders", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(OcoOrder, items)

    # ------------------------------------------------------------------
    # Sub-accounts
    # ------------------------------------------------------------------

    async def add_subaccount(
        self,
        password: str,
        sub_name: str,
        access: str,
        remarks: Optional[str] = None,
    ) -> AddSubAccountResponse:
        body = {"password": password, "subName": sub_name, "access": access}
        if remarks is not None:
            body["remarks"] = remarks
        data = await self._request("POST", "/api/v2/sub/user/created", body=body)
        return AddSubAccountResponse.model_validate(data)

    async def get_subaccount_list(self, *, page_size: int = 100, max_pages: Optional[int] = None) -> list[SubAccount]:
        items = await self._paginate("/api/v2/sub/user", {}, page_size=page_size, max_pages=max_pages)
        return _parse_list(SubAccount, items)

    async def get_subaccount_balance(self, sub_user_id: str, include_base_amount: bool = False) -> SubAccountBalance:
        data = await self._request(
            "GET",
            f"/api/v1/sub-accounts/{_segment(sub_user_id)}",
            params={"includeBaseAmount": include_base_amount},
        )
        return SubAccountBalance.model_validate(data)

    # ------------------------------------------------------------------
    # Deposits
    # ------------------------------------------------------------------

    async def add_deposit_address(
        self,
        currency: str,
        chain: Optional[str] = None,
        to: Optional[str] = None,
        amount: Optional[str] = None,
    ) -> DepositAddress:
        body = {k: v for k, v in {"currency": currency, "chain": chain, "to": to, "amount": amount}.items() if v is not None}
        data = await self._request("POST", "/api/v3/deposit-address/create", body=body)
        return DepositAddress.model_validate(data)

    async def get_deposit_addresses(
        self,
        currency: str,
        chain: Optional[str] = None,
        amount: Optional[str] = None,
    ) -> list[DepositAddress]:
        data = await self._request(
            "GET",
            "/api/v3/deposit-addresses",
            params={"currency": currency, "amount": amount, "chain": chain},
        )
        return _parse_list(DepositAddress, data)

    async def get_deposit_history(
        self,
        currency: str,
        status: Optional[str] = None,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[Deposit]:
        params = {"currency": currency, "status": status, "startAt": start_at, "endAt": end_at}
        items = await self._paginate("/api/v1/deposits", params, page_size=page_size, max_pages=max_pages)
        return _parse_list(Deposit, items)

    # ------------------------------------------------------------------
    # Market data (public)
    # ------------------------------------------------------------------

    async def get_ticker(self, symbol: str) -> Optional[Ticker]:
        data = await self._request(
            "GET", "/api/v1/market/orderbook/level1", params={"symbol": _check_symbol(symbol)}, public=True,
        )
        return Ticker.model_validate(data) if data else None

    async def get_all_tickers(self) -> list[TickerSnapshot]:
        return _parse_all_tickers(await self._request("GET", "/api/v1/market/allTickers", public=True))

    async def get_symbols(self, market: Optional[str] = None) -> list[SymbolInfo]:
        data = await self._request("GET", "/api/v2/symbols", params={"market": market}, public=True)
        return _parse_list(SymbolInfo, data)

    async def get_klines(
        self,
        symbol: str,
        interval: KlineInterval = KlineInterval.HOUR_1,
        start_at: Optional[int] = None,
        end_at: Optional[int] = None,
    ) -> list[Kline]:
        params = {
            "type":    KlineInterval(interval),
            "symbol":  _check_symbol(symbol),
            "startAt": start_at,
            "endAt":   end_at,
        }
        return _parse_klines(await self._request("GET", "/api/v1/market/candles", params=params, public=True))

    async def get_currency(self, currency: str, chain: Optional[str] = None) -> Currency:
        data = await self._request("GET", f"/api/v3/currencies/{_segment(currency)}", params={"chain": chain}, public=True)
        return Currency.model_validate(data)

    async def get_all_currencies(self) -> list[Currency]:
        return _parse_list(Currency, await self._request("GET", "/api/v3/currencies", public=True))

    async def get_announcements(
        self,
        ann_type: str = "latest-announcements",
        lang: str = "en_US",
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        *,
        page_size: int = 50,
        max_pages: Optional[int] = None,
    ) -> list[Announcement]:
        params = {"annType": ann_type, "lang": lang, "startTime": start_time, "endTime": end_time}
        items = await self._paginate(
            "/api/v3/announcements", params, page_size=page_size, max_pages=max_pages, public=True,
        )
        return _parse_list(Announcement, items)
