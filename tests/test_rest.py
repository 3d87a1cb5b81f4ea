"""
tests/test_rest.py – Unit tests for the REST executor and clients.

All tests run offline against fake sessions that record every request.
They verify:
  1. Envelope classification: non-2xx → HttpError, bad JSON → HttpError,
     missing code → ApiError(None), code != "200000" → ApiError, else data.
  2. Network failures become TransportError.
  3. The URL sent is base_url + exactly the signed path, and the signature
     verifies against the sent timestamp, method, path and body.
  4. GET is retried on 5xx / transport failures with a fresh signature;
     POST and DELETE are never retried; ApiError is never retried.
  5. Paged endpoints walk currentPage 1..N through the client, signing
     each page with its own timestamp; a malformed page raises
     PaginationError with the pages before it.
  6. Endpoint helpers parse responses into typed models, including the
     stop, OCO, margin, currency and announcement endpoints.
  7. The async client behaves the same over an aiohttp-style session.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from typing import Any, Optional
from urllib.parse import urlsplit

import pytest
import requests
from pydantic import ValidationError

from kucoin_sdk.auth import KucoinAuth
from kucoin_sdk.errors import ApiError, HttpError, PaginationError, SigningError, TransportError
from kucoin_sdk.rest import AsyncKucoinRestClient, KucoinRestClient, unwrap_envelope
from kucoin_sdk.types import (
    AddOcoOrderRequest,
    AddOrderRequest,
    AddStopOrderRequest,
    Credentials,
    KlineInterval,
    OrderType,
    Side,
    SubAccountBalance,
    TradeType,
)


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

SECRET = "test-secret"
TS     = 1_700_000_000_000


def _ok(data: Any) -> tuple[int, str]:
    return 200, json.dumps({"code": "200000", "data": data})


class FakeResponse:
    def __init__(self, status: int, text: str) -> None:
        self.status_code = status
        self.status      = status
        self.text_body   = text

    @property
    def text(self) -> str:
        return self.text_body


class FakeSession:
    """requests.Session stand-in; replies are (status, text) tuples or exceptions."""

    def __init__(self, *replies: Any) -> None:
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def request(self, method: str, url: str, *, headers: dict, data: Optional[bytes], timeout: float) -> FakeResponse:
        self.calls.append({"method": method, "url": url, "headers": headers, "data": data, "timeout": timeout})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return FakeResponse(*reply)

    def close(self) -> None:
        self.closed = True


class _FakeAsyncResponse:
    def __init__(self, status: int, text: str) -> None:
        self.status = status
        self._text  = text

    async def __aenter__(self) -> "_FakeAsyncResponse":
        return self

    async def __aexit__(self, *_: Any) -> None:
        return None

    async def text(self) -> str:
        return self._text


class FakeAsyncSession(FakeSession):
    """aiohttp.ClientSession stand-in."""

    def request(self, method: str, url: Any, *, headers: dict, data: Optional[bytes], timeout: Any) -> Any:  # type: ignore[override]
        self.calls.append({"method": method, "url": str(url), "headers": headers, "data": data, "timeout": timeout})
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return _FakeAsyncResponse(*reply)

    async def close(self) -> None:  # type: ignore[override]
        self.closed = True


def _auth() -> KucoinAuth:
    creds = Credentials(api_key="key-1", api_secret=SECRET, api_passphrase="pass123")
    return KucoinAuth(creds, clock=lambda: TS)


def _client(*replies: Any, retries: int = 2) -> tuple[KucoinRestClient, FakeSession]:
    session = FakeSession(*replies)
    client = KucoinRestClient(auth=_auth(), session=session, retries=retries, retry_delay=0.0)
    return client, session


def _assert_signature_matches(call: dict[str, Any]) -> None:
    parts   = urlsplit(call["url"])
    path    = parts.path + (f"?{parts.query}" if parts.query else "")
    body    = call["data"].decode() if call["data"] else ""
    message = call["headers"]["KC-API-TIMESTAMP"] + call["method"] + path + body
    digest  = hmac.new(SECRET.encode(), message.encode(), hashlib.sha256).digest()
    assert call["headers"]["KC-API-SIGN"] == base64.b64encode(digest).decode()


# ---------------------------------------------------------------------------
# Envelope classification
# ---------------------------------------------------------------------------

class TestUnwrapEnvelope:
    def test_success_returns_data(self) -> None:
        assert unwrap_envelope(200, '{"code":"200000","data":{"a":1}}') == {"a": 1}

    def test_numeric_success_code(self) -> None:
        assert unwrap_envelope(200, '{"code":200000,"data":[1]}') == [1]

    def test_success_without_data(self) -> None:
        assert unwrap_envelope(200, '{"code":"200000"}') is None

    def test_non_2xx_is_http_error(self) -> None:
        with pytest.raises(HttpError) as exc_info:
            unwrap_envelope(503, "x" * 1000, method="get", url="https://api.kucoin.com/api/v1/accounts")
        err = exc_info.value
        assert err.status_code == 503
        assert len(err.body) == 300
        assert err.method == "GET"
        assert "HTTP error [503]" in str(err)

    def test_4xx_with_json_body_still_http_error(self) -> None:
        with pytest.raises(HttpError):
            unwrap_envelope(401, '{"code":"400005","msg":"Invalid KC-API-PASSPHRASE"}')

    def test_invalid_json(self) -> None:
        with pytest.raises(HttpError) as exc_info:
            unwrap_envelope(200, "<html>oops</html>")
        assert "Invalid JSON in response" in str(exc_info.value)

    def test_missing_code(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            unwrap_envelope(200, '{"data":{}}')
        assert exc_info.value.code is None
        assert exc_info.value.message == "Invalid API response structure: missing 'code' field."

    def test_error_code(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            unwrap_envelope(200, '{"code":"400100","msg":"Parameter error"}')
        assert exc_info.value.code == "400100"
        assert exc_info.value.message == "Parameter error"

    def test_error_code_without_message(self) -> None:
        with pytest.raises(ApiError) as exc_info:
            unwrap_envelope(200, '{"code":"500000"}')
        assert exc_info.value.message == "No error message provided."


# ---------------------------------------------------------------------------
# Sync client – executor behaviour
# ---------------------------------------------------------------------------

class TestKucoinRestClientRequests:
    def test_signed_get_url_and_headers(self) -> None:
        client, session = _client(_ok([]))
        client.get_spot_accounts(currency="USDT", type="trade")

        call = session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == "https://api.kucoin.com/api/v1/accounts?currency=USDT&type=trade"
        assert call["data"] is None
        assert call["timeout"] == 3.0
        assert call["headers"]["KC-API-TIMESTAMP"] == str(TS)
        assert call["headers"]["KC-API-KEY-VERSION"] == "2"
        assert "Content-Type" not in call["headers"]
        _assert_signature_matches(call)

    def test_none_params_not_sent(self) -> None:
        client, session = _client(_ok([]))
        client.get_spot_accounts()
        assert session.calls[0]["url"] == "https://api.kucoin.com/api/v1/accounts"

    def test_post_sends_signed_body(self) -> None:
        client, session = _client(_ok({"orderId": "o-1", "clientOid": "c-1"}))
        order = AddOrderRequest(
            client_oid="c-1", symbol="BTC-USDT", type=OrderType.LIMIT, side=Side.BUY, price="100", size="0.5",
        )
        resp = client.add_order(order)

        assert resp.order_id == "o-1"
        call = session.calls[0]
        assert call["url"] == "https://api.kucoin.com/api/v1/hf/orders"
        assert call["headers"]["Content-Type"] == "application/json"
        body = json.loads(call["data"])
        assert body["clientOid"] == "c-1"
        assert body["symbol"] == "BTC-USDT"
        assert body["type"] == "limit"
        _assert_signature_matches(call)

    def test_transport_error(self) -> None:
        client, _ = _client(requests.ConnectionError("refused"), retries=0)
        with pytest.raises(TransportError) as exc_info:
            client.get_spot_accounts()
        assert isinstance(exc_info.value.cause, requests.ConnectionError)

    def test_timeout_is_transport_error(self) -> None:
        client, _ = _client(requests.Timeout("slow"), retries=0)
        with pytest.raises(TransportError, match="Timeout"):
            client.get_spot_accounts()

    def test_api_error_propagates(self) -> None:
        client, session = _client((200, '{"code":"400003","msg":"KC-API-KEY not exists"}'))
        with pytest.raises(ApiError) as exc_info:
            client.get_spot_accounts()
        assert exc_info.value.code == "400003"
        assert len(session.calls) == 1

    def test_get_retried_on_5xx_with_fresh_signature(self) -> None:
        ticks = iter([TS, TS + 10])
        creds = Credentials(api_key="key-1", api_secret=SECRET, api_passphrase="pass123")
        session = FakeSession((502, "bad gateway"), _ok([]))
        client = KucoinRestClient(
            auth=KucoinAuth(creds, clock=lambda: next(ticks)), session=session, retry_delay=0.0,
        )
        client.get_spot_accounts()

        assert len(session.calls) == 2
        stamps = [c["headers"]["KC-API-TIMESTAMP"] for c in session.calls]
        assert stamps == [str(TS), str(TS + 10)]
        for call in session.calls:
            _assert_signature_matches(call)

    def test_get_gives_up_after_retries(self) -> None:
        client, session = _client((500, "down"), retries=2)
        with pytest.raises(HttpError):
            client.get_spot_accounts()
        assert len(session.calls) == 3

    def test_get_4xx_not_retried(self) -> None:
        client, session = _client((429, "rate limited"), _ok([]))
        with pytest.raises(HttpError):
            client.get_spot_accounts()
        assert len(session.calls) == 1

    def test_post_never_retried(self) -> None:
        client, session = _client((503, "unavailable"), _ok({"orderId": "o-1"}))
        order = AddOrderRequest(symbol="BTC-USDT", type=OrderType.MARKET, side=Side.SELL, size="1")
        with pytest.raises(HttpError):
            client.add_order(order)
        assert len(session.calls) == 1

    def test_delete_never_retried(self) -> None:
        client, session = _client(requests.ConnectionError("reset"), _ok({}))
        with pytest.raises(TransportError):
            client.cancel_order_by_order_id("o-1", "BTC-USDT")
        assert len(session.calls) == 1

    def test_public_endpoint_not_signed(self) -> None:
        client, session = _client(_ok(1_700_000_000_123))
        assert client.get_server_time() == 1_700_000_000_123
        call = session.calls[0]
        assert call["url"] == "https://api.kucoin.com/api/v1/timestamp"
        assert "KC-API-SIGN" not in call["headers"]

    def test_public_only_client_without_auth(self) -> None:
        session = FakeSession(_ok([]))
        client = KucoinRestClient(session=session)
        assert client.get_all_tickers() == []
        with pytest.raises(SigningError):
            client.get_spot_accounts()

    def test_sync_time_sets_offset(self) -> None:
        client, session = _client(_ok(TS + 1_500))
        assert client.sync_time() == 1_500
        client._session = FakeSession(_ok([]))
        client.get_spot_accounts()
        assert client._session.calls[0]["headers"]["KC-API-TIMESTAMP"] == str(TS + 1_500)

    def test_context_manager_closes_session(self) -> None:
        client, session = _client(_ok([]))
        with client:
            pass
        assert session.closed


# ---------------------------------------------------------------------------
# Sync client – endpoints
# ---------------------------------------------------------------------------

class TestKucoinRestClientEndpoints:
    def test_paged_ledger_walks_all_pages(self) -> None:
        pages = [
            _ok({"currentPage": n, "pageSize": 1, "totalNum": 3, "totalPage": 3,
                 "items": [{"id": f"l{n}", "currency": "USDT", "amount": "1"}]})
            for n in (1, 2, 3)
        ]
        ticks = iter([TS, TS + 1, TS + 2])
        creds = Credentials(api_key="key-1", api_secret=SECRET, api_passphrase="pass123")
        session = FakeSession(*pages)
        client = KucoinRestClient(auth=KucoinAuth(creds, clock=lambda: next(ticks)), session=session)
        entries = client.get_spot_ledger(currency="USDT", page_size=1)

        assert [e.id for e in entries] == ["l1", "l2", "l3"]
        urls = [c["url"] for c in session.calls]
        assert urls[0].endswith("/api/v1/accounts/ledgers?currency=USDT&currentPage=1&pageSize=1")
        assert urls[2].endswith("currentPage=3&pageSize=1")

        headers = [c["headers"] for c in session.calls]
        assert [h["KC-API-TIMESTAMP"] for h in headers] == [str(TS), str(TS + 1), str(TS + 2)]
        assert len({h["KC-API-SIGN"] for h in headers}) == 3
        for call in session.calls:
            _assert_signature_matches(call)

    def test_malformed_page_raises_pagination_error(self) -> None:
        first = _ok({"currentPage": 1, "pageSize": 1, "totalNum": 3, "totalPage": 3,
                     "items": [{"id": "l1", "currency": "USDT", "amount": "1"}]})
        bad = _ok({"currentPage": 2, "pageSize": 1, "totalNum": 3, "totalPage": 3, "items": "x"})
        client, session = _client(first, bad)
        with pytest.raises(PaginationError) as exc_info:
            client.get_spot_ledger(currency="USDT", page_size=1)
        assert len(exc_info.value.pages) == 1
        assert isinstance(exc_info.value.cause, ValidationError)
        assert len(session.calls) == 2

    def test_paged_failure_raises_pagination_error(self) -> None:
        first = _ok({"currentPage": 1, "pageSize": 1, "totalNum": 3, "totalPage": 3,
                     "items": [{"currency": "USDT", "amount": "1", "status": "SUCCESS"}]})
        client, session = _client(first, (200, '{"code":"429000","msg":"Too Many Requests"}'))
        with pytest.raises(PaginationError) as exc_info:
            client.get_deposit_history("USDT", page_size=1)
        assert len(exc_info.value.pages) == 1
        assert isinstance(exc_info.value.cause, ApiError)
        assert len(session.calls) == 2

    def test_max_pages_limits_requests(self) -> None:
        page = _ok({"currentPage": 1, "pageSize": 1, "totalNum": 9, "totalPage": 9,
                    "items": [{"userId": "u1", "subName": "sub1"}]})
        client, session = _client(page)
        subs = client.get_subaccount_list(page_size=1, max_pages=1)
        assert len(subs) == 1
        assert len(session.calls) == 1

    def test_batch_orders(self) -> None:
        client, session = _client(_ok([{"success": True, "orderId": "o1"}, {"success": False, "failMsg": "x"}]))
        orders = [
            AddOrderRequest(symbol="BTC-USDT", type=OrderType.LIMIT, side=Side.BUY, price="1", size="1"),
            AddOrderRequest(symbol="ETH-USDT", type=OrderType.LIMIT, side=Side.BUY, price="1", size="1"),
        ]
        results = client.add_order_batch(orders)
        assert results[0].order_id == "o1"
        assert results[1].success is False
        assert len(json.loads(session.calls[0]["data"])["orderList"]) == 2

    def test_batch_size_limits(self) -> None:
        client, session = _client(_ok([]))
        with pytest.raises(ValueError):
            client.add_order_batch([])
        order = AddOrderRequest(symbol="BTC-USDT", type=OrderType.LIMIT, side=Side.BUY, price="1", size="1")
        with pytest.raises(ValueError):
            client.add_order_batch([order] * 21)
        assert session.calls == []

    def test_cancel_by_client_oid_path(self) -> None:
        client, session = _client(_ok({"clientOid": "my-oid"}))
        resp = client.cancel_order_by_client_oid("my-oid", "BTC-USDT")
        assert resp.client_oid == "my-oid"
        assert session.calls[0]["method"] == "DELETE"
        assert session.calls[0]["url"].endswith("/api/v1/hf/orders/client-order/my-oid?symbol=BTC-USDT")
        _assert_signature_matches(session.calls[0])

    def test_invalid_symbol_rejected_locally(self) -> None:
        client, session = _client(_ok([]))
        with pytest.raises(ValueError):
            client.get_open_orders("btcusdt")
        assert session.calls == []

    def test_closed_orders_limit_checked(self) -> None:
        client, _ = _client(_ok({}))
        with pytest.raises(ValueError):
            client.get_closed_orders("BTC-USDT", limit=101)

    def test_closed_orders_cursor(self) -> None:
        client, session = _client(_ok({"lastId": 99, "items": [{"id": "o1", "symbol": "BTC-USDT"}]}))
        page = client.get_closed_orders("BTC-USDT", last_id=10)
        assert page.last_id == 99
        assert page.items[0].id == "o1"
        assert "lastId=10&limit=20" in session.calls[0]["url"]

    def test_subaccount_balance_groups(self) -> None:
        asset = {"currency": "USDT", "balance": "1", "available": "1", "holds": "0"}
        client, session = _client(_ok({
            "subUserId": "u1", "subName": "s1",
            "mainAccounts": [asset], "tradeAccounts": [], "marginAccounts": [], "tradeHFAccounts": [asset],
        }))
        balance = client.get_subaccount_balance("u1")
        assert isinstance(balance, SubAccountBalance)
        assert balance.main_accounts[0].currency == "USDT"
        assert len(balance.trade_hf_accounts) == 1
        assert session.calls[0]["url"].endswith("/api/v1/sub-accounts/u1?includeBaseAmount=false")

    def test_klines_parsed(self) -> None:
        row = ["1700000000", "1", "2", "3", "0.5", "10", "20"]
        client, session = _client(_ok([row]))
        klines = client.get_klines("BTC-USDT", KlineInterval.MIN_1, start_at=1, end_at=2)
        assert klines[0].start_time == 1_700_000_000
        assert klines[0].close == "2"
        assert session.calls[0]["url"].endswith("/api/v1/market/candles?type=1min&symbol=BTC-USDT&startAt=1&endAt=2")

    def test_symbols_with_open_orders(self) -> None:
        client, _ = _client(_ok({"symbols": ["BTC-USDT", "ETH-USDT"]}))
        assert client.get_symbols_with_open_orders() == ["BTC-USDT", "ETH-USDT"]

    def test_ticker_missing_returns_none(self) -> None:
        client, _ = _client(_ok(None))
        assert client.get_ticker("BTC-USDT") is None

    def test_spot_account_type(self) -> None:
        client, _ = _client(_ok(True))
        assert client.get_spot_account_type() is True


# ---------------------------------------------------------------------------
# Sync client – stop, OCO, margin and market metadata endpoints
# ---------------------------------------------------------------------------

def _paged(items: list[dict], current: int, total: int) -> tuple[int, str]:
    return _ok({"currentPage": current, "pageSize": 1, "totalNum": total, "totalPage": total, "items": items})


class TestStopAndOcoOrders:
    def test_add_stop_order(self) -> None:
        client, session = _client(_ok({"orderId": "s-1", "clientOid": "c-1"}))
        order = AddStopOrderRequest(
            client_oid="c-1", symbol="BTC-USDT", type=OrderType.LIMIT, side=Side.SELL,
            price="29000", size="0.01", stop_price="29500",
        )
        resp = client.add_stop_order(order)
        assert resp.order_id == "s-1"
        call = session.calls[0]
        assert call["method"] == "POST"
        assert call["url"] == "https://api.kucoin.com/api/v1/stop-order"
        assert json.loads(call["data"])["stopPrice"] == "29500"
        _assert_signature_matches(call)

    def test_cancel_stop_order_by_client_oid(self) -> None:
        client, session = _client(_ok({"cancelledOrderId": "s-1", "clientOid": "c-1"}))
        resp = client.cancel_stop_order_by_client_oid("c-1", symbol="BTC-USDT")
        assert resp.cancelled_order_id == "s-1"
        assert session.calls[0]["url"].endswith(
            "/api/v1/stop-order/cancelOrderByClientOid?clientOid=c-1&symbol=BTC-USDT"
        )

    def test_cancel_stop_orders_joins_ids(self) -> None:
        client, session = _client(_ok({"cancelledOrderIds": ["a", "b"]}))
        resp = client.cancel_stop_orders(symbol="BTC-USDT", order_ids=["a", "b"])
        assert resp.cancelled_order_ids == ["a", "b"]
        call = session.calls[0]
        assert call["method"] == "DELETE"
        assert call["url"].endswith("/api/v1/stop-order/cancel?symbol=BTC-USDT&orderIds=a,b")
        _assert_signature_matches(call)

    def test_stop_order_by_client_oid_is_a_list(self) -> None:
        client, _ = _client(_ok([{"id": "s-1", "symbol": "KCS-USDT", "stopPrice": "0.5"}]))
        orders = client.get_stop_order_by_client_oid("c-1")
        assert orders[0].stop_price == "0.5"

    def test_stop_order_list_walks_pages(self) -> None:
        client, session = _client(
            _paged([{"id": "s-1", "symbol": "BTC-USDT"}], 1, 2),
            _paged([{"id": "s-2", "symbol": "BTC-USDT"}], 2, 2),
        )
        orders = client.get_stop_order_list(symbol="BTC-USDT", trade_type=TradeType.SPOT, page_size=1)
        assert [o.id for o in orders] == ["s-1", "s-2"]
        assert session.calls[0]["url"].endswith(
            "/api/v1/stop-order?symbol=BTC-USDT&tradeType=TRADE&currentPage=1&pageSize=1"
        )
        assert "currentPage=2" in session.calls[1]["url"]

    def test_add_oco_order(self) -> None:
        client, session = _client(_ok({"orderId": "oco-1"}))
        order = AddOcoOrderRequest(
            symbol="BTC-USDT", side=Side.BUY, price="94000", size="0.1", stop_price="98000", limit_price="96000",
        )
        assert client.add_oco_order(order).order_id == "oco-1"
        call = session.calls[0]
        assert call["url"] == "https://api.kucoin.com/api/v3/oco/order"
        assert json.loads(call["data"])["limitPrice"] == "96000"
        _assert_signature_matches(call)

    def test_oco_detail_path(self) -> None:
        client, session = _client(_ok({"orderId": "oco-1", "symbol": "BTC-USDT",
                                       "orders": [{"id": "leg-1", "symbol": "BTC-USDT"}]}))
        detail = client.get_oco_order_detail("oco-1")
        assert detail.orders[0].id == "leg-1"
        assert session.calls[0]["url"].endswith("/api/v3/oco/order/details/oco-1")

    def test_cancel_oco_by_client_oid_path(self) -> None:
        client, session = _client(_ok({"cancelledOrderIds": ["leg-1", "leg-2"]}))
        resp = client.cancel_oco_order_by_client_oid("c-1")
        assert len(resp.cancelled_order_ids) == 2
        assert session.calls[0]["url"].endswith("/api/v3/oco/client-order/c-1")

    def test_cancel_oco_orders_without_filter(self) -> None:
        client, session = _client(_ok({"cancelledOrderIds": []}))
        client.cancel_oco_orders()
        assert session.calls[0]["url"] == "https://api.kucoin.com/api/v3/oco/orders"

    def test_oco_order_list_max_pages(self) -> None:
        client, session = _client(_paged([{"orderId": "oco-1", "symbol": "BTC-USDT"}], 1, 5))
        orders = client.get_oco_order_list(symbol="BTC-USDT", page_size=1, max_pages=1)
        assert [o.order_id for o in orders] == ["oco-1"]
        assert len(session.calls) == 1

    def test_invalid_symbol_rejected_locally(self) -> None:
        client, session = _client(_ok({}))
        with pytest.raises(ValueError):
            client.cancel_stop_orders(symbol="btc")
        assert session.calls == []


class TestMarginAndMarketMetadata:
    def test_cross_margin_account(self) -> None:
        client, session = _client(_ok({
            "totalAssetOfQuoteCurrency": "40.8", "totalLiabilityOfQuoteCurrency": "0", "debtRatio": "0",
            "status": "EFFECTIVE",
            "accounts": [{"currency": "USDT", "total": "38.7", "available": "20.0", "hold": "0",
                          "liability": "0", "maxBorrowSize": "163", "borrowEnabled": True,
                          "transferInEnabled": True}],
        }))
        account = client.get_cross_margin_account()
        assert account.status == "EFFECTIVE"
        assert account.accounts[0].max_borrow_size == "163"
        call = session.calls[0]
        assert call["url"].endswith("/api/v3/margin/accounts?quoteCurrency=USDT&queryType=MARGIN")
        _assert_signature_matches(call)

    def test_isolated_margin_account_for_symbol(self) -> None:
        client, session = _client(_ok({"totalAssetOfQuoteCurrency": "0", "assets": []}))
        account = client.get_isolated_margin_account("BTC-USDT", query_type="ALL")
        assert account.assets == []
        assert session.calls[0]["url"].endswith(
            "/api/v3/isolated/accounts?symbol=BTC-USDT&quoteCurrency=USDT&queryType=ALL"
        )

    def test_currency_is_public(self) -> None:
        client, session = _client(_ok({"currency": "BTC", "precision": 8, "chains": [
            {"chainName": "BTC", "chainId": "btc", "withdrawalMinSize": "0.001", "isWithdrawEnabled": True,
             "isDepositEnabled": True, "confirms": 3, "needTag": False},
        ]}))
        currency = client.get_currency("BTC", chain="btc")
        assert currency.chains[0].withdrawal_min_size == "0.001"
        call = session.calls[0]
        assert call["url"] == "https://api.kucoin.com/api/v3/currencies/BTC?chain=btc"
        assert "KC-API-SIGN" not in call["headers"]

    def test_all_currencies(self) -> None:
        client, _ = _client(_ok([{"currency": "BTC"}, {"currency": "ETH", "chains": None}]))
        assert [c.currency for c in client.get_all_currencies()] == ["BTC", "ETH"]

    def test_announcements_walk_pages_unsigned(self) -> None:
        session = FakeSession(
            _paged([{"annId": 1, "annTitle": "a", "annType": ["latest-announcements"]}], 1, 2),
            _paged([{"annId": 2, "annTitle": "b", "annType": ["latest-announcements"]}], 2, 2),
        )
        client = KucoinRestClient(session=session)
        anns = client.get_announcements(page_size=1)
        assert [a.ann_id for a in anns] == [1, 2]
        assert session.calls[0]["url"].endswith(
            "/api/v3/announcements?annType=latest-announcements&lang=en_US&currentPage=1&pageSize=1"
        )
        assert all("KC-API-SIGN" not in c["headers"] for c in session.calls)


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------

def _async_client(*replies: Any, retries: int = 2) -> tuple[AsyncKucoinRestClient, FakeAsyncSession]:
    session = FakeAsyncSession(*replies)
    client = AsyncKucoinRestClient(auth=_auth(), session=session, retries=retries, retry_delay=0.0)
    return client, session


class TestAsyncKucoinRestClient:
    @pytest.mark.asyncio
    async def test_signed_get(self) -> None:
        client, session = _async_client(_ok([{"id": "a1", "currency": "USDT", "type": "trade",
                                              "balance": "1", "available": "1", "holds": "0"}]))
        accounts = await client.get_spot_accounts(currency="USDT")
        assert accounts[0].id == "a1"
        call = session.calls[0]
        assert call["url"] == "https://api.kucoin.com/api/v1/accounts?currency=USDT"
        _assert_signature_matches(call)

    @pytest.mark.asyncio
    async def test_get_retried_on_5xx(self) -> None:
        client, session = _async_client((500, "err"), _ok([]))
        assert await client.get_spot_accounts() == []
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_post_not_retried(self) -> None:
        client, session = _async_client((500, "err"), _ok({"orderId": "o1"}))
        order = AddOrderRequest(symbol="BTC-USDT", type=OrderType.MARKET, side=Side.BUY, funds="10")
        with pytest.raises(HttpError):
            await client.add_order_test(order)
        assert len(session.calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error(self) -> None:
        import aiohttp

        client, _ = _async_client(aiohttp.ClientConnectionError("refused"), retries=0)
        with pytest.raises(TransportError):
            await client.get_apikey_info()

    @pytest.mark.asyncio
    async def test_paged_deposits(self) -> None:
        pages = [
            _ok({"currentPage": n, "pageSize": 1, "totalNum": 2, "totalPage": 2,
                 "items": [{"currency": "USDT", "amount": str(n), "status": "SUCCESS"}]})
            for n in (1, 2)
        ]
        client, session = _async_client(*pages)
        deposits = await client.get_deposit_history("USDT", page_size=1)
        assert [d.amount for d in deposits] == ["1", "2"]
        assert len(session.calls) == 2

    @pytest.mark.asyncio
    async def test_sync_time(self) -> None:
        client, _ = _async_client(_ok(TS - 250))
        assert await client.sync_time() == -250
        assert client._auth.clock_offset_ms == -250

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        client, session = _async_client(_ok([]))
        async with client:
            pass
        assert session.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_stop_order_list(self) -> None:
        client, session = _async_client(
            _paged([{"id": "s-1", "symbol": "BTC-USDT"}], 1, 2),
            _paged([{"id": "s-2", "symbol": "BTC-USDT"}], 2, 2),
        )
        orders = await client.get_stop_order_list(page_size=1)
        assert [o.id for o in orders] == ["s-1", "s-2"]
        for call in session.calls:
            _assert_signature_matches(call)

    @pytest.mark.asyncio
    async def test_cancel_oco_order(self) -> None:
        client, session = _async_client(_ok({"cancelledOrderIds": ["leg-1", "leg-2"]}))
        resp = await client.cancel_oco_order_by_order_id("oco-1")
        assert resp.cancelled_order_ids == ["leg-1", "leg-2"]
        assert session.calls[0]["method"] == "DELETE"
        assert session.calls[0]["url"].endswith("/api/v3/oco/order/oco-1")

    @pytest.mark.asyncio
    async def test_isolated_margin_account(self) -> None:
        client, session = _async_client(_ok({"assets": [{"symbol": "BTC-USDT", "status": "EFFECTIVE"}]}))
        account = await client.get_isolated_margin_account()
        assert account.assets[0].symbol == "BTC-USDT"
        assert session.calls[0]["url"].endswith("/api/v3/isolated/accounts?quoteCurrency=USDT&queryType=ISOLATED")

    @pytest.mark.asyncio
    async def test_announcements_public(self) -> None:
        session = FakeAsyncSession(_paged([{"annId": 7, "annTitle": "t"}], 1, 1))
        client = AsyncKucoinRestClient(session=session)
        anns = await client.get_announcements(lang="fr_FR", page_size=1)
        assert anns[0].ann_id == 7
        assert "lang=fr_FR" in session.calls[0]["url"]
        assert "KC-API-SIGN" not in session.calls[0]["headers"]
