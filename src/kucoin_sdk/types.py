"""
types.py – Pydantic v2 models for the KuCoin REST API.

KuCoin's JSON uses camelCase keys (``clientOid``, ``dealSize`` …).  The
response models below declare snake_case attributes and map them with a
camelCase alias generator, so both spellings are accepted on input:

    order = Order.model_validate(raw)        # raw = {"clientOid": ...}
    order.client_oid

All monetary values (price, size, funds, fee) stay strings as KuCoin
sends them; convert with Decimal for arithmetic.  Unknown keys are kept
(``extra="allow"``) so new API fields never break parsing.

Request models (Credentials and the order requests) are validated on
construction and raise pydantic.ValidationError with field-level detail
rather than letting bad values reach the signer or the exchange.
"""

from __future__ import annotations

import re
import uuid
from decimal import Decimal, InvalidOperation
from enum import Enum, unique
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_BASE_URL = "https://api.kucoin.com"

# KuCoin's envelope "code" for a successful call
SUCCESS_CODE = "200000"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

@unique
class KeyVersion(str, Enum):
    """API key version; selects how KC-API-PASSPHRASE is transmitted."""
    V1 = "1"   # passphrase sent verbatim
    V2 = "2"   # passphrase HMAC-SHA256 signed with the secret


@unique
class Side(str, Enum):
    BUY  = "buy"
    SELL = "sell"


@unique
class OrderType(str, Enum):
    LIMIT  = "limit"
    MARKET = "market"


@unique
class TimeInForce(str, Enum):
    GOOD_TILL_CANCELLED = "GTC"
    GOOD_TILL_TIME      = "GTT"
    IMMEDIATE_OR_CANCEL = "IOC"
    FILL_OR_KILL        = "FOK"


@unique
class SelfTradePrevention(str, Enum):
    CANCEL_NEWEST = "CN"
    CANCEL_OLDEST = "CO"
    CANCEL_BOTH   = "CB"
    DECREASE      = "DC"


@unique
class TradeType(str, Enum):
    """Account a stop or OCO order trades from."""
    SPOT            = "TRADE"
    CROSS_MARGIN    = "MARGIN_TRADE"
    ISOLATED_MARGIN = "MARGIN_ISOLATED_TRADE"


@unique
class KlineInterval(str, Enum):
    MIN_1   = "1min"
    MIN_3   = "3min"
    MIN_5   = "5min"
    MIN_15  = "15min"
    MIN_30  = "30min"
    HOUR_1  = "1hour"
    HOUR_2  = "2hour"
    HOUR_4  = "4hour"
    HOUR_6  = "6hour"
    HOUR_8  = "8hour"
    HOUR_12 = "12hour"
    DAY_1   = "1day"
    WEEK_1  = "1week"
    MONTH_1 = "1month"


# ---------------------------------------------------------------------------
# Shared validator helpers
# ---------------------------------------------------------------------------

_SYMBOL_RE     = re.compile(r"^[A-Z0-9]+-[A-Z0-9]+$")
_CLIENT_OID_RE = re.compile(r"^[A-Za-z0-9_-]{1,40}$")


def _validate_decimal_string(v: str, field: str = "value") -> str:
    """Reject empty strings and non-parseable decimals."""
    if not v or not v.strip():
        raise ValueError(f"{field} must be a non-empty decimal string")
    try:
        Decimal(v)
    except InvalidOperation:
        raise ValueError(f"{field} '{v}' is not a valid decimal string")
    return v


def _validate_positive_decimal(v: str, field: str) -> str:
    v = _validate_decimal_string(v, field)
    if Decimal(v) <= 0:
        raise ValueError(f"{field} must be positive, got '{v}'")
    return v


def _validate_symbol(v: str) -> str:
    if not _SYMBOL_RE.match(v):
        raise ValueError(f"symbol '{v}' is not a valid trading pair (e.g. 'BTC-USDT')")
    return v


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------

class Credentials(BaseModel):
    """
    Immutable API credentials, validated once at construction.

    api_key        : KuCoin API key
    api_secret     : secret used as the HMAC key (hidden from repr)
    api_passphrase : passphrase chosen when the key was created (hidden from repr)
    key_version    : KeyVersion.V2 by default; V1 sends the passphrase in clear
    base_url       : REST host, without trailing slash
    """
    model_config = ConfigDict(frozen=True)

    api_key:        str
    api_secret:     str        = Field(repr=False)
    api_passphrase: str        = Field(repr=False)
    key_version:    KeyVersion = KeyVersion.V2
    base_url:       str        = DEFAULT_BASE_URL

    @field_validator("api_key", "api_secret", "api_passphrase")
    @classmethod
    def validate_non_empty(cls, v: str, info: ValidationInfo) -> str:
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} must be a non-empty string")
        return v

    @field_validator("key_version", mode="before")
    @classmethod
    def coerce_key_version(cls, v: Any) -> Any:
        # accept 2 / "2" / KeyVersion.V2 alike
        if isinstance(v, KeyVersion):
            return v
        return str(v)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("https://", "http://")):
            raise ValueError(f"base_url '{v}' must start with http:// or https://")
        return v.rstrip("/")


# ---------------------------------------------------------------------------
# Base response model
# ---------------------------------------------------------------------------

class KucoinModel(BaseModel):
    """Base for response models: camelCase aliases, unknown keys kept."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


class PageResult(KucoinModel):
    """One page of an offset-paged listing (``currentPage`` / ``totalPage``)."""
    current_page: Optional[int] = None
    page_size:    int           = 0
    total_num:    int           = 0
    total_page:   Optional[int] = None
    items:        list[Any]     = []


# ---------------------------------------------------------------------------
# Orders – request
# ---------------------------------------------------------------------------

class AddOrderRequest(BaseModel):
    """
    A spot order ready to be submitted.

    Limit orders need price and size.  Market orders need exactly one of
    size (base quantity) or funds (quote amount) and no price.
    client_oid defaults to a random uuid4 hex string.

    to_body() returns the JSON body KuCoin expects, keys in declaration
    order and unset optionals omitted.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    client_oid:    str                           = Field(default_factory=lambda: uuid.uuid4().hex)
    symbol:        str
    type:          OrderType
    side:          Side
    price:         Optional[str]                 = None
    size:          Optional[str]                 = None
    funds:         Optional[str]                 = None
    time_in_force: TimeInForce                   = TimeInForce.GOOD_TILL_CANCELLED
    cancel_after:  Optional[int]                 = None
    post_only:     bool                          = False
    hidden:        bool                          = False
    iceberg:       bool                          = False
    visible_size:  Optional[str]                 = None
    stp:           Optional[SelfTradePrevention] = None
    tags:          Optional[str]                 = None
    remark:        Optional[str]                 = None

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        return _validate_symbol(v)

    @field_validator("client_oid")
    @classmethod
    def validate_client_oid(cls, v: str) -> str:
        if not _CLIENT_OID_RE.match(v):
            raise ValueError(
                "client_oid must be at most 40 characters of letters, digits, '_' or '-'"
            )
        return v

    @field_validator("price", "size", "funds", "visible_size")
    @classmethod
    def validate_amounts(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None:
            return v
        return _validate_positive_decimal(v, info.field_name)

    @field_validator("tags", "remark")
    @classmethod
    def validate_short_ascii(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        if v is None:
            return v
        if len(v) > 20 or not v.isascii():
            raise ValueError(f"{info.field_name} must be ASCII and at most 20 characters")
        return v

    @field_validator("cancel_after")
    @classmethod
    def validate_cancel_after(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError(f"cancel_after must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def validate_order_type_fields(self) -> "AddOrderRequest":
        if self.type is OrderType.LIMIT:
            if self.price is None or self.size is None:
                raise ValueError("limit orders require both price and size")
            if self.funds is not None:
                raise ValueError("funds is not applicable to limit orders")
        else:
            if self.price is not None:
                raise ValueError("price is not applicable to market orders")
            if (self.size is None) == (self.funds is None):
                raise ValueError("market orders require exactly one of size or funds")
        return self

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class AddStopOrderRequest(AddOrderRequest):
    """
    An order held back until the last traded price crosses ``stop_price``.

    Same price / size / funds rules as AddOrderRequest.
    """
    stop_price: str
    trade_type: TradeType = TradeType.SPOT

    @field_validator("stop_price")
    @classmethod
    def validate_stop_price(cls, v: str) -> str:
        return _validate_positive_decimal(v, "stop_price")


class AddOcoOrderRequest(BaseModel):
    """
    One-cancels-the-other: a limit order at ``price`` paired with a stop
    that places a limit order at ``limit_price`` once ``stop_price`` trades.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    client_oid:  str           = Field(default_factory=lambda: uuid.uuid4().hex)
    symbol:      str
    side:        Side
    price:       str
    size:        str
    stop_price:  str
    limit_price: str
    remark:      Optional[str] = None
    trade_type:  TradeType     = TradeType.SPOT

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        return _validate_symbol(v)

    @field_validator("client_oid")
    @classmethod
    def validate_client_oid(cls, v: str) -> str:
        if not _CLIENT_OID_RE.match(v):
            raise ValueError(
                "client_oid must be at most 40 characters of letters, digits, '_' or '-'"
            )
        return v

    @field_validator("price", "size", "stop_price", "limit_price")
    @classmethod
    def validate_amounts(cls, v: str, info: ValidationInfo) -> str:
        return _validate_positive_decimal(v, info.field_name)

    @field_validator("remark")
    @classmethod
    def validate_remark(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and (len(v) > 20 or not v.isascii()):
            raise ValueError("remark must be ASCII and at most 20 characters")
        return v

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Orders – responses
# ---------------------------------------------------------------------------

class OrderResponse(KucoinModel):
    order_id:   str
    client_oid: Optional[str] = None


class BatchOrderResult(KucoinModel):
    success:    bool          = True
    order_id:   Optional[str] = None
    client_oid: Optional[str] = None
    fail_msg:   Optional[str] = None


class CancelOrderResponse(KucoinModel):
    order_id:    Optional[str] = None
    client_oid:  Optional[str] = None
    cancel_size: Optional[str] = None


class CancelAllResponse(KucoinModel):
    succeed_symbols: list[str]            = []
    failed_symbols:  list[dict[str, Any]] = []


class Order(KucoinModel):
    """A spot (HF) order as returned by the order query endpoints."""
    id:              str
    symbol:          str
    client_oid:      Optional[str]  = None
    op_type:         Optional[str]  = None
    type:            Optional[str]  = None
    side:            Optional[str]  = None
    price:           Optional[str]  = None
    size:            Optional[str]  = None
    funds:           Optional[str]  = None
    deal_size:       Optional[str]  = None
    deal_funds:      Optional[str]  = None
    fee:             Optional[str]  = None
    fee_currency:    Optional[str]  = None
    stp:             Optional[str]  = None
    time_in_force:   Optional[str]  = None
    post_only:       bool           = False
    hidden:          bool           = False
    iceberg:         bool           = False
    cancel_after:    Optional[int]  = None
    remark:          Optional[str]  = None
    tags:            Optional[str]  = None
    active:          bool           = False
    in_order_book:   bool           = False
    created_at:      Optional[int]  = None
    last_updated_at: Optional[int]  = None


class Fill(KucoinModel):
    """A single execution from the trade history endpoint."""
    id:           Union[int, str]
    order_id:     str
    symbol:       str
    trade_id:     Optional[Union[int, str]] = None
    side:         Optional[str]             = None
    liquidity:    Optional[str]             = None
    price:        Optional[str]             = None
    size:         Optional[str]             = None
    funds:        Optional[str]             = None
    fee:          Optional[str]             = None
    fee_rate:     Optional[str]             = None
    fee_currency: Optional[str]             = None
    type:         Optional[str]             = None
    created_at:   Optional[int]             = None


class OrdersPage(KucoinModel):
    """Cursor page (``lastId``) of closed orders."""
    last_id: Optional[int] = None
    items:   list[Order]   = []


class FillsPage(KucoinModel):
    """Cursor page (``lastId``) of fills."""
    last_id: Optional[int] = None
    items:   list[Fill]    = []


# ---------------------------------------------------------------------------
# Stop and OCO orders – responses
# ---------------------------------------------------------------------------

class CancelledOrders(KucoinModel):
    """Cancel result of the stop and OCO endpoints."""
    cancelled_order_ids: list[str]     = []
    cancelled_order_id:  Optional[str] = None
    client_oid:          Optional[str] = None


class StopOrder(KucoinModel):
    """A stop order not yet triggered (status ``NEW``)."""
    id:                str
    symbol:            str
    status:            Optional[str] = None
    type:              Optional[str] = None
    side:              Optional[str] = None
    price:             Optional[str] = None
    size:              Optional[str] = None
    funds:             Optional[str] = None
    stop:              Optional[str] = None
    stop_price:        Optional[str] = None
    stop_trigger_time: Optional[int] = None
    client_oid:        Optional[str] = None
    time_in_force:     Optional[str] = None
    post_only:         bool          = False
    hidden:            bool          = False
    iceberg:           bool          = False
    trade_type:        Optional[str] = None
    remark:            Optional[str] = None
    order_time:        Optional[int] = None
    created_at:        Optional[int] = None


class OcoOrder(KucoinModel):
    order_id:   str
    symbol:     str
    client_oid: Optional[str] = None
    order_time: Optional[int] = None
    status:     Optional[str] = None


class OcoLeg(KucoinModel):
    """One of the two orders inside an OCO pair."""
    id:         str
    symbol:     str
    side:       Optional[str] = None
    price:      Optional[str] = None
    stop_price: Optional[str] = None
    size:       Optional[str] = None
    status:     Optional[str] = None


class OcoOrderDetail(OcoOrder):
    orders: list[OcoLeg] = []


# ---------------------------------------------------------------------------
# Account & funding
# ---------------------------------------------------------------------------

class AccountSummary(KucoinModel):
    """Account level and sub-account quotas (``/api/v2/user-info``)."""
    level:                    int = 0
    sub_quantity:             int = 0
    spot_sub_quantity:        int = 0
    margin_sub_quantity:      int = 0
    futures_sub_quantity:     int = 0
    max_sub_quantity:         int = 0
    max_spot_sub_quantity:    int = 0
    max_margin_sub_quantity:  int = 0
    max_futures_sub_quantity: int = 0


class ApiKeyInfo(KucoinModel):
    api_key:      str
    uid:          Optional[int] = None
    sub_name:     Optional[str] = None
    remark:       Optional[str] = None
    api_version:  Optional[int] = None
    permission:   str           = ""
    ip_whitelist: Optional[str] = None
    is_master:    bool          = False
    created_at:   Optional[int] = None


class SpotAccount(KucoinModel):
    id:        str
    currency:  str
    type:      str
    balance:   str
    available: str
    holds:     str


class AccountDetail(KucoinModel):
    currency:  str
    balance:   str
    available: str
    holds:     str


class LedgerEntry(KucoinModel):
    id:           str
    currency:     str
    amount:       str
    fee:          str           = "0"
    balance:      Optional[str] = None
    account_type: Optional[str] = None
    biz_type:     Optional[str] = None
    direction:    Optional[str] = None
    created_at:   Optional[int] = None
    context:      Optional[str] = None


# ---------------------------------------------------------------------------
# Margin accounts
# ---------------------------------------------------------------------------

class MarginAsset(KucoinModel):
    """Balance and borrowing state of one currency in a margin account."""
    currency:            str
    total:               str           = "0"
    available:           str           = "0"
    hold:                str           = "0"
    liability:           str           = "0"
    max_borrow_size:     Optional[str] = None
    borrow_enabled:      bool          = False
    transfer_in_enabled: bool          = False


class CrossMarginAccount(KucoinModel):
    total_asset_of_quote_currency:     Optional[str]     = None
    total_liability_of_quote_currency: Optional[str]     = None
    debt_ratio:                        Optional[str]     = None
    status:                            Optional[str]     = None
    accounts:                          list[MarginAsset] = []


class IsolatedMarginPosition(KucoinModel):
    """One isolated-margin symbol with its base and quote legs."""
    symbol:      str
    status:      Optional[str]         = None
    debt_ratio:  Optional[str]         = None
    base_asset:  Optional[MarginAsset] = None
    quote_asset: Optional[MarginAsset] = None


class IsolatedMarginAccount(KucoinModel):
    total_asset_of_quote_currency:     Optional[str]                = None
    total_liability_of_quote_currency: Optional[str]                = None
    timestamp:                         Optional[int]                = None
    assets:                            list[IsolatedMarginPosition] = []


# ---------------------------------------------------------------------------
# Sub-accounts
# ---------------------------------------------------------------------------

class SubAccount(KucoinModel):
    user_id:    str
    sub_name:   str
    uid:        Optional[int] = None
    status:     Optional[int] = None
    type:       Optional[int] = None
    access:     Optional[str] = None
    created_at: Optional[int] = None
    remarks:    Optional[str] = None


class AddSubAccountResponse(KucoinModel):
    uid:      int
    sub_name: str
    remarks:  Optional[str] = None
    access:   Optional[str] = None


class SubAccountAsset(KucoinModel):
    currency:            str
    balance:             str
    available:           str
    holds:               str
    base_currency:       Optional[str] = None
    base_currency_price: Optional[str] = None
    base_amount:         Optional[str] = None


class SubAccountBalance(KucoinModel):
    """Per-account-type balances of one sub-account."""
    sub_user_id:       str
    sub_name:          str
    main_accounts:     list[SubAccountAsset] = []
    trade_accounts:    list[SubAccountAsset] = []
    margin_accounts:   list[SubAccountAsset] = []
    trade_hf_accounts: list[SubAccountAsset] = Field(default=[], alias="tradeHFAccounts")


# ---------------------------------------------------------------------------
# Deposits
# ---------------------------------------------------------------------------

class DepositAddress(KucoinModel):
    address:          str
    currency:         Optional[str] = None
    memo:             Optional[str] = None
    chain_id:         Optional[str] = None
    chain_name:       Optional[str] = None
    to:               Optional[str] = None
    expiration_date:  Optional[int] = None
    contract_address: Optional[str] = None


class Deposit(KucoinModel):
    currency:     str
    amount:       str
    status:       str
    chain:        Optional[str] = None
    address:      Optional[str] = None
    memo:         Optional[str] = None
    is_inner:     bool          = False
    fee:          Optional[str] = None
    wallet_tx_id: Optional[str] = None
    created_at:   Optional[int] = None
    updated_at:   Optional[int] = None
    remark:       Optional[str] = None


# ---------------------------------------------------------------------------
# Public market data (thin wrappers only)
# ---------------------------------------------------------------------------

class Ticker(KucoinModel):
    """Level-1 snapshot for one symbol."""
    time:          int
    price:         str
    sequence:      Optional[str] = None
    size:          Optional[str] = None
    best_bid:      Optional[str] = None
    best_bid_size: Optional[str] = None
    best_ask:      Optional[str] = None
    best_ask_size: Optional[str] = None


class TickerSnapshot(KucoinModel):
    """One entry of ``/api/v1/market/allTickers``."""
    symbol:       str
    symbol_name:  Optional[str] = None
    buy:          Optional[str] = None
    sell:         Optional[str] = None
    last:         Optional[str] = None
    change_rate:  Optional[str] = None
    change_price: Optional[str] = None
    high:         Optional[str] = None
    low:          Optional[str] = None
    vol:          Optional[str] = None
    vol_value:    Optional[str] = None


class SymbolInfo(KucoinModel):
    symbol:          str
    base_currency:   str
    quote_currency:  str
    name:            Optional[str] = None
    fee_currency:    Optional[str] = None
    market:          Optional[str] = None
    base_min_size:   Optional[str] = None
    quote_min_size:  Optional[str] = None
    base_max_size:   Optional[str] = None
    quote_max_size:  Optional[str] = None
    base_increment:  Optional[str] = None
    quote_increment: Optional[str] = None
    price_increment: Optional[str] = None
    enable_trading:  bool          = True


class CurrencyChain(KucoinModel):
    """Deposit / withdrawal parameters of a currency on one chain."""
    chain_name:          str
    chain_id:            Optional[str] = None
    withdrawal_min_size: Optional[str] = None
    deposit_min_size:    Optional[str] = None
    withdraw_fee_rate:   Optional[str] = None
    withdrawal_min_fee:  Optional[str] = None
    is_withdraw_enabled: bool          = False
    is_deposit_enabled:  bool          = False
    confirms:            Optional[int] = None
    pre_confirms:        Optional[int] = None
    contract_address:    Optional[str] = None
    withdraw_precision:  Optional[int] = None
    max_withdraw:        Optional[str] = None
    max_deposit:         Optional[str] = None
    need_tag:            bool          = False


class Currency(KucoinModel):
    currency:          str
    name:              Optional[str]       = None
    full_name:         Optional[str]       = None
    precision:         Optional[int]       = None
    confirms:          Optional[int]       = None
    contract_address:  Optional[str]       = None
    is_margin_enabled: bool                = False
    is_debit_enabled:  bool                = False
    chains:            list[CurrencyChain] = []

    @field_validator("chains", mode="before")
    @classmethod
    def null_chains_as_empty(cls, v: Any) -> Any:
        return v or []


class Announcement(KucoinModel):
    ann_id:    int
    ann_title: str
    ann_type:  list[str]     = []
    ann_desc:  Optional[str] = None
    c_time:    Optional[int] = None
    language:  Optional[str] = None
    ann_url:   Optional[str] = None


class Kline(BaseModel):
    """One candle; KuCoin sends ``[time, open, close, high, low, volume, turnover]``."""
    start_time: int
    open:       str
    close:      str
    high:       str
    low:        str
    volume:     str
    turnover:   str

    @classmethod
    def from_row(cls, row: list[str]) -> "Kline":
        if len(row) < 7:
            raise ValueError(f"kline row must have 7 fields, got {len(row)}")
        return cls(
            start_time=int(row[0]),
            open=row[1],
            close=row[2],
            high=row[3],
            low=row[4],
            volume=row[5],
            turnover=row[6],
        )
