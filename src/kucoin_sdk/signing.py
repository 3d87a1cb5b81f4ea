"""
signing.py – Request signing for KuCoin's authenticated REST API.

KuCoin verifies every private request by recomputing an HMAC over a
canonical "prehash" string and comparing it with the KC-API-SIGN header.

How it works
------------
1. Capture one timestamp (Unix milliseconds).
2. Build the canonical string::

       str(timestamp) + METHOD + path + query_string + body

   ``path`` starts with "/" and never includes the host.  The query
   string is built in the caller's parameter order and is part of the
   path component; GET and DELETE always sign an empty body.  POST/PUT
   bodies are serialised to compact JSON *before* signing and the same
   string is what goes on the wire.
3. KC-API-SIGN = base64(HMAC-SHA256(secret, canonical string)).
4. KC-API-PASSPHRASE is the raw passphrase for key version "1", or
   base64(HMAC-SHA256(secret, passphrase)) for key version "2".
5. The same timestamp is sent as KC-API-TIMESTAMP.  Sampling the clock
   twice would intermittently break signatures, so build_headers() reads
   it exactly once.

Clock
-----
A clock is any ``Callable[[], int]`` returning Unix milliseconds.  The
default reads the local clock; KucoinAuth (auth.py) adds a server-clock
offset on top of it.

References
----------
- KuCoin authentication : https://www.kucoin.com/docs/basic-info/connection-method/authentication/signing-a-message
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union
from urllib.parse import quote

from .errors import InvalidEndpoint, SigningError
from .types import Credentials, KeyVersion

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

# Callable with no args that returns the current time in Unix milliseconds
Clock = Callable[[], int]


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_BODY_METHODS    = frozenset({"POST", "PUT"})
_NO_BODY_METHODS = frozenset({"GET", "DELETE"})

# Characters left unescaped in query values besides the RFC 3986 unreserved set
_QUERY_SAFE = ","


def local_time_ms() -> int:
    """Default clock: local Unix time in milliseconds."""
    return int(time.time() * 1000)


# ---------------------------------------------------------------------------
# Canonical request encoding
# ---------------------------------------------------------------------------

def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        value = value.value
    return quote(str(value), safe=_QUERY_SAFE)


def build_query(params: Optional[Mapping[str, Any]]) -> str:
    """
    Serialise query parameters to ``?k=v&k2=v2``.

    Keys keep the caller's order (never sorted) and ``None`` values are
    dropped.  Returns "" when nothing is left.
    """
    if not params:
        return ""
    pairs = [
        f"{quote(str(key), safe='')}={_query_value(value)}"
        for key, value in params.items()
        if value is not None
    ]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)


def compact_json(body: Optional[Any]) -> str:
    """Compact JSON (no whitespace, insertion order) or "" for no body."""
    if body is None:
        return ""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class SigningContext:
    """
    Everything that goes into one request signature.

    Built fresh per request by encode_request(); never reused across
    retries or pages.
    """
    method:        str
    endpoint_path: str
    query_string:  str
    body_string:   str
    timestamp_ms:  int

    @property
    def request_path(self) -> str:
        """Path plus query string, exactly as sent on the wire."""
        return self.endpoint_path + self.query_string

    @property
    def canonical_string(self) -> str:
        return f"{self.timestamp_ms}{self.method}{self.request_path}{self.body_string}"


def encode_request(
    method: str,
    path: str,
    params: Optional[Mapping[str, Any]] = None,
    body: Optional[Any] = None,
    *,
    timestamp_ms: int,
) -> SigningContext:
    """
    Build the SigningContext for one request.

    Parameters
    ----------
    method       : "GET", "POST", "PUT" or "DELETE" (any case)
    path         : endpoint path starting with "/", without host
    params       : query parameters, serialised in the given order
    body         : JSON-serialisable body (POST/PUT only)
    timestamp_ms : the single timestamp bound into this signature

    Raises
    ------
    InvalidEndpoint : path does not start with "/" or method is unsupported
    """
    method_u = method.upper()
    if method_u not in _BODY_METHODS and method_u not in _NO_BODY_METHODS:
        raise InvalidEndpoint(f"Unsupported HTTP method: {method!r}")
    if not path.startswith("/"):
        raise InvalidEndpoint(f"Endpoint path must start with '/' and exclude the host, got {path!r}")

    if method_u in _NO_BODY_METHODS:
        if body is not None:
            logger.debug("Ignoring body for %s %s; only the query string is signed", method_u, path)
        body_string = ""
    else:
        body_string = compact_json(body)

    return SigningContext(
        method=method_u,
        endpoint_path=path,
        query_string=build_query(params),
        body_string=body_string,
        timestamp_ms=timestamp_ms,
    )


# ---------------------------------------------------------------------------
# HMAC signing
# ---------------------------------------------------------------------------

def sign(message: str, secret: str) -> str:
    """
    base64(HMAC-SHA256(secret, message)), standard alphabet with padding.

    Raises SigningError for an empty secret or message.
    """
    if not secret:
        raise SigningError("API secret must not be empty")
    if not message:
        raise SigningError("Nothing to sign: canonical string is empty")
    digest = hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def encrypt_passphrase(passphrase: str, secret: str, key_version: Union[KeyVersion, str]) -> str:
    """
    Value for the KC-API-PASSPHRASE header.

    Key version "1" sends the passphrase as-is; "2" sends its HMAC-SHA256
    signature keyed by the same secret as the request signature.
    """
    if not passphrase:
        raise SigningError("API passphrase must not be empty")
    try:
        version = KeyVersion(key_version)
    except ValueError as exc:
        raise SigningError(f"Unsupported API key version: {key_version!r}") from exc

    if version is KeyVersion.V1:
        return passphrase
    return sign(passphrase, secret)


# ---------------------------------------------------------------------------
# Header building
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SignedRequest:
    """
    Output of build_headers(): what to send and how it was signed.

    path         : endpoint path + query string (append to base_url)
    body         : exact body string that was signed ("" for none)
    headers      : KC-API-* headers (+ Content-Type when body is non-empty)
    timestamp_ms : the timestamp bound into both signature and header
    """
    method:       str
    path:         str
    body:         str
    timestamp_ms: int
    headers:      dict[str, str] = field(default_factory=dict)


def build_headers(
    method: str,
    path: str,
    credentials: Credentials,
    *,
    params: Optional[Mapping[str, Any]] = None,
    body: Optional[Any] = None,
    clock: Optional[Clock] = None,
    timestamp_ms: Optional[int] = None,
) -> SignedRequest:
    """
    Sign one request and return its authentication headers.

    The clock is read once (unless ``timestamp_ms`` is given) and that
    value is used for both the canonical string and KC-API-TIMESTAMP.

    Example
    -------
        signed = build_headers("GET", "/api/v1/accounts", creds, params={"currency": "USDT"})
        requests.get(creds.base_url + signed.path, headers=signed.headers)
    """
    if timestamp_ms is None:
        timestamp_ms = (clock or local_time_ms)()

    ctx       = encode_request(method, path, params, body, timestamp_ms=timestamp_ms)
    signature = sign(ctx.canonical_string, credentials.api_secret)
    passphrase = encrypt_passphrase(
        credentials.api_passphrase,
        credentials.api_secret,
        credentials.key_version,
    )

    headers = {
        "KC-API-KEY":         credentials.api_key,
        "KC-API-SIGN":        signature,
        "KC-API-TIMESTAMP":   str(ctx.timestamp_ms),
        "KC-API-PASSPHRASE":  passphrase,
        "KC-API-KEY-VERSION": credentials.key_version.value,
    }
    if ctx.body_string:
        headers["Content-Type"] = "application/json"

    return SignedRequest(
        method=ctx.method,
        path=ctx.request_path,
        body=ctx.body_string,
        timestamp_ms=ctx.timestamp_ms,
        headers=headers,
    )
