"""
auth.py – Credentials loading and request authentication for KuCoin.

KuCoin authenticates each private request independently: there is no
login step or session cookie.  Every call carries five KC-API-* headers
computed from the credentials, the request itself and a millisecond
timestamp that must be within a few seconds of KuCoin's server clock.

KucoinAuth binds an immutable Credentials value to a clock.  The clock
starts as the local clock; call ``sync_time()`` on a REST client (or
``apply_server_time()`` directly) to correct for local drift.

Usage
-----
    from kucoin_sdk import KucoinAuth, credentials_from_env

    auth   = KucoinAuth(credentials_from_env())      # reads KC_API_* once
    signed = auth.sign_request("GET", "/api/v1/accounts", params={"currency": "USDT"})
    signed.headers["KC-API-SIGN"]
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .signing import Clock, SignedRequest, build_headers, local_time_ms
from .types import DEFAULT_BASE_URL, Credentials, KeyVersion

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Environment variables
# ---------------------------------------------------------------------------

ENV_API_KEY        = "KC_API_KEY"
ENV_API_SECRET     = "KC_API_SECRET"
ENV_API_PASSPHRASE = "KC_API_PASSPHRASE"
ENV_API_ENDPOINT   = "KC_API_ENDPOINT"
ENV_KEY_VERSION    = "KC_API_KEY_VERSION"


def credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """
    Build Credentials from KC_API_* environment variables.

    KC_API_KEY, KC_API_SECRET and KC_API_PASSPHRASE are required.
    KC_API_ENDPOINT defaults to https://api.kucoin.com and
    KC_API_KEY_VERSION to "2".

    Call this once at the application boundary and pass the result
    around; nothing else in the SDK reads the environment.

    Raises pydantic.ValidationError when a required variable is missing
    or empty.
    """
    env = os.environ if environ is None else environ
    return Credentials(
        api_key=env.get(ENV_API_KEY, ""),
        api_secret=env.get(ENV_API_SECRET, ""),
        api_passphrase=env.get(ENV_API_PASSPHRASE, ""),
        key_version=env.get(ENV_KEY_VERSION) or KeyVersion.V2,
        base_url=env.get(ENV_API_ENDPOINT) or DEFAULT_BASE_URL,
    )


# ---------------------------------------------------------------------------
# Auth manager
# ---------------------------------------------------------------------------

@dataclass
class KucoinAuth:
    """
    Signs requests with one set of credentials.

    Parameters
    ----------
    credentials : validated, immutable Credentials
    clock       : Callable[[], int] returning local Unix milliseconds

    The only mutable state is ``clock_offset_ms`` (server minus local
    time), written by apply_server_time().  Each sign_request() call
    builds its own SigningContext, so one KucoinAuth can be shared by
    concurrent requests.
    """

    credentials:     Credentials
    clock:           Clock = local_time_ms
    clock_offset_ms: int   = field(default=0, init=False)

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    def now_ms(self) -> int:
        """Current timestamp used for signing (local clock + server offset)."""
        return self.clock() + self.clock_offset_ms

    def apply_server_time(self, server_ms: int) -> int:
        """Record the offset between KuCoin's clock and ours; returns it."""
        self.clock_offset_ms = int(server_ms) - self.clock()
        logger.info("KuCoin clock offset set to %d ms", self.clock_offset_ms)
        return self.clock_offset_ms

    def sign_request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> SignedRequest:
        """Fresh timestamp, fresh signature – never cached across calls."""
        return build_headers(
            method,
            path,
            self.credentials,
            params=params,
            body=body,
            timestamp_ms=self.now_ms(),
        )
