from __future__ import annotations

"""Concrete rate providers and factory.

'exchangeratesapi' queries exchangeratesapi.io for USD and EUR against CAD.
'static' always answers with the fallback table and never touches the network,
which keeps local development and tests offline.
"""
from typing import Dict, Optional, TYPE_CHECKING

import httpx

from storefront.models.constants import BASE_CURRENCY, QUOTE_CURRENCIES
from storefront.models.rates import RateMap
from storefront.services.http_client import get_json
from .base import RateFetchError, RateProvider

if TYPE_CHECKING:  # pragma: no cover
    from storefront.core.config import Settings

FALLBACK_RATES: Dict[str, float] = {
    "CAD": 1.0,
    "USD": 0.74,
    "EUR": 0.68,
}


class StaticRateProvider(RateProvider):
    async def fetch_rates(self) -> RateMap:  # type: ignore[override]
        return dict(FALLBACK_RATES)


class ExchangeRatesApiProvider(RateProvider):
    """One GET per fetch: ``?access_key=..&base=CAD&symbols=USD,EUR``.

    The API signals logical failures (bad key, quota) with ``success: false``
    and an ``error.info`` text even on HTTP 200.
    """

    def __init__(
        self,
        base_url: str,
        access_key: str,
        *,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url
        self._access_key = access_key
        self._timeout = timeout
        self._transport = transport

    async def fetch_rates(self) -> RateMap:  # type: ignore[override]
        data = await get_json(
            self._base_url,
            params={
                "access_key": self._access_key,
                "base": BASE_CURRENCY,
                "symbols": ",".join(QUOTE_CURRENCIES),
            },
            timeout=self._timeout,
            transport=self._transport,
        )
        if not data.get("success"):
            info = (data.get("error") or {}).get("info") or "Unknown error"
            raise RateFetchError(f"API error: {info}")
        rates = data.get("rates") or {}
        new_rates: RateMap = {BASE_CURRENCY: 1.0}
        for qc in QUOTE_CURRENCIES:
            v = rates.get(qc)
            if not isinstance(v, (int, float)) or isinstance(v, bool) or v <= 0:
                raise RateFetchError(f"missing or invalid rate for {qc}: {v!r}")
            new_rates[qc] = float(v)
        return new_rates


def make_rate_provider(
    settings: "Settings", transport: Optional[httpx.AsyncBaseTransport] = None
) -> RateProvider:
    kind = settings.exchange_rate_provider
    if kind == "static":
        return StaticRateProvider()
    if kind == "exchangeratesapi":
        return ExchangeRatesApiProvider(
            str(settings.exchange_api_base_url),
            settings.exchange_api_key,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )
    raise ValueError(f"Unknown rate provider kind '{kind}'")
