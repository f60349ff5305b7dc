from __future__ import annotations

"""Exchange rate service with a short-lived snapshot cache.

Design:
    - Wraps a RateProvider (selected via settings.exchange_rate_provider).
    - Keeps the last successful fetch as a RateSnapshot; while it is younger
      than the TTL it is served without touching the network.
    - Any failure (transport, non-2xx, success=false, malformed payload)
      answers with FALLBACK_RATES and leaves the cache untouched, so the next
      call tries the network again.
    - Never raises to its caller.

Two concurrent cache misses may both fetch; both writes carry valid data for
the same window, so no in-flight guard is kept.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from storefront.models.rates import RateMap, RateSnapshot
from storefront.services.http_client import HttpError
from storefront.services.money import multiply
from .base import RateFetchError, RateProvider
from .providers import FALLBACK_RATES

logger = logging.getLogger("storefront.rates")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ExchangeRateService:
    def __init__(
        self,
        provider: RateProvider,
        ttl_seconds: int = 300,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._provider = provider
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._snapshot: Optional[RateSnapshot] = None

    @property
    def snapshot(self) -> Optional[RateSnapshot]:
        return self._snapshot

    # Internal --------------------------------------------------
    def _is_fresh(self, snapshot: RateSnapshot) -> bool:
        return self._clock() - snapshot.fetched_at < self._ttl

    # Public API -----------------------------------------------
    async def get_rates(self) -> RateMap:
        snapshot = self._snapshot
        if snapshot is not None and self._is_fresh(snapshot):
            logger.debug("rates cache hit (fetched_at=%s)", snapshot.fetched_at)
            return dict(snapshot.rates)

        try:
            rates = await self._provider.fetch_rates()
        except (HttpError, RateFetchError) as e:
            logger.warning("rate fetch failed, using fallback rates: %s", e)
            return dict(FALLBACK_RATES)
        except Exception:
            logger.exception("unexpected rate provider failure, using fallback rates")
            return dict(FALLBACK_RATES)

        self._snapshot = RateSnapshot(rates=dict(rates), fetched_at=self._clock())
        logger.info("rates refreshed", extra={"rates": rates})
        return dict(rates)

    async def get_price_in_currencies(self, amount: float) -> RateMap:
        rates = await self.get_rates()
        return {currency: multiply(amount, rate) for currency, rate in rates.items()}

    def invalidate(self) -> None:
        self._snapshot = None
