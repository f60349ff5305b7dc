from __future__ import annotations

"""Rate provider abstraction.

A provider performs one fetch of CAD-based rates; caching and fallback live in
ExchangeRateService so every provider gets identical semantics.
"""
from abc import ABC, abstractmethod

from storefront.models.rates import RateMap


class RateFetchError(Exception):
    """Provider reached the API but the answer is unusable."""


class RateProvider(ABC):
    @abstractmethod
    async def fetch_rates(self) -> RateMap:
        """Return multipliers per currency, base currency included at 1.0.

        Raises HttpError or RateFetchError on failure.
        """
        raise NotImplementedError
