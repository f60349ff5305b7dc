from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict

from pydantic import BaseModel

RateMap = Dict[str, float]


class ExchangeRates(BaseModel):
    """Multipliers against the base currency (CAD is always 1.0)."""

    CAD: float
    USD: float
    EUR: float


class PriceInCurrencies(BaseModel):
    CAD: float
    USD: float
    EUR: float


@dataclass(frozen=True)
class RateSnapshot:
    """Last successful rate fetch, reused while younger than the cache TTL."""

    rates: RateMap
    fetched_at: datetime
