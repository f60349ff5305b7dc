from __future__ import annotations

from fastapi import APIRouter, Depends

from storefront.core.dependencies import get_rate_service
from storefront.core.errors import UnexpectedError
from storefront.models.rates import ExchangeRates
from storefront.services.rates.cache_service import ExchangeRateService

"""Exchange rates router.

GET /exchange-rates returns the current CAD-based multipliers. Upstream
failures never surface here; the service answers with fallback rates.
"""

router = APIRouter(tags=["rates"])


@router.get(
    "/exchange-rates",
    response_model=ExchangeRates,
    summary="Current CAD, USD and EUR multipliers",
)
async def get_exchange_rates(
    svc: ExchangeRateService = Depends(get_rate_service),
):
    try:
        return ExchangeRates(**await svc.get_rates())
    except Exception as e:
        raise UnexpectedError("Failed to get exchange rates") from e
