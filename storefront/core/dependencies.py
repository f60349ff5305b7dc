"""FastAPI dependencies resolving the per-application service instances.

The application factory builds one OrderStore, ExchangeRateService and
ImageStore per app and keeps them on ``app.state``; routes receive them
through ``Depends`` so tests can swap any of them on a given app.
"""

from fastapi import Request

from storefront.services.image_store import ImageStore
from storefront.services.order_store import OrderStore
from storefront.services.rates.cache_service import ExchangeRateService


def get_order_store(request: Request) -> OrderStore:
    return request.app.state.order_store


def get_rate_service(request: Request) -> ExchangeRateService:
    return request.app.state.rate_service


def get_image_store(request: Request) -> ImageStore:
    return request.app.state.image_store
