from typing import List

from fastapi import APIRouter, Depends, Response

from storefront.core.dependencies import get_order_store, get_rate_service
from storefront.core.errors import NotFoundError, StoreError, UnexpectedError
from storefront.models.order import Order, OrderCreateIn, OrderResponse, OrderUpdateIn
from storefront.services.order_store import OrderStore
from storefront.services.order_validation import validate_order_request
from storefront.services.rates.cache_service import ExchangeRateService

router = APIRouter(prefix="/orders", tags=["orders"])


# Helpers ----------------------------------------------------------


async def _with_prices(order: Order, rates: ExchangeRateService) -> OrderResponse:
    prices = await rates.get_price_in_currencies(order.total_price)
    return OrderResponse(order=order, price_in_currencies=prices)


# Routes -----------------------------------------------------------
@router.post(
    "", response_model=OrderResponse, status_code=201, summary="Create an order"
)
async def create_order(
    payload: OrderCreateIn,
    store: OrderStore = Depends(get_order_store),
    rates: ExchangeRateService = Depends(get_rate_service),
):
    # 1. Presence rules (enum values already checked by the model)
    validate_order_request(payload)

    # 2. Price + persist, then attach converted prices
    try:
        order = store.create(payload)
        return await _with_prices(order, rates)
    except StoreError:
        raise
    except Exception as e:
        raise UnexpectedError("Failed to create order") from e


@router.get("", response_model=List[OrderResponse], summary="List all orders")
async def list_orders(
    store: OrderStore = Depends(get_order_store),
    rates: ExchangeRateService = Depends(get_rate_service),
):
    try:
        return [await _with_prices(order, rates) for order in store.list()]
    except Exception as e:
        raise UnexpectedError("Failed to get orders") from e


@router.get("/{order_id}", response_model=OrderResponse, summary="Get one order")
async def get_order(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
    rates: ExchangeRateService = Depends(get_rate_service),
):
    order = store.get(order_id)
    if order is None:
        raise NotFoundError("Order not found")
    try:
        return await _with_prices(order, rates)
    except Exception as e:
        raise UnexpectedError("Failed to get order") from e


@router.put(
    "/{order_id}", response_model=OrderResponse, summary="Edit an order (partial)"
)
async def update_order(
    order_id: str,
    payload: OrderUpdateIn,
    store: OrderStore = Depends(get_order_store),
    rates: ExchangeRateService = Depends(get_rate_service),
):
    # Only fields present in the body are applied
    changes = payload.model_dump(exclude_unset=True)
    try:
        order = store.update(order_id, changes)
    except StoreError:
        raise
    except Exception as e:
        raise UnexpectedError("Failed to update order") from e
    if order is None:
        raise NotFoundError("Order not found")
    try:
        return await _with_prices(order, rates)
    except Exception as e:
        raise UnexpectedError("Failed to update order") from e


@router.delete("/{order_id}", status_code=204, summary="Delete an order")
async def delete_order(
    order_id: str,
    store: OrderStore = Depends(get_order_store),
):
    try:
        deleted = store.delete(order_id)
    except Exception as e:
        raise UnexpectedError("Failed to delete order") from e
    if not deleted:
        raise NotFoundError("Order not found")
    return Response(status_code=204)
