"""Pydantic domain models for the customization storefront."""

from .order import Order, OrderCreateIn, OrderResponse, OrderUpdateIn
from .rates import ExchangeRates, PriceInCurrencies, RateSnapshot

__all__ = [
    "Order",
    "OrderCreateIn",
    "OrderResponse",
    "OrderUpdateIn",
    "ExchangeRates",
    "PriceInCurrencies",
    "RateSnapshot",
]
