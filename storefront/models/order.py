from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .constants import Color, Material, ProductType
from .rates import PriceInCurrencies


class _CamelModel(BaseModel):
    """Accepts and emits camelCase keys (productType, customText, ...)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderCreateIn(_CamelModel):
    """Create payload.

    productType and color are optional at the schema level so that missing
    fields surface with the dedicated messages from validate_order_request
    rather than a generic schema error.
    """

    product_type: Optional[ProductType] = None
    material: Optional[Material] = None
    color: Optional[Color] = None
    custom_text: Optional[str] = None
    image_url: Optional[str] = None


class OrderUpdateIn(_CamelModel):
    """Partial update model. productType is immutable after creation.

    Only fields actually sent are applied (see ``model_dump(exclude_unset=True)``);
    an explicit null clears customText / imageUrl.
    """

    material: Optional[Material] = None
    color: Optional[Color] = None
    custom_text: Optional[str] = None
    image_url: Optional[str] = None


class Order(_CamelModel):
    id: str
    product_type: ProductType
    material: Optional[Material] = None
    color: Color
    custom_text: Optional[str] = None
    image_url: Optional[str] = None
    base_price: float
    total_price: float
    created_at: datetime
    updated_at: datetime


class OrderResponse(_CamelModel):
    order: Order
    price_in_currencies: PriceInCurrencies
