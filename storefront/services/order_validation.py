"""Request-level order validation.

Pydantic already rejects values outside the product/material/color enums.
This hook covers the presence rules that need cross-field context so routes
can raise them with stable, user-facing messages.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from storefront.core.errors import ValidationError

if TYPE_CHECKING:  # pragma: no cover
    from storefront.models.order import OrderCreateIn


def validate_order_request(payload: "OrderCreateIn") -> "OrderCreateIn":
    """Raise ValidationError when required create fields are missing."""
    if not payload.product_type or not payload.color:
        raise ValidationError("productType and color are required")
    if payload.product_type == "tshirt" and not payload.material:
        raise ValidationError("material is required for t-shirts")
    return payload
