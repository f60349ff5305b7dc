"""Order pricing.

Base price comes from a fixed table keyed by product type (and material for
t-shirts) and color; flat surcharges are added for custom text longer than
eight characters and for an attached image.

An unmapped product/color combination prices at 0 rather than failing. That
is a known foot-gun kept for compatibility; ``strict=True`` turns it into a
ValidationError instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from storefront.core.errors import ValidationError
from storefront.models.constants import (
    DEFAULT_MATERIAL,
    IMAGE_SURCHARGE,
    TEXT_SURCHARGE,
    TEXT_SURCHARGE_MIN_LENGTH,
)
from .money import add

TSHIRT_PRICES: Dict[str, Dict[str, float]] = {
    "light-cotton": {
        "black": 16.95,
        "white": 16.95,
        "green": 18.95,
        "red": 18.95,
    },
    "heavy-cotton": {
        "black": 19.95,
        "white": 19.95,
        "green": 21.95,
        "red": 21.95,
    },
}

SWEATER_PRICES: Dict[str, float] = {
    "black": 28.95,
    "white": 28.95,
    "pink": 32.95,
    "yellow": 32.95,
}


@dataclass(frozen=True)
class PriceBreakdown:
    base_price: float
    text_surcharge: float
    image_surcharge: float
    total_price: float


class PricingEngine:
    def __init__(self, strict: bool = False):
        self.strict = strict

    def compute_base_price(
        self,
        product_type: str,
        material: Optional[str] = None,
        color: Optional[str] = None,
    ) -> float:
        if product_type == "tshirt":
            table = TSHIRT_PRICES.get(material or DEFAULT_MATERIAL, {})
        else:
            table = SWEATER_PRICES
        price = table.get(color, 0.0) if color else 0.0
        if price == 0.0 and self.strict:
            raise ValidationError(
                f"no price for {product_type} in color '{color}'"
                + (f" and material '{material}'" if product_type == "tshirt" else "")
            )
        return price

    def compute_text_surcharge(self, custom_text: Optional[str]) -> float:
        if not custom_text:
            return 0.0
        return TEXT_SURCHARGE if len(custom_text) > TEXT_SURCHARGE_MIN_LENGTH else 0.0

    def compute_image_surcharge(self, has_image: bool) -> float:
        return IMAGE_SURCHARGE if has_image else 0.0

    def price(
        self,
        product_type: str,
        material: Optional[str],
        color: Optional[str],
        custom_text: Optional[str],
        image_url: Optional[str],
    ) -> PriceBreakdown:
        base = self.compute_base_price(product_type, material, color)
        text = self.compute_text_surcharge(custom_text)
        image = self.compute_image_surcharge(bool(image_url))
        return PriceBreakdown(
            base_price=base,
            text_surcharge=text,
            image_surcharge=image,
            total_price=add(base, text, image),
        )
