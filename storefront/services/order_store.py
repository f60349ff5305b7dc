"""In-memory order store.

Holds order records keyed by id in insertion order. Prices are always derived
through the injected PricingEngine on create and on every update, so
``total_price == base + text surcharge + image surcharge`` holds for every
stored record.

Nothing is persisted; a process restart clears all orders. Access to the map
is serialized by a lock so the store stays consistent under a threaded server.
Records handed out are copies, callers cannot mutate stored state.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from storefront.core.errors import ValidationError
from storefront.models.order import Order, OrderCreateIn
from .pricing import PricingEngine

logger = logging.getLogger("storefront.orders")

UPDATABLE_FIELDS = ("material", "color", "custom_text", "image_url")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderStore:
    def __init__(
        self,
        pricing: PricingEngine,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._pricing = pricing
        self._clock = clock
        self._orders: Dict[str, Order] = {}
        self._lock = threading.RLock()

    # Internal --------------------------------------------------
    def _new_id(self) -> str:
        return uuid.uuid4().hex

    def _priced(self, order: Order) -> Order:
        breakdown = self._pricing.price(
            order.product_type,
            order.material,
            order.color,
            order.custom_text,
            order.image_url,
        )
        return order.model_copy(
            update={
                "base_price": breakdown.base_price,
                "total_price": breakdown.total_price,
            }
        )

    # Public API -----------------------------------------------
    def create(self, config: OrderCreateIn) -> Order:
        now = self._clock()
        order = self._priced(
            Order(
                id=self._new_id(),
                product_type=config.product_type,
                # material only applies to t-shirts
                material=config.material if config.product_type == "tshirt" else None,
                color=config.color,
                custom_text=config.custom_text,
                image_url=config.image_url,
                base_price=0.0,
                total_price=0.0,
                created_at=now,
                updated_at=now,
            )
        )
        with self._lock:
            self._orders[order.id] = order
        logger.info(
            "order created",
            extra={
                "order_id": order.id,
                "product_type": order.product_type,
                "total_price": order.total_price,
            },
        )
        return order.model_copy()

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            order = self._orders.get(order_id)
        return order.model_copy() if order else None

    def list(self) -> List[Order]:
        with self._lock:
            return [o.model_copy() for o in self._orders.values()]

    def update(self, order_id: str, changes: Mapping[str, Any]) -> Optional[Order]:
        """Apply the given fields and re-price; None when the id is unknown.

        ``changes`` holds only the fields the caller actually sent; keys outside
        UPDATABLE_FIELDS (product_type, prices, timestamps) are ignored. Only
        custom_text and image_url may be cleared with None; a None color, or a
        None material on a t-shirt, raises ValidationError.
        """
        with self._lock:
            current = self._orders.get(order_id)
            if current is None:
                return None
            applied = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
            if current.product_type != "tshirt":
                applied.pop("material", None)
            elif "material" in applied and applied["material"] is None:
                raise ValidationError("material is required for t-shirts")
            if "color" in applied and applied["color"] is None:
                raise ValidationError("color cannot be removed")
            merged = current.model_copy(update={**applied, "updated_at": self._clock()})
            updated = self._priced(merged)
            self._orders[order_id] = updated
        logger.info(
            "order updated",
            extra={
                "order_id": order_id,
                "fields": sorted(applied),
                "total_price": updated.total_price,
            },
        )
        return updated.model_copy()

    def delete(self, order_id: str) -> bool:
        with self._lock:
            removed = self._orders.pop(order_id, None) is not None
        if removed:
            logger.info("order deleted", extra={"order_id": order_id})
        return removed

    def __len__(self) -> int:
        with self._lock:
            return len(self._orders)
