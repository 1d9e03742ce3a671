"""Application service: Import Order use case.

Stores a point-of-sale order snapshot so receipts can be rendered for it
by id.
"""

from __future__ import annotations

from collections.abc import Mapping

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.order import Order
from receipt_engine.domain.repository.order_repository import OrderRepository


class ImportOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, raw: Mapping) -> str:
        """Validate and store *raw*; returns the stored ``orderId``."""
        order = Order.from_dict(raw)
        if not order.order_id.strip():
            raise ValidationError("Order snapshot is missing 'orderId'")
        self._order_repo.save(order)
        return order.order_id
