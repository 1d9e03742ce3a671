"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

import json
from pathlib import Path

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.order import Order
from receipt_engine.domain.repository.order_repository import OrderRepository


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        for raw in self._load_raw():
            if raw.get("orderId") == order_id:
                return Order.from_dict(raw)
        return None

    def list_ids(self) -> list[str]:
        return [str(raw.get("orderId", "")) for raw in self._load_raw()]

    def save(self, order: Order) -> None:
        if not order.order_id:
            raise ValidationError("Order snapshot needs an orderId to be stored")

        orders = self._load_raw()

        # Upsert: replace if exists, otherwise append
        replaced = False
        for i, raw in enumerate(orders):
            if raw.get("orderId") == order.order_id:
                orders[i] = order.to_dict()
                replaced = True
                break
        if not replaced:
            orders.append(order.to_dict())

        self._persist_raw(orders)

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"{self._file_path} is not valid JSON: {exc}") from exc
        if not isinstance(data, list):
            raise ValidationError(f"{self._file_path} must hold a JSON array of orders")
        return data

    def _persist_raw(self, orders: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(orders, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
