"""In-memory fake repositories for testing.

These implement the same abstract interfaces as the JSON repositories
but keep everything in a dict. No file I/O, no side effects.
"""

from __future__ import annotations

from receipt_engine.domain.model.elements import DesignDocument
from receipt_engine.domain.model.order import Order
from receipt_engine.domain.repository.design_repository import DesignRepository
from receipt_engine.domain.repository.order_repository import OrderRepository


class FakeDesignRepository(DesignRepository):

    def __init__(self, designs: list[DesignDocument] | None = None) -> None:
        self._store: dict[str, DesignDocument] = {}
        for d in designs or []:
            self.save(d)

    def get_by_name(self, name: str) -> DesignDocument | None:
        return self._store.get(name)

    def list_names(self) -> list[str]:
        return sorted(self._store)

    def save(self, design: DesignDocument) -> None:
        self._store[design.name] = design  # type: ignore[index]


class FakeOrderRepository(OrderRepository):

    def __init__(self, orders: list[Order] | None = None) -> None:
        self._store: dict[str, Order] = {}
        for o in orders or []:
            self.save(o)

    def get_by_id(self, order_id: str) -> Order | None:
        return self._store.get(order_id)

    def list_ids(self) -> list[str]:
        return list(self._store)

    def save(self, order: Order) -> None:
        self._store[order.order_id] = order
