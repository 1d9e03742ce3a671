"""Abstract repository for order snapshots."""

from __future__ import annotations

from abc import ABC, abstractmethod

from receipt_engine.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order snapshot by its ``orderId``, or None if not found."""

    @abstractmethod
    def list_ids(self) -> list[str]:
        """Return the ids of all stored orders."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order snapshot."""
