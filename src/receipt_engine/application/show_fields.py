"""Application service: Show Fields use case (query)."""

from __future__ import annotations

from receipt_engine.application.dto import FieldValueDTO
from receipt_engine.domain.exceptions import EntityNotFoundError
from receipt_engine.domain.model.order import Order
from receipt_engine.domain.model.settings import DEFAULT_SETTINGS, RenderSettings
from receipt_engine.domain.repository.order_repository import OrderRepository
from receipt_engine.domain.service.value_resolver import FIELD_NAMES, resolve_field


class ShowFieldsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        settings: RenderSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._order_repo = order_repo
        self._settings = settings

    def handle(self, order_id: str | None = None) -> list[FieldValueDTO]:
        order: Order | None = None
        if order_id is not None:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")

        return [
            FieldValueDTO(name=name, value=resolve_field(name, order, self._settings))
            for name in FIELD_NAMES
        ]
