"""Application service: Render Receipt use case.

Looks up a design and (optionally) an order snapshot, runs the
interpreter and maps the resulting commands to DTOs.
"""

from __future__ import annotations

from receipt_engine.application.dto import CommandDTO, ReceiptDTO
from receipt_engine.domain.exceptions import EntityNotFoundError
from receipt_engine.domain.model.commands import Command
from receipt_engine.domain.model.order import Order
from receipt_engine.domain.model.settings import DEFAULT_SETTINGS, RenderSettings
from receipt_engine.domain.repository.design_repository import DesignRepository
from receipt_engine.domain.repository.order_repository import OrderRepository
from receipt_engine.domain.service.interpreter import ReceiptInterpreter


class RenderReceiptHandler:

    def __init__(
        self,
        design_repo: DesignRepository,
        order_repo: OrderRepository,
        settings: RenderSettings = DEFAULT_SETTINGS,
    ) -> None:
        self._design_repo = design_repo
        self._order_repo = order_repo
        self._interpreter = ReceiptInterpreter(settings)

    def handle(self, design_name: str, order_id: str | None = None) -> ReceiptDTO:
        """Render *design_name* for *order_id*, or as a blank preview when None.

        Without an order every field prints its default and item lists
        print nothing.
        """
        design = self._design_repo.get_by_name(design_name)
        if design is None:
            raise EntityNotFoundError(f"Design '{design_name}' not found")

        order: Order | None = None
        if order_id is not None:
            order = self._order_repo.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")

        commands = self._interpreter.render(design, order)
        return ReceiptDTO(
            design_name=design_name,
            order_id=order_id,
            commands=[self._to_dto(command) for command in commands],
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(command: Command) -> CommandDTO:
        return CommandDTO(kind=command.kind, args=command.args())
