"""Application service: Import Design use case.

Decodes an editor export before storing it, so a design that could only
ever print the error receipt is rejected at the door.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

import structlog

from receipt_engine.application.dto import DesignSummaryDTO
from receipt_engine.domain.exceptions import DesignError, ValidationError
from receipt_engine.domain.model.elements import DesignDocument, UnknownElement
from receipt_engine.domain.repository.design_repository import DesignRepository

logger = structlog.get_logger()


class ImportDesignHandler:

    def __init__(self, design_repo: DesignRepository) -> None:
        self._design_repo = design_repo

    def handle(self, name: str, raw: Mapping | Sequence) -> DesignSummaryDTO:
        if not name or not name.strip():
            raise ValidationError("Design name is required")

        try:
            design = DesignDocument.from_raw(raw, name=name.strip())
        except DesignError as exc:
            raise ValidationError(f"Design '{name}' cannot be rendered: {exc}") from exc

        # Unknown types are kept (they render nothing) but worth a mention.
        unknown = [e.type_name for e in design if isinstance(e, UnknownElement)]
        for type_name in unknown:
            logger.warning("unknown_element_type", design=design.name, element_type=type_name)

        self._design_repo.save(design)
        logger.info("design_imported", design=design.name, elements=len(design))

        return DesignSummaryDTO(
            name=design.name,  # type: ignore[arg-type]
            element_count=len(design),
            unknown_types=unknown,
        )
