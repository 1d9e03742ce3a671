"""Abstract repository for receipt design documents."""

from __future__ import annotations

from abc import ABC, abstractmethod

from receipt_engine.domain.model.elements import DesignDocument


class DesignRepository(ABC):

    @abstractmethod
    def get_by_name(self, name: str) -> DesignDocument | None:
        """Return a design by its name, or None if not found."""

    @abstractmethod
    def list_names(self) -> list[str]:
        """Return the names of all stored designs, sorted."""

    @abstractmethod
    def save(self, design: DesignDocument) -> None:
        """Persist a new or updated design under ``design.name``."""
