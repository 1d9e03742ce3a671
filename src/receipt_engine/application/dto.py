"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandDTO:
    """Output: one printer command, e.g. kind="text", args={"text": ...}."""

    kind: str
    args: dict


@dataclass(frozen=True)
class ReceiptDTO:
    """Output: a rendered receipt, ready for a printer driver."""

    design_name: str
    order_id: str | None
    commands: list[CommandDTO]


@dataclass(frozen=True)
class FieldValueDTO:
    """Output: a dynamic field and what it prints for a given order."""

    name: str
    value: str


@dataclass(frozen=True)
class DesignSummaryDTO:
    """Output: a stored design at a glance."""

    name: str
    element_count: int
    unknown_types: list[str]
