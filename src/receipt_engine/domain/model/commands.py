"""Printer-agnostic drawing commands: the output of a render pass.

A receipt is an ordered list of these.  The printer-driving collaborator
replays them in order; nothing here knows about a particular device.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from receipt_engine.domain.model.value_objects import Alignment, BarcodeType, TextStyle


@dataclass(frozen=True)
class SetAlignment:
    alignment: Alignment

    kind = "align"

    def args(self) -> dict:
        return {"alignment": self.alignment.value}


@dataclass(frozen=True)
class Feed:
    lines: int = 1

    kind = "feed"

    def args(self) -> dict:
        return {"lines": self.lines}


@dataclass(frozen=True)
class Text:
    text: str
    style: TextStyle = field(default_factory=TextStyle)

    kind = "text"

    def args(self) -> dict:
        return {"text": self.text, "style": self.style.to_dict()}


@dataclass(frozen=True)
class Barcode:
    data: str
    barcode_type: BarcodeType = BarcodeType.CODE128

    kind = "barcode"

    def args(self) -> dict:
        return {"data": self.data, "barcodeType": self.barcode_type.value}


@dataclass(frozen=True)
class QRCode:
    data: str
    size: int = 3

    kind = "qrcode"

    def args(self) -> dict:
        return {"data": self.data, "size": self.size}


@dataclass(frozen=True)
class Cut:
    kind = "cut"

    def args(self) -> dict:
        return {}


Command = Union[SetAlignment, Feed, Text, Barcode, QRCode, Cut]


def error_receipt() -> list[Command]:
    """The fixed receipt printed when a render pass fails as a whole."""
    return [Text("Error occurred", TextStyle(bold=True)), Feed(1), Cut()]
