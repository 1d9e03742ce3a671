"""Design elements: the tagged union a receipt design is made of.

A design document is a flat, ordered list of elements.  There is no
nesting: order is both paint order and the channel through which the
ambient alignment propagates.

Decoding is lenient the way the editor's JSON is: every optional field
has a default and missing fields never raise.  Unknown element types
decode to ``UnknownElement``, which renders nothing.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from receipt_engine.domain.exceptions import DesignError
from receipt_engine.domain.model.value_objects import (
    Alignment,
    BarcodeType,
    TextSize,
    TextStyle,
)


class ElementKind(Enum):
    TEXT = "text"
    ALIGN = "align"
    FEED_LINE = "feedLine"
    BARCODE = "barcode"
    QRCODE = "qrcode"
    DIVIDER = "divider"
    DYNAMIC = "dynamic"
    ITEMS_LIST = "items_list"
    SPLIT_PAYMENTS = "split_payments"
    CUT_PAPER = "cutPaper"


DEFAULT_DIVIDER = "=" * 32
DEFAULT_QR_SIZE = 3
DEFAULT_ITEM_TEMPLATE = (
    "{{align:left}}{{quantity}}x {{name}}\n{{align:right}}${{totalPrice}}\n{{feedLine}}"
)


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TextElement:
    content: str = ""
    style: TextStyle = field(default_factory=TextStyle)

    kind = ElementKind.TEXT

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "content": self.content, "style": self.style.to_dict()}


@dataclass(frozen=True)
class AlignElement:
    alignment: Alignment = Alignment.LEFT

    kind = ElementKind.ALIGN

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "alignment": self.alignment.value}


@dataclass(frozen=True)
class FeedLineElement:
    lines: int = 1

    kind = ElementKind.FEED_LINE

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "lines": self.lines}


@dataclass(frozen=True)
class BarcodeElement:
    data: str = ""
    barcode_type: BarcodeType = BarcodeType.CODE128

    kind = ElementKind.BARCODE

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "data": self.data, "barcodeType": self.barcode_type.value}


@dataclass(frozen=True)
class QRCodeElement:
    data: str = ""
    size: int = DEFAULT_QR_SIZE

    kind = ElementKind.QRCODE

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "data": self.data, "qrSize": self.size}


@dataclass(frozen=True)
class DividerElement:
    content: str = DEFAULT_DIVIDER

    kind = ElementKind.DIVIDER

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "content": self.content}


@dataclass(frozen=True)
class DynamicElement:
    field: str = ""

    kind = ElementKind.DYNAMIC

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "field": self.field}


@dataclass(frozen=True)
class ItemsListElement:
    item_template: str = ""
    show_sku: bool = False
    show_category: bool = False
    show_modifiers: bool = False
    show_unit_price: bool = False

    kind = ElementKind.ITEMS_LIST

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "itemTemplate": self.item_template,
            "showSku": self.show_sku,
            "showCategory": self.show_category,
            "showModifiers": self.show_modifiers,
            "showUnitPrice": self.show_unit_price,
        }


@dataclass(frozen=True)
class SplitPaymentsElement:
    kind = ElementKind.SPLIT_PAYMENTS

    def to_dict(self) -> dict:
        return {"type": self.kind.value}


@dataclass(frozen=True)
class CutPaperElement:
    kind = ElementKind.CUT_PAPER

    def to_dict(self) -> dict:
        return {"type": self.kind.value}


@dataclass(frozen=True)
class UnknownElement:
    """An element type this engine does not know; it renders nothing."""

    type_name: str
    raw: Mapping = field(default_factory=dict, compare=False)

    kind = None

    def to_dict(self) -> dict:
        return dict(self.raw) or {"type": self.type_name}


Element = Union[
    TextElement,
    AlignElement,
    FeedLineElement,
    BarcodeElement,
    QRCodeElement,
    DividerElement,
    DynamicElement,
    ItemsListElement,
    SplitPaymentsElement,
    CutPaperElement,
    UnknownElement,
]

_ELEMENT_CLASSES = (
    TextElement,
    AlignElement,
    FeedLineElement,
    BarcodeElement,
    QRCodeElement,
    DividerElement,
    DynamicElement,
    ItemsListElement,
    SplitPaymentsElement,
    CutPaperElement,
    UnknownElement,
)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_element(raw: Mapping | Element) -> Element:
    """Decode one editor element record into its variant.

    Raises DesignError only for payloads the printer cannot honour at
    all (a non-object record, an unsupported barcode symbology).
    """
    if isinstance(raw, _ELEMENT_CLASSES):
        return raw
    if not isinstance(raw, Mapping):
        raise DesignError(f"Design element must be an object, got {type(raw).__name__}")

    type_name = _opt_str(raw, "type", "")
    try:
        kind = ElementKind(type_name)
    except ValueError:
        return UnknownElement(type_name=type_name, raw=dict(raw))

    if kind is ElementKind.TEXT:
        return TextElement(content=_opt_str(raw, "content", ""), style=_style(raw.get("style")))
    if kind is ElementKind.ALIGN:
        return AlignElement(alignment=Alignment.parse(raw.get("alignment", "LEFT")))
    if kind is ElementKind.FEED_LINE:
        return FeedLineElement(lines=max(1, _opt_int(raw, "lines", 1)))
    if kind is ElementKind.BARCODE:
        return BarcodeElement(
            data=_opt_str(raw, "data", ""),
            barcode_type=BarcodeType.parse(raw.get("barcodeType") or "CODE128"),
        )
    if kind is ElementKind.QRCODE:
        size_key = "qrSize" if raw.get("qrSize") is not None else "size"
        return QRCodeElement(
            data=_opt_str(raw, "data", ""),
            size=_opt_int(raw, size_key, DEFAULT_QR_SIZE),
        )
    if kind is ElementKind.DIVIDER:
        return DividerElement(content=_opt_str(raw, "content", DEFAULT_DIVIDER))
    if kind is ElementKind.DYNAMIC:
        return DynamicElement(field=_opt_str(raw, "field", ""))
    if kind is ElementKind.ITEMS_LIST:
        return ItemsListElement(
            item_template=_opt_str(raw, "itemTemplate", ""),
            show_sku=_opt_bool(raw, "showSku"),
            show_category=_opt_bool(raw, "showCategory"),
            show_modifiers=_opt_bool(raw, "showModifiers"),
            show_unit_price=_opt_bool(raw, "showUnitPrice"),
        )
    if kind is ElementKind.SPLIT_PAYMENTS:
        return SplitPaymentsElement()
    return CutPaperElement()


def new_element(kind: ElementKind) -> Element:
    """An element carrying the editor's palette defaults for *kind*."""
    defaults: dict[ElementKind, Element] = {
        ElementKind.TEXT: TextElement(content="Sample Text"),
        ElementKind.ALIGN: AlignElement(alignment=Alignment.CENTER),
        ElementKind.FEED_LINE: FeedLineElement(lines=1),
        ElementKind.BARCODE: BarcodeElement(data="123456789"),
        ElementKind.QRCODE: QRCodeElement(data="https://example.com"),
        ElementKind.DIVIDER: DividerElement(),
        ElementKind.DYNAMIC: DynamicElement(field="STORE_NAME"),
        ElementKind.ITEMS_LIST: ItemsListElement(item_template=DEFAULT_ITEM_TEMPLATE),
        ElementKind.SPLIT_PAYMENTS: SplitPaymentsElement(),
        ElementKind.CUT_PAPER: CutPaperElement(),
    }
    return defaults[kind]


@dataclass(frozen=True)
class DesignDocument:
    """An ordered, immutable list of elements, optionally named."""

    elements: tuple[Element, ...] = ()
    name: str | None = None

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    @staticmethod
    def from_raw(raw: DesignDocument | Mapping | Sequence, name: str | None = None) -> DesignDocument:
        """Accept the editor export ``{"elements": [...]}`` or a bare list."""
        if isinstance(raw, DesignDocument):
            return raw
        if isinstance(raw, Mapping):
            raw = raw.get("elements") or []
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
            raise DesignError(f"Design document must be a list of elements, got {type(raw).__name__}")
        return DesignDocument(elements=tuple(decode_element(e) for e in raw), name=name)

    def to_dict(self) -> dict:
        return {"elements": [element.to_dict() for element in self.elements]}


# ---------------------------------------------------------------------------
# Lenient field readers
# ---------------------------------------------------------------------------


def _style(raw: object) -> TextStyle:
    if not isinstance(raw, Mapping):
        return TextStyle()
    return TextStyle(
        bold=_opt_bool(raw, "bold"),
        underline=_opt_bool(raw, "underline"),
        size=TextSize.parse(raw.get("size", "NORMAL")),
    )


def _opt_str(raw: Mapping, key: str, default: str) -> str:
    value = raw.get(key)
    return default if value is None else str(value)


def _opt_int(raw: Mapping, key: str, default: int) -> int:
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _opt_bool(raw: Mapping, key: str) -> bool:
    value = raw.get(key)
    if isinstance(value, str):
        return value.lower() == "true"
    return value is True
