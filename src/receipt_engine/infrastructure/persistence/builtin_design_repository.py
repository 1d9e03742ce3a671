"""Read-only DesignRepository serving the editor's starter designs."""

from __future__ import annotations

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.elements import (
    AlignElement,
    DesignDocument,
    ElementKind,
    FeedLineElement,
    QRCodeElement,
    TextElement,
    new_element,
)
from receipt_engine.domain.model.value_objects import Alignment, TextSize, TextStyle
from receipt_engine.domain.repository.design_repository import DesignRepository


def _basic() -> DesignDocument:
    return DesignDocument(
        name="basic",
        elements=(
            new_element(ElementKind.ALIGN),
            TextElement("Welcome to {{STORE_NAME}}", TextStyle(bold=True, size=TextSize.LARGE)),
            TextElement("Store #{{STORE_NUMBER}}"),
            new_element(ElementKind.FEED_LINE),
            AlignElement(Alignment.LEFT),
            TextElement("Order ID: {{ORDER_ID}}"),
            new_element(ElementKind.FEED_LINE),
            new_element(ElementKind.DIVIDER),
            new_element(ElementKind.FEED_LINE),
            new_element(ElementKind.ITEMS_LIST),
            new_element(ElementKind.FEED_LINE),
            new_element(ElementKind.DIVIDER),
            AlignElement(Alignment.CENTER),
            TextElement("Thank you for your order!"),
            FeedLineElement(3),
            new_element(ElementKind.CUT_PAPER),
        ),
    )


def _detailed() -> DesignDocument:
    return DesignDocument(
        name="detailed",
        elements=(
            AlignElement(Alignment.CENTER),
            TextElement("{{STORE_NAME}}", TextStyle(bold=True, size=TextSize.XLARGE)),
            TextElement("Store Address Line 1"),
            TextElement("Phone: (555) 123-4567"),
            new_element(ElementKind.FEED_LINE),
            new_element(ElementKind.DIVIDER),
            AlignElement(Alignment.LEFT),
            TextElement("Date: {{TIMESTAMP}}"),
            TextElement("Order: {{ORDER_ID}}"),
            TextElement("Cashier: {{CASHIER_NAME}}"),
            new_element(ElementKind.FEED_LINE),
            new_element(ElementKind.ITEMS_LIST),
            new_element(ElementKind.FEED_LINE),
            new_element(ElementKind.DIVIDER),
            TextElement("Subtotal: {{SUBTOTAL}}"),
            TextElement("Tax: {{TAX}}"),
            TextElement("Total: {{TOTAL}}", TextStyle(bold=True, size=TextSize.LARGE)),
            new_element(ElementKind.FEED_LINE),
            AlignElement(Alignment.CENTER),
            QRCodeElement("https://{{STORE_NAME}}.com/receipt/{{ORDER_ID}}"),
            new_element(ElementKind.FEED_LINE),
            TextElement("Thank you for your business!"),
            FeedLineElement(2),
            new_element(ElementKind.CUT_PAPER),
        ),
    )


_PRESETS = {"basic": _basic, "detailed": _detailed}


class BuiltinDesignRepository(DesignRepository):

    def get_by_name(self, name: str) -> DesignDocument | None:
        factory = _PRESETS.get(name)
        return factory() if factory else None

    def list_names(self) -> list[str]:
        return sorted(_PRESETS)

    def save(self, design: DesignDocument) -> None:
        raise ValidationError(f"Built-in design '{design.name}' is read-only")
