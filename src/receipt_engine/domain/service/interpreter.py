"""Top-level interpreter: design document + order -> printer commands.

Walks the element list once, top to bottom, keeping the ambient
alignment in a forward-running ``AlignmentState``.  All state lives in a
``_RenderPass`` created per call, so concurrent renders share nothing.

Failure policy is whole-document: if anything goes wrong while decoding
or rendering, the partial output is dropped and the fixed error receipt
is returned instead.  ``render()`` never raises.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Callable

import structlog

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.commands import (
    Barcode,
    Command,
    Cut,
    Feed,
    QRCode,
    SetAlignment,
    Text,
    error_receipt,
)
from receipt_engine.domain.model.elements import (
    AlignElement,
    BarcodeElement,
    CutPaperElement,
    DesignDocument,
    DividerElement,
    DynamicElement,
    FeedLineElement,
    ItemsListElement,
    QRCodeElement,
    SplitPaymentsElement,
    TextElement,
    UnknownElement,
)
from receipt_engine.domain.model.order import Order
from receipt_engine.domain.model.settings import DEFAULT_SETTINGS, RenderSettings
from receipt_engine.domain.model.value_objects import Alignment
from receipt_engine.domain.service.alignment import DEFAULT_ALIGNMENT, AlignmentState
from receipt_engine.domain.service.item_list_renderer import ItemListRenderer
from receipt_engine.domain.service.value_resolver import resolve_field, substitute_placeholders

logger = structlog.get_logger()

DesignInput = DesignDocument | Mapping | Sequence
OrderInput = Order | Mapping | None


class ReceiptInterpreter:

    def __init__(self, settings: RenderSettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings
        self._items = ItemListRenderer(settings)

    def render(self, document: DesignInput, order: OrderInput = None) -> list[Command]:
        """Render *document* for *order*; falls back to the error receipt."""
        try:
            design = DesignDocument.from_raw(document)
            snapshot = _coerce_order(order)
            commands = _RenderPass(self._settings, self._items, snapshot).run(design)
        except Exception:
            logger.exception("render_failed")
            return error_receipt()

        logger.debug(
            "render_finished",
            design=design.name,
            elements=len(design),
            commands=len(commands),
            has_order=snapshot is not None,
        )
        return commands


def render(
    document: DesignInput,
    order: OrderInput = None,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> list[Command]:
    """Pure entry point: same inputs, same command list."""
    return ReceiptInterpreter(settings).render(document, order)


def _coerce_order(order: OrderInput) -> Order | None:
    if order is None or isinstance(order, Order):
        return order
    if isinstance(order, Mapping):
        return Order.from_dict(order)
    raise ValidationError(f"Unsupported order value: {type(order).__name__}")


class _RenderPass:
    """State for one render call: ambient alignment and the output list.

    ``_printer_alignment`` mirrors what the last emitted SetAlignment told
    the printer.  Dividers and item templates move it without touching
    the ambient alignment, so content re-asserts the ambient value first.
    """

    def __init__(self, settings: RenderSettings, items: ItemListRenderer, order: Order | None) -> None:
        self._settings = settings
        self._items = items
        self._order = order
        self._alignment = AlignmentState()
        self._printer_alignment = DEFAULT_ALIGNMENT
        self._commands: list[Command] = []
        self._handlers: dict[type, Callable] = {
            TextElement: self._text,
            AlignElement: self._align,
            FeedLineElement: self._feed_line,
            BarcodeElement: self._barcode,
            QRCodeElement: self._qrcode,
            DividerElement: self._divider,
            DynamicElement: self._dynamic,
            ItemsListElement: self._items_list,
            SplitPaymentsElement: self._split_payments,
            CutPaperElement: self._cut_paper,
            UnknownElement: self._unknown,
        }

    def run(self, design: DesignDocument) -> list[Command]:
        for element in design:
            self._handlers[type(element)](element)
        return self._commands

    # --- Element handlers -----------------------------------------------------

    def _text(self, element: TextElement) -> None:
        content = substitute_placeholders(element.content, self._order, self._settings)
        self._emit_content(Text(content, element.style))

    def _align(self, element: AlignElement) -> None:
        self._alignment.apply(element)
        self._emit(SetAlignment(element.alignment))

    def _feed_line(self, element: FeedLineElement) -> None:
        self._emit(Feed(element.lines))

    def _barcode(self, element: BarcodeElement) -> None:
        # Barcodes carry raw identifiers: no placeholder substitution.
        self._emit_content(Barcode(element.data, element.barcode_type))

    def _qrcode(self, element: QRCodeElement) -> None:
        data = substitute_placeholders(element.data, self._order, self._settings)
        self._emit_content(QRCode(data, element.size))

    def _divider(self, element: DividerElement) -> None:
        self._emit(SetAlignment(Alignment.CENTER), Text(element.content))

    def _dynamic(self, element: DynamicElement) -> None:
        self._emit_content(Text(resolve_field(element.field, self._order, self._settings)))

    def _items_list(self, element: ItemsListElement) -> None:
        if self._order is None:
            logger.debug("items_list_skipped", reason="no_order")
            return
        self._sync_alignment()
        self._emit(*self._items.render(element, self._order, self._printer_alignment))

    def _split_payments(self, element: SplitPaymentsElement) -> None:
        pass

    def _cut_paper(self, element: CutPaperElement) -> None:
        self._emit(Cut())

    def _unknown(self, element: UnknownElement) -> None:
        logger.warning("unknown_element_type", element_type=element.type_name)

    # --- Output helpers -------------------------------------------------------

    def _emit_content(self, command: Command) -> None:
        self._sync_alignment()
        self._emit(command)

    def _sync_alignment(self) -> None:
        ambient = self._alignment.current_alignment()
        if self._printer_alignment is not ambient:
            self._emit(SetAlignment(ambient))

    def _emit(self, *commands: Command) -> None:
        for command in commands:
            if isinstance(command, SetAlignment):
                self._printer_alignment = command.alignment
            self._commands.append(command)
