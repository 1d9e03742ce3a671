"""Item list renderer: one block per line item, then discount summaries.

Each item is printed either through the configured item template or,
when the template is empty, through a fixed two-line layout.  Optional
detail lines (SKU, category, modifiers, unit price) follow in that order
whichever path printed the item, and every item ends with one feed.

Template alignment is local to one item: it starts LEFT for each item
and is never written back to the document's ambient alignment.  Fallback
item names and discount labels always print LEFT.
"""

from __future__ import annotations

from receipt_engine.domain.model.commands import Command, Feed, SetAlignment, Text
from receipt_engine.domain.model.elements import ItemsListElement
from receipt_engine.domain.model.order import LineItem, Order, PromotionType
from receipt_engine.domain.model.settings import DEFAULT_SETTINGS, RenderSettings
from receipt_engine.domain.model.value_objects import (
    BOLD_TEXT,
    SMALL_TEXT,
    Alignment,
    Money,
    format_fixed,
)
from receipt_engine.domain.service.alignment import AlignmentState
from receipt_engine.domain.service.directive_parser import parse_template
from receipt_engine.domain.service.value_resolver import (
    order_field_lookup,
    substitute_tokens,
)


def item_values(item: LineItem) -> dict[str, str]:
    """Values for the per-item placeholders."""
    return {
        "name": item.name,
        "quantity": str(item.quantity),
        "unitPrice": item.unit_price.plain(),
        "totalPrice": item.total_price.plain(),
        "sku": item.sku or "",
        "category": item.category or "",
        "modifiers": ", ".join(item.modifiers),
    }


class ItemListRenderer:

    def __init__(self, settings: RenderSettings = DEFAULT_SETTINGS) -> None:
        self._settings = settings

    def render(
        self,
        element: ItemsListElement,
        order: Order,
        printer_alignment: Alignment = Alignment.LEFT,
    ) -> list[Command]:
        """Commands for every item of *order*.

        *printer_alignment* is what the printer is set to when the list
        starts; left-aligned labels only re-send LEFT when it differs.
        """
        commands: list[Command] = []

        for item in order.items:
            if element.item_template:
                commands.extend(self._templated(element.item_template, item, order))
            else:
                commands.extend(_to_left(_printer_after(commands, printer_alignment)))
                commands.extend(self._fallback(item))
            commands.extend(self._details(element, item))
            commands.append(Feed(1))

        commands.extend(self._item_discounts(order, _printer_after(commands, printer_alignment)))
        commands.extend(self._order_discounts(order, _printer_after(commands, printer_alignment)))
        return commands

    # --- Item bodies ----------------------------------------------------------

    def _templated(self, template: str, item: LineItem, order: Order) -> list[Command]:
        values = item_values(item)
        order_lookup = order_field_lookup(order, self._settings)

        def lookup(name: str) -> str | None:
            if name in values:
                return values[name]
            return order_lookup(name)

        state = AlignmentState()
        commands: list[Command] = []
        for instruction in parse_template(substitute_tokens(template, lookup)):
            if isinstance(instruction, SetAlignment):
                state.set_alignment(instruction.alignment)
            elif isinstance(instruction, Feed):
                commands.append(instruction)
            else:
                commands.append(SetAlignment(state.current_alignment()))
                commands.append(instruction)
        return commands

    def _fallback(self, item: LineItem) -> list[Command]:
        label = f"{item.quantity}x {item.name}" if item.quantity > 1 else item.name
        return self._right_amount(Text(label), self._money(item.total_price))

    def _details(self, element: ItemsListElement, item: LineItem) -> list[Command]:
        commands: list[Command] = []
        if element.show_sku and item.sku is not None:
            commands.append(Text(f"  SKU: {item.sku}", SMALL_TEXT))
        if element.show_category and item.category is not None:
            commands.append(Text(f"  Category: {item.category}", SMALL_TEXT))
        if element.show_modifiers:
            for modifier in item.modifiers:
                commands.append(Text(f"  + {modifier}", SMALL_TEXT))
        if element.show_unit_price and item.quantity > 1:
            commands.extend(
                [
                    SetAlignment(Alignment.RIGHT),
                    Text(f"{self._money(item.unit_price)} ea", SMALL_TEXT),
                    SetAlignment(Alignment.LEFT),
                ]
            )
        return commands

    # --- Promotions -----------------------------------------------------------

    def _item_discounts(self, order: Order, printer: Alignment) -> list[Command]:
        if not order.item_promotions:
            return []
        commands: list[Command] = [Feed(1), *_to_left(printer), Text("ITEM DISCOUNTS:", BOLD_TEXT)]
        for promo in order.item_promotions:
            commands.extend(
                self._right_amount(Text(promo.promotion_name), f"-{self._money(promo.discount_amount)}")
            )
        commands.append(Feed(1))
        return commands

    def _order_discounts(self, order: Order, printer: Alignment) -> list[Command]:
        if not order.order_promotions:
            return []
        commands: list[Command] = [*_to_left(printer), Text("ORDER DISCOUNTS:", BOLD_TEXT)]
        for promo in order.order_promotions:
            if promo.promotion_type is PromotionType.PERCENTAGE:
                label = f"{promo.promotion_name} ({format_fixed(promo.discount_amount.amount, 1)}%)"
            else:
                label = promo.promotion_name
            commands.extend(
                self._right_amount(Text(label), f"-{self._money(promo.discount_amount)}")
            )
        commands.append(Feed(1))
        return commands

    # --- Helpers --------------------------------------------------------------

    def _money(self, amount: Money) -> str:
        return amount.format(self._settings.currency_symbol)

    @staticmethod
    def _right_amount(label: Text, amount: str) -> list[Command]:
        """Label on the left, amount on its own right-aligned line."""
        return [label, SetAlignment(Alignment.RIGHT), Text(amount), SetAlignment(Alignment.LEFT)]


def _printer_after(commands: list[Command], initial: Alignment) -> Alignment:
    for command in reversed(commands):
        if isinstance(command, SetAlignment):
            return command.alignment
    return initial


def _to_left(printer: Alignment) -> list[Command]:
    return [] if printer is Alignment.LEFT else [SetAlignment(Alignment.LEFT)]
