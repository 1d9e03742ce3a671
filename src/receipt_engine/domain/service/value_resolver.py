"""Value resolver: dynamic field names to printable strings.

Every field has one entry in ``FIELDS``: how to read it from an order and
what to print when the order, or the customer/table sub-structure it
lives in, is absent.  Resolution never fails.

Placeholder substitution is a single left-to-right pass over ``{{NAME}}``
tokens with a lookup per token.  Substituted values are never scanned
again, and tokens that are not field names (template directives such as
``{{align:right}}``) are left exactly as written.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

import structlog

from receipt_engine.domain.model.order import Order
from receipt_engine.domain.model.settings import DEFAULT_SETTINGS, RenderSettings
from receipt_engine.domain.model.value_objects import format_fixed

logger = structlog.get_logger()

_TOKEN = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")


@dataclass(frozen=True)
class FieldSpec:
    read: Callable[[Order, RenderSettings], str | None]  # None means "use default"
    default: Callable[[RenderSettings], str]


def _const(value: str) -> Callable[[RenderSettings], str]:
    return lambda settings: value


def _money_default(settings: RenderSettings) -> str:
    return f"{settings.currency_symbol}0.00"


def _timestamp(order: Order, settings: RenderSettings) -> str | None:
    if order.timestamp is None:
        return None
    return settings.format_timestamp(order.timestamp)


def _customer(attr: str) -> Callable[[Order, RenderSettings], str | None]:
    def read(order: Order, settings: RenderSettings) -> str | None:
        if order.customer_info is None:
            return None
        value = getattr(order.customer_info, attr)
        return None if value is None else str(value)

    return read


def _table(attr: str) -> Callable[[Order, RenderSettings], str | None]:
    def read(order: Order, settings: RenderSettings) -> str | None:
        if order.table_info is None:
            return None
        value = getattr(order.table_info, attr)
        return None if value is None else str(value)

    return read


FIELDS: dict[str, FieldSpec] = {
    # Basic order fields
    "STORE_NAME": FieldSpec(lambda o, s: o.store_name, _const("Store Name")),
    "STORE_NUMBER": FieldSpec(lambda o, s: o.store_number, _const("001")),
    "ORDER_ID": FieldSpec(lambda o, s: o.order_id, _const("ORD123456")),
    "TIMESTAMP": FieldSpec(_timestamp, _const("N/A")),
    "SUBTOTAL": FieldSpec(lambda o, s: o.subtotal.format(s.currency_symbol), _money_default),
    "TAX_RATE": FieldSpec(lambda o, s: f"{format_fixed(o.tax_rate * 100, 1)}%", _const("0.0%")),
    "TAX": FieldSpec(lambda o, s: o.tax_amount.format(s.currency_symbol), _money_default),
    "TOTAL": FieldSpec(lambda o, s: o.total_amount.format(s.currency_symbol), _money_default),
    "PAYMENT_METHOD": FieldSpec(lambda o, s: o.payment_method, _const("Cash")),
    "ITEM_COUNT": FieldSpec(lambda o, s: str(o.item_count), _const("0")),
    "TOTAL_QUANTITY": FieldSpec(lambda o, s: str(o.total_quantity), _const("0")),
    # Customer info fields
    "CUSTOMER_ID": FieldSpec(_customer("customer_id"), _const("GUEST001")),
    "CUSTOMER_NAME": FieldSpec(_customer("name"), _const("Guest")),
    "MEMBER_STATUS": FieldSpec(_customer("member_status"), _const("Regular")),
    "LOYALTY_POINTS": FieldSpec(_customer("loyalty_points"), _const("0")),
    "MEMBER_SINCE": FieldSpec(_customer("member_since"), _const("N/A")),
    # Table info fields
    "TABLE_NUMBER": FieldSpec(_table("table_number"), _const("N/A")),
    "SERVER_NAME": FieldSpec(_table("server_name"), _const("Server")),
    "GUEST_COUNT": FieldSpec(_table("guest_count"), _const("1")),
    "SERVICE_RATING": FieldSpec(_table("service_rating"), _const("N/A")),
    # Staff fields: orders carry no cashier yet.
    "CASHIER_NAME": FieldSpec(lambda o, s: None, _const("Cashier")),
}

FIELD_NAMES: tuple[str, ...] = tuple(FIELDS)


def resolve_field(
    name: str,
    order: Order | None,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> str:
    """Resolve one dynamic field; unknown names print as themselves."""
    spec = FIELDS.get(name)
    if spec is None:
        logger.warning("unknown_dynamic_field", field=name)
        return name
    value = spec.read(order, settings) if order is not None else None
    return spec.default(settings) if value is None else value


def substitute_tokens(text: str, lookup: Callable[[str], str | None]) -> str:
    """Replace each ``{{name}}`` for which *lookup* returns a string.

    A single pass: replacements are not rescanned, and tokens for which
    *lookup* returns None stay in place.
    """

    def replace(match: re.Match) -> str:
        value = lookup(match.group(1))
        return match.group(0) if value is None else value

    return _TOKEN.sub(replace, text)


def substitute_placeholders(
    text: str,
    order: Order | None,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> str:
    """Replace every known ``{{FIELD}}`` in *text*; leave everything else."""
    return substitute_tokens(text, order_field_lookup(order, settings))


def order_field_lookup(
    order: Order | None,
    settings: RenderSettings = DEFAULT_SETTINGS,
) -> Callable[[str], str | None]:
    def lookup(name: str) -> str | None:
        if name not in FIELDS:
            return None
        return resolve_field(name, order, settings)

    return lookup
