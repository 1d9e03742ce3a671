"""Order snapshot: the data a receipt is printed from.

The point-of-sale system owns orders; the receipt engine only reads an
immutable snapshot of one.  Every class here is frozen so a render pass
cannot mutate its input.

``Order.from_dict()`` decodes the camelCase JSON shape the point of sale
sends.  Optional sub-structures (customer, table) stay ``None`` when
absent so the value resolver can substitute its documented defaults.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from receipt_engine.domain.exceptions import ValidationError
from receipt_engine.domain.model.value_objects import Money


class PromotionType(Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"

    @staticmethod
    def parse(raw: object) -> PromotionType:
        # Anything that is not a percentage prints as a fixed discount.
        return PromotionType.PERCENTAGE if raw == "PERCENTAGE" else PromotionType.FIXED


@dataclass(frozen=True)
class CustomerInfo:
    customer_id: str
    name: str
    member_status: str | None = None
    loyalty_points: int = 0
    member_since: str | None = None


@dataclass(frozen=True)
class TableInfo:
    table_number: str
    server_name: str
    guest_count: int = 1
    service_rating: int | float | None = None


@dataclass(frozen=True)
class LineItem:
    """One purchased product, with prices as charged."""

    name: str
    quantity: int
    unit_price: Money
    total_price: Money
    sku: str | None = None
    category: str | None = None
    modifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class ItemPromotion:
    promotion_name: str
    discount_amount: Money


@dataclass(frozen=True)
class OrderPromotion:
    """Whole-order discount.

    For PERCENTAGE promotions ``discount_amount`` is printed twice: once
    as the percentage in the label and once as the deducted amount.
    """

    promotion_name: str
    discount_amount: Money
    promotion_type: PromotionType = PromotionType.FIXED


@dataclass(frozen=True)
class Order:
    store_name: str = ""
    store_number: str = ""
    order_id: str = ""
    timestamp: datetime | None = None
    subtotal: Money = field(default_factory=Money.zero)
    tax_rate: Decimal = Decimal("0")  # fraction, 0.085 == 8.5%
    tax_amount: Money = field(default_factory=Money.zero)
    total_amount: Money = field(default_factory=Money.zero)
    payment_method: str | None = None
    customer_info: CustomerInfo | None = None
    table_info: TableInfo | None = None
    items: tuple[LineItem, ...] = ()
    item_promotions: tuple[ItemPromotion, ...] = ()
    order_promotions: tuple[OrderPromotion, ...] = ()

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def total_quantity(self) -> int:
        return sum(item.quantity for item in self.items)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def from_dict(raw: Mapping) -> Order:
        """Decode the point-of-sale JSON shape, raising ValidationError on bad data."""
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Order must be an object, got {type(raw).__name__}")

        customer = raw.get("customerInfo")
        table = raw.get("tableInfo")
        return Order(
            store_name=_text(raw, "storeName"),
            store_number=_text(raw, "storeNumber"),
            order_id=_text(raw, "orderId"),
            timestamp=_timestamp(raw.get("timestamp")),
            subtotal=_money(raw, "subtotal"),
            tax_rate=_decimal(raw, "taxRate"),
            tax_amount=_money(raw, "taxAmount"),
            total_amount=_money(raw, "totalAmount"),
            payment_method=_optional_text(raw, "paymentMethod"),
            customer_info=_customer(customer) if customer is not None else None,
            table_info=_table(table) if table is not None else None,
            items=tuple(_line_item(i) for i in _objects(raw, "items")),
            item_promotions=tuple(
                ItemPromotion(
                    promotion_name=_text(p, "promotionName"),
                    discount_amount=_money(p, "discountAmount"),
                )
                for p in _objects(raw, "itemPromotions")
            ),
            order_promotions=tuple(
                OrderPromotion(
                    promotion_name=_text(p, "promotionName"),
                    discount_amount=_money(p, "discountAmount"),
                    promotion_type=PromotionType.parse(p.get("promotionType")),
                )
                for p in _objects(raw, "orderPromotions")
            ),
        )

    def to_dict(self) -> dict:
        return {
            "storeName": self.store_name,
            "storeNumber": self.store_number,
            "orderId": self.order_id,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "subtotal": str(self.subtotal.amount),
            "taxRate": str(self.tax_rate),
            "taxAmount": str(self.tax_amount.amount),
            "totalAmount": str(self.total_amount.amount),
            "paymentMethod": self.payment_method,
            "customerInfo": (
                {
                    "customerId": self.customer_info.customer_id,
                    "name": self.customer_info.name,
                    "memberStatus": self.customer_info.member_status,
                    "loyaltyPoints": self.customer_info.loyalty_points,
                    "memberSince": self.customer_info.member_since,
                }
                if self.customer_info
                else None
            ),
            "tableInfo": (
                {
                    "tableNumber": self.table_info.table_number,
                    "serverName": self.table_info.server_name,
                    "guestCount": self.table_info.guest_count,
                    "serviceRating": self.table_info.service_rating,
                }
                if self.table_info
                else None
            ),
            "items": [
                {
                    "name": item.name,
                    "quantity": item.quantity,
                    "unitPrice": str(item.unit_price.amount),
                    "totalPrice": str(item.total_price.amount),
                    "sku": item.sku,
                    "category": item.category,
                    "modifiers": list(item.modifiers),
                }
                for item in self.items
            ],
            "itemPromotions": [
                {
                    "promotionName": p.promotion_name,
                    "discountAmount": str(p.discount_amount.amount),
                }
                for p in self.item_promotions
            ],
            "orderPromotions": [
                {
                    "promotionName": p.promotion_name,
                    "discountAmount": str(p.discount_amount.amount),
                    "promotionType": p.promotion_type.value,
                }
                for p in self.order_promotions
            ],
        }


# ---------------------------------------------------------------------------
# Decoding helpers
# ---------------------------------------------------------------------------


def _customer(raw: Mapping) -> CustomerInfo:
    if not isinstance(raw, Mapping):
        raise ValidationError("customerInfo must be an object")
    return CustomerInfo(
        customer_id=_text(raw, "customerId"),
        name=_text(raw, "name"),
        member_status=_optional_text(raw, "memberStatus"),
        loyalty_points=_int(raw, "loyaltyPoints", 0),
        member_since=_optional_text(raw, "memberSince"),
    )


def _table(raw: Mapping) -> TableInfo:
    if not isinstance(raw, Mapping):
        raise ValidationError("tableInfo must be an object")
    rating = raw.get("serviceRating")
    if rating is not None and (isinstance(rating, bool) or not isinstance(rating, (int, float))):
        raise ValidationError(f"serviceRating must be a number, got {rating!r}")
    return TableInfo(
        table_number=_text(raw, "tableNumber"),
        server_name=_text(raw, "serverName"),
        guest_count=_int(raw, "guestCount", 1),
        service_rating=rating,
    )


def _line_item(raw: Mapping) -> LineItem:
    if not isinstance(raw, Mapping):
        raise ValidationError("Each order item must be an object")
    modifiers = raw.get("modifiers") or []
    if not isinstance(modifiers, list):
        raise ValidationError(f"Item modifiers must be a list, got {modifiers!r}")
    return LineItem(
        name=_text(raw, "name"),
        quantity=_int(raw, "quantity", 1),
        unit_price=_money(raw, "unitPrice"),
        total_price=_money(raw, "totalPrice"),
        sku=_optional_text(raw, "sku"),
        category=_optional_text(raw, "category"),
        modifiers=tuple(str(m) for m in modifiers),
    )


def _objects(raw: Mapping, key: str) -> list[Mapping]:
    value = raw.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
        raise ValidationError(f"'{key}' must be a list of objects")
    return value


def _text(raw: Mapping, key: str) -> str:
    value = raw.get(key)
    return "" if value is None else str(value)


def _optional_text(raw: Mapping, key: str) -> str | None:
    value = raw.get(key)
    return None if value is None else str(value)


def _int(raw: Mapping, key: str, default: int) -> int:
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValidationError(f"'{key}' must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"'{key}' must be an integer, got {value!r}") from exc


def _decimal(raw: Mapping, key: str) -> Decimal:
    value = raw.get(key)
    if value is None:
        return Decimal("0")
    return Money.of(value).amount


def _money(raw: Mapping, key: str) -> Money:
    value = raw.get(key)
    if value is None:
        return Money.zero()
    return Money.of(value)


def _timestamp(value: object) -> datetime | None:
    """Epoch milliseconds or ISO-8601; naive values are taken as UTC."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
