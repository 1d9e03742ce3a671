"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
The enums decode leniently from the editor's strings where the printer
has a sensible fallback, and strictly where it does not.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from receipt_engine.domain.exceptions import DesignError, ValidationError


def format_fixed(value: Decimal, places: int) -> str:
    """Format *value* with exactly *places* decimals, rounding half-up."""
    exponent = Decimal(1).scaleb(-places)
    return f"{value.quantize(exponent, rounding=ROUND_HALF_UP):.{places}f}"


@dataclass(frozen=True)
class Money:
    """Monetary amount printed on a receipt.

    Uses Decimal so that "%.2f"-style output rounds half-up on the
    decimal value the order carried, not on its binary approximation.
    Negative amounts are allowed: refunds and discounts print as-is.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")

    # --- Display --------------------------------------------------------------

    def plain(self) -> str:
        """Two-decimal amount without a currency symbol, e.g. ``12.50``."""
        return format_fixed(self.amount, 2)

    def format(self, symbol: str = "$") -> str:
        return f"{symbol}{self.plain()}"

    def __str__(self) -> str:
        return self.format()

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        if isinstance(amount, bool):
            raise ValidationError(f"Invalid money amount: {amount!r}")
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))


class Alignment(Enum):
    LEFT = "LEFT"
    CENTER = "CENTER"
    RIGHT = "RIGHT"

    @staticmethod
    def parse(raw: object) -> Alignment:
        """Unknown or missing values align left, like the printer does."""
        if isinstance(raw, Alignment):
            return raw
        try:
            return Alignment(str(raw).upper())
        except ValueError:
            return Alignment.LEFT


class TextSize(Enum):
    SMALL = "SMALL"
    NORMAL = "NORMAL"
    LARGE = "LARGE"
    XLARGE = "XLARGE"

    @staticmethod
    def parse(raw: object) -> TextSize:
        if isinstance(raw, TextSize):
            return raw
        try:
            return TextSize(str(raw).upper())
        except ValueError:
            return TextSize.NORMAL


class BarcodeType(Enum):
    UPC_A = "UPC_A"
    UPC_E = "UPC_E"
    EAN13 = "EAN13"
    JAN13 = "JAN13"
    EAN8 = "EAN8"
    JAN8 = "JAN8"
    CODE39 = "CODE39"
    ITF = "ITF"
    CODABAR = "CODABAR"
    CODE93 = "CODE93"
    CODE128 = "CODE128"
    GS1_128 = "GS1_128"

    @staticmethod
    def parse(raw: object) -> BarcodeType:
        """Strict: the printer has no fallback symbology."""
        if isinstance(raw, BarcodeType):
            return raw
        try:
            return BarcodeType(raw)
        except ValueError:
            raise DesignError(f"Unsupported barcode type: {raw!r}") from None


@dataclass(frozen=True)
class TextStyle:
    bold: bool = False
    underline: bool = False
    size: TextSize = TextSize.NORMAL

    def to_dict(self) -> dict:
        return {"bold": self.bold, "underline": self.underline, "size": self.size.value}


SMALL_TEXT = TextStyle(size=TextSize.SMALL)
BOLD_TEXT = TextStyle(bold=True)
