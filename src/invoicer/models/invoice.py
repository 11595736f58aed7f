from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation


def _text(value: object) -> str:
    """Display strings: missing values render as empty text."""
    if value is None:
        return ""
    return str(value)


def _decimal(value: object) -> Decimal:
    if value is None or value == "":
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    # str() first so float inputs keep their shortest repr (2.675, not 2.67499...)
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid numeric value: '{value}'") from None
    if not d.is_finite():
        raise ValueError(f"Invalid numeric value: '{value}'")
    return d


def _int(value: object) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Invalid quantity: '{value}'")
    if value is None or value == "":
        return 0
    if isinstance(value, int):
        return value
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Invalid quantity: '{value}'") from None
    # 2.7 is rejected, never truncated
    if not d.is_finite() or d != d.to_integral_value():
        raise ValueError(f"Invalid quantity: '{value}'")
    return int(d)


def _mapping(value: object, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, not {type(value).__name__}")
    return value


def _list(value: object, what: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list | tuple):
        raise ValueError(f"{what} must be a list, not {type(value).__name__}")
    return list(value)


@dataclass(frozen=True)
class SizeBreakdown:
    """Quantity and price of one size variant of a line item."""

    size: str
    quantity: int
    price: Decimal
    total: Decimal  # quantity * price, computed by the caller

    @classmethod
    def from_dict(cls, d: dict) -> SizeBreakdown:
        return cls(
            size=_text(d.get("size")),
            quantity=_int(d.get("quantity")),
            price=_decimal(d.get("price")),
            total=_decimal(d.get("total")),
        )


@dataclass(frozen=True)
class LineItem:
    dress_code: str
    dress_name: str
    photo: str  # URI or data URI, resolved by the PDF engine
    sizes: tuple[SizeBreakdown, ...] = ()
    total_quantity: int = 0
    total_amount: Decimal = Decimal(0)

    @classmethod
    def from_dict(cls, d: dict) -> LineItem:
        return cls(
            dress_code=_text(d.get("dressCode")),
            dress_name=_text(d.get("dressName")),
            photo=_text(d.get("photo")),
            sizes=tuple(
                SizeBreakdown.from_dict(_mapping(s, "size"))
                for s in _list(d.get("sizes"), "sizes")
            ),
            total_quantity=_int(d.get("totalQuantity")),
            total_amount=_decimal(d.get("totalAmount")),
        )


@dataclass(frozen=True)
class Totals:
    total_items: int = 0
    total_quantity: int = 0
    grand_total: Decimal = Decimal(0)

    @classmethod
    def from_dict(cls, d: dict) -> Totals:
        return cls(
            total_items=_int(d.get("totalItems")),
            total_quantity=_int(d.get("totalQuantity")),
            grand_total=_decimal(d.get("grandTotal")),
        )


@dataclass(frozen=True)
class InvoiceRecord:
    """Invoice data rendered into a PDF.

    The totals on line items and on the invoice are rendered exactly as
    supplied. Keeping them consistent with the size breakdowns is the caller's
    job; see ``invoicer.utils.validators.check_consistency`` for an opt-in check.
    """

    invoice_number: str
    invoice_date: str
    shop_name: str
    items: tuple[LineItem, ...] = ()
    totals: Totals = field(default_factory=Totals)

    @classmethod
    def from_dict(cls, d: dict) -> InvoiceRecord:
        """Create a record from the camelCase wire payload (JSON or YAML)."""
        return cls(
            invoice_number=_text(d.get("invoiceNumber")),
            invoice_date=_text(d.get("invoiceDate")),
            shop_name=_text(d.get("shopName")),
            items=tuple(
                LineItem.from_dict(_mapping(i, "item")) for i in _list(d.get("items"), "items")
            ),
            totals=Totals.from_dict(_mapping(d.get("totals"), "totals")),
        )
