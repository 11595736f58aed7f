from __future__ import annotations

from invoicer.models.invoice import InvoiceRecord
from invoicer.utils.formatters import format_amount


def check_consistency(record: InvoiceRecord) -> list[str]:
    """Compare caller-computed totals against the size breakdowns.

    Returns one message per mismatch; an empty list means the record is
    arithmetically consistent. Nothing in the rendering pipeline calls this:
    the PDF always shows the numbers it was given.
    """
    problems: list[str] = []

    for i, item in enumerate(record.items, start=1):
        label = item.dress_code or f"item {i}"
        for s in item.sizes:
            expected = s.quantity * s.price
            if s.total != expected:
                problems.append(
                    f"{label} size {s.size}: total {format_amount(s.total)} "
                    f"!= {s.quantity} x {format_amount(s.price)} ({format_amount(expected)})"
                )
        qty = sum(s.quantity for s in item.sizes)
        if item.total_quantity != qty:
            problems.append(
                f"{label}: total quantity {item.total_quantity} != sum of sizes ({qty})"
            )
        amount = sum((s.total for s in item.sizes), start=0)
        if item.total_amount != amount:
            problems.append(
                f"{label}: total amount {format_amount(item.total_amount)} "
                f"!= sum of sizes ({format_amount(amount)})"
            )

    totals = record.totals
    if totals.total_items != len(record.items):
        problems.append(
            f"Total items {totals.total_items} != number of items ({len(record.items)})"
        )
    qty = sum(item.total_quantity for item in record.items)
    if totals.total_quantity != qty:
        problems.append(f"Total quantity {totals.total_quantity} != sum of items ({qty})")
    grand = sum((item.total_amount for item in record.items), start=0)
    if totals.grand_total != grand:
        problems.append(
            f"Grand total {format_amount(totals.grand_total)} "
            f"!= sum of items ({format_amount(grand)})"
        )
    return problems
