# services/receipt_service.py
from datetime import datetime
from typing import Sequence

from models.bill import Bill
from models.cart import LineItem

# receipt_service.py turns cart items and bills into printable lines.
# The same lines are shown on screen and appended to the receipt file.

SEPARATOR = "-" * 34
TABLE_RULE = "-" * 67
RECEIPT_TITLE = "        SHOP RECEIPT"
RECEIPT_FOOTER = "Thank you for shopping!"


def format_cart_table(items: Sequence[LineItem]) -> list[str]:
    lines = [
        "--- Shopping Cart ---",
        f"{'Code':<10} {'Name':<30} {'Qty':<8} {'Price':<10} {'Subtotal':<10}",
        TABLE_RULE,
    ]
    total = 0.0
    for it in items:
        lines.append(
            f"{it.code:<10} {it.name:<30} {it.quantity:<8d} "
            f"${it.unit_price:<9.2f} ${it.subtotal:<9.2f}"
        )
        total += it.subtotal
    lines.append(TABLE_RULE)
    lines.append(f"{'':<50} Total: ${total:.2f}")
    return lines


def format_item_details(item: LineItem, with_subtotal: bool = True) -> list[str]:
    lines = [
        f"Code: {item.code}",
        f"Name: {item.name}",
        f"Quantity: {item.quantity}",
        f"Unit Price: ${item.unit_price:.2f}",
    ]
    if with_subtotal:
        lines.append(f"Subtotal: ${item.subtotal:.2f}")
    return lines


def format_receipt(bill: Bill, issued_at: datetime | None = None) -> list[str]:
    # Receipt item rows are column aligned, not pipe separated,
    # so a receipt can never be read back as cart data.
    when = issued_at or bill.issued_at
    lines = [
        SEPARATOR,
        RECEIPT_TITLE,
        f"Date: {when.strftime('%Y-%m-%d %H:%M:%S')}",
        SEPARATOR,
        f"{'Code':<6} {'Name':<20} {'Qty':<4} {'Price':<8} {'Subtotal':<10}",
        SEPARATOR,
    ]
    for it in bill.lines:
        lines.append(
            f"{it.code:<6} {it.name:<20} {it.quantity:<4d} "
            f"${it.unit_price:<7.2f} ${it.subtotal:<9.2f}"
        )
    lines += [
        SEPARATOR,
        f"Total: ${bill.total:.2f}",
        f"Discount: ${bill.discount:.2f}",
        f"Final Bill: ${bill.final_bill:.2f}",
        SEPARATOR,
        RECEIPT_FOOTER,
    ]
    return lines
