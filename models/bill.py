# models/bill.py
from dataclasses import dataclass
from datetime import datetime

from models.cart import LineItem

# Bill model: a priced snapshot of the cart at the moment it was billed.


@dataclass(frozen=True)
class BillLine:
    code: str
    name: str
    quantity: int
    unit_price: float
    subtotal: float

    @classmethod
    def from_item(cls, item: LineItem) -> "BillLine":
        return cls(item.code, item.name, item.quantity, item.unit_price, item.subtotal)


@dataclass(frozen=True)
class Bill:
    lines: tuple[BillLine, ...]
    total: float
    discount: float
    final_bill: float
    issued_at: datetime
