# services/billing_service.py

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Sequence
import logging

from config import DISCOUNT_RATE, DISCOUNT_THRESHOLD
from models.bill import Bill, BillLine
from models.cart import LineItem
from models.errors import EmptyCartError

logger = logging.getLogger("cartbill.billing")


def calculate_total(items: Iterable[LineItem]) -> float:
    return sum((item.subtotal for item in items), 0.0)


class DiscountRule(ABC):
    # Abstract base class for bill-level discount rules.
    # Each rule sees the cart total and returns the amount to take off it.

    @abstractmethod
    def discount(self, total: float, items: Sequence[LineItem]) -> float:
        pass


class ThresholdDiscountRule(DiscountRule):
    # Percentage off the whole bill once the total reaches a threshold.
    # Example: threshold=500.0, rate=0.10 means "10% off bills of 500 or more".

    def __init__(self, threshold: float = DISCOUNT_THRESHOLD, rate: float = DISCOUNT_RATE):
        self.threshold = threshold
        self.rate = rate

    def discount(self, total, items):
        if total >= self.threshold:
            return round(total * self.rate, 2)
        return 0.0


class BillingService:
    # Applies every registered rule to the cart total.
    # Discounts from several rules add up but never exceed the total.

    def __init__(self, rules: List[DiscountRule] | None = None):
        if rules is None:
            rules = [ThresholdDiscountRule()]
        self.rules: List[DiscountRule] = list(rules)

    def calculate_discount(self, total: float, items: Sequence[LineItem] = ()) -> float:
        discount = 0.0
        for rule in self.rules:
            discount += rule.discount(total, items)
        # safety clamp
        return round(min(discount, total), 2)

    def calculate_final_bill(self, items: Sequence[LineItem]) -> tuple[float, float, float]:
        """
        Return (total, discount, final_bill) for the given items.
        final_bill is always total - discount.
        """
        total = calculate_total(items)
        discount = self.calculate_discount(total, items)
        return total, discount, total - discount

    def generate_bill(self, items: Sequence[LineItem], issued_at: datetime | None = None) -> Bill:
        if not items:
            raise EmptyCartError("Cart is empty. Cannot generate bill.")

        total, discount, final_bill = self.calculate_final_bill(items)
        bill = Bill(
            lines=tuple(BillLine.from_item(item) for item in items),
            total=total,
            discount=discount,
            final_bill=final_bill,
            issued_at=issued_at or datetime.now(),
        )
        logger.info(
            f"bill generated: items={len(bill.lines)}, total={total:.2f}, "
            f"discount={discount:.2f}, final={final_bill:.2f}"
        )
        return bill
