import pytest

import config
from models.cart import LineItem, calculate_subtotal
from models.errors import EmptyCartError
from services.billing_service import (
    BillingService,
    DiscountRule,
    ThresholdDiscountRule,
    calculate_total,
)


def items_totalling(*subtotals: float) -> list[LineItem]:
    return [LineItem(f"C{i}", f"Item {i}", 1, s) for i, s in enumerate(subtotals)]


@pytest.mark.parametrize("qty, price", [(1, 0.01), (10, 2.5), (3, 19.99), (200, 7.25)])
def test_subtotal(qty: int, price: float) -> None:
    assert calculate_subtotal(qty, price) == qty * price
    assert LineItem("X", "x", qty, price).subtotal == qty * price


def test_total_is_sum_of_subtotals() -> None:
    items = [LineItem("A", "a", 3, 1.25), LineItem("B", "b", 2, 10.0)]
    assert calculate_total(items) == sum(it.subtotal for it in items)
    assert calculate_total([]) == 0.0


def test_no_discount_below_threshold() -> None:
    billing = BillingService()
    total, discount, final = billing.calculate_final_bill(items_totalling(499.99))
    assert discount == 0.0
    assert final == total


def test_discount_at_threshold() -> None:
    billing = BillingService()
    total, discount, final = billing.calculate_final_bill(items_totalling(500.0))
    assert discount == 50.0
    assert final == 450.0


def test_discount_on_600_total() -> None:
    billing = BillingService()
    total, discount, final = billing.calculate_final_bill(items_totalling(250.0, 350.0))
    assert total == 600.0
    assert discount == 60.0
    assert final == 540.0


def test_discount_is_rounded_to_cents() -> None:
    rule = ThresholdDiscountRule(500.0, 0.10)
    assert rule.discount(512.37, []) == round(512.37 * 0.10, 2)


def test_pen_scenario() -> None:
    bill = BillingService().generate_bill([LineItem("A1", "Pen", 10, 2.50)])
    assert bill.lines[0].subtotal == 25.0
    assert bill.total == 25.0
    assert bill.discount == 0.0
    assert bill.final_bill == 25.0


def test_generate_bill_rejects_empty_cart() -> None:
    with pytest.raises(EmptyCartError):
        BillingService().generate_bill([])


def test_tax_rate_is_not_applied() -> None:
    assert config.TAX_RATE == 0.05
    bill = BillingService().generate_bill(items_totalling(100.0))
    assert bill.final_bill == 100.0


class FlatOff(DiscountRule):
    def __init__(self, amount: float):
        self.amount = amount

    def discount(self, total, items):
        return self.amount


def test_rules_stack_and_never_exceed_total() -> None:
    billing = BillingService([ThresholdDiscountRule(), FlatOff(5.0)])
    assert billing.calculate_discount(600.0) == 65.0

    billing = BillingService([FlatOff(50.0)])
    total, discount, final = billing.calculate_final_bill(items_totalling(20.0))
    assert discount == 20.0
    assert final == 0.0
