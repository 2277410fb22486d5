# models/cart.py
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

from config import MAX_ITEMS
from models.errors import CartFullError, DuplicateItemError, ItemNotFoundError

# Cart model representing the shopping cart being billed.


def calculate_subtotal(quantity: int, unit_price: float) -> float:
    # No rounding here, two decimals is a display concern.
    return quantity * unit_price


@dataclass
class LineItem:
    code: str
    name: str
    quantity: int
    unit_price: float
    subtotal: float = field(init=False)

    def __post_init__(self):
        self.recalculate()

    def recalculate(self) -> float:
        # subtotal is always derived, never trusted from input
        self.subtotal = calculate_subtotal(self.quantity, self.unit_price)
        return self.subtotal


class Cart:
    def __init__(self, capacity: int = MAX_ITEMS):
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity <= 0:
            raise ValueError("Cart capacity must be a positive integer.")
        self.capacity = capacity
        self.items: list[LineItem] = []

    @classmethod
    def from_items(cls, items: Iterable[LineItem], capacity: int = MAX_ITEMS) -> "Cart":
        cart = cls(capacity)
        for item in items:
            cart.add(item)
        return cart

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.list())

    @property
    def is_full(self) -> bool:
        return len(self.items) >= self.capacity

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find_by_code(self, code: str) -> int | None:
        # first exact, case-sensitive match
        for index, item in enumerate(self.items):
            if item.code == code:
                return index
        return None

    def get(self, code: str) -> LineItem | None:
        index = self.find_by_code(code)
        if index is None:
            return None
        return self.items[index]

    def require(self, code: str) -> LineItem:
        item = self.get(code)
        if item is None:
            raise ItemNotFoundError(code)
        return item

    def check_capacity(self) -> None:
        if self.is_full:
            raise CartFullError("Error: Cart is full. Cannot add more items.")

    def check_new_code(self, code: str) -> None:
        if self.find_by_code(code) is not None:
            raise DuplicateItemError(
                "Error: Item with this code already exists. Use Update option instead."
            )

    def add(self, item: LineItem) -> LineItem:
        if item.quantity <= 0:
            raise ValueError("The quantity must be a positive number.")
        if item.unit_price <= 0:
            raise ValueError("The unit price must be a positive number.")
        self.check_capacity()
        self.check_new_code(item.code)
        item.recalculate()
        self.items.append(item)
        return item

    def update(self, code: str, quantity: int | None = None,
               unit_price: float | None = None) -> LineItem:
        item = self.require(code)
        # both values are checked before either is written
        if quantity is not None and quantity <= 0:
            raise ValueError("The quantity must be a positive number.")
        if unit_price is not None and unit_price <= 0:
            raise ValueError("The unit price must be a positive number.")
        if quantity is not None:
            item.quantity = quantity
        if unit_price is not None:
            item.unit_price = unit_price
        item.recalculate()
        return item

    def remove(self, code: str) -> LineItem:
        index = self.find_by_code(code)
        if index is None:
            raise ItemNotFoundError(code)
        # list.pop keeps the relative order of the remaining items
        return self.items.pop(index)

    def list(self) -> tuple[LineItem, ...]:
        # copies; stored items only change through update()
        return tuple(replace(item) for item in self.items)
