# models/errors.py
# Domain rejections raised by the cart and billing layers.
# The controller catches CartError, prints the message and returns to the menu.


class CartError(ValueError):
    """Base class for operations the cart declines."""


class CartFullError(CartError):
    pass


class DuplicateItemError(CartError):
    pass


class ItemNotFoundError(CartError):
    def __init__(self, code: str):
        super().__init__(f"Item with code '{code}' not found.")
        self.code = code


class EmptyCartError(CartError):
    pass


class StorageError(Exception):
    """A cart or receipt file could not be read or written."""
