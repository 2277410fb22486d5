# data/repository.py
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

from config import (
    CART_FILE,
    FIELD_SEPARATOR,
    MAX_ITEMS,
    RECEIPT_FILE,
    SETTINGS_FILE,
    STORAGE_DIR,
)
from models.cart import Cart, LineItem
from models.errors import StorageError

logger = logging.getLogger("cartbill.repository")

# Older versions appended receipts to the cart file itself, with item rows in
# the record format. Those blocks are recognised by their title and footer.
LEGACY_RECEIPT_TITLE = "SHOP RECEIPT"
LEGACY_RECEIPT_FOOTER = "Thank you for shopping!"

RECORD_FIELDS = 5


@dataclass
class Settings:
    cart_file: str = CART_FILE
    receipt_file: str = RECEIPT_FILE
    capacity: int = MAX_ITEMS


@dataclass
class LoadResult:
    cart: Cart
    skipped: list[tuple[int, str]] = field(default_factory=list)  # (line number, reason)
    truncated: bool = False
    missing: bool = False
    error: str | None = None

    @property
    def loaded(self) -> int:
        return len(self.cart)


class RecordError(ValueError):
    pass


def format_record(item: LineItem) -> str:
    return FIELD_SEPARATOR.join([
        item.code,
        item.name,
        str(item.quantity),
        f"{item.unit_price:.2f}",
        f"{item.subtotal:.2f}",
    ])


def parse_record(line: str) -> LineItem:
    # code|name|quantity|unit_price|subtotal
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != RECORD_FIELDS:
        raise RecordError(f"expected {RECORD_FIELDS} fields, got {len(fields)}")

    code, name, qty_text, price_text, subtotal_text = fields
    if code == "" or name == "":
        raise RecordError("empty code or name")

    try:
        quantity = int(qty_text)
    except ValueError:
        raise RecordError(f"quantity is not an integer: {qty_text!r}") from None
    try:
        unit_price = float(price_text)
        stored_subtotal = float(subtotal_text)
    except ValueError:
        raise RecordError("price or subtotal is not a number") from None

    if quantity <= 0:
        raise RecordError(f"quantity must be positive: {quantity}")
    if not math.isfinite(unit_price) or unit_price <= 0:
        raise RecordError(f"unit price must be positive: {price_text}")

    item = LineItem(code, name, quantity, unit_price)
    if abs(item.subtotal - stored_subtotal) > 0.01:
        logger.warning(
            f"stored subtotal {subtotal_text} for {code} does not match "
            f"{item.subtotal:.2f}, using the recalculated value"
        )
    return item


class CartRepository:
    def __init__(self, storage_dir: str | Path = STORAGE_DIR,
                 cart_file: str | Path = CART_FILE,
                 receipt_file: str | Path = RECEIPT_FILE):
        # base folder for the cart file, receipts and settings
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.cart_path = self._file_path(cart_file)
        self.receipt_path = self._file_path(receipt_file)

    def _file_path(self, filename: str | Path) -> Path:
        # absolute paths are kept as given
        return self.storage_dir / filename

    def apply_settings(self, settings: Settings) -> None:
        self.cart_path = self._file_path(settings.cart_file)
        self.receipt_path = self._file_path(settings.receipt_file)

    def _read_json(self, filename: str):
        # Missing, empty or corrupted JSON -> None, caller falls back to defaults.
        path = self._file_path(filename)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read().strip()
                if text == "":
                    return None
                return json.loads(text)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"could not read {path}: {e}")
            return None

    def load_settings(self) -> Settings:
        data = self._read_json(SETTINGS_FILE)
        settings = Settings()
        if not isinstance(data, dict):
            return settings

        if isinstance(data.get("cart_file"), str) and data["cart_file"]:
            settings.cart_file = data["cart_file"]
        if isinstance(data.get("receipt_file"), str) and data["receipt_file"]:
            settings.receipt_file = data["receipt_file"]

        capacity = data.get("capacity", MAX_ITEMS)
        if isinstance(capacity, int) and not isinstance(capacity, bool) and capacity > 0:
            settings.capacity = capacity
        else:
            logger.warning(f"invalid capacity in settings: {capacity!r}, using {MAX_ITEMS}")
        return settings

    def load_cart(self, capacity: int = MAX_ITEMS) -> LoadResult:
        """
        Read the cart file into a new Cart.

        - lines without a separator are not records and are ignored
        - legacy receipt blocks are ignored as a whole
        - malformed or duplicate records are skipped and reported
        - loading stops once the cart is full, the file is left untouched
        """
        result = LoadResult(cart=Cart(capacity))
        path = self.cart_path
        if not path.exists():
            result.missing = True
            logger.info(f"no cart file at {path}, starting empty")
            return result

        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            result.error = str(e)
            logger.error(f"could not read cart file {path}: {e}")
            return result

        items: list[LineItem] = []
        codes: set[str] = set()
        in_receipt = False
        for number, line in enumerate(lines, start=1):
            stripped = line.strip()
            if stripped == LEGACY_RECEIPT_TITLE:
                in_receipt = True
                continue
            if in_receipt:
                if stripped == LEGACY_RECEIPT_FOOTER:
                    in_receipt = False
                continue
            if FIELD_SEPARATOR not in line:
                continue

            try:
                item = parse_record(line)
            except RecordError as e:
                result.skipped.append((number, str(e)))
                logger.warning(f"skipping line {number} of {path}: {e}")
                continue

            if item.code in codes:
                reason = f"duplicate code {item.code!r}"
                result.skipped.append((number, reason))
                logger.warning(f"skipping line {number} of {path}: {reason}")
                continue

            # only a valid record that does not fit counts as truncation
            if len(items) >= capacity:
                result.truncated = True
                logger.warning(
                    f"cart capacity {capacity} reached at line {number}, "
                    f"remaining records in {path} not loaded"
                )
                break

            items.append(item)
            codes.add(item.code)

        result.cart = Cart.from_items(items, capacity)

        logger.info(f"loaded {result.loaded} items from {path}")
        return result

    def save_cart(self, items) -> None:
        # Full overwrite: one record per item, in cart order, nothing else.
        path = self.cart_path
        try:
            with open(path, "w", encoding="utf-8") as f:
                for item in items:
                    f.write(format_record(item) + "\n")
        except OSError as e:
            logger.error(f"could not write cart file {path}: {e}")
            raise StorageError("Error: Unable to open file for writing.") from e
        logger.info(f"saved {len(items)} items to {path}")

    def append_receipt(self, lines: list[str]) -> None:
        path = self.receipt_path
        try:
            with open(path, "a", encoding="utf-8") as f:
                f.write("\n")
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            logger.error(f"could not append receipt to {path}: {e}")
            raise StorageError("Error: Unable to save receipt to file.") from e
        logger.info(f"receipt appended to {path}")
