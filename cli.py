# cli.py
import argparse
import logging
import sys
from collections.abc import Sequence
from enum import IntEnum

from config import MAX_CODE_LEN, MAX_NAME_LEN, STORAGE_DIR
from data.repository import CartRepository
from models.cart import Cart, LineItem
from models.errors import CartError, EmptyCartError, StorageError
from services.billing_service import BillingService
from services.input_service import InputClosedError, Prompter
from services.receipt_service import format_cart_table, format_item_details, format_receipt
from utils.logger import setup_logger
from utils.screen import NullScreen, TerminalScreen

logger = logging.getLogger("cartbill.cli")

MENU_RULE = "-" * 34


class Command(IntEnum):
    ADD = 1
    VIEW = 2
    SEARCH = 3
    UPDATE = 4
    REMOVE = 5
    GENERATE_BILL = 6
    SAVE_AND_EXIT = 7

    @classmethod
    def from_choice(cls, choice: int) -> "Command | None":
        try:
            return cls(choice)
        except ValueError:
            return None


MENU_LABELS = {
    Command.ADD: "Add Item",
    Command.VIEW: "View Cart",
    Command.SEARCH: "Search Item",
    Command.UPDATE: "Update Item",
    Command.REMOVE: "Remove Item",
    Command.GENERATE_BILL: "Generate Bill",
    Command.SAVE_AND_EXIT: "Save & Exit",
}


class UpdateChoice(IntEnum):
    QUANTITY = 1
    UNIT_PRICE = 2
    BOTH = 3
    CANCEL = 4


class CartApp:
    def __init__(self, cart: Cart, repo: CartRepository, prompter: Prompter,
                 billing: BillingService | None = None, screen=None):
        self.cart = cart
        self.repo = repo
        self.prompter = prompter
        self.billing = billing or BillingService()
        self.screen = screen or NullScreen()
        self.running = False

        self.handlers = {
            Command.ADD: self.add_item,
            Command.VIEW: self.view_cart,
            Command.SEARCH: self.search_item,
            Command.UPDATE: self.update_item,
            Command.REMOVE: self.remove_item,
            Command.GENERATE_BILL: self.generate_bill,
            Command.SAVE_AND_EXIT: self.save_and_exit,
        }

    def say(self, text: str = "") -> None:
        self.prompter.write(text)

    def render_menu(self) -> None:
        self.say(MENU_RULE)
        self.say("   SHOPPING CART AND BILL GENERATOR")
        self.say(MENU_RULE)
        for command, label in MENU_LABELS.items():
            self.say(f"{command.value}. {label}")
        self.say(MENU_RULE)

    def run(self) -> None:
        self.running = True
        try:
            while self.running:
                self.render_menu()
                choice = self.prompter.read_int("Enter your choice: ", positive=False)
                self.dispatch(choice)
                if self.running:
                    self.screen.pause()
                    self.screen.clear()
        except InputClosedError:
            # no explicit Save & Exit, so nothing is written
            logger.warning("input closed, exiting without saving")
            self.running = False

    def dispatch(self, choice: int) -> None:
        command = Command.from_choice(choice)
        if command is None:
            self.say("\nInvalid choice! Please try again.")
            logger.info(f"invalid menu choice {choice}")
            return
        try:
            self.handlers[command]()
        except CartError as e:
            # domain rejection: report and go back to the menu
            self.say(str(e))
            logger.info(f"{command.name.lower()} declined: {e}")

    def _require_items(self, message: str = "\nCart is empty.") -> None:
        if self.cart.is_empty:
            raise EmptyCartError(message)

    def _lookup(self, prompt: str) -> LineItem:
        code = self.prompter.read_string(prompt, MAX_CODE_LEN)
        return self.cart.require(code)

    def add_item(self) -> None:
        self.cart.check_capacity()

        self.say("\n--- Add New Item ---")
        code = self.prompter.read_string("Enter item code: ", MAX_CODE_LEN)
        # duplicates are refused before asking for the rest of the item
        self.cart.check_new_code(code)

        name = self.prompter.read_string("Enter item name: ", MAX_NAME_LEN)
        quantity = self.prompter.read_int("Enter quantity (positive number): ")
        unit_price = self.prompter.read_positive_float("Enter unit price (positive number): ")

        item = self.cart.add(LineItem(code, name, quantity, unit_price))
        logger.info(f"cart add {item.code} '{item.name}' x {item.quantity} @ {item.unit_price:.2f}")
        self.say("Item added successfully!")

    def view_cart(self) -> None:
        self._require_items()
        self.say()
        for line in format_cart_table(self.cart.list()):
            self.say(line)

    def search_item(self) -> None:
        self._require_items()
        item = self._lookup("Enter item code to search: ")
        self.say("\n--- Item Found ---")
        for line in format_item_details(item):
            self.say(line)

    def update_item(self) -> None:
        self._require_items()
        item = self._lookup("Enter item code to update: ")

        self.say("\n--- Update Item ---")
        self.say("Current details:")
        for line in format_item_details(item, with_subtotal=False):
            self.say(line)

        self.say("\nWhat would you like to update?")
        self.say("1. Quantity")
        self.say("2. Unit Price")
        self.say("3. Both")
        self.say("4. Cancel")
        choice = self.prompter.read_int("Enter your choice: ")

        quantity = unit_price = None
        if choice == UpdateChoice.QUANTITY:
            quantity = self.prompter.read_int("Enter new quantity (positive number): ")
        elif choice == UpdateChoice.UNIT_PRICE:
            unit_price = self.prompter.read_positive_float("Enter new unit price (positive number): ")
        elif choice == UpdateChoice.BOTH:
            quantity = self.prompter.read_int("Enter new quantity (positive number): ")
            unit_price = self.prompter.read_positive_float("Enter new unit price (positive number): ")
        elif choice == UpdateChoice.CANCEL:
            self.say("Update cancelled.")
            return
        else:
            self.say("Invalid choice.")
            return

        self.cart.update(item.code, quantity=quantity, unit_price=unit_price)
        logger.info(
            f"cart update {item.code}: qty={item.quantity}, price={item.unit_price:.2f}, "
            f"subtotal={item.subtotal:.2f}"
        )
        self.say("Item updated successfully!")

    def remove_item(self) -> None:
        self._require_items()
        item = self._lookup("Enter item code to remove: ")

        confirmed = self.prompter.confirm(
            f"Are you sure you want to remove '{item.code} - {item.name}'? (1 for Yes, 0 for No): "
        )
        if not confirmed:
            self.say("Removal cancelled.")
            return

        self.cart.remove(item.code)
        logger.info(f"cart remove {item.code}")
        self.say("Item removed successfully!")

    def generate_bill(self) -> None:
        self._require_items("\nCart is empty. Cannot generate bill.")
        bill = self.billing.generate_bill(self.cart.list())
        receipt = format_receipt(bill)

        self.say()
        for line in receipt:
            self.say(line)

        try:
            self.repo.append_receipt(receipt)
        except StorageError as e:
            self.say(str(e))
            return
        self.say(f"\nReceipt saved to {self.repo.receipt_path} successfully!")

    def save_and_exit(self) -> None:
        # the session ends even if the save fails; the cart stays in memory until exit
        self.running = False
        try:
            self.repo.save_cart(self.cart.list())
        except StorageError as e:
            self.say(str(e))
            return
        self.say(f"Cart data saved to {self.repo.cart_path} successfully.")
        self.say("\nCart saved successfully. Exiting...")


def load_cart(repo: CartRepository, capacity: int, prompter: Prompter) -> Cart:
    result = repo.load_cart(capacity)
    if result.missing:
        prompter.write("No existing cart data found. Starting with an empty cart.")
        return result.cart
    if result.error is not None:
        prompter.write(f"Error: Unable to read {repo.cart_path}. Starting with an empty cart.")
        return result.cart

    if result.skipped:
        prompter.write(f"Warning: {len(result.skipped)} invalid records were skipped.")
    if result.truncated:
        prompter.write("Warning: Maximum items reached. Some items may not be loaded.")
    prompter.write(f"Loaded {result.loaded} items from {repo.cart_path}.")
    return result.cart


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cart-bill",
        description="Terminal shopping cart and bill generator.",
    )
    parser.add_argument("--storage-dir", default=STORAGE_DIR,
                        help="Directory for the cart file, receipts, settings and logs.")
    parser.add_argument("--file", dest="cart_file", default=None,
                        help="Cart file name or path (default from settings, bills.txt).")
    parser.add_argument("--receipts", dest="receipt_file", default=None,
                        help="Receipt file name or path (default from settings, receipts.txt).")
    parser.add_argument("--capacity", type=positive_int, default=None,
                        help="Maximum number of items in the cart (default 200).")
    parser.add_argument("--no-clear", action="store_true",
                        help="Do not pause and clear the screen between actions.")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Echo informational log messages to the console.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    repo = CartRepository(args.storage_dir)
    setup_logger(
        repo.storage_dir / "logs",
        console_level=logging.INFO if args.verbose else logging.WARNING,
    )

    settings = repo.load_settings()
    if args.cart_file:
        settings.cart_file = args.cart_file
    if args.receipt_file:
        settings.receipt_file = args.receipt_file
    if args.capacity:
        settings.capacity = args.capacity
    repo.apply_settings(settings)

    prompter = Prompter()
    cart = load_cart(repo, settings.capacity, prompter)

    interactive = not args.no_clear and sys.stdin.isatty()
    screen = TerminalScreen(prompter) if interactive else NullScreen()

    app = CartApp(cart, repo, prompter, screen=screen)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
