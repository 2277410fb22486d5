# config.py
# Fixed constants for the shopping cart and bill generator.
# File paths and capacity can be overridden by settings.json or the command line;
# the billing constants cannot be changed at runtime.

MAX_ITEMS = 200          # cart capacity
MAX_CODE_LEN = 10        # input buffer size, codes keep at most 9 characters
MAX_NAME_LEN = 50        # names keep at most 49 characters

STORAGE_DIR = "data/storage"
CART_FILE = "bills.txt"
RECEIPT_FILE = "receipts.txt"
SETTINGS_FILE = "settings.json"

FIELD_SEPARATOR = "|"

DISCOUNT_THRESHOLD = 500.0
DISCOUNT_RATE = 0.10     # 10% off when total >= threshold
TAX_RATE = 0.05          # 5% VAT, defined but not applied to any bill
