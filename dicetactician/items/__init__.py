from .item import Item
from .merchant import Merchant, create_random_item, select_merchant_kind

__all__ = [
    "Item",
    "Merchant",
    "create_random_item",
    "select_merchant_kind",
]
