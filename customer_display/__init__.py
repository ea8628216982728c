"""
Customer Display

Keeps a customer-facing screen in sync with the POS cart and payment
status by polling the cart API.
"""

from .core import DisplayStateStore, Settings, get_settings
from .models import Cart, CartItem, Customer, Discount, PaymentState, PaymentStatus, Tax
from .services import CartApiClient, CartSyncLoop, LoopState, PollingHandle

__version__ = "1.0.0"

__all__ = [
    "DisplayStateStore",
    "Settings",
    "get_settings",
    "Cart",
    "CartItem",
    "Customer",
    "Discount",
    "PaymentState",
    "PaymentStatus",
    "Tax",
    "CartApiClient",
    "CartSyncLoop",
    "LoopState",
    "PollingHandle",
]
