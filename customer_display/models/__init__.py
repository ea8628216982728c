# Customer Display Models

from .cart import (
    Cart,
    CartItem,
    CartResponse,
    Customer,
    Discount,
    DiscountType,
    SnapshotModel,
    Tax,
)
from .payment import PaymentResponse, PaymentState, PaymentStatus

__all__ = [
    "Cart",
    "CartItem",
    "CartResponse",
    "Customer",
    "Discount",
    "DiscountType",
    "SnapshotModel",
    "Tax",
    "PaymentResponse",
    "PaymentState",
    "PaymentStatus",
]
