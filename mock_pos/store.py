"""In-memory POS state for the mock API"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from customer_display.models import (
    Cart,
    CartItem,
    Customer,
    Discount,
    DiscountType,
    PaymentState,
    PaymentStatus,
    Tax,
)

from .models import CartItemInput


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class PosStateStore:
    """
    Current cart and payment status of a single POS terminal.

    Totals are computed here, as the real POS backend does; the display
    only ever reads them.
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.online = True
        self.success = True
        self.tax_rate = 0.0
        self.cart = self._build_cart([], Discount(type=DiscountType.FIXED, value=0), 0.0)
        self.payment_status = PaymentStatus(status=PaymentState.IDLE, amount=0.0)

    def replace_cart(
        self,
        items: list[CartItemInput],
        discount: Discount,
        tax_rate: float,
        customer: Optional[Customer] = None,
        notes: Optional[str] = None,
    ) -> Cart:
        """Replace the cart contents and recalculate totals"""
        self.tax_rate = tax_rate
        self.cart = self._build_cart(
            [self._to_cart_item(item) for item in items],
            discount,
            tax_rate,
            customer=customer,
            notes=notes,
        )
        return self.cart

    def add_item(self, item: CartItemInput) -> Cart:
        """Add an item, merging quantities for the same unweighted product"""
        items = list(self.cart.items)
        existing = next(
            (
                i for i, cart_item in enumerate(items)
                if cart_item.product_id == item.product_id and cart_item.weight is None
            ),
            None,
        )

        if existing is not None and item.weight is None:
            merged = items[existing]
            quantity = merged.quantity + item.quantity
            items[existing] = merged.model_copy(
                update={"quantity": quantity, "total": round(merged.price * quantity, 2)}
            )
        else:
            items.append(self._to_cart_item(item))

        self.cart = self._build_cart(
            items,
            self.cart.discount,
            self.tax_rate,
            customer=self.cart.customer,
            notes=self.cart.notes,
        )
        return self.cart

    def clear_cart(self) -> Cart:
        """Remove all items, customer and notes"""
        self.cart = self._build_cart([], Discount(type=DiscountType.FIXED, value=0), self.tax_rate)
        return self.cart

    def set_payment_status(
        self,
        status: PaymentState,
        amount: float = 0.0,
        method: Optional[str] = None,
        transaction_id: Optional[str] = None,
    ) -> PaymentStatus:
        self.payment_status = PaymentStatus(
            status=status,
            timestamp=utc_timestamp(),
            amount=amount,
            method=method,
            transaction_id=transaction_id,
        )
        return self.payment_status

    def _to_cart_item(self, item: CartItemInput) -> CartItem:
        # Weighted goods are priced per unit of weight
        multiplier = item.weight if item.weight is not None else item.quantity
        return CartItem(
            id=item.id or str(uuid.uuid4()),
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            price=item.price,
            total=round(item.price * multiplier, 2),
            weight=item.weight,
            unit=item.unit,
            sku=item.sku,
            barcode=item.barcode,
        )

    def _build_cart(
        self,
        items: list[CartItem],
        discount: Discount,
        tax_rate: float,
        customer: Optional[Customer] = None,
        notes: Optional[str] = None,
    ) -> Cart:
        subtotal = sum(item.total for item in items)
        if discount.type == DiscountType.PERCENTAGE:
            discount_amount = subtotal * min(discount.value, 100) / 100
        else:
            discount_amount = min(discount.value, subtotal)
        taxable = subtotal - discount_amount
        tax_amount = round(taxable * tax_rate, 2)

        return Cart(
            items=tuple(items),
            discount=discount,
            tax=Tax(rate=tax_rate, amount=tax_amount),
            customer=customer,
            notes=notes,
            total=round(taxable + tax_amount, 2),
            last_updated=utc_timestamp(),
        )


# Singleton instance
pos_store = PosStateStore()


def get_store() -> PosStateStore:
    """Dependency returning the shared store"""
    return pos_store
