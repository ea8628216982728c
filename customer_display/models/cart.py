"""Cart models for the customer display"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Immutable snapshot decoded from a camelCase API payload"""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class CartItem(SnapshotModel):
    """Line item in the POS cart"""
    id: str
    product_id: str
    name: str
    quantity: int = Field(ge=0)
    price: float = Field(ge=0)
    total: float
    # Weight-priced goods
    weight: Optional[float] = None
    unit: Optional[str] = None
    # Passed through from the POS, not interpreted here
    variant_id: Optional[str] = None
    original_price: Optional[float] = None
    member_price: Optional[float] = None
    source: Optional[str] = None
    discount: Optional[float] = None
    barcode: Optional[str] = None
    sku: Optional[str] = None
    cost: Optional[float] = None
    sold_by: Optional[str] = None


class Customer(SnapshotModel):
    """Customer attached to the cart"""
    id: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None

    @property
    def has_contact(self) -> bool:
        """Whether both name and phone are available for display"""
        return bool(self.name) and bool(self.phone)


class Discount(SnapshotModel):
    """Cart-level discount, resolved server-side"""
    type: DiscountType
    value: float = Field(ge=0)


class Tax(SnapshotModel):
    """Tax applied to the cart"""
    rate: float = Field(ge=0)
    amount: float


class Cart(SnapshotModel):
    """Point-of-sale cart as shown to the customer"""
    items: tuple[CartItem, ...] = ()
    discount: Discount
    tax: Tax
    customer: Optional[Customer] = None
    notes: Optional[str] = None
    total: float
    last_updated: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def item_count(self) -> int:
        return len(self.items)


class CartResponse(SnapshotModel):
    """Envelope returned by GET /cart"""
    success: bool
    cart: Optional[Cart] = None
    error: Optional[str] = None
    timestamp: Optional[str] = None
