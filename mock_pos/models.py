"""Request models for the mock POS API"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from customer_display.models import Customer, Discount, DiscountType, PaymentState


class ApiRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartItemInput(ApiRequest):
    """Item sent by the POS terminal"""
    product_id: str
    name: str
    quantity: int = Field(default=1, gt=0)
    price: float = Field(ge=0)
    id: Optional[str] = None
    weight: Optional[float] = Field(default=None, gt=0)
    unit: Optional[str] = None
    sku: Optional[str] = None
    barcode: Optional[str] = None


class UpdateCartRequest(ApiRequest):
    """Request to replace the whole cart"""
    items: list[CartItemInput] = []
    discount: Discount = Discount(type=DiscountType.FIXED, value=0)
    tax_rate: float = Field(default=0.0, ge=0)
    customer: Optional[Customer] = None
    notes: Optional[str] = None


class UpdatePaymentRequest(ApiRequest):
    """Request to set the payment status"""
    status: PaymentState
    amount: float = Field(default=0.0, ge=0)
    method: Optional[str] = None
    transaction_id: Optional[str] = None


class AvailabilityRequest(ApiRequest):
    """Simulate an outage (HTTP 503) or an application-level failure"""
    online: bool = True
    success: bool = True
