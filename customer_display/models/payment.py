"""Payment status models for the customer display"""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from .cart import SnapshotModel


class PaymentState(str, Enum):
    """Payment progress reported by the POS"""
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    UNKNOWN = "unknown"


_KNOWN_STATES = {state.value for state in PaymentState}

_DISPLAY_MESSAGES = {
    PaymentState.PROCESSING: "Processing payment...",
    PaymentState.COMPLETED: "Payment completed!",
    PaymentState.FAILED: "Payment failed",
}


class PaymentStatus(SnapshotModel):
    """Current payment status of the cart"""
    status: PaymentState
    timestamp: Optional[str] = None
    amount: float = 0.0
    method: Optional[str] = None
    transaction_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def unrecognized_status_is_unknown(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in _KNOWN_STATES:
            return PaymentState.UNKNOWN
        return value

    @property
    def display_message(self) -> str:
        """Customer-facing label for the current status"""
        return _DISPLAY_MESSAGES.get(self.status, "Ready for payment")


class PaymentResponse(SnapshotModel):
    """Envelope returned by GET /cart/payment"""
    success: bool
    payment_status: Optional[PaymentStatus] = None
