"""Cart API routes for the mock POS"""

from fastapi import APIRouter, Depends, HTTPException

from customer_display.models import CartResponse, PaymentResponse

from ..models import CartItemInput, UpdateCartRequest, UpdatePaymentRequest
from ..store import PosStateStore, get_store, utc_timestamp

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def require_online(store: PosStateStore = Depends(get_store)) -> PosStateStore:
    """Fail with 503 while an outage is simulated"""
    if not store.online:
        raise HTTPException(status_code=503, detail="POS backend unavailable")
    return store


def cart_response(store: PosStateStore) -> CartResponse:
    if not store.success:
        return CartResponse(success=False, error="Cart service error", timestamp=utc_timestamp())
    return CartResponse(success=True, cart=store.cart, timestamp=utc_timestamp())


@router.get("", response_model=CartResponse)
async def get_cart(store: PosStateStore = Depends(require_online)):
    """Get the current cart"""
    return cart_response(store)


@router.put("", response_model=CartResponse)
async def replace_cart(
    request: UpdateCartRequest,
    store: PosStateStore = Depends(require_online),
):
    """Replace the cart contents"""
    store.replace_cart(
        request.items,
        request.discount,
        request.tax_rate,
        customer=request.customer,
        notes=request.notes,
    )
    return cart_response(store)


@router.post("/items", response_model=CartResponse)
async def add_item(
    request: CartItemInput,
    store: PosStateStore = Depends(require_online),
):
    """Add an item to the cart"""
    store.add_item(request)
    return cart_response(store)


@router.delete("", response_model=CartResponse)
async def clear_cart(store: PosStateStore = Depends(require_online)):
    """Clear the cart"""
    store.clear_cart()
    return cart_response(store)


@router.get("/payment", response_model=PaymentResponse)
async def get_payment_status(store: PosStateStore = Depends(require_online)):
    """Get the current payment status"""
    if not store.success:
        return PaymentResponse(success=False)
    return PaymentResponse(success=True, payment_status=store.payment_status)


@router.put("/payment", response_model=PaymentResponse)
async def set_payment_status(
    request: UpdatePaymentRequest,
    store: PosStateStore = Depends(require_online),
):
    """Set the payment status"""
    payment_status = store.set_payment_status(
        request.status,
        amount=request.amount,
        method=request.method,
        transaction_id=request.transaction_id,
    )
    return PaymentResponse(success=True, payment_status=payment_status)
