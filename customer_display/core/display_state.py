"""Display state tracking for the customer-facing screen"""

import inspect
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from ..models import Cart, PaymentStatus

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Cart unavailable"

# Endpoint whose failures explain an absent cart
CART_ENDPOINT = "/cart"


class CartView(str, Enum):
    """Which screen the display should show"""
    OFFLINE = "offline"
    WELCOME = "welcome"
    ITEMS = "items"


@dataclass(frozen=True)
class DisplayState:
    """Everything the renderer needs for one frame"""
    cart: Optional[Cart] = None
    payment_status: Optional[PaymentStatus] = None
    is_loading: bool = True
    error_message: Optional[str] = None
    last_refreshed: Optional[datetime] = None

    @property
    def cart_view(self) -> CartView:
        if self.cart is None:
            return CartView.OFFLINE
        if self.cart.is_empty:
            return CartView.WELCOME
        return CartView.ITEMS

    @property
    def payment_message(self) -> Optional[str]:
        if self.payment_status is None:
            return None
        return self.payment_status.display_message

    def visible_fields(self) -> tuple:
        """State that affects what is drawn; refresh time is excluded"""
        return (self.cart, self.payment_status, self.is_loading, self.error_message)


Renderer = Callable[[DisplayState], Any]


class DisplayStateStore:
    """
    Display boundary that keeps the latest snapshots.

    Pass `on_cart` and `on_payment_status` to CartSyncLoop. The renderer is
    only called when something visible changed, so identical snapshots on
    consecutive ticks do not redraw the screen.
    """

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._renderer = renderer
        self._clock = clock
        self._state = DisplayState()
        self._pending_error: Optional[str] = None

    @property
    def state(self) -> DisplayState:
        return self._state

    async def on_cart(self, cart: Optional[Cart]) -> None:
        if cart is None:
            error_message = self._pending_error or OFFLINE_MESSAGE
        else:
            error_message = None
        self._pending_error = None
        await self._update(
            cart=cart,
            is_loading=False,
            error_message=error_message,
            last_refreshed=self._clock(),
        )

    async def on_payment_status(self, payment_status: Optional[PaymentStatus]) -> None:
        await self._update(payment_status=payment_status)

    def record_error(self, error: Exception) -> None:
        """Keep the latest cart fetch error to explain the next absent cart"""
        if getattr(error, "endpoint", None) != CART_ENDPOINT:
            return
        self._pending_error = str(error)

    async def _update(self, **changes: Any) -> None:
        previous = self._state
        self._state = replace(previous, **changes)
        if self._state.visible_fields() == previous.visible_fields():
            return
        logger.debug(f"Display state changed: view={self._state.cart_view.value}")
        if self._renderer is None:
            return
        result = self._renderer(self._state)
        if inspect.isawaitable(result):
            await result
