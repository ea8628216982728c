"""
Cart Synchronization Loop

Polls the POS cart API on a fixed interval and forwards each snapshot
to the display boundary. One tick fetches the cart, forwards it, fetches
the payment status, forwards it, then waits. Ticks never overlap and a
stopped loop never calls the display again.
"""

import asyncio
import inspect
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Protocol, Union

from ..core.config import Settings, get_settings
from ..models import Cart, PaymentStatus

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_SECONDS = 2.0

CartCallback = Callable[[Optional[Cart]], Union[None, Awaitable[None]]]
PaymentCallback = Callable[[Optional[PaymentStatus]], Union[None, Awaitable[None]]]


class CartSource(Protocol):
    """What the loop needs from the transport client"""

    async def fetch_cart(self) -> Optional[Cart]: ...

    async def fetch_payment_status(self) -> Optional[PaymentStatus]: ...


class LoopState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class CancellationToken:
    """Stop signal shared by every suspension point of a single run"""

    def __init__(self):
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def sleep(self, seconds: float) -> bool:
        """
        Wait up to `seconds`, returning early on cancellation.

        Returns:
            True if the token was cancelled before the delay elapsed
        """
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return False
        return True


class PollingHandle:
    """
    Owned handle for a running loop, returned by CartSyncLoop.start().

    Closing the handle stops the loop and waits for its task to finish.
    It can also be used as an async context manager.
    """

    def __init__(self, loop: "CartSyncLoop", task: asyncio.Task, token: CancellationToken):
        self._loop = loop
        self._task = task
        self._token = token

    @property
    def running(self) -> bool:
        return not self._token.cancelled and not self._task.done()

    @property
    def task(self) -> asyncio.Task:
        return self._task

    def stop(self) -> None:
        """Stop polling without waiting for teardown"""
        self._loop._stop_run(self._token)

    async def aclose(self) -> None:
        """Stop polling and wait until the background task has exited"""
        self.stop()
        if not self._task.done():
            # An in-flight request would be discarded anyway
            self._task.cancel()
        # Raises CancelledError only when the caller itself is cancelled
        await asyncio.wait({self._task})
        if not self._task.cancelled():
            self._task.result()

    async def __aenter__(self) -> "PollingHandle":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


class CartSyncLoop:
    """
    Single-flight polling controller for the customer display.

    Usage:
        loop = CartSyncLoop(client, on_cart=render_cart, on_payment_status=render_payment)
        handle = loop.start()
        ...
        await handle.aclose()

    Callbacks receive None when the endpoint was unavailable, which is
    distinct from an empty cart. They may be plain or async functions.
    Every tick holds the same lock, so a run_once() during polling waits
    for the current tick instead of overlapping it. Do not call run_once()
    from a display callback.
    """

    def __init__(
        self,
        client: CartSource,
        on_cart: CartCallback,
        on_payment_status: PaymentCallback,
        interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    ):
        if interval < 0:
            raise ValueError("interval must not be negative")
        self._client = client
        self._on_cart = on_cart
        self._on_payment_status = on_payment_status
        self.interval = interval
        self._state = LoopState.STOPPED
        self._token: Optional[CancellationToken] = None
        self._handle: Optional[PollingHandle] = None
        self._tick_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls,
        client: CartSource,
        on_cart: CartCallback,
        on_payment_status: PaymentCallback,
        settings: Optional[Settings] = None,
    ) -> "CartSyncLoop":
        """Create loop using the configured poll interval"""
        settings = settings or get_settings()
        return cls(
            client,
            on_cart=on_cart,
            on_payment_status=on_payment_status,
            interval=settings.poll_interval_seconds,
        )

    @property
    def state(self) -> LoopState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == LoopState.RUNNING

    def start(self) -> PollingHandle:
        """
        Begin polling in a background task of the running event loop.

        Returns:
            Handle that owns the background task

        Raises:
            RuntimeError: If the loop is already running
        """
        if self._state == LoopState.RUNNING:
            raise RuntimeError("Sync loop is already running")

        if self._handle is not None and not self._handle.task.done():
            # Previous run is still stuck in a request; its result is dropped anyway
            self._handle.task.cancel()

        token = CancellationToken()
        task = asyncio.create_task(self._run(token), name="cart-sync-loop")
        self._token = token
        self._state = LoopState.RUNNING
        self._handle = PollingHandle(self, task, token)
        logger.info(f"Cart sync loop started (interval {self.interval}s)")
        return self._handle

    def stop(self) -> None:
        """
        Stop polling.

        No display callback is invoked after this returns. A request that
        is already in flight may complete, but its result is dropped.
        """
        if self._token is not None:
            self._stop_run(self._token)

    async def run_once(self) -> None:
        """Run a single tick immediately, without the trailing wait"""
        async with self._tick_lock:
            await self._tick(CancellationToken())

    def _stop_run(self, token: CancellationToken) -> None:
        token.cancel()
        if token is self._token and self._state == LoopState.RUNNING:
            self._state = LoopState.STOPPED
            logger.info("Cart sync loop stopped")

    async def _run(self, token: CancellationToken) -> None:
        try:
            while not token.cancelled:
                async with self._tick_lock:
                    await self._tick(token)
                if token.cancelled or await token.sleep(self.interval):
                    break
        finally:
            self._stop_run(token)

    async def _tick(self, token: CancellationToken) -> None:
        cart = await self._fetch(self._client.fetch_cart)
        if token.cancelled:
            return
        await self._forward(self._on_cart, cart)

        if token.cancelled:
            return
        payment_status = await self._fetch(self._client.fetch_payment_status)
        if token.cancelled:
            return
        await self._forward(self._on_payment_status, payment_status)

    async def _fetch(self, fetch: Callable[[], Awaitable[Any]]) -> Any:
        # CartApiClient never raises, other sources might
        try:
            return await fetch()
        except Exception:
            logger.exception(f"{fetch.__name__} raised, treating as unavailable")
            return None

    async def _forward(self, callback: Callable[[Any], Any], snapshot: Any) -> None:
        try:
            result = callback(snapshot)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Display callback {getattr(callback, '__name__', callback)!r} failed")
