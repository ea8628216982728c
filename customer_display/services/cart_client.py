"""
POS Cart API Client

Read-only HTTP client for the cart and payment status endpoints that
the customer display mirrors. Failures never propagate to the caller:
they are logged, reported to an optional error handler and turned
into an absent (None) result.
"""

import logging
from typing import Callable, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import Settings, get_settings
from ..models import Cart, CartResponse, PaymentResponse, PaymentStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0

CART_PATH = "/cart"
PAYMENT_PATH = "/cart/payment"

EnvelopeT = TypeVar("EnvelopeT", bound=BaseModel)


class CartApiError(Exception):
    """Base exception for cart API failures"""

    def __init__(self, endpoint: str, message: str):
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint


class TransportError(CartApiError):
    """Connection, timeout or HTTP status failure"""

    def __init__(self, endpoint: str, message: str, status_code: Optional[int] = None):
        super().__init__(endpoint, message)
        self.status_code = status_code


class ResponseDecodeError(CartApiError):
    """Body is not valid JSON or does not match the expected schema"""
    pass


class UnsuccessfulResponseError(CartApiError):
    """Server answered with success = false"""

    def __init__(self, endpoint: str, server_error: Optional[str] = None):
        super().__init__(endpoint, server_error or "success flag is false")
        self.server_error = server_error


ErrorHandler = Callable[[CartApiError], None]


class CartApiClient:
    """
    Client for the POS cart API.

    Usage:
        async with CartApiClient("https://pos.example.com/api") as client:
            cart = await client.fetch_cart()
            status = await client.fetch_payment_status()

    Both fetches return None when the data is unavailable for any reason.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[httpx.Timeout] = None,
        error_handler: Optional[ErrorHandler] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize cart API client.

        Args:
            base_url: Base URL of the POS API (without the /cart suffix)
            timeout: Per-phase request timeout, 10 seconds each by default
            error_handler: Called with every failure converted to None
            transport: Custom transport, used by tests and the mock server
        """
        self.base_url = base_url.rstrip("/")
        self._error_handler = error_handler
        self._http_client = httpx.AsyncClient(
            timeout=timeout or httpx.Timeout(DEFAULT_TIMEOUT_SECONDS),
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> "CartApiClient":
        """Create client from configured settings"""
        settings = settings or get_settings()
        return cls(
            base_url=settings.api_base_url,
            timeout=settings.http_timeout,
            error_handler=error_handler,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    async def __aenter__(self) -> "CartApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # ==================== Cart APIs ====================

    async def fetch_cart(self) -> Optional[Cart]:
        """Get the current cart, or None if it is unavailable"""
        try:
            envelope = await self._get_envelope(CART_PATH, CartResponse)
            if not envelope.success:
                raise UnsuccessfulResponseError(CART_PATH, envelope.error)
            if envelope.cart is None:
                raise ResponseDecodeError(CART_PATH, "successful response without cart")
            return envelope.cart
        except CartApiError as e:
            self._report(e)
            return None

    async def fetch_payment_status(self) -> Optional[PaymentStatus]:
        """Get the current payment status, or None if it is unavailable"""
        try:
            envelope = await self._get_envelope(PAYMENT_PATH, PaymentResponse)
            if not envelope.success:
                raise UnsuccessfulResponseError(PAYMENT_PATH)
            if envelope.payment_status is None:
                raise ResponseDecodeError(
                    PAYMENT_PATH, "successful response without paymentStatus"
                )
            return envelope.payment_status
        except CartApiError as e:
            self._report(e)
            return None

    # ==================== Internals ====================

    async def _get_envelope(self, path: str, model: type[EnvelopeT]) -> EnvelopeT:
        """GET a path and validate the body against the envelope model"""
        url = f"{self.base_url}{path}"

        try:
            response = await self._http_client.get(url)
        except httpx.TimeoutException as e:
            raise TransportError(path, f"request timed out ({type(e).__name__})") from e
        except httpx.HTTPError as e:
            raise TransportError(path, f"request failed: {e}") from e

        logger.debug(f"GET {url} -> {response.status_code}")

        if response.status_code >= 400:
            raise TransportError(
                path,
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            return model.model_validate_json(response.content)
        except ValidationError as e:
            raise ResponseDecodeError(
                path, f"invalid response body ({e.error_count()} errors)"
            ) from e

    def _report(self, error: CartApiError) -> None:
        logger.warning(f"Cart API unavailable - {error}")
        if self._error_handler is None:
            return
        try:
            self._error_handler(error)
        except Exception:
            logger.exception("Error handler raised")
