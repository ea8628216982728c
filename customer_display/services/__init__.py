# Services

from .cart_client import (
    CartApiClient,
    CartApiError,
    ResponseDecodeError,
    TransportError,
    UnsuccessfulResponseError,
)
from .sync_loop import CancellationToken, CartSyncLoop, LoopState, PollingHandle

__all__ = [
    "CartApiClient",
    "CartApiError",
    "ResponseDecodeError",
    "TransportError",
    "UnsuccessfulResponseError",
    "CancellationToken",
    "CartSyncLoop",
    "LoopState",
    "PollingHandle",
]
