"""
Shared fixtures for customer display tests.

Payloads mirror what the POS cart API returns, in camelCase.
"""

import copy
from typing import Callable

import httpx
import pytest

from mock_pos.store import pos_store as shared_pos_store

BASE_URL = "http://pos.test/api"

EMPTY_CART = {
    "items": [],
    "discount": {"type": "fixed", "value": 0},
    "tax": {"rate": 0, "amount": 0},
    "customer": None,
    "notes": "",
    "total": 0,
    "lastUpdated": None,
}

FILLED_CART = {
    "items": [
        {
            "id": "line-1",
            "productId": "prod-gummy",
            "name": "Gummy Bears",
            "quantity": 2,
            "price": 5.0,
            "total": 10.0,
            "sku": "GB-100",
        },
        {
            "id": "line-2",
            "productId": "prod-licorice",
            "name": "Licorice (bulk)",
            "quantity": 1,
            "price": 12.0,
            "total": 6.0,
            "weight": 0.5,
            "unit": "kg",
        },
    ],
    "discount": {"type": "percentage", "value": 10},
    "tax": {"rate": 0.07, "amount": 1.01},
    "customer": {"id": "cust-9", "name": "Dana", "phone": "+66 555 0101"},
    "notes": "Gift wrap",
    "total": 15.41,
    "lastUpdated": "2024-01-01T00:00:03Z",
}

PROCESSING_PAYMENT = {
    "status": "processing",
    "timestamp": "2024-01-01T00:00:05Z",
    "amount": 25.50,
    "method": None,
    "transactionId": None,
}


@pytest.fixture
def empty_cart_body() -> dict:
    return {"success": True, "cart": copy.deepcopy(EMPTY_CART), "timestamp": "2024-01-01T00:00:00Z"}


@pytest.fixture
def filled_cart_body() -> dict:
    return {"success": True, "cart": copy.deepcopy(FILLED_CART), "timestamp": "2024-01-01T00:00:03Z"}


@pytest.fixture
def payment_body() -> dict:
    return {"success": True, "paymentStatus": copy.deepcopy(PROCESSING_PAYMENT)}


@pytest.fixture
def make_transport() -> Callable[..., httpx.MockTransport]:
    """
    Build a MockTransport from per-path handlers.

    Each value is either a JSON-serializable body (returned with 200),
    an httpx.Response, or a callable taking the request.
    """

    def factory(routes: dict) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            path = request.url.path
            if path not in routes:
                return httpx.Response(404, json={"detail": "Not Found"})
            route = routes[path]
            if callable(route):
                return route(request)
            if isinstance(route, httpx.Response):
                return route
            return httpx.Response(200, json=route)

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def pos_store():
    """Shared mock POS store, reset around each test"""
    shared_pos_store.reset()
    yield shared_pos_store
    shared_pos_store.reset()
