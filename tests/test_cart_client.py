"""
Unit tests for the POS cart API client.

HTTP traffic is served by httpx.MockTransport; no network is used.
"""

import httpx
import pytest

from customer_display.core.config import Settings
from customer_display.models import Cart, PaymentState, PaymentStatus
from customer_display.services.cart_client import (
    CartApiClient,
    ResponseDecodeError,
    TransportError,
    UnsuccessfulResponseError,
)

from .conftest import BASE_URL


@pytest.fixture
def errors():
    return []


@pytest.fixture
def make_client(make_transport, errors):
    def factory(routes: dict, base_url: str = BASE_URL) -> CartApiClient:
        return CartApiClient(
            base_url,
            error_handler=errors.append,
            transport=make_transport(routes),
        )

    return factory


class TestFetchCart:
    """Test fetch_cart()."""

    @pytest.mark.asyncio
    async def test_returns_embedded_cart(self, make_client, filled_cart_body, errors):
        client = make_client({"/api/cart": filled_cart_body})

        cart = await client.fetch_cart()

        assert cart == Cart.model_validate(filled_cart_body["cart"])
        assert errors == []
        await client.close()

    @pytest.mark.asyncio
    async def test_empty_cart_is_not_absent(self, make_client, empty_cart_body):
        client = make_client({"/api/cart": empty_cart_body})

        cart = await client.fetch_cart()

        assert cart is not None
        assert cart.items == ()
        assert cart.total == 0
        await client.close()

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_is_absent(self, make_client, errors):
        client = make_client(
            {"/api/cart": {"success": False, "error": "Cart service error", "timestamp": "0"}}
        )

        assert await client.fetch_cart() is None
        assert len(errors) == 1
        assert isinstance(errors[0], UnsuccessfulResponseError)
        assert errors[0].server_error == "Cart service error"
        assert errors[0].endpoint == "/cart"
        await client.close()

    @pytest.mark.asyncio
    async def test_success_without_cart_is_absent(self, make_client, errors):
        client = make_client({"/api/cart": {"success": True, "timestamp": "0"}})

        assert await client.fetch_cart() is None
        assert isinstance(errors[0], ResponseDecodeError)
        await client.close()

    @pytest.mark.asyncio
    async def test_malformed_json_is_absent(self, make_client, errors):
        client = make_client({"/api/cart": httpx.Response(200, content=b"{not json")})

        assert await client.fetch_cart() is None
        assert isinstance(errors[0], ResponseDecodeError)
        await client.close()

    @pytest.mark.asyncio
    async def test_schema_mismatch_is_absent(self, make_client, filled_cart_body, errors):
        del filled_cart_body["cart"]["discount"]
        client = make_client({"/api/cart": filled_cart_body})

        assert await client.fetch_cart() is None
        assert isinstance(errors[0], ResponseDecodeError)
        await client.close()

    @pytest.mark.asyncio
    async def test_http_error_status_is_absent(self, make_client, errors):
        client = make_client({"/api/cart": httpx.Response(500, json={"detail": "boom"})})

        assert await client.fetch_cart() is None
        assert isinstance(errors[0], TransportError)
        assert errors[0].status_code == 500
        await client.close()

    @pytest.mark.asyncio
    async def test_timeout_is_absent(self, make_client, errors):
        def stall(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = make_client({"/api/cart": stall})

        assert await client.fetch_cart() is None
        assert isinstance(errors[0], TransportError)
        assert "timed out" in str(errors[0])
        await client.close()

    @pytest.mark.asyncio
    async def test_connection_error_is_absent(self, make_client, errors):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = make_client({"/api/cart": refuse})

        assert await client.fetch_cart() is None
        assert isinstance(errors[0], TransportError)
        assert errors[0].status_code is None
        await client.close()

    @pytest.mark.asyncio
    async def test_sends_get_with_json_headers(self, make_client, empty_cart_body):
        seen = []

        def record(request):
            seen.append(request)
            return httpx.Response(200, json=empty_cart_body)

        client = make_client({"/api/cart": record}, base_url=BASE_URL + "/")

        await client.fetch_cart()

        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "http://pos.test/api/cart"
        assert seen[0].headers["Content-Type"] == "application/json"
        await client.close()

    @pytest.mark.asyncio
    async def test_repeated_responses_give_equal_snapshots(self, make_client, filled_cart_body):
        client = make_client({"/api/cart": filled_cart_body})

        first = await client.fetch_cart()
        second = await client.fetch_cart()

        assert first == second
        assert first is not second
        await client.close()


class TestFetchPaymentStatus:
    """Test fetch_payment_status()."""

    @pytest.mark.asyncio
    async def test_returns_embedded_status(self, make_client, payment_body):
        client = make_client({"/api/cart/payment": payment_body})

        status = await client.fetch_payment_status()

        assert status == PaymentStatus(
            status=PaymentState.PROCESSING,
            timestamp="2024-01-01T00:00:05Z",
            amount=25.50,
            method=None,
            transaction_id=None,
        )
        await client.close()

    @pytest.mark.asyncio
    async def test_unsuccessful_envelope_is_absent(self, make_client, errors):
        client = make_client({"/api/cart/payment": {"success": False}})

        assert await client.fetch_payment_status() is None
        assert isinstance(errors[0], UnsuccessfulResponseError)
        assert errors[0].endpoint == "/cart/payment"
        await client.close()

    @pytest.mark.asyncio
    async def test_unknown_status_is_not_an_error(self, make_client, payment_body, errors):
        payment_body["paymentStatus"]["status"] = "voided"
        client = make_client({"/api/cart/payment": payment_body})

        status = await client.fetch_payment_status()

        assert status.status == PaymentState.UNKNOWN
        assert errors == []
        await client.close()

    @pytest.mark.asyncio
    async def test_not_found_is_absent(self, make_client, errors):
        client = make_client({})

        assert await client.fetch_payment_status() is None
        assert errors[0].status_code == 404
        await client.close()


class TestClientSetup:
    """Test construction and error reporting."""

    @pytest.mark.asyncio
    async def test_failing_error_handler_does_not_propagate(self, make_transport):
        def broken_handler(error):
            raise RuntimeError("handler bug")

        client = CartApiClient(
            BASE_URL,
            error_handler=broken_handler,
            transport=make_transport({}),
        )

        assert await client.fetch_cart() is None
        await client.close()

    @pytest.mark.asyncio
    async def test_from_settings(self):
        settings = Settings(
            api_base_url="http://pos.local/api/",
            connect_timeout_seconds=1.0,
            read_timeout_seconds=2.0,
            write_timeout_seconds=3.0,
            pool_timeout_seconds=4.0,
        )

        async with CartApiClient.from_settings(settings) as client:
            assert client.base_url == "http://pos.local/api"
            timeout = client._http_client.timeout
            assert (timeout.connect, timeout.read, timeout.write, timeout.pool) == (
                1.0,
                2.0,
                3.0,
                4.0,
            )

    def test_default_timeout_is_ten_seconds(self):
        client = CartApiClient(BASE_URL)

        timeout = client._http_client.timeout
        assert (timeout.connect, timeout.read, timeout.write, timeout.pool) == (
            10.0,
            10.0,
            10.0,
            10.0,
        )

    def test_settings_have_no_unused_debug_flag(self):
        assert "debug" not in Settings.model_fields
