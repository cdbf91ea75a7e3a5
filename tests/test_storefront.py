import io
import json

import httpx
import pytest

from storefront.cart import Cart
from storefront.cli import Storefront, stock_text
from storefront.client import StorefrontClient, StorefrontError

PRODUCTS = [
    {
        "id": "ps5-console", "name": "PlayStation 5", "price": 499.99, "originalPrice": 649.99,
        "description": "Next-gen gaming console", "stock": 15, "image": "", "discount": 23,
    },
    {
        "id": "samsung-qled", "name": "Samsung QLED TV", "price": 1799.99, "originalPrice": 2299.99,
        "description": "4K QLED television", "stock": 0, "image": "", "discount": 22,
    },
]

ORDER = {
    "orderId": "3f1c2a0e-7d6b-4b8a-9b2e-0f4f5f0c1d2e",
    "totalAmount": 999.98,
    "itemCount": 1,
    "status": "CONFIRMED",
    "createdAt": "2025-11-28T09:00:00Z",
}


class FakeService:
    """Routes MockTransport requests and records what was sent."""

    def __init__(self):
        self.requests = []
        self.order_status = 201
        self.products_status = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/products":
            if self.products_status != 200:
                return httpx.Response(self.products_status, json={"success": False, "message": "Failed to fetch products"})
            return httpx.Response(200, json={"success": True, "data": PRODUCTS, "timestamp": "2025-11-28T09:00:00Z"})
        if request.url.path == "/orders":
            if self.order_status != 201:
                return httpx.Response(self.order_status, json={"success": False, "message": "Failed to create order"})
            return httpx.Response(201, json={"success": True, "data": ORDER, "timestamp": "2025-11-28T09:00:00Z"})
        return httpx.Response(404)

    def orders_sent(self):
        return [json.loads(r.content) for r in self.requests if r.url.path == "/orders"]


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def api(service):
    client = StorefrontClient("http://testserver", transport=httpx.MockTransport(service))
    yield client
    client.close()


@pytest.fixture
def shop(api):
    out = io.StringIO()
    storefront = Storefront(api, out=out)
    storefront.load_products()
    return storefront


# --- Client ---

def test_list_products(api):
    products = api.list_products()

    assert [p.id for p in products] == ["ps5-console", "samsung-qled"]
    assert products[0].original_price == 649.99


def test_create_order_sends_line_items(api, service):
    cart = Cart()
    cart.add(api.list_products()[0])
    cart.set_quantity("ps5-console", 2)

    confirmation = api.create_order(cart, "buyer@example.com")

    assert confirmation.order_id == ORDER["orderId"]
    assert service.orders_sent() == [{
        "cart": [{"id": "ps5-console", "name": "PlayStation 5", "price": 499.99, "quantity": 2}],
        "customerEmail": "buyer@example.com",
    }]


def test_error_status_raises(api, service):
    service.order_status = 500
    cart = Cart()
    cart.add(api.list_products()[0])

    with pytest.raises(StorefrontError) as exc_info:
        api.create_order(cart)
    assert exc_info.value.status_code == 500


def test_network_failure_raises():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with StorefrontClient("http://testserver", transport=httpx.MockTransport(refuse)) as api:
        with pytest.raises(StorefrontError):
            api.list_products()


# --- Storefront session ---

def test_stock_text():
    assert stock_text(0) == "SOLD OUT"
    assert stock_text(5) == "Only 5 left!"
    assert stock_text(6) == "6 in stock"


def test_checkout_with_empty_cart_sends_nothing(shop, service):
    assert shop.checkout() is None
    assert "Your cart is empty" in shop.out.getvalue()
    assert service.orders_sent() == []


def test_checkout_success_clears_cart(shop):
    shop.handle("add ps5-console")
    shop.handle("add ps5-console")

    order_id = shop.checkout()

    assert order_id == ORDER["orderId"]
    assert shop.cart.is_empty()
    assert ORDER["orderId"] in shop.out.getvalue()


def test_checkout_failure_keeps_cart_for_retry(shop, service):
    service.order_status = 500
    shop.handle("add ps5-console")

    assert shop.checkout() is None
    assert "Failed to process order. Please try again." in shop.out.getvalue()
    assert shop.cart.count == 1

    service.order_status = 201
    assert shop.checkout() == ORDER["orderId"]
    assert len(service.orders_sent()) == 2


def test_sold_out_product_is_not_added(shop):
    shop.handle("add samsung-qled")

    assert shop.cart.is_empty()
    assert "sold out" in shop.out.getvalue()


def test_qty_command(shop):
    shop.handle("add ps5-console")
    shop.handle("qty ps5-console 3")
    assert shop.cart.get("ps5-console").quantity == 3

    shop.handle("qty ps5-console 0")
    assert shop.cart.is_empty()


def test_catalog_load_failure(api, service):
    service.products_status = 500
    out = io.StringIO()
    shop = Storefront(api, out=out)

    assert shop.load_products() is False
    assert shop.products == []
    assert "Failed to load products. Please try again." in out.getvalue()


def test_run_loop_reads_commands(api, service):
    out = io.StringIO()
    shop = Storefront(api, out=out)

    shop.run(stdin=io.StringIO("add ps5-console\ncheckout\nquit\n"))

    assert len(service.orders_sent()) == 1
    assert "PlayStation 5" in out.getvalue()


def test_quit_ends_session(shop):
    assert shop.handle("quit") is False
    assert shop.handle("cart") is True


def test_malformed_catalog_raises_storefront_error():
    def handler(request):
        return httpx.Response(200, json={"success": True, "data": [{"name": "no id or price"}]})

    with StorefrontClient("http://testserver", transport=httpx.MockTransport(handler)) as api:
        with pytest.raises(StorefrontError):
            api.list_products()


def test_malformed_confirmation_raises_storefront_error(service):
    def handler(request):
        if request.url.path == "/orders":
            return httpx.Response(201, json={"success": True})
        return service(request)

    with StorefrontClient("http://testserver", transport=httpx.MockTransport(handler)) as broken:
        cart = Cart()
        cart.add(broken.list_products()[0])
        with pytest.raises(StorefrontError):
            broken.create_order(cart)


def test_malformed_confirmation_keeps_session_alive(service):
    def handler(request):
        if request.url.path == "/orders":
            return httpx.Response(201, json={"success": True, "data": {"orderId": "x"}})
        return service(request)

    out = io.StringIO()
    with StorefrontClient("http://testserver", transport=httpx.MockTransport(handler)) as api:
        shop = Storefront(api, out=out)
        shop.run(stdin=io.StringIO("add ps5-console\ncheckout\ncart\nquit\n"))

    assert "Failed to process order. Please try again." in out.getvalue()
    assert shop.cart.count == 1
