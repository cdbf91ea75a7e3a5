import logging
import os
from typing import List, Optional

import httpx
from pydantic import ValidationError

from storefront.cart import Cart
from storefront.models import OrderConfirmation, Product

DEFAULT_API_URL = os.getenv("FLASH_SALE_API_URL", "http://localhost:3001")
DEFAULT_CUSTOMER_EMAIL = "flash-sale-customer@example.com"

logger = logging.getLogger("storefront")

class StorefrontError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class StorefrontClient:
    """HTTP client for the flash sale service."""

    def __init__(self, base_url: str = DEFAULT_API_URL, timeout: float = 10.0,
                 transport: Optional[httpx.BaseTransport] = None):
        self.http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        self.http.close()

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self.http.request(method, path, **kwargs)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"{method} {path} failed with {e.response.status_code}")
            raise StorefrontError(f"{method} {path} failed", status_code=e.response.status_code) from e
        except (httpx.RequestError, ValueError) as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise StorefrontError(f"{method} {path} failed") from e

        if not isinstance(body, dict) or not body.get("success"):
            message = body.get("message") if isinstance(body, dict) else None
            raise StorefrontError(message or f"{method} {path} failed")
        return body

    def list_products(self) -> List[Product]:
        body = self._request("GET", "/products")
        try:
            return [Product(**p) for p in body.get("data") or []]
        except (KeyError, TypeError, ValidationError) as e:
            raise StorefrontError("GET /products returned an unexpected catalog") from e

    def create_order(self, cart: Cart, customer_email: str = DEFAULT_CUSTOMER_EMAIL) -> OrderConfirmation:
        body = self._request("POST", "/orders", json={
            "cart": cart.to_line_items(),
            "customerEmail": customer_email,
        })
        try:
            return OrderConfirmation(**body["data"])
        except (KeyError, TypeError, ValidationError) as e:
            raise StorefrontError("POST /orders returned an unexpected confirmation") from e
