"""Flash sale catalog. Fixed at deploy time; stock figures are display-only."""
from typing import Tuple

from app.models import ProductDB

PRODUCTS: Tuple[ProductDB, ...] = (
    ProductDB(
        id="rtx-4090",
        name="RTX 4090 GPU",
        price=1599.99,
        original_price=1999.99,
        description="Flagship graphics card for ultimate gaming and AI workloads",
        stock=12,
        image="https://images.unsplash.com/photo-1587829191301-f7c7af6c77f8?w=400&h=300&fit=crop",
        discount=20,
    ),
    ProductDB(
        id="macbook-pro-m3",
        name="MacBook Pro M3",
        price=1999.00,
        original_price=2499.00,
        description="Powerful laptop with M3 chip for professionals",
        stock=8,
        image="https://images.unsplash.com/photo-1517336714731-489689fd1ca8?w=400&h=300&fit=crop",
        discount=20,
    ),
    ProductDB(
        id="ps5-console",
        name="PlayStation 5",
        price=499.99,
        original_price=649.99,
        description="Next-gen gaming console with stunning graphics",
        stock=15,
        image="https://images.unsplash.com/photo-1605901287835-b5f7a80a2d3f?w=400&h=300&fit=crop",
        discount=23,
    ),
    ProductDB(
        id="iphone-15-pro",
        name="iPhone 15 Pro Max",
        price=1099.00,
        original_price=1399.00,
        description="Latest iPhone with A17 Pro and superior camera system",
        stock=20,
        image="https://images.unsplash.com/photo-1592286927505-1fed6a0ce0e5?w=400&h=300&fit=crop",
        discount=21,
    ),
    ProductDB(
        id="airpods-pro",
        name="AirPods Pro (3rd Gen)",
        price=249.00,
        original_price=349.00,
        description="Premium wireless earbuds with active noise cancellation",
        stock=50,
        image="https://images.unsplash.com/photo-1606841838e12-8facc6dcde92?w=400&h=300&fit=crop",
        discount=29,
    ),
    ProductDB(
        id="samsung-qled",
        name='85" Samsung QLED TV',
        price=1799.99,
        original_price=2299.99,
        description="4K QLED television with 144Hz refresh rate",
        stock=6,
        image="https://images.unsplash.com/photo-1593642532400-2682a8a8fca9?w=400&h=300&fit=crop",
        discount=22,
    ),
)

def list_products() -> list:
    return list(PRODUCTS)
