from decimal import Decimal, ROUND_HALF_UP
from typing import Iterator, List, Optional, Tuple

from storefront.models import CartItem, Product

TAX_RATE = Decimal("0.08")
CENTS = Decimal("0.01")

class SoldOutError(ValueError):
    pass

class Cart:
    """
    In-memory shopping cart.

    Line items are merged by product id. Nothing is persisted; the cart lives
    as long as the session that owns it.
    """

    def __init__(self):
        self._items: List[CartItem] = []

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> Tuple[CartItem, ...]:
        return tuple(self._items)

    @property
    def count(self) -> int:
        """Number of distinct line items."""
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def get(self, product_id: str) -> Optional[CartItem]:
        for item in self._items:
            if item.id == product_id:
                return item
        return None

    def add(self, product: Product) -> CartItem:
        if product.stock <= 0:
            raise SoldOutError(f"{product.name} is sold out")

        existing = self.get(product.id)
        if existing:
            existing.quantity += 1
            return existing

        item = CartItem(**product.model_dump(), quantity=1)
        self._items.append(item)
        return item

    def remove(self, product_id: str):
        self._items = [item for item in self._items if item.id != product_id]

    def set_quantity(self, product_id: str, quantity: int):
        if quantity <= 0:
            self.remove(product_id)
            return

        item = self.get(product_id)
        if item:
            item.quantity = quantity

    def clear(self):
        self._items.clear()

    # --- Totals (display only; the service computes the charged total) ---
    @property
    def subtotal(self) -> Decimal:
        total = sum((Decimal(str(i.price)) * i.quantity for i in self._items), Decimal(0))
        return total.quantize(CENTS, rounding=ROUND_HALF_UP)

    @property
    def tax(self) -> Decimal:
        return (self.subtotal * TAX_RATE).quantize(CENTS, rounding=ROUND_HALF_UP)

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.tax

    def to_line_items(self) -> List[dict]:
        return [
            {"id": i.id, "name": i.name, "price": i.price, "quantity": i.quantity}
            for i in self._items
        ]
