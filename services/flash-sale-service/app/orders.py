import uuid
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from shared.utils import settings, utcnow
from app.models import OrderDB, OrderItemDB
from app.schemas import LineItem

CONFIRMED = "CONFIRMED"
CENTS = Decimal("0.01")

def compute_total(cart: Iterable[LineItem]) -> Decimal:
    """Sum of price * quantity over the cart, rounded half-up to cents."""
    total = Decimal(0)
    for item in cart:
        total += item.price * item.quantity
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)

def build_order(
    cart: list,
    customer_email: Optional[str] = None,
    now: Optional[datetime] = None,
) -> OrderDB:
    now = now or utcnow()
    return OrderDB(
        order_id=str(uuid.uuid4()),
        created_at=int(now.timestamp() * 1000),
        customer_email=customer_email or settings.DEFAULT_CUSTOMER_EMAIL,
        items=[
            OrderItemDB(id=item.id, name=item.name, price=float(item.price), quantity=item.quantity)
            for item in cart
        ],
        total_amount=float(compute_total(cart)),
        status=CONFIRMED,
        expiration_time=now + timedelta(days=settings.ORDER_TTL_DAYS),
        timestamp=now,
    )
