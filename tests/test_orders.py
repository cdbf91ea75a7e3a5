from datetime import datetime, timedelta, timezone
from decimal import Decimal

from app.orders import build_order, compute_total
from app.schemas import LineItem

NOW = datetime(2025, 11, 28, 9, 0, tzinfo=timezone.utc)


def items(*rows):
    return [LineItem(id=i, price=p, quantity=q) for i, p, q in rows]


def test_compute_total():
    assert compute_total(items(("a", 10, 2), ("b", 5, 1))) == Decimal("25.00")


def test_compute_total_rounds_half_up():
    assert compute_total(items(("a", "0.125", 1))) == Decimal("0.13")
    assert compute_total(items(("a", "1599.99", 3))) == Decimal("4799.97")


def test_build_order():
    order = build_order(items(("a", 10, 2), ("b", 5, 1)), "buyer@example.com", now=NOW)

    assert order.customer_email == "buyer@example.com"
    assert order.total_amount == 25.0
    assert order.status == "CONFIRMED"
    assert order.created_at == int(NOW.timestamp() * 1000)
    assert order.expiration_time == NOW + timedelta(days=30)
    assert order.timestamp == NOW
    assert [i.quantity for i in order.items] == [2, 1]


def test_build_order_defaults_email():
    order = build_order(items(("a", 1, 1)), None, now=NOW)
    assert order.customer_email == "anonymous@example.com"


def test_build_order_generates_new_ids():
    cart = items(("a", 1, 1))
    assert build_order(cart).order_id != build_order(cart).order_id
