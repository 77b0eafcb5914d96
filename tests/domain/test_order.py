"""Unit tests for the Order aggregate and cart pricing."""

import pytest

from storefront.domain.exceptions import EmptyCartError
from storefront.domain.model.cart import Cart, CartLine, ProductSnapshot, compute_total
from storefront.domain.model.order import Order, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity


def _line(name: str = "Widget", qty: int = 1, price: str = "9.99", pid: str = "p1") -> CartLine:
    """Helper to build a cart line for user u1."""
    return CartLine(
        id=f"line-{pid}",
        user_id="u1",
        product=ProductSnapshot(id=pid, name=name, price=Money.of(price)),
        quantity=Quantity(qty),
    )


class TestCartTotal:

    def test_total_is_sum_of_extensions(self):
        lines = [_line("Widget", 2, "9.99", "p1"), _line("Gadget", 1, "5.00", "p2")]
        assert compute_total(lines) == Money.of("24.98")

    def test_empty_cart_totals_zero(self):
        assert Cart(user_id="u1").total == Money.zero()
        assert Cart(user_id="u1").is_empty


class TestOrderFromCart:

    def test_happy_path(self):
        cart = Cart("u1", [_line("Widget", 2, "9.99", "p1"), _line("Gadget", 1, "5.00", "p2")])
        order = Order.from_cart(cart)

        assert order.id is None  # assigned by repository
        assert order.user_id == "u1"
        assert order.status == OrderStatus.COMPLETED
        assert order.total_price == Money.of("24.98")
        assert [(i.product_name, i.quantity.value, i.unit_price) for i in order.items] == [
            ("Widget", 2, Money.of("9.99")),
            ("Gadget", 1, Money.of("5.00")),
        ]

    def test_empty_cart_rejected(self):
        with pytest.raises(EmptyCartError, match="empty"):
            Order.from_cart(Cart("u1"))

    def test_submission_id_carried(self):
        order = Order.from_cart(Cart("u1", [_line()]), submission_id="sub-1")
        assert order.to_record()["submission_id"] == "sub-1"

    def test_line_record_stores_unit_price(self):
        order = Order.from_cart(Cart("u1", [_line(qty=3, price="2.50")]))
        record = order.items[0].to_record("o1")
        assert record == {"order_id": "o1", "product_id": "p1", "quantity": 3, "price": "2.50"}
