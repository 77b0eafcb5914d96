"""Order aggregate.

An Order is written once, at checkout, and never changes afterwards.
It owns its line items, each of which captures the unit price the
product had at the moment the order was placed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import EmptyCartError
from storefront.domain.model.cart import Cart
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    # orders are created completed; no later transitions exist
    COMPLETED = "completed"


@dataclass(frozen=True)
class OrderLine:
    """Captures the price snapshot of a product at checkout time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def to_record(self, order_id: str) -> dict:
        return {
            "order_id": order_id,
            "product_id": self.product_id,
            "quantity": self.quantity.value,
            "price": str(self.unit_price.amount),
        }


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use ``Order.from_cart()`` for new orders. The ``__init__`` is kept
    simple so persisted orders can be reconstituted without
    re-validating.
    """

    id: str | None
    user_id: str
    items: list[OrderLine]
    total_price: Money
    status: OrderStatus = OrderStatus.COMPLETED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    submission_id: str | None = None

    @staticmethod
    def from_cart(cart: Cart, submission_id: str | None = None) -> Order:
        """Price a cart into a new, not yet persisted order."""
        if cart.is_empty:
            raise EmptyCartError("Your cart is empty")

        items = [
            OrderLine(
                product_id=line.product.id,
                product_name=line.product.name,
                quantity=line.quantity,
                unit_price=line.product.price,  # <-- price snapshot
            )
            for line in cart.lines
        ]
        return Order(
            id=None,
            user_id=cart.user_id,
            items=items,
            total_price=cart.total,
            submission_id=submission_id,
        )

    def to_record(self) -> dict:
        return {
            "user_id": self.user_id,
            "total_price": str(self.total_price.amount),
            "status": self.status.value,
            "submission_id": self.submission_id,
        }
