"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.model.cart import Cart
from storefront.domain.model.caller import Profile
from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CartLineDTO:
    """A single cart line as displayed to the user."""

    id: str
    product_name: str
    quantity: int
    unit_price: str  # current catalog price, formatted
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    lines: list[CartLineDTO]
    total: str

    @staticmethod
    def from_cart(cart: Cart) -> CartDTO:
        return CartDTO(
            lines=[
                CartLineDTO(
                    id=line.id,
                    product_name=line.product.name,
                    quantity=line.quantity.value,
                    unit_price=str(line.product.price),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            total=str(cart.total),
        )


@dataclass(frozen=True)
class OrderLineDTO:
    product_name: str
    quantity: int
    unit_price: str  # price at checkout time
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """A placed order as displayed to the user."""

    id: str
    status: str
    items: list[OrderLineDTO]
    total: str
    created_at: str
    purchaser_name: str | None = None
    purchaser_email: str | None = None

    @staticmethod
    def from_order(order: Order, profile: Profile | None = None) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            status=order.status.value,
            items=[
                OrderLineDTO(
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=str(item.unit_price),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.total_price),
            created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
            purchaser_name=profile.name if profile else None,
            purchaser_email=profile.email if profile else None,
        )
