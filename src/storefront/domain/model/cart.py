"""Cart lines and the cart they make up.

A cart is never stored as a whole; it is the set of ``cart`` rows that
belong to one caller, each joined with the product it refers to.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class ProductSnapshot:
    """The product fields a cart line shows, read at load time."""

    id: str
    name: str
    price: Money
    image_url: str | None = None


@dataclass
class CartLine:
    id: str
    user_id: str
    product: ProductSnapshot
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        # current catalog price, not a frozen one
        return self.product.price * self.quantity.value


def compute_total(lines: list[CartLine]) -> Money:
    """Sum of quantity x current product price over *lines*."""
    result = Money.zero()
    for line in lines:
        result = result + line.line_total
    return result


@dataclass
class Cart:
    user_id: str
    lines: list[CartLine] = field(default_factory=list)

    @property
    def total(self) -> Money:
        return compute_total(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines
