"""Product aggregate.

Products live independently of carts and orders. Prices change and
products are added and removed from the catalog, but an order keeps
the price it was placed at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from pydantic import HttpUrl, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

_url_adapter = TypeAdapter(HttpUrl)


@dataclass
class Product:
    """A product in the catalog, as read from the store."""

    id: str
    name: str
    price: Money
    stock: int = 0
    description: str | None = None
    image_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class ProductDraft:
    """A validated set of product fields, ready to be written.

    Use ``ProductDraft.parse()`` on raw input; it checks every field in
    declaration order and raises on the first one that is invalid, so a
    draft that exists is always complete and writable as a whole.
    """

    name: str
    price: Money
    stock: int
    description: str | None = None
    image_url: str | None = None

    @staticmethod
    def parse(
        name: str,
        price: str | float | int | Decimal,
        stock: str | int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> ProductDraft:
        name = name or ""
        if len(name) < NAME_MIN_LENGTH:
            raise ValidationError("Name must be at least 2 characters", field="name")
        if len(name) > NAME_MAX_LENGTH:
            raise ValidationError("Name must be at most 100 characters", field="name")

        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                "Description must be at most 500 characters", field="description"
            )

        try:
            amount = Decimal(str(price))
        except (InvalidOperation, ValueError):
            raise ValidationError("Price must be a number", field="price")
        if not amount.is_finite():
            raise ValidationError("Price must be a number", field="price")
        if amount < 0:
            raise ValidationError("Price must be positive", field="price")

        stock_value = _parse_stock(stock)

        if image_url:
            try:
                _url_adapter.validate_python(image_url)
            except PydanticValidationError:
                raise ValidationError("Must be a valid URL", field="image_url")

        return ProductDraft(
            name=name,
            price=Money(amount),
            stock=stock_value,
            description=description or None,
            image_url=image_url or None,
        )

    def to_record(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "price": str(self.price.amount),
            "stock": self.stock,
            "image_url": self.image_url,
        }


def _parse_stock(stock: str | int) -> int:
    if isinstance(stock, bool):
        raise ValidationError("Stock must be a whole number", field="stock")
    if isinstance(stock, int):
        value = stock
    else:
        try:
            value = int(str(stock).strip())
        except ValueError:
            raise ValidationError("Stock must be a whole number", field="stock")
    if value < 0:
        raise ValidationError("Stock must be a positive number", field="stock")
    return value
