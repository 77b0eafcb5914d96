"""Repository for cart lines, backed by the ``cart`` table.

Lines are returned joined with a snapshot of the product they refer to,
read at the same time, so totals always use current catalog prices.
"""

from __future__ import annotations

import structlog

from storefront.domain.model.cart import CartLine, ProductSnapshot
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.data_store import CART, DataStore
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CartRepository:

    def __init__(self, store: DataStore) -> None:
        self._store = store
        self._products = ProductRepository(store)

    def lines_for(self, user_id: str) -> list[CartLine]:
        """The caller's cart lines, oldest first.

        A line whose product has since been deleted from the catalog
        cannot be priced, so it is left out.
        """
        rows = self._store.select(CART, {"user_id": user_id}, order_by="created_at")
        products = self._products.get_many(sorted({row["product_id"] for row in rows}))

        lines: list[CartLine] = []
        for row in rows:
            product = products.get(row["product_id"])
            if product is None:
                logger.warning(
                    "Cart line refers to a missing product",
                    line_id=row["id"],
                    product_id=row["product_id"],
                )
                continue
            lines.append(
                CartLine(
                    id=row["id"],
                    user_id=row["user_id"],
                    product=ProductSnapshot(
                        id=product.id,
                        name=product.name,
                        price=product.price,
                        image_url=product.image_url,
                    ),
                    quantity=Quantity(int(row["quantity"])),
                )
            )
        return lines

    def find_row(self, user_id: str, product_id: str) -> dict | None:
        rows = self._store.select(CART, {"user_id": user_id, "product_id": product_id})
        return rows[0] if rows else None

    def add_row(self, user_id: str, product_id: str, quantity: Quantity) -> dict:
        return self._store.insert(
            CART,
            {"user_id": user_id, "product_id": product_id, "quantity": quantity.value},
        )

    def set_quantity(self, user_id: str, line_id: str, quantity: Quantity) -> None:
        self._store.update(
            CART, {"id": line_id, "user_id": user_id}, {"quantity": quantity.value}
        )

    def remove(self, user_id: str, line_id: str) -> None:
        self._store.delete(CART, {"id": line_id, "user_id": user_id})

    def clear(self, user_id: str) -> None:
        self._store.delete(CART, {"user_id": user_id})

    def count(self, user_id: str) -> int:
        return self._store.count(CART, {"user_id": user_id})
