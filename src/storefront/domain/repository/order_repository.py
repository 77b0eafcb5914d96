"""Repository for the Order aggregate.

An order is spread over two tables: one ``orders`` row and one
``order_items`` row per line. The store cannot write both in a single
call, so the pieces are exposed separately and the checkout workflow
decides how to sequence and compensate them.

A checkout that completed leaves lines under its order and an empty
cart behind it. An order with no lines, or whose owner still has cart
lines older than the order, is unfinished: the listings leave it out
and only checkout resumption and reconciliation see it.
"""

from __future__ import annotations

from collections import Counter
from datetime import datetime

from storefront.domain.model.order import Order, OrderLine, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.data_store import (
    CART,
    ORDER_ITEMS,
    ORDERS,
    DataStore,
    parse_timestamp,
)
from storefront.domain.repository.product_repository import ProductRepository

DELETED_PRODUCT_NAME = "(deleted product)"


class OrderRepository:

    def __init__(self, store: DataStore) -> None:
        self._store = store
        self._products = ProductRepository(store)

    # --- Writes ---------------------------------------------------------------

    def add(self, order: Order) -> str:
        """Insert the order row only and assign its id."""
        row = self._store.insert(ORDERS, order.to_record())
        order.id = row["id"]
        order.created_at = parse_timestamp(row.get("created_at"))
        return order.id

    def add_lines(self, order_id: str, lines: list[OrderLine]) -> None:
        """Insert the lines of an order, skipping any already written.

        Safe to call again after a partial failure: lines already
        present under *order_id* are not written twice.
        """
        written = Counter(
            row["product_id"]
            for row in self._store.select(ORDER_ITEMS, {"order_id": order_id})
        )
        for line in lines:
            if written[line.product_id] > 0:
                written[line.product_id] -= 1
                continue
            self._store.insert(ORDER_ITEMS, line.to_record(order_id))

    def reset_lines(self, order_id: str, total_price: Money) -> None:
        """Drop the lines of an unfinished order and set its new total."""
        self._store.delete(ORDER_ITEMS, {"order_id": order_id})
        self._store.update(ORDERS, {"id": order_id}, {"total_price": str(total_price.amount)})

    def remove(self, order_id: str) -> None:
        """Delete an order, lines first so no reader sees lines without it."""
        self._store.delete(ORDER_ITEMS, {"order_id": order_id})
        self._store.delete(ORDERS, {"id": order_id})

    # --- Reads ----------------------------------------------------------------

    def find_by_submission(self, user_id: str, submission_id: str) -> Order | None:
        """The order placed under *submission_id*, finished or not."""
        rows = self._store.select(
            ORDERS, {"user_id": user_id, "submission_id": submission_id}
        )
        if not rows:
            return None
        return self._assemble(rows)[0]

    def list_for_user(self, user_id: str) -> list[Order]:
        """The user's finished orders, newest first."""
        rows = self._store.select(
            ORDERS, {"user_id": user_id}, order_by="created_at", descending=True
        )
        return self._finished(self._assemble(rows))

    def list_all(self) -> list[Order]:
        """Every finished order, newest first."""
        rows = self._store.select(ORDERS, order_by="created_at", descending=True)
        return self._finished(self._assemble(rows))

    def is_unfinished(self, order: Order) -> bool:
        return order.id in self._unfinished([order])

    def unfinished_ids(self) -> list[str]:
        """Ids of every unfinished order, oldest first."""
        orders = self._assemble(self._store.select(ORDERS, order_by="created_at"))
        unfinished = self._unfinished(orders)
        return [order.id for order in orders if order.id in unfinished]

    def _finished(self, orders: list[Order]) -> list[Order]:
        unfinished = self._unfinished(orders)
        return [order for order in orders if order.id not in unfinished]

    def _unfinished(self, orders: list[Order]) -> set[str]:
        if not orders:
            return set()
        oldest_cart_line: dict[str, datetime] = {}
        for row in self._store.select(CART, {"user_id": sorted({o.user_id for o in orders})}):
            created_at = parse_timestamp(row.get("created_at"))
            current = oldest_cart_line.get(row["user_id"])
            if current is None or created_at < current:
                oldest_cart_line[row["user_id"]] = created_at

        unfinished = set()
        for order in orders:
            oldest = oldest_cart_line.get(order.user_id)
            if not order.items or (oldest is not None and oldest < order.created_at):
                unfinished.add(order.id)
        return unfinished

    # --- Serialization --------------------------------------------------------

    def _assemble(self, order_rows: list[dict]) -> list[Order]:
        if not order_rows:
            return []
        item_rows = self._store.select(
            ORDER_ITEMS, {"order_id": [row["id"] for row in order_rows]}
        )
        names = {
            product_id: product.name
            for product_id, product in self._products.get_many(
                sorted({row["product_id"] for row in item_rows})
            ).items()
        }

        items_by_order: dict[str, list[OrderLine]] = {}
        for row in item_rows:
            items_by_order.setdefault(row["order_id"], []).append(
                OrderLine(
                    product_id=row["product_id"],
                    product_name=names.get(row["product_id"], DELETED_PRODUCT_NAME),
                    quantity=Quantity(int(row["quantity"])),
                    unit_price=Money.of(row["price"]),
                )
            )

        return [
            Order(
                id=row["id"],
                user_id=row["user_id"],
                items=items_by_order.get(row["id"], []),
                total_price=Money.of(row["total_price"]),
                status=OrderStatus(row.get("status", OrderStatus.COMPLETED.value)),
                created_at=parse_timestamp(row.get("created_at")),
                submission_id=row.get("submission_id"),
            )
            for row in order_rows
        ]
