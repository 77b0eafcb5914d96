"""Abstract table store.

The storefront treats its persistence layer as a plain CRUD store with
per-call atomicity only: each insert, update or delete either happens
completely or not at all, but nothing spans more than one call.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory) live
elsewhere.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

PRODUCTS = "products"
CART = "cart"
ORDERS = "orders"
ORDER_ITEMS = "order_items"
USER_ROLES = "user_roles"
PROFILES = "profiles"

TABLES = (PRODUCTS, CART, ORDERS, ORDER_ITEMS, USER_ROLES, PROFILES)

# column -> value; a list, tuple or set value means "column is one of"
Filters = dict[str, Any]


class StoreError(Exception):
    """A store call failed. Nothing from that call was applied."""


def matches(row: dict, filters: Filters | None) -> bool:
    """True if *row* satisfies every condition in *filters*."""
    for column, expected in (filters or {}).items():
        value = row.get(column)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if value not in expected:
                return False
        elif value != expected:
            return False
    return True


class DataStore(ABC):

    @abstractmethod
    def select(
        self,
        table: str,
        filters: Filters | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict]:
        """Return matching rows, optionally sorted by one column."""

    @abstractmethod
    def insert(self, table: str, record: dict) -> dict:
        """Insert a row and return it as stored, with ``id`` and
        ``created_at`` filled in when the record did not carry them."""

    @abstractmethod
    def update(self, table: str, filters: Filters, patch: dict) -> None:
        """Apply *patch* to every matching row."""

    @abstractmethod
    def delete(self, table: str, filters: Filters) -> None:
        """Delete every matching row. Deleting nothing is not an error."""

    @abstractmethod
    def count(self, table: str, filters: Filters | None = None) -> int:
        """Return the number of matching rows."""


def parse_timestamp(value: Any) -> datetime:
    """Read a ``created_at`` column, stored as an ISO-8601 string."""
    if isinstance(value, datetime):
        return value
    if not value:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(value)
