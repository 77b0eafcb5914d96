"""Repository for the Product aggregate, backed by the ``products`` table."""

from __future__ import annotations

from storefront.domain.model.product import Product, ProductDraft
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.data_store import PRODUCTS, DataStore, parse_timestamp


class ProductRepository:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def get_by_id(self, product_id: str) -> Product | None:
        rows = self._store.select(PRODUCTS, {"id": product_id})
        return self._to_domain(rows[0]) if rows else None

    def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        if not product_ids:
            return {}
        rows = self._store.select(PRODUCTS, {"id": list(product_ids)})
        return {row["id"]: self._to_domain(row) for row in rows}

    def list_all(self) -> list[Product]:
        """Every product, newest first."""
        rows = self._store.select(PRODUCTS, order_by="created_at", descending=True)
        return [self._to_domain(row) for row in rows]

    def add(self, draft: ProductDraft) -> Product:
        return self._to_domain(self._store.insert(PRODUCTS, draft.to_record()))

    def replace(self, product_id: str, draft: ProductDraft) -> None:
        """Overwrite every editable field of a product in one write."""
        self._store.update(PRODUCTS, {"id": product_id}, draft.to_record())

    def delete(self, product_id: str) -> None:
        self._store.delete(PRODUCTS, {"id": product_id})

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: dict) -> Product:
        return Product(
            id=row["id"],
            name=row["name"],
            price=Money.of(row["price"]),
            stock=int(row.get("stock") or 0),
            description=row.get("description"),
            image_url=row.get("image_url"),
            created_at=parse_timestamp(row.get("created_at")),
        )
