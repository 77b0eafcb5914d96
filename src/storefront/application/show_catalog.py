"""Application service: Show Catalog use case (public, no role needed)."""

from __future__ import annotations

from storefront.domain.exceptions import LoadError
from storefront.domain.model.product import Product
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.product_repository import ProductRepository


class ShowCatalogHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[Product]:
        """Every product in the catalog, newest first."""
        try:
            return self._product_repo.list_all()
        except StoreError as exc:
            raise LoadError("Failed to load products") from exc
