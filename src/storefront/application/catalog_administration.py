"""Application service: catalog administration.

Every operation checks the admin role itself before validating or
writing anything, so calling it directly gives no way around the gate.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from storefront.application.authorization import RoleAuthorizationGate
from storefront.domain.exceptions import EntityNotFoundError, LoadError, PersistError
from storefront.domain.model.caller import CallerContext
from storefront.domain.model.product import Product, ProductDraft
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CatalogAdministration:

    def __init__(self, product_repo: ProductRepository, gate: RoleAuthorizationGate) -> None:
        self._product_repo = product_repo
        self._gate = gate

    def list_products(self, ctx: CallerContext) -> list[Product]:
        self._gate.require_admin(ctx)
        try:
            return self._product_repo.list_all()
        except StoreError as exc:
            raise LoadError("Failed to load products") from exc

    def create(
        self,
        ctx: CallerContext,
        name: str,
        price: str | Decimal,
        stock: str | int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        self._gate.require_admin(ctx)
        draft = ProductDraft.parse(name, price, stock, description, image_url)

        try:
            product = self._product_repo.add(draft)
        except StoreError as exc:
            raise PersistError("Failed to save product") from exc

        logger.info("Product created", product_id=product.id, by=ctx.user_id)
        return product

    def update(
        self,
        ctx: CallerContext,
        product_id: str,
        name: str,
        price: str | Decimal,
        stock: str | int,
        description: str | None = None,
        image_url: str | None = None,
    ) -> Product:
        """Replace every editable field of a product.

        This does NOT affect any existing orders, which captured a
        price snapshot at checkout time.
        """
        self._gate.require_admin(ctx)
        draft = ProductDraft.parse(name, price, stock, description, image_url)

        try:
            current = self._product_repo.get_by_id(product_id)
            if current is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            self._product_repo.replace(product_id, draft)
        except StoreError as exc:
            raise PersistError("Failed to save product") from exc

        logger.info("Product updated", product_id=product_id, by=ctx.user_id)
        return Product(
            id=product_id,
            name=draft.name,
            price=draft.price,
            stock=draft.stock,
            description=draft.description,
            image_url=draft.image_url,
            created_at=current.created_at,
        )

    def delete(self, ctx: CallerContext, product_id: str) -> None:
        self._gate.require_admin(ctx)
        try:
            self._product_repo.delete(product_id)
        except StoreError as exc:
            raise PersistError("Failed to delete product") from exc
        logger.info("Product deleted", product_id=product_id, by=ctx.user_id)
