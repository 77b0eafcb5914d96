"""Application service: the caller's shopping cart.

Reads the cart joined with current product data and applies the three
cart mutations: add-or-increment, set quantity and remove.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import EntityNotFoundError, LoadError, PersistError
from storefront.domain.model.cart import Cart, CartLine, ProductSnapshot, compute_total
from storefront.domain.model.caller import CallerContext
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


class CartAggregator:

    def __init__(self, cart_repo: CartRepository, product_repo: ProductRepository) -> None:
        self._cart_repo = cart_repo
        self._product_repo = product_repo

    def load_cart(self, ctx: CallerContext) -> Cart:
        try:
            lines = self._cart_repo.lines_for(ctx.user_id)
        except StoreError as exc:
            logger.warning("Cart load failed", user_id=ctx.user_id, error=str(exc))
            raise LoadError("Failed to load cart") from exc
        return Cart(user_id=ctx.user_id, lines=lines)

    @staticmethod
    def compute_total(lines: list[CartLine]) -> Money:
        return compute_total(lines)

    def count_lines(self, ctx: CallerContext) -> int:
        try:
            return self._cart_repo.count(ctx.user_id)
        except StoreError as exc:
            raise LoadError("Failed to load cart") from exc

    def set_quantity(self, ctx: CallerContext, line_id: str, new_quantity: int) -> bool:
        """Change the quantity of one line.

        Quantities below 1 are ignored and nothing is written; a line
        only goes away through ``remove_line``. Returns whether a write
        was made.
        """
        if new_quantity < 1:
            return False
        try:
            self._cart_repo.set_quantity(ctx.user_id, line_id, Quantity(new_quantity))
        except StoreError as exc:
            raise PersistError("Failed to update quantity") from exc
        return True

    def remove_line(self, ctx: CallerContext, line_id: str) -> None:
        try:
            self._cart_repo.remove(ctx.user_id, line_id)
        except StoreError as exc:
            raise PersistError("Failed to remove item") from exc

    def add_or_increment(self, ctx: CallerContext, product_id: str) -> CartLine:
        """Put one more unit of a product in the caller's cart.

        Lookup and write are two store calls, so two concurrent adds of
        the same product can still produce two lines.
        """
        try:
            product = self._product_repo.get_by_id(product_id)
            existing = self._cart_repo.find_row(ctx.user_id, product_id)
        except StoreError as exc:
            raise LoadError("Failed to load cart") from exc
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        if existing is not None:
            quantity = Quantity(int(existing["quantity"])).increment()
            try:
                self._cart_repo.set_quantity(ctx.user_id, existing["id"], quantity)
            except StoreError as exc:
                raise PersistError("Failed to update cart") from exc
            line_id = existing["id"]
        else:
            quantity = Quantity(1)
            try:
                line_id = self._cart_repo.add_row(ctx.user_id, product_id, quantity)["id"]
            except StoreError as exc:
                raise PersistError("Failed to add to cart") from exc

        logger.info(
            "Cart updated",
            user_id=ctx.user_id,
            product_id=product_id,
            quantity=quantity.value,
        )
        return CartLine(
            id=line_id,
            user_id=ctx.user_id,
            product=ProductSnapshot(
                id=product.id,
                name=product.name,
                price=product.price,
                image_url=product.image_url,
            ),
            quantity=quantity,
        )
