"""Application service: reconcile orphaned orders.

An orphan is an order whose checkout never finished: it has no lines,
or its owner still has the cart lines it was placed from. That happens
when a checkout wrote the order, failed part way and could not delete
it again. Removing an orphan finishes that rollback and leaves the
cart alone, so the owner can check out again. Admin only.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import RoleAuthorizationGate
from storefront.domain.exceptions import LoadError, PersistError
from storefront.domain.model.caller import CallerContext
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class OrderReconciler:

    def __init__(self, order_repo: OrderRepository, gate: RoleAuthorizationGate) -> None:
        self._order_repo = order_repo
        self._gate = gate

    def find_orphans(self, ctx: CallerContext) -> list[str]:
        self._gate.require_admin(ctx)
        try:
            return self._order_repo.unfinished_ids()
        except StoreError as exc:
            raise LoadError("Failed to load orders") from exc

    def remove_orphans(self, ctx: CallerContext) -> list[str]:
        """Delete every orphaned order and return the ids removed."""
        orphans = self.find_orphans(ctx)
        for order_id in orphans:
            try:
                self._order_repo.remove(order_id)
            except StoreError as exc:
                raise PersistError(f"Failed to remove order {order_id}") from exc
            logger.info("Orphaned order removed", order_id=order_id, by=ctx.user_id)
        return orphans
