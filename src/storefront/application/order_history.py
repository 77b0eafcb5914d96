"""Application service: order history.

Callers see their own orders; admins see every order together with
who placed it.
"""

from __future__ import annotations

import structlog

from storefront.application.authorization import RoleAuthorizationGate
from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import LoadError
from storefront.domain.model.caller import CallerContext, Profile
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.role_repository import ProfileRepository

logger = structlog.get_logger(__name__)


class OrderHistory:

    def __init__(
        self,
        order_repo: OrderRepository,
        profile_repo: ProfileRepository,
        gate: RoleAuthorizationGate,
    ) -> None:
        self._order_repo = order_repo
        self._profile_repo = profile_repo
        self._gate = gate

    def list_own(self, ctx: CallerContext) -> list[OrderDTO]:
        """The caller's orders, newest first."""
        try:
            orders = self._order_repo.list_for_user(ctx.user_id)
        except StoreError as exc:
            raise LoadError("Failed to load orders") from exc
        return [OrderDTO.from_order(order) for order in orders]

    def list_all(self, ctx: CallerContext) -> list[OrderDTO]:
        """Every order in the store, newest first, with purchaser profile.

        Admin only. Profiles are decoration: if they cannot be read the
        orders are still returned, without names.
        """
        self._gate.require_admin(ctx)
        try:
            orders = self._order_repo.list_all()
        except StoreError as exc:
            raise LoadError("Failed to load orders") from exc

        user_ids = sorted({order.user_id for order in orders})
        profiles: dict[str, Profile] = {}
        try:
            profiles = self._profile_repo.get_many(user_ids)
        except StoreError as exc:
            logger.warning("Profile lookup failed", user_count=len(user_ids), error=str(exc))

        return [OrderDTO.from_order(order, profiles.get(order.user_id)) for order in orders]
