"""Role authorization gate.

Decides whether a caller may use the administrative surface. The gate
fails closed: a lookup that errors is reported as CHECK_FAILED and
denies access exactly like a missing role does.
"""

from __future__ import annotations

import structlog

from storefront.domain.exceptions import AuthorizationError
from storefront.domain.model.caller import CallerContext, Role, RoleCheck
from storefront.domain.repository.data_store import StoreError
from storefront.domain.repository.role_repository import RoleRepository

logger = structlog.get_logger(__name__)


class RoleAuthorizationGate:

    def __init__(self, role_repo: RoleRepository) -> None:
        self._role_repo = role_repo

    def check(self, ctx: CallerContext) -> RoleCheck:
        try:
            granted = self._role_repo.has_role(ctx.user_id, Role.ADMIN)
        except StoreError as exc:
            logger.warning("Role check failed", user_id=ctx.user_id, error=str(exc))
            return RoleCheck.CHECK_FAILED
        return RoleCheck.ADMIN if granted else RoleCheck.NOT_ADMIN

    def is_admin(self, ctx: CallerContext) -> bool:
        """Never raises; anything short of a confirmed role is False."""
        return self.check(ctx).granted

    def require_admin(self, ctx: CallerContext) -> None:
        result = self.check(ctx)
        if not result.granted:
            logger.info("Admin access denied", user_id=ctx.user_id, result=result.value)
            raise AuthorizationError("You do not have admin privileges")
