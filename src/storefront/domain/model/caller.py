"""Caller identity, roles and profiles."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class CallerContext:
    """Who is making the request.

    Passed explicitly into every use case; nothing in the application
    looks the caller up from ambient session state.
    """

    user_id: str

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ValueError("CallerContext requires a user_id")


class Role(Enum):
    ADMIN = "admin"


class RoleCheck(Enum):
    """Outcome of a role lookup.

    CHECK_FAILED means the lookup itself errored, which is not the same
    as the role being absent, but both deny access.
    """

    ADMIN = "admin"
    NOT_ADMIN = "not_admin"
    CHECK_FAILED = "check_failed"

    @property
    def granted(self) -> bool:
        return self is RoleCheck.ADMIN


@dataclass(frozen=True)
class Profile:
    id: str
    name: str | None = None
    email: str | None = None
