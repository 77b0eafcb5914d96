"""Tests for the role authorization gate."""

import pytest

from storefront.application.authorization import RoleAuthorizationGate
from storefront.domain.exceptions import AuthorizationError
from storefront.domain.model.caller import CallerContext, RoleCheck
from storefront.domain.repository.role_repository import RoleRepository
from tests.fakes import FakeDataStore, grant_admin


def _gate(*admins: str) -> tuple[RoleAuthorizationGate, FakeDataStore]:
    store = FakeDataStore()
    for user_id in admins:
        grant_admin(store, user_id)
    return RoleAuthorizationGate(RoleRepository(store)), store


def test_admin_is_admin():
    gate, _ = _gate("root")
    assert gate.check(CallerContext("root")) is RoleCheck.ADMIN
    assert gate.is_admin(CallerContext("root")) is True


def test_missing_role_is_not_admin():
    gate, _ = _gate("root")
    assert gate.check(CallerContext("alice")) is RoleCheck.NOT_ADMIN
    assert gate.is_admin(CallerContext("alice")) is False


def test_other_roles_do_not_count():
    gate, store = _gate()
    store.insert("user_roles", {"user_id": "alice", "role": "editor"})
    assert gate.is_admin(CallerContext("alice")) is False


def test_lookup_failure_fails_closed():
    gate, store = _gate("root")
    store.fail("count", "user_roles")

    assert gate.check(CallerContext("root")) is RoleCheck.CHECK_FAILED
    assert gate.is_admin(CallerContext("root")) is False


def test_require_admin_raises_for_non_admin():
    gate, _ = _gate()
    with pytest.raises(AuthorizationError, match="admin privileges"):
        gate.require_admin(CallerContext("alice"))


def test_require_admin_passes_for_admin():
    gate, _ = _gate("root")
    gate.require_admin(CallerContext("root"))


def test_caller_context_requires_identity():
    with pytest.raises(ValueError):
        CallerContext("  ")
