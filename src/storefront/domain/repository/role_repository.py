"""Read-only access to role assignments and caller profiles."""

from __future__ import annotations

from storefront.domain.model.caller import Profile, Role
from storefront.domain.repository.data_store import PROFILES, USER_ROLES, DataStore


class RoleRepository:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def has_role(self, user_id: str, role: Role) -> bool:
        return self._store.count(USER_ROLES, {"user_id": user_id, "role": role.value}) > 0


class ProfileRepository:

    def __init__(self, store: DataStore) -> None:
        self._store = store

    def get_many(self, user_ids: list[str]) -> dict[str, Profile]:
        if not user_ids:
            return {}
        rows = self._store.select(PROFILES, {"id": list(user_ids)})
        return {
            row["id"]: Profile(id=row["id"], name=row.get("name"), email=row.get("email"))
            for row in rows
        }
