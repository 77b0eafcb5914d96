"""Tests for the JSON-file-backed store."""

import pytest

from storefront.domain.repository.data_store import StoreError
from storefront.infrastructure.persistence.json_data_store import JsonDataStore


@pytest.fixture
def store(tmp_path):
    return JsonDataStore(tmp_path / "data")


class TestJsonDataStore:

    def test_empty_table_selects_nothing(self, store):
        assert store.select("products") == []
        assert store.count("products") == 0

    def test_insert_assigns_id_and_timestamp(self, store):
        row = store.insert("products", {"name": "Widget", "price": "9.99"})
        assert row["id"]
        assert row["created_at"]
        assert store.select("products", {"id": row["id"]}) == [row]

    def test_insert_keeps_given_id(self, store):
        row = store.insert("products", {"id": "p1", "name": "Widget"})
        assert row["id"] == "p1"

    def test_duplicate_id_rejected(self, store):
        store.insert("products", {"id": "p1", "name": "Widget"})
        with pytest.raises(StoreError, match="Duplicate"):
            store.insert("products", {"id": "p1", "name": "Gadget"})

    def test_persists_across_instances(self, tmp_path):
        JsonDataStore(tmp_path).insert("cart", {"user_id": "alice", "quantity": 1})
        assert JsonDataStore(tmp_path).count("cart", {"user_id": "alice"}) == 1

    def test_filters_support_membership(self, store):
        for name in ("a", "b", "c"):
            store.insert("products", {"id": name, "name": name})
        rows = store.select("products", {"id": ["a", "c"]}, order_by="id")
        assert [r["id"] for r in rows] == ["a", "c"]

    def test_order_by_descending(self, store):
        for n in (2, 3, 1):
            store.insert("orders", {"id": f"o{n}", "created_at": f"2025-01-0{n}T00:00:00"})
        rows = store.select("orders", order_by="created_at", descending=True)
        assert [r["id"] for r in rows] == ["o3", "o2", "o1"]

    def test_update_applies_patch_to_matches(self, store):
        store.insert("cart", {"id": "l1", "user_id": "alice", "quantity": 1})
        store.insert("cart", {"id": "l2", "user_id": "bob", "quantity": 1})
        store.update("cart", {"user_id": "alice"}, {"quantity": 5})
        assert {r["id"]: r["quantity"] for r in store.select("cart")} == {"l1": 5, "l2": 1}

    def test_delete_matches_only(self, store):
        store.insert("cart", {"id": "l1", "user_id": "alice"})
        store.insert("cart", {"id": "l2", "user_id": "bob"})
        store.delete("cart", {"user_id": "alice"})
        store.delete("cart", {"user_id": "nobody"})
        assert [r["id"] for r in store.select("cart")] == ["l2"]

    def test_unknown_table_rejected(self, store):
        with pytest.raises(StoreError, match="Unknown table"):
            store.select("nope")

    def test_corrupt_file_is_store_error(self, tmp_path):
        (tmp_path / "products.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError, match="Cannot read products"):
            JsonDataStore(tmp_path).select("products")
