"""Integration tests for catalog administration and browsing."""

import pytest

from storefront.domain.exceptions import (
    AuthorizationError,
    EntityNotFoundError,
    LoadError,
    PersistError,
    ValidationError,
)
from storefront.domain.model.caller import CallerContext
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import build_services
from tests.fakes import FakeDataStore, grant_admin, seed_product

ADMIN = CallerContext("root")
SHOPPER = CallerContext("alice")


def _setup():
    store = FakeDataStore()
    grant_admin(store, "root")
    services = build_services(store)
    return services, store


class TestCreateProduct:

    def test_admin_create_shows_in_catalog(self):
        services, _ = _setup()

        product = services.admin.create(ADMIN, name="Widget", price="9.99", stock=10)

        listed = services.catalog.handle()
        assert [p.name for p in listed] == ["Widget"]
        assert listed[0].id == product.id
        assert listed[0].price == Money.of("9.99")
        assert listed[0].stock == 10

    def test_non_admin_refused_before_any_write(self):
        services, store = _setup()
        store.calls.clear()

        with pytest.raises(AuthorizationError):
            services.admin.create(SHOPPER, name="Widget", price="9.99", stock=10)

        assert store.writes() == []
        assert services.catalog.handle() == []

    def test_role_lookup_failure_refuses(self):
        services, store = _setup()
        store.fail("count", "user_roles")
        with pytest.raises(AuthorizationError):
            services.admin.create(ADMIN, name="Widget", price="9.99", stock=10)
        assert store.rows("products") == []

    def test_invalid_input_not_written(self):
        services, store = _setup()
        with pytest.raises(ValidationError, match="Price must be positive"):
            services.admin.create(ADMIN, name="Widget", price="-1", stock=10)
        assert store.rows("products") == []

    def test_store_failure_is_persist_error(self):
        services, store = _setup()
        store.fail("insert", "products")
        with pytest.raises(PersistError, match="Failed to save product"):
            services.admin.create(ADMIN, name="Widget", price="9.99", stock=10)


class TestUpdateProduct:

    def test_replaces_all_fields(self):
        services, store = _setup()
        product_id = seed_product(store, "Widget", "9.99")

        updated = services.admin.update(
            ADMIN,
            product_id,
            name="Widget Pro",
            price="19.99",
            stock=3,
            description="Better",
            image_url="https://example.com/w.png",
        )

        row = store.rows("products")[0]
        assert row["name"] == "Widget Pro"
        assert row["price"] == "19.99"
        assert row["stock"] == 3
        assert row["description"] == "Better"
        assert updated.image_url == "https://example.com/w.png"

    def test_validation_error_leaves_product_unchanged(self):
        services, store = _setup()
        product_id = seed_product(store, "Widget", "9.99")

        with pytest.raises(ValidationError, match="Stock"):
            services.admin.update(ADMIN, product_id, name="New name", price="1", stock=-5)

        row = store.rows("products")[0]
        assert row["name"] == "Widget"
        assert row["price"] == "9.99"

    def test_missing_product(self):
        services, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            services.admin.update(ADMIN, "nope", name="Widget", price="1", stock=1)

    def test_non_admin_refused(self):
        services, store = _setup()
        product_id = seed_product(store, "Widget", "9.99")
        with pytest.raises(AuthorizationError):
            services.admin.update(SHOPPER, product_id, name="Hacked", price="0", stock=0)
        assert store.rows("products")[0]["name"] == "Widget"


class TestDeleteProduct:

    def test_admin_deletes(self):
        services, store = _setup()
        product_id = seed_product(store, "Widget", "9.99")
        services.admin.delete(ADMIN, product_id)
        assert store.rows("products") == []

    def test_non_admin_refused(self):
        services, store = _setup()
        product_id = seed_product(store, "Widget", "9.99")
        with pytest.raises(AuthorizationError):
            services.admin.delete(SHOPPER, product_id)
        assert len(store.rows("products")) == 1

    def test_store_failure_is_persist_error(self):
        services, store = _setup()
        store.fail("delete", "products")
        with pytest.raises(PersistError, match="Failed to delete product"):
            services.admin.delete(ADMIN, "p1")


class TestListing:

    def test_catalog_is_newest_first(self):
        services, store = _setup()
        seed_product(store, "Old", "1")
        seed_product(store, "New", "1")
        assert [p.name for p in services.catalog.handle()] == ["New", "Old"]

    def test_catalog_failure_is_load_error(self):
        services, store = _setup()
        store.fail("select", "products")
        with pytest.raises(LoadError, match="Failed to load products"):
            services.catalog.handle()

    def test_admin_listing_requires_admin(self):
        services, store = _setup()
        seed_product(store, "Widget", "1")
        assert len(services.admin.list_products(ADMIN)) == 1
        with pytest.raises(AuthorizationError):
            services.admin.list_products(SHOPPER)
