"""Composition root: wires concrete implementations to the use cases.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.application.authorization import RoleAuthorizationGate
from storefront.application.cart_aggregator import CartAggregator
from storefront.application.catalog_administration import CatalogAdministration
from storefront.application.order_history import OrderHistory
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.reconcile_orders import OrderReconciler
from storefront.application.show_catalog import ShowCatalogHandler
from storefront.domain.repository.cart_repository import CartRepository
from storefront.domain.repository.data_store import DataStore
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.role_repository import ProfileRepository, RoleRepository
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.json_data_store import JsonDataStore


@dataclass
class Services:
    gate: RoleAuthorizationGate
    catalog: ShowCatalogHandler
    cart: CartAggregator
    checkout: PlaceOrderHandler
    admin: CatalogAdministration
    history: OrderHistory
    reconciler: OrderReconciler


def build_services(store: DataStore, max_retries: int = 2) -> Services:
    product_repo = ProductRepository(store)
    cart_repo = CartRepository(store)
    order_repo = OrderRepository(store)
    gate = RoleAuthorizationGate(RoleRepository(store))
    cart = CartAggregator(cart_repo, product_repo)

    return Services(
        gate=gate,
        catalog=ShowCatalogHandler(product_repo),
        cart=cart,
        checkout=PlaceOrderHandler(cart, order_repo, cart_repo, max_retries=max_retries),
        admin=CatalogAdministration(product_repo, gate),
        history=OrderHistory(order_repo, ProfileRepository(store), gate),
        reconciler=OrderReconciler(order_repo, gate),
    )


def services_from_settings(settings: Settings) -> Services:
    return build_services(
        JsonDataStore(settings.data_dir),
        max_retries=settings.checkout_max_retries,
    )
