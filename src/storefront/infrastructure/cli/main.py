import click

from storefront.infrastructure.bootstrap import services_from_settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_remove,
    cart_set,
    cart_show,
)
from storefront.infrastructure.cli.context import CliState
from storefront.infrastructure.cli.order_commands import (
    order_all,
    order_checkout,
    order_history,
    order_reconcile,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging import configure_logging


@click.group()
@click.option(
    "--user", "user_id", default=None, help="Caller identity (overrides STOREFRONT_USER_ID)."
)
@click.pass_context
def cli(ctx: click.Context, user_id: str | None) -> None:
    """Storefront: catalog, cart and checkout."""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)
    ctx.obj = CliState(
        services=services_from_settings(settings),
        user_id=user_id or settings.user_id,
    )


@cli.group()
def product() -> None:
    """Browse and manage products."""


@cli.group()
def cart() -> None:
    """Manage your cart."""


@cli.group()
def order() -> None:
    """Check out and review orders."""


# Register subcommands
product.add_command(product_list)
product.add_command(product_add)
product.add_command(product_update)
product.add_command(product_delete)
cart.add_command(cart_show)
cart.add_command(cart_add)
cart.add_command(cart_set)
cart.add_command(cart_remove)
order.add_command(order_checkout)
order.add_command(order_history)
order.add_command(order_all)
order.add_command(order_reconcile)
