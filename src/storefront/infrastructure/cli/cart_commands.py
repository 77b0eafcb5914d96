"""CLI commands for the caller's cart."""

from __future__ import annotations

import click

from storefront.application.dto import CartDTO
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.context import CliState, pass_state


@click.command("show")
@pass_state
def cart_show(state: CliState) -> None:
    """Show the items in your cart and the total."""
    try:
        dto = CartDTO.from_cart(state.services.cart.load_cart(state.caller()))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.lines:
        click.echo("Your cart is empty")
        return

    click.echo(f"  {'Line':<38} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*86}")
    for line in dto.lines:
        click.echo(
            f"  {line.id:<38} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*86}")
    click.echo(f"  {'Total':<66} {dto.total:>20}")


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@pass_state
def cart_add(state: CliState, product_id: str) -> None:
    """Add one unit of a product to your cart."""
    try:
        line = state.services.cart.add_or_increment(state.caller(), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{line.product.name} x {line.quantity} in cart")


@click.command("set")
@click.option("--line", "line_id", required=True, help="Cart line ID.")
@click.option("--quantity", required=True, type=int, help="New quantity (1 or more).")
@pass_state
def cart_set(state: CliState, line_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    try:
        changed = state.services.cart.set_quantity(state.caller(), line_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not changed:
        click.echo("Quantity must be at least 1; use 'cart remove' to drop the item.")
        return
    click.echo(f"Quantity updated to {quantity}")


@click.command("remove")
@click.option("--line", "line_id", required=True, help="Cart line ID.")
@pass_state
def cart_remove(state: CliState, line_id: str) -> None:
    """Remove a line from your cart."""
    try:
        state.services.cart.remove_line(state.caller(), line_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Item removed from cart")
