"""CLI commands for checkout and orders."""

from __future__ import annotations

import click

from storefront.application.dto import OrderDTO
from storefront.domain.exceptions import DomainException, EmptyCartError
from storefront.infrastructure.cli.context import CliState, pass_state


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id[:8]}  (status={dto.status})")
    if dto.purchaser_name or dto.purchaser_email:
        click.echo(f"Customer: {dto.purchaser_name or '-'} <{dto.purchaser_email or '-'}>")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("checkout")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True, help="City.")
@click.option("--zip-code", required=True, help="Postal code.")
@click.option("--card-number", required=True, help="16-digit card number.")
@click.option("--card-name", required=True, help="Cardholder name.")
@click.option("--expiry", required=True, help="Card expiry, MM/YY.")
@click.option("--cvv", required=True, help="3 or 4 digit security code.")
@click.option(
    "--expected-total",
    default=None,
    help="Total you were shown; checkout stops if it changed.",
)
@click.option("--submission-id", default=None, help="Idempotency key for this submission.")
@pass_state
def order_checkout(
    state: CliState,
    address: str,
    city: str,
    zip_code: str,
    card_number: str,
    card_name: str,
    expiry: str,
    cvv: str,
    expected_total: str | None,
    submission_id: str | None,
) -> None:
    """Place an order for everything in your cart."""
    fields = {
        "address": address,
        "city": city,
        "zip_code": zip_code,
        "card_number": card_number,
        "card_name": card_name,
        "expiry": expiry,
        "cvv": cvv,
    }

    try:
        dto = state.services.checkout.handle(
            state.caller(),
            fields,
            expected_total=expected_total,
            submission_id=submission_id,
        )
    except EmptyCartError as exc:
        raise click.ClickException(f"{exc}. Add items with 'cart add' first.")
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Your order has been successfully placed!")
    click.echo()
    _display_order(dto)


@click.command("history")
@pass_state
def order_history(state: CliState) -> None:
    """Show your past orders, newest first."""
    try:
        orders = state.services.history.list_own(state.caller())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders yet.")
        return
    for dto in orders:
        _display_order(dto)
        click.echo()


@click.command("all")
@pass_state
def order_all(state: CliState) -> None:
    """Show every order in the store (admin only)."""
    try:
        orders = state.services.history.list_all(state.caller())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return
    for dto in orders:
        _display_order(dto)
        click.echo()


@click.command("reconcile")
@click.option("--remove", is_flag=True, help="Delete the orphaned orders found.")
@pass_state
def order_reconcile(state: CliState, remove: bool) -> None:
    """Find orders left without lines by a failed checkout (admin only)."""
    reconciler = state.services.reconciler
    try:
        if remove:
            order_ids = reconciler.remove_orphans(state.caller())
        else:
            order_ids = reconciler.find_orphans(state.caller())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not order_ids:
        click.echo("No orphaned orders.")
        return
    verb = "Removed" if remove else "Found"
    click.echo(f"{verb} {len(order_ids)} orphaned order(s):")
    for order_id in order_ids:
        click.echo(f"  {order_id}")
