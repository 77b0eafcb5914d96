"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.context import CliState, pass_state


@click.command("list")
@pass_state
def product_list(state: CliState) -> None:
    """List all products in the catalog."""
    try:
        products = state.services.catalog.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Name':<24} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 81)
    for p in products:
        click.echo(f"{p.id:<38} {p.name:<24} {str(p.price):>10} {p.stock:>6}")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--stock", required=True, help="Units in stock.")
@click.option("--description", default="", help="Optional description.")
@click.option("--image-url", default="", help="Optional image URL.")
@pass_state
def product_add(
    state: CliState, name: str, price: str, stock: str, description: str, image_url: str
) -> None:
    """Add a new product to the catalog (admin only)."""
    try:
        product = state.services.admin.create(
            state.caller(),
            name=name,
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 29.99).")
@click.option("--stock", required=True, help="Units in stock.")
@click.option("--description", default="", help="Optional description.")
@click.option("--image-url", default="", help="Optional image URL.")
@pass_state
def product_update(
    state: CliState,
    product_id: str,
    name: str,
    price: str,
    stock: str,
    description: str,
    image_url: str,
) -> None:
    """Replace a product's details (admin only)."""
    try:
        product = state.services.admin.update(
            state.caller(),
            product_id,
            name=name,
            price=price,
            stock=stock,
            description=description,
            image_url=image_url,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated: '{product.name}' at {product.price}")


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.confirmation_option(prompt="Are you sure you want to delete this product?")
@pass_state
def product_delete(state: CliState, product_id: str) -> None:
    """Delete a product from the catalog (admin only)."""
    try:
        state.services.admin.delete(state.caller(), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")
