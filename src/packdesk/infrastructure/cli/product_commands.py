"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from packdesk.application.set_stock import SetStockHandler
from packdesk.application.show_stock import ShowStockHandler
from packdesk.domain.exceptions import DomainException
from packdesk.infrastructure.bootstrap import activity_log, current_user, product_repository


@click.command("list")
@click.option("--low", is_flag=True, default=False, help="Only products at or below their minimum.")
def product_list(low: bool) -> None:
    """List products with their stock levels."""
    lines = ShowStockHandler(product_repo=product_repository()).handle(low_only=low)

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<8} {'Name':<28} {'Barcode':<15} {'Stock':>6} {'Min':>5}")
    click.echo("-" * 66)
    for line in lines:
        flag = "  LOW" if line.low_stock else ""
        click.echo(
            f"{line.id:<8} {line.name:<28} {line.barcode:<15} {line.quantity:>6} {line.min_quantity:>5}{flag}"
        )


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units in stock.")
def product_set_stock(product_id: str, quantity: int) -> None:
    """Correct the stock level of a product."""
    handler = SetStockHandler(product_repo=product_repository(), activity_log=activity_log())

    try:
        handler.handle(product_id=product_id, quantity=quantity, actor=current_user())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for product {product_id} set to {quantity}")
