"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from packdesk.application.show_order import ShowOrderHandler
from packdesk.domain.exceptions import DomainException
from packdesk.infrastructure.bootstrap import order_repository


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.order_number}  (status={dto.status}, source={dto.source})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Ordered:  {dto.ordered_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Order Total':<30} {dto.total:>29}")
