import click

from packdesk.infrastructure.bootstrap import settings
from packdesk.infrastructure.cli.order_commands import order_show
from packdesk.infrastructure.cli.pick_commands import pick_commit, pick_list, pick_session
from packdesk.infrastructure.cli.product_commands import product_list, product_set_stock
from packdesk.infrastructure.logging_config import setup_logging


@click.group()
def cli() -> None:
    """packdesk — pick, pack and commit open orders"""
    s = settings()
    setup_logging(s.log_level, s.log_file)


@cli.group()
def pick() -> None:
    """Pick open orders."""


@cli.group()
def order() -> None:
    """Inspect orders."""


@cli.group()
def product() -> None:
    """Manage product stock."""


# Register subcommands
pick.add_command(pick_list)
pick.add_command(pick_session)
pick.add_command(pick_commit)
order.add_command(order_show)
product.add_command(product_list)
product.add_command(product_set_stock)
