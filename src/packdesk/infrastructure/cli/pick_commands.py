"""CLI commands for the pick-and-pack workflow."""

from __future__ import annotations

import logging

import click

from packdesk.application.commit_fulfillment import CommitFulfillmentHandler
from packdesk.application.start_picking import StartPickingHandler
from packdesk.domain.exceptions import DomainException
from packdesk.domain.model.fulfillment_result import FulfillmentResult
from packdesk.domain.model.pick_list import PickListEntry
from packdesk.domain.service.scan_session import ScanSession
from packdesk.infrastructure.bootstrap import (
    activity_log,
    current_user,
    order_repository,
    order_sync,
    product_repository,
)

logger = logging.getLogger(__name__)

SESSION_HELP = """\
  <barcode>        scan one unit
  + <product-id>   add one unit manually
  - <product-id>   remove one unit
  ! <product-id>   toggle complete
  ? <text>         search by name or barcode
  ready            list orders ready to commit
  commit [ids]     commit the given orders (default: all ready orders)
  quit             leave the session"""


def _display_pick_list(entries: list[PickListEntry]) -> None:
    if not entries:
        click.echo("No orders awaiting fulfillment.")
        return

    click.echo(f"  {'ID':<8} {'Product':<28} {'Barcode':<15} {'Picked':>9}  Orders")
    click.echo(f"  {'-'*78}")
    for entry in entries:
        dto = StartPickingHandler.to_dto(entry)
        mark = "x" if dto.is_complete else " "
        picked = f"{dto.fulfilled}/{dto.required}"
        orders = ", ".join(f"#{n}" for n in dto.order_numbers)
        click.echo(
            f"{mark} {dto.product_id:<8} {dto.product_name:<28} {dto.barcode:<15} {picked:>9}  {orders}"
        )


def _display_result(result: FulfillmentResult) -> None:
    click.echo(f"Orders processed: {result.succeeded} succeeded, {result.failed} failed")
    if result.failed_order_ids:
        click.echo(f"  Failed orders: {', '.join(result.failed_order_ids)}")

    updates = result.product_updates
    click.echo(f"Product updates: {updates.succeeded} succeeded, {updates.failed} failed")
    for shortage in updates.insufficient_stock:
        click.echo(
            f"  Insufficient stock: {shortage.product_name} "
            f"(needed {shortage.needed}, available {shortage.available})"
        )
    if result.low_stock:
        click.echo(f"Low stock: {', '.join(result.low_stock)}")
    if result.sync_failures:
        click.echo(f"Shop sync failed for: {', '.join('#' + n for n in result.sync_failures)}")


def _commit_handler() -> CommitFulfillmentHandler:
    sync = order_sync()
    click.get_current_context().call_on_close(sync.close)
    return CommitFulfillmentHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        activity_log=activity_log(),
        order_sync=sync,
    )


@click.command("list")
def pick_list() -> None:
    """Show the consolidated pick list for all open orders."""
    handler = StartPickingHandler(order_repository(), product_repository())
    try:
        orders, entries = handler.build_pick_list()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Pick list for {len(orders)} order(s)")
    click.echo()
    _display_pick_list(entries)


@click.command("commit")
@click.option("--order", "order_ids", multiple=True, required=True, help="Order ID (repeatable).")
def pick_commit(order_ids: tuple[str, ...]) -> None:
    """Decrement stock and mark the given orders as ready."""
    try:
        result = _commit_handler().handle(order_ids, current_user())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_result(result)


def _run_command(
    line: str,
    session: ScanSession,
    picking: StartPickingHandler,
    committer: CommitFulfillmentHandler,
) -> None:
    cmd, _, arg = line.partition(" ")
    arg = arg.strip()

    if cmd in ("+", "-"):
        entry = session.manual_adjust(arg, 1 if cmd == "+" else -1)
        click.echo(f"{entry.product_name} ({entry.fulfilled_count}/{entry.total_required})")
    elif cmd == "!":
        entry = session.toggle_complete(arg)
        click.echo(f"{entry.product_name} ({entry.fulfilled_count}/{entry.total_required})")
    elif cmd == "?":
        _display_pick_list(session.find(arg))
    elif cmd == "list":
        _display_pick_list(session.entries)
    elif cmd == "ready":
        ready = session.ready_orders(picking.open_orders())
        if not ready:
            click.echo("No orders are fully picked yet.")
        for order in ready:
            click.echo(f"  {order.id}  #{order.order_number}  {order.customer_name}")
    elif cmd == "commit":
        ids = arg.split() or [o.id for o in session.ready_orders(picking.open_orders())]
        result = committer.handle(ids, current_user(), session=session)
        _display_result(result)
    else:
        session.scan_buffer = line
        feedback = session.submit_scan()
        if feedback is not None:
            style = "green" if feedback.success else "red"
            click.secho(feedback.message, fg=style)


@click.command("session")
def pick_session() -> None:
    """Interactive scanning session over the current pick list."""
    picking = StartPickingHandler(order_repository(), product_repository())
    committer = _commit_handler()
    try:
        session = picking.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_pick_list(session.entries)
    click.echo()
    click.echo(SESSION_HELP)

    while True:
        picked, required = session.progress()
        line = click.prompt(f"scan [{picked}/{required}]", default="", show_default=False)
        line = line.strip()
        if line in ("quit", "exit"):
            break
        if not line:
            continue
        try:
            _run_command(line, session, picking, committer)
        except DomainException as exc:
            click.secho(str(exc), fg="red")
        except Exception:
            # Keep the in-memory picking state so the user can retry.
            logger.exception("Unexpected error in picking session")
            click.secho("Something went wrong, please try again.", fg="red")
