"""CLI commands for the Order aggregate."""

from __future__ import annotations

import json

import click

from batchstock.application.dto import OrderDTO
from batchstock.application.place_order import PlaceOrderHandler
from batchstock.application.show_order import ListOrdersHandler, ShowOrderHandler
from batchstock.domain.exceptions import DomainException
from batchstock.infrastructure.bootstrap import (
    inventory_gateway,
    order_endpoints,
    order_repository,
)
from batchstock.infrastructure.cli.errors import exit_code_for_status, to_click_exception


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Product:  #{dto.product_id} {dto.product_name}")
    click.echo(f"Quantity: {dto.quantity}")
    click.echo(f"Date:     {dto.order_date}")
    click.echo(f"Batches:  {', '.join(str(b) for b in dto.reserved_batch_ids)}")


@click.command("place")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to order.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the wire payload.")
def order_place(product_id: int, quantity: int, as_json: bool) -> None:
    """Place an order (reserves inventory from batches)."""
    if as_json:
        status, payload = order_endpoints().place_order(
            {"productId": product_id, "quantity": quantity}
        )
        click.echo(json.dumps(payload, indent=2))
        if status >= 400:
            click.get_current_context().exit(exit_code_for_status(status))
        return

    handler = PlaceOrderHandler(
        order_repo=order_repository(),
        inventory_gateway=inventory_gateway(),
    )
    try:
        dto = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise to_click_exception(exc)

    _display_order(dto)
    click.echo()
    click.echo(dto.message)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())
    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    _display_order(dto)


@click.command("list")
def order_list() -> None:
    """List all placed orders."""
    orders = ListOrdersHandler(order_repo=order_repository()).handle()

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Product':<20} {'Qty':>5} {'Date':>12}  Batches")
    click.echo("-" * 60)
    for o in orders:
        batches = ",".join(str(b) for b in o.reserved_batch_ids)
        click.echo(f"{o.id:<6} {o.product_name:<20} {o.quantity:>5} {o.order_date:>12}  {batches}")
