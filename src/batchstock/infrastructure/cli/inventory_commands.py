"""CLI commands for the inventory service."""

from __future__ import annotations

import json

import click

from batchstock.application.reserve_inventory import ReserveInventoryHandler
from batchstock.application.show_inventory import ShowInventoryHandler
from batchstock.domain.exceptions import DomainException
from batchstock.infrastructure.bootstrap import inventory_endpoints, inventory_service
from batchstock.infrastructure.cli.errors import exit_code_for_status, to_click_exception


@click.command("show")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the wire payload.")
def inventory_show(product_id: int, as_json: bool) -> None:
    """Show a product's batches in reservation order."""
    if as_json:
        status, payload = inventory_endpoints().get_inventory(product_id)
        click.echo(json.dumps(payload, indent=2))
        if status >= 400:
            click.get_current_context().exit(exit_code_for_status(status))
        return

    handler = ShowInventoryHandler(inventory_service())
    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"Product #{dto.product_id}  {dto.product_name}")
    click.echo(f"Strategy: {inventory_service().strategy.value}")
    click.echo()
    click.echo(f"  {'Batch':<8} {'Quantity':>10} {'Expires':>12}")
    click.echo(f"  {'-'*32}")
    for batch in dto.batches:
        click.echo(f"  {batch.batch_id:<8} {batch.quantity:>10} {batch.expiry_date:>12}")
    click.echo(f"  {'-'*32}")
    click.echo(f"  {'Available':<8} {dto.total_available:>10}")


@click.command("reserve")
@click.option("--product-id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=int, help="Units to reserve.")
def inventory_reserve(product_id: int, quantity: int) -> None:
    """Reserve stock directly, without placing an order."""
    handler = ReserveInventoryHandler(inventory_service())
    try:
        dto = handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise to_click_exception(exc)

    click.echo(f"{dto.message}: {dto.updated_quantity} units reserved")
    for allocation in dto.allocations:
        click.echo(f"  batch {allocation.batch_id}: {allocation.quantity_taken}")
