import click

from batchstock.domain.exceptions import DomainException
from batchstock.infrastructure.bootstrap import settings
from batchstock.infrastructure.cli.errors import to_click_exception
from batchstock.infrastructure.cli.inventory_commands import (
    inventory_reserve,
    inventory_show,
)
from batchstock.infrastructure.cli.order_commands import order_list, order_place, order_show
from batchstock.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """batchstock: batch inventory reservation and ordering"""
    try:
        cfg = settings()
    except DomainException as exc:
        raise to_click_exception(exc)
    configure_logging(cfg.log_level)


@cli.group()
def order() -> None:
    """Place and inspect orders."""


@cli.group()
def inventory() -> None:
    """Inspect and reserve batch inventory."""


# Register subcommands
order.add_command(order_place)
order.add_command(order_show)
order.add_command(order_list)
inventory.add_command(inventory_show)
inventory.add_command(inventory_reserve)
