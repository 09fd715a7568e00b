import logging

import click

from fulfillment.infrastructure.cli.order_commands import order_quote, order_show, order_submit
from fulfillment.infrastructure.cli.warehouse_commands import warehouse_list, warehouse_seed
from fulfillment.infrastructure.logging_utils import configure_logging


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Order fulfillment: quote and submit orders."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.group()
def order() -> None:
    """Quote and submit orders."""


@cli.group()
def warehouse() -> None:
    """Manage warehouses."""


# Register subcommands
order.add_command(order_quote)
order.add_command(order_show)
order.add_command(order_submit)
warehouse.add_command(warehouse_list)
warehouse.add_command(warehouse_seed)
