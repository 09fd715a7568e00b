"""CLI commands for the warehouse network."""

from __future__ import annotations

import click

from fulfillment.application.show_warehouses import ShowWarehousesHandler
from fulfillment.domain.exceptions import DomainException, StoreError
from fulfillment.infrastructure.bootstrap import fulfillment_store
from fulfillment.infrastructure.persistence.seed import seed_warehouses


@click.command("list")
def warehouse_list() -> None:
    """Show every warehouse and its current stock."""
    try:
        handler = ShowWarehousesHandler(store=fulfillment_store())
        lines = handler.handle()
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No warehouses found. Run 'warehouse seed' first.")
        return

    click.echo(f"{'ID':<8} {'Name':<14} {'Latitude':>11} {'Longitude':>12} {'Stock':>7}")
    click.echo("-" * 56)
    for wh in lines:
        click.echo(
            f"{wh.id:<8} {wh.name:<14} {wh.latitude:>11.6f} {wh.longitude:>12.6f} {wh.stock:>7}"
        )


@click.command("seed")
def warehouse_seed() -> None:
    """Reset warehouses to the default network and stock levels."""
    try:
        warehouses = seed_warehouses(fulfillment_store())
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Seeded {len(warehouses)} warehouses.")
