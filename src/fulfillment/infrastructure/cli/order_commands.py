"""CLI commands for quoting and submitting orders."""

from __future__ import annotations

import click

from fulfillment.application.dto import CommittedOrder, QuoteResult
from fulfillment.application.show_order import ShowOrderHandler
from fulfillment.domain.exceptions import DomainException, StoreError
from fulfillment.infrastructure.bootstrap import (
    commit_order_handler,
    fulfillment_store,
    quote_order_handler,
)


def _destination_options(func):
    func = click.option(
        "--lon", "longitude", required=True, type=float, help="Destination longitude."
    )(func)
    func = click.option(
        "--lat", "latitude", required=True, type=float, help="Destination latitude."
    )(func)
    func = click.option(
        "--quantity", required=True, type=int, help="Number of units to order."
    )(func)
    return func


def _display_quote(quote: QuoteResult) -> None:
    click.echo(f"Total price:     {quote.total_price}  (discount {quote.discount_percentage}%)")
    click.echo(f"Shipping cost:   {quote.shipping_cost}")
    click.echo(f"Valid:           {'yes' if quote.is_valid else 'no'}")
    if not quote.fulfilled:
        click.echo(f"Short by:        {quote.remaining_quantity} unit(s)")

    if quote.legs:
        click.echo()
        click.echo(f"  {'Warehouse':<20} {'Qty':>6} {'Distance':>14} {'Cost':>12}")
        click.echo(f"  {'-'*55}")
        for leg in quote.legs:
            click.echo(
                f"  {leg.warehouse_name:<20} {leg.quantity:>6} {leg.distance:>14} {leg.cost:>12}"
            )


@click.command("quote")
@_destination_options
def order_quote(quantity: int, latitude: float, longitude: float) -> None:
    """Quote price and shipping for an order (no changes are made)."""
    try:
        handler = quote_order_handler()
        outcome = handler.handle(quantity, latitude, longitude)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    if not isinstance(outcome, QuoteResult):
        raise click.ClickException(outcome.message)

    _display_quote(outcome)


@click.command("submit")
@_destination_options
def order_submit(quantity: int, latitude: float, longitude: float) -> None:
    """Submit an order (reserves stock across warehouses)."""
    try:
        handler = commit_order_handler()
        outcome = handler.handle(quantity, latitude, longitude)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    if not isinstance(outcome, CommittedOrder):
        raise click.ClickException(outcome.message)

    click.echo(f"Order {outcome.order_number} submitted.")
    click.echo(f"Total price:     {outcome.total_price}  (discount {outcome.discount_percentage}%)")
    click.echo(f"Shipping cost:   {outcome.shipping_cost}")
    click.echo(f"Submitted at:    {outcome.submitted_at}")


@click.command("show")
@click.option("--number", "order_number", required=True, help="Order number to display.")
def order_show(order_number: str) -> None:
    """Show details of a submitted order."""
    try:
        handler = ShowOrderHandler(store=fulfillment_store())
        dto = handler.handle(order_number)
    except (DomainException, StoreError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number}")
    click.echo(f"Product:         {dto.product_id} x {dto.quantity}")
    click.echo(f"Ship to:         ({dto.latitude}, {dto.longitude})")
    click.echo(f"Total price:     {dto.total_price}  (discount {dto.discount_percentage}%)")
    click.echo(f"Shipping cost:   {dto.shipping_cost}")
    click.echo(f"Submitted:       {dto.submitted_at}")
