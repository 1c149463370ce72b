"""CLI commands for stock movements and the stock ledger."""

from __future__ import annotations

import uuid
from datetime import datetime

import click

from ims.application.add_stock import AddStockHandler
from ims.application.reconcile_stock import ReconcileStockHandler
from ims.application.remove_stock import RemoveStockHandler
from ims.application.show_products import LowStockReportHandler
from ims.application.show_stock_history import ShowStockHistoryHandler
from ims.domain.exceptions import DomainException
from ims.domain.repository.stock_history_repository import DEFAULT_HISTORY_LIMIT
from ims.infrastructure.bootstrap import unit_of_work
from ims.infrastructure.config import Settings


def _require_actor(config: Settings, actor: uuid.UUID | None) -> uuid.UUID:
    actor = actor or config.actor_id
    if actor is None:
        raise click.UsageError("An actor is required: pass --actor or set IMS_ACTOR_ID.")
    return actor


def _movement_options(func):
    options = [
        click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID."),
        click.option("--quantity", required=True, type=int, help="Number of units."),
        click.option("--reason", default=None, help="Why the stock changed (max 500 chars)."),
        click.option("--actor", type=click.UUID, default=None, help="ID of the user making the change."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.command("add")
@_movement_options
@click.pass_obj
def stock_add(config: Settings, product_id: uuid.UUID, quantity: int,
              reason: str | None, actor: uuid.UUID | None) -> None:
    """Add units to a product's stock."""
    actor_id = _require_actor(config, actor)
    handler = AddStockHandler(unit_of_work(config), attempts=config.conflict_retries)

    try:
        new_quantity = handler.handle(product_id, quantity, actor_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Added {quantity} to product {product_id}. Stock is now {new_quantity}.")


@click.command("remove")
@_movement_options
@click.pass_obj
def stock_remove(config: Settings, product_id: uuid.UUID, quantity: int,
                 reason: str | None, actor: uuid.UUID | None) -> None:
    """Remove units from a product's stock."""
    actor_id = _require_actor(config, actor)
    handler = RemoveStockHandler(
        unit_of_work(config),
        attempts=config.conflict_retries,
        low_stock_threshold=config.low_stock_threshold,
    )

    try:
        new_quantity = handler.handle(product_id, quantity, actor_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Removed {quantity} from product {product_id}. Stock is now {new_quantity}.")


@click.command("history")
@click.option("--id", "product_id", type=click.UUID, default=None, help="Only this product.")
@click.option("--from", "from_date", type=click.DateTime(), default=None, help="Earliest change (UTC).")
@click.option("--to", "to_date", type=click.DateTime(), default=None, help="Latest change (UTC).")
@click.option("--limit", type=int, default=DEFAULT_HISTORY_LIMIT, show_default=True,
              help="Maximum number of entries.")
@click.pass_obj
def stock_history(config: Settings, product_id: uuid.UUID | None,
                  from_date: datetime | None, to_date: datetime | None, limit: int) -> None:
    """Show stock movements, newest first."""
    handler = ShowStockHistoryHandler(unit_of_work(config))

    try:
        entries = handler.handle(product_id, from_date, to_date, limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not entries:
        click.echo("No stock movements found.")
        return

    click.echo(f"{'When':<20} {'Product':<24} {'Change':>7} {'After':>6}  Reason")
    click.echo("-" * 80)
    for e in entries:
        name = e.product_name or f"<{e.product_id[:8]}>"
        click.echo(
            f"{e.changed_at:<20} {name:<24} {e.quantity_changed:>+7} "
            f"{e.quantity_after:>6}  {e.reason or ''}"
        )


@click.command("low")
@click.option("--threshold", type=int, default=None,
              help="Stock level at or below which a product is low (default from settings).")
@click.pass_obj
def stock_low(config: Settings, threshold: int | None) -> None:
    """List active products that are running low."""
    if threshold is None:
        threshold = config.low_stock_threshold
    handler = LowStockReportHandler(unit_of_work(config))

    try:
        products = handler.handle(threshold)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo(f"No products at or below {threshold} units.")
        return

    click.echo(f"{'Name':<24} {'Type':<16} {'Stock':>6}")
    click.echo("-" * 48)
    for p in products:
        click.echo(f"{p.name:<24} {p.product_type:<16} {p.stock_quantity:>6}")


@click.command("reconcile")
@click.pass_obj
def stock_reconcile(config: Settings) -> None:
    """Check every stock counter against its ledger."""
    discrepancies = ReconcileStockHandler(unit_of_work(config)).handle()

    if not discrepancies:
        click.echo("All stock counters match the ledger.")
        return

    click.echo(f"{'Product':<24} {'Counter':>8} {'Ledger':>8} {'Diff':>6}")
    click.echo("-" * 49)
    for d in discrepancies:
        click.echo(
            f"{d.product_name:<24} {d.stock_quantity:>8} {d.ledger_total:>8} {d.difference:>+6}"
        )
    raise click.exceptions.Exit(1)
