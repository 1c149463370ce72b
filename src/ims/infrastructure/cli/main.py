import click

from ims.infrastructure.cli.product_commands import (
    product_activate,
    product_create,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from ims.infrastructure.cli.stock_commands import (
    stock_add,
    stock_history,
    stock_low,
    stock_reconcile,
    stock_remove,
)
from ims.infrastructure.config import load_settings
from ims.infrastructure.logging_setup import setup_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Inventory management CLI."""
    try:
        config = load_settings()
    except ValueError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}")
    setup_logging(config.log_level)
    ctx.obj = config


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def stock() -> None:
    """Move stock and inspect the ledger."""


# Register subcommands
product.add_command(product_create)
product.add_command(product_update)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_delete)
product.add_command(product_activate)
stock.add_command(stock_add)
stock.add_command(stock_remove)
stock.add_command(stock_history)
stock.add_command(stock_low)
stock.add_command(stock_reconcile)
