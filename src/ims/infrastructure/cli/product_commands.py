"""CLI commands for the Product aggregate."""

from __future__ import annotations

import uuid

import click

from ims.application.create_product import CreateProductHandler
from ims.application.delete_product import ActivateProductHandler, DeleteProductHandler
from ims.application.dto import ProductDTO, ProductSpec
from ims.application.show_products import ListProductsHandler, ShowProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.enums import (
    BatterySize,
    ColorType,
    DevicePlugType,
    ProductType,
    TasteType,
)
from ims.domain.model.product import DETAILS_BY_TYPE, ProductDetails
from ims.infrastructure.bootstrap import unit_of_work
from ims.infrastructure.config import Settings


def _variant_name(product_type: ProductType) -> str:
    """``AROMA_BOTTLE`` -> ``aroma-bottle``."""
    return product_type.name.lower().replace("_", "-")


VARIANT_CHOICE = click.Choice([_variant_name(t) for t in ProductType], case_sensitive=False)

# CLI option name -> details field name, per variant
_VARIANT_OPTIONS: dict[ProductType, dict[str, str]] = {
    ProductType.AROMA_BOMBEL: {"taste": "taste"},
    ProductType.AROMA_BOTTLE: {"taste": "taste"},
    ProductType.AROMA_DEVICE: {
        "color": "color",
        "format": "format",
        "programs": "programs",
        "plug_type": "plug_type",
        "square_meter": "square_meter",
    },
    ProductType.SANITIZING_DEVICE: {
        "color": "color",
        "format": "format",
        "programs": "programs",
        "plug_type": "plug_type",
    },
    ProductType.BATTERY: {"battery_type": "type", "size": "size", "brand": "brand"},
}

_ENUM_OPTIONS = {
    "taste": TasteType,
    "color": ColorType,
    "plug_type": DevicePlugType,
    "size": BatterySize,
}


def _labels(enum_cls) -> click.Choice:
    return click.Choice([m.label for m in enum_cls], case_sensitive=False)


def _product_options(func):
    """Options shared by ``create`` and ``update``."""
    options = [
        click.option("--name", required=True, help="Product name (2-200 characters)."),
        click.option("--price", required=True, help="Price (e.g. 1500 or 12.50)."),
        click.option("--currency", default="ALL", show_default=True, help="3-letter currency code."),
        click.option("--description", default=None, help="Free-text description."),
        click.option("--photo-url", default=None, help="http(s) URL of a product photo."),
        click.option("--taste", type=_labels(TasteType), default=None, help="Aroma bombel/bottle scent."),
        click.option("--color", type=_labels(ColorType), default=None, help="Device color."),
        click.option("--format", "format_", default=None, help="Device format."),
        click.option("--programs", default=None, help="Device programs."),
        click.option("--plug-type", type=_labels(DevicePlugType), default=None, help="Device plug type (required for devices)."),
        click.option("--square-meter", default=None, help="Aroma device coverage area."),
        click.option("--battery-type", default=None, help="Battery type."),
        click.option("--size", type=_labels(BatterySize), default=None, help="Battery size."),
        click.option("--brand", default=None, help="Battery brand."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_details(product_type: ProductType, given: dict[str, str | None]) -> ProductDetails:
    """Turn the variant options into a details payload.

    Options that do not belong to the variant are rejected rather than
    silently dropped.
    """
    allowed = _VARIANT_OPTIONS[product_type]
    kwargs = {}
    for option, value in given.items():
        if value is None:
            continue
        if option not in allowed:
            flag = "--" + option.rstrip("_").replace("_", "-")
            raise click.UsageError(
                f"{flag} does not apply to {_variant_name(product_type)} products"
            )
        if option in _ENUM_OPTIONS:
            value = _ENUM_OPTIONS[option].parse(value)
        kwargs[allowed[option]] = value
    if "plug_type" in allowed and "plug_type" not in kwargs:
        raise click.UsageError(
            f"--plug-type is required for {_variant_name(product_type)} products"
        )
    return DETAILS_BY_TYPE[product_type](**kwargs)


def _split_options(options: dict) -> tuple[dict, dict]:
    shared_keys = ("name", "price", "currency", "description", "photo_url")
    shared = {k: options.pop(k) for k in shared_keys}
    variant = {("format" if k == "format_" else k): v for k, v in options.items()}
    return shared, variant


@click.command("create")
@click.argument("variant", type=VARIANT_CHOICE)
@_product_options
@click.pass_obj
def product_create(config: Settings, variant: str, **options) -> None:
    """Add a new product of the given VARIANT to the catalog."""
    product_type = ProductType.parse(variant)
    shared, variant_options = _split_options(options)

    try:
        spec = ProductSpec(**shared)
        details = _build_details(product_type, variant_options)
        dto = CreateProductHandler(unit_of_work(config)).handle(spec, details)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} '{dto.name}' ({dto.product_type}) added at {dto.price}")


@click.command("update")
@click.argument("variant", type=VARIANT_CHOICE)
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@_product_options
@click.pass_obj
def product_update(config: Settings, variant: str, product_id: uuid.UUID, **options) -> None:
    """Replace a product's fields. VARIANT must match the product."""
    product_type = ProductType.parse(variant)
    shared, variant_options = _split_options(options)

    handler = UpdateProductHandler(unit_of_work(config), attempts=config.conflict_retries)
    try:
        spec = ProductSpec(**shared)
        details = _build_details(product_type, variant_options)
        dto = handler.handle(product_id, spec, details)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {dto.id} updated: '{dto.name}' at {dto.price}")


@click.command("list")
@click.option("--type", "variant", type=VARIANT_CHOICE, default=None, help="Only this variant.")
@click.option("--include-inactive", is_flag=True, default=False, help="Include deleted products.")
@click.pass_obj
def product_list(config: Settings, variant: str | None, include_inactive: bool) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(unit_of_work(config), config.low_stock_threshold)
    product_type = ProductType.parse(variant) if variant else None
    products = handler.handle(product_type, include_inactive)

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<36}  {'Name':<24} {'Type':<16} {'Price':>14} {'Stock':>6}  Status")
    click.echo("-" * 108)
    for p in products:
        status = "active" if p.is_active else "inactive"
        if p.is_low_stock and p.is_active:
            status += ", low"
        click.echo(
            f"{p.id:<36}  {p.name:<24} {p.product_type:<16} {p.price:>14} "
            f"{p.stock_quantity:>6}  {status}"
        )


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product {dto.id}  ({'active' if dto.is_active else 'inactive'})")
    click.echo(f"Name:     {dto.name}")
    click.echo(f"Type:     {dto.product_type}")
    click.echo(f"Price:    {dto.price}")
    click.echo(f"Stock:    {dto.stock_quantity}{'  (low)' if dto.is_low_stock else ''}")
    if dto.description:
        click.echo(f"About:    {dto.description}")
    if dto.photo_url:
        click.echo(f"Photo:    {dto.photo_url}")
    for key, value in dto.details.items():
        if value is not None:
            click.echo(f"{key.replace('_', ' ').capitalize() + ':':<10}{value}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Updated:  {dto.updated_at}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def product_show(config: Settings, product_id: uuid.UUID) -> None:
    """Show details of a product."""
    handler = ShowProductHandler(unit_of_work(config), config.low_stock_threshold)

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def product_delete(config: Settings, product_id: uuid.UUID) -> None:
    """Soft-delete a product. Its stock must be zero."""
    handler = DeleteProductHandler(unit_of_work(config), attempts=config.conflict_retries)

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deactivated.")


@click.command("activate")
@click.option("--id", "product_id", required=True, type=click.UUID, help="Product ID.")
@click.pass_obj
def product_activate(config: Settings, product_id: uuid.UUID) -> None:
    """Restore a deactivated product."""
    handler = ActivateProductHandler(unit_of_work(config), attempts=config.conflict_retries)

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} activated.")
