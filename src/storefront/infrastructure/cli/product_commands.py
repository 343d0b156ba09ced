"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.delete_product import DeleteProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.show_product import ListProductsHandler, ShowProductHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.value_objects import Category
from storefront.infrastructure.bootstrap import (
    access_guard,
    asset_store,
    product_repository,
)
from storefront.infrastructure.cli.options import read_uploads, token_option, with_image_options
from storefront.infrastructure.config import get_settings

_CATEGORIES = click.Choice([c.value for c in Category])


def _display_product(dto: ProductDTO) -> None:
    click.echo(f"Product #{dto.id}  {dto.name}")
    click.echo(f"Category: {dto.category}")
    click.echo(f"Price:    {dto.price}")
    click.echo(f"Rating:   {dto.rating} ({dto.review_count} reviews)")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Updated:  {dto.updated_at}")
    click.echo()
    click.echo(dto.description)
    click.echo()
    for url in dto.images:
        click.echo(f"  image: {url}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog, newest first."""
    handler = ListProductsHandler(
        product_repo=product_repository(), url_prefix=get_settings().upload_url_prefix
    )

    try:
        products = handler.handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<34} {'Name':<24} {'Category':<18} {'Price':>10}")
    click.echo("-" * 89)
    for p in products:
        click.echo(f"{p.id:<34} {p.name:<24} {p.category:<18} {p.price:>10}")


@click.command("show")
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_show(product_id: str) -> None:
    """Show one product."""
    handler = ShowProductHandler(
        product_repo=product_repository(), url_prefix=get_settings().upload_url_prefix
    )

    try:
        dto = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("add")
@token_option
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, type=_CATEGORIES, help="Catalog category.")
@click.option("--price", required=True, help="Price (e.g. 128.00).")
@click.option("--description", required=True, help="Product description.")
@with_image_options
def product_add(token, name, category, price, description, images, image_urls) -> None:
    """Add a new product to the catalog (admin)."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        asset_store=asset_store(),
        access_guard=access_guard(),
    )

    fields = {"name": name, "category": category, "price": price, "description": description}
    try:
        dto = handler.handle(token, fields, read_uploads(images), list(image_urls))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price}")


@click.command("update")
@token_option
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, type=_CATEGORIES, help="New category.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--description", default=None, help="New description.")
@with_image_options
def product_update(token, product_id, name, category, price, description, images, image_urls) -> None:
    """Update a product (admin). Only the given options change.

    Passing --image or --image-url replaces every existing image.
    """
    handler = UpdateProductHandler(
        product_repo=product_repository(),
        asset_store=asset_store(),
        access_guard=access_guard(),
    )

    supplied = {"name": name, "category": category, "price": price, "description": description}
    fields = {key: value for key, value in supplied.items() if value is not None}
    try:
        dto = handler.handle(token, product_id, fields, read_uploads(images), list(image_urls))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} updated.")
    _display_product(dto)


@click.command("delete")
@token_option
@click.option("--id", "product_id", required=True, help="Product ID.")
def product_delete(token: str, product_id: str) -> None:
    """Delete a product and its uploaded images (admin)."""
    handler = DeleteProductHandler(
        product_repo=product_repository(),
        asset_store=asset_store(),
        access_guard=access_guard(),
    )

    try:
        handler.handle(token, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")
