import click

from storefront.infrastructure.cli.auth_commands import auth_hash_password, auth_login
from storefront.infrastructure.cli.order_commands import (
    order_create,
    order_list,
    order_show,
    order_status,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.config import get_settings
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront — catalog and order management"""
    configure_logging(get_settings())


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def auth() -> None:
    """Admin access."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
auth.add_command(auth_hash_password)
auth.add_command(auth_login)
