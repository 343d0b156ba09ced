"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus
from storefront.infrastructure.bootstrap import (
    access_guard,
    order_repository,
    product_repository,
)
from storefront.infrastructure.cli.options import token_option


def _parse_items(raw: str) -> list[dict]:
    """Parse 'productId:3,productId:5' into order line payloads."""
    lines: list[dict] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        lines.append({"product_id": product_id.strip(), "quantity": qty})
    return lines


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}  {dto.phone}")
    click.echo(f"Address:  {dto.address}")
    if dto.size:
        click.echo(f"Size:     {dto.size}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*51}")
    for item in dto.items:
        name = item.current_product_name or f"{item.product_name} (removed)"
        click.echo(
            f"  {name:<24} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*51}")
    click.echo(f"  {'Order Total':<31} {dto.total:>20}")


@click.command("create")
@click.option("--name", required=True, help="Customer name.")
@click.option("--phone", required=True, help="Customer phone.")
@click.option("--address", required=True, help="Delivery address.")
@click.option("--size", default="", help="Requested size.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
def order_create(name: str, phone: str, address: str, size: str, items: str) -> None:
    """Place a new order."""
    lines = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
    )

    customer = {"name": name, "phone": phone, "address": address, "size": size}
    try:
        dto = handler.handle(customer, lines)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Total:    {dto.total}")


@click.command("list")
@token_option
def order_list(token: str) -> None:
    """List all orders, newest first (admin)."""
    handler = ListOrdersHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        access_guard=access_guard(),
    )

    try:
        orders = handler.handle(token)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<34} {'Customer':<20} {'Status':<10} {'Total':>10}  Created")
    click.echo("-" * 98)
    for o in orders:
        click.echo(
            f"{o.id:<34} {o.customer_name:<20} {o.status:<10} {o.total:>10}  {o.created_at}"
        )


@click.command("show")
@token_option
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(token: str, order_id: str) -> None:
    """Show details of an existing order (admin)."""
    handler = ShowOrderHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        access_guard=access_guard(),
    )

    try:
        dto = handler.handle(token, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("status")
@token_option
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status",
    required=True,
    help="New status: " + ", ".join(s.value for s in OrderStatus) + ".",
)
def order_status(token: str, order_id: str, status: str) -> None:
    """Change an order's status (admin)."""
    handler = UpdateOrderStatusHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        access_guard=access_guard(),
    )

    try:
        dto = handler.handle(token, order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")
