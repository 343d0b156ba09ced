"""End-to-end walk through the catalog and the order ledger with fakes."""

from storefront.application.add_product import AddProductHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order_status import UpdateOrderStatusHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.model.value_objects import Money, OwnedAsset
from tests.fakes import (
    ADMIN_TOKEN,
    FakeAccessGuard,
    FakeAssetStore,
    FakeOrderRepository,
    FakeProductRepository,
    jpeg,
)


def test_order_total_survives_price_change():
    product_repo = FakeProductRepository()
    order_repo = FakeOrderRepository()
    assets = FakeAssetStore()
    guard = FakeAccessGuard()

    product = AddProductHandler(product_repo, assets, guard).handle(
        ADMIN_TOKEN,
        {
            "name": "Silk Wrap Dress",
            "category": "Evening Luxe",
            "price": 128.00,
            "description": "Bias-cut silk with a tie waist.",
        },
        [jpeg("assetA.jpg")],
    )
    assert product_repo.get_by_id(product.id).images == [OwnedAsset("image-1.jpg")]

    order = CreateOrderHandler(order_repo, product_repo).handle(
        {"name": "Alice", "phone": "555-0100", "address": "1 Main St", "size": "S"},
        [{"productId": product.id, "quantity": 2}],
    )
    assert order.total == "$256.00"
    assert order.status == "pending"

    shipped = UpdateOrderStatusHandler(order_repo, product_repo, guard).handle(
        ADMIN_TOKEN, order.id, "shipped"
    )
    assert shipped.status == "shipped"

    UpdateProductHandler(product_repo, assets, guard).handle(
        ADMIN_TOKEN, product.id, {"price": 200.00}
    )

    refetched = ShowOrderHandler(order_repo, product_repo, guard).handle(ADMIN_TOKEN, order.id)
    assert refetched.total == "$256.00"
    assert refetched.items[0].unit_price == "$128.00"
    assert order_repo.get_by_id(order.id).total == Money.of("256.00")
    assert refetched.status == "shipped"
