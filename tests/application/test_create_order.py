"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories — no file I/O.
"""

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Category, ExternalAsset, Money
from tests.fakes import FakeOrderRepository, FakeProductRepository

CUSTOMER = {"name": "Alice", "phone": "555-0100", "address": "1 Main St", "size": "M"}


def _product(product_id: str, price: str) -> Product:
    return Product.create(
        product_id=product_id,
        name=f"Item {product_id}",
        category=Category.WARDROBE_STAPLES,
        price=Money.of(price),
        description="A staple.",
        images=[ExternalAsset(f"https://cdn.example.com/{product_id}.jpg")],
    )


def _setup(
    products: list[Product] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    """Build handler with fake repos, optionally pre-loaded with products."""
    if products is None:
        products = [_product("p1", "15.00"), _product("p2", "25.00")]
    order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(products)
    handler = CreateOrderHandler(order_repo, product_repo)
    return handler, order_repo, product_repo


class TestCreateOrderHappyPath:

    def test_creates_pending_order_with_correct_total(self):
        handler, _, _ = _setup()
        dto = handler.handle(CUSTOMER, [
            {"product_id": "p1", "quantity": 3},
            {"product_id": "p2", "quantity": 5},
        ])
        assert dto.total == "$170.00"
        assert dto.status == "pending"
        assert dto.customer_name == "Alice"
        assert [item.unit_price for item in dto.items] == ["$15.00", "$25.00"]

    def test_accepts_camel_case_product_id(self):
        handler, _, _ = _setup()
        dto = handler.handle(CUSTOMER, [{"productId": "p1", "quantity": 1}])
        assert dto.items[0].product_id == "p1"

    def test_size_is_optional(self):
        handler, _, _ = _setup()
        customer = {k: v for k, v in CUSTOMER.items() if k != "size"}
        dto = handler.handle(customer, [{"product_id": "p1", "quantity": 1}])
        assert dto.size == ""

    def test_persists_order(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(CUSTOMER, [{"product_id": "p1", "quantity": 1}])
        saved = order_repo.get_by_id(dto.id)
        assert saved is not None
        assert saved.status == OrderStatus.PENDING
        assert saved.customer.address == "1 Main St"


class TestCreateOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, order_repo, product_repo = _setup()

        # Create order at current price
        dto = handler.handle(CUSTOMER, [{"product_id": "p1", "quantity": 2}])
        assert dto.total == "$30.00"

        # Change the product price
        product = product_repo.get_by_id("p1")
        product.apply_changes({"price": Money.of("99.99")})
        product_repo.save(product)

        # Existing order still has original price
        saved = order_repo.get_by_id(dto.id)
        assert saved.total == Money.of("30.00")
        assert saved.items[0].unit_price == Money.of("15.00")


class TestCreateOrderValidation:

    def test_unknown_product_rejected_and_nothing_persisted(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="'ghost'"):
            handler.handle(CUSTOMER, [
                {"product_id": "p1", "quantity": 1},
                {"product_id": "ghost", "quantity": 1},
            ])
        assert order_repo.list_all() == []

    def test_zero_quantity_rejected(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CUSTOMER, [{"product_id": "p1", "quantity": 0}])
        assert exc_info.value.field == "items.0.quantity"
        assert order_repo.list_all() == []

    @pytest.mark.parametrize("quantity", [True, "2", 1.5])
    def test_non_integer_quantity_rejected(self, quantity):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CUSTOMER, [{"product_id": "p1", "quantity": quantity}])
        assert exc_info.value.field == "items.0.quantity"
        assert order_repo.list_all() == []

    def test_bad_quantity_checked_before_product_lookup(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError):
            handler.handle(CUSTOMER, [
                {"product_id": "ghost", "quantity": 1},
                {"product_id": "p1", "quantity": -2},
            ])

    def test_empty_order_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(CUSTOMER, [])
        assert exc_info.value.field == "items"

    def test_missing_phone_rejected(self):
        handler, _, _ = _setup()
        customer = {k: v for k, v in CUSTOMER.items() if k != "phone"}
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(customer, [{"product_id": "p1", "quantity": 1}])
        assert exc_info.value.field == "customer.phone"
