"""Input schemas, validated once at the edge of each use case.

Requests arrive as loose mappings (CLI options, JSON bodies). They are
parsed here into typed models; every violation is reported as a
``FieldError`` naming the offending field.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from storefront.domain.exceptions import FieldError, ValidationError
from storefront.domain.model.value_objects import Category, Customer, Money

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class _Schema(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")


# --- Catalog ------------------------------------------------------------------


class ProductDraft(_Schema):
    """Fields required to list a new product (images travel separately)."""

    name: str = Field(min_length=1)
    category: Category
    price: Decimal = Field(ge=0, allow_inf_nan=False)
    description: str = Field(min_length=1)
    rating: Decimal = Field(default=Decimal("0"), ge=0, le=5, allow_inf_nan=False)
    review_count: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("review_count", "reviewCount", "reviews"),
    )


class ProductPatch(_Schema):
    """Partial update: only the fields present in the payload are applied."""

    name: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    price: Decimal | None = Field(default=None, ge=0, allow_inf_nan=False)
    description: str | None = Field(default=None, min_length=1)
    rating: Decimal | None = Field(default=None, ge=0, le=5, allow_inf_nan=False)
    review_count: int | None = Field(
        default=None,
        ge=0,
        validation_alias=AliasChoices("review_count", "reviewCount", "reviews"),
    )

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    def to_changes(self) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            changes[name] = Money(value) if name == "price" else value
        return changes


# --- Orders -------------------------------------------------------------------


class CustomerInfo(_Schema):
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    size: str = ""

    def to_domain(self) -> Customer:
        return Customer(
            name=self.name, phone=self.phone, address=self.address, size=self.size
        )


class OrderLineRequest(_Schema):
    product_id: str = Field(
        min_length=1, validation_alias=AliasChoices("product_id", "productId")
    )
    quantity: int = Field(ge=1, strict=True)


class OrderRequest(_Schema):
    customer: CustomerInfo
    items: list[OrderLineRequest] = Field(min_length=1)


# --- Helpers ------------------------------------------------------------------


def parse_payload(schema: type[SchemaT], payload: Mapping[str, Any]) -> SchemaT:
    """Validate *payload* against *schema* or raise a domain ValidationError."""
    try:
        return schema.model_validate(dict(payload))
    except PydanticValidationError as exc:
        errors = [
            FieldError(
                field=".".join(str(part) for part in err["loc"]) or "payload",
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        raise ValidationError.from_errors(errors) from None
