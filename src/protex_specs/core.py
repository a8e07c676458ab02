"""Catalog review: route products through parsing and cross-validation."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from protex_specs.exceptions import InputError
from protex_specs.guards import is_industrial_product, is_number
from protex_specs.parsing import ParsedSpecifications, SpecificationParser
from protex_specs.schema import CrossValidationResult
from protex_specs.validation import SafetyValidator

logger = logging.getLogger(__name__)

ProductPath = str | Path


class ProductReview(BaseModel):
    """Everything the migration needs to decide on one product."""

    sku: str | None = None
    industrial: bool = False
    field_errors: list[str] = Field(default_factory=list)
    parsed: ParsedSpecifications | None = None
    validation: CrossValidationResult | None = None

    @property
    def blocked(self) -> bool:
        if self.field_errors:
            return True
        if self.parsed is not None and not self.parsed.is_valid:
            return True
        return self.validation is not None and not self.validation.is_valid


class CatalogReview(BaseModel):
    reviews: list[ProductReview] = Field(default_factory=list)

    @property
    def total_products(self) -> int:
        return len(self.reviews)

    @property
    def industrial_products(self) -> int:
        return sum(1 for review in self.reviews if review.industrial)

    @property
    def blocked_products(self) -> int:
        return sum(1 for review in self.reviews if review.blocked)


def check_product_fields(product: Mapping[str, Any]) -> list[str]:
    """Basic catalog fields every product needs before it can be stored."""
    errors: list[str] = []
    sku = product.get("sku")
    if not sku or not isinstance(sku, str):
        errors.append("SKU is required and must be a string")
    name = product.get("name")
    if not name or not isinstance(name, str):
        errors.append("Name is required and must be a string")
    price = product.get("price")
    if not is_number(price) or price < 0:
        errors.append("Price is required and must be a positive number")
    stock = product.get("stock")
    if not is_number(stock) or stock < 0:
        errors.append("Stock is required and must be a non-negative number")
    return errors


def review_product(
    product: Mapping[str, Any],
    *,
    parser: SpecificationParser | None = None,
    validator: SafetyValidator | None = None,
) -> ProductReview:
    """Review one product.

    Args:
        product: Raw product record as found in the source catalog.
        parser: Parser to use. Defaults to a default-configured parser.
        validator: Validator to use. Defaults to a default-configured validator.

    Returns:
        ProductReview. Non-industrial products only get the basic field check.
    """
    if not isinstance(product, Mapping):
        return ProductReview(field_errors=["Product must be a JSON object"])

    sku = product.get("sku")
    review = ProductReview(
        sku=str(sku) if sku is not None else None,
        field_errors=check_product_fields(product),
    )
    if not is_industrial_product(product):
        return review

    parser = parser or SpecificationParser()
    validator = validator or SafetyValidator()
    review.industrial = True
    review.parsed = parser.parse_specifications(product.get("specifications"))
    review.validation = validator.validate_industrial_product(product)
    if review.blocked:
        logger.info("product %s blocked from migration", review.sku)
    return review


def review_catalog(
    products: Iterable[Mapping[str, Any]],
    *,
    parser: SpecificationParser | None = None,
    validator: SafetyValidator | None = None,
) -> CatalogReview:
    parser = parser or SpecificationParser()
    validator = validator or SafetyValidator()
    reviews = [review_product(product, parser=parser, validator=validator) for product in products]
    catalog = CatalogReview(reviews=reviews)
    logger.info(
        "reviewed %d products: %d industrial, %d blocked",
        catalog.total_products,
        catalog.industrial_products,
        catalog.blocked_products,
    )
    return catalog


def load_products(path: ProductPath) -> list[dict[str, Any]]:
    """Load a products file holding a JSON array.

    Raises:
        InputError: If the file is missing, is not valid JSON, or is not an array.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise InputError(f"Products file not found: {file_path}")

    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Failed to read products file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in products file: {exc}") from exc

    if not isinstance(data, list):
        raise InputError("Products data must be an array")
    logger.debug("loaded %d products from %s", len(data), file_path)
    return data
