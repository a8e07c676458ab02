"""protex-specs: Parse and cross-validate EPI product specifications for catalog migration."""

from protex_specs.core import load_products, review_catalog, review_product
from protex_specs.parsing import ParserConfig, SpecificationParser, parse_specifications
from protex_specs.schema import (
    BatchValidationResult,
    CrossValidationResult,
    ParsedSpecifications,
    ValidationError,
    ValidationWarning,
)
from protex_specs.validation import SafetyValidator, validate_industrial_product, validate_product_batch

__version__ = "0.1.0"

__all__ = [
    "parse_specifications",
    "validate_industrial_product",
    "validate_product_batch",
    "review_product",
    "review_catalog",
    "load_products",
    "SpecificationParser",
    "SafetyValidator",
    "ParserConfig",
    "ParsedSpecifications",
    "CrossValidationResult",
    "BatchValidationResult",
    "ValidationError",
    "ValidationWarning",
    "__version__",
]
