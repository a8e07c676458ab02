"""Safety cross-validation for protex-specs."""

from protex_specs.validation.validator import (
    SafetyValidator,
    ValidatorConfig,
    validate_industrial_product,
    validate_product_batch,
)

__all__ = [
    "SafetyValidator",
    "ValidatorConfig",
    "validate_industrial_product",
    "validate_product_batch",
]
