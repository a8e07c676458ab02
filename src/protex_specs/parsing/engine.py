"""Specification parser for industrial products."""

from __future__ import annotations

import logging
import os
import re
from collections import ChainMap
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from protex_specs.parsing.catalog import (
    is_known_standard,
    is_mandatory_standard,
    standard_category,
    standard_description,
)
from protex_specs.parsing.levels import (
    EN388_RANGES,
    first_present,
    footwear_category,
    parse_en388_levels,
    parse_numeric_level,
    parse_s3_levels,
    parse_visibility_levels,
    stringify,
    visibility_class,
)
from protex_specs.schema import (
    ParsedSpecifications,
    ProtectionLevels,
    SafetyStandard,
    SizeInformation,
    SizeType,
    TechnicalDetails,
    ValidationError,
    ValidationResult,
    ValidationWarning,
)

logger = logging.getLogger(__name__)

STANDARD_FIELDS = ("normativas", "standards", "safetyStandards", "certifications")
SIZE_FIELDS = ("tallas", "sizes", "availableSizes")
LEVEL_FIELDS = ("niveles_proteccion", "protectionLevels")

_NUMERIC_SIZE = re.compile(r"[0-9]+")
_ALPHA_SIZE = re.compile(r"[A-Z]+")

# Measured quantities with no upper bound: (canonical name, aliases)
_MEASURED_LEVELS = (
    ("energia_impacto", ("energia_impacto", "impactEnergy")),
    ("resistencia_perforacion", ("resistencia_perforacion", "punctureResistance")),
    ("ancho_banda_reflectante", ("ancho_banda_reflectante", "reflectiveTapeWidth")),
)
_KNOWN_LEVEL_KEYS = frozenset(
    {
        *EN388_RANGES,
        "categoria_calzado",
        "categoria",
        "category",
        "clase_visibilidad",
        "visibilityClass",
        *(alias for _, aliases in _MEASURED_LEVELS for alias in aliases),
    }
)


def _parse_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ParserConfig:
    european_size_min: int = 35
    european_size_max: int = 48
    default_unisex: bool = True

    @classmethod
    def from_env(cls) -> "ParserConfig":
        return cls(
            european_size_min=_parse_int(os.getenv("PROTEX_EUROPEAN_SIZE_MIN"), 35),
            european_size_max=_parse_int(os.getenv("PROTEX_EUROPEAN_SIZE_MAX"), 48),
            default_unisex=_parse_bool(os.getenv("PROTEX_DEFAULT_UNISEX"), True),
        )


class SpecificationParser:
    """Normalizes loosely structured specification records.

    Problems found while normalizing are collected on the result instead of
    raised, so one bad field never hides the others.
    """

    def __init__(self, config: ParserConfig | None = None):
        self.config = config or ParserConfig()

    def parse_specifications(self, raw: Mapping[str, Any]) -> ParsedSpecifications:
        errors: list[ValidationError] = []
        parsed: dict[str, Any] = {}

        if not isinstance(raw, Mapping):
            errors.append(
                _parse_error(raw, TypeError(f"expected a mapping, got {type(raw).__name__}"))
            )
            return ParsedSpecifications(is_valid=False, errors=errors)

        steps = (
            ("safety_standards", self._parse_safety_standards),
            ("size_information", self._parse_size_information),
            ("technical_details", self._parse_technical_details),
            ("protection_levels", self._parse_protection_levels),
        )
        for name, step in steps:
            try:
                parsed[name] = step(raw, errors)
            except Exception as exc:
                logger.exception("failed to parse %s", name)
                errors.append(_parse_error(raw, exc))

        try:
            self._check_consistency(parsed, errors)
        except Exception as exc:
            logger.exception("failed to check specification consistency")
            errors.append(_parse_error(raw, exc))

        is_valid = not any(error.is_blocking for error in errors)
        logger.debug(
            "parsed specifications: %d standards, %d errors, valid=%s",
            len(parsed.get("safety_standards", [])),
            len(errors),
            is_valid,
        )
        return ParsedSpecifications(**parsed, is_valid=is_valid, errors=errors)

    def validate_safety_standards(self, standards: list[str]) -> ValidationResult:
        warnings = [
            ValidationWarning(
                field="normativas",
                message=f"Unknown safety standard: {standard}",
                suggestion="Verify the standard code is correct",
            )
            for standard in standards
            if not is_known_standard(standard)
        ]
        return ValidationResult(is_valid=True, warnings=warnings)

    def validate_size_information(self, sizes: list[Any]) -> ValidationResult:
        warnings: list[ValidationWarning] = []
        if not isinstance(sizes, list):
            return ValidationResult(is_valid=True)

        if not [size for size in sizes if stringify(size).strip()]:
            warnings.append(
                ValidationWarning(
                    field="tallas",
                    message="No sizes specified",
                    suggestion="Add available sizes for the product",
                )
            )

        has_numeric = any(_NUMERIC_SIZE.fullmatch(stringify(size)) for size in sizes)
        has_alpha = any(_ALPHA_SIZE.fullmatch(stringify(size)) for size in sizes)
        if has_numeric and has_alpha:
            warnings.append(
                ValidationWarning(
                    field="tallas",
                    message="Mixed size formats detected",
                    suggestion="Use consistent size format (all numeric or all alphabetic)",
                )
            )

        return ValidationResult(is_valid=True, warnings=warnings)

    def _parse_safety_standards(
        self, raw: Mapping[str, Any], errors: list[ValidationError]
    ) -> list[SafetyStandard]:
        codes: list[Any] = []
        for field in STANDARD_FIELDS:
            value = raw.get(field)
            if isinstance(value, list):
                codes = value
                break
            if isinstance(value, str) and value:
                codes = [value]
                break

        level_source = ChainMap(_level_source(raw) or {}, raw)
        standards: list[SafetyStandard] = []
        for code in codes:
            if not isinstance(code, str):
                errors.append(
                    ValidationError(
                        field="normativas",
                        value=code,
                        expected_format="string",
                        severity="error",
                        message="Safety standard must be a string",
                        code="INVALID_STANDARD_TYPE",
                    )
                )
                continue

            levels = None
            if code == "EN 388":
                levels = parse_en388_levels(level_source, errors)
            elif "EN ISO 20345" in code:
                levels = parse_s3_levels(level_source)
            elif "EN ISO 20471" in code:
                levels = parse_visibility_levels(level_source)

            standards.append(
                SafetyStandard(
                    code=code,
                    description=standard_description(code),
                    mandatory=is_mandatory_standard(code),
                    category=standard_category(code),
                    levels=levels,
                )
            )
        return standards

    def _parse_size_information(
        self, raw: Mapping[str, Any], errors: list[ValidationError]
    ) -> SizeInformation:
        sizes: list[str] = []
        for field in SIZE_FIELDS:
            value = raw.get(field)
            if isinstance(value, list):
                sizes = [text for text in (stringify(size) for size in value) if text.strip()]
                break

        return SizeInformation(
            type=self._classify_sizes(sizes),
            available_sizes=sizes,
            unisex=self.config.default_unisex,
        )

    def _classify_sizes(self, sizes: list[str]) -> SizeType:
        unique = set(sizes)
        if not unique:
            return "custom"
        if all(_NUMERIC_SIZE.fullmatch(size) for size in unique):
            in_range = all(
                self.config.european_size_min <= int(size) <= self.config.european_size_max
                for size in unique
            )
            return "european" if in_range and len(unique) > 1 else "numeric"
        if all(_ALPHA_SIZE.fullmatch(size) for size in unique):
            return "alphanumeric"
        return "custom"

    def _parse_technical_details(
        self, raw: Mapping[str, Any], errors: list[ValidationError]
    ) -> TechnicalDetails:
        details: dict[str, Any] = {}

        material = first_present(raw, ("materiales", "material", "materials"))
        if isinstance(material, (str, list)):
            details["material"] = material

        weight = first_present(raw, ("peso", "weight"))
        if weight is not None:
            details["peso"] = stringify(weight)

        dimensions = first_present(raw, ("dimensiones", "dimensions"))
        if dimensions is not None:
            details["dimensiones"] = dimensions

        features = first_present(raw, ("caracteristicas", "features"))
        if isinstance(features, list):
            details["caracteristicas"] = features

        usage = first_present(raw, ("uso", "usage", "uso_recomendado"))
        if isinstance(usage, list):
            details["uso_recomendado"] = usage

        return TechnicalDetails(**details)

    def _parse_protection_levels(
        self, raw: Mapping[str, Any], errors: list[ValidationError]
    ) -> ProtectionLevels:
        nested = _level_source(raw)
        source = nested if nested is not None else raw
        levels: dict[str, Any] = {}

        for field, (minimum, maximum) in EN388_RANGES.items():
            value = parse_numeric_level(source.get(field), minimum, maximum, field, errors)
            if value is not None:
                levels[field] = value

        category = footwear_category(source)
        if category is not None:
            levels["categoria_calzado"] = category

        for field, aliases in _MEASURED_LEVELS:
            value = parse_numeric_level(first_present(source, aliases), 0, None, field, errors)
            if value is not None:
                levels[field] = value

        vis_class = visibility_class(source)
        if vis_class is not None:
            levels["clase_visibilidad"] = vis_class

        # A flat record's other keys are product fields, not ratings.
        if source is not raw:
            levels["extra"] = {
                key: value
                for key, value in source.items()
                if key not in _KNOWN_LEVEL_KEYS
                and isinstance(value, (str, int, float))
                and not isinstance(value, bool)
            }

        return ProtectionLevels(**levels)

    def _check_consistency(self, parsed: dict[str, Any], errors: list[ValidationError]) -> None:
        standards: list[SafetyStandard] = parsed.get("safety_standards", [])
        levels: ProtectionLevels = parsed.get("protection_levels", ProtectionLevels())

        if any(standard.code == "EN 388" for standard in standards) and levels.abrasion is None:
            errors.append(
                ValidationError(
                    field="niveles_proteccion",
                    value=levels.to_dict(),
                    expected_format="EN 388 protection levels (abrasion, cut, tear, puncture)",
                    severity="warning",
                    message="EN 388 standard declared but protection levels missing",
                    code="MISSING_PROTECTION_LEVELS",
                )
            )

        has_footwear = any("EN ISO 20345" in standard.code for standard in standards)
        if has_footwear and levels.categoria_calzado is None:
            errors.append(
                ValidationError(
                    field="niveles_proteccion",
                    value=levels.to_dict(),
                    expected_format="Safety footwear category (S1, S2, S3, etc.)",
                    severity="warning",
                    message="Footwear safety standard declared but category missing",
                    code="MISSING_FOOTWEAR_CATEGORY",
                )
            )


def parse_specifications(
    raw: Mapping[str, Any],
    *,
    european_size_min: int = 35,
    european_size_max: int = 48,
    default_unisex: bool = True,
) -> ParsedSpecifications:
    """Parse a raw specification record with a default-configured parser."""

    parser = SpecificationParser(
        config=ParserConfig(
            european_size_min=european_size_min,
            european_size_max=european_size_max,
            default_unisex=default_unisex,
        )
    )
    return parser.parse_specifications(raw)


def _level_source(raw: Mapping[str, Any]) -> Mapping[str, Any] | None:
    for field in LEVEL_FIELDS:
        value = raw.get(field)
        if isinstance(value, Mapping):
            return value
    return None


def _parse_error(raw: Any, exc: Exception) -> ValidationError:
    return ValidationError(
        field="specifications",
        value=raw if isinstance(raw, (Mapping, list, str, int, float, bool)) or raw is None else repr(raw),
        expected_format="Valid industrial specifications object",
        severity="critical",
        message=f"Failed to parse specifications: {exc}",
        code="PARSE_ERROR",
    )
