"""Cross-validation of industrial products against their declared category."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from protex_specs.guards import (
    declared_standards,
    declares_standard,
    has_en388_specification,
    has_s3_specification,
    has_visibility_specification,
    is_number,
    protection_levels_of,
)
from protex_specs.parsing.levels import EN388_RANGES, VISIBILITY_CLASSES, coerce_number
from protex_specs.schema import (
    BatchValidationResult,
    CrossValidationResult,
    ValidationError,
    ValidationWarning,
)
from protex_specs.validation.messages import render_error, render_warning

logger = logging.getLogger(__name__)

HAND_KEYWORDS = ("mano", "guante")
FOOTWEAR_KEYWORDS = ("calzado", "bota", "zapato")
VISIBILITY_KEYWORDS = ("visibilidad", "reflectante", "chaleco")
HEAD_KEYWORDS = ("cabeza", "casco")

FOOTWEAR_STANDARD_TOKENS = ("EN ISO 20345", "S1", "S2", "S3", "S4", "S5")
HEAD_STANDARD_TOKENS = ("EN 397", "ANSI Z89")
S3_EXPECTED_FEATURES = ("punta de acero", "plantilla antiperforación", "suela antideslizante")


@dataclass(frozen=True)
class ValidatorConfig:
    unknown_sku_label: str = "Unknown"


class _Findings:
    """Accumulator shared by the validation passes of one product."""

    def __init__(self) -> None:
        self.errors: list[ValidationError] = []
        self.warnings: list[ValidationWarning] = []

    def error(
        self,
        field: str,
        value: Any,
        expected_format: str,
        message: str,
        code: str,
        *,
        severity: str = "error",
    ) -> None:
        self.errors.append(
            ValidationError(
                field=field,
                value=value,
                expected_format=expected_format,
                severity=severity,
                message=message,
                code=code,
            )
        )

    def warn(self, field: str, message: str, suggestion: str | None = None) -> None:
        self.warnings.append(ValidationWarning(field=field, message=message, suggestion=suggestion))


class SafetyValidator:
    """Category-aware business rules for EPI products.

    Every pass runs independently over the raw product, so a product usually
    reports all of its problems at once.
    """

    def __init__(self, config: ValidatorConfig | None = None):
        self.config = config or ValidatorConfig()

    def validate_industrial_product(self, product: Mapping[str, Any] | BaseModel) -> CrossValidationResult:
        record = _as_record(product)
        findings = _Findings()
        specs = record.get("specifications")

        self._validate_basic_structure(specs, findings)
        if isinstance(specs, Mapping):
            self._validate_category_consistency(record.get("category"), specs, findings)
            self._validate_en388_requirements(specs, findings)
            self._validate_s3_requirements(record.get("description"), specs, findings)
            self._validate_visibility_requirements(specs, findings)
            self._validate_protection_level_completeness(specs, findings)

        sku_value = record.get("sku")
        category_value = record.get("category")
        sku = str(sku_value) if sku_value not in (None, "") else self.config.unknown_sku_label
        is_valid = not any(error.is_blocking for error in findings.errors)

        logger.debug(
            "validated %s: %d errors, %d warnings", sku, len(findings.errors), len(findings.warnings)
        )
        return CrossValidationResult(
            is_valid=is_valid,
            errors=findings.errors,
            warnings=findings.warnings,
            product_sku=str(sku_value) if sku_value is not None else None,
            category=category_value if isinstance(category_value, str) else None,
            friendly_errors=[render_error(sku, error) for error in findings.errors],
            friendly_warnings=[render_warning(sku, warning) for warning in findings.warnings],
        )

    def validate_product_batch(
        self, products: Iterable[Mapping[str, Any] | BaseModel]
    ) -> BatchValidationResult:
        results = [self.validate_industrial_product(product) for product in products]

        batch = BatchValidationResult(
            total_products=len(results),
            valid_products=sum(1 for result in results if result.is_valid),
            products_with_errors=sum(1 for result in results if result.errors),
            products_with_warnings=sum(1 for result in results if result.warnings),
            all_errors=[message for result in results for message in result.friendly_errors],
            all_warnings=[message for result in results for message in result.friendly_warnings],
            detailed_results=results,
        )
        logger.info(
            "validated batch: %d products, %d valid, %d with errors, %d with warnings",
            batch.total_products,
            batch.valid_products,
            batch.products_with_errors,
            batch.products_with_warnings,
        )
        return batch

    def _validate_basic_structure(self, specs: Any, findings: _Findings) -> None:
        if not isinstance(specs, Mapping):
            findings.error(
                "specifications",
                None,
                "IndustrialSpecifications object",
                "Industrial product must have specifications",
                "MISSING_SPECIFICATIONS",
                severity="critical",
            )
            return

        if not specs.get("normativas"):
            findings.error(
                "normativas",
                specs.get("normativas"),
                "Array of safety standards",
                "Industrial product must have at least one safety standard",
                "MISSING_SAFETY_STANDARDS",
            )

        if not specs.get("tallas"):
            findings.warn("tallas", "No sizes specified for product", "Add available sizes for the product")

    def _validate_category_consistency(
        self, category: Any, specs: Mapping[str, Any], findings: _Findings
    ) -> None:
        if not specs.get("normativas"):
            return
        category_text = category.lower() if isinstance(category, str) else ""

        if _mentions(category_text, HAND_KEYWORDS):
            self._validate_hand_protection(specs, findings)
        if _mentions(category_text, FOOTWEAR_KEYWORDS):
            self._validate_foot_protection(specs, findings)
        if _mentions(category_text, VISIBILITY_KEYWORDS):
            self._validate_visibility_consistency(specs, findings)
        if _mentions(category_text, HEAD_KEYWORDS):
            self._validate_head_protection(specs, findings)

    def _validate_hand_protection(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        if not declares_standard(specs, "EN 388"):
            return

        if not declares_standard(specs, "EN 420"):
            findings.warn(
                "normativas",
                "EN 388 gloves typically also require EN 420 (general requirements)",
                "Consider adding EN 420 to normativas array",
            )

        levels = protection_levels_of(specs)
        if not any(levels.get(name) for name in EN388_RANGES):
            findings.error(
                "niveles_proteccion",
                dict(levels),
                "EN 388 protection levels (abrasion, corte, desgarro, puncion)",
                "EN 388 standard requires mechanical protection levels",
                "MISSING_EN388_LEVELS",
            )

    def _validate_foot_protection(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        standards = declared_standards(specs)
        if not any(token in norm for norm in standards for token in FOOTWEAR_STANDARD_TOKENS):
            return

        levels = protection_levels_of(specs)
        if not levels.get("categoria_calzado"):
            findings.error(
                "niveles_proteccion.categoria_calzado",
                None,
                "S1, S2, S3, S4, or S5",
                "Safety footwear must specify category (S1-S5)",
                "MISSING_FOOTWEAR_CATEGORY",
            )

        if levels.get("categoria_calzado") == "S3" or "S3" in standards:
            if not levels.get("energia_impacto"):
                findings.warn(
                    "niveles_proteccion.energia_impacto",
                    "S3 footwear should specify impact energy (typically 200J)",
                    "Add energia_impacto value (e.g., 200)",
                )
            if not levels.get("resistencia_perforacion"):
                findings.warn(
                    "niveles_proteccion.resistencia_perforacion",
                    "S3 footwear should specify puncture resistance (typically 1100N)",
                    "Add resistencia_perforacion value (e.g., 1100)",
                )

    def _validate_visibility_consistency(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        if not declares_standard(specs, "EN ISO 20471"):
            return

        levels = protection_levels_of(specs)
        if not levels.get("clase_visibilidad"):
            findings.error(
                "niveles_proteccion.clase_visibilidad",
                None,
                "1, 2, or 3",
                "High visibility garments must specify visibility class",
                "MISSING_VISIBILITY_CLASS",
            )
        if not levels.get("ancho_banda_reflectante"):
            findings.warn(
                "niveles_proteccion.ancho_banda_reflectante",
                "High visibility garments should specify reflective tape width",
                "Add ancho_banda_reflectante value in mm (e.g., 50)",
            )

    def _validate_head_protection(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        if not any(declares_standard(specs, token) for token in HEAD_STANDARD_TOKENS):
            return

        details = specs.get("detalles_tecnicos")
        detail_material = details.get("material") if isinstance(details, Mapping) else None
        if not detail_material and not specs.get("materiales"):
            findings.warn(
                "materiales",
                "Head protection should specify shell material",
                'Add material information (e.g., "Polietileno de alta densidad")',
            )

    def _validate_en388_requirements(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        if not has_en388_specification(specs):
            return

        levels = protection_levels_of(specs)
        missing = [name for name in EN388_RANGES if levels.get(name) is None]
        if missing:
            findings.error(
                "niveles_proteccion",
                dict(levels),
                "Complete EN 388 levels (abrasion: 1-4, corte: 1-5, desgarro: 1-4, puncion: 1-4)",
                f"EN 388 standard requires all protection levels. Missing: {', '.join(missing)}",
                "INCOMPLETE_EN388_LEVELS",
            )

        abrasion = levels.get("abrasion")
        if not _within(abrasion, *EN388_RANGES["abrasion"]):
            findings.error(
                "niveles_proteccion.abrasion",
                abrasion,
                "1-4",
                "EN 388 abrasion level must be between 1 and 4",
                "INVALID_ABRASION_LEVEL",
            )

        corte = levels.get("corte")
        if corte is not None and not _within(corte, *EN388_RANGES["corte"]):
            findings.error(
                "niveles_proteccion.corte",
                corte,
                "1-5",
                "EN 388 cut level must be between 1 and 5",
                "INVALID_CUT_LEVEL",
            )

    def _validate_s3_requirements(self, description: Any, specs: Mapping[str, Any], findings: _Findings) -> None:
        if not has_s3_specification(specs):
            return

        category = protection_levels_of(specs).get("categoria_calzado")
        if category != "S3":
            findings.error(
                "niveles_proteccion.categoria_calzado",
                category,
                "S3",
                'Product with S3 standard must have categoria_calzado set to "S3"',
                "INCONSISTENT_S3_CATEGORY",
            )

        description_text = description.lower() if isinstance(description, str) else ""
        materials_text = _materials_text(specs)
        # Keywords are matched with their spaces removed.
        missing = [
            feature
            for feature in S3_EXPECTED_FEATURES
            if feature.replace(" ", "") not in description_text
            and feature.replace(" ", "") not in materials_text
        ]
        if missing:
            findings.warn(
                "description",
                f"S3 footwear typically includes: {', '.join(missing)}",
                "Verify product description includes S3 safety features",
            )

    def _validate_visibility_requirements(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        if not has_visibility_specification(specs):
            return

        vis_class = protection_levels_of(specs).get("clase_visibilidad")
        if vis_class not in VISIBILITY_CLASSES:
            findings.error(
                "niveles_proteccion.clase_visibilidad",
                vis_class,
                "1, 2, or 3",
                "EN ISO 20471 requires valid visibility class (1, 2, or 3)",
                "INVALID_VISIBILITY_CLASS",
            )

        materials_text = _materials_text(specs)
        if "fluorescente" not in materials_text and "reflectante" not in materials_text:
            findings.warn(
                "materiales",
                "High visibility garments typically use fluorescent or reflective materials",
                "Verify materials include fluorescent or reflective properties",
            )

    def _validate_protection_level_completeness(self, specs: Mapping[str, Any], findings: _Findings) -> None:
        levels = protection_levels_of(specs)
        has_levels = any(value is not None for value in levels.values())
        if specs.get("normativas") and not has_levels:
            findings.warn(
                "niveles_proteccion",
                "Product has safety standards but no protection levels specified",
                "Add appropriate protection levels for the specified standards",
            )


def validate_industrial_product(product: Mapping[str, Any] | BaseModel) -> CrossValidationResult:
    """Cross-validate one industrial product with a default validator."""

    return SafetyValidator().validate_industrial_product(product)


def validate_product_batch(products: Iterable[Mapping[str, Any] | BaseModel]) -> BatchValidationResult:
    """Cross-validate many products and aggregate the findings."""

    return SafetyValidator().validate_product_batch(products)


def _as_record(product: Mapping[str, Any] | BaseModel) -> Mapping[str, Any]:
    if isinstance(product, BaseModel):
        return product.model_dump()
    if isinstance(product, Mapping):
        return product
    return {}


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _within(value: Any, minimum: int, maximum: int) -> bool:
    if not is_number(value):
        try:
            value = coerce_number(value)
        except ValueError:
            return False
    return minimum <= value <= maximum


def _materials_text(specs: Mapping[str, Any]) -> str:
    materials = specs.get("materiales")
    if isinstance(materials, list):
        return " ".join(str(item) for item in materials).lower()
    if isinstance(materials, str):
        return materials.lower()
    return ""
