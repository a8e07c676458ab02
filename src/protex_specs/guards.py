"""Runtime checks over raw product and specification records."""

from collections.abc import Mapping
from typing import Any

INDUSTRIAL_MARKERS = ("safetyCategory", "complianceRequired")


def is_industrial_product(product: Mapping[str, Any]) -> bool:
    """Industrial products carry both compliance markers, whatever their values."""
    return isinstance(product, Mapping) and all(key in product for key in INDUSTRIAL_MARKERS)


def declared_standards(specs: Mapping[str, Any] | None) -> list[str]:
    if not isinstance(specs, Mapping):
        return []
    normativas = specs.get("normativas")
    if isinstance(normativas, str):
        return [normativas]
    if not isinstance(normativas, list):
        return []
    return [norm for norm in normativas if isinstance(norm, str)]


def protection_levels_of(specs: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(specs, Mapping):
        return {}
    levels = specs.get("niveles_proteccion")
    return levels if isinstance(levels, Mapping) else {}


def declares_standard(specs: Mapping[str, Any] | None, code: str) -> bool:
    return any(code in norm for norm in declared_standards(specs))


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def has_en388_specification(specs: Mapping[str, Any] | None) -> bool:
    return declares_standard(specs, "EN 388") and is_number(protection_levels_of(specs).get("abrasion"))


def has_s3_specification(specs: Mapping[str, Any] | None) -> bool:
    return (
        declares_standard(specs, "EN ISO 20345")
        and protection_levels_of(specs).get("categoria_calzado") == "S3"
    )


def has_visibility_specification(specs: Mapping[str, Any] | None) -> bool:
    return declares_standard(specs, "EN ISO 20471") and isinstance(
        protection_levels_of(specs).get("clase_visibilidad"), str
    )
