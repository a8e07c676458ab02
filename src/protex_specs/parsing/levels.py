"""Protection-level coercion and per-standard level blocks."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from protex_specs.schema import EN388Levels, S3Levels, ValidationError, VisibilityLevels

FOOTWEAR_CATEGORIES = ("S1", "S2", "S3", "S4", "S5")
VISIBILITY_CLASSES = ("1", "2", "3")
CUT_TDM_GRADES = ("A", "B", "C", "D", "E", "F")

# EN 388 ranges: (min, max)
EN388_RANGES: dict[str, tuple[int, int]] = {
    "abrasion": (1, 4),
    "corte": (1, 5),
    "desgarro": (1, 4),
    "puncion": (1, 4),
}

Number = int | float


def first_present(source: Mapping[str, Any], aliases: Iterable[str]) -> Any:
    """Return the value of the first alias holding something other than None or ''."""
    for alias in aliases:
        value = source.get(alias)
        if value is None or value == "":
            continue
        return value
    return None


def stringify(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_number(value: Any) -> Number:
    """Coerce a raw JSON value to a number, raising ValueError when it is not one."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value):
            raise ValueError("NaN is not a number")
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty string")
        try:
            return int(text)
        except ValueError:
            number = float(text)
        if math.isnan(number):
            raise ValueError("NaN is not a number")
        return number
    raise ValueError(f"unsupported type {type(value).__name__}")


def parse_numeric_level(
    value: Any,
    minimum: Number,
    maximum: Number | None,
    field: str,
    errors: list[ValidationError],
) -> Number | None:
    """Validate a numeric rating. Invalid values are reported and dropped."""
    if value is None:
        return None

    expected = (
        f"number between {minimum} and {maximum}"
        if maximum is not None
        else f"number greater than or equal to {minimum}"
    )
    try:
        number = coerce_number(value)
    except ValueError:
        errors.append(
            ValidationError(
                field=field,
                value=value,
                expected_format=expected,
                severity="error",
                message=f"{field} must be a valid number",
                code="INVALID_NUMERIC_LEVEL",
            )
        )
        return None

    if number < minimum or (maximum is not None and number > maximum):
        message = (
            f"{field} must be between {minimum} and {maximum}"
            if maximum is not None
            else f"{field} must be at least {minimum}"
        )
        errors.append(
            ValidationError(
                field=field,
                value=number,
                expected_format=expected,
                severity="error",
                message=message,
                code="LEVEL_OUT_OF_RANGE",
            )
        )
        return None

    return number


def footwear_category(source: Mapping[str, Any]) -> str | None:
    # categoria_calzado wins over the generic keys; the legacy importer read it last.
    value = first_present(source, ("categoria_calzado", "categoria", "category"))
    return value if value in FOOTWEAR_CATEGORIES else None


def visibility_class(source: Mapping[str, Any]) -> str | None:
    value = first_present(source, ("clase_visibilidad", "visibilityClass"))
    if value is None:
        return None
    text = stringify(value)
    return text if text in VISIBILITY_CLASSES else None


def _quiet_level(value: Any, minimum: Number, maximum: Number) -> Number | None:
    # Range problems are reported once, by the protection-level pass.
    return parse_numeric_level(value, minimum, maximum, "", [])


# EN 388 block fields: (name, English alias, Spanish key checked by the protection-level pass)
_EN388_BLOCK_FIELDS = (
    ("cut", "cut", "corte"),
    ("tear", "tear", "desgarro"),
    ("puncture", "puncture", "puncion"),
)


def parse_en388_levels(
    source: Mapping[str, Any], errors: list[ValidationError] | None = None
) -> EN388Levels | None:
    """Build the EN 388 block.

    Values given under an English alias are never seen by the protection-level
    pass, so their problems are reported into ``errors`` here.
    """
    fields: dict[str, Any] = {}

    abrasion = _quiet_level(source.get("abrasion"), *EN388_RANGES["abrasion"])
    if abrasion is not None:
        fields["abrasion"] = abrasion

    for name, alias, key in _EN388_BLOCK_FIELDS:
        minimum, maximum = EN388_RANGES[key]
        aliased = first_present(source, (alias,))
        if aliased is not None and errors is not None:
            value = parse_numeric_level(aliased, minimum, maximum, name, errors)
        else:
            value = _quiet_level(first_present(source, (alias, key)), minimum, maximum)
        if value is not None:
            fields[name] = value

    cut_tdm = source.get("cutTDM")
    if cut_tdm in CUT_TDM_GRADES:
        fields["cut_tdm"] = cut_tdm

    if source.get("impact") is not None:
        fields["impact"] = bool(source["impact"])

    return EN388Levels(**fields) if fields else None


def parse_s3_levels(source: Mapping[str, Any]) -> S3Levels | None:
    if footwear_category(source) != "S3":
        return None

    steel_toe = first_present(source, ("punta", "steelToe"))
    puncture = first_present(source, ("plantilla", "punctureResistance"))
    return S3Levels(
        steel_toe=stringify(steel_toe) if steel_toe is not None else "200J",
        puncture_resistance=stringify(puncture) if puncture is not None else "1100N",
        water_resistance=bool(source.get("waterResistance") or source.get("resistencia_agua")),
        antislip=bool(source.get("antislip") or source.get("antideslizante")),
        antistatic_properties=bool(source.get("antistatic") or source.get("antistatico")),
    )


def parse_visibility_levels(source: Mapping[str, Any]) -> VisibilityLevels | None:
    vis_class = visibility_class(source)
    if vis_class is None:
        return None

    fields: dict[str, Any] = {"visibility_class": vis_class}
    width = _quiet_level(
        first_present(source, ("ancho_banda_reflectante", "reflectiveTapeWidth")), 0, math.inf
    )
    if width is not None:
        fields["reflective_tape_width"] = width
    background = source.get("backgroundMaterial")
    if isinstance(background, str) and background:
        fields["background_material"] = background
    colors = source.get("colorOptions")
    if isinstance(colors, list) and colors:
        fields["color_options"] = [stringify(color) for color in colors]
    return VisibilityLevels(**fields)
