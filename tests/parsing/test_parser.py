"""Tests for the specification parser."""

import json

import pytest

from protex_specs import parse_specifications
from protex_specs.parsing import ParserConfig, SpecificationParser
from protex_specs.schema import EN388Levels, S3Levels, VisibilityLevels


def _codes(result):
    return [error.code for error in result.errors]


@pytest.mark.parametrize(
    "spec",
    [
        {
            "normativas": ["EN 388", "EN 420", "CE"],
            "materiales": ["Nitrilo", "Nylon"],
            "tallas": ["7", "8", "9", "10", "11"],
            "niveles_proteccion": {"abrasion": 4, "corte": 2, "desgarro": 1, "puncion": 3},
        },
        {
            "normativas": ["EN ISO 20345", "CE"],
            "materiales": "Cuero hidrofugado",
            "tallas": ["40", "41", "42"],
            "niveles_proteccion": {
                "categoria_calzado": "S3",
                "energia_impacto": 200,
                "resistencia_perforacion": 1100,
            },
        },
        {
            "normativas": ["EN ISO 20471"],
            "materiales": ["Poliéster fluorescente"],
            "tallas": ["S", "M", "L", "XL"],
            "niveles_proteccion": {"clase_visibilidad": "2", "ancho_banda_reflectante": 50},
        },
    ],
)
def test_canonical_specification_survives_json_round_trip(spec):
    raw = json.loads(json.dumps(spec))

    result = parse_specifications(raw)

    assert result.is_valid is True
    assert [standard.code for standard in result.safety_standards] == spec["normativas"]
    assert result.size_information.available_sizes == spec["tallas"]
    assert result.protection_levels.to_dict() == spec["niveles_proteccion"]
    assert result.technical_details.material == spec["materiales"]
    assert type(result.technical_details.material) is type(spec["materiales"])


def test_known_standards_are_resolved():
    result = parse_specifications({"normativas": ["EN 388", "EN 149", "ANSI Z89.1", "CE"]})

    by_code = {standard.code: standard for standard in result.safety_standards}
    assert by_code["EN 388"].category == "MECHANICAL"
    assert by_code["EN 388"].description == "Protective gloves against mechanical risks"
    assert by_code["EN 149"].category == "RESPIRATORY"
    assert by_code["ANSI Z89.1"].category == "HEAD"
    assert by_code["ANSI Z89.1"].mandatory is False
    assert by_code["CE"].mandatory is True


def test_unknown_standard_defaults_to_general():
    result = parse_specifications({"normativas": ["EN 9999", "NOM-017"]})

    first, second = result.safety_standards
    assert first.category == "GENERAL"
    assert first.description == "Safety standard: EN 9999"
    assert first.mandatory is True
    assert second.mandatory is False
    assert result.is_valid is True


def test_single_string_standard_is_wrapped():
    result = parse_specifications({"standards": "EN 397"})

    assert [standard.code for standard in result.safety_standards] == ["EN 397"]


def test_first_standards_alias_wins():
    result = parse_specifications({"normativas": ["CE"], "certifications": ["EN 388"]})

    assert [standard.code for standard in result.safety_standards] == ["CE"]


def test_non_string_standard_is_reported_and_skipped():
    result = parse_specifications({"normativas": [388, "CE"]})

    assert [standard.code for standard in result.safety_standards] == ["CE"]
    assert _codes(result) == ["INVALID_STANDARD_TYPE"]
    assert result.errors[0].value == 388
    assert result.is_valid is False


def test_en388_standard_gets_level_block():
    result = parse_specifications(
        {
            "normativas": ["EN 388"],
            "niveles_proteccion": {"abrasion": 4, "corte": 2, "desgarro": 1, "puncion": 3},
            "cutTDM": "C",
        }
    )

    assert result.safety_standards[0].levels == EN388Levels(
        abrasion=4, cut=2, tear=1, puncture=3, cut_tdm="C"
    )


def test_s3_standard_gets_level_block():
    result = parse_specifications(
        {
            "normativas": ["EN ISO 20345"],
            "niveles_proteccion": {"categoria_calzado": "S3"},
            "antideslizante": True,
        }
    )

    levels = result.safety_standards[0].levels
    assert isinstance(levels, S3Levels)
    assert levels.steel_toe == "200J"
    assert levels.puncture_resistance == "1100N"
    assert levels.antislip is True
    assert levels.water_resistance is False


def test_visibility_standard_gets_level_block():
    result = parse_specifications(
        {"normativas": ["EN ISO 20471"], "niveles_proteccion": {"clase_visibilidad": 3}}
    )

    assert result.safety_standards[0].levels == VisibilityLevels(visibility_class="3")
    assert result.protection_levels.clase_visibilidad == "3"


@pytest.mark.parametrize(
    ("sizes", "expected"),
    [
        (["35", "36", "40"], "european"),
        (["7", "8", "9"], "numeric"),
        (["42"], "numeric"),
        (["40", "40"], "numeric"),
        (["34", "40"], "numeric"),
        (["S", "M", "L"], "alphanumeric"),
        (["7", "M", "42"], "custom"),
        (["Talla única"], "custom"),
        ([], "custom"),
    ],
)
def test_size_classification(sizes, expected):
    result = parse_specifications({"tallas": sizes})

    assert result.size_information.type == expected
    assert result.size_information.unisex is True


def test_sizes_are_stringified_and_blanks_dropped():
    result = parse_specifications({"sizes": [40, " ", "", 41]})

    assert result.size_information.available_sizes == ["40", "41"]
    assert result.size_information.type == "european"


def test_blank_sizes_produce_empty_list_and_warning():
    parser = SpecificationParser()

    result = parser.parse_specifications({"tallas": ["  ", ""]})
    check = parser.validate_size_information(result.size_information.available_sizes)

    assert result.size_information.available_sizes == []
    assert [warning.message for warning in check.warnings] == ["No sizes specified"]
    assert check.is_valid is True


def test_mixed_size_formats_warn():
    check = SpecificationParser().validate_size_information(["7", "8", "M"])

    assert [warning.message for warning in check.warnings] == ["Mixed size formats detected"]


def test_unknown_standards_warn():
    check = SpecificationParser().validate_safety_standards(["EN 388", "EN 9999"])

    assert check.is_valid is True
    assert len(check.warnings) == 1
    assert check.warnings[0].message == "Unknown safety standard: EN 9999"


def test_technical_details_pick_up_aliases():
    result = parse_specifications(
        {
            "material": "Cuero",
            "weight": 350,
            "dimensions": {"largo": 30},
            "features": ["Antideslizante"],
            "usage": "Construcción",
        }
    )

    assert result.technical_details.model_dump(exclude_none=True) == {
        "material": "Cuero",
        "peso": "350",
        "dimensiones": {"largo": 30},
        "caracteristicas": ["Antideslizante"],
    }


def test_technical_details_absent_fields_are_omitted():
    result = parse_specifications({"normativas": ["CE"]})

    assert result.technical_details.model_dump(exclude_none=True) == {}


def test_abrasion_out_of_range_is_dropped():
    result = parse_specifications({"niveles_proteccion": {"abrasion": 10, "corte": 3}})

    assert result.protection_levels.abrasion is None
    assert result.protection_levels.corte == 3
    assert _codes(result) == ["LEVEL_OUT_OF_RANGE"]
    assert result.errors[0].severity == "error"
    assert result.is_valid is False


def test_abrasion_in_range_is_preserved():
    result = parse_specifications({"niveles_proteccion": {"abrasion": 3}})

    assert result.protection_levels.abrasion == 3
    assert result.errors == []


def test_non_numeric_level_is_reported():
    result = parse_specifications({"niveles_proteccion": {"desgarro": "alto", "puncion": "2"}})

    assert result.protection_levels.desgarro is None
    assert result.protection_levels.puncion == 2
    assert _codes(result) == ["INVALID_NUMERIC_LEVEL"]


def test_null_level_is_absent_without_error():
    result = parse_specifications({"niveles_proteccion": {"abrasion": None}})

    assert result.protection_levels.abrasion is None
    assert result.errors == []


def test_flat_protection_levels_are_read_from_top_level():
    result = parse_specifications({"abrasion": 2, "corte": 5, "visibilityClass": "1", "name": "x"})

    assert result.protection_levels.to_dict() == {"abrasion": 2, "corte": 5, "clase_visibilidad": "1"}


def test_nested_levels_pass_through_unknown_keys():
    result = parse_specifications(
        {"protectionLevels": {"abrasion": 2, "impacto_nudillos": "P", "temperatura": 250}}
    )

    assert result.protection_levels.extra == {"impacto_nudillos": "P", "temperatura": 250}
    assert result.protection_levels.to_dict()["impacto_nudillos"] == "P"


def test_invalid_footwear_category_is_silently_dropped():
    result = parse_specifications({"niveles_proteccion": {"categoria_calzado": "S9"}})

    assert result.protection_levels.categoria_calzado is None
    assert result.errors == []


def test_invalid_visibility_class_is_silently_dropped():
    result = parse_specifications({"niveles_proteccion": {"clase_visibilidad": "4"}})

    assert result.protection_levels.clase_visibilidad is None
    assert result.errors == []


def test_en388_without_levels_warns_only():
    result = parse_specifications({"normativas": ["EN 388"], "niveles_proteccion": {}})

    assert _codes(result) == ["MISSING_PROTECTION_LEVELS"]
    assert result.errors[0].severity == "warning"
    assert result.is_valid is True


def test_footwear_without_category_warns_only():
    result = parse_specifications({"normativas": ["EN ISO 20345:2011"]})

    assert _codes(result) == ["MISSING_FOOTWEAR_CATEGORY"]
    assert result.is_valid is True


@pytest.mark.parametrize("raw", [None, ["EN 388"], "EN 388", 42])
def test_non_mapping_input_is_a_parse_error(raw):
    result = parse_specifications(raw)

    assert result.is_valid is False
    assert len(result.errors) == 1
    assert result.errors[0].code == "PARSE_ERROR"
    assert result.errors[0].severity == "critical"


def test_failing_step_does_not_block_other_steps(mocker):
    mocker.patch.object(
        SpecificationParser, "_parse_size_information", side_effect=RuntimeError("boom")
    )

    result = SpecificationParser().parse_specifications(
        {"normativas": ["CE"], "tallas": ["M"], "niveles_proteccion": {"abrasion": 2}}
    )

    assert [standard.code for standard in result.safety_standards] == ["CE"]
    assert result.protection_levels.abrasion == 2
    assert result.size_information.available_sizes == []
    assert _codes(result) == ["PARSE_ERROR"]
    assert "boom" in result.errors[0].message
    assert result.is_valid is False


def test_parser_config_changes_european_range():
    parser = SpecificationParser(config=ParserConfig(european_size_min=5, european_size_max=12))

    result = parser.parse_specifications({"tallas": ["7", "8", "9"]})

    assert result.size_information.type == "european"


def test_parser_config_from_env(monkeypatch):
    monkeypatch.setenv("PROTEX_EUROPEAN_SIZE_MIN", "30")
    monkeypatch.setenv("PROTEX_EUROPEAN_SIZE_MAX", "not-a-number")
    monkeypatch.setenv("PROTEX_DEFAULT_UNISEX", "false")

    config = ParserConfig.from_env()

    assert config.european_size_min == 30
    assert config.european_size_max == 48
    assert config.default_unisex is False


@pytest.mark.parametrize("materials", [["Nitrilo", 5], ["Nitrilo", None]])
def test_mixed_type_material_array_passes_through(materials):
    result = parse_specifications({"normativas": ["CE"], "materiales": materials, "tallas": ["M"]})

    assert result.technical_details.material == materials
    assert result.errors == []
    assert result.is_valid is True


def test_invalid_en388_alias_level_is_reported():
    result = parse_specifications({"normativas": ["EN 388"], "abrasion": 3, "cut": "x"})

    assert _codes(result) == ["INVALID_NUMERIC_LEVEL"]
    assert result.errors[0].field == "cut"
    assert result.safety_standards[0].levels == EN388Levels(abrasion=3)
    assert result.is_valid is False


def test_invalid_spanish_level_is_reported_once():
    result = parse_specifications(
        {"normativas": ["EN 388"], "niveles_proteccion": {"abrasion": 3, "corte": "x"}}
    )

    assert _codes(result) == ["INVALID_NUMERIC_LEVEL"]
    assert result.errors[0].field == "corte"


def test_null_size_is_rendered_as_null():
    result = parse_specifications({"tallas": [None, "M"]})

    assert result.size_information.available_sizes == ["null", "M"]
    assert result.size_information.type == "custom"


@pytest.mark.parametrize("sizes", [["40\n", "41"], ["４０", "41"]])
def test_size_classification_needs_ascii_digits_only(sizes):
    result = parse_specifications({"tallas": sizes})

    assert result.size_information.type == "custom"


def test_size_classification_rejects_trailing_newline_on_letters():
    result = parse_specifications({"tallas": ["S\n", "M"]})

    assert result.size_information.type == "custom"
