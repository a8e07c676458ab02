"""Shared product fixtures."""

import copy

import pytest

GLOVE = {
    "sku": "GLV-001",
    "name": "Guante Nitrilo Pro",
    "price": 9.5,
    "stock": 120,
    "category": "Protección de Manos",
    "description": "Guante de nitrilo con soporte de nylon",
    "safetyCategory": "EPI",
    "complianceRequired": True,
    "specifications": {
        "normativas": ["EN 388", "EN 420", "CE"],
        "materiales": ["Nitrilo", "Nylon"],
        "tallas": ["7", "8", "9", "10", "11"],
        "niveles_proteccion": {"abrasion": 4, "corte": 2, "desgarro": 1, "puncion": 3},
    },
}

BOOT = {
    "sku": "BOT-S3-01",
    "name": "Bota de Seguridad S3",
    "price": 54.0,
    "stock": 30,
    "category": "Calzado de Seguridad",
    "description": "Bota con punta de acero y suela antideslizante",
    "safetyCategory": "EPI",
    "complianceRequired": True,
    "specifications": {
        "normativas": ["EN ISO 20345", "S3"],
        "materiales": "Cuero hidrofugado",
        "tallas": ["39", "40", "41", "42", "43"],
        "niveles_proteccion": {
            "categoria_calzado": "S3",
            "energia_impacto": 200,
            "resistencia_perforacion": 1100,
        },
    },
}

VEST = {
    "sku": "CHA-AV-02",
    "name": "Chaleco Alta Visibilidad",
    "price": 6.9,
    "stock": 300,
    "category": "Chaleco Reflectante",
    "description": "Chaleco amarillo",
    "safetyCategory": "EPI",
    "complianceRequired": True,
    "specifications": {
        "normativas": ["EN ISO 20471", "CE"],
        "materiales": ["Poliéster fluorescente", "Cinta reflectante"],
        "tallas": ["M", "L", "XL"],
        "niveles_proteccion": {"clase_visibilidad": "2", "ancho_banda_reflectante": 50},
    },
}


def _build(template: dict, specs: dict | None = None, **fields) -> dict:
    product = copy.deepcopy(template)
    product.update(fields)
    if specs is not None:
        product["specifications"].update(specs)
    return product


@pytest.fixture
def glove():
    return lambda specs=None, **fields: _build(GLOVE, specs, **fields)


@pytest.fixture
def boot():
    return lambda specs=None, **fields: _build(BOOT, specs, **fields)


@pytest.fixture
def vest():
    return lambda specs=None, **fields: _build(VEST, specs, **fields)
