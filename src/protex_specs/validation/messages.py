"""Operator-facing (Spanish) rendering of validation findings."""

from protex_specs.schema import ValidationError, ValidationWarning

_ERROR_TEMPLATES: dict[str, str] = {
    "MISSING_SPECIFICATIONS": "Producto industrial debe tener especificaciones completas",
    "MISSING_SAFETY_STANDARDS": "Falta al menos una normativa de seguridad en el array 'normativas'",
    "MISSING_EN388_LEVELS": (
        "Normativa EN 388 requiere niveles de protección "
        "(abrasión, corte, desgarro, perforación)"
    ),
    "INCOMPLETE_EN388_LEVELS": "Faltan niveles de protección EN 388. {message}",
    "INVALID_ABRASION_LEVEL": "Nivel de abrasión inválido ({value}). Debe ser 1-4 para EN 388",
    "INVALID_CUT_LEVEL": "Nivel de corte inválido ({value}). Debe ser 1-5 para EN 388",
    "MISSING_FOOTWEAR_CATEGORY": (
        "Calzado de seguridad debe especificar categoría (S1, S2, S3, S4, S5)"
    ),
    "INCONSISTENT_S3_CATEGORY": 'Producto con normativa S3 debe tener categoria_calzado: "S3"',
    "MISSING_VISIBILITY_CLASS": (
        "Ropa de alta visibilidad debe especificar clase de visibilidad (1, 2, 3)"
    ),
    "INVALID_VISIBILITY_CLASS": "Clase de visibilidad inválida ({value}). Debe ser 1, 2 o 3",
}


def render_error(sku: str, error: ValidationError) -> str:
    template = _ERROR_TEMPLATES.get(error.code)
    if template is None:
        text = error.message
    else:
        text = template.format(message=error.message, value=_display(error.value))
    return f"Error en SKU [{sku}]: {text}"


def render_warning(sku: str, warning: ValidationWarning) -> str:
    suffix = f" - {warning.suggestion}" if warning.suggestion else ""
    return f"Advertencia en SKU [{sku}]: {warning.message}{suffix}"


def _display(value: object) -> str:
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
