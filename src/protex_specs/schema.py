"""Data models for protex-specs."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SafetyCategory = Literal[
    "MECHANICAL",
    "CHEMICAL",
    "THERMAL",
    "COLD",
    "ELECTRICAL",
    "VISIBILITY",
    "FOOTWEAR",
    "RESPIRATORY",
    "HEAD",
    "FALL_PROTECTION",
    "GENERAL",
]
Severity = Literal["warning", "error", "critical"]
SizeType = Literal["numeric", "alphanumeric", "european", "custom"]
FootwearCategory = Literal["S1", "S2", "S3", "S4", "S5"]
VisibilityClass = Literal["1", "2", "3"]

RawSpecifications = dict[str, Any]


class ProtectionLevels(BaseModel):
    """Performance ratings declared for a product.

    Known ratings are typed fields. Any other key found in the source mapping is
    kept untouched in ``extra``.
    """

    model_config = ConfigDict(frozen=True)

    abrasion: int | float | None = None
    corte: int | float | None = None
    desgarro: int | float | None = None
    puncion: int | float | None = None
    categoria_calzado: FootwearCategory | None = None
    energia_impacto: int | float | None = None
    resistencia_perforacion: int | float | None = None
    clase_visibilidad: VisibilityClass | None = None
    ancho_banda_reflectante: int | float | None = None
    extra: dict[str, str | int | float] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Flatten back to the open ``niveles_proteccion`` mapping."""
        data = self.model_dump(exclude={"extra"}, exclude_none=True)
        data.update(self.extra)
        return data

    def is_empty(self) -> bool:
        return not self.to_dict()


class TechnicalDetails(BaseModel):
    """Free-form technical fields picked up from the source record."""

    model_config = ConfigDict(frozen=True, extra="allow")

    material: str | list[Any] | None = None
    peso: str | None = None
    dimensiones: Any = None
    caracteristicas: list[Any] | None = None
    uso_recomendado: list[Any] | None = None
    temperatura_trabajo: dict[str, int | float] | None = None
    resistencia_quimica: bool | None = None
    antistatico: bool | None = None


class RegulatoryInfo(BaseModel):
    """Regulatory compliance information."""

    marcado_ce: bool
    fabricante: str
    fecha_fabricacion: str | None = None
    fecha_caducidad: str | None = None
    certificados: list[str] | None = None
    laboratorio_ensayo: str | None = None


class IndustrialSpecifications(BaseModel):
    """Canonical specification block of an industrial product."""

    normativas: list[str]
    materiales: str | list[str]
    tallas: list[str]
    niveles_proteccion: dict[str, str | int | float] = Field(default_factory=dict)
    detalles_tecnicos: TechnicalDetails | None = None
    informacion_regulatoria: RegulatoryInfo | None = None


class EN388Levels(BaseModel):
    """EN 388 mechanical ratings for gloves."""

    model_config = ConfigDict(frozen=True)

    abrasion: int | float | None = None
    cut: int | float | None = None
    tear: int | float | None = None
    puncture: int | float | None = None
    cut_tdm: Literal["A", "B", "C", "D", "E", "F"] | None = None
    impact: bool | None = None


class S3Levels(BaseModel):
    """EN ISO 20345 S3 footwear features."""

    model_config = ConfigDict(frozen=True)

    category: Literal["S3"] = "S3"
    steel_toe: str = "200J"
    puncture_resistance: str = "1100N"
    water_resistance: bool = False
    antislip: bool = False
    antistatic_properties: bool = False


class VisibilityLevels(BaseModel):
    """EN ISO 20471 high visibility details."""

    model_config = ConfigDict(frozen=True)

    visibility_class: VisibilityClass
    reflective_tape_width: int | float = 50
    background_material: str = "fluorescent"
    color_options: list[str] = Field(default_factory=lambda: ["yellow", "orange"])


class SafetyStandard(BaseModel):
    """A declared safety standard resolved against the known-standards table."""

    model_config = ConfigDict(frozen=True)

    code: str
    description: str
    mandatory: bool
    category: SafetyCategory
    levels: EN388Levels | S3Levels | VisibilityLevels | None = None


class SizeInformation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SizeType = "custom"
    available_sizes: list[str] = Field(default_factory=list)
    size_chart: dict[str, Any] | None = None
    unisex: bool = True


class ValidationError(BaseModel):
    """A finding with a stable code. ``error`` and ``critical`` block migration."""

    model_config = ConfigDict(frozen=True)

    field: str
    value: Any = None
    expected_format: str
    severity: Severity
    message: str
    code: str

    @property
    def is_blocking(self) -> bool:
        return self.severity in ("error", "critical")


class ValidationWarning(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    suggestion: str | None = None


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool = True
    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)


class ParsedSpecifications(BaseModel):
    """Parser output for one raw specification record."""

    model_config = ConfigDict(frozen=True)

    safety_standards: list[SafetyStandard] = Field(default_factory=list)
    size_information: SizeInformation = Field(default_factory=SizeInformation)
    technical_details: TechnicalDetails = Field(default_factory=TechnicalDetails)
    protection_levels: ProtectionLevels = Field(default_factory=ProtectionLevels)
    is_valid: bool = True
    errors: list[ValidationError] = Field(default_factory=list)


class CrossValidationResult(ValidationResult):
    """Validator output for one product, with operator-facing messages."""

    product_sku: str | None = None
    category: str | None = None
    friendly_errors: list[str] = Field(default_factory=list)
    friendly_warnings: list[str] = Field(default_factory=list)


class BatchValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_products: int
    valid_products: int
    products_with_errors: int
    products_with_warnings: int
    all_errors: list[str] = Field(default_factory=list)
    all_warnings: list[str] = Field(default_factory=list)
    detailed_results: list[CrossValidationResult] = Field(default_factory=list)
