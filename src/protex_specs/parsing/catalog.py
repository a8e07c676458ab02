"""Known safety standards."""

from __future__ import annotations

from dataclasses import dataclass

from protex_specs.schema import SafetyCategory


@dataclass(frozen=True)
class StandardEntry:
    code: str
    category: SafetyCategory
    description: str


KNOWN_STANDARDS: tuple[StandardEntry, ...] = (
    StandardEntry("EN 388", "MECHANICAL", "Protective gloves against mechanical risks"),
    StandardEntry("EN 374", "CHEMICAL", "Protective gloves against chemicals and micro-organisms"),
    StandardEntry("EN 407", "THERMAL", "Protective gloves against thermal risks"),
    StandardEntry("EN 511", "COLD", "Protective gloves against cold"),
    StandardEntry("EN 60903", "ELECTRICAL", "Gloves and mitts of insulating material for live working"),
    StandardEntry("EN ISO 20471", "VISIBILITY", "High visibility clothing"),
    StandardEntry("EN ISO 20345", "FOOTWEAR", "Personal protective equipment - Safety footwear"),
    StandardEntry("EN 149", "RESPIRATORY", "Respiratory protective devices - Filtering half masks"),
    StandardEntry("EN 397", "HEAD", "Industrial safety helmets"),
    StandardEntry("EN 361", "FALL_PROTECTION", "Personal fall protection equipment - Full body harnesses"),
    StandardEntry("EN 420", "GENERAL", "General requirements for gloves"),
    StandardEntry("CE", "GENERAL", "Conformité Européenne marking"),
    StandardEntry("ANSI Z87.1", "GENERAL", "Occupational and Educational Personal Eye and Face Protection"),
    StandardEntry("ANSI Z89.1", "HEAD", "Industrial Head Protection"),
    StandardEntry("ANSI/ISEA 107", "VISIBILITY", "High-Visibility Safety Apparel"),
)

_BY_CODE: dict[str, StandardEntry] = {entry.code: entry for entry in KNOWN_STANDARDS}


def is_known_standard(code: str) -> bool:
    return code in _BY_CODE


def standard_category(code: str) -> SafetyCategory:
    entry = _BY_CODE.get(code)
    return entry.category if entry else "GENERAL"


def standard_description(code: str) -> str:
    entry = _BY_CODE.get(code)
    return entry.description if entry else f"Safety standard: {code}"


def is_mandatory_standard(code: str) -> bool:
    """CE marking and EN norms are mandatory for the EU market."""
    return code == "CE" or code.startswith("EN")
