"""Specification parsing for protex-specs."""

from protex_specs.parsing.engine import ParserConfig, SpecificationParser, parse_specifications
from protex_specs.schema import ParsedSpecifications

__all__ = [
    "ParserConfig",
    "ParsedSpecifications",
    "SpecificationParser",
    "parse_specifications",
]
