"""JSON to TypeScript / Zod Generator

A Python package that infers a structural schema from sample JSON and
renders it as TypeScript declarations, Zod schemas and an example value,
with optional-field detection, union merging and ISO date recognition.
"""

__version__ = "1.0.0"

from .pipeline import (
    Converter,
    ConverterSettings,
    ConvertResult,
    FormatterConfig,
    OutputStyle,
    convert_text,
    parse_json,
)
from .pipeline.analyzer import infer_type, merge_objects, merge_types

__all__ = [
    "Converter",
    "ConverterSettings",
    "ConvertResult",
    "FormatterConfig",
    "OutputStyle",
    "convert_text",
    "infer_type",
    "merge_objects",
    "merge_types",
    "parse_json",
]
