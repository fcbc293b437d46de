"""
Pipeline - JSON sample to TypeScript / Zod converter.

1. Phase 1 (Parser): Parse JSON text, reporting syntax errors with location
2. Phase 2 (Analyzer): Infer the IR type tree, merging sibling samples
3. Phase 3 (Backends): Render the IR as TypeScript, Zod and an example value
4. Phase 4 (Formatter): Optional post-processing with prettier
"""

from __future__ import annotations

from .config import ConverterSettings, FormatterConfig, OutputStyle
from .converter import Converter, ConvertResult, convert_text, generate_documents
from .parser import ParseResult, parse_json

__all__ = [
    "Converter",
    "ConvertResult",
    "ConverterSettings",
    "FormatterConfig",
    "OutputStyle",
    "ParseResult",
    "convert_text",
    "generate_documents",
    "parse_json",
]
