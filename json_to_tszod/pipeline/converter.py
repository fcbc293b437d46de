"""
Converter pipeline.

Runs the phases for one input document:

1. Parse: JSON text into a value, with syntax diagnostics
2. Infer: value into an IR type tree, with advisory diagnostics
3. Generate: the same tree through the TypeScript, Zod and example backends
4. Format: optional prettier pass over each document, run concurrently

Inputs are usually re-submitted on every edit, so several runs can be in
flight at once. Every run takes a token when it starts and only commits its
result if no newer run has started in the meantime.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import jinja2

from .analyzer.inference import infer_type
from .analyzer.ir_nodes import Diagnostic, DiagnosticLevel, InferredType
from .backends import ExampleBackend, TypeScriptBackend, ZodBackend
from .config import ConverterSettings
from .formatters import Formatter, PrettierFormatter
from .parser import parse_json

logger = logging.getLogger(__name__)


@dataclass
class ConvertResult:
    """Generated documents plus everything shown alongside them."""

    typescript: str = ""
    zod: str = ""
    example: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    is_valid: bool = False
    field_count: int = 0
    root_type_name: str = "Root"

    # The inferred tree, when inference ran
    type: InferredType | None = None

    @property
    def files(self) -> dict[str, str]:
        """Generated documents keyed by output file name."""
        return {
            TypeScriptBackend.FILE_NAME: self.typescript,
            ZodBackend.FILE_NAME: self.zod,
            ExampleBackend.FILE_NAME: self.example,
        }

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.level is DiagnosticLevel.ERROR]


def generate_documents(type_: InferredType, settings: ConverterSettings) -> tuple[str, str, str]:
    """
    Render the type tree with every backend.

    Args:
        type_: The finished IR tree
        settings: Converter settings

    Returns:
        (typescript, zod, example) source texts, unformatted
    """
    return (
        TypeScriptBackend(settings).generate(type_),
        ZodBackend(settings).generate(type_),
        ExampleBackend(settings).generate(type_),
    )


class Converter:
    """Turns JSON text into TypeScript, Zod and example code."""

    def __init__(self, settings: ConverterSettings | None = None, formatter: Formatter | None = None):
        """
        Initialize the converter.

        Args:
            settings: Default settings for runs
            formatter: Formatter used when formatting is enabled
        """
        self.settings = settings or ConverterSettings()
        self.formatter = formatter or PrettierFormatter()
        self.result = ConvertResult(root_type_name=self.settings.root_type_name)
        self._run_token = 0

    async def convert(self, text: str, settings: ConverterSettings | None = None) -> ConvertResult | None:
        """
        Run the pipeline and commit the result to ``self.result``.

        Args:
            text: JSON source text
            settings: Settings for this run (defaults to the converter's)

        Returns:
            The committed result, or None if a newer run superseded this one
        """
        self._run_token += 1
        token = self._run_token

        result = await self._run(text, settings or self.settings)

        if token != self._run_token:
            logger.debug("Discarding result of run %d, run %d is newer", token, self._run_token)
            return None

        self.result = result
        return result

    async def _run(self, text: str, settings: ConverterSettings) -> ConvertResult:
        root_name = settings.root_type_name

        parse_result = parse_json(text)
        if parse_result.value is None:
            return ConvertResult(diagnostics=parse_result.diagnostics, root_type_name=root_name)

        infer_result = infer_type(parse_result.value, settings.infer_settings())
        diagnostics = parse_result.diagnostics + infer_result.diagnostics

        if infer_result.has_errors:
            return ConvertResult(
                diagnostics=diagnostics,
                field_count=infer_result.field_count,
                root_type_name=root_name,
                type=infer_result.type,
            )

        try:
            documents = generate_documents(infer_result.type, settings)
        except (jinja2.TemplateError, TypeError, KeyError, RecursionError) as e:
            logger.exception("Code generation failed")
            diagnostics.append(Diagnostic(level=DiagnosticLevel.ERROR, message=f"Code generation error: {e}"))
            return ConvertResult(diagnostics=diagnostics, root_type_name=root_name, type=infer_result.type)

        if settings.formatter.enabled:
            documents = await asyncio.gather(*(self.formatter.format_async(code, settings.formatter) for code in documents))

        typescript, zod, example = documents
        return ConvertResult(
            typescript=typescript,
            zod=zod,
            example=example,
            diagnostics=diagnostics,
            is_valid=True,
            field_count=infer_result.field_count,
            root_type_name=root_name,
            type=infer_result.type,
        )


def convert_text(text: str, settings: ConverterSettings | None = None, formatter: Formatter | None = None) -> ConvertResult:
    """
    Convert JSON text synchronously.

    Args:
        text: JSON source text
        settings: Converter settings
        formatter: Formatter used when formatting is enabled

    Returns:
        The conversion result
    """
    return asyncio.run(Converter(settings, formatter).convert(text))
