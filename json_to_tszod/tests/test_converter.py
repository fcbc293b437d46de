"""
Tests for the converter pipeline, settings and formatter integration.
"""

from __future__ import annotations

import asyncio
import time

import pytest

from json_to_tszod.pipeline import Converter, ConverterSettings, FormatterConfig, OutputStyle, convert_text
from json_to_tszod.pipeline.analyzer import DiagnosticLevel, ObjectType
from json_to_tszod.pipeline.backends import TypeScriptBackend
from json_to_tszod.pipeline.formatters import Formatter, PrettierFormatter, prettier_formatter
from json_to_tszod.samples import SAMPLES, get_sample


class MarkingFormatter(Formatter):
    """Formatter that marks its output so tests can see it ran."""

    def __init__(self):
        self.calls = 0

    def format(self, code, config):
        self.calls += 1
        return "// formatted\n" + code

    def is_available(self):
        return True


class DelayedFormatter(Formatter):
    """Formatter that holds back documents mentioning a given type."""

    def __init__(self, slow_marker: str, delay: float = 0.2):
        self.slow_marker = slow_marker
        self.delay = delay

    def format(self, code, config):
        if self.slow_marker in code:
            time.sleep(self.delay)
        return code

    def is_available(self):
        return True


def formatting_enabled(**options) -> ConverterSettings:
    return ConverterSettings(formatter=FormatterConfig(enabled=True), **options)


class TestConvert:
    """Tests for convert_text."""

    def test_valid_input(self):
        """Test a successful run."""
        result = convert_text('{"name": "Alice", "age": 30}')

        assert result.is_valid
        assert result.field_count == 2
        assert result.root_type_name == "Root"
        assert isinstance(result.type, ObjectType)
        assert result.typescript == "export type Root = {\n  name: string;\n  age: number;\n};\n"
        assert "export const rootSchema = z.object({" in result.zod
        assert "const example: Root = {" in result.example
        assert [d.message for d in result.diagnostics] == ["JSON parsed successfully."]
        assert result.errors == []

    def test_files_are_named(self):
        """Test the output file mapping."""
        result = convert_text('{"id": 1}')
        assert list(result.files) == ["types.ts", "schema.ts", "example.ts"]
        assert result.files["types.ts"] == result.typescript

    def test_parse_error(self):
        """Test that syntax errors withhold generation."""
        result = convert_text("{invalid}")

        assert not result.is_valid
        assert result.type is None
        assert result.typescript == result.zod == result.example == ""
        assert len(result.errors) == 1
        assert "line 1, column 2" in result.errors[0].message

    def test_empty_input(self):
        """Test that empty input is invalid without diagnostics."""
        result = convert_text("   ")
        assert not result.is_valid
        assert result.diagnostics == []

    @pytest.mark.parametrize("text", ["42", '"text"', "true"])
    def test_primitive_root_is_invalid(self, text):
        """Test that a primitive root reports an error and generates nothing."""
        result = convert_text(text)

        assert not result.is_valid
        assert result.typescript == ""
        assert [d.message for d in result.errors] == ["Root value must be an object or array."]

    def test_settings_flow_through(self):
        """Test that settings reach every backend."""
        settings = ConverterSettings(
            root_type_name="Account",
            output_style=OutputStyle.INTERFACE,
            strict_objects=True,
            detect_dates=True,
            snake_to_camel=True,
        )
        result = convert_text('{"created_at": "2025-01-15T09:30:00Z"}', settings)

        assert result.root_type_name == "Account"
        assert "export interface Account {\n" in result.typescript
        assert "  createdAt: string;" in result.typescript
        assert "  created_at: z.string().datetime()," in result.zod
        assert "}).strict();" in result.zod
        assert '  createdAt: "2025-01-01T00:00:00.000Z",' in result.example
        assert any(d.level is DiagnosticLevel.INFO and "ISO date" in d.message for d in result.diagnostics)

    def test_generation_error_becomes_diagnostic(self, monkeypatch):
        """Test that a failing backend yields an error diagnostic, not an exception."""

        def broken_generate(self, type_):
            raise TypeError("Unknown type node")

        monkeypatch.setattr(TypeScriptBackend, "generate", broken_generate)
        result = convert_text('{"id": 1}')

        assert not result.is_valid
        assert result.typescript == ""
        assert [d.message for d in result.errors] == ["Code generation error: Unknown type node"]

    def test_deeply_nested_objects(self):
        """Test that objects nested 500 deep convert in every output."""
        depth = 500
        result = convert_text('{"a": ' * depth + "1" + "}" * depth)

        assert result.is_valid
        assert result.errors == []
        assert result.field_count == depth
        assert "export type Root = {\n  a: A;\n};" in result.typescript
        assert result.example.count("a: {") == depth - 1
        assert " " * (2 * depth) + "a: 0,\n" in result.example

    def test_non_standard_constant_is_a_parse_error(self):
        """Test that NaN is rejected before inference."""
        result = convert_text('{"a": NaN}')

        assert not result.is_valid
        assert result.typescript == ""
        assert [d.message for d in result.errors] == ["JSON parse error (line 1, column 7): NaN is not valid JSON"]

    def test_warnings_do_not_invalidate(self):
        """Test that warnings still produce output."""
        result = convert_text('{"values": [1, "x"], "items": []}')
        assert result.is_valid
        assert len([d for d in result.diagnostics if d.level is DiagnosticLevel.WARNING]) == 2

    @pytest.mark.parametrize("sample", SAMPLES, ids=lambda s: s.name)
    def test_samples_convert(self, sample):
        """Test that every built-in sample converts cleanly."""
        result = convert_text(sample.text, ConverterSettings(detect_dates=True))
        assert result.is_valid
        assert result.errors == []
        assert result.field_count > 0

    def test_get_sample_unknown_name(self):
        """Test the lookup error for unknown samples."""
        with pytest.raises(KeyError):
            get_sample("no-such-sample")


class TestConverterRuns:
    """Tests for run ordering and formatting."""

    def test_result_is_committed(self):
        """Test that a finished run replaces the converter result."""
        converter = Converter()
        result = asyncio.run(converter.convert('{"id": 1}'))
        assert result is converter.result
        assert converter.result.is_valid

    def test_initial_result_is_empty(self):
        """Test the result before any run."""
        converter = Converter(ConverterSettings(root_type_name="Payload"))
        assert not converter.result.is_valid
        assert converter.result.root_type_name == "Payload"

    def test_stale_run_is_discarded(self):
        """Test that a run finishing after a newer one never commits."""
        converter = Converter(formatter=DelayedFormatter("First"))

        async def run_both():
            return await asyncio.gather(
                converter.convert('{"id": 1}', formatting_enabled(root_type_name="First")),
                converter.convert('{"id": 2}', formatting_enabled(root_type_name="Second")),
            )

        first, second = asyncio.run(run_both())

        assert first is None
        assert second is not None
        assert converter.result is second
        assert converter.result.root_type_name == "Second"

    def test_formatter_applies_when_enabled(self):
        """Test that an enabled formatter post-processes every document."""
        formatter = MarkingFormatter()
        result = convert_text('{"id": 1}', formatting_enabled(), formatter)

        assert formatter.calls == 3
        assert result.typescript.startswith("// formatted\n")
        assert result.zod.startswith("// formatted\n")
        assert result.example.startswith("// formatted\n")

    def test_formatter_skipped_when_disabled(self):
        """Test that formatting is off by default."""
        formatter = MarkingFormatter()
        convert_text('{"id": 1}', ConverterSettings(), formatter)
        assert formatter.calls == 0


class TestPrettierFormatter:
    """Tests for PrettierFormatter."""

    def test_missing_executable_keeps_code(self):
        """Test that a missing prettier leaves the code unchanged."""
        formatter = PrettierFormatter(executable="prettier-does-not-exist")
        code = "export type Root = {id:number};\n"

        assert not formatter.is_available()
        assert formatter.format(code, FormatterConfig(enabled=True)) == code

    def test_convenience_function_without_prettier(self, monkeypatch):
        """Test format_with_prettier when prettier is not on the PATH."""
        monkeypatch.setattr(prettier_formatter.shutil, "which", lambda name: None)
        code = "export type Root = {id:number};\n"
        assert prettier_formatter.format_with_prettier(code) == code

    def test_missing_executable_in_pipeline(self):
        """Test that enabling formatting without prettier still succeeds."""
        result = convert_text(
            '{"id": 1}',
            formatting_enabled(),
            PrettierFormatter(executable="prettier-does-not-exist"),
        )
        assert result.is_valid
        assert result.typescript == "export type Root = {\n  id: number;\n};\n"


class TestConverterSettings:
    """Tests for settings serialization."""

    def test_from_dict_accepts_camel_case(self):
        """Test the camelCase setting names."""
        settings = ConverterSettings.from_dict(
            {
                "rootTypeName": "Payload",
                "outputStyle": "interface",
                "strictObjects": True,
                "detectDates": True,
                "snakeToCamel": True,
                "formatter": {"enabled": True, "print_width": 100},
            }
        )

        assert settings.root_type_name == "Payload"
        assert settings.output_style is OutputStyle.INTERFACE
        assert settings.strict_objects is True
        assert settings.detect_dates is True
        assert settings.snake_to_camel is True
        assert settings.formatter.enabled is True
        assert settings.formatter.print_width == 100
        assert settings.formatter.tab_width == 2

    def test_from_dict_accepts_field_names(self):
        """Test the snake_case field names."""
        settings = ConverterSettings.from_dict({"root_type_name": "Payload", "output_style": "type"})
        assert settings.root_type_name == "Payload"
        assert settings.output_style is OutputStyle.TYPE

    def test_unknown_keys_are_ignored(self):
        """Test that unknown keys are skipped."""
        settings = ConverterSettings.from_dict({"nope": 1})
        assert settings == ConverterSettings()

    def test_unknown_formatter_keys_are_ignored(self):
        """Test that formatter options outside the known fields are skipped."""
        settings = ConverterSettings.from_dict({"formatter": {"enabled": True, "semi": False, "printWidth": 120}})

        assert settings.formatter == FormatterConfig(enabled=True, print_width=120)

    def test_invalid_output_style(self):
        """Test that an unknown output style is a ValueError."""
        with pytest.raises(ValueError):
            ConverterSettings.from_dict({"outputStyle": "bogus"})

    def test_non_object_settings(self):
        """Test that settings must be a mapping."""
        with pytest.raises(ValueError):
            ConverterSettings.from_dict(["rootTypeName"])

    def test_round_trip(self):
        """Test that to_dict output loads back to equal settings."""
        settings = ConverterSettings(root_type_name="Order", strict_objects=True)
        data = settings.to_dict()

        assert data["rootTypeName"] == "Order"
        assert data["outputStyle"] == "type"
        assert ConverterSettings.from_dict(data) == settings

    def test_infer_settings(self):
        """Test the subset passed to inference."""
        infer = ConverterSettings(root_type_name="Order", detect_dates=True).infer_settings()
        assert infer.root_type_name == "Order"
        assert infer.detect_dates is True
