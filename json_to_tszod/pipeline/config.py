"""
Configuration for the converter pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from .analyzer.ir_nodes import InferSettings


class OutputStyle(str, Enum):
    """Declaration style for the TypeScript backend."""

    TYPE = "type"  # export type Root = { ... };
    INTERFACE = "interface"  # export interface Root { ... }


@dataclass
class FormatterConfig:
    """Configuration for the post-processing formatter."""

    # Whether formatting is enabled
    enabled: bool = False

    # Maximum line width passed to the formatter
    print_width: int = 80

    # Indentation width
    tab_width: int = 2

    # Seconds before the formatter process is abandoned
    timeout: int = 30

    @staticmethod
    def from_dict(d: dict) -> FormatterConfig:
        """Create a formatter config from a dictionary, unknown keys are ignored."""
        names = {f.name for f in fields(FormatterConfig)}
        options = {}
        for k, v in d.items():
            k = _SETTING_ALIASES.get(k, k)
            if k in names:
                options[k] = v
        return FormatterConfig(**options)


# camelCase setting names -> dataclass field names
_SETTING_ALIASES = {
    "rootTypeName": "root_type_name",
    "outputStyle": "output_style",
    "strictObjects": "strict_objects",
    "detectDates": "detect_dates",
    "snakeToCamel": "snake_to_camel",
    "printWidth": "print_width",
    "tabWidth": "tab_width",
}


@dataclass
class ConverterSettings:
    """Options for inference and code generation."""

    # Name of the outermost type
    root_type_name: str = "Root"

    # "type" alias or "interface" declarations
    output_style: OutputStyle = OutputStyle.TYPE

    # Add .strict() to every Zod object schema
    strict_objects: bool = False

    # Recognize ISO-8601 strings, validated with z.string().datetime()
    detect_dates: bool = False

    # Rename snake_case keys to camelCase in TypeScript and example output
    snake_to_camel: bool = False

    formatter: FormatterConfig = field(default_factory=FormatterConfig)

    def infer_settings(self) -> InferSettings:
        """Settings subset used by the inference engine."""
        return InferSettings(root_type_name=self.root_type_name, detect_dates=self.detect_dates)

    @staticmethod
    def from_dict(d: dict) -> ConverterSettings:
        """Create settings from a dictionary, unknown keys are ignored."""
        if not isinstance(d, dict):
            raise ValueError(f"Settings must be a JSON object, got {type(d).__name__}")
        settings = ConverterSettings()
        for k, v in d.items():
            k = _SETTING_ALIASES.get(k, k)
            if k == "formatter" and isinstance(v, dict):
                settings.formatter = FormatterConfig.from_dict(v)
            elif k == "output_style":
                settings.output_style = OutputStyle(v)
            elif hasattr(settings, k):
                setattr(settings, k, v)
        return settings

    def to_dict(self) -> dict:
        """Convert settings to a dictionary."""
        return {
            "rootTypeName": self.root_type_name,
            "outputStyle": self.output_style.value,
            "strictObjects": self.strict_objects,
            "detectDates": self.detect_dates,
            "snakeToCamel": self.snake_to_camel,
            "formatter": {
                "enabled": self.formatter.enabled,
                "print_width": self.formatter.print_width,
                "tab_width": self.formatter.tab_width,
                "timeout": self.formatter.timeout,
            },
        }
