"""
TypeScript code generation backend.

Generates `export type` / `export interface` declarations from the IR.
"""

from __future__ import annotations

from ...utils import is_snake_case, snake_to_camel
from ..analyzer.ir_nodes import (
    ArrayType,
    DateStringType,
    InferredType,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    UnionType,
    UnknownType,
)
from ..config import OutputStyle
from .base import CodeBackend


class TypeScriptBackend(CodeBackend):
    """TypeScript declaration backend."""

    TEMPLATE_LANG = "typescript"
    FILE_NAME = "types.ts"

    TYPE_MAP = {
        PrimitiveKind.STRING: "string",
        PrimitiveKind.NUMBER: "number",
        PrimitiveKind.BOOLEAN: "boolean",
        PrimitiveKind.NULL: "null",
    }

    def generate(self, type_: InferredType) -> str:
        """Generate TypeScript declarations for the type tree."""
        blocks = [self._render_object(obj) for obj in self.declaration_order(type_)]

        # Non-object roots get an alias under the root name
        if not isinstance(type_, ObjectType):
            blocks.append(f"export type {self.settings.root_type_name} = {self.translate_type(type_)};")

        return self.join_blocks(blocks)

    def render_node(self, type_: InferredType, depth: int, parts: list[str]) -> str:
        """Render one node as a TypeScript type expression."""
        if isinstance(type_, PrimitiveType):
            return self.TYPE_MAP[type_.type]

        if isinstance(type_, UnknownType):
            return "unknown"

        # Dates are a validation concern, structurally they are strings
        if isinstance(type_, DateStringType):
            return "string"

        if isinstance(type_, ArrayType):
            if isinstance(type_.element_type, UnionType):
                return f"({parts[0]})[]"
            return f"{parts[0]}[]"

        if isinstance(type_, UnionType):
            return " | ".join(parts)

        if isinstance(type_, ObjectType):
            return type_.type_name

        raise TypeError(f"Unknown type node {type_!r}")

    def _render_object(self, obj: ObjectType) -> str:
        fields = []
        key_mappings = []
        for key, prop in obj.properties.items():
            name = self.display_key(key)
            if self.settings.snake_to_camel and is_snake_case(key):
                key_mappings.append({"name": snake_to_camel(key), "key": key})

            fields.append(
                {
                    "name": name,
                    "type": self.translate_type(prop.type),
                    "optional": prop.optional,
                    "nullable": prop.nullable,
                }
            )

        return self.get_template("object").render(
            name=obj.type_name,
            fields=fields,
            key_mappings=key_mappings,
            interface=self.settings.output_style == OutputStyle.INTERFACE,
        )
