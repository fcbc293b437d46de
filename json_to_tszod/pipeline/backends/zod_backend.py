"""
Zod code generation backend.

Generates runtime-validating Zod schemas from the IR. Property keys are
kept exactly as they appear in the sample so the schemas validate
unmodified input, even when the TypeScript output renames them.
"""

from __future__ import annotations

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
from .base import CodeBackend, schema_name


class ZodBackend(CodeBackend):
    """Zod schema backend."""

    TEMPLATE_LANG = "zod"
    FILE_NAME = "schema.ts"

    TYPE_MAP = {
        PrimitiveKind.STRING: "z.string()",
        PrimitiveKind.NUMBER: "z.number()",
        PrimitiveKind.BOOLEAN: "z.boolean()",
        PrimitiveKind.NULL: "z.null()",
    }

    def generate(self, type_: InferredType) -> str:
        """Generate Zod schemas for the type tree."""
        root_name = self.settings.root_type_name
        root_schema = schema_name(root_name)

        blocks = [self.get_template("prefix").render()]
        blocks.extend(self._render_object(obj) for obj in self.declaration_order(type_))

        if not isinstance(type_, ObjectType):
            blocks.append(f"export const {root_schema} = {self.translate_type(type_)};")

        blocks.append(f"export type {root_name} = z.infer<typeof {root_schema}>;")
        return self.join_blocks(blocks)

    def render_node(self, type_: InferredType, depth: int, parts: list[str]) -> str:
        """Render one node as a Zod schema expression."""
        if isinstance(type_, PrimitiveType):
            return self.TYPE_MAP[type_.type]

        if isinstance(type_, UnknownType):
            return "z.unknown()"

        if isinstance(type_, DateStringType):
            return "z.string().datetime()" if self.settings.detect_dates else "z.string()"

        if isinstance(type_, ArrayType):
            return f"z.array({parts[0]})"

        if isinstance(type_, UnionType):
            return f"z.union([{', '.join(parts)}])"

        if isinstance(type_, ObjectType):
            return schema_name(type_.type_name)

        raise TypeError(f"Unknown type node {type_!r}")

    def _render_object(self, obj: ObjectType) -> str:
        fields = []
        for key, prop in obj.properties.items():
            expression = self.translate_type(prop.type)
            if prop.nullable:
                expression += ".nullable()"
            if prop.optional:
                expression += ".optional()"
            fields.append({"key": key, "schema": expression})

        return self.get_template("object").render(
            name=obj.type_name,
            fields=fields,
            strict=self.settings.strict_objects,
        )
