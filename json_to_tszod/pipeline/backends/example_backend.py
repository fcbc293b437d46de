"""
Example value backend.

Generates a TypeScript snippet holding a representative value of the
inferred type, plus commented usage of the generated types and schemas.
"""

from __future__ import annotations

from collections.abc import Iterator

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
from .base import CodeBackend

PLACEHOLDER_TIMESTAMP = '"2025-01-01T00:00:00.000Z"'

INDENT = "  "


class ExampleBackend(CodeBackend):
    """Representative example value backend."""

    TEMPLATE_LANG = "example"
    FILE_NAME = "example.ts"

    TYPE_MAP = {
        PrimitiveKind.STRING: '""',
        PrimitiveKind.NUMBER: "0",
        PrimitiveKind.BOOLEAN: "false",
        PrimitiveKind.NULL: "null",
    }

    def generate(self, type_: InferredType) -> str:
        """Generate the example snippet for the type tree."""
        code = self.get_template("example").render(
            root_name=self.settings.root_type_name,
            value=self.translate_type(type_),
        )
        return code + "\n"

    def children(self, type_: InferredType, depth: int) -> list[tuple[InferredType, int]]:
        """A union shows one variant, an object shows the values of its non-nullable properties."""
        if isinstance(type_, UnionType):
            return [(self._representative_variant(type_), depth)]

        if isinstance(type_, ObjectType):
            return [(prop.type, depth + 1) for prop in type_.properties.values() if not prop.nullable]

        return super().children(type_, depth)

    def render_node(self, type_: InferredType, depth: int, parts: list[str]) -> str:
        """
        Render the representative value of one node as a TypeScript literal.

        Args:
            type_: The type node
            depth: Nesting level, used for object indentation
            parts: Values of the node's children

        Returns:
            TypeScript value expression
        """
        if isinstance(type_, PrimitiveType):
            return self.TYPE_MAP[type_.type]

        if isinstance(type_, UnknownType):
            return "undefined"

        if isinstance(type_, DateStringType):
            return PLACEHOLDER_TIMESTAMP

        if isinstance(type_, ArrayType):
            return f"[{parts[0]}]"

        if isinstance(type_, UnionType):
            return parts[0]

        if isinstance(type_, ObjectType):
            return self._object_value(type_, depth, iter(parts))

        raise TypeError(f"Unknown type node {type_!r}")

    @staticmethod
    def _representative_variant(union: UnionType) -> InferredType:
        """First non-null variant, or the first variant when all are null."""
        for variant in union.variants:
            if not (isinstance(variant, PrimitiveType) and variant.is_null):
                return variant
        return union.variants[0]

    def _object_value(self, obj: ObjectType, depth: int, values: Iterator[str]) -> str:
        if not obj.properties:
            return "{}"

        inner_pad = INDENT * (depth + 1)
        lines = []
        for key, prop in obj.properties.items():
            value = "null" if prop.nullable else next(values)
            lines.append(f"{inner_pad}{self.display_key(key)}: {value},")

        return "{\n" + "\n".join(lines) + "\n" + INDENT * depth + "}"
