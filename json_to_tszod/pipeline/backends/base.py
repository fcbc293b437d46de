"""
Base class for code generation backends.

Defines the interface that all backends must implement and the object
discovery pass they share.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ...utils import is_identifier, is_snake_case, lower_first, snake_to_camel
from ..analyzer.ir_nodes import ArrayType, InferredType, ObjectType, UnionType
from ..config import ConverterSettings


def collect_objects(type_: InferredType) -> list[ObjectType]:
    """
    Collect every object type in the tree, depth-first in first-visit order.

    Object property types, array element types and union variants are
    visited, the root included.
    """
    objects: list[ObjectType] = []
    stack = [type_]
    while stack:
        current = stack.pop()
        if isinstance(current, ObjectType):
            objects.append(current)
            stack.extend(reversed([prop.type for prop in current.properties.values()]))
        elif isinstance(current, ArrayType):
            stack.append(current.element_type)
        elif isinstance(current, UnionType):
            stack.extend(reversed(current.variants))
    return objects


def schema_name(type_name: str) -> str:
    """Zod schema variable for a type name ("RootUser" -> "rootUserSchema")."""
    return lower_first(type_name) + "Schema"


def property_key(key: str) -> str:
    """Render a property key, quoting keys that are not identifiers."""
    return key if is_identifier(key) else json.dumps(key)


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # Name of the file the output is written to
    FILE_NAME: str = ""

    def __init__(self, settings: ConverterSettings):
        """
        Initialize the backend.

        Args:
            settings: Converter settings
        """
        self.settings = settings
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
        )
        self.jinja_env.filters["property_key"] = property_key
        self.jinja_env.filters["schema_name"] = schema_name

    def get_template(self, name: str) -> jinja2.Template:
        return self.jinja_env.get_template(f"{name}.ts.jinja2")

    @abstractmethod
    def generate(self, type_: InferredType) -> str:
        """
        Generate code from the inferred type tree.

        Args:
            type_: The root of the inferred type tree

        Returns:
            Generated code as a string
        """

    def translate_type(self, type_: InferredType, depth: int = 0) -> str:
        """
        Translate an IR type to its textual form in the target notation.

        The tree is rendered bottom-up from an explicit stack: children are
        rendered first and their texts handed to :meth:`render_node`, so
        nesting depth is not limited by the interpreter recursion limit.

        Args:
            type_: The type node
            depth: Nesting level of the node, for notations that indent

        Returns:
            Target notation string
        """
        rendered: list[str] = []
        stack: list[tuple[InferredType, int, bool]] = [(type_, depth, False)]
        while stack:
            node, node_depth, expanded = stack.pop()
            children = self.children(node, node_depth)

            if children and not expanded:
                stack.append((node, node_depth, True))
                stack.extend((child, child_depth, False) for child, child_depth in reversed(children))
                continue

            start = len(rendered) - len(children)
            parts = rendered[start:]
            del rendered[start:]
            rendered.append(self.render_node(node, node_depth, parts))

        return rendered[0]

    def children(self, type_: InferredType, depth: int) -> list[tuple[InferredType, int]]:
        """Nodes whose rendering :meth:`render_node` needs, with their depths."""
        if isinstance(type_, ArrayType):
            return [(type_.element_type, depth)]
        if isinstance(type_, UnionType):
            return [(variant, depth) for variant in type_.variants]
        return []

    @abstractmethod
    def render_node(self, type_: InferredType, depth: int, parts: list[str]) -> str:
        """
        Render one node from the renderings of its children.

        Args:
            type_: The type node
            depth: Nesting level of the node
            parts: Renderings of ``children(type_, depth)``, in order

        Returns:
            Target notation string
        """

    def declaration_order(self, type_: InferredType) -> list[ObjectType]:
        """Objects deepest first, so every reference is declared before use."""
        return list(reversed(collect_objects(type_)))

    def display_key(self, key: str) -> str:
        """Property name as written in TypeScript-facing output."""
        if self.settings.snake_to_camel and is_snake_case(key):
            return snake_to_camel(key)
        return property_key(key)

    @staticmethod
    def join_blocks(blocks: list[str]) -> str:
        """Join declaration blocks with blank lines, ending with a newline."""
        return "\n\n".join(blocks) + "\n"
