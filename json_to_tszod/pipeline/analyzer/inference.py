"""
Type inference engine.

Walks a parsed JSON value and builds the IR type tree, collecting
diagnostics and counting fields on the way. The walk uses an explicit
stack so deeply nested documents do not depend on the interpreter
recursion limit; names and diagnostics come out in the same order a
depth-first recursive walk would produce them.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .ir_nodes import (
    BOOLEAN,
    DATE_STRING,
    NULL,
    NUMBER,
    STRING,
    UNKNOWN,
    ArrayType,
    Diagnostic,
    DiagnosticLevel,
    InferredType,
    InferResult,
    InferSettings,
    ObjectType,
    PrimitiveType,
    PropertyInfo,
    UnionType,
)
from .merge import merge_objects, merge_types
from .name_allocator import NameAllocator

logger = logging.getLogger(__name__)

# ISO-8601 date, optionally with time of day, seconds, fraction and zone
ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}(T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?)?", re.ASCII)

ITEM_SEGMENT = "item"


# Structural path: object keys as str, array indices as int
Path = tuple[str | int, ...]


def is_index_segment(segment: str | int) -> bool:
    return isinstance(segment, int)


def format_path(path: Path) -> str:
    """Render path segments as ``user.addresses[0].zip``."""
    result = ""
    for segment in path:
        if is_index_segment(segment):
            result += f"[{segment}]"
        elif not result:
            result += segment
        else:
            result += "." + segment
    return result


@dataclass
class _Frame:
    """A container whose children are still being inferred."""

    value: list | Mapping
    path: Path
    keys: list[Any]
    results: list[InferredType] = field(default_factory=list)

    @property
    def is_object(self) -> bool:
        return isinstance(self.value, Mapping)

    @property
    def done(self) -> bool:
        return len(self.results) == len(self.keys)

    def next_child(self) -> tuple[Any, Path]:
        key = self.keys[len(self.results)]
        if self.is_object:
            return self.value[key], self.path + (str(key),)
        return self.value[key], self.path + (key,)


class TypeInferrer:
    """Infers the type of one JSON value.

    Each instance owns the name allocator and diagnostics of a single run;
    use :func:`infer_type` rather than reusing an instance.
    """

    def __init__(self, settings: InferSettings):
        self.settings = settings
        self.names = NameAllocator(settings.root_type_name)
        self.diagnostics: list[Diagnostic] = []
        self.field_count = 0

    def infer(self, value: Any) -> InferResult:
        """
        Infer the type of a value.

        Args:
            value: The parsed JSON value

        Returns:
            InferResult with type tree, diagnostics and field count
        """
        if not isinstance(value, (Mapping, list, tuple)):
            self._report(DiagnosticLevel.ERROR, "Root value must be an object or array.", ())
            return self._result(self._walk(value))

        # The root declaration owns this name whatever its shape, nested paths must not reuse it
        self.names.reserve(self.settings.root_type_name)

        return self._result(self._walk(value))

    def _result(self, type_: InferredType) -> InferResult:
        logger.debug(
            "Inferred %s root with %d fields and %d diagnostics",
            type_.kind.value,
            self.field_count,
            len(self.diagnostics),
        )
        return InferResult(type=type_, diagnostics=self.diagnostics, field_count=self.field_count)

    def _report(self, level: DiagnosticLevel, message: str, path: Path) -> None:
        self.diagnostics.append(Diagnostic(level=level, message=message, path=format_path(path)))

    def _walk(self, value: Any) -> InferredType:
        """Infer a value without recursion."""
        visited = self._visit(value, ())
        if not isinstance(visited, _Frame):
            return visited

        stack = [visited]
        while True:
            frame = stack[-1]
            if not frame.done:
                child = self._visit(*frame.next_child())
                if isinstance(child, _Frame):
                    stack.append(child)
                else:
                    frame.results.append(child)
                continue

            stack.pop()
            result = self._finish(frame)
            if not stack:
                return result
            stack[-1].results.append(result)

    def _visit(self, value: Any, path: Path) -> InferredType | _Frame:
        """Infer a leaf directly, or open a frame for a non-empty container."""
        if value is None:
            return NULL

        if isinstance(value, str):
            if self.settings.detect_dates and ISO_DATE_PATTERN.fullmatch(value):
                display = format_path(path)
                self._report(DiagnosticLevel.INFO, f'Detected ISO date string at "{display}".', path)
                return DATE_STRING
            return STRING

        # bool is a subclass of int, test it first
        if isinstance(value, bool):
            return BOOLEAN

        if isinstance(value, (int, float)):
            return NUMBER

        if isinstance(value, (list, tuple)):
            if not value:
                display = format_path(path) or "root"
                self._report(
                    DiagnosticLevel.WARNING,
                    f'Empty array at "{display}", defaulting to unknown element type.',
                    path,
                )
                return ArrayType(UNKNOWN)
            return _Frame(value=list(value), path=path, keys=list(range(len(value))))

        if isinstance(value, Mapping):
            keys = list(value.keys())
            self.field_count += len(keys)
            return _Frame(value=value, path=path, keys=keys)

        return UNKNOWN

    def _finish(self, frame: _Frame) -> InferredType:
        if frame.is_object:
            return self._finish_object(frame)
        return self._finish_array(frame)

    def _finish_object(self, frame: _Frame) -> ObjectType:
        properties: dict[str, PropertyInfo] = {}
        for key, child_type in zip(frame.keys, frame.results):
            # Null is recorded by the nullable flag, never as a property type
            if isinstance(child_type, PrimitiveType) and child_type.is_null:
                properties[str(key)] = PropertyInfo(type=UNKNOWN, optional=False, nullable=True)
            else:
                properties[str(key)] = PropertyInfo(type=child_type, optional=False, nullable=False)

        # The root object always carries the configured name verbatim
        if frame.path:
            type_name = self.names.allocate(self._name_segments(frame.path))
        else:
            type_name = self.settings.root_type_name

        return ObjectType(properties=properties, type_name=type_name)

    def _finish_array(self, frame: _Frame) -> ArrayType:
        objects = [t for t in frame.results if isinstance(t, ObjectType)]
        others = [t for t in frame.results if not isinstance(t, ObjectType)]
        display = format_path(frame.path) or "root"

        if not others:
            merged = merge_objects(objects, self._item_name(frame.path))
            return ArrayType(merged)

        if not objects:
            element_type = merge_types(others)
            if isinstance(element_type, UnionType):
                self._report(DiagnosticLevel.WARNING, f'Mixed element types in array at "{display}".', frame.path)
            return ArrayType(element_type)

        self._report(
            DiagnosticLevel.WARNING,
            f'Mixed element types (objects and primitives) in array at "{display}".',
            frame.path,
        )
        merged = merge_objects(objects, self._item_name(frame.path))
        return ArrayType(merge_types(others + [merged]))

    def _item_name(self, path: Path) -> str:
        return self.names.allocate(self._name_segments(path) + [ITEM_SEGMENT])

    @staticmethod
    def _name_segments(path: Path) -> list[str]:
        return [segment for segment in path if not is_index_segment(segment)]


def infer_type(value: Any, settings: InferSettings | None = None) -> InferResult:
    """
    Infer the type of a parsed JSON value.

    Deterministic: the same value and settings always give the same IR,
    names and diagnostics.

    Args:
        value: The parsed JSON value
        settings: Inference settings (defaults: root name "Root", no date detection)

    Returns:
        InferResult with type tree, diagnostics and field count
    """
    return TypeInferrer(settings or InferSettings()).infer(value)
