"""
Type merging.

Combines inferred types coming from sibling samples (array elements) into
one type: structural equality, union flattening and deduplication, and
object merging with optional/nullable detection.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import replace

from .ir_nodes import (
    NULL,
    UNKNOWN,
    ArrayType,
    DateStringType,
    InferredType,
    ObjectType,
    PrimitiveType,
    PropertyInfo,
    UnionType,
    UnknownType,
)


def types_equal(a: InferredType, b: InferredType) -> bool:
    """
    Check if two inferred types describe the same shape.

    Union comparison is order sensitive. Object comparison looks at property
    names and property types only, the optional/nullable flags are ignored.
    Pairs are compared from a work list, so nesting depth is not limited by
    the interpreter recursion limit.
    """
    pending = [(a, b)]
    while pending:
        a, b = pending.pop()
        if a is b:
            continue

        if a.kind is not b.kind:
            return False

        if isinstance(a, PrimitiveType):
            if a.type is not b.type:
                return False
        elif isinstance(a, (UnknownType, DateStringType)):
            continue
        elif isinstance(a, ArrayType):
            pending.append((a.element_type, b.element_type))
        elif isinstance(a, UnionType):
            if len(a.variants) != len(b.variants):
                return False
            pending.extend(zip(a.variants, b.variants))
        elif isinstance(a, ObjectType):
            if a.properties.keys() != b.properties.keys():
                return False
            pending.extend((prop.type, b.properties[name].type) for name, prop in a.properties.items())
        else:
            raise TypeError(f"Unknown type node {a!r}")

    return True


def _flatten_unions(types: Iterable[InferredType]) -> list[InferredType]:
    """Replace every union by its variants, transitively."""
    result: list[InferredType] = []
    stack = list(reversed(list(types)))
    while stack:
        type_ = stack.pop()
        if isinstance(type_, UnionType):
            stack.extend(reversed(type_.variants))
        else:
            result.append(type_)
    return result


def _deduplicate(types: Iterable[InferredType]) -> list[InferredType]:
    """Drop structural duplicates, keeping the first occurrence."""
    result: list[InferredType] = []
    for type_ in types:
        if not any(types_equal(seen, type_) for seen in result):
            result.append(type_)
    return result


def merge_types(types: Sequence[InferredType]) -> InferredType:
    """
    Merge types into a single type.

    Nested unions are flattened and structural duplicates removed. Unknown
    is dropped when a concrete shape is also present. A single survivor is
    returned unwrapped, several become a union in first-seen order.

    Args:
        types: The types to merge

    Returns:
        The merged type (UNKNOWN for an empty input)
    """
    if not types:
        return UNKNOWN

    deduplicated = _deduplicate(_flatten_unions(types))

    known = [t for t in deduplicated if not isinstance(t, UnknownType)]
    remaining = known or deduplicated

    if len(remaining) == 1:
        return remaining[0]
    return UnionType(tuple(remaining))


def _split_null(type_: InferredType) -> tuple[InferredType, bool]:
    """Move a null variant out of a union. Returns (type, had_null)."""
    if not isinstance(type_, UnionType):
        return type_, False

    non_null = tuple(v for v in type_.variants if not (isinstance(v, PrimitiveType) and v.is_null))
    if len(non_null) == len(type_.variants):
        return type_, False

    if not non_null:
        return NULL, True
    if len(non_null) == 1:
        return non_null[0], True
    return UnionType(non_null), True


def merge_objects(objects: Sequence[ObjectType], type_name: str) -> ObjectType:
    """
    Merge object types observed for the same logical entity.

    A key missing from at least one object becomes optional; a key whose
    value was null anywhere becomes nullable. A null variant in the merged
    property type is folded into the nullable flag.

    Args:
        objects: Object types from sibling samples
        type_name: Name of the merged object type

    Returns:
        The merged object type
    """
    if not objects:
        return ObjectType(properties={}, type_name=type_name)

    if len(objects) == 1:
        return replace(objects[0], type_name=type_name)

    # dict keeps first-seen key order across all objects
    all_keys = dict.fromkeys(key for obj in objects for key in obj.properties)
    total = len(objects)

    properties: dict[str, PropertyInfo] = {}
    for key in all_keys:
        occurrences = [obj.properties[key] for obj in objects if key in obj.properties]

        merged_type, had_null = _split_null(merge_types([prop.type for prop in occurrences]))

        properties[key] = PropertyInfo(
            type=merged_type,
            optional=len(occurrences) < total,
            nullable=had_null or any(prop.nullable for prop in occurrences),
        )

    return ObjectType(properties=properties, type_name=type_name)
