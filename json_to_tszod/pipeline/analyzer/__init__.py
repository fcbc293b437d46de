"""
Analyzer module.

Contains the IR, type inference, type merging and name allocation.
"""

from __future__ import annotations

from .inference import TypeInferrer, infer_type
from .ir_nodes import (
    ArrayType,
    DateStringType,
    Diagnostic,
    DiagnosticLevel,
    InferredType,
    InferResult,
    InferSettings,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    PropertyInfo,
    TypeKind,
    UnionType,
    UnknownType,
)
from .merge import merge_objects, merge_types, types_equal
from .name_allocator import NameAllocator

__all__ = [
    "ArrayType",
    "DateStringType",
    "Diagnostic",
    "DiagnosticLevel",
    "InferredType",
    "InferResult",
    "InferSettings",
    "NameAllocator",
    "ObjectType",
    "PrimitiveKind",
    "PrimitiveType",
    "PropertyInfo",
    "TypeInferrer",
    "TypeKind",
    "UnionType",
    "UnknownType",
    "infer_type",
    "merge_objects",
    "merge_types",
    "types_equal",
]
