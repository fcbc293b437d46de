"""
IR (Intermediate Representation) node definitions.

These nodes describe the shape inferred from sample JSON values. The tree is
built fresh by every inference run and consumed, read-only, by the
TypeScript, Zod and example backends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class TypeKind(str, Enum):
    """Kind of an inferred type node."""

    PRIMITIVE = "primitive"  # string, number, boolean, null
    DATE_STRING = "date-string"  # ISO-8601 timestamp string
    UNKNOWN = "unknown"  # shape could not be determined
    ARRAY = "array"  # T[]
    OBJECT = "object"  # named object with properties
    UNION = "union"  # A | B | ...


class PrimitiveKind(str, Enum):
    """Sub-kind of a primitive type."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


class InferredType:
    """Base class for all IR type nodes."""

    kind: ClassVar[TypeKind]


@dataclass(frozen=True, eq=False)
class PrimitiveType(InferredType):
    kind: ClassVar[TypeKind] = TypeKind.PRIMITIVE

    type: PrimitiveKind = PrimitiveKind.STRING

    @property
    def is_null(self) -> bool:
        return self.type is PrimitiveKind.NULL


@dataclass(frozen=True, eq=False)
class DateStringType(InferredType):
    kind: ClassVar[TypeKind] = TypeKind.DATE_STRING


@dataclass(frozen=True, eq=False)
class UnknownType(InferredType):
    kind: ClassVar[TypeKind] = TypeKind.UNKNOWN


@dataclass(frozen=True, eq=False)
class ArrayType(InferredType):
    kind: ClassVar[TypeKind] = TypeKind.ARRAY

    element_type: InferredType = field(default_factory=UnknownType)


@dataclass
class PropertyInfo:
    """A property of an object type.

    ``nullable`` and ``optional`` are independent: nullable means the value
    was literally null at least once, optional means the key was missing from
    at least one sibling sample.
    """

    type: InferredType
    optional: bool = False
    nullable: bool = False


@dataclass(frozen=True, eq=False)
class ObjectType(InferredType):
    kind: ClassVar[TypeKind] = TypeKind.OBJECT

    # Insertion ordered, first-seen key order is the emission order
    properties: dict[str, PropertyInfo] = field(default_factory=dict)

    # Stable generated name, unique within one inference run (e.g. "Root", "RootUser")
    type_name: str = ""


@dataclass(frozen=True, eq=False)
class UnionType(InferredType):
    """A flat union of two or more structurally distinct variants."""

    kind: ClassVar[TypeKind] = TypeKind.UNION

    variants: tuple[InferredType, ...] = ()


# Shared leaf instances, leaves carry no state
STRING = PrimitiveType(PrimitiveKind.STRING)
NUMBER = PrimitiveType(PrimitiveKind.NUMBER)
BOOLEAN = PrimitiveType(PrimitiveKind.BOOLEAN)
NULL = PrimitiveType(PrimitiveKind.NULL)
UNKNOWN = UnknownType()
DATE_STRING = DateStringType()


class DiagnosticLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    """An observation about the input, attached to a structural path.

    ``path`` is a dotted/bracketed path such as ``user.addresses[0].zip``,
    or empty for root-scoped messages.
    """

    level: DiagnosticLevel
    message: str
    path: str = ""

    def __str__(self) -> str:
        location = f"{self.path}: " if self.path else ""
        return f"[{self.level.value}] {location}{self.message}"


@dataclass
class InferSettings:
    """Settings consumed by the inference engine."""

    root_type_name: str = "Root"
    detect_dates: bool = False


@dataclass
class InferResult:
    """The outcome of one inference run."""

    type: InferredType
    diagnostics: list[Diagnostic] = field(default_factory=list)

    # Every key visited across every object, merged duplicates included
    field_count: int = 0

    @property
    def has_errors(self) -> bool:
        return any(d.level is DiagnosticLevel.ERROR for d in self.diagnostics)
