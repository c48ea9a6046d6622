"""AST node types for TypeScript declaration output."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# ============ Type nodes ============

@dataclass
class PrimitiveType:
    """Built-in keyword type: string, number, boolean, null, unknown, ..."""
    value: str


@dataclass
class LiteralType:
    """String, number or boolean literal type."""
    value: str | int | float | bool


@dataclass
class UnionType:
    types: list[TypeNode]


@dataclass
class IntersectionType:
    types: list[TypeNode]


@dataclass
class ArrayType:
    element_type: TypeNode


@dataclass
class GenericType:
    """Named type applied to type arguments, e.g. ColumnType<S, I, U>."""
    name: str
    type_arguments: list[TypeNode]


@dataclass
class ReferenceType:
    """Reference to a declared or global type by name."""
    name: str


@dataclass
class TupleType:
    elements: list[TypeNode] = field(default_factory=list)


@dataclass
class ConditionalType:
    check_type: TypeNode
    extends_type: TypeNode
    true_type: TypeNode
    false_type: TypeNode


@dataclass
class InferType:
    """Type variable introduced inside a conditional's extends clause."""
    name: str


@dataclass
class KeyofType:
    type: TypeNode


@dataclass
class IndexAccessType:
    object_type: TypeNode
    index_type: TypeNode


@dataclass
class RawType:
    """Verbatim TypeScript text for fixed helper bodies."""
    value: str


TypeNode = Union[
    PrimitiveType,
    LiteralType,
    UnionType,
    IntersectionType,
    ArrayType,
    GenericType,
    ReferenceType,
    TupleType,
    ConditionalType,
    InferType,
    KeyofType,
    IndexAccessType,
    RawType,
]


# ============ Declarations ============

@dataclass
class PropertySignature:
    """Interface member."""
    name: str
    type: TypeNode
    optional: bool = False
    readonly: bool = False
    comment: str | None = None


@dataclass
class InterfaceDeclaration:
    name: str
    properties: list[PropertySignature] = field(default_factory=list)
    exported: bool = True
    comment: str | None = None


@dataclass
class TypeAliasDeclaration:
    name: str
    type: TypeNode
    type_parameters: list[str] = field(default_factory=list)
    exported: bool = True


@dataclass
class ImportDeclaration:
    names: list[str]
    module: str
    type_only: bool = False


Declaration = Union[InterfaceDeclaration, TypeAliasDeclaration, ImportDeclaration]


@dataclass
class Program:
    """Ordered list of declarations; later ones may reference earlier ones."""
    declarations: list[Declaration] = field(default_factory=list)


# ============ Constructors ============

NULL = PrimitiveType("null")
UNKNOWN = PrimitiveType("unknown")


def primitive(value: str) -> PrimitiveType:
    return PrimitiveType(value)


def reference(name: str) -> ReferenceType:
    return ReferenceType(name)


def union(*types: TypeNode) -> UnionType:
    return UnionType(list(types))


def nullable(node: TypeNode) -> UnionType:
    """Add a single null arm to a type.

    A union gains null as its last member instead of being nested, so the
    result always carries exactly one null arm.
    """
    if isinstance(node, UnionType):
        if any(t == NULL for t in node.types):
            return node
        return UnionType([*node.types, NULL])
    return UnionType([node, NULL])


def column_type(
    select_type: TypeNode,
    insert_type: TypeNode | None = None,
    update_type: TypeNode | None = None,
) -> GenericType:
    """Build ColumnType<S>, ColumnType<S, I> or ColumnType<S, I, U>."""
    type_arguments = [select_type]
    if insert_type is not None:
        type_arguments.append(insert_type)
        if update_type is not None:
            type_arguments.append(update_type)
    return GenericType("ColumnType", type_arguments)
