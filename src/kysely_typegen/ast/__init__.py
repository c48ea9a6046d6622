"""TypeScript declaration AST and serializer."""
from .nodes import (
    ArrayType,
    ConditionalType,
    Declaration,
    GenericType,
    ImportDeclaration,
    IndexAccessType,
    InferType,
    InterfaceDeclaration,
    IntersectionType,
    KeyofType,
    LiteralType,
    PrimitiveType,
    Program,
    PropertySignature,
    RawType,
    ReferenceType,
    TupleType,
    TypeAliasDeclaration,
    TypeNode,
    UnionType,
    NULL,
    UNKNOWN,
    column_type,
    nullable,
    primitive,
    reference,
    union,
)
from .serialize import escape_string, serialize, serialize_type

__all__ = [
    "ArrayType",
    "ConditionalType",
    "Declaration",
    "GenericType",
    "ImportDeclaration",
    "IndexAccessType",
    "InferType",
    "InterfaceDeclaration",
    "IntersectionType",
    "KeyofType",
    "LiteralType",
    "PrimitiveType",
    "Program",
    "PropertySignature",
    "RawType",
    "ReferenceType",
    "TupleType",
    "TypeAliasDeclaration",
    "TypeNode",
    "NULL",
    "UNKNOWN",
    "UnionType",
    "column_type",
    "escape_string",
    "nullable",
    "primitive",
    "reference",
    "serialize",
    "serialize_type",
    "union",
]
