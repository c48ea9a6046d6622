"""Lower declaration type nodes to Zod schemas.

Column types come from the same dialect type mappers as the Kysely output;
this module only translates the resulting TypeNode. ``ColumnType<S, I, U>``
contributes the argument that matches the schema being built.
"""
from __future__ import annotations

import logging
from typing import Callable, Literal, Optional

from kysely_typegen.ast.nodes import (
    ArrayType,
    Declaration,
    GenericType,
    LiteralType,
    PrimitiveType,
    ReferenceType,
    TypeAliasDeclaration,
    TypeNode,
    UnionType,
)
from kysely_typegen.zod.nodes import (
    ZodArray,
    ZodCustom,
    ZodEnum,
    ZodLiteral,
    ZodObject,
    ZodPrimitive,
    ZodProperty,
    ZodReference,
    ZodSchema,
    ZodUnion,
)

logger = logging.getLogger(__name__)

Mode = Literal["select", "insert", "update"]

_COLUMN_TYPE_ARGUMENT = {"select": 0, "insert": 1, "update": 2}

_ZOD_PRIMITIVES = frozenset({
    "string", "number", "boolean", "bigint", "null", "undefined", "unknown", "any", "never",
})


def _number() -> ZodPrimitive:
    return ZodPrimitive("number")


def _point() -> ZodObject:
    return ZodObject([ZodProperty("x", _number()), ZodProperty("y", _number())])


def _line_string() -> ZodArray:
    return ZodArray(_point())


def _polygon() -> ZodArray:
    return ZodArray(_line_string())


# Helper types with a fixed structure, shared by the PostgreSQL and MySQL helpers
STRUCTURED_REFERENCES: dict[str, Callable[[], ZodSchema]] = {
    "Point": _point,
    "Circle": lambda: ZodObject([
        ZodProperty("x", _number()),
        ZodProperty("y", _number()),
        ZodProperty("radius", _number()),
    ]),
    "LineString": _line_string,
    "Polygon": _polygon,
    "Geometry": lambda: ZodUnion([_point(), _line_string(), _polygon()]),
}

# References that Zod can't check beyond "something is there"
OPAQUE_REFERENCES = frozenset({"JsonValue", "IPostgresInterval"})


def uncapitalize(name: str) -> str:
    return name[:1].lower() + name[1:]


def enum_schema_name(enum_type_name: str) -> str:
    return f"{uncapitalize(enum_type_name)}Schema"


class ZodLowering:
    """Translates TypeNodes for one run.

    Args:
        enum_names: Enum type names declared in the run; references to them
                    become references to their ``xSchema`` constants
        helper_declarations: Dialect helper declarations, used to expand
                             helper aliases such as ``Timestamp``
    """

    def __init__(self, enum_names: set[str], helper_declarations: list[Declaration]):
        self.enum_names = enum_names
        self.helpers: dict[str, TypeNode] = {
            d.name: d.type for d in helper_declarations if isinstance(d, TypeAliasDeclaration)
        }

    def lower(self, node: TypeNode, mode: Mode = "select") -> ZodSchema:
        if isinstance(node, PrimitiveType):
            if node.value in _ZOD_PRIMITIVES:
                return ZodPrimitive(node.value)
            return ZodPrimitive("unknown")

        if isinstance(node, LiteralType):
            return ZodLiteral(node.value)

        if isinstance(node, UnionType):
            return self._lower_union(node, mode)

        if isinstance(node, ArrayType):
            return ZodArray(self.lower(node.element_type, mode))

        if isinstance(node, GenericType):
            return self._lower_generic(node, mode)

        if isinstance(node, ReferenceType):
            return self._lower_reference(node.name, mode)

        logger.debug(f"No Zod equivalent for {type(node).__name__}, using z.unknown()")
        return ZodPrimitive("unknown")

    def _lower_union(self, node: UnionType, mode: Mode) -> ZodSchema:
        if not node.types:
            return ZodPrimitive("never")
        if len(node.types) == 1:
            return self.lower(node.types[0], mode)
        if all(isinstance(t, LiteralType) and isinstance(t.value, str) for t in node.types):
            return ZodEnum([t.value for t in node.types])
        return ZodUnion([self.lower(t, mode) for t in node.types])

    def _lower_generic(self, node: GenericType, mode: Mode) -> ZodSchema:
        args = node.type_arguments
        if node.name == "ColumnType" and args:
            index = min(_COLUMN_TYPE_ARGUMENT[mode], len(args) - 1)
            return self.lower(args[index], mode)
        if node.name == "ArrayType" and args:
            return ZodArray(self.lower(args[0], mode))
        if node.name == "Generated" and args:
            return self.lower(args[0], mode)
        return ZodPrimitive("unknown")

    def _lower_reference(self, name: str, mode: Mode) -> ZodSchema:
        if name in self.enum_names:
            return ZodReference(enum_schema_name(name))
        if name == "Date":
            return ZodPrimitive("date")
        if name == "Buffer":
            return ZodCustom("Buffer")
        if name in OPAQUE_REFERENCES:
            return ZodPrimitive("unknown")
        if name in STRUCTURED_REFERENCES:
            return STRUCTURED_REFERENCES[name]()
        helper: Optional[TypeNode] = self.helpers.get(name)
        if helper is not None:
            return self.lower(helper, mode)
        return ZodPrimitive("unknown")
