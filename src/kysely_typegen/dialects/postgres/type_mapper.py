"""Map PostgreSQL column types to TypeScript type nodes."""
from __future__ import annotations

from typing import Optional

from kysely_typegen.ast.nodes import TypeNode
from kysely_typegen.dialects.common import (
    BOOLEAN,
    BUFFER,
    JSON_VALUE,
    NUMBER,
    STRING,
    finish,
    map_array,
    split_array_suffix,
    unknown_type,
)
from kysely_typegen.dialects.postgres.helpers import helper_reference

_NUMBER_TYPES = frozenset({
    "int2", "int4", "smallint", "integer",
    "float4", "float8", "real", "double precision",
    "oid",
})

_STRING_TYPES = frozenset({
    "varchar", "char", "bpchar", "text", "citext", "uuid", "name",
    "character varying", "character",
    "time", "timetz", "money",
    "int4range", "int8range", "numrange", "daterange", "tsrange", "tstzrange",
})

_HELPER_TYPES = {
    "int8": "Int8",
    "bigint": "Int8",
    "numeric": "Numeric",
    "decimal": "Numeric",
    "timestamp": "Timestamp",
    "timestamptz": "Timestamp",
    "date": "Timestamp",
    "interval": "Interval",
    "point": "Point",
    "circle": "Circle",
}


def map_postgres_type(
    data_type: str,
    *,
    is_nullable: bool,
    is_array: bool = False,
    unknown_types: Optional[set[str]] = None,
    used_helpers: Optional[set[str]] = None,
) -> TypeNode:
    """Map a PostgreSQL type name (udt_name or declared name).

    Args:
        data_type: Raw type name, e.g. ``int8``, ``text[]`` or ``_text`` with is_array
        is_nullable: Add a ``| null`` arm
        is_array: Column is an array of ``data_type``
        unknown_types: Collects names that fell back to ``unknown``
        used_helpers: Collects helper aliases the result refers to

    Returns:
        TypeNode for the column
    """
    data_type, is_array = split_array_suffix(data_type, is_array)

    if is_array:
        if data_type.startswith('_'):
            data_type = data_type[1:]
        return map_array(
            map_postgres_type,
            data_type,
            is_nullable=is_nullable,
            unknown_types=unknown_types,
            used_helpers=used_helpers,
        )

    if data_type in _NUMBER_TYPES:
        base: TypeNode = NUMBER
    elif data_type in _STRING_TYPES:
        base = STRING
    elif data_type in ("bool", "boolean"):
        base = BOOLEAN
    elif data_type in _HELPER_TYPES:
        base = helper_reference(_HELPER_TYPES[data_type], used_helpers)
    elif data_type in ("json", "jsonb"):
        base = JSON_VALUE
    elif data_type == "bytea":
        base = BUFFER
    else:
        base = unknown_type(data_type, unknown_types)

    return finish(base, is_nullable)
