"""Map SQLite declared column types to TypeScript type nodes.

SQLite stores dates as text and booleans as integers, so both come back as
``string`` and ``number``.
"""
from __future__ import annotations

from typing import Optional

from kysely_typegen.ast.nodes import TypeNode
from kysely_typegen.dialects.common import (
    BUFFER,
    JSON_VALUE,
    NUMBER,
    STRING,
    finish,
    map_array,
    split_array_suffix,
    strip_type_params,
    unknown_type,
)

_TYPES: dict[str, TypeNode] = {
    **dict.fromkeys(
        ("integer", "int", "tinyint", "smallint", "mediumint", "bigint",
         "real", "double", "float", "numeric", "decimal", "boolean"),
        NUMBER,
    ),
    **dict.fromkeys(("text", "varchar", "char", "clob", "date", "datetime", "timestamp"), STRING),
    "blob": BUFFER,
    "json": JSON_VALUE,
}


def map_sqlite_type(
    data_type: str,
    *,
    is_nullable: bool,
    is_array: bool = False,
    unknown_types: Optional[set[str]] = None,
    used_helpers: Optional[set[str]] = None,
) -> TypeNode:
    data_type, is_array = split_array_suffix(data_type, is_array)
    if is_array:
        return map_array(
            map_sqlite_type,
            data_type,
            is_nullable=is_nullable,
            unknown_types=unknown_types,
            used_helpers=used_helpers,
        )

    base = _TYPES.get(strip_type_params(data_type).lower())
    if base is None:
        base = unknown_type(data_type, unknown_types)
    return finish(base, is_nullable)
