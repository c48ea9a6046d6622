"""Map SQL Server column types to TypeScript type nodes."""
from __future__ import annotations

from typing import Optional

from kysely_typegen.ast.nodes import TypeNode, UNKNOWN
from kysely_typegen.dialects.common import (
    BOOLEAN,
    BUFFER,
    NUMBER,
    STRING,
    date_column,
    finish,
    map_array,
    split_array_suffix,
    strip_type_params,
    unknown_type,
)

_NUMBER_TYPES = frozenset({
    "tinyint", "smallint", "int", "bigint",
    "float", "real",
    "decimal", "numeric", "money", "smallmoney",
})

_STRING_TYPES = frozenset({
    "char", "varchar", "nchar", "nvarchar", "text", "ntext",
    "uniqueidentifier", "xml",
})

_DATE_TYPES = frozenset({
    "date", "datetime", "datetime2", "smalldatetime", "time", "datetimeoffset",
})

# Known types with no useful TypeScript shape; not reported as unknown
_OPAQUE_TYPES = frozenset({"sql_variant", "tvp"})


def map_mssql_type(
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
            map_mssql_type,
            data_type,
            is_nullable=is_nullable,
            unknown_types=unknown_types,
            used_helpers=used_helpers,
        )

    name = strip_type_params(data_type).lower()

    if name in _NUMBER_TYPES:
        base: TypeNode = NUMBER
    elif name in _STRING_TYPES:
        base = STRING
    elif name in ("binary", "varbinary", "image"):
        base = BUFFER
    elif name == "bit":
        base = BOOLEAN
    elif name in _DATE_TYPES:
        base = date_column()
    elif name in _OPAQUE_TYPES:
        base = UNKNOWN
    else:
        base = unknown_type(data_type, unknown_types)

    return finish(base, is_nullable)
