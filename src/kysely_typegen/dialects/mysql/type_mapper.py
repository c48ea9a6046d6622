"""Map MySQL column types to TypeScript type nodes."""
from __future__ import annotations

import re
from typing import Optional

from kysely_typegen.ast.nodes import LiteralType, ReferenceType, TypeNode, UnionType, column_type, union
from kysely_typegen.constraints.values import scan_string_literals
from kysely_typegen.dialects.common import (
    BOOLEAN,
    BUFFER,
    JSON_VALUE,
    NUMBER,
    STRING,
    date_column,
    finish,
    map_array,
    split_array_suffix,
    strip_type_params,
    unknown_type,
)

INLINE_ENUM_PATTERN = re.compile(r'^\s*enum\s*\((?P<items>.*)\)\s*$', re.IGNORECASE | re.DOTALL)

_MODIFIERS = re.compile(r'\s+(unsigned|signed|zerofill)\b')

TINYINT_BOOLEAN_PATTERN = re.compile(r'^\s*tinyint\s*\(\s*1\s*\)\s*$')

_NUMBER_TYPES = frozenset({
    "tinyint", "smallint", "mediumint", "int", "integer", "bigint", "year",
    "float", "double", "double precision", "real",
})

_STRING_TYPES = frozenset({
    "char", "varchar", "tinytext", "text", "mediumtext", "longtext", "set", "time",
})

_BINARY_TYPES = frozenset({
    "bit", "binary", "varbinary", "tinyblob", "blob", "mediumblob", "longblob",
})

_GEOMETRY_TYPES = {
    "geometry": "Geometry",
    "point": "Point",
    "linestring": "LineString",
    "polygon": "Polygon",
}


def parse_inline_enum(column_type_text: str) -> list[str] | None:
    """Values of an ``enum('a','b')`` column type, or None if it is not one."""
    match = INLINE_ENUM_PATTERN.match(column_type_text)
    if not match:
        return None
    return scan_string_literals(match.group('items'))


def map_mysql_type(
    data_type: str,
    *,
    is_nullable: bool,
    is_array: bool = False,
    unknown_types: Optional[set[str]] = None,
    used_helpers: Optional[set[str]] = None,
) -> TypeNode:
    """Map a MySQL DATA_TYPE (or COLUMN_TYPE for inline enums)."""
    data_type, is_array = split_array_suffix(data_type, is_array)
    if is_array:
        return map_array(
            map_mysql_type,
            data_type,
            is_nullable=is_nullable,
            unknown_types=unknown_types,
            used_helpers=used_helpers,
        )

    enum_values = parse_inline_enum(data_type)
    if enum_values is not None:
        base: TypeNode = UnionType([LiteralType(v) for v in enum_values])
        return finish(base, is_nullable)

    # sign modifiers, e.g. "int(10) unsigned"
    name = _MODIFIERS.sub('', data_type.lower())
    # tinyint(1) is MySQL's boolean
    is_tinyint_bool = TINYINT_BOOLEAN_PATTERN.match(name) is not None
    name = strip_type_params(name)

    if is_tinyint_bool:
        base = BOOLEAN
    elif name in _NUMBER_TYPES:
        base = NUMBER
    elif name in ("decimal", "numeric"):
        base = column_type(STRING, union(NUMBER, STRING), union(NUMBER, STRING))
    elif name in _STRING_TYPES:
        base = STRING
    elif name in ("boolean", "bool"):
        base = BOOLEAN
    elif name in _BINARY_TYPES:
        base = BUFFER
    elif name in ("date", "datetime", "timestamp"):
        base = date_column()
    elif name == "json":
        base = JSON_VALUE
    elif name in _GEOMETRY_TYPES:
        helper = _GEOMETRY_TYPES[name]
        if used_helpers is not None:
            used_helpers.add(helper)
        base = ReferenceType(helper)
    else:
        base = unknown_type(data_type, unknown_types)

    return finish(base, is_nullable)
