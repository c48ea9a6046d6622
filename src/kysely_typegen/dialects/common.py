"""Building blocks shared by the per-dialect type mappers."""
from __future__ import annotations

import re
from typing import Callable, Optional

from kysely_typegen.ast.nodes import (
    ArrayType,
    GenericType,
    PrimitiveType,
    ReferenceType,
    TypeNode,
    UNKNOWN,
    column_type,
    nullable,
    primitive,
    union,
)

TypeMapper = Callable[..., TypeNode]

SIMPLE_ARRAY_ELEMENTS = frozenset({"boolean", "number", "string"})

_TYPE_PARAMS = re.compile(r'\s*\(.*\)\s*$', re.DOTALL)

STRING = primitive("string")
NUMBER = primitive("number")
BOOLEAN = primitive("boolean")
DATE = ReferenceType("Date")
BUFFER = ReferenceType("Buffer")
JSON_VALUE = ReferenceType("JsonValue")


def date_column() -> GenericType:
    """ColumnType<Date, Date | string, Date | string>."""
    return column_type(DATE, union(DATE, STRING), union(DATE, STRING))


def strip_type_params(data_type: str) -> str:
    """Drop a trailing parameter list, e.g. ``varchar(255)`` -> ``varchar``."""
    return _TYPE_PARAMS.sub('', data_type).strip()


def finish(base: TypeNode, is_nullable: bool) -> TypeNode:
    return nullable(base) if is_nullable else base


def unknown_type(data_type: str, unknown_types: Optional[set[str]]) -> TypeNode:
    """Fallback for unrecognized names; records the raw name when asked to."""
    if unknown_types is not None:
        unknown_types.add(data_type)
    return UNKNOWN


def map_array(
    mapper: TypeMapper,
    element_type_name: str,
    *,
    is_nullable: bool,
    unknown_types: Optional[set[str]] = None,
    used_helpers: Optional[set[str]] = None,
) -> TypeNode:
    """Map an array column through the dialect's element mapper.

    Simple primitive elements give ``T[]``; anything else goes through the
    ``ArrayType<T>`` helper so ColumnType elements keep their insert/update
    shapes. Null is applied once, outside the array.
    """
    element = mapper(
        element_type_name,
        is_nullable=False,
        is_array=False,
        unknown_types=unknown_types,
        used_helpers=used_helpers,
    )

    if isinstance(element, PrimitiveType) and element.value in SIMPLE_ARRAY_ELEMENTS:
        array: TypeNode = ArrayType(element)
    else:
        array = GenericType("ArrayType", [element])

    return finish(array, is_nullable)


def split_array_suffix(data_type: str, is_array: bool) -> tuple[str, bool]:
    """Normalize ``text[]`` to (``text``, True)."""
    if data_type.endswith('[]'):
        return data_type[:-2], True
    return data_type, is_array
