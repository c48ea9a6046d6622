"""Build the Kysely declaration program from database metadata.

Output layout:
- ``ColumnType`` import and the shared helper types (Generated, ArrayType, Json*)
- dialect helper types that columns actually refer to
- one union alias per enum
- one interface per selected table
- the root ``DB`` interface
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from kysely_typegen.ast.nodes import (
    ArrayType,
    ConditionalType,
    Declaration,
    GenericType,
    ImportDeclaration,
    InferType,
    Program,
    RawType,
    ReferenceType,
    TypeAliasDeclaration,
    UnionType,
    column_type,
    primitive,
)
from kysely_typegen.dialects import Dialect, get_dialect
from kysely_typegen.introspect.models import DatabaseMetadata, Table
from kysely_typegen.transform.enum import EnumNameResolver, transform_enum
from kysely_typegen.transform.filter import filter_tables
from kysely_typegen.transform.table import (
    column_base_type,
    create_db_interface,
    transform_column,
    transform_table,
)
from kysely_typegen.transform.types import (
    TransformContext,
    TransformOptions,
    TransformResult,
    TransformWarning,
    create_context,
)
from kysely_typegen.transform.utils import pascal_case, singularize, table_type_name, to_camel_case

logger = logging.getLogger(__name__)

PREAMBLE_NAMES = frozenset({
    "ColumnType", "Generated", "ArrayType", "ArrayTypeImpl",
    "JsonPrimitive", "JsonArray", "JsonObject", "JsonValue",
    "DB", "Date", "Buffer",
})

# Every helper name any dialect declares
HELPER_NAMES = (
    "Timestamp", "Int8", "Numeric", "Interval", "Point", "Circle",
    "LineString", "Polygon", "Geometry",
)


def build_preamble() -> list[Declaration]:
    """Import and helper types every generated file starts with."""
    t = ReferenceType("T")
    s, i, u = ReferenceType("S"), ReferenceType("I"), ReferenceType("U")
    undefined = primitive("undefined")
    infer_columns = column_type(InferType("S"), InferType("I"), InferType("U"))

    return [
        ImportDeclaration(["ColumnType"], "kysely", type_only=True),
        TypeAliasDeclaration(
            "Generated",
            ConditionalType(
                check_type=t,
                extends_type=infer_columns,
                true_type=column_type(s, UnionType([i, undefined]), u),
                false_type=column_type(t, UnionType([t, undefined]), t),
            ),
            type_parameters=["T"],
        ),
        TypeAliasDeclaration(
            "ArrayType",
            ConditionalType(
                check_type=GenericType("ArrayTypeImpl", [t]),
                extends_type=GenericType("Array", [InferType("U")]),
                true_type=ArrayType(u),
                false_type=GenericType("ArrayTypeImpl", [t]),
            ),
            type_parameters=["T"],
        ),
        TypeAliasDeclaration(
            "ArrayTypeImpl",
            ConditionalType(
                check_type=t,
                extends_type=infer_columns,
                true_type=column_type(ArrayType(s), ArrayType(i), ArrayType(u)),
                false_type=ArrayType(t),
            ),
            type_parameters=["T"],
        ),
        TypeAliasDeclaration(
            "JsonPrimitive",
            UnionType([primitive("string"), primitive("number"), primitive("boolean"), primitive("null")]),
        ),
        TypeAliasDeclaration("JsonArray", ArrayType(ReferenceType("JsonValue"))),
        TypeAliasDeclaration("JsonObject", RawType("{ [key: string]: JsonValue }")),
        TypeAliasDeclaration(
            "JsonValue",
            UnionType([ReferenceType("JsonPrimitive"), ReferenceType("JsonObject"), ReferenceType("JsonArray")]),
        ),
    ]


def reserved_names(tables: Sequence[Table], dialect: Dialect) -> set[str]:
    """Declaration names enums must not take: preamble, helpers, table interfaces."""
    names = set(PREAMBLE_NAMES)
    names.update(d.name for d in dialect.helper_declarations(set(HELPER_NAMES)))
    names.update(table_type_name(t.name) for t in tables)
    return names


def transform_database(
    metadata: DatabaseMetadata,
    options: Optional[TransformOptions] = None,
) -> TransformResult:
    """Transform metadata into a Kysely declaration program.

    Args:
        metadata: Introspected (or loaded) database metadata
        options: Naming, filtering and dialect options

    Returns:
        TransformResult with the program and sorted unknown-type warnings
    """
    options = options or TransformOptions()
    tables = filter_tables(metadata.tables, options.include_pattern, options.exclude_pattern)
    ctx = create_context(metadata, options, reserved_names(tables, get_dialect(options.dialect)))
    logger.debug(f"Transforming {len(tables)} of {len(metadata.tables)} tables ({options.dialect})")

    # Tables first: helper usage is only known once every column is mapped
    table_declarations = [transform_table(table, ctx) for table in tables]
    db_interface = create_db_interface(tables, ctx)

    declarations: list[Declaration] = build_preamble()
    declarations.extend(ctx.dialect.helper_declarations(ctx.used_helpers))
    declarations.extend(transform_enum(enum, ctx.resolver) for enum in ctx.resolver.enums)
    declarations.extend(table_declarations)
    declarations.append(db_interface)

    return TransformResult(program=Program(declarations), warnings=ctx.warnings())


__all__ = [
    "EnumNameResolver",
    "TransformContext",
    "TransformOptions",
    "TransformResult",
    "TransformWarning",
    "build_preamble",
    "column_base_type",
    "create_context",
    "create_db_interface",
    "filter_tables",
    "pascal_case",
    "singularize",
    "to_camel_case",
    "transform_column",
    "transform_database",
    "transform_enum",
    "transform_table",
]
