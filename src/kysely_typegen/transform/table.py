"""Table and column declarations."""
from __future__ import annotations

from typing import Sequence

from kysely_typegen.ast.nodes import (
    GenericType,
    InterfaceDeclaration,
    LiteralType,
    PropertySignature,
    ReferenceType,
    TypeNode,
    UnionType,
    nullable,
    primitive,
)
from kysely_typegen.dialects.common import split_array_suffix
from kysely_typegen.introspect.models import (
    BooleanConstraint,
    Column,
    Enum,
    ParsedConstraint,
    Table,
)
from kysely_typegen.transform.types import TransformContext
from kysely_typegen.transform.utils import table_type_name, to_camel_case


def constraint_type(constraint: ParsedConstraint) -> TypeNode:
    """Literal union for a recognized CHECK constraint; 0/1 constraints become boolean."""
    if isinstance(constraint, BooleanConstraint):
        return primitive("boolean")
    if not constraint.values:
        return primitive("never")
    return UnionType([LiteralType(value) for value in constraint.values])


def find_column_enum(column: Column, ctx: TransformContext) -> tuple[Enum | None, bool]:
    """Enum referenced by a column's type, and whether the column is an array of it."""
    data_type, is_array = split_array_suffix(column.data_type, column.is_array)
    schema = column.data_type_schema or ctx.default_schema

    enum = ctx.resolver.find(data_type, schema)
    if enum is None and is_array and data_type.startswith('_'):
        enum = ctx.resolver.find(data_type[1:], schema)
    return enum, is_array


def column_base_type(column: Column, ctx: TransformContext) -> TypeNode:
    """Column type without nullability.

    A recognized CHECK constraint wins, then a reference to a known enum,
    then the dialect's type mapper.
    """
    if column.check_constraint is not None:
        return constraint_type(column.check_constraint)

    enum, is_array = find_column_enum(column, ctx)
    if enum is not None:
        reference = ReferenceType(ctx.resolver.get_name(enum))
        return GenericType("ArrayType", [reference]) if is_array else reference

    return ctx.map_type(
        column.data_type,
        is_nullable=False,
        is_array=column.is_array,
        unknown_types=ctx.unknown_types,
        used_helpers=ctx.used_helpers,
    )


def property_name(name: str, ctx: TransformContext) -> str:
    return to_camel_case(name) if ctx.options.camel_case else name


def transform_column(column: Column, ctx: TransformContext) -> PropertySignature:
    type_node = column_base_type(column, ctx)

    if column.is_nullable:
        type_node = nullable(type_node)

    if column.is_auto_increment or column.has_default_value:
        type_node = GenericType("Generated", [type_node])

    return PropertySignature(
        name=property_name(column.name, ctx),
        type=type_node,
        comment=column.comment,
    )


def transform_table(table: Table, ctx: TransformContext) -> InterfaceDeclaration:
    return InterfaceDeclaration(
        name=table_type_name(table.name),
        properties=[transform_column(column, ctx) for column in table.columns],
        comment=table.comment,
    )


def create_db_interface(tables: Sequence[Table], ctx: TransformContext) -> InterfaceDeclaration:
    """Root ``DB`` interface mapping each table name to its row interface."""
    return InterfaceDeclaration(
        name="DB",
        properties=[
            PropertySignature(
                name=property_name(table.name, ctx),
                type=ReferenceType(table_type_name(table.name)),
            )
            for table in tables
        ],
    )
