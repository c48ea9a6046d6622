"""Build the Zod schema program from database metadata.

Per table three object schemas are emitted, followed by their inferred types:

- ``userSchema`` / ``User``: rows as selected
- ``newUserSchema`` / ``NewUser``: inserts; generated and defaulted columns optional
- ``userUpdateSchema`` / ``UserUpdate``: updates; every column optional
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from kysely_typegen.dialects import get_dialect
from kysely_typegen.introspect.models import BooleanConstraint, Column, DatabaseMetadata, Enum, Table
from kysely_typegen.transform import HELPER_NAMES, reserved_names
from kysely_typegen.transform.filter import filter_tables
from kysely_typegen.transform.table import column_base_type, property_name
from kysely_typegen.transform.types import (
    TransformContext,
    TransformOptions,
    TransformWarning,
    create_context,
)
from kysely_typegen.transform.utils import table_type_name
from kysely_typegen.zod.lower import Mode, ZodLowering, enum_schema_name, uncapitalize
from kysely_typegen.zod.nodes import (
    ZodDeclaration,
    ZodEnum,
    ZodImport,
    ZodInferExport,
    ZodLiteral,
    ZodObject,
    ZodPrimitive,
    ZodProgram,
    ZodProperty,
    ZodSchema,
    ZodSchemaDeclaration,
    ZodTransform,
    ZodUnion,
    with_modifiers,
)

logger = logging.getLogger(__name__)

MODES: tuple[Mode, ...] = ("select", "insert", "update")

BOOLEAN_TRANSFORM = "v => v === 1"


@dataclass
class ZodTransformResult:
    program: ZodProgram
    warnings: list[TransformWarning] = field(default_factory=list)


def schema_name(base_name: str, mode: Mode) -> str:
    if mode == "insert":
        return f"new{base_name}Schema"
    if mode == "update":
        return f"{uncapitalize(base_name)}UpdateSchema"
    return f"{uncapitalize(base_name)}Schema"


def type_name(base_name: str, mode: Mode) -> str:
    if mode == "insert":
        return f"New{base_name}"
    if mode == "update":
        return f"{base_name}Update"
    return base_name


def zod_reserved_names(tables: list[Table], reserved: set[str]) -> set[str]:
    """Add the insert and update names every table mints to the reserved set.

    An enum schema is named after its type name the same way table schemas
    are, so reserving the type names also keeps the schema names apart.
    """
    names = set(reserved)
    for table in tables:
        base_name = table_type_name(table.name)
        names.update(type_name(base_name, mode) for mode in MODES)
    return names


def boolean_schema(no_boolean_coerce: bool) -> ZodSchema:
    """0/1 CHECK columns: accept the literals, optionally mapping them to a boolean."""
    literals = ZodUnion([ZodLiteral(0), ZodLiteral(1)])
    if no_boolean_coerce:
        return literals
    return ZodTransform(literals, BOOLEAN_TRANSFORM)


def transform_enum_to_zod(enum: Enum, ctx: TransformContext) -> ZodSchemaDeclaration:
    return ZodSchemaDeclaration(
        name=enum_schema_name(ctx.resolver.get_name(enum)),
        schema=ZodEnum(list(enum.values)) if enum.values else ZodPrimitive("never"),
    )


def transform_column_to_zod(
    column: Column,
    mode: Mode,
    ctx: TransformContext,
    lowering: ZodLowering,
) -> ZodProperty:
    is_optional = mode == "update" or (
        mode == "insert" and (column.is_auto_increment or column.has_default_value)
    )

    if isinstance(column.check_constraint, BooleanConstraint):
        schema = boolean_schema(ctx.options.no_boolean_coerce)
    else:
        schema = lowering.lower(column_base_type(column, ctx), mode)

    return ZodProperty(
        name=property_name(column.name, ctx),
        schema=with_modifiers(schema, column.is_nullable, is_optional),
    )


def transform_table_to_zod(
    table: Table,
    mode: Mode,
    ctx: TransformContext,
    lowering: ZodLowering,
) -> ZodSchemaDeclaration:
    return ZodSchemaDeclaration(
        name=schema_name(table_type_name(table.name), mode),
        schema=ZodObject([transform_column_to_zod(c, mode, ctx, lowering) for c in table.columns]),
    )


def transform_database_to_zod(
    metadata: DatabaseMetadata,
    options: Optional[TransformOptions] = None,
) -> ZodTransformResult:
    """Transform metadata into a Zod schema program.

    Args:
        metadata: Introspected (or loaded) database metadata
        options: Same options as the Kysely output; ``no_boolean_coerce``
                 only applies here

    Returns:
        ZodTransformResult with the program and sorted unknown-type warnings
    """
    options = options or TransformOptions()
    tables = filter_tables(metadata.tables, options.include_pattern, options.exclude_pattern)
    reserved = zod_reserved_names(tables, reserved_names(tables, get_dialect(options.dialect)))
    ctx = create_context(metadata, options, reserved)
    lowering = ZodLowering(
        enum_names={ctx.resolver.get_name(e) for e in ctx.resolver.enums},
        helper_declarations=ctx.dialect.helper_declarations(set(HELPER_NAMES)),
    )
    logger.debug(f"Building Zod schemas for {len(tables)} tables")

    declarations: list[ZodDeclaration] = [ZodImport()]
    declarations.extend(transform_enum_to_zod(enum, ctx) for enum in ctx.resolver.enums)

    for table in tables:
        base_name = table_type_name(table.name)
        declarations.extend(transform_table_to_zod(table, mode, ctx, lowering) for mode in MODES)
        declarations.extend(
            ZodInferExport(type_name=type_name(base_name, mode), schema_name=schema_name(base_name, mode))
            for mode in MODES
        )

    return ZodTransformResult(program=ZodProgram(declarations), warnings=ctx.warnings())
