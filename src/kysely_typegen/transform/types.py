"""Options, results and per-run state of the transform step."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from kysely_typegen.ast.nodes import Program, TypeNode
from kysely_typegen.dialects import Dialect, get_dialect
from kysely_typegen.introspect.models import DatabaseMetadata
from kysely_typegen.transform.enum import EnumNameResolver

FALLBACK_SCHEMA = "public"


@dataclass
class TransformOptions:
    camel_case: bool = False
    include_pattern: list[str] = field(default_factory=list)
    exclude_pattern: list[str] = field(default_factory=list)
    dialect: str = "postgres"
    default_schema: Optional[str] = None
    no_boolean_coerce: bool = False
    # Overrides the dialect's type mapper
    map_type: Optional[Callable[..., TypeNode]] = None


@dataclass(frozen=True, order=True)
class TransformWarning:
    """A raw column type that had no mapping and was emitted as ``unknown``."""
    raw_type_name: str
    kind: str = "unknown_type"


@dataclass
class TransformResult:
    program: Program
    warnings: list[TransformWarning] = field(default_factory=list)


@dataclass
class TransformContext:
    """State shared by every column of one run.

    ``unknown_types`` and ``used_helpers`` are filled in while columns are
    mapped and read once all tables are done.
    """
    options: TransformOptions
    dialect: Dialect
    default_schema: str
    resolver: EnumNameResolver
    unknown_types: set[str] = field(default_factory=set)
    used_helpers: set[str] = field(default_factory=set)

    @property
    def map_type(self) -> Callable[..., TypeNode]:
        return self.options.map_type or self.dialect.map_type

    def warnings(self) -> list[TransformWarning]:
        return sorted(TransformWarning(name) for name in self.unknown_types)


def resolve_default_schema(metadata: DatabaseMetadata, options: TransformOptions, dialect: Dialect) -> str:
    """Explicit option, then the dialect's default, then the schema the data lives in."""
    if options.default_schema:
        return options.default_schema
    if dialect.default_schema:
        return dialect.default_schema
    if metadata.tables:
        return metadata.tables[0].schema_name
    if metadata.enums:
        return metadata.enums[0].schema_name
    return FALLBACK_SCHEMA


def create_context(
    metadata: DatabaseMetadata,
    options: TransformOptions,
    reserved_names: set[str] | None = None,
) -> TransformContext:
    dialect = get_dialect(options.dialect)
    default_schema = resolve_default_schema(metadata, options, dialect)
    resolver = EnumNameResolver(metadata.enums, default_schema, reserved=reserved_names or ())
    return TransformContext(
        options=options,
        dialect=dialect,
        default_schema=default_schema,
        resolver=resolver,
    )
