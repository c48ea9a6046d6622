"""Attach raw CHECK constraint text to the columns it constrains.

Catalogs report constraints per table (or per domain), while the generator
reads them from ``Column.check_constraint``. Only the first recognized
constraint per column is kept; unrecognized definitions are ignored.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from kysely_typegen.constraints import (
    CheckClause,
    mssql_check_clause,
    mysql_check_clause,
    postgres_check_clause,
    sqlite_check_clause,
)
from kysely_typegen.introspect.models import (
    CheckConstraintDefinition,
    Column,
    DatabaseMetadata,
    DomainConstraintDefinition,
    ParsedConstraint,
    Table,
)

logger = logging.getLogger(__name__)

ColumnKey = tuple[str, str, str]
DomainKey = tuple[str, str]

CLAUSE_PARSERS: dict[str, Callable[[str], Optional[CheckClause]]] = {
    "postgres": postgres_check_clause,
    "mysql": mysql_check_clause,
    "sqlite": sqlite_check_clause,
    "mssql": mssql_check_clause,
}


def build_check_constraint_map(
    definitions: Iterable[CheckConstraintDefinition],
    dialect: str,
) -> dict[ColumnKey, ParsedConstraint]:
    """Parse table constraints into a (schema, table, column) lookup.

    Args:
        definitions: Raw constraint rows in catalog order
        dialect: Dialect whose constraint syntax the rows use

    Returns:
        Recognized constraints keyed by owning column
    """
    parse_clause = CLAUSE_PARSERS[dialect]
    constraints: dict[ColumnKey, ParsedConstraint] = {}

    for definition in definitions:
        clause = parse_clause(definition.definition)
        if clause is None:
            logger.debug(
                f"Skipping unrecognized CHECK on {definition.schema_name}.{definition.table}: "
                f"{definition.definition}"
            )
            continue

        column = definition.column or clause.column_name
        key = (definition.schema_name, definition.table, column)
        if key not in constraints:
            constraints[key] = clause.constraint

    return constraints


def build_domain_constraint_map(
    definitions: Iterable[DomainConstraintDefinition],
    dialect: str = "postgres",
) -> dict[DomainKey, ParsedConstraint]:
    parse_clause = CLAUSE_PARSERS[dialect]
    constraints: dict[DomainKey, ParsedConstraint] = {}

    for definition in definitions:
        key = (definition.schema_name, definition.domain)
        if key in constraints:
            continue
        clause = parse_clause(definition.definition)
        if clause is not None:
            constraints[key] = clause.constraint

    return constraints


def _column_constraint(
    table: Table,
    column: Column,
    checks: dict[ColumnKey, ParsedConstraint],
    domain_checks: dict[DomainKey, ParsedConstraint],
) -> Optional[ParsedConstraint]:
    if column.check_constraint is not None:
        return column.check_constraint

    direct = checks.get((table.schema_name, table.name, column.name))
    if direct is not None:
        return direct

    if column.domain_name:
        domain_schema = column.domain_schema or table.schema_name
        return domain_checks.get((domain_schema, column.domain_name))
    return None


def apply_check_constraints(
    tables: list[Table],
    checks: dict[ColumnKey, ParsedConstraint],
    domain_checks: Optional[dict[DomainKey, ParsedConstraint]] = None,
) -> list[Table]:
    """Return tables whose columns carry their recognized constraints.

    A constraint already present on a column wins, then a direct table
    constraint, then the constraint of the column's domain.
    """
    domain_checks = domain_checks or {}
    result = []

    for table in tables:
        columns = []
        for column in table.columns:
            constraint = _column_constraint(table, column, checks, domain_checks)
            if constraint is not column.check_constraint:
                column = column.model_copy(update={"check_constraint": constraint})
            columns.append(column)
        result.append(table.model_copy(update={"columns": columns}))

    return result


def attach_check_constraints(metadata: DatabaseMetadata, dialect: str) -> DatabaseMetadata:
    """Resolve the raw constraint lists of a metadata document onto its columns."""
    if not metadata.check_constraints and not metadata.domain_constraints:
        return metadata

    checks = build_check_constraint_map(metadata.check_constraints, dialect)
    domain_checks = build_domain_constraint_map(metadata.domain_constraints, dialect)
    logger.debug(f"Recognized {len(checks)} column and {len(domain_checks)} domain CHECK constraints")

    return metadata.model_copy(update={
        "tables": apply_check_constraints(metadata.tables, checks, domain_checks),
        "check_constraints": [],
        "domain_constraints": [],
    })
