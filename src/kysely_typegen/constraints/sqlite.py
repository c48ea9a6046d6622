"""SQLite CHECK constraint recognition.

SQLite keeps no parsed constraint catalog, so constraints are pulled out of
the ``CREATE TABLE`` statement stored in ``sqlite_master``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from kysely_typegen.constraints.values import CheckClause, parse_value_list
from kysely_typegen.introspect.models import ParsedConstraint

DDL_CHECK_PATTERN = re.compile(
    r'CHECK\s*\(\s*["`\[]?(?P<column>\w+)["`\]]?\s+IN\s*\('
    r"(?P<items>(?:'(?:[^']|'')*'|[^')])+)\)\s*\)",
    re.IGNORECASE,
)

DEFINITION_PATTERN = re.compile(
    r'^\s*\(*\s*["`\[]?(?P<column>\w+)["`\]]?\s+IN\s*\((?P<items>.*?)\)\s*\)*\s*$',
    re.IGNORECASE | re.DOTALL,
)


@dataclass
class SqliteCheck:
    """A ``col IN (...)`` CHECK found in table DDL."""
    column_name: str
    definition: str


def extract_sqlite_check_constraints(ddl: str) -> list[SqliteCheck]:
    """Find every inline or table-level ``CHECK (col IN (...))`` in a DDL string."""
    if not ddl:
        return []

    checks = []
    for match in DDL_CHECK_PATTERN.finditer(ddl):
        column = match.group('column')
        checks.append(SqliteCheck(
            column_name=column,
            definition=f"{column} IN ({match.group('items')})",
        ))
    return checks


def sqlite_check_clause(definition: str) -> CheckClause | None:
    if not definition:
        return None

    match = DEFINITION_PATTERN.match(definition)
    if not match:
        return None

    constraint = parse_value_list(match.group('items'))
    if constraint is None:
        return None
    return CheckClause(column_name=match.group('column'), constraint=constraint)


def parse_sqlite_check_constraint(definition: str) -> ParsedConstraint | None:
    clause = sqlite_check_clause(definition)
    return clause.constraint if clause else None


def parse_sqlite_table_constraints(ddl: str) -> dict[str, ParsedConstraint]:
    """Map column name to its recognized constraint; the first one per column wins."""
    constraints: dict[str, ParsedConstraint] = {}
    for check in extract_sqlite_check_constraints(ddl):
        if check.column_name in constraints:
            continue
        constraint = parse_sqlite_check_constraint(check.definition)
        if constraint is not None:
            constraints[check.column_name] = constraint
    return constraints
