"""PostgreSQL CHECK constraint recognition.

Works on the text returned by ``pg_get_constraintdef``. Two shapes are
recognized::

    CHECK ((status = ANY (ARRAY['a'::text, 'b'::text])))
    CHECK (((level = 'low'::text) OR (level = 'high'::text)))

Domain constraints use ``VALUE`` in place of the column name.
"""
from __future__ import annotations

import re

from kysely_typegen.constraints.values import (
    CheckClause,
    parse_or_chain,
    parse_value_list,
)
from kysely_typegen.introspect.models import ParsedConstraint

_IDENT = r'"(?:[^"]|"")*"|[A-Za-z_][\w$]*'
_CAST = r'(?:::[\w\s]+?)?'

ANY_ARRAY_PATTERN = re.compile(
    r'^\s*(?:CHECK\s*\(\s*)?\(*\s*(?P<column>' + _IDENT + r')\s*\)?' + _CAST
    + r'\s*=\s*ANY\s*\(\s*\(?\s*ARRAY\[(?P<items>.*?)\]\s*\)?(?:::[\w\s\[\]]+?)?\s*\)\s*\)*\s*$',
    re.IGNORECASE | re.DOTALL,
)

OR_TERM_PATTERN = re.compile(
    r'^\(*\s*(?P<column>' + _IDENT + r')\s*\)?' + _CAST
    + r"\s*=\s*(?P<value>'(?:[^']|'')*'|\(?\s*-?\d+\s*\)?)" + _CAST + r'\s*\)*$',
    re.IGNORECASE | re.DOTALL,
)

_CHECK_PREFIX = re.compile(r'^\s*CHECK\s*', re.IGNORECASE)

# pg_get_constraintdef renders negative integers quoted, e.g. '-1'::integer
QUOTED_INTEGER_PATTERN = re.compile(
    r"'(?P<value>-?\d+)'::(?:integer|smallint|bigint|int[248]?)\b", re.IGNORECASE
)


def _unquote(identifier: str) -> str:
    if identifier.startswith('"') and identifier.endswith('"'):
        return identifier[1:-1].replace('""', '"')
    return identifier


def postgres_check_clause(definition: str) -> CheckClause | None:
    """Recognize a PostgreSQL CHECK definition and the column it applies to.

    Args:
        definition: Constraint text as produced by ``pg_get_constraintdef``

    Returns:
        CheckClause or None if the shape is not an enumerated value list
    """
    if not definition:
        return None

    definition = QUOTED_INTEGER_PATTERN.sub(r"\g<value>", definition)
    match = ANY_ARRAY_PATTERN.match(definition)
    if match:
        items = match.group('items')
        if not items.strip():
            return None
        constraint = parse_value_list(items)
        if constraint is None:
            return None
        return CheckClause(column_name=_unquote(match.group('column')), constraint=constraint)

    body = _CHECK_PREFIX.sub('', definition, count=1)
    clause = parse_or_chain(body, OR_TERM_PATTERN)
    if clause is None:
        return None
    clause.column_name = _unquote(clause.column_name)
    return clause


def parse_postgres_check_constraint(definition: str) -> ParsedConstraint | None:
    clause = postgres_check_clause(definition)
    return clause.constraint if clause else None
