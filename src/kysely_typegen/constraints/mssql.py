"""SQL Server CHECK constraint recognition.

``sys.check_constraints.definition`` rewrites IN lists to OR chains::

    ([status]='inactive' OR [status]='active')
    ([priority]=(3) OR [priority]=(2) OR [priority]=(1))
"""
from __future__ import annotations

import re

from kysely_typegen.constraints.values import (
    CheckClause,
    parse_or_chain,
    parse_value_list,
)
from kysely_typegen.introspect.models import ParsedConstraint

IN_LIST_PATTERN = re.compile(
    r'^\s*\(*\s*\[?(?P<column>[^\]\s\[()]+)\]?\s+IN\s*\((?P<items>.*?)\)\s*\)*\s*$',
    re.IGNORECASE | re.DOTALL,
)

OR_TERM_PATTERN = re.compile(
    r"^\(*\s*\[(?P<column>[^\]]+)\]\s*=\s*N?(?P<value>'(?:[^']|'')*'|\(\s*-?\d+\s*\)|-?\d+)\s*\)*$",
    re.DOTALL,
)

# Unicode string prefix, N'abc'
_NATIONAL_PREFIX = re.compile(r"(?<![\w'])N(?=')")


def mssql_check_clause(definition: str) -> CheckClause | None:
    if not definition:
        return None

    match = IN_LIST_PATTERN.match(definition)
    if match:
        items = _NATIONAL_PREFIX.sub('', match.group('items'))
        constraint = parse_value_list(items)
        if constraint is None:
            return None
        return CheckClause(column_name=match.group('column'), constraint=constraint)

    return parse_or_chain(definition, OR_TERM_PATTERN)


def parse_mssql_check_constraint(definition: str) -> ParsedConstraint | None:
    """Parse a SQL Server CHECK definition into a constraint, or None if unrecognized."""
    clause = mssql_check_clause(definition)
    return clause.constraint if clause else None
