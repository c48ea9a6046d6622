"""MySQL CHECK constraint recognition.

``INFORMATION_SCHEMA.CHECK_CONSTRAINTS.CHECK_CLAUSE`` renders an IN list as::

    (`status` in (_utf8mb4\\'active\\',_utf8mb4\\'inactive\\'))
"""
from __future__ import annotations

import re

from kysely_typegen.constraints.values import CheckClause, parse_value_list
from kysely_typegen.introspect.models import ParsedConstraint

IN_LIST_PATTERN = re.compile(
    r'^\s*\(*\s*(?P<column>`[^`]+`|[A-Za-z_][\w$]*)\s+IN\s*\((?P<items>.*?)\)\s*\)*\s*$',
    re.IGNORECASE | re.DOTALL,
)

# Charset introducer in front of a literal, e.g. _utf8mb4'a'
_INTRODUCER = re.compile(r"(?<![\w'])_[A-Za-z0-9]+(?=\\?')")


def normalize_mysql_literals(items: str) -> str:
    """Drop charset introducers and unescape backslash-escaped quotes."""
    return _INTRODUCER.sub('', items).replace("\\'", "'")


def mysql_check_clause(check_clause: str) -> CheckClause | None:
    if not check_clause:
        return None

    match = IN_LIST_PATTERN.match(check_clause)
    if not match:
        return None

    constraint = parse_value_list(normalize_mysql_literals(match.group('items')))
    if constraint is None:
        return None
    return CheckClause(column_name=match.group('column').strip('`'), constraint=constraint)


def parse_mysql_check_constraint(check_clause: str) -> ParsedConstraint | None:
    """Parse a MySQL CHECK clause into a constraint, or None if unrecognized."""
    clause = mysql_check_clause(check_clause)
    return clause.constraint if clause else None
