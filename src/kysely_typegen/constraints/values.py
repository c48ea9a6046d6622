"""Value-list extraction shared by every dialect's CHECK constraint parser.

Each dialect front end isolates the literal list of an ``IN (...)`` /
``ANY (ARRAY[...])`` clause (or the literals of an OR-chain) and hands it to
``parse_value_list``, which classifies it as numbers, booleans or strings.
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from kysely_typegen.introspect.models import (
    BooleanConstraint,
    NumberConstraint,
    ParsedConstraint,
    StringConstraint,
)

NUMERIC_LIST_PATTERN = re.compile(r'^\s*-?\d+(\s*,\s*-?\d+)*\s*$')

# Cast following a literal, e.g. 'a'::text or 'a'::character varying
_CAST_PATTERN = re.compile(r'\s*::\s*[A-Za-z_][\w ]*(?:\[\])*')


@dataclass
class CheckClause:
    """A recognized constraint together with the column it constrains."""
    column_name: str
    constraint: ParsedConstraint


def classify_numbers(values: list[int]) -> NumberConstraint | BooleanConstraint:
    """Collapse exactly {0, 1} (any order) to a boolean constraint."""
    if sorted(values) == [0, 1]:
        return BooleanConstraint()
    return NumberConstraint(values=values)


def parse_numeric_list(text: str) -> list[int] | None:
    if not NUMERIC_LIST_PATTERN.match(text):
        return None
    return [int(v) for v in text.split(',')]


def scan_string_literals(text: str) -> list[str] | None:
    """Read a comma separated list of single-quoted literals.

    A doubled quote inside a literal is unescaped to one quote. Casts after a
    literal are skipped. Returns None if anything other than literals, commas,
    casts and whitespace is found.
    """
    values: list[str] = []
    expect_value = True
    i = 0
    n = len(text)

    while i < n:
        char = text[i]

        if char.isspace():
            i += 1
            continue

        if char == "'":
            if not expect_value:
                return None
            i += 1
            current: list[str] = []
            while True:
                if i >= n:
                    return None  # unterminated literal
                if text[i] == "'":
                    if i + 1 < n and text[i + 1] == "'":
                        current.append("'")
                        i += 2
                        continue
                    i += 1
                    break
                current.append(text[i])
                i += 1
            values.append(''.join(current))
            expect_value = False

            cast = _CAST_PATTERN.match(text, i)
            if cast:
                i = cast.end()
            continue

        if char == ',' and not expect_value:
            expect_value = True
            i += 1
            continue

        return None

    if not values or expect_value:
        return None
    return values


def parse_value_list(text: str) -> ParsedConstraint | None:
    """Classify the literal list of an IN / ANY clause.

    Args:
        text: List contents without the surrounding brackets,
              e.g. ``'a'::text, 'b'::text`` or ``0, 1``

    Returns:
        StringConstraint, NumberConstraint, BooleanConstraint or None
    """
    if not text or not text.strip():
        return None

    numbers = parse_numeric_list(text)
    if numbers is not None:
        return classify_numbers(numbers)

    strings = scan_string_literals(text)
    if strings is not None:
        return StringConstraint(values=strings)

    return None


def strip_outer_parens(text: str) -> str:
    """Remove balanced parentheses wrapping the whole expression."""
    text = text.strip()
    while text.startswith('(') and _closing_paren(text, 0) == len(text) - 1:
        text = text[1:-1].strip()
    return text


def _closing_paren(text: str, start: int) -> int:
    """Index of the parenthesis closing the one at ``start``, or -1."""
    depth = 0
    in_quote = False
    for i in range(start, len(text)):
        char = text[i]
        if char == "'":
            in_quote = not in_quote
        elif in_quote:
            continue
        elif char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_top_level_or(text: str) -> list[str]:
    """Split on OR keywords outside of parentheses and quotes."""
    parts: list[str] = []
    depth = 0
    in_quote = False
    start = 0
    i = 0
    upper = text.upper()

    while i < len(text):
        char = text[i]
        if char == "'":
            in_quote = not in_quote
        elif not in_quote:
            if char == '(':
                depth += 1
            elif char == ')':
                depth -= 1
            elif (
                depth == 0
                and upper.startswith('OR', i)
                and (i == 0 or not (text[i - 1].isalnum() or text[i - 1] == '_'))
                and (i + 2 >= len(text) or not (text[i + 2].isalnum() or text[i + 2] == '_'))
            ):
                parts.append(text[start:i])
                start = i + 2
                i += 2
                continue
        i += 1

    parts.append(text[start:])
    return [p.strip() for p in parts]


def parse_or_chain(body: str, term_pattern: re.Pattern[str]) -> CheckClause | None:
    """Parse ``(col = 'a') OR (col = 'b') ...`` into a constraint.

    ``term_pattern`` must fully match one comparison and expose ``column``
    and ``value`` groups. Every term must compare the same column and there
    must be at least two terms.
    """
    terms = split_top_level_or(strip_outer_parens(body))
    if len(terms) < 2:
        return None

    column: str | None = None
    literals: list[str] = []
    for term in terms:
        match = term_pattern.match(term)
        if not match:
            return None
        if column is None:
            column = match.group('column')
        elif match.group('column') != column:
            return None
        literals.append(match.group('value').strip().strip('()').strip())

    constraint = parse_value_list(', '.join(literals))
    if constraint is None or column is None:
        return None
    return CheckClause(column_name=column, constraint=constraint)
