"""Table selection by glob patterns against ``schema.table``."""
from __future__ import annotations

from typing import Sequence

import pathspec

from kysely_typegen.introspect.models import Table


def _compile(patterns: Sequence[str] | None) -> pathspec.PathSpec | None:
    if not patterns:
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def filter_tables(
    tables: Sequence[Table],
    include_pattern: Sequence[str] | None = None,
    exclude_pattern: Sequence[str] | None = None,
) -> list[Table]:
    """Drop partitions, then excluded tables, then tables not included.

    Args:
        tables: Tables in input order
        include_pattern: Globs a table must match to be kept (any of them)
        exclude_pattern: Globs that remove a table; checked before includes

    Returns:
        Surviving tables, order preserved
    """
    include = _compile(include_pattern)
    exclude = _compile(exclude_pattern)

    selected = []
    for table in tables:
        if table.is_partition:
            continue
        name = table.qualified_name
        if exclude is not None and exclude.match_file(name):
            continue
        if include is not None and not include.match_file(name):
            continue
        selected.append(table)
    return selected
