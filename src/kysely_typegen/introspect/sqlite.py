"""SQLite introspection.

SQLite has a single ``main`` schema, no enum types and no constraint
catalog; CHECK constraints are recovered from each table's stored DDL.
"""
from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from typing import Optional

from kysely_typegen.constraints import parse_sqlite_table_constraints
from kysely_typegen.introspect.models import Column, DatabaseMetadata, ParsedConstraint, Table

logger = logging.getLogger(__name__)

SQLITE_SCHEMA = "main"

_URL_PREFIXES = ("sqlite:///", "sqlite://")


def sqlite_path(url: str) -> str:
    """Turn ``sqlite:///path.db`` style URLs into a path sqlite3 accepts."""
    for prefix in _URL_PREFIXES:
        if url.startswith(prefix):
            return url[len(prefix):] or ":memory:"
    return url


def normalize_data_type(declared_type: str) -> str:
    """Lowercase the declared type; an untyped column has blob affinity."""
    lower = declared_type.strip().lower()
    return lower or "blob"


def introspect_sqlite(url: str) -> DatabaseMetadata:
    """Introspect a SQLite database file.

    Args:
        url: File path, ``file:`` URI, ``:memory:`` or ``sqlite:///`` URL

    Returns:
        DatabaseMetadata with tables first, then views, each sorted by name
    """
    path = sqlite_path(url)
    with closing(sqlite3.connect(path, uri=path.startswith("file:"))) as conn:
        conn.row_factory = sqlite3.Row
        tables = _extract_tables(conn)
        views = _extract_views(conn)

    logger.info(f"Introspected {len(tables)} tables and {len(views)} views from {path}")
    return DatabaseMetadata(tables=[*tables, *views], enums=[])


def _extract_tables(conn: sqlite3.Connection) -> list[Table]:
    rows = conn.execute(
        """
        SELECT name, sql FROM sqlite_master
        WHERE type = 'table'
            AND name NOT LIKE 'sqlite_%'
        ORDER BY name
        """
    ).fetchall()

    tables = []
    for row in rows:
        constraints = parse_sqlite_table_constraints(row["sql"] or "")
        tables.append(Table(
            schema=SQLITE_SCHEMA,
            name=row["name"],
            columns=_extract_columns(conn, row["name"], is_view=False, constraints=constraints),
        ))
    return tables


def _extract_views(conn: sqlite3.Connection) -> list[Table]:
    rows = conn.execute(
        "SELECT name FROM sqlite_master WHERE type = 'view' ORDER BY name"
    ).fetchall()

    return [
        Table(
            schema=SQLITE_SCHEMA,
            name=row["name"],
            columns=_extract_columns(conn, row["name"], is_view=True),
            is_view=True,
        )
        for row in rows
    ]


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _extract_columns(
    conn: sqlite3.Connection,
    table_name: str,
    is_view: bool,
    constraints: Optional[dict[str, ParsedConstraint]] = None,
) -> list[Column]:
    constraints = constraints or {}
    rows = conn.execute(f"PRAGMA table_info({_quote_identifier(table_name)})").fetchall()

    columns = []
    for row in rows:
        declared_type = row["type"] or ""
        # INTEGER PRIMARY KEY aliases the rowid
        is_auto_increment = not is_view and row["pk"] == 1 and declared_type.upper() == "INTEGER"
        columns.append(Column(
            name=row["name"],
            data_type=normalize_data_type(declared_type),
            data_type_schema=SQLITE_SCHEMA,
            is_nullable=row["notnull"] == 0 and row["pk"] == 0,
            is_auto_increment=is_auto_increment,
            has_default_value=row["dflt_value"] is not None or is_auto_increment,
            check_constraint=constraints.get(row["name"]),
        ))
    return columns
