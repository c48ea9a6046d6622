"""Dialect registry and connection string detection.

Each dialect bundles its type mapper, its CHECK constraint parser and the
helper declarations its mapped types may refer to.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlsplit

from kysely_typegen.ast.nodes import Declaration, TypeNode
from kysely_typegen.constraints import (
    parse_mssql_check_constraint,
    parse_mysql_check_constraint,
    parse_postgres_check_constraint,
    parse_sqlite_check_constraint,
)
from kysely_typegen.dialects import mysql as _mysql
from kysely_typegen.dialects import postgres as _postgres
from kysely_typegen.dialects.mssql import map_mssql_type
from kysely_typegen.dialects.mysql import map_mysql_type
from kysely_typegen.dialects.postgres import map_postgres_type
from kysely_typegen.dialects.sqlite import map_sqlite_type
from kysely_typegen.introspect.models import ParsedConstraint

DIALECT_NAMES = ("postgres", "mysql", "sqlite", "mssql")


def _no_helpers(used_helpers: set[str]) -> list[Declaration]:
    return []


@dataclass(frozen=True)
class Dialect:
    """Everything the generator needs to know about one SQL dialect."""
    name: str
    default_schema: Optional[str]
    map_type: Callable[..., TypeNode]
    parse_check_constraint: Callable[[str], Optional[ParsedConstraint]]
    helper_declarations: Callable[[set[str]], list[Declaration]] = _no_helpers


_DIALECTS = {
    "postgres": Dialect(
        name="postgres",
        default_schema="public",
        map_type=map_postgres_type,
        parse_check_constraint=parse_postgres_check_constraint,
        helper_declarations=_postgres.helper_declarations,
    ),
    # MySQL schemas are databases; the default is whatever the tables live in
    "mysql": Dialect(
        name="mysql",
        default_schema=None,
        map_type=map_mysql_type,
        parse_check_constraint=parse_mysql_check_constraint,
        helper_declarations=_mysql.helper_declarations,
    ),
    "sqlite": Dialect(
        name="sqlite",
        default_schema="main",
        map_type=map_sqlite_type,
        parse_check_constraint=parse_sqlite_check_constraint,
    ),
    "mssql": Dialect(
        name="mssql",
        default_schema="dbo",
        map_type=map_mssql_type,
        parse_check_constraint=parse_mssql_check_constraint,
    ),
}


def get_dialect(name: str) -> Dialect:
    """Look up a dialect by name.

    Raises:
        ValueError: If the dialect is not one of postgres, mysql, sqlite, mssql
    """
    try:
        return _DIALECTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown dialect: {name}. Expected one of: {', '.join(DIALECT_NAMES)}"
        ) from None


def detect_dialect(connection_string: str) -> Optional[str]:
    """Guess the dialect from a connection string; None if it can't be told."""
    if (
        connection_string == ":memory:"
        or connection_string.endswith((".db", ".sqlite", ".sqlite3"))
        or connection_string.startswith("file:")
    ):
        return "sqlite"

    lower = connection_string.lower()
    if "server=" in lower or "data source=" in lower:
        return "mssql"

    scheme = urlsplit(connection_string).scheme.lower()
    if scheme in ("postgres", "postgresql"):
        return "postgres"
    if scheme in ("mysql", "mysql2"):
        return "mysql"
    if scheme in ("mssql", "sqlserver"):
        return "mssql"
    return None


__all__ = [
    "DIALECT_NAMES",
    "Dialect",
    "detect_dialect",
    "get_dialect",
]
