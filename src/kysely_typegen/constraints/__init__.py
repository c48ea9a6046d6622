"""CHECK constraint normalization.

Every dialect front end reduces its constraint text to the same
``ParsedConstraint`` result, or None when the shape is not a plain list of
allowed values.
"""
from .mssql import mssql_check_clause, parse_mssql_check_constraint
from .mysql import mysql_check_clause, parse_mysql_check_constraint
from .postgres import parse_postgres_check_constraint, postgres_check_clause
from .sqlite import (
    SqliteCheck,
    extract_sqlite_check_constraints,
    parse_sqlite_check_constraint,
    parse_sqlite_table_constraints,
    sqlite_check_clause,
)
from .values import CheckClause, classify_numbers, parse_value_list

__all__ = [
    "CheckClause",
    "SqliteCheck",
    "classify_numbers",
    "extract_sqlite_check_constraints",
    "mssql_check_clause",
    "mysql_check_clause",
    "parse_mssql_check_constraint",
    "parse_mysql_check_constraint",
    "parse_postgres_check_constraint",
    "parse_sqlite_check_constraint",
    "parse_sqlite_table_constraints",
    "parse_value_list",
    "postgres_check_clause",
    "sqlite_check_clause",
]
