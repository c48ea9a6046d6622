"""Helper type aliases referenced by PostgreSQL column types.

Columns refer to these by name (``Timestamp``, ``Int8`` ...) and the
declarations are only emitted for helpers that were actually used.
"""
from __future__ import annotations

from kysely_typegen.ast.nodes import (
    Declaration,
    InterfaceDeclaration,
    PropertySignature,
    RawType,
    ReferenceType,
    TypeAliasDeclaration,
    column_type,
    primitive,
    union,
)

_STRING = primitive("string")
_NUMBER = primitive("number")
_BIGINT = primitive("bigint")
_DATE = ReferenceType("Date")
_INTERVAL = ReferenceType("IPostgresInterval")

HELPER_DEFINITIONS: dict[str, TypeAliasDeclaration] = {
    "Timestamp": TypeAliasDeclaration(
        "Timestamp",
        column_type(_DATE, union(_DATE, _STRING), union(_DATE, _STRING)),
    ),
    "Int8": TypeAliasDeclaration(
        "Int8",
        column_type(
            _STRING,
            union(_STRING, _NUMBER, _BIGINT),
            union(_STRING, _NUMBER, _BIGINT),
        ),
    ),
    "Numeric": TypeAliasDeclaration(
        "Numeric",
        column_type(_STRING, union(_NUMBER, _STRING), union(_NUMBER, _STRING)),
    ),
    "Interval": TypeAliasDeclaration(
        "Interval",
        column_type(_INTERVAL, union(_INTERVAL, _STRING), union(_INTERVAL, _STRING)),
    ),
    "Point": TypeAliasDeclaration("Point", RawType("{ x: number; y: number }")),
    "Circle": TypeAliasDeclaration("Circle", RawType("{ x: number; y: number; radius: number }")),
}

HELPER_NAMES = list(HELPER_DEFINITIONS)

INTERVAL_INTERFACE = InterfaceDeclaration(
    "IPostgresInterval",
    [
        PropertySignature(name, _NUMBER, optional=True)
        for name in ("years", "months", "days", "hours", "minutes", "seconds", "milliseconds")
    ],
)


def helper_reference(name: str, used_helpers: set[str] | None) -> ReferenceType:
    """Reference a helper alias, recording it as used."""
    if used_helpers is not None:
        used_helpers.add(name)
    return ReferenceType(name)


def helper_declarations(used_helpers: set[str]) -> list[Declaration]:
    """Declarations for the used helpers, in a fixed order."""
    declarations: list[Declaration] = []
    if "Interval" in used_helpers:
        declarations.append(INTERVAL_INTERFACE)
    for name in HELPER_NAMES:
        if name in used_helpers:
            declarations.append(HELPER_DEFINITIONS[name])
    return declarations
