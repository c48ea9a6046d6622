"""Geometry declarations referenced by MySQL spatial columns."""
from __future__ import annotations

from kysely_typegen.ast.nodes import (
    ArrayType,
    Declaration,
    InterfaceDeclaration,
    PropertySignature,
    ReferenceType,
    TypeAliasDeclaration,
    primitive,
    union,
)

HELPER_DEFINITIONS: dict[str, Declaration] = {
    "Point": InterfaceDeclaration(
        "Point",
        [PropertySignature("x", primitive("number")), PropertySignature("y", primitive("number"))],
    ),
    "LineString": TypeAliasDeclaration("LineString", ArrayType(ReferenceType("Point"))),
    "Polygon": TypeAliasDeclaration("Polygon", ArrayType(ReferenceType("LineString"))),
    "Geometry": TypeAliasDeclaration(
        "Geometry",
        union(ReferenceType("Point"), ReferenceType("LineString"), ReferenceType("Polygon")),
    ),
}

HELPER_NAMES = list(HELPER_DEFINITIONS)

# Declarations each helper refers to
HELPER_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "Point": (),
    "LineString": ("Point",),
    "Polygon": ("LineString",),
    "Geometry": ("Point", "LineString", "Polygon"),
}


def resolve_helpers(used_helpers: set[str]) -> set[str]:
    """Close the used set over helper dependencies."""
    resolved: set[str] = set()
    pending = [name for name in used_helpers if name in HELPER_DEFINITIONS]
    while pending:
        name = pending.pop()
        if name in resolved:
            continue
        resolved.add(name)
        pending.extend(HELPER_DEPENDENCIES[name])
    return resolved


def helper_declarations(used_helpers: set[str]) -> list[Declaration]:
    needed = resolve_helpers(used_helpers)
    return [HELPER_DEFINITIONS[name] for name in HELPER_NAMES if name in needed]
