"""Enum naming and enum type declarations."""
from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from kysely_typegen.ast.nodes import LiteralType, PrimitiveType, TypeAliasDeclaration, UnionType
from kysely_typegen.introspect.models import Enum
from kysely_typegen.transform.utils import pascal_case

logger = logging.getLogger(__name__)


class EnumNameResolver:
    """Gives every enum of a run one canonical, collision-free type name.

    Enums in the default schema are named after the enum alone; enums in other
    schemas get the schema folded into the name (``test_schema.priority`` ->
    ``TestSchemaPriority``). When two different enums still end up with the
    same name, the later one in input order gets a numeric suffix.
    """

    def __init__(
        self,
        enums: Sequence[Enum],
        default_schema: str,
        reserved: Iterable[str] = (),
    ):
        self.default_schema = default_schema
        self._enums: dict[tuple[str, str], Enum] = {}
        self._names: dict[tuple[str, str], str] = {}
        taken = set(reserved)

        for enum in enums:
            key = (enum.schema_name, enum.name)
            if key in self._names:
                continue

            base = self._base_name(enum)
            name = base
            suffix = 2
            while name in taken:
                name = f"{base}{suffix}"
                suffix += 1
            if name != base:
                logger.debug(f"Enum {enum.schema_name}.{enum.name} renamed to {name} to avoid a collision")

            taken.add(name)
            self._enums[key] = enum
            self._names[key] = name

    def _base_name(self, enum: Enum) -> str:
        if enum.schema_name == self.default_schema:
            return pascal_case(enum.name)
        return pascal_case(f"{enum.schema_name}_{enum.name}")

    @property
    def enums(self) -> list[Enum]:
        """Distinct enums, in input order."""
        return list(self._enums.values())

    def get_name(self, enum: Enum) -> str:
        return self._names[(enum.schema_name, enum.name)]

    def find(self, data_type: str, schema: Optional[str] = None) -> Optional[Enum]:
        """Find the enum a column type refers to, defaulting to the run's schema."""
        return self._enums.get((schema or self.default_schema, data_type))


def transform_enum(enum: Enum, resolver: EnumNameResolver) -> TypeAliasDeclaration:
    """``export type Status = 'active' | 'inactive';``"""
    if not enum.values:
        return TypeAliasDeclaration(name=resolver.get_name(enum), type=PrimitiveType("never"))
    return TypeAliasDeclaration(
        name=resolver.get_name(enum),
        type=UnionType([LiteralType(value) for value in enum.values]),
    )
