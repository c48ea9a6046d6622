"""AST node types for Zod schema output."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Union

Modifier = Literal["nullable", "optional"]


@dataclass
class ZodPrimitive:
    """``z.<method>()``, e.g. z.string(), z.date(), z.unknown()."""
    method: str


@dataclass
class ZodLiteral:
    value: str | int | float | bool


@dataclass
class ZodUnion:
    schemas: list[ZodSchema]


@dataclass
class ZodEnum:
    values: list[str]


@dataclass
class ZodArray:
    element: ZodSchema


@dataclass
class ZodProperty:
    name: str
    schema: ZodSchema


@dataclass
class ZodObject:
    properties: list[ZodProperty] = field(default_factory=list)


@dataclass
class ZodModified:
    """Schema followed by ``.nullable()`` / ``.optional()`` calls, in order."""
    schema: ZodSchema
    modifiers: list[Modifier]


@dataclass
class ZodReference:
    """Reference to another exported schema constant."""
    name: str


@dataclass
class ZodCustom:
    """``z.custom<T>()`` for values Zod has no builder for."""
    type_reference: str


@dataclass
class ZodTransform:
    schema: ZodSchema
    transform_fn: str


@dataclass
class ZodCoerce:
    method: str


ZodSchema = Union[
    ZodPrimitive,
    ZodLiteral,
    ZodUnion,
    ZodEnum,
    ZodArray,
    ZodObject,
    ZodModified,
    ZodReference,
    ZodCustom,
    ZodTransform,
    ZodCoerce,
]


@dataclass
class ZodImport:
    module: str = "zod"


@dataclass
class ZodSchemaDeclaration:
    name: str
    schema: ZodSchema
    exported: bool = True


@dataclass
class ZodInferExport:
    """``export type User = z.infer<typeof userSchema>;``"""
    type_name: str
    schema_name: str


ZodDeclaration = Union[ZodImport, ZodSchemaDeclaration, ZodInferExport]


@dataclass
class ZodProgram:
    declarations: list[ZodDeclaration] = field(default_factory=list)


def with_modifiers(schema: ZodSchema, is_nullable: bool, is_optional: bool) -> ZodSchema:
    modifiers: list[Modifier] = []
    if is_nullable:
        modifiers.append("nullable")
    if is_optional:
        modifiers.append("optional")
    return ZodModified(schema, modifiers) if modifiers else schema
