"""Serialize Zod schema programs to TypeScript source text."""
from __future__ import annotations

from kysely_typegen.ast.serialize import escape_string, format_property_name
from kysely_typegen.zod.nodes import (
    ZodArray,
    ZodCoerce,
    ZodCustom,
    ZodDeclaration,
    ZodEnum,
    ZodImport,
    ZodInferExport,
    ZodLiteral,
    ZodModified,
    ZodObject,
    ZodPrimitive,
    ZodProgram,
    ZodProperty,
    ZodReference,
    ZodSchema,
    ZodSchemaDeclaration,
    ZodTransform,
    ZodUnion,
)


def _literal(value: str | int | float | bool) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return f"'{escape_string(value)}'"
    return str(value)


def serialize_zod_schema(node: ZodSchema) -> str:
    if isinstance(node, ZodPrimitive):
        return f"z.{node.method}()"
    if isinstance(node, ZodLiteral):
        return f"z.literal({_literal(node.value)})"
    if isinstance(node, ZodUnion):
        return f"z.union([{', '.join(serialize_zod_schema(s) for s in node.schemas)}])"
    if isinstance(node, ZodEnum):
        return f"z.enum([{', '.join(_literal(v) for v in node.values)}])"
    if isinstance(node, ZodArray):
        return f"z.array({serialize_zod_schema(node.element)})"
    if isinstance(node, ZodObject):
        return _serialize_object(node)
    if isinstance(node, ZodModified):
        return serialize_zod_schema(node.schema) + ''.join(f".{m}()" for m in node.modifiers)
    if isinstance(node, ZodReference):
        return node.name
    if isinstance(node, ZodCustom):
        return f"z.custom<{node.type_reference}>()"
    if isinstance(node, ZodTransform):
        return f"{serialize_zod_schema(node.schema)}.transform({node.transform_fn})"
    if isinstance(node, ZodCoerce):
        return f"z.coerce.{node.method}()"
    raise TypeError(f"Unsupported zod node: {node!r}")


def _serialize_property(node: ZodProperty) -> str:
    return f"  {format_property_name(node.name)}: {serialize_zod_schema(node.schema)}"


def _serialize_object(node: ZodObject) -> str:
    if not node.properties:
        return 'z.object({})'
    props = ',\n'.join(_serialize_property(p) for p in node.properties)
    return f"z.object({{\n{props},\n}})"


def serialize_zod_declaration(node: ZodDeclaration) -> str:
    if isinstance(node, ZodImport):
        return f"import {{ z }} from '{node.module}';"
    if isinstance(node, ZodSchemaDeclaration):
        exported = 'export ' if node.exported else ''
        return f"{exported}const {node.name} = {serialize_zod_schema(node.schema)};"
    if isinstance(node, ZodInferExport):
        return f"export type {node.type_name} = z.infer<typeof {node.schema_name}>;"
    raise TypeError(f"Unsupported zod declaration: {node!r}")


def serialize_zod(program: ZodProgram) -> str:
    return '\n\n'.join(serialize_zod_declaration(d) for d in program.declarations) + '\n'
