"""Serialize the declaration AST to TypeScript source text.

The serializer knows nothing about databases; it only walks nodes. Output is
deterministic: declarations and properties are emitted in the order given.
"""
from __future__ import annotations

import re

from kysely_typegen.ast.nodes import (
    ArrayType,
    ConditionalType,
    Declaration,
    GenericType,
    ImportDeclaration,
    IndexAccessType,
    InferType,
    InterfaceDeclaration,
    IntersectionType,
    KeyofType,
    LiteralType,
    PrimitiveType,
    Program,
    PropertySignature,
    RawType,
    ReferenceType,
    TupleType,
    TypeAliasDeclaration,
    TypeNode,
    UnionType,
)

RESERVED_WORDS = frozenset({
    'break', 'case', 'catch', 'class', 'const', 'continue', 'debugger', 'default',
    'delete', 'do', 'else', 'enum', 'export', 'extends', 'false', 'finally', 'for',
    'function', 'if', 'import', 'in', 'instanceof', 'new', 'null', 'return', 'super',
    'switch', 'this', 'throw', 'true', 'try', 'typeof', 'var', 'void', 'while', 'with',
    'yield', 'let', 'static', 'implements', 'interface', 'package', 'private',
    'protected', 'public', 'await', 'abstract', 'as', 'async', 'declare', 'from',
    'get', 'is', 'module', 'namespace', 'of', 'require', 'set', 'type',
})

IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# Order matters: backslashes first, otherwise escaped quotes get escaped again
_ESCAPES = (
    ('\\', '\\\\'),
    ("'", "\\'"),
    ('\n', '\\n'),
    ('\r', '\\r'),
    ('\t', '\\t'),
)


def escape_string(value: str) -> str:
    """Escape a value for use inside a single-quoted string literal."""
    for char, replacement in _ESCAPES:
        value = value.replace(char, replacement)
    return value


def needs_quotes(name: str) -> bool:
    """Check whether a property name must be written as a string literal."""
    if name in RESERVED_WORDS:
        return True
    if name[:1].isdigit():
        return True
    return not IDENTIFIER_PATTERN.match(name)


def format_property_name(name: str) -> str:
    return f"'{escape_string(name)}'" if needs_quotes(name) else name


def format_literal(value: str | int | float | bool) -> str:
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, str):
        return f"'{escape_string(value)}'"
    return str(value)


# ============ Types ============

def serialize_type(node: TypeNode) -> str:
    """Serialize a type node to TypeScript type syntax."""
    if isinstance(node, PrimitiveType):
        return node.value
    if isinstance(node, LiteralType):
        return format_literal(node.value)
    if isinstance(node, UnionType):
        return ' | '.join(_serialize_member(t, UnionType) for t in node.types)
    if isinstance(node, IntersectionType):
        return ' & '.join(_serialize_member(t, IntersectionType) for t in node.types)
    if isinstance(node, ArrayType):
        element = node.element_type
        if isinstance(element, (UnionType, IntersectionType)):
            return f"({serialize_type(element)})[]"
        return f"{serialize_type(element)}[]"
    if isinstance(node, GenericType):
        args = ', '.join(serialize_type(t) for t in node.type_arguments)
        return f"{node.name}<{args}>"
    if isinstance(node, ReferenceType):
        return node.name
    if isinstance(node, TupleType):
        return f"[{', '.join(serialize_type(t) for t in node.elements)}]"
    if isinstance(node, ConditionalType):
        return (
            f"{serialize_type(node.check_type)} extends {serialize_type(node.extends_type)}"
            f" ? {serialize_type(node.true_type)} : {serialize_type(node.false_type)}"
        )
    if isinstance(node, InferType):
        return f"infer {node.name}"
    if isinstance(node, KeyofType):
        return f"keyof {serialize_type(node.type)}"
    if isinstance(node, IndexAccessType):
        return f"{serialize_type(node.object_type)}[{serialize_type(node.index_type)}]"
    if isinstance(node, RawType):
        return node.value
    raise TypeError(f"Unsupported type node: {node!r}")


def _serialize_member(node: TypeNode, parent: type) -> str:
    """Serialize a union/intersection member, parenthesizing the other operator."""
    text = serialize_type(node)
    if parent is UnionType and isinstance(node, IntersectionType):
        return f"({text})"
    if parent is IntersectionType and isinstance(node, UnionType):
        return f"({text})"
    return text


# ============ Declarations ============

def _serialize_comment(comment: str, indent: str) -> list[str]:
    text = comment.replace('*/', '*\\/')
    lines = text.splitlines() or ['']
    if len(lines) == 1:
        return [f"{indent}/** {lines[0]} */"]
    return [f"{indent}/**", *(f"{indent} * {line}".rstrip() for line in lines), f"{indent} */"]


def serialize_property(node: PropertySignature, indent: str = '  ') -> str:
    readonly = 'readonly ' if node.readonly else ''
    optional = '?' if node.optional else ''
    line = f"{indent}{readonly}{format_property_name(node.name)}{optional}: {serialize_type(node.type)};"
    if node.comment:
        return '\n'.join([*_serialize_comment(node.comment, indent), line])
    return line


def serialize_interface(node: InterfaceDeclaration) -> str:
    exported = 'export ' if node.exported else ''
    header = f"{exported}interface {node.name}"
    if node.properties:
        body = '\n'.join(serialize_property(p) for p in node.properties)
        text = f"{header} {{\n{body}\n}}"
    else:
        text = f"{header} {{}}"
    if node.comment:
        return '\n'.join([*_serialize_comment(node.comment, ''), text])
    return text


def serialize_type_alias(node: TypeAliasDeclaration) -> str:
    exported = 'export ' if node.exported else ''
    params = f"<{', '.join(node.type_parameters)}>" if node.type_parameters else ''
    return f"{exported}type {node.name}{params} = {serialize_type(node.type)};"


def serialize_import(node: ImportDeclaration) -> str:
    type_only = ' type' if node.type_only else ''
    return f"import{type_only} {{ {', '.join(node.names)} }} from '{node.module}';"


def serialize_declaration(node: Declaration) -> str:
    if isinstance(node, InterfaceDeclaration):
        return serialize_interface(node)
    if isinstance(node, TypeAliasDeclaration):
        return serialize_type_alias(node)
    if isinstance(node, ImportDeclaration):
        return serialize_import(node)
    raise TypeError(f"Unsupported declaration: {node!r}")


def serialize(program: Program) -> str:
    """Serialize a complete program, one blank line between declarations."""
    return '\n\n'.join(serialize_declaration(d) for d in program.declarations) + '\n'
