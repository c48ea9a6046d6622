"""Identifier case helpers."""
from __future__ import annotations


def pascal_case(name: str) -> str:
    """``user_profile`` -> ``UserProfile``. Each word is lowercased after its first letter."""
    return ''.join(word[:1].upper() + word[1:].lower() for word in name.split('_'))


def singularize(name: str) -> str:
    """Strip one trailing ``s``. Deliberately naive: ``status`` -> ``statu``."""
    return name[:-1] if name.endswith('s') else name


def to_camel_case(name: str) -> str:
    """Convert snake_case to camelCase the way Kysely's CamelCasePlugin does.

    The first character is kept as is. After that, underscores are dropped
    and the character following one is uppercased.
    """
    if not name:
        return name

    out = [name[0]]
    for previous, char in zip(name, name[1:]):
        if char != '_':
            out.append(char.upper() if previous == '_' else char)
    return ''.join(out)


def table_type_name(table_name: str) -> str:
    """Declaration name for a table's row interface."""
    return pascal_case(singularize(table_name))
