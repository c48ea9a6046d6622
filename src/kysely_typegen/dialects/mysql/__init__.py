"""MySQL dialect."""
from .enums import extract_inline_enums
from .helpers import HELPER_DEFINITIONS, helper_declarations, resolve_helpers
from .type_mapper import map_mysql_type, parse_inline_enum

__all__ = [
    "HELPER_DEFINITIONS",
    "extract_inline_enums",
    "helper_declarations",
    "map_mysql_type",
    "parse_inline_enum",
    "resolve_helpers",
]
