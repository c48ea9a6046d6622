"""PostgreSQL dialect."""
from .helpers import HELPER_DEFINITIONS, HELPER_NAMES, helper_declarations
from .type_mapper import map_postgres_type

__all__ = [
    "HELPER_DEFINITIONS",
    "HELPER_NAMES",
    "helper_declarations",
    "map_postgres_type",
]
