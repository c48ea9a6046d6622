"""SQLite dialect."""
from .type_mapper import map_sqlite_type

__all__ = ["map_sqlite_type"]
