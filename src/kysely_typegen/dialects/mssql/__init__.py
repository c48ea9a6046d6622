"""SQL Server dialect."""
from .type_mapper import map_mssql_type

__all__ = ["map_mssql_type"]
