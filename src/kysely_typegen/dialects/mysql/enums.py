"""Turn MySQL inline ``enum(...)`` columns into named enums.

MySQL has no standalone enum types. Each inline enum column becomes an enum
named ``<table>_<column>_enum`` in the table's schema, and the column is
rewritten to reference it.
"""
from __future__ import annotations

import logging

from kysely_typegen.dialects.mysql.type_mapper import parse_inline_enum
from kysely_typegen.introspect.models import DatabaseMetadata, Enum

logger = logging.getLogger(__name__)


def extract_inline_enums(metadata: DatabaseMetadata) -> DatabaseMetadata:
    """Return metadata with inline enum columns promoted to named enums."""
    enums = list(metadata.enums)
    known = {(e.schema_name, e.name) for e in enums}
    tables = []

    for table in metadata.tables:
        columns = []
        for column in table.columns:
            values = parse_inline_enum(column.data_type)
            if values is None:
                columns.append(column)
                continue

            enum_name = f"{table.name}_{column.name}_enum"
            if (table.schema_name, enum_name) not in known:
                known.add((table.schema_name, enum_name))
                enums.append(Enum(schema=table.schema_name, name=enum_name, values=values))
                logger.debug(f"Promoted inline enum {table.qualified_name}.{column.name}")

            columns.append(column.model_copy(update={
                "data_type": enum_name,
                "data_type_schema": table.schema_name,
            }))

        tables.append(table.model_copy(update={"columns": columns}))

    return DatabaseMetadata(tables=tables, enums=enums)
