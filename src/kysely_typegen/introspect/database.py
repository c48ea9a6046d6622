"""Pick the introspector for a connection string."""
from __future__ import annotations

import logging

from kysely_typegen.introspect.models import DatabaseMetadata

logger = logging.getLogger(__name__)

LIVE_DIALECTS = ("postgres", "sqlite")


class UnsupportedIntrospectionError(Exception):
    """Raised when a dialect can only be generated from a metadata document."""
    pass


async def introspect_database(
    url: str,
    dialect: str,
    schemas: list[str] | None = None,
) -> DatabaseMetadata:
    """Read metadata from a live database.

    Args:
        url: Connection string
        dialect: Dialect name; only postgres and sqlite connect directly
        schemas: Schemas to read (postgres only)

    Raises:
        UnsupportedIntrospectionError: For mysql and mssql
    """
    if dialect == "postgres":
        from kysely_typegen.introspect.postgres import introspect_postgres
        return await introspect_postgres(url, schemas)

    if dialect == "sqlite":
        from kysely_typegen.introspect.sqlite import introspect_sqlite
        if schemas:
            logger.debug("SQLite has a single schema; ignoring --schema")
        return introspect_sqlite(url)

    raise UnsupportedIntrospectionError(
        f"Live introspection is not available for {dialect}; "
        f"export the schema as a metadata document and pass --metadata"
    )
