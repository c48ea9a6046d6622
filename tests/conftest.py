"""Shared pytest fixtures for all tests."""
import pytest

from kysely_typegen.introspect.models import Column, DatabaseMetadata, Enum, Table


def make_column(name, data_type, **kwargs):
    kwargs.setdefault("is_nullable", False)
    return Column(name=name, data_type=data_type, **kwargs)


@pytest.fixture
def users_table():
    return Table(
        schema="public",
        name="users",
        columns=[
            make_column("id", "int4", is_auto_increment=True, has_default_value=True),
            make_column("email", "varchar"),
            make_column("display_name", "text", is_nullable=True),
            make_column("status", "user_status", data_type_schema="public"),
            make_column("created_at", "timestamptz", has_default_value=True),
        ],
    )


@pytest.fixture
def sample_metadata(users_table):
    """Small PostgreSQL database: one table, one enum."""
    return DatabaseMetadata(
        tables=[users_table],
        enums=[Enum(schema="public", name="user_status", values=["active", "inactive"])],
    )


@pytest.fixture
def filter_tables_sample():
    return [
        Table(schema=schema, name=name, columns=[make_column("id", "int4")])
        for schema, name in (
            ("public", "users"),
            ("public", "posts"),
            ("auth", "sessions"),
            ("public", "internal_logs"),
        )
    ]
