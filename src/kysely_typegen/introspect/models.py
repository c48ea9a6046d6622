"""Pydantic models describing introspected database metadata.

These models are the contract between introspectors (or metadata documents
loaded from disk) and the code generation pipeline.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _MetadataModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============ Check constraints ============

class StringConstraint(_MetadataModel):
    """CHECK constraint restricting a column to a list of string literals."""
    kind: Literal["string"] = "string"
    values: list[str]


class NumberConstraint(_MetadataModel):
    """CHECK constraint restricting a column to a list of integers."""
    kind: Literal["number"] = "number"
    values: list[int]


class BooleanConstraint(_MetadataModel):
    """CHECK constraint restricting a column to exactly 0 and 1."""
    kind: Literal["boolean"] = "boolean"


ParsedConstraint = Annotated[
    Union[StringConstraint, NumberConstraint, BooleanConstraint],
    Field(discriminator="kind"),
]


# ============ Schema objects ============

class Column(_MetadataModel):
    """A table or view column."""
    name: str
    data_type: str
    data_type_schema: str | None = None
    is_nullable: bool
    is_auto_increment: bool = False
    has_default_value: bool = False
    is_array: bool = False
    check_constraint: Optional[ParsedConstraint] = None
    domain_name: str | None = None
    domain_schema: str | None = None
    comment: str | None = None


class Table(_MetadataModel):
    """A table, view or materialized view."""
    schema_name: str = Field(..., alias="schema")
    name: str
    columns: list[Column] = Field(default_factory=list)
    is_view: bool = False
    is_partition: bool = False
    comment: str | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}"


class Enum(_MetadataModel):
    """A named enum type. Value order is significant."""
    schema_name: str = Field(..., alias="schema")
    name: str
    values: list[str] = Field(default_factory=list)


class CheckConstraintDefinition(_MetadataModel):
    """Raw CHECK text of a table, as the dialect's catalog reports it.

    ``column`` is set when the catalog already says which column the
    constraint covers; otherwise it is read from the definition.
    """
    schema_name: str = Field(..., alias="schema")
    table: str
    definition: str
    column: str | None = None


class DomainConstraintDefinition(_MetadataModel):
    """Raw CHECK text of a domain type."""
    schema_name: str = Field(..., alias="schema")
    domain: str
    definition: str


class DatabaseMetadata(_MetadataModel):
    """Everything the generator needs to know about one database.

    Raw constraint definitions are attached to their columns before code
    generation; introspectors that do this themselves leave them empty.
    """
    tables: list[Table] = Field(default_factory=list)
    enums: list[Enum] = Field(default_factory=list)
    check_constraints: list[CheckConstraintDefinition] = Field(default_factory=list)
    domain_constraints: list[DomainConstraintDefinition] = Field(default_factory=list)


def load_metadata(path: str | Path) -> DatabaseMetadata:
    """Load a metadata document from a JSON or YAML file.

    Args:
        path: Path to a ``.json``, ``.yaml`` or ``.yml`` file

    Returns:
        Validated DatabaseMetadata

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document is empty or not valid metadata
    """
    metadata_path = Path(path)

    if not metadata_path.exists():
        raise FileNotFoundError(f"Metadata file not found: {metadata_path}")

    text = metadata_path.read_text(encoding="utf-8")
    if metadata_path.suffix.lower() in (".yaml", ".yml"):
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)

    if not data:
        raise ValueError(f"Empty metadata file: {metadata_path}")

    try:
        return DatabaseMetadata.model_validate(data)
    except Exception as e:
        raise ValueError(f"Invalid metadata in {metadata_path}: {e}") from e
