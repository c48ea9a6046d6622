"""Database metadata models and introspectors.

Only the models are imported here; the introspectors live in their own
modules so loading a metadata document never needs a database driver.
"""
from .models import (
    BooleanConstraint,
    CheckConstraintDefinition,
    Column,
    DatabaseMetadata,
    DomainConstraintDefinition,
    Enum,
    NumberConstraint,
    ParsedConstraint,
    StringConstraint,
    Table,
    load_metadata,
)

__all__ = [
    "BooleanConstraint",
    "CheckConstraintDefinition",
    "Column",
    "DatabaseMetadata",
    "DomainConstraintDefinition",
    "Enum",
    "NumberConstraint",
    "ParsedConstraint",
    "StringConstraint",
    "Table",
    "load_metadata",
]
