"""Generate TypeScript source from database metadata."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from kysely_typegen.ast.serialize import serialize
from kysely_typegen.config.generator import GeneratorOptions
from kysely_typegen.dialects.mysql import extract_inline_enums
from kysely_typegen.introspect.constraints import attach_check_constraints
from kysely_typegen.introspect.models import DatabaseMetadata
from kysely_typegen.transform import transform_database
from kysely_typegen.transform.types import TransformWarning
from kysely_typegen.zod import serialize_zod, transform_database_to_zod

logger = logging.getLogger(__name__)

DEFAULT_DIALECT = "postgres"


@dataclass
class GenerationResult:
    text: str
    warnings: list[TransformWarning] = field(default_factory=list)


def generate(
    metadata: DatabaseMetadata,
    options: Optional[GeneratorOptions] = None,
) -> GenerationResult:
    """Render metadata as Kysely declarations or Zod schemas.

    Args:
        metadata: Database metadata
        options: Output options; dialect defaults to postgres

    Returns:
        GenerationResult with the output text and unknown-type warnings
    """
    options = options or GeneratorOptions()
    dialect = options.dialect or DEFAULT_DIALECT

    metadata = attach_check_constraints(metadata, dialect)
    if dialect == "mysql":
        metadata = extract_inline_enums(metadata)

    transform_options = options.to_transform_options(dialect)

    if options.output_format == "zod":
        zod_result = transform_database_to_zod(metadata, transform_options)
        text = serialize_zod(zod_result.program)
        warnings = zod_result.warnings
    else:
        result = transform_database(metadata, transform_options)
        text = serialize(result.program)
        warnings = result.warnings

    logger.debug(f"Generated {len(text)} characters, {len(warnings)} warnings")
    return GenerationResult(text=text, warnings=warnings)
