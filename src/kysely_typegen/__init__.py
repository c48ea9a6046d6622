"""Generate Kysely type declarations and Zod schemas from database metadata."""
from .config import GeneratorConfig, GeneratorOptions
from .generator import GenerationResult, generate
from .introspect import DatabaseMetadata, load_metadata
from .transform import TransformResult, transform_database
from .zod import ZodTransformResult, transform_database_to_zod

__version__ = "0.1.0"

__all__ = [
    "DatabaseMetadata",
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorOptions",
    "TransformResult",
    "ZodTransformResult",
    "generate",
    "load_metadata",
    "transform_database",
    "transform_database_to_zod",
]
