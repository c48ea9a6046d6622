"""Zod validation schema output."""
from .lower import ZodLowering
from .serialize import serialize_zod, serialize_zod_schema
from .transform import ZodTransformResult, transform_database_to_zod

__all__ = [
    "ZodLowering",
    "ZodTransformResult",
    "serialize_zod",
    "serialize_zod_schema",
    "transform_database_to_zod",
]
