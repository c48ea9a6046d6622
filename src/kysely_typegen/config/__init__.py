"""Configuration for kysely-typegen."""
from .generator import (
    CONFIG_ENV_VAR,
    DATABASE_URL_ENV_VAR,
    GeneratorConfig,
    GeneratorOptions,
    load_generator_config,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DATABASE_URL_ENV_VAR",
    "GeneratorConfig",
    "GeneratorOptions",
    "load_generator_config",
]
