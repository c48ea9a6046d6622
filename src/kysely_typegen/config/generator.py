"""Generator configuration loading and validation.

Configuration comes from an optional YAML file; command line flags override
individual values afterwards.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from kysely_typegen.dialects import DIALECT_NAMES
from kysely_typegen.transform.types import TransformOptions

CONFIG_ENV_VAR = "KYSELY_TYPEGEN_CONFIG"
DATABASE_URL_ENV_VAR = "DATABASE_URL"


class GeneratorOptions(BaseModel):
    """Options that shape the generated code."""
    camel_case: bool = Field(False, description="Emit camelCase property names")
    include_pattern: list[str] = Field(default_factory=list, description="Globs on schema.table to include")
    exclude_pattern: list[str] = Field(default_factory=list, description="Globs on schema.table to exclude")
    dialect: Optional[str] = Field(None, description="postgres, mysql, sqlite or mssql; detected from the URL if unset")
    default_schema: Optional[str] = Field(None, description="Schema whose enums get unprefixed names")
    output_format: Literal["kysely", "zod"] = Field("kysely", description="Declaration or validation output")
    no_boolean_coerce: bool = Field(False, description="Keep 0/1 CHECK columns as literals in Zod output")

    @field_validator("dialect")
    @classmethod
    def validate_dialect(cls, v: Optional[str]) -> Optional[str]:
        """Validate dialect name."""
        if v is not None and v not in DIALECT_NAMES:
            raise ValueError(f"dialect must be one of: {', '.join(DIALECT_NAMES)}")
        return v

    @field_validator("include_pattern", "exclude_pattern", mode="before")
    @classmethod
    def validate_patterns(cls, v):
        """Accept a single pattern as well as a list."""
        if isinstance(v, str):
            return [v]
        return v

    def to_transform_options(self, dialect: str) -> TransformOptions:
        return TransformOptions(
            camel_case=self.camel_case,
            include_pattern=list(self.include_pattern),
            exclude_pattern=list(self.exclude_pattern),
            dialect=dialect,
            default_schema=self.default_schema,
            no_boolean_coerce=self.no_boolean_coerce,
        )


class GeneratorConfig(BaseModel):
    """Complete generator configuration."""
    url: Optional[str] = Field(None, description="Database connection string")
    metadata_file: Optional[str] = Field(None, description="JSON/YAML metadata document used instead of a database")
    schemas: list[str] = Field(default_factory=list, description="Schemas to introspect")
    out_file: Optional[str] = Field(None, description="Output file; stdout when unset")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("WARNING", description="Log level")
    options: GeneratorOptions = Field(default_factory=GeneratorOptions)

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> GeneratorConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated GeneratorConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        if not data:
            raise ValueError(f"Empty configuration file: {config_path}")

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls, env_var: str = CONFIG_ENV_VAR) -> GeneratorConfig:
        """Load configuration from the file named by an environment variable.

        Without a config file, DATABASE_URL alone still makes a usable config.
        """
        config_path = os.getenv(env_var)
        config = cls.from_yaml(config_path) if config_path else cls()

        if config.url is None and os.getenv(DATABASE_URL_ENV_VAR):
            config = config.model_copy(update={"url": os.getenv(DATABASE_URL_ENV_VAR)})
        return config

    def log_redacted(self) -> dict:
        """Configuration dict with the connection password masked."""
        config_dict = self.model_dump()
        url = config_dict.get("url")
        if url and "@" in url and "://" in url:
            scheme, rest = url.split("://", 1)
            credentials, host = rest.rsplit("@", 1)
            if ":" in credentials:
                user = credentials.split(":", 1)[0]
                config_dict["url"] = f"{scheme}://{user}:***@{host}"
        return config_dict


def load_generator_config(config_path: str | Path | None = None) -> GeneratorConfig:
    """Load configuration from an explicit file, or from the environment."""
    if config_path:
        config = GeneratorConfig.from_yaml(config_path)
        if config.url is None and os.getenv(DATABASE_URL_ENV_VAR):
            config = config.model_copy(update={"url": os.getenv(DATABASE_URL_ENV_VAR)})
        return config
    return GeneratorConfig.from_env()
