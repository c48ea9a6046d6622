from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from kysely_typegen.config import GeneratorConfig, GeneratorOptions, load_generator_config
from kysely_typegen.dialects import detect_dialect
from kysely_typegen.generator import DEFAULT_DIALECT, GenerationResult, generate
from kysely_typegen.introspect.database import introspect_database
from kysely_typegen.introspect.models import DatabaseMetadata, load_metadata

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kysely-typegen",
        description="Generate Kysely type declarations or Zod schemas from a database"
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    gen = sub.add_parser("generate", help="Generate TypeScript from a database or metadata file")
    source = gen.add_mutually_exclusive_group()
    source.add_argument("--url", help="Database connection string (default: DATABASE_URL)")
    source.add_argument("--metadata", help="JSON/YAML metadata document to generate from")
    gen.add_argument("--dialect", choices=["postgres", "mysql", "sqlite", "mssql"],
                     help="SQL dialect (default: detected from the URL)")
    gen.add_argument("--schema", action="append", dest="schemas",
                     help="Schema to introspect; may be repeated (default: public)")
    gen.add_argument("--out-file", help="Output file (default: stdout)")
    gen.add_argument("--camel-case", action="store_true", default=None,
                     help="Emit camelCase property names")
    gen.add_argument("--include-pattern", action="append",
                     help="Glob on schema.table to include; may be repeated")
    gen.add_argument("--exclude-pattern", action="append",
                     help="Glob on schema.table to exclude; may be repeated")
    gen.add_argument("--default-schema", help="Schema whose enums get unprefixed names")
    gen.add_argument("--zod", action="store_true", help="Generate Zod schemas instead of Kysely types")
    gen.add_argument("--no-boolean-coerce", action="store_true", default=None,
                     help="Keep 0/1 CHECK columns as literals in Zod output")
    gen.add_argument("--verify", action="store_true",
                     help="Exit 1 if --out-file differs from the generated output")
    gen.add_argument("--config", help="Path to YAML configuration file")
    gen.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                     type=str.upper, help="Log level (default: WARNING)")

    return parser


def run(argv: Optional[list[str]] = None) -> None:
    """Main CLI entry point."""
    # Load environment variables first
    load_dotenv()

    args = build_parser().parse_args(argv)

    try:
        if args.cmd == "generate":
            config = merge_config(load_generator_config(args.config), args)
            configure_logging(config.log_level)
            logger.debug(f"Configuration: {config.log_redacted()}")

            if not generate_command(config, verify=args.verify):
                sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


def configure_logging(level: str) -> None:
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT, stream=sys.stderr)


def merge_config(config: GeneratorConfig, args: argparse.Namespace) -> GeneratorConfig:
    """Apply command line flags on top of file/environment configuration."""
    updates = {}
    if args.metadata:
        updates.update(metadata_file=args.metadata, url=None)
    elif args.url:
        updates.update(url=args.url, metadata_file=None)
    if args.schemas:
        updates["schemas"] = args.schemas
    if args.out_file:
        updates["out_file"] = args.out_file
    if args.log_level:
        updates["log_level"] = args.log_level

    option_updates = {}
    if args.dialect:
        option_updates["dialect"] = args.dialect
    if args.camel_case:
        option_updates["camel_case"] = True
    if args.include_pattern:
        option_updates["include_pattern"] = args.include_pattern
    if args.exclude_pattern:
        option_updates["exclude_pattern"] = args.exclude_pattern
    if args.default_schema:
        option_updates["default_schema"] = args.default_schema
    if args.zod:
        option_updates["output_format"] = "zod"
    if args.no_boolean_coerce:
        option_updates["no_boolean_coerce"] = True

    if option_updates:
        options = config.options.model_dump()
        options.update(option_updates)
        updates["options"] = GeneratorOptions.model_validate(options)

    return config.model_copy(update=updates)


def resolve_dialect(config: GeneratorConfig) -> str:
    if config.options.dialect:
        return config.options.dialect
    if config.url:
        detected = detect_dialect(config.url)
        if detected is None:
            raise ValueError("Cannot detect dialect from connection string; pass --dialect")
        return detected
    return DEFAULT_DIALECT


def load_source(config: GeneratorConfig, dialect: str) -> DatabaseMetadata:
    """Read metadata from the configured document or database."""
    if config.metadata_file:
        logger.info(f"Loading metadata from {config.metadata_file}")
        return load_metadata(config.metadata_file)

    if not config.url:
        raise ValueError("No database: pass --url, --metadata or set DATABASE_URL")

    return asyncio.run(introspect_database(config.url, dialect, config.schemas or None))


def generate_command(config: GeneratorConfig, verify: bool = False) -> bool:
    """Generate output and write or verify it.

    Args:
        config: Merged configuration
        verify: Compare with ``config.out_file`` instead of writing it

    Returns:
        False when verification found a difference, True otherwise
    """
    dialect = resolve_dialect(config)
    metadata = load_source(config, dialect)
    options = config.options.model_copy(update={"dialect": dialect})

    result = generate(metadata, options)
    report_warnings(result)

    if verify:
        return verify_output(result.text, config.out_file)

    if config.out_file:
        out_path = Path(config.out_file)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(result.text, encoding="utf-8")
        logger.info(f"Wrote {len(metadata.tables)} tables to {out_path}")
    else:
        sys.stdout.write(result.text)
    return True


def report_warnings(result: GenerationResult) -> None:
    for warning in result.warnings:
        logger.warning(f"Unknown type '{warning.raw_type_name}' mapped to unknown")


def verify_output(text: str, out_file: Optional[str]) -> bool:
    if not out_file:
        raise ValueError("--verify requires --out-file")

    out_path = Path(out_file)
    if not out_path.exists():
        logger.error(f"{out_path} does not exist")
        return False

    if out_path.read_text(encoding="utf-8") != text:
        logger.error(f"{out_path} is out of date; run generate to update it")
        return False

    logger.info(f"{out_path} is up to date")
    return True
