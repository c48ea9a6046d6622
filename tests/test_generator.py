"""Tests for metadata documents, configuration, generate() and the CLI."""
import json

import pytest
import yaml
from pydantic import ValidationError

from kysely_typegen.config import GeneratorConfig, GeneratorOptions, load_generator_config
from kysely_typegen.cli.commands import run
from kysely_typegen.generator import generate
from kysely_typegen.introspect.constraints import (
    attach_check_constraints,
    build_check_constraint_map,
)
from kysely_typegen.introspect.models import (
    CheckConstraintDefinition,
    Column,
    DatabaseMetadata,
    NumberConstraint,
    StringConstraint,
    Table,
    load_metadata,
)


MYSQL_DOCUMENT = {
    "tables": [
        {
            "schema": "shop",
            "name": "orders",
            "columns": [
                {"name": "id", "dataType": "int", "isNullable": False, "isAutoIncrement": True},
                {"name": "status", "dataType": "enum('new','paid')", "isNullable": False},
                {"name": "priority", "dataType": "int", "isNullable": True},
            ],
        }
    ],
    "checkConstraints": [
        {"schema": "shop", "table": "orders", "definition": "(`priority` in (1,2,3))"},
    ],
}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("KYSELY_TYPEGEN_CONFIG", raising=False)


@pytest.fixture
def metadata_file(tmp_path, sample_metadata):
    path = tmp_path / "schema.json"
    path.write_text(sample_metadata.model_dump_json(by_alias=True), encoding="utf-8")
    return path


# =============================================================================
# Metadata documents
# =============================================================================

class TestLoadMetadata:
    """Test loading metadata from JSON and YAML."""

    def test_yaml_document(self, tmp_path):
        """Should accept camelCase keys in YAML."""
        path = tmp_path / "schema.yaml"
        path.write_text(yaml.safe_dump(MYSQL_DOCUMENT), encoding="utf-8")

        metadata = load_metadata(path)

        assert metadata.tables[0].schema_name == "shop"
        assert metadata.tables[0].columns[0].is_auto_increment is True
        assert metadata.check_constraints[0].table == "orders"

    def test_json_round_trip(self, metadata_file, sample_metadata):
        """Should read back what was dumped."""
        assert load_metadata(metadata_file) == sample_metadata

    def test_check_constraint_kinds(self, tmp_path):
        """Should read parsed constraints by their kind."""
        document = {"tables": [{"schema": "public", "name": "t", "columns": [
            {"name": "a", "dataType": "text", "isNullable": False,
             "checkConstraint": {"kind": "string", "values": ["x"]}},
            {"name": "b", "dataType": "int4", "isNullable": False,
             "checkConstraint": {"kind": "boolean"}},
        ]}]}
        path = tmp_path / "schema.json"
        path.write_text(json.dumps(document), encoding="utf-8")

        columns = load_metadata(path).tables[0].columns

        assert columns[0].check_constraint == StringConstraint(values=["x"])
        assert columns[1].check_constraint.kind == "boolean"

    def test_missing_file(self, tmp_path):
        """Should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_metadata(tmp_path / "nope.json")

    def test_invalid_document(self, tmp_path):
        """Should raise ValueError naming the file."""
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"tables": [{"name": "no_schema"}]}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid metadata"):
            load_metadata(path)

    def test_column_requires_nullability(self):
        """Should reject a column without is_nullable."""
        with pytest.raises(ValidationError):
            Column(name="a", data_type="text")


# =============================================================================
# Constraint association
# =============================================================================

class TestAttachCheckConstraints:
    """Test attaching raw CHECK text to columns."""

    def test_first_constraint_wins(self):
        """Should keep the first recognized constraint per column."""
        checks = build_check_constraint_map([
            CheckConstraintDefinition(schema="public", table="t", definition="CHECK ((a > 0))"),
            CheckConstraintDefinition(schema="public", table="t", definition="CHECK ((a = ANY (ARRAY[1, 2])))"),
            CheckConstraintDefinition(schema="public", table="t", definition="CHECK ((a = ANY (ARRAY[3, 4])))"),
        ], "postgres")
        assert checks == {("public", "t", "a"): NumberConstraint(values=[1, 2])}

    def test_catalog_column_preferred(self):
        """Should key by the catalog's column when one is given."""
        checks = build_check_constraint_map([
            CheckConstraintDefinition(
                schema="public", table="t", column="b",
                definition="CHECK ((a = ANY (ARRAY['x'::text])))",
            ),
        ], "postgres")
        assert list(checks) == [("public", "t", "b")]

    def test_domain_fallback(self):
        """Should use the domain's constraint when the column has none."""
        metadata = DatabaseMetadata.model_validate({
            "tables": [{"schema": "public", "name": "addresses", "columns": [
                {"name": "zip_kind", "dataType": "text", "isNullable": False,
                 "domainName": "zip_kind", "domainSchema": "public"},
            ]}],
            "domainConstraints": [{
                "schema": "public", "domain": "zip_kind",
                "definition": "CHECK ((VALUE = ANY (ARRAY['us'::text, 'ca'::text])))",
            }],
        })

        result = attach_check_constraints(metadata, "postgres")

        assert result.tables[0].columns[0].check_constraint == StringConstraint(values=["us", "ca"])
        assert result.domain_constraints == []

    def test_mssql_or_chain(self):
        """Should read SQL Server OR chains from metadata documents."""
        metadata = DatabaseMetadata(
            tables=[Table(schema="dbo", name="tasks", columns=[
                Column(name="level", data_type="nvarchar", is_nullable=False),
            ])],
            check_constraints=[CheckConstraintDefinition(
                schema="dbo", table="tasks", definition="([level]='low' OR [level]='high')",
            )],
        )
        result = generate(metadata, GeneratorOptions(dialect="mssql"))
        assert "  level: 'low' | 'high';" in result.text


# =============================================================================
# generate()
# =============================================================================

class TestGenerate:
    """Test the top-level generate() entry point."""

    def test_default_is_postgres_kysely(self, sample_metadata):
        """Should render Kysely declarations for PostgreSQL by default."""
        result = generate(sample_metadata)
        assert "export interface DB {" in result.text
        assert result.warnings == []

    def test_zod_output(self, sample_metadata):
        """Should render Zod schemas when asked."""
        result = generate(sample_metadata, GeneratorOptions(output_format="zod"))
        assert result.text.startswith("import { z } from 'zod';")

    def test_mysql_document(self):
        """Should promote inline enums and attach CHECK constraints."""
        metadata = DatabaseMetadata.model_validate(MYSQL_DOCUMENT)

        text = generate(metadata, GeneratorOptions(dialect="mysql")).text

        assert "export type OrdersStatusEnum = 'new' | 'paid';" in text
        assert (
            "export interface Order {\n"
            "  id: Generated<number>;\n"
            "  status: OrdersStatusEnum;\n"
            "  priority: 1 | 2 | 3 | null;\n"
            "}"
        ) in text

    def test_mysql_tinyint_one_is_boolean(self):
        """Should type MySQL tinyint(1) columns as boolean in both outputs."""
        metadata = DatabaseMetadata.model_validate({"tables": [{
            "schema": "shop",
            "name": "products",
            "columns": [
                {"name": "in_stock", "dataType": "tinyint(1)", "isNullable": False},
                {"name": "rating", "dataType": "tinyint(4)", "isNullable": True},
            ],
        }]})

        kysely = generate(metadata, GeneratorOptions(dialect="mysql")).text
        zod = generate(metadata, GeneratorOptions(dialect="mysql", output_format="zod")).text

        assert "  in_stock: boolean;\n  rating: number | null;\n" in kysely
        assert "  in_stock: z.boolean(),\n" in zod


# =============================================================================
# Configuration
# =============================================================================

class TestConfig:
    """Test configuration loading and validation."""

    def test_from_yaml(self, tmp_path):
        """Should load and normalize a YAML config."""
        path = tmp_path / "typegen.yaml"
        path.write_text(
            "url: postgres://app:secret@db/app\n"
            "schemas: [public, audit]\n"
            "log_level: debug\n"
            "options:\n"
            "  camel_case: true\n"
            "  exclude_pattern: '*internal*'\n",
            encoding="utf-8",
        )

        config = GeneratorConfig.from_yaml(path)

        assert config.schemas == ["public", "audit"]
        assert config.log_level == "DEBUG"
        assert config.options.camel_case is True
        assert config.options.exclude_pattern == ["*internal*"]

    def test_missing_and_empty_files(self, tmp_path):
        """Should raise for missing or empty config files."""
        with pytest.raises(FileNotFoundError):
            GeneratorConfig.from_yaml(tmp_path / "missing.yaml")

        empty = tmp_path / "empty.yaml"
        empty.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="Empty configuration"):
            GeneratorConfig.from_yaml(empty)

    def test_invalid_dialect(self, tmp_path):
        """Should reject unknown dialects."""
        path = tmp_path / "typegen.yaml"
        path.write_text("options:\n  dialect: oracle\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid configuration"):
            GeneratorConfig.from_yaml(path)

    def test_database_url_from_env(self, monkeypatch):
        """Should fall back to DATABASE_URL."""
        monkeypatch.setenv("DATABASE_URL", "postgres://localhost/app")
        assert load_generator_config().url == "postgres://localhost/app"

    def test_config_path_from_env(self, tmp_path, monkeypatch):
        """Should read the file named by KYSELY_TYPEGEN_CONFIG."""
        path = tmp_path / "typegen.yaml"
        path.write_text("out_file: src/db.ts\n", encoding="utf-8")
        monkeypatch.setenv("KYSELY_TYPEGEN_CONFIG", str(path))
        assert load_generator_config().out_file == "src/db.ts"

    def test_log_redacted(self):
        """Should mask the password in the connection string."""
        config = GeneratorConfig(url="postgres://app:secret@db:5432/app")
        assert config.log_redacted()["url"] == "postgres://app:***@db:5432/app"


# =============================================================================
# CLI
# =============================================================================

class TestCli:
    """Test the generate command."""

    def test_stdout(self, metadata_file, capsys):
        """Should print to stdout without --out-file."""
        run(["generate", "--metadata", str(metadata_file)])
        assert "export interface User {" in capsys.readouterr().out

    def test_write_and_verify(self, metadata_file, tmp_path):
        """Should write the file, then verify it until it changes."""
        out_file = tmp_path / "generated" / "db.ts"
        args = ["generate", "--metadata", str(metadata_file), "--out-file", str(out_file)]

        run(args)
        assert out_file.read_text(encoding="utf-8").startswith("import type { ColumnType }")

        run(args + ["--verify"])

        out_file.write_text("// stale\n", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            run(args + ["--verify"])
        assert exc.value.code == 1

    def test_flags_override_config(self, metadata_file, tmp_path, capsys):
        """Should apply command line flags over the config file."""
        config = tmp_path / "typegen.yaml"
        config.write_text("options:\n  camel_case: false\n", encoding="utf-8")

        run(["generate", "--config", str(config), "--metadata", str(metadata_file), "--camel-case", "--zod"])

        out = capsys.readouterr().out
        assert "export const userSchema = z.object({" in out
        assert "  displayName: z.string().nullable()," in out

    def test_missing_metadata_file(self, tmp_path):
        """Should exit 1 when the metadata file is missing."""
        with pytest.raises(SystemExit) as exc:
            run(["generate", "--metadata", str(tmp_path / "missing.json")])
        assert exc.value.code == 1

    def test_mysql_url_requires_metadata(self):
        """Should exit 1 for dialects without live introspection."""
        with pytest.raises(SystemExit) as exc:
            run(["generate", "--url", "mysql://root@localhost/shop"])
        assert exc.value.code == 1
