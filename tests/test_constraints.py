"""Tests for CHECK constraint normalization.

Tests cover:
- Shared value-list scanning and number/boolean classification
- PostgreSQL ANY(ARRAY[...]) and OR-chain shapes, including domain VALUE
- MySQL IN lists with charset introducers
- SQLite DDL extraction
- SQL Server IN lists and OR chains
"""
import pytest

from kysely_typegen.constraints import (
    classify_numbers,
    extract_sqlite_check_constraints,
    mssql_check_clause,
    parse_mssql_check_constraint,
    parse_mysql_check_constraint,
    parse_postgres_check_constraint,
    parse_sqlite_check_constraint,
    parse_sqlite_table_constraints,
    parse_value_list,
    postgres_check_clause,
)
from kysely_typegen.introspect.models import (
    BooleanConstraint,
    NumberConstraint,
    StringConstraint,
)


# =============================================================================
# Shared value lists
# =============================================================================

class TestValueList:
    """Test the shared literal list scanner."""

    def test_string_literals(self):
        """Should read quoted literals and skip casts."""
        result = parse_value_list("'a'::text, 'b'::character varying")
        assert result == StringConstraint(values=["a", "b"])

    def test_doubled_quote_unescaped_once(self):
        """Should unescape a doubled quote exactly once."""
        result = parse_value_list("'it''s', 'won''t'")
        assert result == StringConstraint(values=["it's", "won't"])

    def test_numbers(self):
        """Should read integer lists including negatives."""
        assert parse_value_list("-1, 0, 1") == NumberConstraint(values=[-1, 0, 1])

    @pytest.mark.parametrize("text", ["", "   ", "'a',", "'a' 'b'", "'a', b", "1, 'a'", "'unterminated"])
    def test_rejects_malformed(self, text):
        """Should return None for anything but a clean literal list."""
        assert parse_value_list(text) is None


class TestClassifyNumbers:
    """Test boolean detection on numeric lists."""

    @pytest.mark.parametrize("values", [[0, 1], [1, 0]])
    def test_zero_one_is_boolean(self, values):
        """Should classify exactly {0, 1} as boolean."""
        assert classify_numbers(values) == BooleanConstraint()

    @pytest.mark.parametrize("values", [[0, 1, 2], [0, 2], [0]])
    def test_other_lists_are_numbers(self, values):
        """Should keep any other list numeric."""
        assert classify_numbers(values) == NumberConstraint(values=values)


# =============================================================================
# PostgreSQL
# =============================================================================

class TestPostgresConstraints:
    """Test pg_get_constraintdef shapes."""

    def test_any_array_strings(self):
        """Should parse the normalized form of IN()."""
        result = parse_postgres_check_constraint(
            "CHECK ((status = ANY (ARRAY['pending'::text, 'active'::text, 'completed'::text])))"
        )
        assert result == StringConstraint(values=["pending", "active", "completed"])

    def test_any_array_varchar_column(self):
        """Should accept a cast on the column and on the array."""
        clause = postgres_check_clause(
            "CHECK (((status)::text = ANY ((ARRAY['a'::character varying, 'b'::character varying])::text[])))"
        )
        assert clause is not None
        assert clause.column_name == "status"
        assert clause.constraint == StringConstraint(values=["a", "b"])

    def test_any_array_numbers(self):
        """Should parse integer arrays."""
        result = parse_postgres_check_constraint("CHECK ((priority = ANY (ARRAY[1, 2, 3, 4, 5])))")
        assert result == NumberConstraint(values=[1, 2, 3, 4, 5])

    def test_any_array_boolean(self):
        """Should classify ARRAY[0, 1] as boolean."""
        result = parse_postgres_check_constraint("CHECK ((is_active = ANY (ARRAY[0, 1])))")
        assert result == BooleanConstraint()

    def test_any_array_negative_numbers(self):
        """Should read negative integers rendered as quoted casts."""
        result = parse_postgres_check_constraint(
            "CHECK ((priority = ANY (ARRAY['-1'::integer, 0, 1])))"
        )
        assert result == NumberConstraint(values=[-1, 0, 1])

    def test_or_chain_negative_numbers(self):
        """Should read quoted negative integers in OR chains."""
        result = parse_postgres_check_constraint(
            "CHECK (((delta = '-1'::integer) OR (delta = 1)))"
        )
        assert result == NumberConstraint(values=[-1, 1])

    def test_quoted_digits_as_text_stay_strings(self):
        """Should keep digit strings cast to text as string values."""
        result = parse_postgres_check_constraint(
            "CHECK ((code = ANY (ARRAY['-1'::text, '2'::text])))"
        )
        assert result == StringConstraint(values=["-1", "2"])

    def test_escaped_quotes(self):
        """Should unescape doubled quotes in array items."""
        result = parse_postgres_check_constraint(
            "CHECK ((val = ANY (ARRAY['it''s'::text, 'won''t'::text])))"
        )
        assert result == StringConstraint(values=["it's", "won't"])

    def test_empty_array(self):
        """Should not recognize an empty array."""
        assert parse_postgres_check_constraint("CHECK ((val = ANY (ARRAY[])))") is None

    def test_or_chain(self):
        """Should parse an OR chain of equality terms."""
        result = parse_postgres_check_constraint(
            "CHECK (((level = 'low'::text) OR (level = 'medium'::text) OR (level = 'high'::text)))"
        )
        assert result == StringConstraint(values=["low", "medium", "high"])

    def test_or_chain_mixed_columns(self):
        """Should reject OR chains comparing different columns."""
        result = parse_postgres_check_constraint(
            "CHECK (((a = 'x'::text) OR (b = 'y'::text)))"
        )
        assert result is None

    def test_domain_value(self):
        """Should accept VALUE in place of a column name."""
        clause = postgres_check_clause(
            "CHECK ((VALUE = ANY (ARRAY['low'::text, 'high'::text])))"
        )
        assert clause is not None
        assert clause.column_name == "VALUE"
        assert clause.constraint == StringConstraint(values=["low", "high"])

    def test_quoted_column(self):
        """Should unquote a double-quoted column name."""
        clause = postgres_check_clause("CHECK ((\"Status\" = ANY (ARRAY['on'::text, 'off'::text])))")
        assert clause.column_name == "Status"

    @pytest.mark.parametrize("definition", [
        "CHECK ((range_col >= 0))",
        "CHECK ((val >= 1) AND (val <= 100))",
        "CHECK ((regex_col ~* '^[a-z]+$'::text))",
        "CHECK ((col ~~ '%pattern%'::text))",
        "CHECK ((start_time < end_time))",
        "CHECK ((length(name) > 0))",
        "",
    ])
    def test_unrecognized(self, definition):
        """Should return None for shapes that are not value lists."""
        assert parse_postgres_check_constraint(definition) is None


# =============================================================================
# MySQL
# =============================================================================

class TestMysqlConstraints:
    """Test INFORMATION_SCHEMA.CHECK_CONSTRAINTS clauses."""

    def test_introducers(self):
        """Should strip charset introducers and escaped quotes."""
        result = parse_mysql_check_constraint(
            "(`status` in (_utf8mb4\\'active\\',_utf8mb4\\'inactive\\'))"
        )
        assert result == StringConstraint(values=["active", "inactive"])

    def test_plain_strings(self):
        """Should parse bare column names and plain literals."""
        result = parse_mysql_check_constraint("status IN ('a', 'b')")
        assert result == StringConstraint(values=["a", "b"])

    def test_underscore_inside_literal_kept(self):
        """Should not treat an underscore inside a literal as an introducer."""
        result = parse_mysql_check_constraint("(`kind` in (_utf8mb4'foo_bar',_utf8mb4'baz'))")
        assert result == StringConstraint(values=["foo_bar", "baz"])

    def test_numbers_and_boolean(self):
        """Should classify numeric lists."""
        assert parse_mysql_check_constraint("(`priority` in (1,2,3))") == NumberConstraint(values=[1, 2, 3])
        assert parse_mysql_check_constraint("(`flag` in (1,0))") == BooleanConstraint()

    def test_unrecognized(self):
        """Should return None for comparisons."""
        assert parse_mysql_check_constraint("(`age` >= 0)") is None


# =============================================================================
# SQLite
# =============================================================================

class TestSqliteConstraints:
    """Test CHECK extraction from CREATE TABLE statements."""

    DDL = """
    CREATE TABLE tasks (
        id INTEGER PRIMARY KEY,
        status TEXT NOT NULL CHECK (status IN ('todo', 'done')),
        priority INTEGER CHECK(priority IN (1, 2, 3)),
        is_done INTEGER CHECK ( is_done in (0,1) ),
        note TEXT CHECK (note IN ('a)b', 'c')),
        CHECK (status IN ('ignored'))
    )
    """

    def test_extract(self):
        """Should find inline and table-level IN checks."""
        checks = extract_sqlite_check_constraints(self.DDL)
        assert [c.column_name for c in checks] == ["status", "priority", "is_done", "note", "status"]
        assert checks[0].definition == "status IN ('todo', 'done')"

    def test_parenthesis_inside_literal(self):
        """Should not stop at a parenthesis inside a literal."""
        constraints = parse_sqlite_table_constraints(self.DDL)
        assert constraints["note"] == StringConstraint(values=["a)b", "c"])

    def test_table_constraints(self):
        """Should map columns to constraints, first one winning."""
        constraints = parse_sqlite_table_constraints(self.DDL)
        assert constraints["status"] == StringConstraint(values=["todo", "done"])
        assert constraints["priority"] == NumberConstraint(values=[1, 2, 3])
        assert constraints["is_done"] == BooleanConstraint()

    def test_parse_definition(self):
        """Should parse a single definition."""
        assert parse_sqlite_check_constraint("kind IN ('x')") == StringConstraint(values=["x"])
        assert parse_sqlite_check_constraint("kind > 1") is None

    def test_no_checks(self):
        """Should return nothing for DDL without checks."""
        assert extract_sqlite_check_constraints("CREATE TABLE t (id INTEGER)") == []
        assert parse_sqlite_table_constraints("") == {}


# =============================================================================
# SQL Server
# =============================================================================

class TestMssqlConstraints:
    """Test sys.check_constraints definitions."""

    def test_or_chain_strings(self):
        """Should parse the OR chain SQL Server stores for IN lists."""
        clause = mssql_check_clause("([status]='inactive' OR [status]='active')")
        assert clause.column_name == "status"
        assert clause.constraint == StringConstraint(values=["inactive", "active"])

    def test_or_chain_numbers(self):
        """Should parse parenthesized numeric comparisons."""
        result = parse_mssql_check_constraint("([priority]=(3) OR [priority]=(2) OR [priority]=(1))")
        assert result == NumberConstraint(values=[3, 2, 1])

    def test_or_chain_boolean(self):
        """Should classify {0, 1} as boolean."""
        assert parse_mssql_check_constraint("([flag]=(1) OR [flag]=(0))") == BooleanConstraint()

    def test_in_list(self):
        """Should parse an IN list with national string prefixes."""
        result = parse_mssql_check_constraint("([kind] IN (N'a', N'b'))")
        assert result == StringConstraint(values=["a", "b"])

    @pytest.mark.parametrize("definition", [
        "([age]>=(0))",
        "([a]='x' OR [b]='y')",
        "([status]='only')",
    ])
    def test_unrecognized(self, definition):
        """Should return None for non-enumerated shapes."""
        assert parse_mssql_check_constraint(definition) is None
