"""Tests for native type and rule code mapping."""

import pytest

from dbrepo.database.jdbc_types import (
    JdbcType,
    ForeignKeyRule,
    Deferrability,
    type_code_for,
    rule_code_for,
    deferrability_code_for,
    rule_name_for,
    deferrability_name_for,
)


class TestTypeCodeFor:
    """Test native type name to JDBC code mapping."""

    @pytest.mark.parametrize("native,expected", [
        ("VARCHAR", JdbcType.VARCHAR),
        ("VARCHAR(50)", JdbcType.VARCHAR),
        ("character varying", JdbcType.VARCHAR),
        ("CHAR(2)", JdbcType.CHAR),
        ("TEXT", JdbcType.LONGVARCHAR),
        ("CLOB", JdbcType.CLOB),
        ("BLOB", JdbcType.BLOB),
        ("INTEGER", JdbcType.INTEGER),
        ("INT", JdbcType.INTEGER),
        ("BIGINT", JdbcType.BIGINT),
        ("SMALLINT", JdbcType.SMALLINT),
        ("TINYINT", JdbcType.TINYINT),
        ("DECIMAL(10,2)", JdbcType.DECIMAL),
        ("NUMBER(38,0)", JdbcType.NUMERIC),
        ("DOUBLE", JdbcType.DOUBLE),
        ("REAL", JdbcType.REAL),
        ("BOOLEAN", JdbcType.BOOLEAN),
        ("DATE", JdbcType.DATE),
        ("TIME", JdbcType.TIME),
        ("TIMESTAMP", JdbcType.TIMESTAMP),
        ("DATETIME", JdbcType.TIMESTAMP),
        ("TIMESTAMP WITH TIME ZONE", JdbcType.TIMESTAMP_WITH_TIMEZONE),
        ("INTERVAL", JdbcType.OTHER),
        ("INTEGER[]", JdbcType.ARRAY),
        ("UUID", JdbcType.VARCHAR),
    ])
    def test_known_types(self, native, expected):
        assert type_code_for(native) == int(expected)

    def test_unknown_and_empty(self):
        """Unknown or missing names map to OTHER."""
        assert type_code_for("GEOMETRY") == int(JdbcType.OTHER)
        assert type_code_for("") == int(JdbcType.OTHER)
        assert type_code_for(None) == int(JdbcType.OTHER)


class TestRuleCodes:
    """Test referential rule code mapping."""

    def test_rule_names(self):
        assert rule_code_for("CASCADE") == int(ForeignKeyRule.CASCADE)
        assert rule_code_for("set null") == int(ForeignKeyRule.SET_NULL)
        assert rule_code_for("NO ACTION") == int(ForeignKeyRule.NO_ACTION)
        assert rule_code_for(None) == int(ForeignKeyRule.NO_ACTION)

    def test_deferrability_names(self):
        assert deferrability_code_for("INITIALLY DEFERRED") == int(Deferrability.INITIALLY_DEFERRED)
        assert deferrability_code_for("NOT DEFERRABLE") == int(Deferrability.NOT_DEFERRABLE)
        assert deferrability_code_for(None) == int(Deferrability.NOT_DEFERRABLE)

    def test_render_codes(self):
        assert rule_name_for(0) == "CASCADE"
        assert rule_name_for(2) == "SET NULL"
        assert rule_name_for(99) == "UNKNOWN"
        assert deferrability_name_for(6) == "INITIALLY IMMEDIATE"
        assert deferrability_name_for(-1) == "UNKNOWN"
