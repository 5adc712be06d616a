"""JDBC-style type and referential rule codes.

Metadata sources report column types with the integer codes of
``java.sql.Types`` and foreign key rules with the codes of
``java.sql.DatabaseMetaData.importedKey*`` so that the repository model
stays independent of the database product.
"""

from enum import IntEnum
from typing import Optional


class JdbcType(IntEnum):
    """Column type codes (``java.sql.Types``)."""
    BIT = -7
    TINYINT = -6
    SMALLINT = 5
    INTEGER = 4
    BIGINT = -5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    NUMERIC = 2
    DECIMAL = 3
    CHAR = 1
    VARCHAR = 12
    LONGVARCHAR = -1
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    NULL = 0
    OTHER = 1111
    JAVA_OBJECT = 2000
    DISTINCT = 2001
    STRUCT = 2002
    ARRAY = 2003
    BLOB = 2004
    CLOB = 2005
    REF = 2006
    DATALINK = 70
    BOOLEAN = 16
    ROWID = -8
    NCHAR = -15
    NVARCHAR = -9
    LONGNVARCHAR = -16
    NCLOB = 2011
    SQLXML = 2009
    TIME_WITH_TIMEZONE = 2013
    TIMESTAMP_WITH_TIMEZONE = 2014


class ForeignKeyRule(IntEnum):
    """Update/delete rule codes for imported keys."""
    CASCADE = 0
    RESTRICT = 1
    SET_NULL = 2
    NO_ACTION = 3
    SET_DEFAULT = 4


class Deferrability(IntEnum):
    """Deferrability codes for imported keys."""
    INITIALLY_DEFERRED = 5
    INITIALLY_IMMEDIATE = 6
    NOT_DEFERRABLE = 7


# Checked in order, first match wins. Longer/more specific names first.
_NATIVE_TYPE_PATTERNS = [
    ("TIMESTAMP WITH TIME ZONE", JdbcType.TIMESTAMP_WITH_TIMEZONE),
    ("TIMESTAMPTZ", JdbcType.TIMESTAMP_WITH_TIMEZONE),
    ("TIMESTAMP_TZ", JdbcType.TIMESTAMP_WITH_TIMEZONE),
    ("TIME WITH TIME ZONE", JdbcType.TIME_WITH_TIMEZONE),
    ("TIMETZ", JdbcType.TIME_WITH_TIMEZONE),
    ("TIMESTAMP", JdbcType.TIMESTAMP),
    ("DATETIME", JdbcType.TIMESTAMP),
    ("DATE", JdbcType.DATE),
    ("TIME", JdbcType.TIME),
    ("INTERVAL", JdbcType.OTHER),
    ("NCLOB", JdbcType.NCLOB),
    ("CLOB", JdbcType.CLOB),
    ("BLOB", JdbcType.BLOB),
    ("BYTEA", JdbcType.VARBINARY),
    ("VARBINARY", JdbcType.VARBINARY),
    ("BINARY", JdbcType.BINARY),
    ("LONGTEXT", JdbcType.LONGVARCHAR),
    ("MEDIUMTEXT", JdbcType.LONGVARCHAR),
    ("TEXT", JdbcType.LONGVARCHAR),
    ("CHARACTER VARYING", JdbcType.VARCHAR),
    ("NVARCHAR", JdbcType.NVARCHAR),
    ("VARCHAR", JdbcType.VARCHAR),
    ("STRING", JdbcType.VARCHAR),
    ("UUID", JdbcType.VARCHAR),
    ("JSON", JdbcType.VARCHAR),
    ("NCHAR", JdbcType.NCHAR),
    ("CHAR", JdbcType.CHAR),
    ("BOOLEAN", JdbcType.BOOLEAN),
    ("BOOL", JdbcType.BOOLEAN),
    ("BIT", JdbcType.BIT),
    ("HUGEINT", JdbcType.NUMERIC),
    ("UBIGINT", JdbcType.NUMERIC),
    ("BIGINT", JdbcType.BIGINT),
    ("INT8", JdbcType.BIGINT),
    ("USMALLINT", JdbcType.INTEGER),
    ("SMALLINT", JdbcType.SMALLINT),
    ("INT2", JdbcType.SMALLINT),
    ("UTINYINT", JdbcType.SMALLINT),
    ("TINYINT", JdbcType.TINYINT),
    ("UINTEGER", JdbcType.BIGINT),
    ("INTEGER", JdbcType.INTEGER),
    ("INT4", JdbcType.INTEGER),
    ("INT", JdbcType.INTEGER),
    ("DECIMAL", JdbcType.DECIMAL),
    ("NUMERIC", JdbcType.NUMERIC),
    ("NUMBER", JdbcType.NUMERIC),
    ("DOUBLE", JdbcType.DOUBLE),
    ("FLOAT8", JdbcType.DOUBLE),
    ("FLOAT4", JdbcType.REAL),
    ("FLOAT", JdbcType.FLOAT),
    ("REAL", JdbcType.REAL),
    ("ARRAY", JdbcType.ARRAY),
    ("STRUCT", JdbcType.STRUCT),
]

_RULE_NAMES = {
    "CASCADE": ForeignKeyRule.CASCADE,
    "RESTRICT": ForeignKeyRule.RESTRICT,
    "SET NULL": ForeignKeyRule.SET_NULL,
    "NO ACTION": ForeignKeyRule.NO_ACTION,
    "SET DEFAULT": ForeignKeyRule.SET_DEFAULT,
}

_DEFERRABILITY_NAMES = {
    "INITIALLY DEFERRED": Deferrability.INITIALLY_DEFERRED,
    "INITIALLY IMMEDIATE": Deferrability.INITIALLY_IMMEDIATE,
    "NOT DEFERRABLE": Deferrability.NOT_DEFERRABLE,
}


def type_code_for(db_type_name: Optional[str]) -> int:
    """Map a native type name (e.g. ``VARCHAR(50)``) to a JDBC type code.

    Array types (``INTEGER[]``) map to ARRAY. Unknown names map to OTHER.
    """
    if not db_type_name:
        return int(JdbcType.OTHER)
    type_upper = db_type_name.strip().upper()
    if type_upper.endswith("]"):
        return int(JdbcType.ARRAY)
    # Strip size/precision: VARCHAR(50) -> VARCHAR
    base = type_upper.split("(")[0].strip()
    for pattern, code in _NATIVE_TYPE_PATTERNS:
        if base.startswith(pattern):
            return int(code)
    return int(JdbcType.OTHER)


def rule_code_for(rule_name: Optional[str]) -> int:
    """Map an update/delete rule name to its code (NO ACTION when unknown)."""
    if not rule_name:
        return int(ForeignKeyRule.NO_ACTION)
    return int(_RULE_NAMES.get(rule_name.strip().upper().replace("_", " "), ForeignKeyRule.NO_ACTION))


def deferrability_code_for(name: Optional[str]) -> int:
    """Map a deferrability name to its code (NOT DEFERRABLE when unknown)."""
    if not name:
        return int(Deferrability.NOT_DEFERRABLE)
    return int(_DEFERRABILITY_NAMES.get(name.strip().upper().replace("_", " "), Deferrability.NOT_DEFERRABLE))


def rule_name_for(code: int) -> str:
    """Render an update/delete rule code as SQL text."""
    try:
        return ForeignKeyRule(code).name.replace("_", " ")
    except ValueError:
        return "UNKNOWN"


def deferrability_name_for(code: int) -> str:
    """Render a deferrability code as SQL text."""
    try:
        return Deferrability(code).name.replace("_", " ")
    except ValueError:
        return "UNKNOWN"
