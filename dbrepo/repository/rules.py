"""Naming and type rules.

The rules derive Java names and types from database names and types.
They are pluggable: any ``RepositoryRules`` implementation can be given
to the builders. Rule calls go through ``apply_rule`` which turns a
missing value or an exception into a classified ``RuleResult``; the
builders decide which placeholder to use.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..database.jdbc_types import JdbcType
from . import java_types
from .classifier import is_long_text


class RuleFailure(str, Enum):
    """Why a rule did not produce a value."""
    RETURNED_NONE = "returned_none"
    RAISED = "raised"


@dataclass(frozen=True)
class RuleResult:
    """Outcome of one rule call: a value, or a classified failure."""
    value: Optional[str] = None
    failure: Optional[RuleFailure] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def apply_rule(rule: Callable[..., Optional[str]], *args: Any) -> RuleResult:
    """Call a rule and classify its outcome.

    An empty string counts as no value. Exceptions are captured in the
    result, never raised.
    """
    try:
        value = rule(*args)
    except Exception as e:
        return RuleResult(failure=RuleFailure.RAISED, error=e)
    if value is None or value == "":
        return RuleResult(failure=RuleFailure.RETURNED_NONE)
    return RuleResult(value=value)


class RepositoryRules(ABC):
    """Contract for naming and type derivation rules.

    Implementations may return None or raise; callers tolerate both.
    """

    @abstractmethod
    def get_entity_class_name(self, table_name: str) -> Optional[str]:
        pass

    @abstractmethod
    def get_attribute_name(self, column_name: str) -> Optional[str]:
        pass

    @abstractmethod
    def get_attribute_type(self, db_type_name: str, jdbc_type_code: int, not_null: bool) -> Optional[str]:
        pass

    @abstractmethod
    def get_attribute_gui_label(self, column_name: str) -> Optional[str]:
        pass

    @abstractmethod
    def get_attribute_gui_type(self, column_name: str, jdbc_type_code: int) -> Optional[str]:
        pass


# JDBC type -> Java primitive type (used for NOT NULL columns)
_PRIMITIVE_TYPES = {
    JdbcType.BIT: "boolean",
    JdbcType.BOOLEAN: "boolean",
    JdbcType.TINYINT: "byte",
    JdbcType.SMALLINT: "short",
    JdbcType.INTEGER: "int",
    JdbcType.BIGINT: "long",
    JdbcType.REAL: "float",
    JdbcType.FLOAT: "double",
    JdbcType.DOUBLE: "double",
}

# JDBC type -> Java reference type
_OBJECT_TYPES = {
    JdbcType.CHAR: java_types.STRING_TYPE,
    JdbcType.VARCHAR: java_types.STRING_TYPE,
    JdbcType.LONGVARCHAR: java_types.STRING_TYPE,
    JdbcType.NCHAR: java_types.STRING_TYPE,
    JdbcType.NVARCHAR: java_types.STRING_TYPE,
    JdbcType.LONGNVARCHAR: java_types.STRING_TYPE,
    JdbcType.CLOB: java_types.STRING_TYPE,
    JdbcType.NCLOB: java_types.STRING_TYPE,
    JdbcType.SQLXML: java_types.STRING_TYPE,
    JdbcType.NUMERIC: "java.math.BigDecimal",
    JdbcType.DECIMAL: "java.math.BigDecimal",
    JdbcType.DATE: "java.util.Date",
    JdbcType.TIME: "java.util.Date",
    JdbcType.TIMESTAMP: "java.util.Date",
    JdbcType.TIME_WITH_TIMEZONE: "java.time.OffsetTime",
    JdbcType.TIMESTAMP_WITH_TIMEZONE: "java.time.OffsetDateTime",
    JdbcType.BINARY: "byte[]",
    JdbcType.VARBINARY: "byte[]",
    JdbcType.LONGVARBINARY: "byte[]",
    JdbcType.BLOB: "byte[]",
    JdbcType.ARRAY: "java.lang.Object",
    JdbcType.OTHER: "java.lang.Object",
    JdbcType.JAVA_OBJECT: "java.lang.Object",
}

_NUMBER_TYPES = frozenset({
    JdbcType.TINYINT, JdbcType.SMALLINT, JdbcType.INTEGER, JdbcType.BIGINT,
    JdbcType.REAL, JdbcType.FLOAT, JdbcType.DOUBLE, JdbcType.NUMERIC, JdbcType.DECIMAL,
})

_WORD_SPLIT = re.compile(r'[^0-9a-zA-Z]+')


def _words(name: str) -> list:
    """Split a database name like ``CUST_ORDER`` or ``cust-order`` into words."""
    return [w for w in _WORD_SPLIT.split(name or "") if w]


class StandardRepositoryRules(RepositoryRules):
    """Default rules: camelCase attributes, PascalCase classes, JDBC-to-Java types."""

    def get_entity_class_name(self, table_name: str) -> Optional[str]:
        """Convert table name to class name (PascalCase)."""
        words = _words(table_name)
        if not words:
            return None
        return ''.join(word.capitalize() for word in words)

    def get_attribute_name(self, column_name: str) -> Optional[str]:
        """Convert column name to attribute name (camelCase)."""
        words = _words(column_name)
        if not words:
            return None
        name = words[0].lower() + ''.join(word.capitalize() for word in words[1:])
        if name[0].isdigit():
            name = "_" + name
        return name

    def get_attribute_type(self, db_type_name: str, jdbc_type_code: int, not_null: bool) -> Optional[str]:
        """Java type for a JDBC type; primitives only for NOT NULL columns."""
        primitive = _PRIMITIVE_TYPES.get(jdbc_type_code)
        if primitive:
            return primitive if not_null else java_types.wrapper_for(primitive)
        return _OBJECT_TYPES.get(jdbc_type_code)

    def get_attribute_gui_label(self, column_name: str) -> Optional[str]:
        """Human readable label: ``CUST_NOTE`` -> ``Cust note``."""
        words = _words(column_name)
        if not words:
            return None
        return ' '.join(word.lower() for word in words).capitalize()

    def get_attribute_gui_type(self, column_name: str, jdbc_type_code: int) -> Optional[str]:
        """HTML input type hint for the column."""
        if jdbc_type_code in (JdbcType.BIT, JdbcType.BOOLEAN):
            return "checkbox"
        if jdbc_type_code in _NUMBER_TYPES:
            return "number"
        if jdbc_type_code == JdbcType.DATE:
            return "date"
        if jdbc_type_code in (JdbcType.TIME, JdbcType.TIME_WITH_TIMEZONE):
            return "time"
        if jdbc_type_code in (JdbcType.TIMESTAMP, JdbcType.TIMESTAMP_WITH_TIMEZONE):
            return "datetime"
        if is_long_text(None, jdbc_type_code):
            return "textarea"
        return "text"
