"""Column type classification from JDBC type codes."""

from typing import Optional

from ..database.jdbc_types import JdbcType
from .model import DateType

# Considered as "long text" (CLOB, BLOB, etc.)
LONG_TEXT_TYPES = frozenset({
    JdbcType.LONGVARCHAR,
    JdbcType.CLOB,
    JdbcType.BLOB,
})

DATE_TYPES = {
    JdbcType.DATE: DateType.DATE_ONLY,
    JdbcType.TIME: DateType.TIME_ONLY,
    JdbcType.TIMESTAMP: DateType.DATE_AND_TIME,
}


def is_long_text(db_type_name: Optional[str], jdbc_type_code: int) -> bool:
    """True if the type code denotes a long character or large object type."""
    return jdbc_type_code in LONG_TEXT_TYPES


def date_subtype(db_type_name: Optional[str], jdbc_type_code: int) -> Optional[DateType]:
    """Temporal subtype for DATE, TIME and TIMESTAMP codes, None otherwise."""
    return DATE_TYPES.get(jdbc_type_code)
