"""Raw database metadata descriptors produced by a metadata source."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DatabaseColumn:
    """Represents a database column as reported by the metadata source."""
    name: str
    db_type_name: str
    jdbc_type_code: int
    size: int = 0
    not_null: bool = False
    default_value: Optional[str] = None
    ordinal_position: int = 0
    comment: Optional[str] = None
    in_primary_key: bool = False
    used_in_foreign_key: int = 0
    auto_incremented: bool = False


@dataclass
class DatabaseForeignKeyColumn:
    """One column mapping of a (possibly multi-column) foreign key."""
    fk_name: str
    fk_sequence: int
    fk_table_name: str
    fk_column_name: str
    pk_table_name: str
    pk_column_name: str
    update_rule: int
    delete_rule: int
    deferrability: int


@dataclass
class DatabaseForeignKey:
    """Represents a foreign key with its column mappings in key order."""
    name: str
    columns: List[DatabaseForeignKeyColumn] = field(default_factory=list)


@dataclass
class DatabaseTable:
    """Represents a database table or view."""
    name: str
    catalog: Optional[str] = None
    schema: Optional[str] = None
    table_type: str = "TABLE"
    columns: List[DatabaseColumn] = field(default_factory=list)
    foreign_keys: List[DatabaseForeignKey] = field(default_factory=list)
