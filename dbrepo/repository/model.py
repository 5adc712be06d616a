"""Repository model: the language-neutral view of a database schema.

The model is built once per run by the assembler and handed to the code
generation stage, which treats it as read-only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..database.jdbc_types import rule_name_for, deferrability_name_for
from . import java_types


class DateType(str, Enum):
    """Temporal subtype of a date/time column."""
    DATE_ONLY = "D"
    TIME_ONLY = "T"
    DATE_AND_TIME = "DT"


@dataclass
class Column:
    """A column of an entity.

    Holds the raw database attributes and the attributes derived for
    the generated code. Optional derived attributes left at ``None`` are
    "not set" and are omitted from ``to_dict()``.
    """

    # Raw database attributes
    database_name: str
    database_type_name: str
    jdbc_type_code: int
    database_size: int = 0
    database_not_null: bool = False
    database_default_value: Optional[str] = None
    database_position: int = 0
    database_comment: Optional[str] = None

    # Derived attributes
    java_name: str = "???"
    java_type: str = "???"
    java_default_value: Optional[str] = None
    long_text: Optional[bool] = None
    date_type: Optional[DateType] = None
    primary_key: bool = False
    foreign_key: bool = False
    auto_incremented: bool = False

    # GUI hints
    label: Optional[str] = None
    input_type: Optional[str] = None

    # Validation flags
    java_not_null: bool = False
    not_empty: bool = False
    max_length: Optional[str] = None

    @property
    def is_java_primitive_type(self) -> bool:
        return java_types.is_primitive(self.java_type)

    @property
    def is_java_type_string(self) -> bool:
        return java_types.is_string(self.java_type)

    @property
    def database_not_null_as_string(self) -> str:
        return "true" if self.database_not_null else "false"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        data: Dict[str, Any] = {
            "databaseName": self.database_name,
            "databaseTypeName": self.database_type_name,
            "jdbcTypeCode": self.jdbc_type_code,
            "databaseSize": self.database_size,
            "databaseNotNull": self.database_not_null_as_string,
            "databasePosition": self.database_position,
            "javaName": self.java_name,
            "javaType": self.java_type,
            "primaryKey": self.primary_key,
            "foreignKey": self.foreign_key,
            "autoIncremented": self.auto_incremented,
        }
        optional = {
            "databaseDefaultValue": self.database_default_value,
            "databaseComment": self.database_comment,
            "javaDefaultValue": self.java_default_value,
            "longText": self.long_text,
            "dateType": self.date_type.value if self.date_type else None,
            "label": self.label,
            "inputType": self.input_type,
            "maxLength": self.max_length,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        if self.java_not_null:
            data["notNull"] = True
        if self.not_empty:
            data["notEmpty"] = True
        return data


@dataclass
class ForeignKeyColumn:
    """One column mapping of a foreign key."""
    sequence: int
    table_name: str
    column_name: str
    table_ref: str
    column_ref: str
    update_rule_code: int
    delete_rule_code: int
    deferrable_code: int

    @property
    def update_rule(self) -> str:
        return rule_name_for(self.update_rule_code)

    @property
    def delete_rule(self) -> str:
        return rule_name_for(self.delete_rule_code)

    @property
    def deferrable(self) -> str:
        return deferrability_name_for(self.deferrable_code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "tableName": self.table_name,
            "columnName": self.column_name,
            "tableRef": self.table_ref,
            "columnRef": self.column_ref,
            "updateRule": self.update_rule_code,
            "deleteRule": self.delete_rule_code,
            "deferrable": self.deferrable_code,
        }


@dataclass
class ForeignKey:
    """A named foreign key with its column mappings in key order."""
    name: str
    columns: List[ForeignKeyColumn] = field(default_factory=list)

    def store_foreign_key_column(self, column: ForeignKeyColumn) -> None:
        """Append a key column; the metadata source order is kept as is."""
        self.columns.append(column)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
        }


@dataclass
class Entity:
    """The model's representation of one database table or view."""
    name: str
    bean_java_class: Optional[str] = None
    catalog: Optional[str] = None
    schema: Optional[str] = None
    database_type: Optional[str] = None
    columns: Dict[str, Column] = field(default_factory=dict)
    foreign_keys: Dict[str, ForeignKey] = field(default_factory=dict)

    def store_column(self, column: Column) -> None:
        """Store a column by database name (an existing one is replaced)."""
        self.columns[column.database_name] = column

    def store_foreign_key(self, foreign_key: ForeignKey) -> None:
        """Store a foreign key by name (an existing one is replaced)."""
        self.foreign_keys[foreign_key.name] = foreign_key

    def get_column(self, name: str) -> Optional[Column]:
        return self.columns.get(name)

    def get_foreign_key(self, name: str) -> Optional[ForeignKey]:
        return self.foreign_keys.get(name)

    @property
    def primary_key_columns(self) -> List[Column]:
        return [c for c in self.columns.values() if c.primary_key]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "beanJavaClass": self.bean_java_class,
            "catalog": self.catalog,
            "schema": self.schema,
            "databaseType": self.database_type,
            "columns": [c.to_dict() for c in self.columns.values()],
            "foreignKeys": [fk.to_dict() for fk in self.foreign_keys.values()],
        }


@dataclass
class RepositoryModel:
    """Top-level container of all entities produced by one run."""
    database_name: Optional[str] = None
    database_product_name: Optional[str] = None
    entities: Dict[str, Entity] = field(default_factory=dict)

    def store_entity(self, entity: Entity) -> None:
        self.entities[entity.name] = entity

    def get_entity(self, name: str) -> Optional[Entity]:
        return self.entities.get(name)

    @property
    def entity_names(self) -> List[str]:
        return list(self.entities.keys())

    def __len__(self) -> int:
        return len(self.entities)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "databaseName": self.database_name,
            "databaseProductName": self.database_product_name,
            "entities": [e.to_dict() for e in self.entities.values()],
        }
