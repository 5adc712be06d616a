"""Builders turning raw database descriptors into repository model objects.

Rule failures on a single column never abort the build: the failing
value is replaced by a placeholder and a diagnostic is emitted.
"""

from typing import Optional

from ..database.models import DatabaseColumn, DatabaseForeignKey, DatabaseTable
from ..diagnostics import DiagnosticSink
from . import java_types
from .classifier import is_long_text, date_subtype
from .model import Column, Entity, ForeignKey, ForeignKeyColumn, RepositoryModel
from .rules import RepositoryRules, RuleFailure, RuleResult, apply_rule

# Placeholder when the rule raised (the value was never derived)
PLACEHOLDER_UNDERIVED = "???"
# Placeholder when the rule explicitly returned no value
PLACEHOLDER_NONE = "null"


def resolve(result: RuleResult) -> str:
    """Value of a rule result, or the placeholder matching its failure.

    A rule that raised renders as ``???``, a rule that returned nothing
    as ``null``.
    """
    if result.ok:
        return result.value
    if result.failure == RuleFailure.RETURNED_NONE:
        return PLACEHOLDER_NONE
    return PLACEHOLDER_UNDERIVED


class ColumnBuilder:
    """Builds a model ``Column`` from a raw database column."""

    def __init__(self, rules: RepositoryRules, sink: Optional[DiagnosticSink] = None):
        self.rules = rules
        self.sink = sink or DiagnosticSink()

    def build(self, db_col: DatabaseColumn, table_name: Optional[str] = None) -> Column:
        """Build a column. Never raises on rule failures."""
        type_result = apply_rule(
            self.rules.get_attribute_type, db_col.db_type_name, db_col.jdbc_type_code, db_col.not_null
        )
        name_result = apply_rule(self.rules.get_attribute_name, db_col.name)
        java_type = resolve(type_result)
        java_name = resolve(name_result)

        for what, result in (("type", type_result), ("name", name_result)):
            if result.failure == RuleFailure.RAISED:
                self.sink.warning(
                    f"Attribute {what} rule failed for column {db_col.name}: {result.error!r}",
                    table=table_name, column=db_col.name,
                )
            elif result.failure == RuleFailure.RETURNED_NONE:
                self.sink.warning(
                    f"Attribute {what} rule returned no value for column {db_col.name}",
                    table=table_name, column=db_col.name,
                )

        self.sink.info(
            f"  - Column : {db_col.name} ( {db_col.jdbc_type_code} : {db_col.db_type_name} ) ---> "
            f"{java_name} ( {java_type} )",
            table=table_name, column=db_col.name,
        )

        column = Column(
            database_name=db_col.name,
            database_type_name=db_col.db_type_name,
            jdbc_type_code=db_col.jdbc_type_code,
            database_size=db_col.size,
            database_not_null=db_col.not_null,
            java_name=java_name,
            java_type=java_type,
        )

        # Only primitive types have a language default value
        default_value = java_types.default_value_for(java_type)
        if default_value is not None:
            column.java_default_value = default_value

        if is_long_text(db_col.db_type_name, db_col.jdbc_type_code):
            column.long_text = True
        date_type = date_subtype(db_col.db_type_name, db_col.jdbc_type_code)
        if date_type is not None:
            column.date_type = date_type

        column.primary_key = db_col.in_primary_key
        column.foreign_key = db_col.used_in_foreign_key > 0
        column.auto_incremented = db_col.auto_incremented
        column.database_position = db_col.ordinal_position
        column.database_default_value = db_col.default_value
        column.database_comment = db_col.comment

        column.label = self._optional_rule(
            self.rules.get_attribute_gui_label, db_col.name, table_name=table_name, column=db_col.name
        )
        column.input_type = self._optional_rule(
            self.rules.get_attribute_gui_type, db_col.name, db_col.jdbc_type_code,
            table_name=table_name, column=db_col.name,
        )

        # Validation flags, only meaningful for reference types
        if not column.is_java_primitive_type:
            if db_col.not_null:
                column.java_not_null = True
                column.not_empty = True
            if column.is_java_type_string:
                column.max_length = str(db_col.size)

        return column

    def _optional_rule(self, rule, *args, table_name: Optional[str] = None, column: Optional[str] = None) -> Optional[str]:
        result = apply_rule(rule, *args)
        if result.failure == RuleFailure.RAISED:
            self.sink.warning(
                f"{getattr(rule, '__name__', 'rule')} failed for column {column}: {result.error!r}",
                table=table_name, column=column,
            )
        return result.value


class ForeignKeyBuilder:
    """Builds a model ``ForeignKey`` from a raw foreign key."""

    def build(self, db_fk: DatabaseForeignKey) -> ForeignKey:
        # The name must be set before the key is stored in an entity
        foreign_key = ForeignKey(name=db_fk.name)

        for db_fk_col in db_fk.columns:
            foreign_key.store_foreign_key_column(ForeignKeyColumn(
                sequence=db_fk_col.fk_sequence,
                table_name=db_fk_col.fk_table_name,
                column_name=db_fk_col.fk_column_name,
                table_ref=db_fk_col.pk_table_name,
                column_ref=db_fk_col.pk_column_name,
                update_rule_code=db_fk_col.update_rule,
                delete_rule_code=db_fk_col.delete_rule,
                deferrable_code=db_fk_col.deferrability,
            ))
        return foreign_key


class EntityBuilder:
    """Builds a model ``Entity`` from a raw table and stores it in the model."""

    def __init__(
        self,
        rules: RepositoryRules,
        sink: Optional[DiagnosticSink] = None,
        column_builder: Optional[ColumnBuilder] = None,
        foreign_key_builder: Optional[ForeignKeyBuilder] = None,
    ):
        self.rules = rules
        self.sink = sink or DiagnosticSink()
        self.column_builder = column_builder or ColumnBuilder(rules, self.sink)
        self.foreign_key_builder = foreign_key_builder or ForeignKeyBuilder()

    def build(self, model: RepositoryModel, db_table: DatabaseTable) -> Entity:
        """Create an entity from the table, register it in the model and return it."""
        self.sink.debug(f"Building entity {db_table.name}", table=db_table.name)

        entity = Entity(name=db_table.name)

        class_result = apply_rule(self.rules.get_entity_class_name, entity.name)
        if not class_result.ok:
            self.sink.warning(
                f"Entity class name rule failed for table {db_table.name} ({class_result.failure.value})",
                table=db_table.name,
            )
        entity.bean_java_class = resolve(class_result)
        entity.catalog = db_table.catalog
        entity.schema = db_table.schema
        entity.database_type = db_table.table_type

        for db_col in db_table.columns:
            entity.store_column(self.column_builder.build(db_col, table_name=db_table.name))

        for db_fk in db_table.foreign_keys:
            entity.store_foreign_key(self.foreign_key_builder.build(db_fk))

        model.store_entity(entity)
        self.sink.info(
            f"Entity {db_table.name} stored "
            f"({len(entity.columns)} columns, {len(entity.foreign_keys)} foreign keys)",
            table=db_table.name,
        )
        return entity
