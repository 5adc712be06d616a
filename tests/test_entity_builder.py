"""Tests for building entities and foreign keys."""

import pytest

from dbrepo.database.jdbc_types import JdbcType
from dbrepo.database.models import DatabaseForeignKey, DatabaseTable
from dbrepo.repository.builders import EntityBuilder, ForeignKeyBuilder
from dbrepo.repository.model import RepositoryModel
from dbrepo.repository.rules import StandardRepositoryRules

from conftest import make_column, make_fk_column


@pytest.fixture
def builder(rules, sink):
    return EntityBuilder(rules, sink)


class TestForeignKeyBuilder:
    """Test foreign key construction."""

    def test_preserves_declared_order(self, order_foreign_key):
        foreign_key = ForeignKeyBuilder().build(order_foreign_key)

        assert foreign_key.name == "FK_ORDER_CUSTOMER"
        assert [(c.sequence, c.table_name, c.column_name, c.table_ref, c.column_ref)
                for c in foreign_key.columns] == [
            (1, "ORDER", "CUST_ID", "CUSTOMER", "ID"),
            (2, "ORDER", "CUST_TYPE", "CUSTOMER", "TYPE"),
        ]

    def test_copies_rule_codes(self, order_foreign_key):
        fk_col = ForeignKeyBuilder().build(order_foreign_key).columns[0]
        assert fk_col.update_rule_code == 3
        assert fk_col.delete_rule_code == 0
        assert fk_col.deferrable_code == 7
        assert fk_col.update_rule == "NO ACTION"
        assert fk_col.delete_rule == "CASCADE"
        assert fk_col.deferrable == "NOT DEFERRABLE"

    def test_sequence_not_resorted(self):
        """The metadata source order is kept even if sequences are out of order."""
        db_fk = DatabaseForeignKey(name="FK_X", columns=[
            make_fk_column("FK_X", 2, "A", "B_TYPE", "B", "TYPE"),
            make_fk_column("FK_X", 1, "A", "B_ID", "B", "ID"),
        ])
        foreign_key = ForeignKeyBuilder().build(db_fk)
        assert [c.sequence for c in foreign_key.columns] == [2, 1]

    def test_empty_foreign_key(self):
        foreign_key = ForeignKeyBuilder().build(DatabaseForeignKey(name="FK_EMPTY"))
        assert foreign_key.name == "FK_EMPTY"
        assert foreign_key.columns == []


class TestEntityBuilder:
    """Test entity construction and registration."""

    def test_customer_scenario(self, builder, customer_table):
        model = RepositoryModel()
        entity = builder.build(model, customer_table)

        assert list(entity.columns) == ["CUST_ID", "CUST_NOTE"]
        cust_id = entity.get_column("CUST_ID")
        cust_note = entity.get_column("CUST_NOTE")
        assert cust_id.primary_key is True
        assert cust_id.long_text is None
        assert cust_note.long_text is True
        assert cust_note.primary_key is False

    def test_table_attributes(self, builder, customer_table):
        entity = builder.build(RepositoryModel(), customer_table)
        assert entity.name == "CUSTOMER"
        assert entity.bean_java_class == "Customer"
        assert entity.catalog == "testdb"
        assert entity.schema == "main"
        assert entity.database_type == "TABLE"

    def test_registers_entity_in_model(self, builder, customer_table):
        model = RepositoryModel()
        entity = builder.build(model, customer_table)
        assert model.get_entity("CUSTOMER") is entity
        assert len(model) == 1

    def test_foreign_keys_stored_by_name(self, builder, order_table):
        entity = builder.build(RepositoryModel(), order_table)
        assert list(entity.foreign_keys) == ["FK_ORDER_CUSTOMER"]
        assert len(entity.get_foreign_key("FK_ORDER_CUSTOMER").columns) == 2
        assert entity.get_column("CUST_ID").foreign_key is True
        assert entity.get_column("ORDER_ID").foreign_key is False

    def test_empty_table(self, builder):
        entity = builder.build(RepositoryModel(), DatabaseTable(name="EMPTY_TABLE"))
        assert entity.name == "EMPTY_TABLE"
        assert entity.bean_java_class == "EmptyTable"
        assert entity.columns == {}
        assert entity.foreign_keys == {}

    def test_duplicate_column_name_overwrites(self, builder):
        table = DatabaseTable(name="T", columns=[
            make_column("C", "INTEGER", JdbcType.INTEGER, ordinal_position=1),
            make_column("C", "VARCHAR", JdbcType.VARCHAR, ordinal_position=2),
        ])
        entity = builder.build(RepositoryModel(), table)
        assert len(entity.columns) == 1
        assert entity.get_column("C").database_position == 2

    def test_primary_key_columns(self, builder, order_table):
        entity = builder.build(RepositoryModel(), order_table)
        assert [c.database_name for c in entity.primary_key_columns] == ["ORDER_ID"]

    def test_class_name_rule_failure(self, sink, customer_table):
        class NoClassRules(StandardRepositoryRules):
            def get_entity_class_name(self, table_name):
                raise RuntimeError("boom")

        entity = EntityBuilder(NoClassRules(), sink).build(RepositoryModel(), customer_table)
        assert entity.bean_java_class == "???"
        assert len(entity.columns) == 2
        assert any(d.table == "CUSTOMER" for d in sink.warnings)
