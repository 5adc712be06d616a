"""Shared pytest fixtures for dbrepo tests."""

import pytest
from typing import List, Optional

from dbrepo.database.base import MetadataSource
from dbrepo.database.jdbc_types import JdbcType, ForeignKeyRule, Deferrability
from dbrepo.database.models import (
    DatabaseColumn,
    DatabaseForeignKey,
    DatabaseForeignKeyColumn,
    DatabaseTable,
)
from dbrepo.diagnostics import DiagnosticSink
from dbrepo.repository.rules import StandardRepositoryRules


class FakeMetadataSource(MetadataSource):
    """In-memory metadata source serving prepared table descriptors."""

    def __init__(self, tables: List[DatabaseTable], primary_keys: Optional[dict] = None, name: str = "testdb"):
        self._tables = tables
        self._primary_keys = primary_keys or {}
        self._name = name
        self.connected = False
        self.connect_calls = 0
        self.close_calls = 0
        self.fail_on_connect: Optional[Exception] = None
        self.fail_on_tables: Optional[Exception] = None
        self.fail_on_close: Optional[Exception] = None

    @property
    def database_name(self) -> str:
        return self._name

    @property
    def product_name(self) -> str:
        return "Fake"

    def connect(self):
        self.connect_calls += 1
        if self.fail_on_connect:
            raise self.fail_on_connect
        self.connected = True
        return self

    def close(self):
        self.close_calls += 1
        self.connected = False
        if self.fail_on_close:
            raise self.fail_on_close

    def get_tables(self, schema_filter=None, include_views=True):
        if self.fail_on_tables:
            raise self.fail_on_tables
        tables = [
            DatabaseTable(name=t.name, catalog=t.catalog, schema=t.schema, table_type=t.table_type)
            for t in self._tables
            if (schema_filter is None or t.schema == schema_filter)
            and (include_views or t.table_type != "VIEW")
        ]
        return tables

    def _find(self, table: DatabaseTable) -> DatabaseTable:
        return next(t for t in self._tables if t.name == table.name)

    def get_columns(self, table):
        return list(self._find(table).columns)

    def get_primary_keys(self, table):
        return self._primary_keys.get(table.name, [])

    def get_foreign_keys(self, table):
        return list(self._find(table).foreign_keys)


class RaisingNameRules(StandardRepositoryRules):
    """Rules whose attribute name derivation fails for selected columns."""

    def __init__(self, failing_columns):
        self.failing_columns = set(failing_columns)

    def get_attribute_name(self, column_name):
        if column_name in self.failing_columns:
            raise ValueError(f"cannot name {column_name}")
        return super().get_attribute_name(column_name)


class NoneRules(StandardRepositoryRules):
    """Rules that return no name and no type for every column."""

    def get_attribute_name(self, column_name):
        return None

    def get_attribute_type(self, db_type_name, jdbc_type_code, not_null):
        return None


def make_column(name, type_name, type_code, **kwargs) -> DatabaseColumn:
    return DatabaseColumn(name=name, db_type_name=type_name, jdbc_type_code=int(type_code), **kwargs)


def make_fk_column(fk_name, seq, table, column, ref_table, ref_column) -> DatabaseForeignKeyColumn:
    return DatabaseForeignKeyColumn(
        fk_name=fk_name,
        fk_sequence=seq,
        fk_table_name=table,
        fk_column_name=column,
        pk_table_name=ref_table,
        pk_column_name=ref_column,
        update_rule=int(ForeignKeyRule.NO_ACTION),
        delete_rule=int(ForeignKeyRule.CASCADE),
        deferrability=int(Deferrability.NOT_DEFERRABLE),
    )


@pytest.fixture
def rules():
    return StandardRepositoryRules()


@pytest.fixture
def sink():
    """Create a fresh DiagnosticSink for each test."""
    return DiagnosticSink()


@pytest.fixture
def customer_table():
    """CUSTOMER table with an integer primary key and a CLOB note."""
    return DatabaseTable(
        name="CUSTOMER",
        catalog="testdb",
        schema="main",
        columns=[
            make_column("CUST_ID", "INTEGER", JdbcType.INTEGER, size=10, not_null=True,
                        ordinal_position=1, in_primary_key=True),
            make_column("CUST_NOTE", "CLOB", JdbcType.CLOB, size=0, ordinal_position=2,
                        comment="free text"),
        ],
    )


@pytest.fixture
def order_foreign_key():
    """Two-column foreign key ORDER -> CUSTOMER in declared order."""
    return DatabaseForeignKey(
        name="FK_ORDER_CUSTOMER",
        columns=[
            make_fk_column("FK_ORDER_CUSTOMER", 1, "ORDER", "CUST_ID", "CUSTOMER", "ID"),
            make_fk_column("FK_ORDER_CUSTOMER", 2, "ORDER", "CUST_TYPE", "CUSTOMER", "TYPE"),
        ],
    )


@pytest.fixture
def order_table(order_foreign_key):
    """ORDER table referencing CUSTOMER through a two-column key."""
    return DatabaseTable(
        name="ORDER",
        catalog="testdb",
        schema="main",
        columns=[
            make_column("ORDER_ID", "BIGINT", JdbcType.BIGINT, size=19, not_null=True,
                        ordinal_position=1, in_primary_key=True, auto_incremented=True),
            make_column("CUST_ID", "INTEGER", JdbcType.INTEGER, size=10, not_null=True,
                        ordinal_position=2, used_in_foreign_key=1),
            make_column("CUST_TYPE", "VARCHAR(5)", JdbcType.VARCHAR, size=5, not_null=True,
                        ordinal_position=3, used_in_foreign_key=1),
            make_column("ORDER_DATE", "DATE", JdbcType.DATE, size=10, ordinal_position=4),
        ],
        foreign_keys=[order_foreign_key],
    )


@pytest.fixture
def fake_source(customer_table, order_table):
    """Metadata source with CUSTOMER, ORDER and a view."""
    view = DatabaseTable(
        name="CUSTOMER_VIEW",
        catalog="testdb",
        schema="reporting",
        table_type="VIEW",
        columns=[make_column("CUST_ID", "INTEGER", JdbcType.INTEGER, size=10, ordinal_position=1)],
    )
    return FakeMetadataSource(
        [customer_table, order_table, view],
        primary_keys={"CUSTOMER": ["CUST_ID"], "ORDER": ["ORDER_ID"]},
    )
