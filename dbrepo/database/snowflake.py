"""Snowflake metadata source."""

import os
from typing import Optional, List, Dict, Any

from .base import MetadataSource
from .jdbc_types import JdbcType, type_code_for, rule_code_for, deferrability_code_for
from .models import DatabaseColumn, DatabaseForeignKey, DatabaseForeignKeyColumn, DatabaseTable


def _snowflake_type_code(data_type: str) -> int:
    """Snowflake reports every character column as TEXT (a VARCHAR synonym)."""
    type_upper = (data_type or "").upper()
    if type_upper == "TEXT":
        return int(JdbcType.VARCHAR)
    if type_upper in ("VARIANT", "OBJECT"):
        return int(JdbcType.OTHER)
    return type_code_for(type_upper)


class SnowflakeMetadataSource(MetadataSource):
    """Reads table, column and foreign key metadata from Snowflake."""

    EXCLUDED_SCHEMAS = {'INFORMATION_SCHEMA'}

    def __init__(
        self,
        database: str,
        account: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        warehouse: Optional[str] = None,
        role: Optional[str] = None,
    ):
        self.database = database
        self.account = account or os.environ.get("SNOWFLAKE_ACCOUNT")
        self.user = user or os.environ.get("SNOWFLAKE_USER")
        self.password = password or os.environ.get("SNOWFLAKE_PASSWORD")
        self.warehouse = warehouse or os.environ.get("SNOWFLAKE_WAREHOUSE")
        self.role = role or os.environ.get("SNOWFLAKE_ROLE")
        self._connection = None

    @property
    def database_name(self) -> str:
        return self.database

    @property
    def product_name(self) -> str:
        return "Snowflake"

    def connect(self):
        """Connect to Snowflake."""
        if self._connection is not None:
            return self._connection

        try:
            import snowflake.connector
        except ImportError:
            raise ImportError(
                "snowflake-connector-python is required. "
                "Install it with: pip install snowflake-connector-python"
            )

        self._connection = snowflake.connector.connect(
            account=self.account,
            user=self.user,
            password=self.password,
            warehouse=self.warehouse,
            database=self.database,
            role=self.role,
        )
        return self._connection

    def close(self):
        """Close the connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def _query(self, sql: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        """Run a query and return rows as dicts keyed by lower-case column name."""
        conn = self.connect()
        cursor = conn.cursor()
        try:
            cursor.execute(sql, params)
            names = [desc[0].lower() for desc in cursor.description]
            return [dict(zip(names, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def _qualified(self, table: DatabaseTable) -> str:
        return f'"{self.database}"."{table.schema}"."{table.name}"'

    def get_tables(self, schema_filter: Optional[str] = None, include_views: bool = True) -> List[DatabaseTable]:
        """Get all tables (and optionally views) in the database."""
        table_types = ["BASE TABLE"]
        if include_views:
            table_types.append("VIEW")

        placeholders = ", ".join(["%s"] * len(table_types))
        sql = f"""
            SELECT TABLE_CATALOG, TABLE_SCHEMA, TABLE_NAME, TABLE_TYPE
            FROM "{self.database}".INFORMATION_SCHEMA.TABLES
            WHERE TABLE_TYPE IN ({placeholders})
        """
        params = list(table_types)
        if schema_filter:
            sql += " AND TABLE_SCHEMA = %s"
            params.append(schema_filter)
        sql += " ORDER BY TABLE_SCHEMA, TABLE_NAME"

        tables = []
        for row in self._query(sql, tuple(params)):
            if row["table_schema"] in self.EXCLUDED_SCHEMAS:
                continue
            tables.append(DatabaseTable(
                name=row["table_name"],
                catalog=row["table_catalog"],
                schema=row["table_schema"],
                table_type="VIEW" if row["table_type"] == "VIEW" else "TABLE",
            ))
        return tables

    def get_columns(self, table: DatabaseTable) -> List[DatabaseColumn]:
        """Get all columns in a table."""
        rows = self._query(f"""
            SELECT COLUMN_NAME, DATA_TYPE, CHARACTER_MAXIMUM_LENGTH, NUMERIC_PRECISION,
                   IS_NULLABLE, COLUMN_DEFAULT, ORDINAL_POSITION, COMMENT, IS_IDENTITY
            FROM "{self.database}".INFORMATION_SCHEMA.COLUMNS
            WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s
            ORDER BY ORDINAL_POSITION
        """, (table.schema, table.name))

        return [
            DatabaseColumn(
                name=row["column_name"],
                db_type_name=row["data_type"],
                jdbc_type_code=_snowflake_type_code(row["data_type"]),
                size=int(row["character_maximum_length"] or row["numeric_precision"] or 0),
                not_null=row["is_nullable"] == "NO",
                default_value=row["column_default"],
                ordinal_position=int(row["ordinal_position"]),
                comment=row["comment"],
                auto_incremented=row["is_identity"] == "YES",
            )
            for row in rows
        ]

    def get_primary_keys(self, table: DatabaseTable) -> List[str]:
        """Get primary key columns in key sequence order."""
        rows = self._query(f"SHOW PRIMARY KEYS IN TABLE {self._qualified(table)}")
        rows.sort(key=lambda r: int(r["key_sequence"]))
        return [row["column_name"] for row in rows]

    def get_foreign_keys(self, table: DatabaseTable) -> List[DatabaseForeignKey]:
        """Get imported keys, grouped by foreign key name."""
        rows = self._query(f"SHOW IMPORTED KEYS IN TABLE {self._qualified(table)}")

        foreign_keys: Dict[str, DatabaseForeignKey] = {}
        for row in rows:
            fk_name = row["fk_name"]
            foreign_key = foreign_keys.setdefault(fk_name, DatabaseForeignKey(name=fk_name))
            foreign_key.columns.append(DatabaseForeignKeyColumn(
                fk_name=fk_name,
                fk_sequence=int(row["key_sequence"]),
                fk_table_name=row["fk_table_name"],
                fk_column_name=row["fk_column_name"],
                pk_table_name=row["pk_table_name"],
                pk_column_name=row["pk_column_name"],
                update_rule=rule_code_for(row["update_rule"]),
                delete_rule=rule_code_for(row["delete_rule"]),
                deferrability=deferrability_code_for(row["deferrability"]),
            ))
        return list(foreign_keys.values())
