"""DuckDB metadata source."""

import logging
import re
from pathlib import Path
from typing import Optional, List, Sequence, Any

from .base import MetadataSource
from .jdbc_types import type_code_for, ForeignKeyRule, Deferrability
from .models import DatabaseColumn, DatabaseForeignKey, DatabaseForeignKeyColumn, DatabaseTable

logger = logging.getLogger(__name__)

# e.g. FOREIGN KEY (cust_id, cust_type) REFERENCES customer(id, "type")
_FK_TEXT_PATTERN = re.compile(
    r'FOREIGN KEY\s*\((?P<columns>[^)]*)\)\s*REFERENCES\s+(?P<table>[^\s(]+)\s*\((?P<ref_columns>[^)]*)\)',
    re.IGNORECASE,
)


def _split_identifiers(text: str) -> List[str]:
    """Split a comma separated identifier list, removing quotes."""
    return [part.strip().strip('"') for part in text.split(',') if part.strip()]


class DuckDBMetadataSource(MetadataSource):
    """Reads table, column and foreign key metadata from a DuckDB database."""

    EXCLUDED_SCHEMAS = {'information_schema', 'pg_catalog'}

    def __init__(
        self,
        database_path: Optional[str] = None,
        connection_string: Optional[str] = None,
        read_only: bool = True,
    ):
        """Initialize DuckDB metadata source.

        Args:
            database_path: Path to .duckdb file (can be :memory: for in-memory)
            connection_string: Alternative connection string format
                               (e.g., duckdb:///path/to/db.duckdb)
            read_only: Open database in read-only mode (default True for introspection)
        """
        self.database_path = database_path
        self.connection_string = connection_string
        self.read_only = read_only
        self._connection = None
        self._database_name = self._extract_database_name()

    @classmethod
    def from_connection(cls, connection) -> "DuckDBMetadataSource":
        """Wrap an already open DuckDB connection (e.g. an in-memory one)."""
        source = cls(database_path=':memory:')
        source._connection = connection
        return source

    def _resolve_path(self) -> str:
        """File path to open; a ``duckdb:///file.duckdb?opts`` string is reduced to its path."""
        if self.database_path:
            return self.database_path
        if self.connection_string:
            path = self.connection_string
            for prefix in ('duckdb:///', 'duckdb://'):
                if path.startswith(prefix):
                    path = path[len(prefix):]
                    break
            return path.split('?', 1)[0]
        return ':memory:'

    def _extract_database_name(self) -> str:
        path = self._resolve_path()
        if path == ':memory:':
            return 'memory'
        return Path(path).stem or 'duckdb_database'

    @property
    def database_name(self) -> str:
        return self._database_name

    @property
    def product_name(self) -> str:
        return "DuckDB"

    def connect(self):
        """Connect directly to the DuckDB database file."""
        if self._connection is not None:
            return self._connection

        try:
            import duckdb
        except ImportError:
            raise ImportError(
                "duckdb is required. "
                "Install it with: pip install duckdb"
            )

        path = self._resolve_path()
        if path == ':memory:':
            self._connection = duckdb.connect(':memory:')
        else:
            self._connection = duckdb.connect(path, read_only=self.read_only)
        logger.debug("Connected to DuckDB database %s", path)
        return self._connection

    def close(self):
        """Close the DuckDB connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def _execute_query(self, sql: str, params: Sequence[Any] = ()) -> List:
        """Execute a parameterized SQL query and return all rows."""
        self.connect()
        return self._connection.execute(sql, list(params)).fetchall()

    def get_tables(self, schema_filter: Optional[str] = None, include_views: bool = True) -> List[DatabaseTable]:
        """Get all tables (and optionally views) of the current database."""
        table_types = ['BASE TABLE']
        if include_views:
            table_types.append('VIEW')

        placeholders = ", ".join("?" for _ in table_types)
        sql = f"""
            SELECT table_catalog, table_schema, table_name, table_type
            FROM information_schema.tables
            WHERE table_catalog = current_database()
              AND table_type IN ({placeholders})
        """
        params: List[Any] = list(table_types)
        if schema_filter:
            sql += " AND table_schema = ?"
            params.append(schema_filter)
        sql += " ORDER BY table_schema, table_name"

        tables = []
        for catalog, schema, name, table_type in self._execute_query(sql, params):
            if schema.lower() in self.EXCLUDED_SCHEMAS:
                continue
            tables.append(DatabaseTable(
                name=name,
                catalog=catalog,
                schema=schema,
                table_type='VIEW' if table_type == 'VIEW' else 'TABLE',
            ))
        return tables

    def get_columns(self, table: DatabaseTable) -> List[DatabaseColumn]:
        """Get all columns for a table."""
        result = self._execute_query("""
            SELECT
                column_name,
                data_type,
                character_maximum_length,
                numeric_precision,
                is_nullable,
                column_default,
                column_index,
                comment
            FROM duckdb_columns()
            WHERE database_name = current_database()
              AND schema_name = ?
              AND table_name = ?
            ORDER BY column_index
        """, [table.schema, table.name])

        columns = []
        for name, data_type, char_len, precision, nullable, default, position, comment in result:
            default_value = str(default) if default is not None else None
            columns.append(DatabaseColumn(
                name=name,
                db_type_name=data_type,
                jdbc_type_code=type_code_for(data_type),
                size=int(char_len or precision or 0),
                not_null=not nullable,
                default_value=default_value,
                ordinal_position=int(position),
                comment=comment,
                auto_incremented=bool(default_value and default_value.lower().startswith('nextval(')),
            ))
        return columns

    def get_primary_keys(self, table: DatabaseTable) -> List[str]:
        """Get primary key columns using duckdb_constraints()."""
        result = self._execute_query("""
            SELECT constraint_column_names
            FROM duckdb_constraints()
            WHERE database_name = current_database()
              AND schema_name = ?
              AND table_name = ?
              AND constraint_type = 'PRIMARY KEY'
        """, [table.schema, table.name])

        if not result:
            return []
        pk_columns = result[0][0]
        if isinstance(pk_columns, list):
            return pk_columns
        return [pk_columns]

    def get_foreign_keys(self, table: DatabaseTable) -> List[DatabaseForeignKey]:
        """Get foreign keys declared on a table.

        DuckDB has no named foreign keys and no referential actions, so
        names follow the ``<table>_<columns>_fkey`` convention and rules
        are reported as NO ACTION / NOT DEFERRABLE.
        """
        result = self._execute_query("""
            SELECT constraint_text
            FROM duckdb_constraints()
            WHERE database_name = current_database()
              AND schema_name = ?
              AND table_name = ?
              AND constraint_type = 'FOREIGN KEY'
            ORDER BY constraint_index
        """, [table.schema, table.name])

        foreign_keys = []
        seen = set()
        for (constraint_text,) in result:
            # Referenced side of a key is reported with an empty text
            if not constraint_text:
                continue
            match = _FK_TEXT_PATTERN.search(constraint_text)
            if not match:
                logger.warning("Cannot parse foreign key on %s: %s", table.name, constraint_text)
                continue

            fk_columns = _split_identifiers(match.group('columns'))
            ref_table = match.group('table').strip('"').split('.')[-1].strip('"')
            ref_columns = _split_identifiers(match.group('ref_columns'))

            fk_name = f"{table.name}_{'_'.join(fk_columns)}_fkey"
            if fk_name in seen:
                continue
            seen.add(fk_name)

            foreign_key = DatabaseForeignKey(name=fk_name)
            for sequence, (fk_col, ref_col) in enumerate(zip(fk_columns, ref_columns), start=1):
                foreign_key.columns.append(DatabaseForeignKeyColumn(
                    fk_name=fk_name,
                    fk_sequence=sequence,
                    fk_table_name=table.name,
                    fk_column_name=fk_col,
                    pk_table_name=ref_table,
                    pk_column_name=ref_col,
                    update_rule=int(ForeignKeyRule.NO_ACTION),
                    delete_rule=int(ForeignKeyRule.NO_ACTION),
                    deferrability=int(Deferrability.NOT_DEFERRABLE),
                ))
            foreign_keys.append(foreign_key)

        return foreign_keys
