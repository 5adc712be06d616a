"""Abstract base class for database metadata sources."""

from abc import ABC, abstractmethod
from collections import Counter
from typing import Optional, List

from .models import DatabaseTable, DatabaseColumn, DatabaseForeignKey


class MetadataSource(ABC):
    """Abstract base class for database metadata introspection.

    Subclasses must implement the abstract methods to provide
    database-specific metadata queries. ``load_tables`` combines them
    into fully populated table descriptors.
    """

    # Override in subclasses to exclude system schemas
    EXCLUDED_SCHEMAS: set = {'INFORMATION_SCHEMA'}

    @property
    @abstractmethod
    def database_name(self) -> str:
        """Name of the introspected database."""
        pass

    @property
    def product_name(self) -> str:
        """Database product name (e.g. ``DuckDB``)."""
        return "unknown"

    @abstractmethod
    def connect(self):
        """Establish connection to the database.

        Calling it again on an open source returns the same connection.
        """
        pass

    @abstractmethod
    def close(self):
        """Close the database connection."""
        pass

    @abstractmethod
    def get_tables(self, schema_filter: Optional[str] = None, include_views: bool = True) -> List[DatabaseTable]:
        """Get all tables (and optionally views).

        Args:
            schema_filter: Optional schema name to restrict to
            include_views: Whether to include views

        Returns:
            Table descriptors without columns or foreign keys
        """
        pass

    @abstractmethod
    def get_columns(self, table: DatabaseTable) -> List[DatabaseColumn]:
        """Get all columns for a table, ordered by ordinal position."""
        pass

    @abstractmethod
    def get_primary_keys(self, table: DatabaseTable) -> List[str]:
        """Get primary key column names for a table."""
        pass

    @abstractmethod
    def get_foreign_keys(self, table: DatabaseTable) -> List[DatabaseForeignKey]:
        """Get foreign keys declared on a table.

        Key columns are returned in key sequence order.
        """
        pass

    def load_tables(self, schema_filter: Optional[str] = None, include_views: bool = True) -> List[DatabaseTable]:
        """Introspect all visible tables with their columns and foreign keys.

        This method provides a common implementation across all databases
        and uses the abstract methods for database-specific operations.

        Args:
            schema_filter: Optional schema name to restrict to
            include_views: Whether to include views

        Returns:
            Fully populated table descriptors, in the order reported by
            the database
        """
        tables = self.get_tables(schema_filter=schema_filter, include_views=include_views)

        for table in tables:
            table.columns = self.get_columns(table)
            table.foreign_keys = self.get_foreign_keys(table)

            pks = set(self.get_primary_keys(table))
            fk_usage = Counter(
                fk_col.fk_column_name
                for fk in table.foreign_keys
                for fk_col in fk.columns
            )
            for column in table.columns:
                column.in_primary_key = column.name in pks
                column.used_in_foreign_key = fk_usage.get(column.name, 0)

        return tables

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
