"""Database metadata sources for dbrepo.

This module provides database-agnostic metadata introspection with
specific implementations for DuckDB and Snowflake.
"""

from .models import DatabaseTable, DatabaseColumn, DatabaseForeignKey, DatabaseForeignKeyColumn
from .jdbc_types import JdbcType, ForeignKeyRule, Deferrability, type_code_for
from .base import MetadataSource
from .duckdb import DuckDBMetadataSource
from .snowflake import SnowflakeMetadataSource

__all__ = [
    # Raw descriptors
    "DatabaseTable",
    "DatabaseColumn",
    "DatabaseForeignKey",
    "DatabaseForeignKeyColumn",
    # Type codes
    "JdbcType",
    "ForeignKeyRule",
    "Deferrability",
    "type_code_for",
    # Sources
    "MetadataSource",
    "DuckDBMetadataSource",
    "SnowflakeMetadataSource",
]
