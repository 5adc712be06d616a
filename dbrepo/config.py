"""Configuration management for dbrepo."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.dbrepo/.env
    3. Package directory (where this file is located)
    """
    if os.path.exists(".env"):
        return ".env"

    user_env = Path.home() / ".dbrepo" / ".env"
    if user_env.exists():
        return str(user_env)

    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from DBREPO_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="DBREPO_",
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Introspection scope
    duckdb_path: Optional[str] = Field(
        default=None,
        description="Default DuckDB database file to introspect"
    )
    schema_filter: Optional[str] = Field(
        default=None,
        description="Only introspect tables of this schema"
    )
    include_views: bool = Field(
        default=True,
        description="Include views in the repository model"
    )

    # Output
    output_path: str = Field(
        default="repository.json",
        description="File the repository model is written to"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # Snowflake connection
    snowflake_account: Optional[str] = Field(default=None, description="Snowflake account")
    snowflake_user: Optional[str] = Field(default=None, description="Snowflake user")
    snowflake_password: Optional[str] = Field(default=None, description="Snowflake password")
    snowflake_warehouse: Optional[str] = Field(default=None, description="Snowflake warehouse")
    snowflake_role: Optional[str] = Field(default=None, description="Snowflake role")


# Global settings instance
settings = Settings()
