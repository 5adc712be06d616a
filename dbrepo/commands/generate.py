"""Repository generation commands - build the repository model from a database."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..config import settings
from ..database import DuckDBMetadataSource, SnowflakeMetadataSource, MetadataSource
from ..diagnostics import DiagnosticSink
from ..errors import ConfigurationError, RepositoryError
from ..repository import RepositoryModel, RepositoryModelAssembler

app = typer.Typer(help="Generate the repository model from a database schema")
console = Console()


def configure_logging(verbose: bool) -> None:
    """Send log records to the console through rich."""
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def require_setting(value: Optional[str], setting: str, hint: str) -> str:
    """Return a required setting or raise ConfigurationError."""
    if not value:
        raise ConfigurationError(f"Missing {setting} ({hint})", details={"setting": setting})
    return value


def fail(error: RepositoryError) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error ({error.code}): {error.message}[/red]")
    raise typer.Exit(1)


def write_model(model: RepositoryModel, output: str) -> Path:
    """Write the model as JSON and return the file path."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(model.to_dict(), indent=2), encoding="utf-8")
    return path


def print_summary(model: RepositoryModel, sink: DiagnosticSink) -> None:
    """Print one row per entity plus the degraded columns, if any."""
    table = Table(title=f"Repository model: {model.database_name} ({model.database_product_name})")
    table.add_column("Entity", style="cyan")
    table.add_column("Class")
    table.add_column("Type")
    table.add_column("Columns", justify="right")
    table.add_column("Foreign keys", justify="right")

    for entity in model.entities.values():
        table.add_row(
            entity.name,
            entity.bean_java_class or "",
            entity.database_type or "",
            str(len(entity.columns)),
            str(len(entity.foreign_keys)),
        )
    console.print(table)

    degraded = sink.warnings
    if degraded:
        console.print(f"[yellow]{len(degraded)} mapping warnings (review placeholder names/types):[/yellow]")
        for diagnostic in degraded:
            location = ".".join(p for p in (diagnostic.table, diagnostic.column) if p)
            console.print(f"  [yellow]{location}[/yellow] {diagnostic.message}")


def run_generation(
    source: MetadataSource,
    schema: Optional[str],
    include_views: bool,
    output: str,
) -> RepositoryModel:
    """Assemble the model from the source, write it and print a summary."""
    sink = DiagnosticSink()
    assembler = RepositoryModelAssembler(sink=sink, schema_filter=schema, include_views=include_views)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task(f"Introspecting {source.database_name}...", total=None)
            model = assembler.assemble(source)
    except RepositoryError as e:
        fail(e)

    path = write_model(model, output)
    print_summary(model, sink)
    console.print(f"[green]Repository model written to {path}[/green]")
    return model


@app.command("duckdb")
def generate_from_duckdb(
    database_path: Optional[str] = typer.Argument(None, help="Path to the DuckDB database file (or DBREPO_DUCKDB_PATH)"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Specific schema to introspect (default: all)"),
    views: Optional[bool] = typer.Option(None, "--views/--no-views", help="Include views (default: DBREPO_INCLUDE_VIEWS)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-column mapping details"),
):
    """Generate the repository model from a DuckDB database file."""
    configure_logging(verbose)
    try:
        path = require_setting(database_path or settings.duckdb_path, "DuckDB database", "argument or DBREPO_DUCKDB_PATH")
    except ConfigurationError as e:
        fail(e)

    run_generation(
        DuckDBMetadataSource(database_path=path),
        schema=schema or settings.schema_filter,
        include_views=settings.include_views if views is None else views,
        output=output or settings.output_path,
    )


@app.command("snowflake")
def generate_from_snowflake(
    database: str = typer.Argument(..., help="Snowflake database name to introspect"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Specific schema to introspect (default: all)"),
    views: Optional[bool] = typer.Option(None, "--views/--no-views", help="Include views (default: DBREPO_INCLUDE_VIEWS)"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    account: Optional[str] = typer.Option(None, "--account", "-a", help="Snowflake account (or SNOWFLAKE_ACCOUNT env)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Snowflake user (or SNOWFLAKE_USER env)"),
    password: Optional[str] = typer.Option(None, "--password", help="Snowflake password (or SNOWFLAKE_PASSWORD env)"),
    warehouse: Optional[str] = typer.Option(None, "--warehouse", help="Snowflake warehouse (or SNOWFLAKE_WAREHOUSE env)"),
    role: Optional[str] = typer.Option(None, "--role", "-r", help="Snowflake role"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show per-column mapping details"),
):
    """Generate the repository model from a Snowflake database."""
    configure_logging(verbose)
    try:
        account = require_setting(
            account or settings.snowflake_account or os.environ.get("SNOWFLAKE_ACCOUNT"),
            "Snowflake account", "--account, DBREPO_SNOWFLAKE_ACCOUNT or SNOWFLAKE_ACCOUNT",
        )
        user = require_setting(
            user or settings.snowflake_user or os.environ.get("SNOWFLAKE_USER"),
            "Snowflake user", "--user, DBREPO_SNOWFLAKE_USER or SNOWFLAKE_USER",
        )
    except ConfigurationError as e:
        fail(e)

    source = SnowflakeMetadataSource(
        database=database,
        account=account,
        user=user,
        password=password or settings.snowflake_password,
        warehouse=warehouse or settings.snowflake_warehouse,
        role=role or settings.snowflake_role,
    )
    run_generation(
        source,
        schema=schema or settings.schema_filter,
        include_views=settings.include_views if views is None else views,
        output=output or settings.output_path,
    )
