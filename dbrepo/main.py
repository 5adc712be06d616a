"""dbrepo - Main entry point."""

import typer
from rich.console import Console
from .commands import generate
from .config import settings

app = typer.Typer(
    name="dbrepo",
    help="Build the repository model of a relational database for code generation",
    add_completion=False,
)

app.add_typer(generate.app, name="generate")

console = Console()


def _mask(value) -> str:
    return "Configured" if value else "Not set"


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  DuckDB path: {settings.duckdb_path or 'Not set'}")
    console.print(f"  Schema filter: {settings.schema_filter or 'All schemas'}")
    console.print(f"  Include views: {'Yes' if settings.include_views else 'No'}")
    console.print(f"  Output: {settings.output_path}")
    console.print(f"  Log level: {settings.log_level}")
    console.print(f"  Snowflake account: {settings.snowflake_account or 'Not set'}")
    console.print(f"  Snowflake user: {settings.snowflake_user or 'Not set'}")
    console.print(f"  Snowflake password: {_mask(settings.snowflake_password)}")


@app.callback()
def main():
    """
    dbrepo - introspect a database and build its repository model.

    Examples:

        dbrepo generate duckdb warehouse.duckdb --output repository.json

        dbrepo generate snowflake SALES_DB --schema PUBLIC

        dbrepo config
    """
    pass


if __name__ == "__main__":
    app()
