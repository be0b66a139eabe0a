"""Main CLI entry point for tabledoc."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table as RichTable

from tabledoc.cli.utils import (
    configure_logging,
    console,
    err_console,
    load_profile_or_exit,
)
from tabledoc.core.serializer import JsonSerializer
from tabledoc.exceptions import TableDocError

app = typer.Typer(
    name="tabledoc",
    help="tabledoc - turn related tables into nested JSON documents",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """
    tabledoc - turn related tables into nested JSON documents
    """
    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        print(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def convert(
    profile: Path = typer.Argument(..., help="Profile TOML file"),
    root: Optional[str] = typer.Option(
        None, "--root", "-r", help="Root table (overrides the profile)"
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", "-i", help="Indentation width (overrides the profile)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write JSON to this file instead of stdout"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Resolve the root table and print its documents as JSON.

    Examples:
        tabledoc convert profile.toml
        tabledoc convert profile.toml --root orders --indent 2 -o orders.json
    """
    configure_logging(verbose)
    config, registry = load_profile_or_exit(profile)

    root_name = root or config.root
    if not root_name:
        err_console.print("[red]❌ No root table given; use --root or set 'root'[/red]")
        raise typer.Exit(1)

    try:
        root_table = registry.get_table(root_name)
    except KeyError:
        err_console.print(f"[red]❌ Table '{root_name}' is not in the profile[/red]")
        raise typer.Exit(1)

    options = config.output
    if indent is not None:
        options = options.model_copy(update={"indent": indent})

    try:
        text = JsonSerializer(options).serialize(registry, root_table)
    except TableDocError as e:
        err_console.print(f"[red]❌ Failed to convert: {e}[/red]")
        raise typer.Exit(1)

    if output:
        output.write_text(text + "\n", encoding="utf-8")
        err_console.print(
            f"[green]✅ Wrote {len(root_table.rows)} document(s) to {output}[/green]"
        )
    else:
        typer.echo(text)


@app.command()
def describe(
    profile: Path = typer.Argument(..., help="Profile TOML file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Show the tables and relations of a profile."""
    configure_logging(verbose)
    config, registry = load_profile_or_exit(profile)

    tables = RichTable(title="Tables")
    tables.add_column("Name", style="cyan")
    tables.add_column("Rows", justify="right")
    tables.add_column("Columns")
    for table in registry.tables:
        marker = " (root)" if table.name == config.root else ""
        tables.add_row(
            f"{table.name}{marker}", str(len(table.rows)), ", ".join(table.column_names)
        )
    console.print(tables)

    if not registry.relations:
        console.print("[yellow]No relations[/yellow]")
        return

    relations = RichTable(title="Relations")
    relations.add_column("Key", style="cyan")
    relations.add_column("Parent")
    relations.add_column("Child")
    relations.add_column("Cardinality")
    relations.add_column("Join")
    for relation in registry.relations:
        join = ", ".join(
            f"{k.parent_column.name}={k.child_column.name}" for k in relation.join_keys
        )
        relations.add_row(
            relation.output_key,
            relation.parent_table.name,
            relation.child_table.name,
            relation.cardinality.value,
            join or "[yellow](every row)[/yellow]",
        )
    console.print(relations)


if __name__ == "__main__":
    app()
