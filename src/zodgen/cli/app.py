"""Typer CLI application."""

import typer
from pathlib import Path

from zodgen.config.logging import setup_logging
from zodgen.config.settings import get_settings
from zodgen.errors import ZodGenError
from zodgen.emit.module import render_module, write_module
from zodgen.ir.validators import validate_references
from zodgen.schema.collector import collect_entities
from zodgen.schema.pipeline import generate_schemas
from zodgen.schema.resolver import resolve
from zodgen.utils.service_io import load_service_from_json

app = typer.Typer(help="zodgen: service type models to zod validation schemas")


def _load(service_json: Path):
    try:
        return load_service_from_json(service_json)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    service_json: Path,
    out_ts: Path,
    lenient: bool = typer.Option(
        False, "--lenient", help="Treat undefined type references as circular instead of failing"
    ),
):
    """
    Generate a zod schema module from a service description.

    Args:
        service_json: Path to the service description JSON file
        out_ts: Output path for the TypeScript module
    """
    setup_logging()
    settings = get_settings()

    typer.echo(f"Loading service from {service_json}", err=True)
    service = _load(service_json)

    strict = settings.strict_references and not lenient
    try:
        result = generate_schemas(service, strict_references=strict)
    except ZodGenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for issue in result.issues:
        typer.echo(f"Warning: [{issue.code}] {issue.message} ({issue.location})", err=True)

    write_module(render_module(result, title=service.title), out_ts)
    typer.echo(
        f"✓ Complete! {len(result.all_definitions())} schemas written to {out_ts}", err=True
    )


@app.command()
def order(service_json: Path):
    """
    Print the emission order of a service's schemas.

    Args:
        service_json: Path to the service description JSON file
    """
    setup_logging()
    service = _load(service_json)

    resolution = resolve(collect_entities(service))
    for entity in resolution.ordered:
        typer.echo(entity.name)
    for entity in resolution.circular:
        typer.echo(f"{entity.name} (circular)")


@app.command()
def check(service_json: Path):
    """
    Validate type references of a service description.

    Args:
        service_json: Path to the service description JSON file
    """
    setup_logging()
    service = _load(service_json)

    issues = validate_references(service)
    for issue in issues:
        typer.echo(f"[{issue.code}] {issue.message}")

    if issues:
        raise typer.Exit(1)
    typer.echo("✓ No issues found")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
