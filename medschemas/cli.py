"""Command Line Interface for medschemas.

Developer tooling around the schema registry: list the registered entities,
validate JSON documents against any schema variant and export JSON Schema for
the frontend build.

Examples:
    medschemas entities
    medschemas validate patient data/patient.json --variant form
    medschemas validate paciente legacy.json --legacy --json
    medschemas json-schema clinical_record --variant update
"""

import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from medschemas import __version__
from medschemas.domain.registry import CANONICAL, REGISTRY
from medschemas.domain.validation import (
    UnknownEntityError,
    UnknownVariantError,
    ValidationResult,
)
from medschemas.infrastructure.logging_config import get_logger, setup_logging
from medschemas.infrastructure.settings import settings

logger = get_logger(__name__)

# Initialize Typer app and Rich console
app = typer.Typer(
    name="medschemas",
    help="Shared validation schemas for occupational-health records",
    add_completion=False
)
console = Console()


def _resolve_schema(entity: str, variant: str):
    try:
        return REGISTRY.schema(entity, variant)
    except (UnknownEntityError, UnknownVariantError) as e:
        console.print(f"[red]✗[/red] {e}")
        raise typer.Exit(code=1)


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]✗[/red] Cannot read {path}: {e}")
        raise typer.Exit(code=1)


def _dump(result: ValidationResult, variant: str) -> Any:
    # update payloads only carry what the caller set
    return result.value.model_dump(
        mode="json",
        by_alias=True,
        exclude_unset=variant == "update",
    )


def _result_json(index: int, result: ValidationResult, variant: str) -> dict[str, Any]:
    if result.is_success():
        return {"index": index, "valid": True, "value": _dump(result, variant)}
    return {
        "index": index,
        "valid": False,
        "errors": [
            {
                "path": list(error.path),
                "message": error.message,
                "type": error.error_type,
                "kind": error.kind.value,
            }
            for error in result.errors
        ],
    }


@app.command()
def entities() -> None:
    """List registered entities and their schema variants."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Entity", style="cyan", no_wrap=True)
    table.add_column("Tenant field")
    table.add_column("Strict", justify="center")
    table.add_column("Variants")

    for entry in REGISTRY:
        table.add_row(
            entry.name,
            entry.tenant_field or "-",
            "yes" if entry.strict else "no",
            ", ".join(sorted(entry.variants)),
        )

    console.print(table)


@app.command()
def validate(
    entity: str = typer.Argument(..., help="Entity name (e.g. patient, company, audit_log)"),
    input_file: Path = typer.Argument(..., help="JSON file holding an object or a list of objects", exists=True, dir_okay=False),
    variant: str = typer.Option(CANONICAL, "--variant", "-v", help="Schema variant (canonical, form, update, ...)"),
    legacy: Optional[bool] = typer.Option(None, "--legacy/--no-legacy", help="Translate legacy vocabulary first"),
    as_json: bool = typer.Option(False, "--json", help="Print a JSON report instead of tables"),
) -> None:
    """Validate a JSON document against an entity schema.

    Exits with code 1 when any record fails validation.
    """
    _resolve_schema(entity, variant)
    payload = _load_json(input_file)
    use_legacy = settings.accept_legacy if legacy is None else legacy

    records = payload if isinstance(payload, list) else [payload]
    results = [
        REGISTRY.validate(entity, record, variant=variant, legacy=use_legacy)
        for record in records
    ]
    failures = sum(1 for result in results if result.is_failure())
    logger.debug(
        f"Validated {len(results)} record(s) against {entity}/{variant}",
        extra={
            "entity": REGISTRY.get(entity).name,
            "variant": variant,
            "records": len(results),
            "failures": failures,
        },
    )

    if as_json:
        report = {
            "entity": REGISTRY.get(entity).name,
            "variant": variant,
            "valid": failures == 0,
            "results": [_result_json(i, result, variant) for i, result in enumerate(results)],
        }
        typer.echo(json.dumps(report, indent=2, ensure_ascii=False))
    else:
        for index, result in enumerate(results):
            if result.is_success():
                console.print(f"[green]✓[/green] Record {index} is valid")
                console.print_json(data=_dump(result, variant))
                continue

            console.print(f"[red]✗[/red] Record {index} failed validation")
            error_table = Table(show_header=True, header_style="bold")
            error_table.add_column("Field", style="cyan")
            error_table.add_column("Kind")
            error_table.add_column("Message")
            for error in result.errors:
                error_table.add_row(error.location or "(root)", error.kind.value, error.message)
            console.print(error_table)

        summary = f"{len(results) - failures}/{len(results)} record(s) valid"
        console.print(f"\n[bold]{summary}[/bold]")

    if failures:
        raise typer.Exit(code=1)


@app.command("json-schema")
def json_schema(
    entity: str = typer.Argument(..., help="Entity name"),
    variant: str = typer.Option(CANONICAL, "--variant", "-v", help="Schema variant"),
) -> None:
    """Print the JSON Schema (wire keys) of an entity variant."""
    schema = _resolve_schema(entity, variant)
    document = schema.model_json_schema(by_alias=True)
    typer.echo(json.dumps(document, indent=2, ensure_ascii=False))


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", help="Show version information"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """medschemas: shared validation schemas."""
    setup_logging(
        use_json=settings.log_json,
        log_level="DEBUG" if verbose else settings.log_level,
    )
    if version:
        console.print(f"{settings.app_name} v{__version__}")
        raise typer.Exit()


if __name__ == "__main__":
    app()
