"""The ``linecut validate`` command."""

from pathlib import Path
from typing import Annotated

import typer

from linecut.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"  File not found: {error.path}"]

    if error.error_type == "json_parse":
        lines = ["  Invalid JSON syntax"]
        lines += [
            f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'Unknown error')}"
            for d in error.details
        ]
        return lines

    if error.error_type == "validation":
        lines = []
        for detail in error.details:
            lines.append(f"  {detail.get('path', 'unknown')}: {detail.get('message')}")
            if detail.get("value") is not None:
                lines.append(f"    Value: {detail['value']!r}")
        return lines

    return [f"  {error.message}"]


def _report(result: ValidationResult) -> None:
    """Print errors to stderr, warnings to stdout, then a one-line verdict."""
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if not result.is_valid:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.has_warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Configuration is valid.")


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON configuration file to validate"),
    ],
) -> None:
    """Validate a cutlist configuration file.

    Reports JSON syntax errors, schema errors and cutting problems such as
    parts longer than any usable stock or stock lengths eaten by the trim.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        linecut validate cutlist.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        typer.echo("Errors:", err=True)
        for line in _load_error_lines(e):
            typer.echo(line, err=True)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _report(result)
    raise typer.Exit(code=result.exit_code)
