"""Typer CLI for linear cutlist optimization."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer

from linecut.application.config import (
    DEFAULT_CUT_WIDTH,
    DEFAULT_STOCK_LENGTHS,
    DEFAULT_UNUSABLE_LENGTH,
    ConfigError,
    CutlistConfiguration,
    config_to_cutlist_input,
    config_to_labels,
    config_to_packing_config,
    load_config,
    load_config_from_dict,
    merge_config_with_cli,
)
from linecut.application.factory import get_factory
from linecut.cli.commands import validate_command

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool) -> None:
    """Send debug logging to stderr when verbose.

    Without --verbose, logging is left unconfigured and only warnings
    reach stderr.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, force=True)


def parse_part(value: str) -> tuple[float, int]:
    """Parse a part given as LENGTHxQTY (or LENGTH for a single part).

    Examples:
        >>> parse_part("2500x4")
        (2500.0, 4)
        >>> parse_part("1200")
        (1200.0, 1)
    """
    text = value.strip().lower().replace("*", "x").replace(":", "x")
    length_text, _, qty_text = text.partition("x")
    try:
        length = float(length_text)
        quantity = int(qty_text) if qty_text else 1
    except ValueError:
        raise ValueError(f"Invalid part '{value}', expected LENGTHxQTY (e.g. 2500x4)")
    return length, quantity


def _config_from_cli(
    parts: list[tuple[float, int]],
    stock_lengths: list[float] | None,
    cut_width: float | None,
    unusable_length: float | None,
    min_run_quantity: int | None,
    output_format: str | None,
    output_file: Path | None,
) -> CutlistConfiguration:
    """Build a configuration from CLI options alone."""
    data: dict[str, Any] = {
        "schema_version": "1.1",
        "parts": [{"length": length, "quantity": qty} for length, qty in parts],
        "stock_lengths": stock_lengths or list(DEFAULT_STOCK_LENGTHS),
        "cut_width": DEFAULT_CUT_WIDTH if cut_width is None else cut_width,
        "unusable_length": (
            DEFAULT_UNUSABLE_LENGTH if unusable_length is None else unusable_length
        ),
        "optimizer": {},
        "output": {},
    }
    if min_run_quantity is not None:
        data["optimizer"]["min_run_quantity"] = min_run_quantity
    if output_format is not None:
        data["output"]["format"] = output_format
    if output_file is not None:
        data["output"]["output_file"] = str(output_file)
    return load_config_from_dict(data)


app = typer.Typer(
    name="linecut",
    help="Optimize cutting of parts from linear stock lengths.",
)

app.command(name="validate")(validate_command)


@app.command()
def optimize(
    config_file: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to JSON configuration file"),
    ] = None,
    part: Annotated[
        list[str] | None,
        typer.Option("--part", "-p", help="Part as LENGTHxQTY, repeatable"),
    ] = None,
    stock: Annotated[
        list[float] | None,
        typer.Option("--stock", "-s", help="Available stock length, repeatable"),
    ] = None,
    cut_width: Annotated[
        float | None,
        typer.Option("--cut-width", help="Kerf lost per cut"),
    ] = None,
    unusable_length: Annotated[
        float | None,
        typer.Option("--unusable-length", help="Trim lost from every stock piece"),
    ] = None,
    min_run_quantity: Annotated[
        int | None,
        typer.Option("--min-run-quantity", help="Fewest pieces needed to use a stock size"),
    ] = None,
    output_format: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format: text, json"),
    ] = None,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write output to this file"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log optimizer progress"),
    ] = False,
) -> None:
    """Optimize a cutlist from CLI options or a JSON configuration file.

    When using --config, CLI options override config file values.

    Examples:
        linecut optimize --part 2500x4 --stock 6400 --stock 5600 --stock 4900
        linecut optimize --config cutlist.json
        linecut optimize --config cutlist.json --cut-width 3 --format json
    """
    setup_logging(verbose)

    try:
        parts = [parse_part(p) for p in part or []]
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        if config_file is not None:
            config = merge_config_with_cli(
                load_config(config_file),
                parts=parts or None,
                stock_lengths=stock,
                cut_width=cut_width,
                unusable_length=unusable_length,
                min_run_quantity=min_run_quantity,
                output_format=output_format,
                output_file=output_file,
            )
        else:
            if not parts:
                typer.echo(
                    "Error: at least one --part is required when --config is not provided",
                    err=True,
                )
                raise typer.Exit(code=1)
            config = _config_from_cli(
                parts,
                stock,
                cut_width,
                unusable_length,
                min_run_quantity,
                output_format,
                output_file,
            )
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    factory = get_factory()
    command = factory.create_optimize_command(config_to_packing_config(config.optimizer))
    result = command.execute(config_to_cutlist_input(config))

    if not result.is_valid:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(code=1)

    output_path = Path(config.output.output_file) if config.output.output_file else None
    if config.output.format == "json":
        exporter = factory.get_json_exporter()
        if output_path is not None:
            exporter.export_to_file(result, output_path)
        else:
            typer.echo(exporter.export(result))
    else:
        formatter = factory.get_cut_plan_formatter(
            config.output.unit, config_to_labels(config)
        )
        rendered = formatter.format(result)
        if output_path is not None:
            output_path.write_text(rendered, encoding="utf-8")
        else:
            typer.echo(rendered)

    if output_path is not None:
        typer.echo(f"Output written to: {output_path}")

    if result.remaining_parts:
        typer.echo(
            f"Warning: {len(result.remaining_parts)} part(s) could not be packed",
            err=True,
        )


if __name__ == "__main__":
    app()
