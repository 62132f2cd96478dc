"""Configuration merging utilities for CLI override support.

Precedence: CLI args > config values > defaults. Only non-None CLI
arguments override configuration values.
"""

from pathlib import Path
from typing import Any

from linecut.application.config.loader import load_config_from_dict
from linecut.application.config.schema import CutlistConfiguration


def merge_config_with_cli(
    config: CutlistConfiguration,
    *,
    parts: list[tuple[float, int]] | None = None,
    stock_lengths: list[float] | None = None,
    cut_width: float | None = None,
    unusable_length: float | None = None,
    min_run_quantity: int | None = None,
    output_format: str | None = None,
    output_file: str | Path | None = None,
) -> CutlistConfiguration:
    """Merge CLI arguments with configuration values.

    Args:
        config: The base CutlistConfiguration to merge with
        parts: Replacement part list as (length, quantity) pairs
        stock_lengths: Replacement stock lengths
        cut_width: Override for cut_width
        unusable_length: Override for unusable_length
        min_run_quantity: Override for optimizer.min_run_quantity
        output_format: Override for output.format
        output_file: Override for output.output_file

    Returns:
        A new, re-validated CutlistConfiguration with merged values

    Raises:
        ConfigError: If an override makes the configuration invalid.

    Example:
        >>> merged = merge_config_with_cli(config, cut_width=3.0)
        >>> merged.cut_width
        3.0
    """
    data: dict[str, Any] = config.model_dump()

    if parts:
        data["parts"] = [{"length": length, "quantity": qty} for length, qty in parts]
    if stock_lengths:
        data["stock_lengths"] = list(stock_lengths)
    if cut_width is not None:
        data["cut_width"] = cut_width
    if unusable_length is not None:
        data["unusable_length"] = unusable_length
    if min_run_quantity is not None:
        data["optimizer"]["min_run_quantity"] = min_run_quantity
    if output_format is not None:
        data["output"]["format"] = output_format
    if output_file is not None:
        data["output"]["output_file"] = str(output_file)

    return load_config_from_dict(data)
