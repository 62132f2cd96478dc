"""Adapters from configuration models to application and domain objects."""

from __future__ import annotations

from linecut.application.config.schema import CutlistConfiguration, OptimizerConfigSchema
from linecut.application.dtos import CutlistInput
from linecut.domain import PartDemand
from linecut.infrastructure.linear_packing import LinearPackingConfig


def config_to_demand(config: CutlistConfiguration) -> list[PartDemand]:
    """Convert configured parts to PartDemand value objects.

    Parts with the same length are kept as separate entries; the packer
    expands them into one inventory either way.
    """
    return [PartDemand(length=part.length, quantity=part.quantity) for part in config.parts]


def config_to_labels(config: CutlistConfiguration) -> dict[float, str]:
    """Map each labelled part length to its label.

    Lengths configured more than once with different labels get the labels
    joined in file order. Unlabelled parts are left out.
    """
    labels: dict[float, list[str]] = {}
    for part in config.parts:
        if part.label and part.label not in labels.get(part.length, []):
            labels.setdefault(part.length, []).append(part.label)
    return {length: ", ".join(names) for length, names in labels.items()}


def config_to_cutlist_input(config: CutlistConfiguration) -> CutlistInput:
    """Convert a configuration to the optimization command input."""
    return CutlistInput(
        parts=[(part.length, part.quantity) for part in config.parts],
        stock_lengths=list(config.stock_lengths),
        cut_width=config.cut_width,
        unusable_length=config.unusable_length,
    )


def config_to_packing_config(
    config: OptimizerConfigSchema | None,
) -> LinearPackingConfig:
    """Convert Pydantic optimizer settings to the packer configuration.

    Returns the default configuration if ``config`` is None.
    """
    if config is None:
        return LinearPackingConfig()

    return LinearPackingConfig(
        min_run_quantity=config.min_run_quantity,
        low_waste_threshold=config.low_waste_threshold,
    )
