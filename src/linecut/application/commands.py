"""Application commands (use cases) for cutlist optimization."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from linecut.domain import PartDemand
from linecut.infrastructure.layout_generator import generate_layouts
from linecut.infrastructure.linear_packing import (
    DEFAULT_LOW_WASTE_THRESHOLD,
    DEFAULT_MIN_RUN_QUANTITY,
    LinearBinPacker,
    LinearPackingConfig,
)
from linecut.infrastructure.summary import summarize

from .dtos import CutlistInput, OptimizationOutput
from .services.input_validator import InputValidatorService, InvalidInputError

logger = logging.getLogger(__name__)


class OptimizeCutlistCommand:
    """Command to optimize a linear cutlist.

    Validates the input, packs the parts, then derives cutting layouts and
    summary totals from the packing result.
    """

    def __init__(
        self,
        packer: LinearBinPacker | None = None,
        input_validator: InputValidatorService | None = None,
    ) -> None:
        self.packer = packer or LinearBinPacker()
        self.input_validator = input_validator or InputValidatorService()

    def execute(self, cutlist_input: CutlistInput) -> OptimizationOutput:
        """Execute the optimization command.

        Args:
            cutlist_input: Parts, stock lengths, cut width and unusable length.

        Returns:
            OptimizationOutput with result, layouts and summary, or with
            errors if validation failed.
        """
        errors = self.input_validator.validate_all(
            cutlist_input, self.packer.config.min_run_quantity
        )
        if errors:
            return OptimizationOutput(errors=errors)

        demand = cutlist_input.to_demand()
        logger.info(
            "Optimizing %d part lengths (%d pieces) over stock %s",
            len(demand),
            sum(part.quantity for part in demand),
            cutlist_input.stock_lengths,
        )

        result = self.packer.pack(
            demand,
            cutlist_input.stock_lengths,
            cutlist_input.cut_width,
            cutlist_input.unusable_length,
        )
        layouts = generate_layouts(result, cutlist_input.cut_width)
        summary = summarize(demand, result)

        logger.info(
            "Optimization complete: %d stock pieces, %.2f%% waste, %d parts remaining",
            summary.total_stock_pieces,
            summary.wastage_percentage,
            len(result.remaining_parts),
        )

        return OptimizationOutput(result=result, layouts=layouts, summary=summary)


def _to_pair(part: Any) -> Any:
    """Normalize a PartDemand, mapping or pair into a (length, quantity) pair."""
    if isinstance(part, PartDemand):
        return (part.length, part.quantity)
    if isinstance(part, Mapping):
        return (part.get("length"), part.get("quantity"))
    return part


def optimize(
    parts: Iterable[Any],
    stock_lengths: Sequence[float],
    cut_width: float,
    unusable_length: float,
    *,
    min_run_quantity: int = DEFAULT_MIN_RUN_QUANTITY,
    low_waste_threshold: float = DEFAULT_LOW_WASTE_THRESHOLD,
) -> OptimizationOutput:
    """Optimize a cutlist and return bins, layouts and summary.

    Args:
        parts: Required parts as ``(length, quantity)`` pairs, mappings with
            ``length`` and ``quantity`` keys, or PartDemand objects.
        stock_lengths: Candidate stock lengths.
        cut_width: Kerf lost per cut.
        unusable_length: Trim lost from every stock piece.
        min_run_quantity: Fewest pieces needed to approve a stock size.
        low_waste_threshold: Waste fraction accepted without trying more sizes.

    Returns:
        OptimizationOutput; use ``to_dict()`` for a plain mapping.

    Raises:
        InvalidInputError: If any value is out of range.

    Example:
        >>> output = optimize([(2500, 4)], [6400, 5600, 4900], 5, 80)
        >>> output.summary.total_stock_pieces
        2
    """
    config_errors: list[str] = []
    if isinstance(min_run_quantity, bool) or not isinstance(min_run_quantity, int):
        config_errors.append("Minimum run quantity must be an integer")
    try:
        config = LinearPackingConfig(
            min_run_quantity=min_run_quantity,
            low_waste_threshold=low_waste_threshold,
        )
    except (TypeError, ValueError) as e:
        config_errors.append(str(e))
    if config_errors:
        raise InvalidInputError(config_errors)

    cutlist_input = CutlistInput(
        parts=[_to_pair(part) for part in parts],
        stock_lengths=list(stock_lengths),
        cut_width=cut_width,
        unusable_length=unusable_length,
    )
    command = OptimizeCutlistCommand(packer=LinearBinPacker(config))
    output = command.execute(cutlist_input)
    if not output.is_valid:
        raise InvalidInputError(output.errors)
    return output
