"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any

from linecut.domain import PartDemand
from linecut.infrastructure.layout_generator import Layout
from linecut.infrastructure.linear_packing import BinGroup, OptimizationResult
from linecut.infrastructure.summary import Summary


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


@dataclass
class CutlistInput:
    """Input DTO for a cutlist optimization request.

    Attributes:
        parts: (length, quantity) pairs of required parts.
        stock_lengths: Candidate stock lengths.
        cut_width: Kerf lost per cut.
        unusable_length: Trim lost from every stock piece.
    """

    parts: list[tuple[float, int]]
    stock_lengths: list[float]
    cut_width: float = 5.0
    unusable_length: float = 80.0

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.parts:
            errors.append("At least one part is required")
        for index, entry in enumerate(self.parts):
            try:
                length, quantity = entry
            except (TypeError, ValueError):
                errors.append(f"Part {index + 1} must be a (length, quantity) pair")
                continue
            if not _is_number(length) or length <= 0:
                errors.append(f"Part {index + 1} length must be positive")
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                errors.append(f"Part {index + 1} quantity must be an integer")
            elif quantity < 1:
                errors.append(f"Part {index + 1} quantity must be positive")
        for index, length in enumerate(self.stock_lengths):
            if not _is_number(length) or length <= 0:
                errors.append(f"Stock length {index + 1} must be positive")
        if not _is_number(self.cut_width) or self.cut_width < 0:
            errors.append("Cut width must be non-negative")
        if not _is_number(self.unusable_length) or self.unusable_length < 0:
            errors.append("Unusable length must be non-negative")
        return errors

    def to_demand(self) -> list[PartDemand]:
        """Convert validated parts to PartDemand value objects."""
        return [PartDemand(length=length, quantity=qty) for length, qty in self.parts]


@dataclass
class OptimizationOutput:
    """Output DTO for a cutlist optimization.

    Attributes:
        result: Packing result, None when the input was rejected.
        layouts: Cutting layouts, one per packed run.
        summary: Aggregate totals, None when the input was rejected.
        errors: Validation error messages.
    """

    result: OptimizationResult | None = None
    layouts: list[Layout] = field(default_factory=list)
    summary: Summary | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if optimization ran without validation errors."""
        return not self.errors and self.result is not None

    @property
    def bins(self) -> dict[float, BinGroup]:
        return self.result.bins if self.result else {}

    @property
    def overall_waste_percentage(self) -> float:
        return self.result.overall_waste_percentage if self.result else 0.0

    @property
    def remaining_parts(self) -> tuple[float, ...]:
        return self.result.remaining_parts if self.result else ()

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain mapping consumed by presentation layers."""
        return {
            "bins": {
                size: {
                    "count": group.count,
                    "average_waste_percentage": group.average_waste_percentage,
                    "contents": [list(run) for run in group.contents],
                }
                for size, group in self.bins.items()
            },
            "overall_waste_percentage": self.overall_waste_percentage,
            "remaining_parts": list(self.remaining_parts),
            "layouts": [layout.to_dict() for layout in self.layouts],
            "summary": self.summary.to_dict() if self.summary else None,
        }
