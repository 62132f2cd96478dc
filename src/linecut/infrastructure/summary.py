"""Aggregate statistics for linear packing results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from linecut.domain.value_objects import PartDemand
from linecut.infrastructure.linear_packing import OptimizationResult


@dataclass(frozen=True)
class StockUsage:
    """Number of pieces needed of one stock length."""

    length: float
    quantity: int

    def to_dict(self) -> dict[str, Any]:
        return {"length": self.length, "quantity": self.quantity}


@dataclass(frozen=True)
class Summary:
    """Totals and utilization for a packing result.

    Attributes:
        total_stock_pieces: Stock pieces across all sizes.
        total_profile_length: Combined length of all demanded parts.
        total_stock_length: Combined length of all stock pieces used.
        used_length_percentage: Share of consumed stock that is not waste.
        wastage_percentage: Share of consumed stock that is waste.
        stock_usage: Pieces needed per stock length, smallest first.
    """

    total_stock_pieces: int
    total_profile_length: float
    total_stock_length: float
    used_length_percentage: float
    wastage_percentage: float
    stock_usage: tuple[StockUsage, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_stock_pieces": self.total_stock_pieces,
            "total_profile_length": self.total_profile_length,
            "total_stock_length": self.total_stock_length,
            "used_length_percentage": self.used_length_percentage,
            "wastage_percentage": self.wastage_percentage,
            "stock_usage": [u.to_dict() for u in self.stock_usage],
        }


def summarize(demand: Sequence[PartDemand], result: OptimizationResult) -> Summary:
    """Derive summary totals from the demand and its packing result.

    Only reads its inputs; calling it repeatedly yields equal summaries.
    """
    overall_waste = result.overall_waste_percentage
    return Summary(
        total_stock_pieces=result.total_stock_pieces,
        total_profile_length=sum(part.total_length for part in demand),
        total_stock_length=sum(size * group.count for size, group in result.bins.items()),
        used_length_percentage=100 - overall_waste,
        wastage_percentage=overall_waste,
        stock_usage=tuple(
            StockUsage(length=size, quantity=group.count)
            for size, group in result.bins.items()
        ),
    )
