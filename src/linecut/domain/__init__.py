"""Domain layer - core value objects."""

from .value_objects import PartDemand, SegmentKind, StockCandidate

__all__ = [
    "PartDemand",
    "SegmentKind",
    "StockCandidate",
]
