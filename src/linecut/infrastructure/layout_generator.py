"""Cutting layout generation for linear packing results.

Converts each packed run into an ordered sequence of part, cut and waste
segments that presentation layers can draw directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from linecut.domain.value_objects import SegmentKind
from linecut.infrastructure.linear_packing import OptimizationResult


@dataclass(frozen=True)
class LayoutSegment:
    """A span along a stock piece.

    Attributes:
        start: Offset from the start of the stock piece.
        width: Length of the span.
        kind: Whether the span is a part, a saw cut or waste.
        location: 1-based position of the part in its run (parts only).
        length: Part length for display (parts only).
    """

    start: float
    width: float
    kind: SegmentKind
    location: int | None = None
    length: float | None = None

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError("Segment start must be non-negative")
        if self.width < 0:
            raise ValueError("Segment width must be non-negative")

    @property
    def end(self) -> float:
        """Offset where the segment ends."""
        return self.start + self.width

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain mapping, omitting part-only fields on cuts and waste."""
        data: dict[str, Any] = {
            "start": self.start,
            "width": self.width,
            "type": self.kind.value,
        }
        if self.kind == SegmentKind.PART:
            data["location"] = self.location
            data["length"] = self.length
        return data


@dataclass(frozen=True)
class Layout:
    """Cutting template for one run of parts on a stock size.

    ``count`` is the number of pieces of this stock size in the result,
    shared by every run of that size.
    """

    stock_size: float
    count: int
    segments: tuple[LayoutSegment, ...]

    @property
    def parts(self) -> list[float]:
        """Part lengths in cutting order."""
        return [s.width for s in self.segments if s.kind == SegmentKind.PART]

    @property
    def waste_length(self) -> float:
        """Length of the trailing waste segment, if any."""
        return sum(s.width for s in self.segments if s.kind == SegmentKind.WASTE)

    def to_dict(self) -> dict[str, Any]:
        return {
            "stock_size": self.stock_size,
            "count": self.count,
            "segments": [s.to_dict() for s in self.segments],
        }


def build_segments(
    stock_size: float,
    parts: tuple[float, ...] | list[float],
    cut_width: float,
) -> tuple[LayoutSegment, ...]:
    """Lay out parts left to right with a cut between neighbours."""
    segments: list[LayoutSegment] = []
    position = 0.0

    for index, part in enumerate(parts):
        segments.append(
            LayoutSegment(
                start=position,
                width=part,
                kind=SegmentKind.PART,
                location=index + 1,
                length=part,
            )
        )
        position += part

        if index < len(parts) - 1:
            segments.append(
                LayoutSegment(start=position, width=cut_width, kind=SegmentKind.CUT)
            )
            position += cut_width

    waste = stock_size - position
    if waste > 0:
        segments.append(LayoutSegment(start=position, width=waste, kind=SegmentKind.WASTE))

    return tuple(segments)


def generate_layouts(result: OptimizationResult, cut_width: float) -> list[Layout]:
    """Generate one layout per packed run, in stock-size then run order.

    Args:
        result: Packing result to lay out.
        cut_width: Kerf drawn between adjacent parts.

    Returns:
        List of layouts; a stock size with N pieces yields N layouts,
        each carrying the group count N.
    """
    layouts: list[Layout] = []
    for size, group in result.bins.items():
        for run in group.contents:
            layouts.append(
                Layout(
                    stock_size=size,
                    count=group.count,
                    segments=build_segments(size, run, cut_width),
                )
            )
    return layouts
