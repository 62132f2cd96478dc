"""Core value objects for linear cutting-stock optimization."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence


class SegmentKind(str, Enum):
    """Kinds of segments along a cut stock piece."""

    PART = "part"
    CUT = "cut"
    WASTE = "waste"


@dataclass(frozen=True)
class PartDemand:
    """A required part length and how many of it are needed.

    Lengths are in the caller's unit (millimetres in the default
    configuration); the optimizer never converts them.
    """

    length: float
    quantity: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError("Part length must be positive")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("Part quantity must be an integer")
        if self.quantity < 1:
            raise ValueError("Part quantity must be at least 1")

    @property
    def total_length(self) -> float:
        """Combined length of all units of this part."""
        return self.length * self.quantity

    @classmethod
    def from_lengths(cls, lengths: Iterable[float]) -> list["PartDemand"]:
        """Count occurrences of each distinct length, in first-seen order."""
        counts = Counter(lengths)
        return [cls(length=length, quantity=qty) for length, qty in counts.items()]


@dataclass(frozen=True)
class StockCandidate:
    """A stock length available for cutting.

    Attributes:
        full_length: Length of the raw stock piece.
        usable_length: Length left after the unusable trim is removed.
            May be zero or negative, in which case the stock is never used.
    """

    full_length: float
    usable_length: float

    def __post_init__(self) -> None:
        if self.full_length <= 0:
            raise ValueError("Stock length must be positive")

    @property
    def is_usable(self) -> bool:
        """Whether any part could ever be cut from this stock."""
        return self.usable_length > 0

    @classmethod
    def from_lengths(
        cls,
        stock_lengths: Sequence[float],
        unusable_length: float,
    ) -> list["StockCandidate"]:
        """Build candidates sorted by full length, largest first."""
        candidates = [
            cls(full_length=length, usable_length=length - unusable_length)
            for length in stock_lengths
        ]
        return sorted(candidates, key=lambda c: c.full_length, reverse=True)
