"""Linear bin packing models and algorithms for stock length optimization.

This module provides data structures for representing cut stock pieces,
groups of identical stock sizes and packing results, together with the
greedy multi-size packer and its best-fit part matcher.

All dataclasses are frozen (immutable) to ensure thread safety and
hashability of the value types.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from linecut.domain.value_objects import PartDemand, StockCandidate

logger = logging.getLogger(__name__)

# A stock size is only approved when at least this many pieces are needed
DEFAULT_MIN_RUN_QUANTITY = 4

# Trials below this waste fraction are accepted without trying other sizes
DEFAULT_LOW_WASTE_THRESHOLD = 0.05

# Largest number of parts the matcher combines in a single search
MAX_COMBO_SIZE = 2


@dataclass(frozen=True)
class LinearPackingConfig:
    """Configuration for linear bin packing optimization.

    Attributes:
        min_run_quantity: Fewest pieces of one stock size that must be
            needed before that size is approved for use.
        low_waste_threshold: Waste fraction below which a trial is accepted
            immediately instead of evaluating the remaining stock sizes.
    """

    min_run_quantity: int = DEFAULT_MIN_RUN_QUANTITY
    low_waste_threshold: float = DEFAULT_LOW_WASTE_THRESHOLD

    def __post_init__(self) -> None:
        if self.min_run_quantity < 1:
            raise ValueError("Minimum run quantity must be at least 1")
        if not 0 <= self.low_waste_threshold <= 1:
            raise ValueError("Low waste threshold must be between 0 and 1")


def calculate_waste_fraction(
    full_length: float,
    parts: Sequence[float],
    cut_width: float,
) -> float:
    """Fraction of a stock piece not covered by parts and the cuts between them."""
    used = sum(parts) + cut_width * (len(parts) - 1)
    return (full_length - used) / full_length


@dataclass(frozen=True)
class BinInstance:
    """One physical stock piece and the parts cut from it.

    Attributes:
        stock_size: Full length of the stock piece.
        parts: Part lengths in cutting order.
        waste_fraction: Share of the stock piece that is wasted (0-1),
            counting the unusable trim as waste.
    """

    stock_size: float
    parts: tuple[float, ...]
    waste_fraction: float

    def __post_init__(self) -> None:
        if self.stock_size <= 0:
            raise ValueError("Stock size must be positive")
        if not self.parts:
            raise ValueError("A bin must contain at least one part")

    @classmethod
    def from_run(
        cls,
        stock_size: float,
        parts: Sequence[float],
        cut_width: float,
    ) -> "BinInstance":
        """Create an instance, deriving its waste from the kerf between parts."""
        return cls(
            stock_size=stock_size,
            parts=tuple(parts),
            waste_fraction=calculate_waste_fraction(stock_size, parts, cut_width),
        )

    @property
    def part_count(self) -> int:
        """Number of parts cut from this piece."""
        return len(self.parts)


@dataclass(frozen=True)
class BinGroup:
    """All stock pieces of one size in a packing result.

    The group keeps every instance so that per-instance waste fractions
    are preserved when groups from different passes are merged.
    """

    stock_size: float
    instances: tuple[BinInstance, ...]

    def __post_init__(self) -> None:
        if any(i.stock_size != self.stock_size for i in self.instances):
            raise ValueError("All instances in a group must share its stock size")

    @property
    def count(self) -> int:
        """Number of stock pieces of this size."""
        return len(self.instances)

    @property
    def waste_fraction_sum(self) -> float:
        """Sum of the instance waste fractions."""
        return sum(i.waste_fraction for i in self.instances)

    @property
    def average_waste_percentage(self) -> float:
        """Mean instance waste as a percentage (0-100)."""
        if not self.instances:
            return 0.0
        return self.waste_fraction_sum / self.count * 100

    @property
    def contents(self) -> tuple[tuple[float, ...], ...]:
        """Part-length runs, one per stock piece."""
        return tuple(i.parts for i in self.instances)


@dataclass(frozen=True)
class OptimizationResult:
    """Complete result of linear bin packing.

    Attributes:
        bins: Groups of cut stock pieces keyed by stock size, smallest first.
        remaining_parts: Part lengths that could not be packed.
    """

    bins: dict[float, BinGroup]
    remaining_parts: tuple[float, ...]

    @property
    def overall_waste_percentage(self) -> float:
        """Waste across all pieces, weighted by the stock material consumed."""
        total_waste = sum(g.waste_fraction_sum * g.stock_size for g in self.bins.values())
        total_material = sum(g.stock_size * g.count for g in self.bins.values())
        if total_material == 0:
            return 0.0
        return total_waste / total_material * 100

    @property
    def total_stock_pieces(self) -> int:
        """Total number of stock pieces across all sizes."""
        return sum(g.count for g in self.bins.values())

    @property
    def packed_parts(self) -> list[float]:
        """Every packed part length, in group then run order."""
        return [part for g in self.bins.values() for run in g.contents for part in run]


def best_fit(
    space: float,
    pool: Sequence[float],
    cut_width: float = 0.0,
    max_combo_size: int = MAX_COMBO_SIZE,
) -> list[float]:
    """Find the one or two pool lengths that leave the least space unused.

    With ``max_combo_size`` of 1 this returns the first pool entry that fits,
    which for a pool sorted longest-first is the largest fitting length.
    Otherwise every fitting entry is tried alone and paired with the first
    other entry that fits after one cut. Only strict improvements replace the
    current best, so the earliest combination wins ties.

    Args:
        space: Length available for the new parts.
        pool: Candidate part lengths, normally sorted longest first.
        cut_width: Kerf consumed between the two parts of a pair.
        max_combo_size: 1 for single parts only, 2 to also consider pairs.

    Returns:
        The chosen part lengths (empty if nothing fits).
    """
    if max_combo_size not in (1, 2):
        raise ValueError(f"max_combo_size must be 1 or 2, got {max_combo_size}")

    if not pool:
        return []

    if max_combo_size == 1:
        for length in pool:
            if length <= space:
                return [length]
        return []

    best: list[float] = []
    best_leftover = space

    for index, length in enumerate(pool):
        if length > space:
            continue
        # Equal neighbours produce identical combinations
        if index > 0 and pool[index - 1] == length:
            continue

        leftover = space - length
        if leftover < best_leftover:
            best_leftover = leftover
            best = [length]

        room = space - length - cut_width
        if room > 0:
            rest = [*pool[:index], *pool[index + 1 :]]
            partner = best_fit(room, rest, cut_width, max_combo_size=1)
            if partner:
                combo = [length, *partner]
                leftover = space - sum(combo) - cut_width * (len(combo) - 1)
                if leftover < best_leftover:
                    best_leftover = leftover
                    best = combo

        if best_leftover == 0:
            break

    return best


def _remove_one(pool: list[float], length: float) -> None:
    """Remove the first occurrence of ``length`` from ``pool``."""
    del pool[pool.index(length)]


class LinearBinPacker:
    """Greedy multi-size packer for one-dimensional stock.

    Every stock piece is filled by starting with the longest outstanding
    part and adding the best-fitting one or two parts until the piece is
    full. Each stock size is trialled, largest first, and the trial with
    the least waste is committed. Stock sizes that end up with fewer pieces
    than the minimum run quantity are dissolved and their parts re-packed
    in a second pass that accepts any run length. Packing stops when the
    longest outstanding part fits no stock size.

    Attributes:
        config: Packing configuration (minimum run, low-waste threshold).
    """

    def __init__(self, config: LinearPackingConfig | None = None) -> None:
        """Initialize the packer with configuration.

        Args:
            config: Packing configuration. Defaults to LinearPackingConfig().
        """
        self.config = config or LinearPackingConfig()

    def pack(
        self,
        demand: Sequence[PartDemand],
        stock_lengths: Sequence[float],
        cut_width: float,
        unusable_length: float,
        min_run_quantity: int | None = None,
    ) -> OptimizationResult:
        """Pack the demanded parts onto stock pieces, minimizing waste.

        Args:
            demand: Part lengths and quantities to cut.
            stock_lengths: Available stock lengths.
            cut_width: Kerf lost at each cut between adjacent parts.
            unusable_length: Trim lost from every stock piece.
            min_run_quantity: Override for the configured minimum run.

        Returns:
            OptimizationResult with grouped bins and any unpacked parts.

        Raises:
            ValueError: If cut width, unusable length or the minimum run
                quantity is out of range.
        """
        if cut_width < 0:
            raise ValueError("Cut width must be non-negative")
        if unusable_length < 0:
            raise ValueError("Unusable length must be non-negative")
        if min_run_quantity is None:
            min_run_quantity = self.config.min_run_quantity
        if min_run_quantity < 1:
            raise ValueError("Minimum run quantity must be at least 1")

        inventory = self._expand_inventory(demand)
        candidates = StockCandidate.from_lengths(stock_lengths, unusable_length)

        logger.debug(
            "Packing %d parts onto %d stock sizes (min run %d)",
            len(inventory),
            len(candidates),
            min_run_quantity,
        )

        packed, unpacked = self._pack_greedy(inventory, candidates, cut_width)
        kept, leftovers = self._enforce_min_run(packed, min_run_quantity)

        remaining = unpacked
        if leftovers:
            logger.info(
                "Re-packing %d parts from stock sizes below the minimum run of %d",
                len(leftovers),
                min_run_quantity,
            )
            sub_result = self.pack(
                PartDemand.from_lengths(leftovers),
                stock_lengths,
                cut_width,
                unusable_length,
                min_run_quantity=1,
            )
            for size, group in sub_result.bins.items():
                kept.setdefault(size, []).extend(group.instances)
            remaining.extend(sub_result.remaining_parts)

        bins = {
            size: BinGroup(stock_size=size, instances=tuple(kept[size]))
            for size in sorted(kept)
        }
        return OptimizationResult(bins=bins, remaining_parts=tuple(remaining))

    def _expand_inventory(self, demand: Sequence[PartDemand]) -> list[float]:
        """Expand demand into one entry per unit, longest first.

        Args:
            demand: Part lengths with quantities.

        Returns:
            New list of individual part lengths sorted descending (stable).
        """
        inventory: list[float] = []
        for part in demand:
            inventory.extend([part.length] * part.quantity)
        return sorted(inventory, reverse=True)

    def _trial_pack(
        self,
        pool: list[float],
        candidate: StockCandidate,
        cut_width: float,
    ) -> list[float] | None:
        """Simulate filling one stock piece from the front of the pool.

        Args:
            pool: Outstanding part lengths, longest first.
            candidate: Stock size to fill.
            cut_width: Kerf between adjacent parts.

        Returns:
            The run of part lengths, or None if the longest part does not fit.
        """
        first = pool[0]
        if not candidate.is_usable or first > candidate.usable_length:
            return None

        trial_pool = pool[1:]
        run = [first]
        space = candidate.usable_length - first

        while space > cut_width and trial_pool:
            # Room for the next part once the separating cut is made
            addition = best_fit(space - cut_width, trial_pool, cut_width)
            if not addition:
                break
            for length in addition:
                run.append(length)
                _remove_one(trial_pool, length)
            space -= sum(addition) + cut_width * len(addition)

        return run

    def _pack_greedy(
        self,
        inventory: list[float],
        candidates: list[StockCandidate],
        cut_width: float,
    ) -> tuple[list[BinInstance], list[float]]:
        """Commit the least-wasteful trial until the inventory is exhausted.

        Stops early when the longest outstanding part fits no stock size;
        every part still outstanding is then returned as unpacked.

        Returns:
            Tuple of (committed bins in order, parts left unpacked).
        """
        remaining = list(inventory)
        bins: list[BinInstance] = []
        threshold = self.config.low_waste_threshold

        while remaining:
            best: BinInstance | None = None

            for candidate in candidates:
                run = self._trial_pack(remaining, candidate, cut_width)
                if run is None:
                    continue

                trial = BinInstance.from_run(candidate.full_length, run, cut_width)
                logger.debug(
                    "Trial on %s: %d parts, %.2f%% waste",
                    candidate.full_length,
                    trial.part_count,
                    trial.waste_fraction * 100,
                )
                if best is None or trial.waste_fraction < best.waste_fraction:
                    best = trial
                    if trial.waste_fraction < threshold:
                        break

            if best is None:
                logger.warning(
                    "Part length %s exceeds every usable stock length; "
                    "%d parts left unpacked",
                    remaining[0],
                    len(remaining),
                )
                break

            logger.debug(
                "Committed %s with parts %s (%.2f%% waste)",
                best.stock_size,
                list(best.parts),
                best.waste_fraction * 100,
            )
            bins.append(best)
            for length in best.parts:
                _remove_one(remaining, length)

        return bins, remaining

    def _enforce_min_run(
        self,
        bins: list[BinInstance],
        min_run_quantity: int,
    ) -> tuple[dict[float, list[BinInstance]], list[float]]:
        """Keep stock sizes with enough pieces; release the parts of the rest.

        Returns:
            Tuple of (kept instances by stock size, released part lengths).
        """
        by_size: dict[float, list[BinInstance]] = {}
        for instance in bins:
            by_size.setdefault(instance.stock_size, []).append(instance)

        kept: dict[float, list[BinInstance]] = {}
        leftovers: list[float] = []
        for size, instances in by_size.items():
            if len(instances) >= min_run_quantity:
                kept[size] = instances
            else:
                logger.info(
                    "Stock size %s used %d times, below minimum run of %d",
                    size,
                    len(instances),
                    min_run_quantity,
                )
                for instance in instances:
                    leftovers.extend(instance.parts)

        return kept, leftovers
