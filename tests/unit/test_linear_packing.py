"""Tests for linear packing models, the best-fit matcher and LinearBinPacker.

Tests cover:
- Data model validation and derived waste figures
- Best-fit selection of one or two parts
- Greedy multi-size packing with kerf and unusable trim
- Minimum run enforcement and leftover re-packing
- Infeasible parts and exhausted stock
- Conservation, waste bounds and determinism
"""

from __future__ import annotations

import logging

import pytest

from linecut.domain import PartDemand
from linecut.infrastructure.linear_packing import (
    BinGroup,
    BinInstance,
    LinearBinPacker,
    LinearPackingConfig,
    OptimizationResult,
    best_fit,
    calculate_waste_fraction,
)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mixed_demand() -> list[PartDemand]:
    """Demand with several lengths, all of which fit the longest stock."""
    return [
        PartDemand(2500, 3),
        PartDemand(1200, 5),
        PartDemand(800, 7),
        PartDemand(450, 4),
    ]


def _expanded(demand: list[PartDemand]) -> list[float]:
    return [part.length for part in demand for _ in range(part.quantity)]


# =============================================================================
# Configuration and models
# =============================================================================


class TestLinearPackingConfig:
    """Tests for LinearPackingConfig dataclass."""

    def test_default_values(self) -> None:
        config = LinearPackingConfig()
        assert config.min_run_quantity == 4
        assert config.low_waste_threshold == 0.05

    def test_min_run_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            LinearPackingConfig(min_run_quantity=0)

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_must_be_a_fraction(self, threshold: float) -> None:
        with pytest.raises(ValueError, match="between 0 and 1"):
            LinearPackingConfig(low_waste_threshold=threshold)


class TestWasteFraction:
    def test_single_part(self) -> None:
        assert calculate_waste_fraction(1000, [250], 5) == 0.75

    def test_cut_between_parts_counts_as_used(self) -> None:
        """Two parts need one cut between them."""
        assert calculate_waste_fraction(1000, [500, 495], 5) == 0.0

    def test_bin_instance_from_run(self) -> None:
        instance = BinInstance.from_run(5600, [2500, 2500], 5)
        assert instance.parts == (2500, 2500)
        assert instance.part_count == 2
        assert instance.waste_fraction == pytest.approx(595 / 5600)

    def test_bin_instance_requires_parts(self) -> None:
        with pytest.raises(ValueError, match="at least one part"):
            BinInstance(stock_size=1000, parts=(), waste_fraction=1.0)


class TestBinGroup:
    """Tests for BinGroup aggregation."""

    def test_count_and_average_waste(self) -> None:
        group = BinGroup(
            stock_size=1000,
            instances=(
                BinInstance(1000, (900,), 0.1),
                BinInstance(1000, (700,), 0.3),
            ),
        )
        assert group.count == 2
        assert group.average_waste_percentage == pytest.approx(20.0)
        assert group.contents == ((900,), (700,))

    def test_instances_must_share_stock_size(self) -> None:
        with pytest.raises(ValueError, match="share its stock size"):
            BinGroup(stock_size=1000, instances=(BinInstance(2000, (900,), 0.55),))


class TestOptimizationResult:
    def test_overall_waste_is_weighted_by_material(self) -> None:
        result = OptimizationResult(
            bins={
                1000: BinGroup(1000, (BinInstance(1000, (900,), 0.1),)),
                2000: BinGroup(2000, (BinInstance(2000, (1600,), 0.2),)),
            },
            remaining_parts=(),
        )
        # (0.1 * 1000 + 0.2 * 2000) / 3000
        assert result.overall_waste_percentage == pytest.approx(50 / 3)
        assert result.total_stock_pieces == 2
        assert result.packed_parts == [900, 1600]

    def test_empty_result_has_zero_waste(self) -> None:
        result = OptimizationResult(bins={}, remaining_parts=(100,))
        assert result.overall_waste_percentage == 0.0
        assert result.total_stock_pieces == 0


# =============================================================================
# Best-fit matcher
# =============================================================================


class TestBestFit:
    """Tests for the best_fit part matcher."""

    def test_empty_pool(self) -> None:
        assert best_fit(100, []) == []

    def test_nothing_fits(self) -> None:
        assert best_fit(100, [150, 120]) == []

    def test_single_mode_returns_first_fitting(self) -> None:
        assert best_fit(100, [120, 90, 60, 40], max_combo_size=1) == [90]

    def test_pair_that_fills_exactly(self) -> None:
        assert best_fit(100, [70, 30, 20]) == [70, 30]

    def test_pair_must_leave_room_for_cut(self) -> None:
        """60 + 40 fills 100 but not with a 5 wide cut between them."""
        assert best_fit(100, [60, 40], cut_width=5) == [60]

    def test_pair_with_cut(self) -> None:
        assert best_fit(100, [60, 35], cut_width=5) == [60, 35]

    def test_earliest_combination_wins_ties(self) -> None:
        assert best_fit(100, [50, 50, 50]) == [50, 50]

    def test_pair_preferred_over_closer_single(self) -> None:
        """80 alone leaves 20; 45 + 40 leaves 15."""
        assert best_fit(100, [80, 45, 40]) == [45, 40]

    def test_best_pair_found_past_first_entry(self) -> None:
        """80 alone leaves 20; 55 + 45 leaves nothing."""
        assert best_fit(100, [80, 55, 45]) == [55, 45]

    def test_does_not_mutate_pool(self) -> None:
        pool = [70, 30, 20]
        best_fit(100, pool)
        assert pool == [70, 30, 20]

    def test_invalid_combo_size(self) -> None:
        with pytest.raises(ValueError, match="max_combo_size"):
            best_fit(100, [10], max_combo_size=3)


# =============================================================================
# LinearBinPacker
# =============================================================================


class TestLinearBinPacker:
    """Tests for LinearBinPacker greedy packing."""

    def test_pairs_of_2500_on_default_stock(
        self, packer: LinearBinPacker, default_stock: list[float]
    ) -> None:
        """Two 2500 parts fit each stock size; 5600 wastes the least."""
        result = packer.pack([PartDemand(2500, 4)], default_stock, 5, 80)

        assert list(result.bins) == [5600]
        group = result.bins[5600]
        assert group.count == 2
        assert group.contents == ((2500, 2500), (2500, 2500))
        assert result.remaining_parts == ()
        assert result.overall_waste_percentage == pytest.approx(10.625)

    @pytest.mark.parametrize("min_run_quantity", [1, 4])
    def test_part_longer_than_all_stock_stops_packing(
        self, packer: LinearBinPacker, min_run_quantity: int
    ) -> None:
        """The longest part fits nowhere, so nothing at all is packed."""
        result = packer.pack(
            [PartDemand(7000, 1), PartDemand(1000, 4)],
            [6400],
            5,
            80,
            min_run_quantity=min_run_quantity,
        )

        assert result.bins == {}
        assert result.remaining_parts == (7000, 1000, 1000, 1000, 1000)
        assert result.overall_waste_percentage == 0

    def test_long_part_packed_when_a_stock_size_holds_it(
        self, packer: LinearBinPacker
    ) -> None:
        result = packer.pack(
            [PartDemand(7000, 1), PartDemand(1000, 4)],
            [7200, 6400],
            5,
            80,
            min_run_quantity=1,
        )

        assert result.remaining_parts == ()
        assert 7000 in result.packed_parts

    def test_only_infeasible_parts(self, packer: LinearBinPacker) -> None:
        result = packer.pack([PartDemand(7000, 2)], [6400], 5, 80)
        assert result.bins == {}
        assert result.remaining_parts == (7000, 7000)

    def test_infeasible_part_is_logged(
        self, packer: LinearBinPacker, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="linecut"):
            packer.pack([PartDemand(7000, 2)], [6400], 5, 80)
        assert "exceeds every usable stock length" in caplog.text

    def test_empty_stock_returns_all_parts(self, packer: LinearBinPacker) -> None:
        result = packer.pack(
            [PartDemand(100, 2), PartDemand(300, 1)], [], 5, 80
        )
        assert result.bins == {}
        assert result.remaining_parts == (300, 100, 100)
        assert result.overall_waste_percentage == 0

    def test_stock_consumed_by_trim_returns_all_parts(
        self, packer: LinearBinPacker
    ) -> None:
        result = packer.pack([PartDemand(10, 3)], [50, 80], 5, 80)
        assert result.bins == {}
        assert result.remaining_parts == (10, 10, 10)

    def test_two_lengths_fill_stock_exactly(self, packer: LinearBinPacker) -> None:
        """3000 + cut + 2995 is exactly one 6000 piece."""
        result = packer.pack(
            [PartDemand(3000, 1), PartDemand(2995, 1)], [6000], 5, 0
        )
        instance = result.bins[6000].instances[0]
        assert instance.parts == (3000, 2995)
        assert instance.waste_fraction == pytest.approx(0.0)

    def test_kerf_prevents_overfilling(self, packer: LinearBinPacker) -> None:
        """Two 500 parts need 1010 with a 10 wide cut, so each takes a piece."""
        result = packer.pack([PartDemand(500, 2)], [1000], 10, 0)
        assert result.bins[1000].contents == ((500,), (500,))

    def test_zero_cut_width(self, packer: LinearBinPacker) -> None:
        result = packer.pack([PartDemand(50, 2)], [100], 0, 0)
        assert result.bins[100].contents == ((50, 50),)
        assert result.overall_waste_percentage == 0

    def test_long_run_kept_from_first_pass(
        self, packer: LinearBinPacker, default_stock: list[float]
    ) -> None:
        result = packer.pack([PartDemand(2500, 8)], default_stock, 5, 80)
        assert list(result.bins) == [5600]
        assert result.bins[5600].count == 4

    def test_short_run_is_repacked_and_merged(self) -> None:
        """The single 600 piece falls below the run of 2 and returns via re-pack."""
        packer = LinearBinPacker(LinearPackingConfig(min_run_quantity=2))
        result = packer.pack(
            [PartDemand(1000, 2), PartDemand(600, 1)], [1000, 600], 0, 0
        )

        assert list(result.bins) == [600, 1000]
        assert result.bins[1000].count == 2
        assert result.bins[600].contents == ((600,),)
        assert result.remaining_parts == ()

    def test_min_run_override(self, default_stock: list[float]) -> None:
        packer = LinearBinPacker()
        relaxed = packer.pack(
            [PartDemand(2500, 4)], default_stock, 5, 80, min_run_quantity=1
        )
        default = packer.pack([PartDemand(2500, 4)], default_stock, 5, 80)
        assert relaxed == default

    def test_low_waste_threshold_accepts_first_trial(
        self, default_stock: list[float]
    ) -> None:
        """With every trial under the threshold, the largest stock wins."""
        packer = LinearBinPacker(
            LinearPackingConfig(min_run_quantity=1, low_waste_threshold=1.0)
        )
        result = packer.pack([PartDemand(2500, 4)], default_stock, 5, 80)
        assert list(result.bins) == [6400]
        assert result.bins[6400].count == 2

    def test_bins_ordered_by_stock_size(
        self, packer: LinearBinPacker, mixed_demand: list[PartDemand]
    ) -> None:
        result = packer.pack(mixed_demand, [6400, 5600, 4900, 2000], 5, 80)
        assert list(result.bins) == sorted(result.bins)

    def test_every_part_is_packed_or_remaining(
        self, packer: LinearBinPacker, mixed_demand: list[PartDemand]
    ) -> None:
        result = packer.pack(mixed_demand, [6400, 5600, 4900], 5, 80)
        accounted = result.packed_parts + list(result.remaining_parts)
        assert sorted(accounted) == sorted(_expanded(mixed_demand))

    def test_waste_bounds_and_usable_length(
        self, packer: LinearBinPacker, mixed_demand: list[PartDemand]
    ) -> None:
        cut_width, unusable = 5, 80
        result = packer.pack(mixed_demand, [6400, 5600, 4900], cut_width, unusable)

        assert 0 <= result.overall_waste_percentage <= 100
        for size, group in result.bins.items():
            for instance in group.instances:
                assert 0 <= instance.waste_fraction < 1
                used = sum(instance.parts) + cut_width * (instance.part_count - 1)
                assert used <= size - unusable

    def test_deterministic(
        self, packer: LinearBinPacker, mixed_demand: list[PartDemand]
    ) -> None:
        first = packer.pack(mixed_demand, [6400, 5600, 4900], 5, 80)
        second = packer.pack(mixed_demand, [6400, 5600, 4900], 5, 80)
        assert first == second

    def test_does_not_mutate_inputs(self, packer: LinearBinPacker) -> None:
        demand = [PartDemand(1200, 3)]
        stock = [4900, 6400]
        packer.pack(demand, stock, 5, 80)
        assert demand == [PartDemand(1200, 3)]
        assert stock == [4900, 6400]

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"cut_width": -1}, "Cut width"),
            ({"unusable_length": -1}, "Unusable length"),
            ({"min_run_quantity": 0}, "Minimum run quantity"),
        ],
    )
    def test_rejects_out_of_range_arguments(
        self, packer: LinearBinPacker, kwargs: dict, message: str
    ) -> None:
        arguments = {"cut_width": 5, "unusable_length": 80, **kwargs}
        with pytest.raises(ValueError, match=message):
            packer.pack([PartDemand(100, 1)], [1000], **arguments)
