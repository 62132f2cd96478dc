"""Output formatters and exporters for optimization results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linecut.application.dtos import OptimizationOutput


def _length(value: float) -> str:
    """Format a length for display, dropping a trailing .0 for whole numbers."""
    return f"{value:g}"


def format_stock_size(size: float) -> str:
    """Format a stock size as a JSON object key.

    Whole sizes drop the fractional part. Other sizes keep every digit, so
    distinct sizes never share a key.

    Examples:
        >>> format_stock_size(5600.0)
        '5600'
        >>> format_stock_size(12345.64)
        '12345.64'
    """
    size = float(size)
    if size.is_integer():
        return str(int(size))
    return repr(size)


class CutPlanFormatter:
    """Formats an optimization result as plain-text tables.

    Sections: summary totals, stock usage per length, one row per cut
    stock piece, and any parts that could not be packed.
    """

    def __init__(
        self, unit: str = "mm", labels: dict[float, str] | None = None
    ) -> None:
        """Initialize formatter.

        Args:
            unit: Length unit shown in headings.
            labels: Part names keyed by part length, shown next to the
                length in the cutting plan and the unpacked list.
        """
        self.unit = unit
        self.labels = labels or {}

    def _part(self, length: float) -> str:
        label = self.labels.get(length)
        return f"{_length(length)} ({label})" if label else _length(length)

    def format(self, output: "OptimizationOutput") -> str:
        """Format the complete cutting plan."""
        if not output.is_valid:
            return "\n".join(["Optimization failed:"] + [f"  - {e}" for e in output.errors])

        sections = [self.format_summary(output), self.format_cutting_plan(output)]
        if output.remaining_parts:
            sections.append(self.format_remaining(output))
        return "\n\n".join(sections)

    def format_summary(self, output: "OptimizationOutput") -> str:
        """Format summary totals and stock usage."""
        summary = output.summary
        if summary is None:
            return "No summary available."

        lines = [
            "CUTLIST SUMMARY",
            "=" * 60,
            f"{'Stock pieces:':<28} {summary.total_stock_pieces}",
            f"{'Total part length:':<28} {_length(summary.total_profile_length)} {self.unit}",
            f"{'Total stock length:':<28} {_length(summary.total_stock_length)} {self.unit}",
            f"{'Used length:':<28} {summary.used_length_percentage:.1f}%",
            f"{'Wastage:':<28} {summary.wastage_percentage:.1f}%",
        ]
        if summary.stock_usage:
            lines.append("")
            lines.append("STOCK USAGE")
            lines.append("-" * 60)
            for usage in summary.stock_usage:
                lines.append(
                    f"{_length(usage.length) + ' ' + self.unit:<28} {usage.quantity} pieces"
                )
        return "\n".join(lines)

    def format_cutting_plan(self, output: "OptimizationOutput") -> str:
        """Format one row per cut stock piece."""
        if not output.bins:
            return "No stock pieces used."

        lines = [
            "CUTTING PLAN",
            "=" * 60,
            f"{'Stock':<10} {'Waste %':<10} {'Parts'}",
            "-" * 60,
        ]
        for size, group in output.bins.items():
            for instance in group.instances:
                parts = " + ".join(self._part(p) for p in instance.parts)
                lines.append(
                    f"{_length(size):<10} {instance.waste_fraction * 100:<10.1f} {parts}"
                )
            lines.append(
                f"{'':<10} {'avg ' + format(group.average_waste_percentage, '.1f'):<10} "
                f"{group.count} x {_length(size)} {self.unit}"
            )
        lines.append("-" * 60)
        lines.append(f"Overall waste: {output.overall_waste_percentage:.1f}%")
        return "\n".join(lines)

    def format_remaining(self, output: "OptimizationOutput") -> str:
        """Format parts that could not be packed."""
        lines = ["UNPACKED PARTS", "-" * 60]
        counts: dict[float, int] = {}
        for length in output.remaining_parts:
            counts[length] = counts.get(length, 0) + 1
        for length, qty in counts.items():
            text = f"{_length(length)} {self.unit}"
            if self.labels.get(length):
                text += f" ({self.labels[length]})"
            lines.append(f"{text:<28} x {qty}")
        return "\n".join(lines)


class JsonResultExporter:
    """Exports optimization results as JSON.

    Stock sizes become object keys, so they are serialized as strings.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.indent = indent

    def export(self, output: "OptimizationOutput") -> str:
        """Serialize the result mapping to a JSON string."""
        data = output.to_dict()
        data["bins"] = {format_stock_size(size): group for size, group in data["bins"].items()}
        return json.dumps(data, indent=self.indent)

    def export_to_file(self, output: "OptimizationOutput", path: Path) -> Path:
        """Write the JSON result to ``path`` and return it."""
        path.write_text(self.export(output), encoding="utf-8")
        return path
