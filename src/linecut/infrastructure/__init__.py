"""Infrastructure layer - packing algorithms and formatters."""

from .formatters import CutPlanFormatter, JsonResultExporter
from .layout_generator import Layout, LayoutSegment, generate_layouts
from .linear_packing import (
    BinGroup,
    BinInstance,
    LinearBinPacker,
    LinearPackingConfig,
    OptimizationResult,
    best_fit,
)
from .summary import StockUsage, Summary, summarize

__all__ = [
    # Linear packing
    "BinGroup",
    "BinInstance",
    "LinearBinPacker",
    "LinearPackingConfig",
    "OptimizationResult",
    "best_fit",
    # Layouts
    "Layout",
    "LayoutSegment",
    "generate_layouts",
    # Summary
    "StockUsage",
    "Summary",
    "summarize",
    # Formatters
    "CutPlanFormatter",
    "JsonResultExporter",
]
