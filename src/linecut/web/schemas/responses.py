"""Pydantic response schemas for the REST API."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class BinGroupSchema(BaseModel):
    """All cut pieces of one stock size."""

    count: int = Field(..., description="Number of stock pieces")
    average_waste_percentage: float = Field(..., description="Mean waste per piece")
    contents: list[list[float]] = Field(..., description="Part lengths per piece")


class LayoutSegmentSchema(BaseModel):
    """A span along a stock piece."""

    start: float = Field(..., description="Offset from the start of the stock")
    width: float = Field(..., description="Length of the span")
    type: Literal["part", "cut", "waste"] = Field(..., description="Segment kind")
    location: int | None = Field(default=None, description="1-based part position")
    length: float | None = Field(default=None, description="Part length")


class LayoutSchema(BaseModel):
    """Cutting template for one run of parts."""

    stock_size: float = Field(..., description="Stock length")
    count: int = Field(..., description="Pieces of this stock size")
    segments: list[LayoutSegmentSchema] = Field(..., description="Ordered segments")


class StockUsageSchema(BaseModel):
    """Pieces needed of one stock length."""

    length: float = Field(..., description="Stock length")
    quantity: int = Field(..., description="Pieces needed")


class SummarySchema(BaseModel):
    """Totals and utilization."""

    total_stock_pieces: int
    total_profile_length: float
    total_stock_length: float
    used_length_percentage: float
    wastage_percentage: float
    stock_usage: list[StockUsageSchema]


class OptimizationResponseSchema(BaseModel):
    """Response for cutlist optimization."""

    bins: dict[str, BinGroupSchema] = Field(
        default_factory=dict, description="Cut pieces keyed by stock length"
    )
    overall_waste_percentage: float = Field(..., description="Material-weighted waste")
    remaining_parts: list[float] = Field(
        default_factory=list, description="Parts that could not be packed"
    )
    layouts: list[LayoutSchema] = Field(default_factory=list)
    summary: SummarySchema | None = None


class ValidationResultSchema(BaseModel):
    """Response for configuration validation."""

    is_valid: bool = Field(..., description="Whether configuration is valid")
    errors: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation errors"
    )
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Validation warnings"
    )
