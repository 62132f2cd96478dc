"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from linecut.application.config.schema import (
    DEFAULT_CUT_WIDTH,
    DEFAULT_STOCK_LENGTHS,
    DEFAULT_UNUSABLE_LENGTH,
)
from linecut.infrastructure.linear_packing import (
    DEFAULT_LOW_WASTE_THRESHOLD,
    DEFAULT_MIN_RUN_QUANTITY,
)


class PartSchema(BaseModel):
    """A required part length and quantity."""

    length: float = Field(..., description="Part length")
    quantity: int = Field(default=1, description="Number of parts needed")


class OptimizeRequest(BaseModel):
    """Request for optimizing a cutlist.

    Ranges are checked by the optimizer so that every rejected value is
    reported together in one error response.
    """

    parts: list[PartSchema] = Field(..., description="Parts to cut")
    stock_lengths: list[float] = Field(
        default_factory=lambda: [float(s) for s in DEFAULT_STOCK_LENGTHS],
        description="Available stock lengths",
    )
    cut_width: float = Field(default=DEFAULT_CUT_WIDTH, description="Kerf lost per cut")
    unusable_length: float = Field(
        default=DEFAULT_UNUSABLE_LENGTH, description="Trim lost from every stock piece"
    )
    min_run_quantity: int = Field(
        default=DEFAULT_MIN_RUN_QUANTITY,
        description="Fewest pieces of a stock size needed to use it",
    )
    low_waste_threshold: float = Field(
        default=DEFAULT_LOW_WASTE_THRESHOLD,
        description="Waste fraction accepted without trying other stock sizes",
    )


class OptimizeFromConfigRequest(BaseModel):
    """Request for optimizing from a full configuration document."""

    config: dict[str, Any] = Field(..., description="Full cutlist configuration JSON")


class ConfigValidateRequest(BaseModel):
    """Request for validating a configuration."""

    config: dict[str, Any] = Field(..., description="Cutlist configuration JSON")
