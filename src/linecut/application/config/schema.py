"""Pydantic models for cutlist configuration files.

A configuration file describes the parts to cut, the stock lengths on
hand, the cutting losses and the optimizer settings. All models forbid
unknown fields so that typos are reported instead of silently ignored.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from linecut.infrastructure.linear_packing import (
    DEFAULT_LOW_WASTE_THRESHOLD,
    DEFAULT_MIN_RUN_QUANTITY,
)

# Supported schema versions for configuration files
# Version 1.0: Parts, stock lengths, cut width and unusable length
# Version 1.1: Added optimizer settings and part labels
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

DEFAULT_STOCK_LENGTHS: tuple[float, ...] = (6400, 5600, 4900)
DEFAULT_CUT_WIDTH = 5.0
DEFAULT_UNUSABLE_LENGTH = 80.0


class PartConfig(BaseModel):
    """A required part length and quantity.

    Attributes:
        length: Part length (must be positive).
        quantity: Number of parts needed (at least 1).
        label: Optional name shown in reports.
    """

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, description="Part length")
    quantity: int = Field(default=1, ge=1, description="Number of parts needed")
    label: str | None = Field(default=None, max_length=100, description="Part label")


class OptimizerConfigSchema(BaseModel):
    """Optimizer settings.

    Attributes:
        min_run_quantity: Fewest pieces of a stock size needed to approve it.
        low_waste_threshold: Waste fraction at which a trial is accepted
            without evaluating the remaining stock sizes.
    """

    model_config = ConfigDict(extra="forbid")

    min_run_quantity: int = Field(
        default=DEFAULT_MIN_RUN_QUANTITY,
        ge=1,
        description="Minimum pieces of a stock size before it is used",
    )
    low_waste_threshold: float = Field(
        default=DEFAULT_LOW_WASTE_THRESHOLD,
        ge=0,
        le=1,
        description="Waste fraction accepted without trying other stock sizes",
    )


class OutputConfig(BaseModel):
    """Configuration for output format and file paths.

    Attributes:
        format: Output format ("text" tables or "json").
        output_file: Optional path to write the output to.
        unit: Length unit shown in text reports.
    """

    model_config = ConfigDict(extra="forbid")

    format: Literal["text", "json"] = Field(default="text", description="Output format")
    output_file: str | None = Field(default=None, description="Output file path")
    unit: str = Field(default="mm", max_length=10, description="Length unit label")


class CutlistConfiguration(BaseModel):
    """Root configuration model for cutlist optimization.

    Example:
        >>> config = CutlistConfiguration(
        ...     schema_version="1.0",
        ...     parts=[PartConfig(length=2500, quantity=4)],
        ... )
        >>> config.stock_lengths
        [6400.0, 5600.0, 4900.0]
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    parts: list[PartConfig] = Field(..., min_length=1, description="Parts to cut")
    stock_lengths: list[float] = Field(
        default_factory=lambda: [float(s) for s in DEFAULT_STOCK_LENGTHS],
        description="Available stock lengths",
    )
    cut_width: float = Field(
        default=DEFAULT_CUT_WIDTH, ge=0, description="Kerf lost per cut"
    )
    unusable_length: float = Field(
        default=DEFAULT_UNUSABLE_LENGTH,
        ge=0,
        description="Trim lost from every stock piece",
    )
    optimizer: OptimizerConfigSchema = Field(default_factory=OptimizerConfigSchema)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions within a supported major version are accepted
        for forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @field_validator("stock_lengths")
    @classmethod
    def validate_stock_lengths(cls, v: list[float]) -> list[float]:
        """Validate every stock length is positive."""
        for length in v:
            if length <= 0:
                raise ValueError(f"Stock lengths must be positive (got {length})")
        return v
