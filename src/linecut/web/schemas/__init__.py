"""Pydantic schemas for the REST API."""

from linecut.web.schemas.requests import (
    ConfigValidateRequest,
    OptimizeFromConfigRequest,
    OptimizeRequest,
    PartSchema,
)
from linecut.web.schemas.responses import (
    BinGroupSchema,
    LayoutSchema,
    LayoutSegmentSchema,
    OptimizationResponseSchema,
    StockUsageSchema,
    SummarySchema,
    ValidationResultSchema,
)

__all__ = [
    "BinGroupSchema",
    "ConfigValidateRequest",
    "LayoutSchema",
    "LayoutSegmentSchema",
    "OptimizationResponseSchema",
    "OptimizeFromConfigRequest",
    "OptimizeRequest",
    "PartSchema",
    "StockUsageSchema",
    "SummarySchema",
    "ValidationResultSchema",
]
