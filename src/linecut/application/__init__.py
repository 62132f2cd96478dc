"""Application layer - use cases and orchestration."""

from .commands import OptimizeCutlistCommand, optimize
from .dtos import CutlistInput, OptimizationOutput
from .services import InputValidatorService, InvalidInputError

__all__ = [
    "CutlistInput",
    "InputValidatorService",
    "InvalidInputError",
    "OptimizationOutput",
    "OptimizeCutlistCommand",
    "optimize",
]
