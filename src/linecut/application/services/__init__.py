"""Application services for cutlist optimization."""

from .input_validator import InputValidatorService, InvalidInputError

__all__ = [
    "InputValidatorService",
    "InvalidInputError",
]
