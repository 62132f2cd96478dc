"""Input validation service for cutlist optimization.

Centralizes the checks that reject bad demand or stock data before any
packing starts, providing consistent error reporting and easier testing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linecut.application.dtos import CutlistInput


class InvalidInputError(ValueError):
    """Raised when optimization input is rejected before packing."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Invalid input: {'; '.join(errors)}")


class InputValidatorService:
    """Service for validating optimization inputs.

    Values are never clamped: every out-of-range value is reported so the
    caller can correct it.
    """

    def validate_cutlist_input(self, cutlist_input: "CutlistInput") -> list[str]:
        """Validate parts, stock lengths, cut width and unusable length.

        Delegates to CutlistInput.validate() for field validation.

        Args:
            cutlist_input: Input to validate.

        Returns:
            List of validation error messages (empty if valid).
        """
        return cutlist_input.validate()

    def validate_min_run_quantity(self, min_run_quantity: int) -> list[str]:
        """Validate the minimum run quantity override."""
        if isinstance(min_run_quantity, bool) or not isinstance(min_run_quantity, int):
            return ["Minimum run quantity must be an integer"]
        if min_run_quantity < 1:
            return ["Minimum run quantity must be at least 1"]
        return []

    def validate_all(
        self,
        cutlist_input: "CutlistInput",
        min_run_quantity: int,
    ) -> list[str]:
        """Run all validations and collect errors."""
        errors = self.validate_cutlist_input(cutlist_input)
        errors.extend(self.validate_min_run_quantity(min_run_quantity))
        return errors
