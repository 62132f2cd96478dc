"""Cutting checks for schema-valid configurations.

The schema rejects malformed values on its own. These checks compare
parts against stock lengths and report what would leave parts unpacked
or stock sizes unused.
"""

from dataclasses import dataclass, field
from typing import Any

from linecut.application.config.schema import CutlistConfiguration


@dataclass
class ValidationError:
    """A problem that makes the configuration unusable.

    ``path`` is a JSON path such as ``stock_lengths`` or ``parts[2].length``.
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A problem worth reporting that still lets optimization run."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected by ``validate_config``."""

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """CLI exit code: 1 with errors, 2 with only warnings, else 0."""
        if self.errors:
            return 1
        return 2 if self.warnings else 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path, message, value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path, message, suggestion))
        return self


def _check_stock(config: CutlistConfiguration, result: ValidationResult) -> float:
    """Check stock lengths; return the longest usable length (0 if none)."""
    if not config.stock_lengths:
        result.add_error("stock_lengths", "At least one stock length is required")
        return 0.0

    seen: set[float] = set()
    longest_usable = 0.0
    for index, length in enumerate(config.stock_lengths):
        usable = length - config.unusable_length
        if usable <= 0:
            result.add_warning(
                f"stock_lengths[{index}]",
                f"Stock length {length:g} is not longer than the unusable length "
                f"{config.unusable_length:g} and will never be used",
                suggestion="Remove it or reduce unusable_length",
            )
        longest_usable = max(longest_usable, usable)
        if length in seen:
            result.add_warning(
                f"stock_lengths[{index}]",
                f"Stock length {length:g} is listed more than once",
            )
        seen.add(length)

    if longest_usable <= 0:
        result.add_error(
            "stock_lengths",
            "No stock length is longer than the unusable length",
            value=config.stock_lengths,
        )
    return longest_usable


def _check_parts(
    config: CutlistConfiguration,
    longest_usable: float,
    result: ValidationResult,
) -> None:
    seen: set[float] = set()
    for index, part in enumerate(config.parts):
        if 0 < longest_usable < part.length:
            result.add_warning(
                f"parts[{index}].length",
                f"Part length {part.length:g} exceeds the longest usable stock "
                f"length {longest_usable:g}; packing stops and every part "
                "will be left unpacked",
                suggestion="Add a longer stock length or split the part",
            )
        if part.length in seen:
            result.add_warning(
                f"parts[{index}].length",
                f"Part length {part.length:g} is listed more than once",
                suggestion="Combine the quantities into one entry",
            )
        seen.add(part.length)


def validate_config(config: CutlistConfiguration) -> ValidationResult:
    """Perform cutting checks on a schema-valid configuration.

    Errors:
        - No stock lengths, or none longer than the unusable length

    Warnings:
        - Stock lengths that can never be used
        - Parts longer than every usable stock length
        - Duplicate part or stock lengths

    Args:
        config: A configuration that passed schema validation.

    Returns:
        ValidationResult with errors and warnings.
    """
    result = ValidationResult()
    longest_usable = _check_stock(config, result)
    _check_parts(config, longest_usable, result)
    return result
