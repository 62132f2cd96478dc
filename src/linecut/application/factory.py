"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linecut.application.commands import OptimizeCutlistCommand
    from linecut.application.services import InputValidatorService
    from linecut.infrastructure.formatters import CutPlanFormatter, JsonResultExporter
    from linecut.infrastructure.linear_packing import LinearBinPacker, LinearPackingConfig


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Stateless services are cached; packers and commands are created per
    call because they carry their packing configuration.
    """

    _input_validator: "InputValidatorService | None" = field(
        default=None, init=False, repr=False
    )

    def get_input_validator(self) -> "InputValidatorService":
        """Get or create input validator instance."""
        if self._input_validator is None:
            from linecut.application.services import InputValidatorService

            self._input_validator = InputValidatorService()
        return self._input_validator

    def create_packer(
        self, config: "LinearPackingConfig | None" = None
    ) -> "LinearBinPacker":
        """Create a packer for the given configuration (defaults if None)."""
        from linecut.infrastructure.linear_packing import LinearBinPacker

        return LinearBinPacker(config)

    def create_optimize_command(
        self, config: "LinearPackingConfig | None" = None
    ) -> "OptimizeCutlistCommand":
        """Create an OptimizeCutlistCommand with injected dependencies."""
        from linecut.application.commands import OptimizeCutlistCommand

        return OptimizeCutlistCommand(
            packer=self.create_packer(config),
            input_validator=self.get_input_validator(),
        )

    def get_cut_plan_formatter(
        self, unit: str = "mm", labels: "dict[float, str] | None" = None
    ) -> "CutPlanFormatter":
        """Create a text formatter for the given length unit and part labels."""
        from linecut.infrastructure.formatters import CutPlanFormatter

        return CutPlanFormatter(unit=unit, labels=labels)

    def get_json_exporter(self) -> "JsonResultExporter":
        """Create a JSON exporter."""
        from linecut.infrastructure.formatters import JsonResultExporter

        return JsonResultExporter()


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
