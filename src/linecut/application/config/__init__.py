"""Configuration schema and loading system for cutlist definitions.

This package provides JSON-based configuration loading and validation.
It includes Pydantic models for schema validation, a configuration loader
with comprehensive error handling, and cutting advisory checks.

Example:
    >>> from pathlib import Path
    >>> from linecut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("cutlist.json"))
    ...     print(f"{len(config.parts)} part lengths")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from linecut.application.config.adapter import (
    config_to_cutlist_input,
    config_to_demand,
    config_to_labels,
    config_to_packing_config,
)
from linecut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from linecut.application.config.merger import merge_config_with_cli
from linecut.application.config.schema import (
    DEFAULT_CUT_WIDTH,
    DEFAULT_STOCK_LENGTHS,
    DEFAULT_UNUSABLE_LENGTH,
    SUPPORTED_VERSIONS,
    CutlistConfiguration,
    OptimizerConfigSchema,
    OutputConfig,
    PartConfig,
)
from linecut.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "CutlistConfiguration",
    "DEFAULT_CUT_WIDTH",
    "DEFAULT_STOCK_LENGTHS",
    "DEFAULT_UNUSABLE_LENGTH",
    "OptimizerConfigSchema",
    "OutputConfig",
    "PartConfig",
    "SUPPORTED_VERSIONS",
    # Loader
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    "merge_config_with_cli",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
    # Adapters
    "config_to_cutlist_input",
    "config_to_demand",
    "config_to_labels",
    "config_to_packing_config",
]
