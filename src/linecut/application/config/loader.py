"""Loading of JSON cutlist configurations.

Reading, JSON decoding and schema validation each fail with a
``ConfigError`` whose ``error_type`` names the stage that failed, so the
CLI and the API can report problems without inspecting exception classes.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from linecut.application.config.schema import CutlistConfiguration


class ConfigError(Exception):
    """A configuration could not be read or did not validate.

    Attributes:
        message: Summary shown to the user.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse or validation.
        path: Configuration file, when loading from disk.
        details: Per-problem mappings. Validation details carry ``path``,
            ``message``, ``value`` and ``error_type``; JSON details carry
            ``line``, ``column`` and ``message``.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("parts", 0, "length"))
        'parts[0].length'
        >>> _format_json_path(("optimizer", "min_run_quantity"))
        'optimizer.min_run_quantity'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _describe(detail: dict[str, Any]) -> str:
    value = detail.get("value")
    if value is None or isinstance(value, (dict, list)):
        return f"  - {detail['path']}: {detail['message']}"
    return f"  - {detail['path']}: {detail['message']} (got: {value!r})"


def _validate(data: Any, path: Path | None = None) -> CutlistConfiguration:
    try:
        return CutlistConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        message = "\n".join(
            ["Configuration validation failed:"] + [_describe(d) for d in details]
        )
        raise ConfigError(message, "validation", path, details) from e


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading config file {path}: {e}", "file_read_error", path
        ) from e


def load_config(path: Path) -> CutlistConfiguration:
    """Load and validate a cutlist configuration file.

    Raises:
        ConfigError: If the file is missing, unreadable, not JSON, or does
            not match the configuration schema.

    Example:
        >>> config = load_config(Path("cutlist.json"))
        >>> [(p.length, p.quantity) for p in config.parts]
        [(2500.0, 4)]
    """
    content = _read_text(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> CutlistConfiguration:
    """Validate configuration data that is already decoded, such as an API body.

    Raises:
        ConfigError: If the data does not match the configuration schema.
    """
    return _validate(data)
