"""Configuration validation endpoints."""

from fastapi import APIRouter

from linecut.application.config import load_config_from_dict, validate_config
from linecut.web.schemas.requests import ConfigValidateRequest
from linecut.web.schemas.responses import ValidationResultSchema

router = APIRouter(prefix="/validate", tags=["validate"])


@router.post("", response_model=ValidationResultSchema)
async def validate_configuration(
    request: ConfigValidateRequest,
) -> ValidationResultSchema:
    """Validate a cutlist configuration without optimizing.

    Schema problems are raised as ConfigError and rendered by the
    registered handler; cutting checks come back as errors and warnings.

    Raises:
        ConfigError: If the configuration fails schema validation (422).
    """
    config = load_config_from_dict(request.config)
    result = validate_config(config)

    return ValidationResultSchema(
        is_valid=result.is_valid,
        errors=[{"message": e.message, "path": e.path} for e in result.errors],
        warnings=[
            {"message": w.message, "path": w.path, "suggestion": w.suggestion}
            for w in result.warnings
        ],
    )
