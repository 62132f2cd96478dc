"""Cutlist optimization endpoints."""

from fastapi import APIRouter

from linecut.application import OptimizationOutput, optimize
from linecut.application.config import (
    config_to_cutlist_input,
    config_to_packing_config,
    load_config_from_dict,
)
from linecut.application.services import InvalidInputError
from linecut.infrastructure.formatters import format_stock_size
from linecut.web.dependencies import ServiceFactoryDep
from linecut.web.schemas.requests import OptimizeFromConfigRequest, OptimizeRequest
from linecut.web.schemas.responses import OptimizationResponseSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


def _output_to_schema(output: OptimizationOutput) -> OptimizationResponseSchema:
    """Convert OptimizationOutput to response schema.

    Stock sizes become string keys via ``format_stock_size``.
    """
    data = output.to_dict()
    data["bins"] = {format_stock_size(size): group for size, group in data["bins"].items()}
    return OptimizationResponseSchema.model_validate(data)


@router.post("", response_model=OptimizationResponseSchema)
async def optimize_cutlist(request: OptimizeRequest) -> OptimizationResponseSchema:
    """Optimize a cutlist from explicit parts and stock lengths.

    Raises:
        InvalidInputError: If any value is out of range (422).
    """
    output = optimize(
        [(p.length, p.quantity) for p in request.parts],
        request.stock_lengths,
        request.cut_width,
        request.unusable_length,
        min_run_quantity=request.min_run_quantity,
        low_waste_threshold=request.low_waste_threshold,
    )
    return _output_to_schema(output)


@router.post("/config", response_model=OptimizationResponseSchema)
async def optimize_from_config(
    request: OptimizeFromConfigRequest,
    factory: ServiceFactoryDep,
) -> OptimizationResponseSchema:
    """Optimize a cutlist from a full configuration document.

    Raises:
        ConfigError: If the configuration fails validation (422).
        InvalidInputError: If the optimizer rejects the input (422).
    """
    config = load_config_from_dict(request.config)
    command = factory.create_optimize_command(
        config_to_packing_config(config.optimizer)
    )
    output = command.execute(config_to_cutlist_input(config))
    if not output.is_valid:
        raise InvalidInputError(output.errors)
    return _output_to_schema(output)
