"""FastAPI application factory."""

from collections.abc import Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linecut.application.factory import ServiceFactory
from linecut.web.exceptions import register_exception_handlers
from linecut.web.routers import optimize_router, validate_router


def create_app(
    factory: ServiceFactory | None = None,
    allow_origins: Sequence[str] = ("*",),
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        factory: Service factory used by the endpoints. When None, each
            request uses the process-wide factory from ``get_factory``.
        allow_origins: Origins allowed to call the API from a browser.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Linecut API",
        description="REST API for optimizing cuts of parts from linear stock",
        version="1.0.0",
    )
    app.state.service_factory = factory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allow_origins),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(optimize_router, prefix="/api/v1")
    app.include_router(validate_router, prefix="/api/v1")

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy", "version": app.version}

    return app


app = create_app()
