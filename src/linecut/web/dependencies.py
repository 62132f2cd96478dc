"""FastAPI dependencies for optimizer services."""

from typing import Annotated

from fastapi import Depends, Request

from linecut.application.factory import ServiceFactory, get_factory


def get_service_factory(request: Request) -> ServiceFactory:
    """Return the factory the app was created with, else the process default.

    The default is looked up per request so that ``set_factory`` takes
    effect on an app that is already running.
    """
    factory = getattr(request.app.state, "service_factory", None)
    return factory if factory is not None else get_factory()


ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
