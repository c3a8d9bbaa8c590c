"""FastAPI application factory.

Mounts one generic CRUD resource per registered entity type:

    uvicorn crudkit.api.app:app
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from crudkit import __version__
from crudkit.api.errors import register_exception_handlers
from crudkit.api.router import build_crud_router
from crudkit.infrastructure.database import settings
from crudkit.infrastructure.persistence import EntityRegistry, default_registry

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def create_app(registry: EntityRegistry | None = None) -> FastAPI:
    configure_logging(settings.log_level)
    if registry is None:
        registry = default_registry()

    app = FastAPI(title="crudkit", version=__version__)
    for config in registry:
        app.include_router(build_crud_router(config))
        logger.debug("Mounted %s at /%s", config.name, config.path)
    register_exception_handlers(app)
    app.state.registry = registry
    return app


app = create_app()
