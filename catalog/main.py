import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from catalog.api.deps import templates
from catalog.api.pages import router as pages_router
from catalog.api.services import router as services_router
from catalog.core.config import Settings, settings as default_settings
from catalog.core.logging_config import setup_logging
from catalog.errors import (
    CatalogError,
    MalformedInputError,
    ServiceNotFoundError,
    ServiceValidationError,
)
from catalog.repos import ServiceStore, build_store


logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ServiceValidationError: 400,
    MalformedInputError: 400,
    ServiceNotFoundError: 404,
}


async def handle_catalog_error(request: Request, exc: CatalogError):
    status_code = ERROR_STATUS.get(type(exc), 500)
    if status_code >= 500:
        logger.error("Unhandled catalog error on %s: %s", request.url.path, exc)
    if request.url.path.startswith("/api/"):
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc)},
            headers={"Content-Type": "application/problem+json"},
        )
    return templates.TemplateResponse(
        request,
        "error.html",
        {"status_code": status_code, "message": str(exc)},
        status_code=status_code,
    )


def create_app(settings: Optional[Settings] = None, store: Optional[ServiceStore] = None) -> FastAPI:
    """Build the application around a store.

    ``store`` defaults to the backend named in settings; tests pass their own.
    The store is loaded once on startup.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.store.load()
        yield

    app = FastAPI(
        title=settings.project_name,
        description="Internal catalog of deployed services, their environments and owners",
        version=settings.api_version,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Pages",
                "description": "HTML forms for adding, browsing, searching and editing services",
            },
            {
                "name": "Services",
                "description": "JSON access to the service catalog",
            },
        ],
    )
    app.state.settings = settings
    app.state.store = store or build_store(settings)

    app.add_exception_handler(CatalogError, handle_catalog_error)

    app.include_router(pages_router)
    app.include_router(services_router)

    @app.get("/health", tags=["Pages"])
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


def run() -> None:
    logger.info("Starting %s on %s:%d", default_settings.project_name, default_settings.host, default_settings.port)
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
