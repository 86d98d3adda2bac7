"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portal.application.interfaces import ItemStore
from portal.config import Settings, get_settings
from portal.infrastructure.database import SQLAlchemyItemStore
from portal.infrastructure.dependencies import build_auth_service, build_entity_services
from portal.infrastructure.logging.log_config import setup_logging
from portal.infrastructure.store_factory import build_item_store
from portal.presentation.api.error_handlers import register_exception_handlers
from portal.presentation.api.router import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the item store and services; close the store on shutdown.

    A missing storage configuration raises ConfigurationError here, which
    aborts startup.
    """
    settings: Settings = app.state.settings
    setup_logging(settings)

    store: ItemStore | None = getattr(app.state, "item_store", None)
    owns_store = store is None
    if store is None:
        store = build_item_store(settings)
    if isinstance(store, SQLAlchemyItemStore):
        await store.create_schema()

    app.state.item_store = store
    app.state.services = build_entity_services(settings, store)
    app.state.auth_service = build_auth_service(settings)
    logger.info(
        "%s %s started (%s storage)",
        settings.app_title, settings.app_version, settings.storage_backend,
    )

    yield

    if owns_store:
        await store.close()
        del app.state.item_store


def create_app(settings: Settings | None = None, item_store: ItemStore | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    ``item_store`` overrides the store the lifespan would build from settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    if item_store is not None:
        app.state.item_store = item_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "portal.main:app",
        host="0.0.0.0",
        port=3001,
        reload=True,
    )
