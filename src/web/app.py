"""
Application FastAPI du serveur de synchronisation.

Initialise le Container DI, configure le logging et lance la boucle de
synchronisation en tache de fond pendant toute la duree de vie du serveur.
"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from ..container import Container
from ..logging_config import configure_logging
from .routes.home import router as home_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Demarre la synchronisation au demarrage et l'arrete proprement a l'arret."""
    container = Container()
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )
    app.state.container = container
    app.state.sync_task = None
    app.state.guard = None

    stop_event = asyncio.Event()
    if settings.sync_enabled:
        sync_loop = container.sync_loop()
        app.state.guard = sync_loop.guard
        app.state.sync_task = asyncio.create_task(sync_loop.run(stop_event))
    else:
        logger.warning(
            "Synchronisation desactivee: MEDIASYNC_TMDB_API_KEY, "
            "MEDIASYNC_NOTION_API_TOKEN et MEDIASYNC_NOTION_DATABASE_ID sont requis"
        )

    yield

    stop_event.set()
    if app.state.sync_task is not None:
        await app.state.sync_task
        await container.reconciliation_engine().wait_for_archives()
        await container.tmdb_client().close()
        await container.notion_client().close()
        container.api_cache().close()
    logger.info("Serveur arrete")


app = FastAPI(title="TMDB-Notion Sync", lifespan=lifespan)

app.include_router(home_router)
