"""
Container d'injection de dependances via dependency-injector.

Assemble les clients HTTP (TMDB, Notion), le stockage de destination et
les services de synchronisation a partir des Settings.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tmdb_client import TMDBClient
from .adapters.notion.notion_client import NotionClient
from .adapters.notion.notion_store import NotionStore
from .config import Settings
from .services.reconciler import ReconciliationEngine
from .services.resolver import MetadataResolver
from .services.sync_loop import InFlightGuard, SyncLoop


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        sync_loop = container.sync_loop()
        await sync_loop.run(stop_event)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Cache des recherches TMDB
    api_cache = providers.Singleton(
        APICache,
        cache_dir=providers.Callable(str, config.provided.search_cache_dir),
        search_ttl=config.provided.search_cache_ttl,
    )

    # Clients HTTP - Singletons (un AsyncClient par service)
    tmdb_client = providers.Singleton(
        TMDBClient,
        api_key=config.provided.tmdb_api_key,
        cache=api_cache,
    )

    notion_client = providers.Singleton(
        NotionClient,
        token=config.provided.notion_api_token,
        database_id=config.provided.notion_database_id,
    )

    # Stockage de destination
    destination_store = providers.Singleton(
        NotionStore,
        client=notion_client,
        delimiter=config.provided.title_delimiter,
        pending_lookback_minutes=config.provided.pending_lookback_minutes,
    )

    # Services
    metadata_resolver = providers.Singleton(
        MetadataResolver,
        client=tmdb_client,
        delimiter=config.provided.title_delimiter,
    )

    reconciliation_engine = providers.Singleton(
        ReconciliationEngine,
        store=destination_store,
        delimiter=config.provided.title_delimiter,
        archive_delay=config.provided.duplicate_archive_delay,
    )

    # Garde partagee par tous les declencheurs
    in_flight_guard = providers.Singleton(InFlightGuard)

    sync_loop = providers.Singleton(
        SyncLoop,
        store=destination_store,
        resolver=metadata_resolver,
        engine=reconciliation_engine,
        poll_interval=config.provided.poll_interval_seconds,
        unreleased_interval=providers.Callable(
            lambda minutes: minutes * 60, config.provided.unreleased_interval_minutes
        ),
        catalog_interval=providers.Callable(
            lambda hours: hours * 60 * 60, config.provided.catalog_refresh_hours
        ),
        refresh_includes_episodes=config.provided.refresh_includes_episodes,
        guard=in_flight_guard,
    )
