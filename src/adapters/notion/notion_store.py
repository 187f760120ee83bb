"""
Adaptateur Notion du port IDestinationStore.

Traduit les operations du moteur de reconciliation en appels a l'API Notion
(via NotionClient) et les erreurs HTTP en StoreError.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

import httpx
from loguru import logger

from src.adapters.api.retry import RateLimitError
from src.adapters.notion import blocks, filters
from src.adapters.notion.notion_client import NotionClient
from src.adapters.notion.properties import (
    build_cover,
    build_icon,
    build_properties,
    parse_page,
    refresh_cleared_property,
    title_property,
)
from src.core.entities.media import NormalizedRecord, RecordType
from src.core.entities.page import DestinationPage, Relation
from src.core.ports.destination_store import IDestinationStore, StoreError


@contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    """Convertit les erreurs httpx (et le rate limiting persistant) en StoreError."""
    try:
        yield
    except (httpx.HTTPError, RateLimitError) as e:
        raise StoreError(f"{operation}: {e}") from e


class NotionStore(IDestinationStore):
    """
    Stockage de destination sur une base Notion.

    Example:
        store = NotionStore(NotionClient(token, database_id), delimiter=";")
        for page in await store.find_pending_pages():
            ...
    """

    def __init__(
        self,
        client: NotionClient,
        delimiter: str = ";",
        pending_lookback_minutes: Optional[int] = None,
    ) -> None:
        self._client = client
        self._delimiter = delimiter
        self._pending_lookback_minutes = pending_lookback_minutes

    async def _query(self, filter: dict, sorts: Optional[list] = None) -> list[DestinationPage]:
        with _translate_errors("requete de base"):
            raw_pages = await self._client.query_database(filter, sorts)
        return [parse_page(raw) for raw in raw_pages]

    async def find_pending_pages(self) -> list[DestinationPage]:
        return await self._query(
            filters.pending_filter(self._delimiter, self._pending_lookback_minutes),
            filters.CREATED_ASC,
        )

    async def find_unreleased_pages(self, today: str) -> list[DestinationPage]:
        pages = await self._query(filters.unreleased_filter(today), filters.CREATED_ASC)
        # Une page re-saisie par l'utilisateur releve du declencheur "pending"
        return [page for page in pages if not page.is_pending(self._delimiter)]

    async def find_refresh_requested_pages(self) -> list[DestinationPage]:
        return await self._query(filters.refresh_filter(), filters.CREATED_ASC)

    async def find_catalog_pages(self) -> list[DestinationPage]:
        pages = await self._query(filters.catalog_filter(), filters.CREATED_ASC)
        return [page for page in pages if not page.is_pending(self._delimiter)]

    async def find_by_tmdb_id(
        self, tmdb_id: int, record_type: RecordType
    ) -> list[DestinationPage]:
        return await self._query(
            filters.tmdb_id_filter(tmdb_id, record_type), filters.CREATED_ASC
        )

    async def find_children(
        self, parent_id: str, relation: Relation
    ) -> list[DestinationPage]:
        return await self._query(filters.children_filter(parent_id, relation))

    async def get_page(self, page_id: str) -> DestinationPage:
        with _translate_errors(f"lecture de la page {page_id}"):
            raw = await self._client.retrieve_page(page_id)
        return parse_page(raw)

    async def create_page(
        self, record: NormalizedRecord, relations: dict[Relation, str]
    ) -> DestinationPage:
        with _translate_errors(f"creation de la page {record.title}"):
            raw = await self._client.create_page(
                build_properties(record, relations),
                icon=build_icon(record),
                cover=build_cover(record),
            )
        logger.info(f"Page creee: {record.title}")
        return parse_page(raw)

    async def update_page(
        self,
        page_id: str,
        record: NormalizedRecord,
        relations: Optional[dict[Relation, str]] = None,
        clear_refresh: bool = False,
    ) -> None:
        with _translate_errors(f"mise a jour de la page {page_id}"):
            await self._client.update_page(
                page_id,
                properties=build_properties(record, relations, clear_refresh),
                icon=build_icon(record),
                cover=build_cover(record),
            )
        logger.info(f"Page mise a jour: {record.title}")

    async def rename_page(self, page_id: str, title: str) -> None:
        with _translate_errors(f"renommage de la page {page_id}"):
            await self._client.update_page(page_id, properties=title_property(title))

    async def clear_refresh_flag(self, page_id: str) -> None:
        with _translate_errors(f"decochage de Refresh sur {page_id}"):
            await self._client.update_page(page_id, properties=refresh_cleared_property())

    async def archive_page(self, page_id: str) -> None:
        with _translate_errors(f"archivage de la page {page_id}"):
            await self._client.update_page(page_id, archived=True)
        logger.info(f"Page archivee: {page_id}")

    async def clear_annotations(self, page_id: str) -> None:
        with _translate_errors(f"nettoyage des annotations de {page_id}"):
            children = await self._client.list_block_children(page_id)
            for block in children:
                if blocks.is_annotation(block):
                    await self._client.delete_block(block["id"])
                    logger.debug(f"Annotation supprimee de la page {page_id}")

    async def add_error_annotation(self, page_id: str, message: str) -> None:
        with _translate_errors(f"annotation d'erreur sur {page_id}"):
            await self._client.append_block_children(page_id, [blocks.error_callout(message)])
        logger.info(f"Erreur signalee sur la page {page_id}: {message}")

    async def add_duplicate_notice(self, page_id: str, existing_page_id: str) -> None:
        with _translate_errors(f"notice de doublon sur {page_id}"):
            await self._client.append_block_children(
                page_id, [blocks.duplicate_callout(existing_page_id)]
            )

    async def add_warning_notice(self, page_id: str, messages: list[str]) -> None:
        with _translate_errors(f"notice d'avertissement sur {page_id}"):
            await self._client.append_block_children(
                page_id, [blocks.warning_callout(messages)]
            )
