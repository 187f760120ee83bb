"""
Moteur de reconciliation entre les enregistrements resolus et la base Notion.

Pour chaque page traitee :
1. supprime les annotations precedentes ;
2. erreur -> retire le delimiteur, ajoute une annotation d'erreur, decoche
   ``Refresh``, fin ;
3. (creation) ID TMDB deja present sur une autre page -> notice de doublon
   et archivage differe, fin ;
4. reconcilie les enfants (saisons, episodes) : mise a jour si une page
   enfant porte deja l'ID TMDB, creation sinon ;
5. ecrit les proprietes de la page (ce qui retire le delimiteur).

Les proprietes d'une page ne sont ecrites qu'une fois tous ses enfants
reconcilies.
"""

import asyncio
from enum import Enum
from typing import Optional

from loguru import logger

from src.core.entities.media import ErrorResult, NormalizedRecord, RecordType, ResolutionOutcome
from src.core.entities.page import DestinationPage, Relation
from src.core.ports.destination_store import IDestinationStore, StoreError


class SyncMode(str, Enum):
    """CREATE pour une nouvelle requete, UPDATE pour un rafraichissement par ID."""

    CREATE = "create"
    UPDATE = "update"


class PageState(str, Enum):
    """Etat final d'une page apres reconciliation."""

    SYNCED = "synced"
    ERROR = "error"
    DUPLICATE = "duplicate"


class ReconciliationError(Exception):
    """Echec d'ecriture dans la base de destination pendant la reconciliation."""

    def __init__(self, page_id: str, message: str) -> None:
        self.page_id = page_id
        super().__init__(f"Page {page_id}: {message}")


class ReconciliationEngine:
    """
    Machine a etats create/update sur les pages de destination.

    Attributes:
        archive_delay: Delai (secondes) avant l'archivage d'une page en doublon
    """

    def __init__(
        self,
        store: IDestinationStore,
        delimiter: str = ";",
        archive_delay: float = 30,
    ) -> None:
        self._store = store
        self._delimiter = delimiter
        self.archive_delay = archive_delay
        self._archive_tasks: set[asyncio.Task] = set()

    async def update_database(
        self,
        page: DestinationPage,
        outcome: ResolutionOutcome,
        mode: SyncMode = SyncMode.CREATE,
    ) -> PageState:
        """
        Applique un resultat de resolution a une page.

        Raises:
            ReconciliationError: Si une ecriture dans la base echoue
        """
        try:
            return await self._apply(page, outcome, mode)
        except StoreError as e:
            raise ReconciliationError(page.id, str(e)) from e

    async def _apply(
        self, page: DestinationPage, outcome: ResolutionOutcome, mode: SyncMode
    ) -> PageState:
        await self._store.clear_annotations(page.id)

        if isinstance(outcome, ErrorResult):
            if page.is_pending(self._delimiter):
                await self._store.rename_page(page.id, self._strip_delimiter(page.title))
            await self._store.add_error_annotation(page.id, outcome.message)
            if page.refresh_requested:
                # Une demande en echec n'est pas rejouee a chaque cycle
                await self._store.clear_refresh_flag(page.id)
            return PageState.ERROR

        record = outcome

        if mode == SyncMode.CREATE:
            existing = await self._find_duplicate(page, record)
            if existing is not None:
                logger.info(
                    f"Doublon: '{record.title}' (TMDB {record.tmdb_id}) existe deja "
                    f"sur la page {existing.id}"
                )
                await self._store.rename_page(page.id, self._strip_delimiter(page.title))
                await self._store.add_duplicate_notice(page.id, existing.id)
                self._schedule_archive(page.id)
                return PageState.DUPLICATE

        await self._reconcile_children(page.id, record)

        await self._store.update_page(page.id, record, clear_refresh=True)
        if record.warnings:
            await self._store.add_warning_notice(page.id, record.warnings)
        return PageState.SYNCED

    async def _find_duplicate(
        self, page: DestinationPage, record: NormalizedRecord
    ) -> Optional[DestinationPage]:
        """Plus ancienne autre page portant le meme ID TMDB et le meme type."""
        matches = await self._store.find_by_tmdb_id(record.tmdb_id, record.type)
        others = [p for p in matches if p.id != page.id]
        if not others:
            return None
        return min(others, key=lambda p: p.created_time)

    async def _reconcile_children(self, page_id: str, record: NormalizedRecord) -> None:
        if record.type == RecordType.MINISERIES and record.seasons and len(record.seasons) == 1:
            # Mini-serie a une saison : episodes directement sous la serie
            episodes = record.seasons[0].episodes or []
            await self._reconcile_level(page_id, Relation.SHOW, episodes)
        elif record.seasons:
            await self._reconcile_level(page_id, Relation.SHOW, record.seasons)
        elif record.episodes:
            await self._reconcile_level(page_id, Relation.SEASON, record.episodes)

    async def _reconcile_level(
        self, parent_id: str, relation: Relation, children: list[NormalizedRecord]
    ) -> None:
        """Met a jour ou cree chaque enfant sous ``parent_id``, en sequence."""
        if not children:
            return

        # Saisons et episodes a plat peuvent partager un parent : cle (type, ID)
        existing = {
            (page.type, page.tmdb_id): page
            for page in await self._store.find_children(parent_id, relation)
            if page.tmdb_id is not None
        }

        for child in children:
            relations = {relation: parent_id}
            current = existing.get((child.type, child.tmdb_id))
            if current is not None:
                if child.episodes:
                    await self._reconcile_level(current.id, Relation.SEASON, child.episodes)
                await self._store.update_page(current.id, child, relations)
            else:
                created = await self._store.create_page(child, relations)
                existing[(child.type, child.tmdb_id)] = created
                if child.episodes:
                    await self._reconcile_level(created.id, Relation.SEASON, child.episodes)

    def _strip_delimiter(self, title: str) -> str:
        if self._delimiter and title.endswith(self._delimiter):
            return title[: -len(self._delimiter)]
        return title

    def _schedule_archive(self, page_id: str) -> None:
        task = asyncio.create_task(self._archive_later(page_id))
        self._archive_tasks.add(task)
        task.add_done_callback(self._archive_tasks.discard)

    async def _archive_later(self, page_id: str) -> None:
        await asyncio.sleep(self.archive_delay)
        try:
            await self._store.archive_page(page_id)
        except StoreError as e:
            logger.error(f"Archivage du doublon {page_id} impossible: {e}")

    async def wait_for_archives(self) -> None:
        """Attend la fin des archivages differes en cours."""
        if self._archive_tasks:
            await asyncio.gather(*self._archive_tasks)
