"""
Boucle de synchronisation TMDB -> Notion.

Declencheurs independants, chacun idempotent :
- pending : titres termines par le delimiteur -> resolution -> creation
- unreleased : pages a venir ou au statut non terminal -> rafraichissement
  incremental par ID TMDB
- refresh : case ``Refresh`` cochee -> rafraichissement complet de la hierarchie
- catalog : rafraichissement incremental periodique de tout le catalogue

Un InFlightGuard partage par tous les declencheurs empeche de traiter deux
fois la meme page en parallele. Les pages d'un meme cycle sont traitees en
sequence pour borner le debit de requetes.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from loguru import logger

from src.core.entities.media import ErrorResult, MediaKind, RecordType
from src.core.entities.page import DestinationPage, Relation
from src.core.ports.destination_store import IDestinationStore, StoreError
from src.services.normalizer import utc_today
from src.services.reconciler import ReconciliationEngine, ReconciliationError, SyncMode
from src.services.resolver import FetchRequest, MetadataResolver

NO_PARENT_SHOW = (
    "Unable to refresh this page: it is not linked to a show with a TMDB ID."
)


class InFlightGuard:
    """
    Ensemble des IDs de pages en cours de traitement.

    Sans verrou : l'ajout et le retrait ne sont separes par aucun point de
    suspension dans la boucle asyncio.
    """

    def __init__(self) -> None:
        self._page_ids: set[str] = set()

    def try_acquire(self, page_id: str) -> bool:
        """Reserve la page ; False si elle est deja en cours de traitement."""
        if page_id in self._page_ids:
            return False
        self._page_ids.add(page_id)
        return True

    def release(self, page_id: str) -> None:
        self._page_ids.discard(page_id)

    def __contains__(self, page_id: str) -> bool:
        return page_id in self._page_ids

    def __len__(self) -> int:
        return len(self._page_ids)


@dataclass
class CycleStats:
    """Statistiques d'un cycle de synchronisation."""

    total: int = 0
    processed: int = 0
    skipped: int = 0
    failed: int = 0


PageHandler = Callable[[DestinationPage], Awaitable[None]]


class SyncLoop:
    """
    Orchestration des declencheurs de synchronisation.

    Example:
        loop = SyncLoop(store, resolver, engine)
        stop_event = asyncio.Event()
        await loop.run(stop_event)
    """

    def __init__(
        self,
        store: IDestinationStore,
        resolver: MetadataResolver,
        engine: ReconciliationEngine,
        poll_interval: float = 5,
        unreleased_interval: float = 60 * 60,
        catalog_interval: float = 24 * 60 * 60,
        refresh_includes_episodes: bool = True,
        guard: Optional[InFlightGuard] = None,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._engine = engine
        self.poll_interval = poll_interval
        self.unreleased_interval = unreleased_interval
        self.catalog_interval = catalog_interval
        self._refresh_includes_episodes = refresh_includes_episodes
        self._guard = guard or InFlightGuard()
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def guard(self) -> InFlightGuard:
        return self._guard

    @property
    def stopping(self) -> bool:
        """True une fois l'arret demande a ``run``."""
        return self._stop_event is not None and self._stop_event.is_set()

    # Declencheurs

    async def check_pending(self, guard: InFlightGuard) -> CycleStats:
        """Resout les requetes saisies par l'utilisateur (mode creation)."""
        pages = await self._store.find_pending_pages()
        return await self._process_pages("pending", pages, guard, self._sync_pending)

    async def check_unreleased(self, guard: InFlightGuard) -> CycleStats:
        """Rafraichit les pages non sorties ou au statut non terminal."""
        pages = await self._store.find_unreleased_pages(utc_today())
        return await self._process_pages(
            "unreleased", pages, guard, lambda page: self._refresh_page(page, full=False)
        )

    async def check_refresh_requests(self, guard: InFlightGuard) -> CycleStats:
        """Rafraichit integralement les pages dont la case Refresh est cochee."""
        pages = await self._store.find_refresh_requested_pages()
        return await self._process_pages(
            "refresh", pages, guard, lambda page: self._refresh_page(page, full=True)
        )

    async def refresh_catalog(self, guard: InFlightGuard) -> CycleStats:
        """Rafraichissement periodique de tous les films et series."""
        pages = await self._store.find_catalog_pages()
        return await self._process_pages(
            "catalog", pages, guard, lambda page: self._refresh_page(page, full=False)
        )

    async def poll_cycle(self, guard: InFlightGuard) -> None:
        """Cycle court : nouvelles requetes puis demandes de rafraichissement."""
        await self.check_pending(guard)
        await self.check_refresh_requests(guard)

    async def _process_pages(
        self,
        trigger: str,
        pages: list[DestinationPage],
        guard: InFlightGuard,
        handler: PageHandler,
    ) -> CycleStats:
        stats = CycleStats(total=len(pages))

        for index, page in enumerate(pages):
            if self.stopping:
                logger.info(
                    f"[{trigger}] Arret demande, {len(pages) - index} page(s) reportee(s)"
                )
                break

            if not guard.try_acquire(page.id):
                logger.debug(f"[{trigger}] Page {page.id} deja en cours, ignoree")
                stats.skipped += 1
                continue

            with logger.contextualize(trigger=trigger, page_id=page.id):
                try:
                    await handler(page)
                    stats.processed += 1
                except (ReconciliationError, StoreError) as e:
                    stats.failed += 1
                    logger.error(f"[{trigger}] Echec de synchronisation de '{page.title}': {e}")
                except Exception:
                    # Une page en erreur ne bloque pas les suivantes du cycle
                    stats.failed += 1
                    logger.exception(f"[{trigger}] Erreur inattendue sur '{page.title}'")
                finally:
                    guard.release(page.id)

        if stats.total:
            logger.info(
                f"[{trigger}] {stats.processed} page(s) traitee(s), "
                f"{stats.skipped} ignoree(s), {stats.failed} echec(s)"
            )
        return stats

    # Traitement d'une page

    async def _sync_pending(self, page: DestinationPage) -> None:
        logger.info(f"Nouvelle requete: {page.title}")
        outcome = await self._resolver.resolve(page.title)
        await self._engine.update_database(page, outcome, SyncMode.CREATE)

    async def _refresh_page(self, page: DestinationPage, full: bool) -> None:
        request = await self.build_refresh_request(page, full)
        if request is None:
            logger.warning(
                f"Page '{page.title}' ({page.type.value if page.type else '?'}) "
                "sans parent TMDB identifiable, rafraichissement ignore"
            )
            if page.refresh_requested:
                await self._engine.update_database(
                    page, ErrorResult(NO_PARENT_SHOW), SyncMode.UPDATE
                )
            return
        logger.debug(f"Rafraichissement de '{page.title}' ({request.label})")
        outcome = await self._resolver.refresh(request)
        await self._engine.update_database(page, outcome, SyncMode.UPDATE)

    async def build_refresh_request(
        self, page: DestinationPage, full: bool
    ) -> Optional[FetchRequest]:
        """
        Construit la demande de rafraichissement d'une page synchronisee.

        En mode incremental, les saisons (ou episodes) deja presents sous la
        page sont transmis comme enfants connus et ne sont pas recuperes.
        Les mini-series sont toujours recuperees entierement, leurs episodes
        etant ranges directement sous la serie.
        """
        if page.tmdb_id is None or page.type is None:
            return None

        if page.type == RecordType.MOVIE:
            return FetchRequest(MediaKind.MOVIE, page.tmdb_id)

        if page.type.is_show:
            known: frozenset[int] = frozenset()
            if not full and page.type != RecordType.MINISERIES:
                known = await self._known_numbers(page.id, Relation.SHOW, RecordType.SEASON)
            return FetchRequest(
                MediaKind.SHOW,
                page.tmdb_id,
                include_children=True,
                include_episodes=full or self._refresh_includes_episodes,
                known_children=known,
            )

        if page.type == RecordType.SEASON:
            show_tmdb_id = await self._parent_tmdb_id(page.parent(Relation.SHOW))
            if show_tmdb_id is None or page.season_number is None:
                return None
            known = frozenset()
            if not full:
                known = await self._known_numbers(page.id, Relation.SEASON, RecordType.EPISODE)
            return FetchRequest(
                MediaKind.SEASON,
                show_tmdb_id,
                season_number=page.season_number,
                include_children=full or self._refresh_includes_episodes,
                known_children=known,
            )

        show_tmdb_id = await self._episode_show_tmdb_id(page)
        if show_tmdb_id is None or page.season_number is None or page.episode_number is None:
            return None
        return FetchRequest(
            MediaKind.EPISODE,
            show_tmdb_id,
            season_number=page.season_number,
            episode_number=page.episode_number,
        )

    async def _known_numbers(
        self, parent_id: str, relation: Relation, child_type: RecordType
    ) -> frozenset[int]:
        children = await self._store.find_children(parent_id, relation)
        number_of = (
            (lambda p: p.season_number)
            if child_type == RecordType.SEASON
            else (lambda p: p.episode_number)
        )
        return frozenset(
            number_of(child)
            for child in children
            if child.type == child_type and number_of(child) is not None
        )

    async def _parent_tmdb_id(self, page_id: Optional[str]) -> Optional[int]:
        if not page_id:
            return None
        parent = await self._store.get_page(page_id)
        return parent.tmdb_id

    async def _episode_show_tmdb_id(self, page: DestinationPage) -> Optional[int]:
        """ID TMDB de la serie d'un episode (directement ou via sa saison)."""
        show_page_id = page.parent(Relation.SHOW)
        if show_page_id:
            return await self._parent_tmdb_id(show_page_id)

        season_page_id = page.parent(Relation.SEASON)
        if not season_page_id:
            return None
        season_page = await self._store.get_page(season_page_id)
        return await self._parent_tmdb_id(season_page.parent(Relation.SHOW))

    # Ordonnancement

    async def run(self, stop_event: asyncio.Event) -> None:
        """Lance les boucles periodiques jusqu'a ``stop_event``."""
        self._stop_event = stop_event
        logger.info(
            f"Demarrage de la synchronisation (poll {self.poll_interval}s, "
            f"unreleased {self.unreleased_interval}s, catalogue {self.catalog_interval}s)"
        )
        tasks = [
            asyncio.create_task(
                self._every("poll", self.poll_interval, self.poll_cycle, stop_event),
                name="sync_poll",
            ),
            asyncio.create_task(
                self._every("unreleased", self.unreleased_interval, self.check_unreleased, stop_event),
                name="sync_unreleased",
            ),
            asyncio.create_task(
                self._every(
                    "catalog",
                    self.catalog_interval,
                    self.refresh_catalog,
                    stop_event,
                    run_immediately=False,
                ),
                name="sync_catalog",
            ),
        ]
        await asyncio.gather(*tasks)
        logger.info("Synchronisation arretee")

    async def _every(
        self,
        name: str,
        interval: float,
        cycle: Callable[[InFlightGuard], Awaitable[object]],
        stop_event: asyncio.Event,
        run_immediately: bool = True,
    ) -> None:
        if not run_immediately and await self._wait(stop_event, interval):
            return

        while not stop_event.is_set():
            try:
                await cycle(self._guard)
            except Exception as e:
                logger.error(f"Cycle {name} en echec: {e}")

            if await self._wait(stop_event, interval):
                return

    @staticmethod
    async def _wait(stop_event: asyncio.Event, timeout: float) -> bool:
        """Attend ``timeout`` secondes ; True si l'arret a ete demande."""
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True
