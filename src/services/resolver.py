"""
Resolution des requetes en arbres d'enregistrements normalises.

Deux points d'entree :
- resolve : titre de page -> recherche TMDB -> details (nouvelle requete)
- refresh : ID TMDB deja connu -> details, en ne recuperant que les
  saisons/episodes absents localement (mode incremental)

Les deux consomment une FetchRequest traitee par un seul resolveur
recursif. Les saisons et episodes freres sont recuperes en parallele ; un
echec sur une branche n'affecte pas les branches soeurs.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

import httpx
from loguru import logger

from src.adapters.api.retry import RateLimitError
from src.core.entities.media import (
    ErrorResult,
    MediaKind,
    NormalizedRecord,
    ResolutionOutcome,
    SeasonRecord,
    ShowRecord,
)
from src.core.ports.api_clients import IMetadataClient, SearchResult
from src.core.value_objects.query import FilterKey, MediaScope, Query
from src.services.normalizer import normalize
from src.services.query_parser import parse_query, validate_query
from src.utils.constants import SPECIALS_SEASON_NUMBER

SEARCH_FAILED = "An error occurred while searching TMDB!"
NO_RESULTS = "No results found!"
DETAILS_FAILED = "An error occurred while fetching TMDB details!"
SEASON_FAILED = (
    "An error occurred while fetching TMDB details! Ensure the season number is valid."
)
EPISODE_FAILED = (
    "An error occurred while fetching TMDB details! "
    "Ensure the season and episode numbers are valid."
)
REFRESH_FAILED = (
    "An error occurred while refreshing TMDB details! "
    "Ensure the TMDB ID was not altered by mistake."
)

_TRANSPORT_ERRORS = (httpx.HTTPError, RateLimitError)
# Reponse TMDB illisible ou incomplete (JSON invalide, champ manquant)
_PAYLOAD_ERRORS = (ValueError, KeyError)
_FETCH_ERRORS = _TRANSPORT_ERRORS + _PAYLOAD_ERRORS


class ResolutionError(Exception):
    """Echec de recuperation d'un niveau de l'arbre (message lisible)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class FetchRequest:
    """
    Demande de recuperation d'un element et, optionnellement, de ses enfants.

    Attributes:
        kind: Type d'element demande
        tmdb_id: ID du film ou de la serie (serie parente pour saison/episode)
        season_number: Numero de saison (saison, episode)
        episode_number: Numero d'episode (episode)
        include_children: Recuperer les saisons d'une serie / episodes d'une saison
        include_episodes: Pour une serie, recuperer aussi les episodes des saisons
        known_children: Numeros de saisons/episodes deja presents, a ne pas recuperer
        language: Langue des metadonnees
    """

    kind: MediaKind
    tmdb_id: int
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    include_children: bool = False
    include_episodes: bool = False
    known_children: frozenset[int] = frozenset()
    language: Optional[str] = None

    @property
    def label(self) -> str:
        if self.kind == MediaKind.EPISODE:
            return f"Season {self.season_number} Episode {self.episode_number}"
        if self.kind == MediaKind.SEASON:
            return f"Season {self.season_number}"
        return f"{self.kind.value} {self.tmdb_id}"


def request_for_query(query: Query, kind: MediaKind, tmdb_id: int) -> FetchRequest:
    """Traduit les filtres d'une requete en FetchRequest."""
    language = query.language
    if kind == MediaKind.MOVIE:
        return FetchRequest(MediaKind.MOVIE, tmdb_id, language=language)

    if query.season is not None:
        if query.episode is not None:
            return FetchRequest(
                MediaKind.EPISODE,
                tmdb_id,
                season_number=query.season,
                episode_number=query.episode,
                language=language,
            )
        return FetchRequest(
            MediaKind.SEASON,
            tmdb_id,
            season_number=query.season,
            include_children=query.flag(FilterKey.ALL_EPISODES),
            language=language,
        )

    all_episodes = query.flag(FilterKey.ALL_EPISODES)
    return FetchRequest(
        MediaKind.SHOW,
        tmdb_id,
        include_children=query.flag(FilterKey.ALL_SEASONS) or all_episodes,
        include_episodes=all_episodes,
        language=language,
    )


def kind_of_result(scope: MediaScope, result: SearchResult) -> Optional[MediaKind]:
    """Le filtre ``type`` prime ; sinon le type rapporte par la recherche multi."""
    if scope == MediaScope.MOVIE:
        return MediaKind.MOVIE
    if scope == MediaScope.TV:
        return MediaKind.SHOW
    if result.media_type == "movie":
        return MediaKind.MOVIE
    if result.media_type == "tv":
        return MediaKind.SHOW
    return None


class MetadataResolver:
    """
    Resolveur de metadonnees TMDB.

    Example:
        resolver = MetadataResolver(tmdb_client)
        outcome = await resolver.resolve("Alien[type=movie, year=1979];")
    """

    def __init__(self, client: IMetadataClient, delimiter: str = ";") -> None:
        self._client = client
        self._delimiter = delimiter

    async def resolve(self, raw_title: str) -> ResolutionOutcome:
        """
        Resout une requete saisie dans un titre de page.

        Returns:
            NormalizedRecord (avec enfants eventuels) ou ErrorResult
        """
        query = parse_query(raw_title, self._delimiter)
        error = validate_query(query)
        if error:
            logger.info(f"Requete invalide '{raw_title}': {error.message}")
            return error

        try:
            results = await self._client.search(
                query.main_query, query.scope, query.year, query.language
            )
        except _FETCH_ERRORS as e:
            logger.error(f"Erreur de recherche TMDB pour '{query.main_query}': {e}")
            return ErrorResult(SEARCH_FAILED)

        if not results:
            logger.info(f"Aucun resultat pour: {query.main_query}")
            return ErrorResult(NO_RESULTS)

        kind = kind_of_result(query.scope, results[0])
        if kind is None:
            logger.info(
                f"Type de resultat non gere pour '{query.main_query}': {results[0].media_type}"
            )
            return ErrorResult(NO_RESULTS)

        try:
            return await self.fetch(request_for_query(query, kind, results[0].id))
        except ResolutionError as e:
            return ErrorResult(e.message)

    async def refresh(self, request: FetchRequest) -> ResolutionOutcome:
        """Recupere a nouveau un element deja synchronise a partir de son ID."""
        try:
            return await self.fetch(request)
        except ResolutionError as e:
            logger.warning(f"Rafraichissement impossible ({request.label}): {e.message}")
            return ErrorResult(REFRESH_FAILED)

    async def fetch(
        self,
        request: FetchRequest,
        show: Optional[ShowRecord] = None,
        season: Optional[SeasonRecord] = None,
    ) -> NormalizedRecord:
        """
        Recupere et normalise l'element demande, puis ses enfants.

        Les parents deja recuperes (serie, saison) sont transmis aux enfants
        pour eviter de les recuperer a nouveau.

        Raises:
            ResolutionError: Si l'element lui-meme ne peut pas etre recupere
        """
        lang = request.language

        if request.kind == MediaKind.MOVIE:
            movie = await self._call(self._client.get_movie(request.tmdb_id, lang), DETAILS_FAILED)
            return normalize(movie)

        if show is None:
            show = await self._call(self._client.get_show(request.tmdb_id, lang), DETAILS_FAILED)

        if request.kind == MediaKind.SHOW:
            record = normalize(show)
            if request.include_children:
                children = [
                    FetchRequest(
                        MediaKind.SEASON,
                        show.id,
                        season_number=number,
                        include_children=request.include_episodes,
                        language=lang,
                    )
                    for number in show.season_numbers
                    if number != SPECIALS_SEASON_NUMBER and number not in request.known_children
                ]
                record.seasons = await self._fetch_children(record, children, show=show)
            return record

        if season is None:
            season = await self._call(
                self._client.get_season(show.id, request.season_number, lang), SEASON_FAILED
            )

        if request.kind == MediaKind.SEASON:
            record = normalize(season, show=show)
            if request.include_children:
                children = [
                    FetchRequest(
                        MediaKind.EPISODE,
                        show.id,
                        season_number=season.season_number,
                        episode_number=number,
                        language=lang,
                    )
                    for number in season.episode_numbers
                    if number not in request.known_children
                ]
                record.episodes = await self._fetch_children(
                    record, children, show=show, season=season
                )
            return record

        episode = await self._call(
            self._client.get_episode(
                show.id, season.season_number, request.episode_number, lang
            ),
            EPISODE_FAILED,
        )
        return normalize(episode, show=show, season=season)

    async def _fetch_children(
        self,
        parent: NormalizedRecord,
        requests: list[FetchRequest],
        show: ShowRecord,
        season: Optional[SeasonRecord] = None,
    ) -> list[NormalizedRecord]:
        """
        Recupere les enfants en parallele.

        Une branche en echec est ecartee et signalee dans ``parent.warnings``.
        """
        outcomes = await asyncio.gather(
            *(self.fetch(request, show=show, season=season) for request in requests),
            return_exceptions=True,
        )

        children = []
        for request, outcome in zip(requests, outcomes):
            if isinstance(outcome, ResolutionError):
                logger.warning(f"{parent.title} - {request.label} ignore: {outcome.message}")
                parent.warnings.append(f"{request.label}: {outcome.message}")
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                parent.warnings.extend(outcome.warnings)
                children.append(outcome)
        return children

    async def _call(self, coro, message: str):
        try:
            return await coro
        except _FETCH_ERRORS as e:
            logger.error(f"{message} ({e})")
            raise ResolutionError(message) from e
