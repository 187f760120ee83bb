"""
Client TMDB pour la recherche et la recuperation de metadonnees.

Implemente l'interface IMetadataClient pour TMDB (The Movie Database):
films, series, saisons et episodes. Chaque requete de detail embarque
les credits et les videos (append_to_response) pour un seul aller-retour.

Usage:
    cache = APICache()
    client = TMDBClient(api_key="your_key", cache=cache)
    results = await client.search("Alien", scope=MediaScope.MOVIE, year=1979)
    movie = await client.get_movie(results[0].id)
    await client.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.api.cache import APICache
from src.adapters.api.retry import request_with_retry
from src.core.entities.media import (
    CrewMember,
    EpisodeRecord,
    MovieRecord,
    SeasonRecord,
    ShowRecord,
    Video,
)
from src.core.ports.api_clients import IMetadataClient, SearchResult
from src.core.value_objects.query import MediaScope
from src.utils.constants import TMDB_BASE_URL

DETAILS_APPEND = "credits,videos"


def _year_of(date_str: Optional[str]) -> Optional[int]:
    """Extrait l'annee d'une date ISO (YYYY-MM-DD)."""
    if date_str and len(date_str) >= 4 and date_str[:4].isdigit():
        return int(date_str[:4])
    return None


def _parse_cast(data: dict[str, Any]) -> tuple[str, ...]:
    cast = data.get("credits", {}).get("cast", [])
    return tuple(actor["name"] for actor in cast if actor.get("name"))


def _parse_crew(data: dict[str, Any]) -> tuple[CrewMember, ...]:
    crew = data.get("credits", {}).get("crew", [])
    return tuple(
        CrewMember(name=member["name"], job=member.get("job", ""))
        for member in crew
        if member.get("name")
    )


def _parse_videos(data: dict[str, Any]) -> tuple[Video, ...]:
    videos = data.get("videos", {}).get("results", [])
    return tuple(
        Video(
            key=video["key"],
            type=video.get("type", ""),
            site=video.get("site", ""),
            official=bool(video.get("official", False)),
            published_at=video.get("published_at") or "",
        )
        for video in videos
        if video.get("key")
    )


def _parse_genres(data: dict[str, Any]) -> tuple[str, ...]:
    return tuple(genre["name"] for genre in data.get("genres", []) if genre.get("name"))


class TMDBClient(IMetadataClient):
    """
    Client API TMDB.

    - Recherche film / serie / multi avec filtres annee et langue
    - Details film, serie, saison, episode (credits + videos embarques)
    - Cache persistant des recherches
    - Retry automatique sur rate limiting (429)
    """

    def __init__(self, api_key: str, cache: APICache) -> None:
        """
        Args:
            api_key: Cle API TMDB (v3) ou Read Access Token (v4)
            cache: Instance APICache pour le caching des recherches
        """
        self._api_key = api_key
        self._cache = cache
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Supporte les deux modes d'authentification TMDB:
        - API Key v3 (32 caracteres hex) : passe en parametre api_key
        - Read Access Token v4 (long JWT) : passe en header Bearer
        """
        if self._client is None or self._client.is_closed:
            is_v4_token = len(self._api_key) > 40

            headers = {"Accept": "application/json"}
            params = {}

            if is_v4_token:
                headers["Authorization"] = f"Bearer {self._api_key}"
            else:
                params["api_key"] = self._api_key

            self._client = httpx.AsyncClient(
                base_url=TMDB_BASE_URL,
                headers=headers,
                params=params,
                timeout=30.0,
            )
        return self._client

    async def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await request_with_retry(self._get_client(), "GET", url, params=params)
        return response.json()

    def _details_params(self, language: Optional[str]) -> dict[str, Any]:
        params: dict[str, Any] = {"append_to_response": DETAILS_APPEND}
        if language:
            params["language"] = language
        return params

    async def search(
        self,
        query: str,
        scope: MediaScope = MediaScope.MULTI,
        year: Optional[int] = None,
        language: Optional[str] = None,
    ) -> list[SearchResult]:
        """
        Recherche par titre, cache-first.

        L'annee est transmise comme parametre natif de recherche:
        primary_release_year pour les films, first_air_date_year pour les
        series. La recherche multi n'a pas de filtre annee.
        """
        cache_key = f"tmdb:search:{scope.value}:{query.lower()}:{year}:{language}"

        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        params: dict[str, Any] = {"query": query, "include_adult": "false"}
        if year is not None:
            if scope == MediaScope.MOVIE:
                params["primary_release_year"] = year
            elif scope == MediaScope.TV:
                params["first_air_date_year"] = year
        if language:
            params["language"] = language

        logger.debug(f"Recherche TMDB ({scope.value}): {query}")
        data = await self._get_json(f"/search/{scope.value}", params)

        results = []
        for item in data.get("results", []):
            results.append(
                SearchResult(
                    id=int(item["id"]),
                    title=item.get("title") or item.get("name") or "",
                    media_type=item.get("media_type"),
                    year=_year_of(item.get("release_date") or item.get("first_air_date")),
                )
            )

        await self._cache.set_search(cache_key, results)
        return results

    async def get_movie(self, movie_id: int, language: Optional[str] = None) -> MovieRecord:
        """Recupere les details complets d'un film."""
        data = await self._get_json(f"/movie/{movie_id}", self._details_params(language))

        return MovieRecord(
            id=int(data["id"]),
            title=data.get("title") or data.get("original_title", ""),
            overview=data.get("overview") or "",
            tagline=data.get("tagline") or "",
            release_date=data.get("release_date") or None,
            status=data.get("status"),
            runtime=data.get("runtime") or None,
            genres=_parse_genres(data),
            cast=_parse_cast(data),
            crew=_parse_crew(data),
            videos=_parse_videos(data),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            vote_average=data.get("vote_average"),
        )

    async def get_show(self, show_id: int, language: Optional[str] = None) -> ShowRecord:
        """Recupere les details complets d'une serie."""
        data = await self._get_json(f"/tv/{show_id}", self._details_params(language))

        return ShowRecord(
            id=int(data["id"]),
            title=data.get("name") or data.get("original_name", ""),
            overview=data.get("overview") or "",
            tagline=data.get("tagline") or "",
            first_air_date=data.get("first_air_date") or None,
            status=data.get("status"),
            show_type=data.get("type"),
            genres=_parse_genres(data),
            cast=_parse_cast(data),
            crew=_parse_crew(data),
            videos=_parse_videos(data),
            poster_path=data.get("poster_path"),
            backdrop_path=data.get("backdrop_path"),
            vote_average=data.get("vote_average"),
            season_numbers=tuple(
                season["season_number"] for season in data.get("seasons", [])
            ),
            episode_run_time=tuple(data.get("episode_run_time") or ()),
        )

    async def get_season(
        self, show_id: int, season_number: int, language: Optional[str] = None
    ) -> SeasonRecord:
        """Recupere les details d'une saison, avec la liste de ses episodes."""
        data = await self._get_json(
            f"/tv/{show_id}/season/{season_number}", self._details_params(language)
        )

        return SeasonRecord(
            id=int(data["id"]),
            show_id=show_id,
            season_number=data.get("season_number", season_number),
            title=data.get("name") or f"Season {season_number}",
            overview=data.get("overview") or "",
            air_date=data.get("air_date") or None,
            cast=_parse_cast(data),
            crew=_parse_crew(data),
            videos=_parse_videos(data),
            poster_path=data.get("poster_path"),
            vote_average=data.get("vote_average"),
            episode_numbers=tuple(
                episode["episode_number"] for episode in data.get("episodes", [])
            ),
        )

    async def get_episode(
        self,
        show_id: int,
        season_number: int,
        episode_number: int,
        language: Optional[str] = None,
    ) -> EpisodeRecord:
        """Recupere les details d'un episode."""
        data = await self._get_json(
            f"/tv/{show_id}/season/{season_number}/episode/{episode_number}",
            self._details_params(language),
        )

        return EpisodeRecord(
            id=int(data["id"]),
            show_id=show_id,
            season_number=data.get("season_number", season_number),
            episode_number=data.get("episode_number", episode_number),
            title=data.get("name") or f"Episode {episode_number}",
            overview=data.get("overview") or "",
            air_date=data.get("air_date") or None,
            runtime=data.get("runtime") or None,
            cast=_parse_cast(data),
            crew=_parse_crew(data),
            videos=_parse_videos(data),
            vote_average=data.get("vote_average"),
        )

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
