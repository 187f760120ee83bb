"""
Interfaces ports pour le client de metadonnees.

Interface abstraite (port) definissant le contrat consomme par le resolveur.
L'implementation concrete est le client TMDB (adapters/api/tmdb_client.py).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from src.core.entities.media import EpisodeRecord, MovieRecord, SeasonRecord, ShowRecord
from src.core.value_objects.query import MediaScope


@dataclass(frozen=True)
class SearchResult:
    """
    Résultat de recherche depuis l'API de métadonnées.

    Attributs :
        id : ID TMDB (entier stable)
        title : Titre (film) ou nom (série)
        media_type : Type rapporté par l'API ("movie", "tv", "person"...),
                     None pour une recherche déjà restreinte à un type
        year : Année de sortie/diffusion
    """

    id: int
    title: str
    media_type: Optional[str] = None
    year: Optional[int] = None


class IMetadataClient(ABC):
    """
    Interface de l'API de métadonnées média.

    Les méthodes de détail lèvent httpx.HTTPError en cas d'échec : le
    resolveur décide de la portée de l'erreur.
    """

    @abstractmethod
    async def search(
        self,
        query: str,
        scope: MediaScope = MediaScope.MULTI,
        year: Optional[int] = None,
        language: Optional[str] = None,
    ) -> list[SearchResult]:
        """
        Recherche par texte, classée par pertinence.

        Args :
            query : Titre recherché
            scope : Film, série ou recherche multi-type
            year : Année de sortie/première diffusion
            language : Code langue (ex: "fr-FR")
        """
        ...

    @abstractmethod
    async def get_movie(self, movie_id: int, language: Optional[str] = None) -> MovieRecord:
        """Détails d'un film avec crédits et vidéos."""
        ...

    @abstractmethod
    async def get_show(self, show_id: int, language: Optional[str] = None) -> ShowRecord:
        """Détails d'une série avec crédits et vidéos."""
        ...

    @abstractmethod
    async def get_season(
        self, show_id: int, season_number: int, language: Optional[str] = None
    ) -> SeasonRecord:
        """Détails d'une saison avec crédits et vidéos."""
        ...

    @abstractmethod
    async def get_episode(
        self,
        show_id: int,
        season_number: int,
        episode_number: int,
        language: Optional[str] = None,
    ) -> EpisodeRecord:
        """Détails d'un épisode avec crédits et vidéos."""
        ...
