"""
Objets valeur pour les requetes saisies dans les titres de pages.

Une requete est le titre d'une page Notion termine par le delimiteur, par
exemple ``Alien[type=movie, year=1979];``. Elle se decompose en un titre
principal et un ensemble de filtres types.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class FilterKey(str, Enum):
    """Cles de filtre canoniques acceptees dans une requete."""

    YEAR = "year"
    TYPE = "type"
    SEASON = "season"
    EPISODE = "episode"
    LANGUAGE = "language"
    ALL_SEASONS = "all_seasons"
    ALL_EPISODES = "all_episodes"


class MediaScope(str, Enum):
    """Perimetre de recherche TMDB derive du filtre ``type``."""

    MOVIE = "movie"
    TV = "tv"
    MULTI = "multi"


MOVIE_TYPES = frozenset({"movie", "film"})
TV_TYPES = frozenset({"tv", "television", "series", "show"})
TRUE_VALUES = frozenset({"true", "yes"})


@dataclass(frozen=True)
class Query:
    """
    Requete analysee depuis un titre de page.

    Attributs:
        main_query: Titre recherche (sans filtres ni delimiteur)
        filters: Filtres valides, indexes par cle canonique
    """

    main_query: str
    filters: dict[FilterKey, str] = field(default_factory=dict)

    def get(self, key: FilterKey) -> Optional[str]:
        """Retourne la valeur d'un filtre ou None."""
        return self.filters.get(key)

    def flag(self, key: FilterKey) -> bool:
        """Vrai si un filtre booleen (all_seasons, all_episodes) est active."""
        return self.filters.get(key) in TRUE_VALUES

    @property
    def scope(self) -> MediaScope:
        """Perimetre de recherche selon le filtre ``type``."""
        media_type = self.filters.get(FilterKey.TYPE)
        if media_type in MOVIE_TYPES:
            return MediaScope.MOVIE
        if media_type in TV_TYPES:
            return MediaScope.TV
        return MediaScope.MULTI

    @property
    def season(self) -> Optional[int]:
        value = self.filters.get(FilterKey.SEASON)
        return int(value) if value is not None else None

    @property
    def episode(self) -> Optional[int]:
        value = self.filters.get(FilterKey.EPISODE)
        return int(value) if value is not None else None

    @property
    def year(self) -> Optional[int]:
        value = self.filters.get(FilterKey.YEAR)
        return int(value) if value is not None else None

    @property
    def language(self) -> Optional[str]:
        """Code langue au format attendu par TMDB (``fr-FR``)."""
        value = self.filters.get(FilterKey.LANGUAGE)
        if value is None:
            return None
        lang, _, region = value.partition("-")
        return f"{lang}-{region.upper()}" if region else lang
