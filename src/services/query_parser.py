"""
Analyse des requetes saisies dans les titres de pages.

Format : ``Titre[cle=valeur, cle:valeur, ...];`` -- les crochets sont
optionnels, les cles et valeurs insensibles a la casse. Un filtre mal forme
est ignore (avec un diagnostic), il n'interrompt jamais l'analyse.
"""

import re
from typing import Optional

from loguru import logger

from src.core.entities.media import ErrorKind, ErrorResult
from src.core.value_objects.query import FilterKey, MOVIE_TYPES, Query, TV_TYPES

KEY_ALIASES = {
    "y": FilterKey.YEAR,
    "t": FilterKey.TYPE,
    "s": FilterKey.SEASON,
    "e": FilterKey.EPISODE,
    "l": FilterKey.LANGUAGE,
    "lang": FilterKey.LANGUAGE,
    "all": FilterKey.ALL_EPISODES,
}

_BOOLEAN = re.compile(r"^(true|false|yes|no)$")
_INTEGER = re.compile(r"^\d+$")

VALUE_PATTERNS = {
    FilterKey.YEAR: re.compile(r"^\d{4}$"),
    FilterKey.TYPE: re.compile(rf"^({'|'.join(sorted(MOVIE_TYPES | TV_TYPES))})$"),
    FilterKey.SEASON: _INTEGER,
    FilterKey.EPISODE: _INTEGER,
    FilterKey.LANGUAGE: re.compile(r"^[a-z]{2}(-[a-z]{2})?$"),
    FilterKey.ALL_SEASONS: _BOOLEAN,
    FilterKey.ALL_EPISODES: _BOOLEAN,
}

_SEPARATOR = re.compile(r"[:=]")


def _canonical_key(key: str) -> Optional[FilterKey]:
    if key in KEY_ALIASES:
        return KEY_ALIASES[key]
    try:
        return FilterKey(key)
    except ValueError:
        return None


def _parse_filter(pair: str) -> Optional[tuple[FilterKey, str]]:
    """Analyse un couple ``cle=valeur``; None si invalide."""
    parts = _SEPARATOR.split(pair, maxsplit=1)
    if len(parts) != 2:
        logger.warning(f"Filtre ignore (separateur manquant): '{pair.strip()}'")
        return None

    raw_key, value = (part.strip().lower() for part in parts)
    key = _canonical_key(raw_key)
    if key is None:
        logger.warning(f"Filtre inconnu: '{raw_key}'")
        return None

    if not VALUE_PATTERNS[key].match(value):
        logger.warning(f"Valeur invalide pour le filtre '{key.value}': '{value}'")
        return None

    return key, value


def parse_query(raw: str, delimiter: str = ";") -> Query:
    """
    Decoupe un titre en titre principal et filtres valides.

    Ne leve jamais d'exception : les filtres invalides sont ignores.

    Args:
        raw: Titre de la page (termine par le delimiteur)
        delimiter: Delimiteur de fin de requete

    Returns:
        Query avec le titre principal nettoye et les filtres valides

    Example:
        >>> parse_query("Alien[type=movie, y=1979];").filters
        {<FilterKey.TYPE: 'type'>: 'movie', <FilterKey.YEAR: 'year'>: '1979'}
    """
    text = raw.strip()
    if delimiter and text.endswith(delimiter):
        text = text[: -len(delimiter)]

    main_query, bracket, filters_string = text.partition("[")

    filters: dict[FilterKey, str] = {}
    if bracket:
        filters_string = filters_string.strip()
        if filters_string.endswith("]"):
            filters_string = filters_string[:-1]
        for pair in filters_string.split(","):
            if not pair.strip():
                continue
            parsed = _parse_filter(pair)
            if parsed:
                key, value = parsed
                filters[key] = value

    return Query(main_query=main_query.strip(), filters=filters)


def validate_query(query: Query) -> Optional[ErrorResult]:
    """
    Verifie les contraintes bloquantes d'une requete.

    Returns:
        ErrorResult si le titre est vide ou si un episode est demande
        sans saison, None sinon
    """
    if not query.main_query:
        return ErrorResult("Invalid query!", ErrorKind.QUERY)

    if FilterKey.EPISODE in query.filters and FilterKey.SEASON not in query.filters:
        return ErrorResult(
            "If you specify an episode number, you must also specify the season number!",
            ErrorKind.QUERY,
        )

    return None
