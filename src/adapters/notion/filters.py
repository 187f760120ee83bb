"""
Filtres de requete Notion pour chaque declencheur de synchronisation.

Notion limite l'imbrication des filtres composes a deux niveaux : les
conditions sont donc distribuees (or de and) plutot qu'imbriquees.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from src.core.entities.media import RecordType
from src.core.entities.page import Relation
from src.utils.constants import (
    PROP_REFRESH,
    PROP_RELEASE_DATE,
    PROP_RELEASE_STATUS,
    PROP_TITLE,
    PROP_TMDB_ID,
    PROP_TYPE,
    TERMINAL_STATUSES,
)

CREATED_ASC = [{"timestamp": "created_time", "direction": "ascending"}]

_HAS_TMDB_ID = {"property": PROP_TMDB_ID, "number": {"is_not_empty": True}}


def pending_filter(delimiter: str, lookback_minutes: Optional[int] = None) -> dict[str, Any]:
    """Titres termines par le delimiteur, optionnellement edites recemment."""
    title = {"property": PROP_TITLE, "title": {"ends_with": delimiter}}
    if lookback_minutes is None:
        return title
    since = datetime.now(timezone.utc) - timedelta(minutes=lookback_minutes)
    return {
        "and": [
            title,
            {"timestamp": "last_edited_time", "last_edited_time": {"after": since.isoformat()}},
        ]
    }


def unreleased_filter(today: str) -> dict[str, Any]:
    """Pages synchronisees a venir (date >= today) ou au statut non terminal."""
    upcoming = {"property": PROP_RELEASE_DATE, "date": {"on_or_after": today}}
    not_terminal = [
        {"property": PROP_RELEASE_STATUS, "status": {"does_not_equal": status}}
        for status in TERMINAL_STATUSES
    ]
    return {
        "or": [
            {"and": [_HAS_TMDB_ID, upcoming]},
            {"and": [_HAS_TMDB_ID, *not_terminal]},
        ]
    }


def refresh_filter() -> dict[str, Any]:
    return {
        "and": [
            _HAS_TMDB_ID,
            {"property": PROP_REFRESH, "checkbox": {"equals": True}},
        ]
    }


def catalog_filter() -> dict[str, Any]:
    """Pages de premier niveau deja synchronisees."""
    top_level = (RecordType.MOVIE, RecordType.TELEVISION, RecordType.MINISERIES)
    return {
        "or": [
            {"and": [_HAS_TMDB_ID, {"property": PROP_TYPE, "select": {"equals": t.value}}]}
            for t in top_level
        ]
    }


def tmdb_id_filter(tmdb_id: int, record_type: RecordType) -> dict[str, Any]:
    return {
        "and": [
            {"property": PROP_TMDB_ID, "number": {"equals": tmdb_id}},
            {"property": PROP_TYPE, "select": {"equals": record_type.value}},
        ]
    }


def children_filter(parent_id: str, relation: Relation) -> dict[str, Any]:
    return {"property": relation.value, "relation": {"contains": parent_id}}
