"""
Conversion entre enregistrements normalises et proprietes Notion.

- build_properties : NormalizedRecord -> payload ``properties``
- build_icon / build_cover : images externes (poster, backdrop)
- parse_page : objet page Notion -> DestinationPage
"""

from typing import Any, Optional

from src.core.entities.media import NormalizedRecord, RecordType
from src.core.entities.page import DestinationPage, Relation
from src.utils.constants import (
    PROP_CAST,
    PROP_COMPOSER,
    PROP_DIRECTOR,
    PROP_EPISODE_NUMBER,
    PROP_GENRE,
    PROP_RATING,
    PROP_REFRESH,
    PROP_RELEASE_DATE,
    PROP_RELEASE_STATUS,
    PROP_RUNTIME,
    PROP_SEASON_NUMBER,
    PROP_SYNOPSIS,
    PROP_TAGLINE,
    PROP_TITLE,
    PROP_TMDB_ID,
    PROP_TRAILER,
    PROP_TYPE,
)

# Limite Notion pour un objet rich_text
RICH_TEXT_LIMIT = 2000


def _text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content[:RICH_TEXT_LIMIT]}}]


def _option(name: str) -> dict[str, str]:
    # Notion refuse les virgules dans les noms d'options select
    return {"name": name.replace(",", " ").strip()}


def title_property(title: str) -> dict[str, Any]:
    """Propriete ``Title`` seule (renommage d'une page)."""
    return {PROP_TITLE: {"title": _text(title)}}


def refresh_cleared_property() -> dict[str, Any]:
    return {PROP_REFRESH: {"checkbox": False}}


def build_properties(
    record: NormalizedRecord,
    relations: Optional[dict[Relation, str]] = None,
    clear_refresh: bool = False,
) -> dict[str, Any]:
    """
    Construit le payload de proprietes d'une page.

    Les champs vides ne sont pas envoyes, afin de ne pas ecraser une saisie
    manuelle par une valeur absente cote TMDB. ``Type`` et ``TMDB ID`` sont
    toujours ecrits.

    Args:
        record: Enregistrement normalise
        relations: Relations parent a positionner (Show, Season)
        clear_refresh: Decoche la case Refresh
    """
    properties: dict[str, Any] = {
        PROP_TITLE: {"title": _text(record.title)},
        PROP_TYPE: {"select": {"name": record.type.value}},
        PROP_TMDB_ID: {"number": record.tmdb_id},
    }

    if record.tagline:
        properties[PROP_TAGLINE] = {"rich_text": _text(record.tagline)}
    if record.genres:
        properties[PROP_GENRE] = {"multi_select": [_option(g) for g in record.genres]}
    if record.release_date:
        properties[PROP_RELEASE_DATE] = {"date": {"start": record.release_date}}
    if record.status:
        properties[PROP_RELEASE_STATUS] = {"status": {"name": record.status}}
    if record.runtime:
        properties[PROP_RUNTIME] = {"number": record.runtime}
    if record.synopsis:
        properties[PROP_SYNOPSIS] = {"rich_text": _text(record.synopsis)}
    if record.director:
        properties[PROP_DIRECTOR] = {"select": _option(record.director)}
    if record.composer:
        properties[PROP_COMPOSER] = {"select": _option(record.composer)}
    if record.cast:
        properties[PROP_CAST] = {"multi_select": [_option(actor) for actor in record.cast]}
    if record.trailer:
        properties[PROP_TRAILER] = {"url": record.trailer}
    if record.rating:
        properties[PROP_RATING] = {"number": round(record.rating, 1)}
    if record.season_number is not None:
        properties[PROP_SEASON_NUMBER] = {"number": record.season_number}
    if record.episode_number is not None:
        properties[PROP_EPISODE_NUMBER] = {"number": record.episode_number}

    for relation, page_id in (relations or {}).items():
        properties[relation.value] = {"relation": [{"id": page_id}]}

    if clear_refresh:
        properties.update(refresh_cleared_property())

    return properties


def _external(url: str) -> Optional[dict[str, Any]]:
    return {"type": "external", "external": {"url": url}} if url else None


def build_icon(record: NormalizedRecord) -> Optional[dict[str, Any]]:
    """Icone de page : le poster."""
    return _external(record.poster)


def build_cover(record: NormalizedRecord) -> Optional[dict[str, Any]]:
    """Couverture de page : le backdrop."""
    return _external(record.backdrop)


def _plain_text(prop: dict[str, Any], key: str) -> str:
    return "".join(
        part.get("plain_text") or part.get("text", {}).get("content", "")
        for part in prop.get(key) or []
    )


def _number(prop: Optional[dict[str, Any]]) -> Optional[int]:
    if not prop or prop.get("number") is None:
        return None
    return int(prop["number"])


def _record_type(prop: Optional[dict[str, Any]]) -> Optional[RecordType]:
    select = (prop or {}).get("select")
    if not select:
        return None
    try:
        return RecordType(select.get("name"))
    except ValueError:
        return None


def parse_page(raw: dict[str, Any]) -> DestinationPage:
    """Convertit un objet page de l'API Notion en DestinationPage."""
    props = raw.get("properties", {})

    relations: dict[Relation, list[str]] = {}
    for relation in Relation:
        prop = props.get(relation.value)
        if prop and prop.get("relation"):
            relations[relation] = [item["id"] for item in prop["relation"]]

    release_date = (props.get(PROP_RELEASE_DATE) or {}).get("date") or {}
    status = (props.get(PROP_RELEASE_STATUS) or {}).get("status") or {}

    return DestinationPage(
        id=raw["id"],
        title=_plain_text(props.get(PROP_TITLE, {}), "title"),
        tmdb_id=_number(props.get(PROP_TMDB_ID)),
        type=_record_type(props.get(PROP_TYPE)),
        release_date=release_date.get("start"),
        status=status.get("name"),
        season_number=_number(props.get(PROP_SEASON_NUMBER)),
        episode_number=_number(props.get(PROP_EPISODE_NUMBER)),
        relations=relations,
        refresh_requested=bool((props.get(PROP_REFRESH) or {}).get("checkbox")),
        created_time=raw.get("created_time", ""),
    )
