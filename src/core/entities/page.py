"""
Destination page entity.

A page of the Notion database, reduced to the properties the sync reads.
Identity is the Notion page id.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from src.core.entities.media import RecordType


class Relation(str, Enum):
    """Parent relation properties linking the hierarchy."""

    SHOW = "Show"
    SEASON = "Season"


@dataclass
class DestinationPage:
    """
    Page of the destination store.

    Attributes:
        id: Notion page id
        title: Plain-text title (may end with the pending delimiter)
        tmdb_id: External id, None until the page has been synced
        type: Record type, None until synced
        release_date: ISO date of the ``Release Date`` property
        status: ``Release Status`` value
        season_number: ``Season Number`` value
        episode_number: ``Episode Number`` value
        relations: Parent page ids per relation property
        refresh_requested: Whether the ``Refresh`` checkbox is ticked
        created_time: ISO timestamp of page creation
    """

    id: str
    title: str = ""
    tmdb_id: Optional[int] = None
    type: Optional[RecordType] = None
    release_date: Optional[str] = None
    status: Optional[str] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    relations: dict[Relation, list[str]] = field(default_factory=dict)
    refresh_requested: bool = False
    created_time: str = ""

    def is_pending(self, delimiter: str) -> bool:
        """Vrai si le titre attend une resolution."""
        return self.title.endswith(delimiter)

    def parent(self, relation: Relation) -> Optional[str]:
        """Premier id de page lie par la relation, ou None."""
        ids = self.relations.get(relation) or []
        return ids[0] if ids else None
