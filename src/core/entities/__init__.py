"""
Business entities representing core domain concepts.

Exports:
- MovieRecord, ShowRecord, SeasonRecord, EpisodeRecord: raw TMDB records (tagged by kind)
- NormalizedRecord: flat record written to the destination store
- ErrorResult: error flowing through the same path as a record
- DestinationPage: page of the Notion database
"""

from src.core.entities.media import (
    CrewMember,
    EpisodeRecord,
    ErrorKind,
    ErrorResult,
    ExternalRecord,
    MediaKind,
    MovieRecord,
    NormalizedRecord,
    RecordType,
    ResolutionOutcome,
    SeasonRecord,
    ShowRecord,
    Video,
)
from src.core.entities.page import DestinationPage, Relation

__all__ = [
    "CrewMember",
    "DestinationPage",
    "EpisodeRecord",
    "ErrorKind",
    "ErrorResult",
    "ExternalRecord",
    "MediaKind",
    "MovieRecord",
    "NormalizedRecord",
    "RecordType",
    "Relation",
    "ResolutionOutcome",
    "SeasonRecord",
    "ShowRecord",
    "Video",
]
