"""
Media metadata entities.

Raw records as returned by the metadata service (one dataclass per media
kind, tagged by ``kind``), the flat normalized record written to the
destination store, and the error result that flows through the same path.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Union


class MediaKind(str, Enum):
    """Tag of an external record."""

    MOVIE = "movie"
    SHOW = "show"
    SEASON = "season"
    EPISODE = "episode"


class RecordType(str, Enum):
    """Value of the ``Type`` property on destination pages."""

    MOVIE = "Movie"
    TELEVISION = "Television"
    MINISERIES = "Miniseries"
    SEASON = "Television Season"
    EPISODE = "Television Episode"

    @property
    def is_show(self) -> bool:
        return self in (RecordType.TELEVISION, RecordType.MINISERIES)


class ErrorKind(str, Enum):
    """Origin of an error result."""

    QUERY = "query"
    RESOLUTION = "resolution"


@dataclass(frozen=True)
class CrewMember:
    """Crew credit with its job (e.g. "Director")."""

    name: str
    job: str


@dataclass(frozen=True)
class Video:
    """
    Video entry attached to a record.

    Attributes:
        key: YouTube key (or key on the hosting site)
        type: Video type ("Trailer", "Teaser", ...)
        site: Hosting site ("YouTube", "Vimeo", ...)
        official: Whether the video is flagged official
        published_at: ISO timestamp of publication
    """

    key: str
    type: str
    site: str
    official: bool = False
    published_at: str = ""


@dataclass(frozen=True)
class MovieRecord:
    """Movie details from TMDB."""

    kind: ClassVar[MediaKind] = MediaKind.MOVIE

    id: int
    title: str
    overview: str = ""
    tagline: str = ""
    release_date: Optional[str] = None
    status: Optional[str] = None
    runtime: Optional[int] = None
    genres: tuple[str, ...] = ()
    cast: tuple[str, ...] = ()
    crew: tuple[CrewMember, ...] = ()
    videos: tuple[Video, ...] = ()
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: Optional[float] = None


@dataclass(frozen=True)
class ShowRecord:
    """
    TV show details from TMDB.

    Attributes:
        show_type: TMDB show type ("Scripted", "Miniseries", ...)
        season_numbers: Season ordinals listed by the show (0 = specials)
        episode_run_time: Typical episode runtimes in minutes
    """

    kind: ClassVar[MediaKind] = MediaKind.SHOW

    id: int
    title: str
    overview: str = ""
    tagline: str = ""
    first_air_date: Optional[str] = None
    status: Optional[str] = None
    show_type: Optional[str] = None
    genres: tuple[str, ...] = ()
    cast: tuple[str, ...] = ()
    crew: tuple[CrewMember, ...] = ()
    videos: tuple[Video, ...] = ()
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    vote_average: Optional[float] = None
    season_numbers: tuple[int, ...] = ()
    episode_run_time: tuple[int, ...] = ()


@dataclass(frozen=True)
class SeasonRecord:
    """Season details; ``show_id`` references the parent show."""

    kind: ClassVar[MediaKind] = MediaKind.SEASON

    id: int
    show_id: int
    season_number: int
    title: str
    overview: str = ""
    air_date: Optional[str] = None
    cast: tuple[str, ...] = ()
    crew: tuple[CrewMember, ...] = ()
    videos: tuple[Video, ...] = ()
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None
    episode_numbers: tuple[int, ...] = ()


@dataclass(frozen=True)
class EpisodeRecord:
    """Episode details; ``show_id`` references the parent show."""

    kind: ClassVar[MediaKind] = MediaKind.EPISODE

    id: int
    show_id: int
    season_number: int
    episode_number: int
    title: str
    overview: str = ""
    air_date: Optional[str] = None
    runtime: Optional[int] = None
    cast: tuple[str, ...] = ()
    crew: tuple[CrewMember, ...] = ()
    videos: tuple[Video, ...] = ()
    vote_average: Optional[float] = None


ExternalRecord = Union[MovieRecord, ShowRecord, SeasonRecord, EpisodeRecord]


@dataclass
class NormalizedRecord:
    """
    Flat record consumed by the destination store.

    Shows may carry nested ``seasons``, seasons nested ``episodes``.
    ``warnings`` collects failures of child branches that were dropped
    while the rest of the tree resolved.
    """

    title: str
    type: RecordType
    tmdb_id: int
    tagline: str = ""
    genres: list[str] = field(default_factory=list)
    runtime: Optional[int] = None
    status: Optional[str] = None
    release_date: Optional[str] = None
    synopsis: str = ""
    director: str = ""
    composer: str = ""
    cast: list[str] = field(default_factory=list)
    poster: str = ""
    backdrop: str = ""
    trailer: str = ""
    rating: Optional[float] = None
    season_number: Optional[int] = None
    episode_number: Optional[int] = None
    seasons: Optional[list["NormalizedRecord"]] = None
    episodes: Optional[list["NormalizedRecord"]] = None
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ErrorResult:
    """Error surfaced to the user as an annotation on the page."""

    message: str
    kind: ErrorKind = ErrorKind.RESOLUTION


ResolutionOutcome = Union[NormalizedRecord, ErrorResult]
