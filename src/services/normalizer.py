"""
Normalisation des enregistrements TMDB en enregistrements plats.

Une fonction pure par type d'enregistrement (film, serie, saison, episode).
Les niveaux inferieurs heritent de leurs parents : compositeur
(episode -> saison -> serie), genres, poster et backdrop.
"""

from datetime import datetime, timezone
from typing import Optional

from src.core.entities.media import (
    CrewMember,
    EpisodeRecord,
    ExternalRecord,
    MediaKind,
    MovieRecord,
    NormalizedRecord,
    RecordType,
    SeasonRecord,
    ShowRecord,
    Video,
)
from src.utils.constants import (
    CANCELED_STATUS,
    CAST_LIMITS,
    COMPOSER_JOB,
    DIRECTOR_JOB,
    RELEASED_STATUS,
    TMDB_BACKDROP_BASE_URL,
    TMDB_POSTER_BASE_URL,
    YOUTUBE_WATCH_URL,
)


def utc_today() -> str:
    """Date du jour (UTC) au format ISO, comparee aux dates de diffusion."""
    return datetime.now(timezone.utc).date().isoformat()


def find_crew(crew: tuple[CrewMember, ...], job: str) -> str:
    """Nom du premier membre de l'equipe occupant ce poste, ou ''."""
    for member in crew:
        if member.job == job:
            return member.name
    return ""


def find_composer(*levels: tuple[CrewMember, ...]) -> str:
    """Premier compositeur trouve en remontant les niveaux fournis."""
    for crew in levels:
        composer = find_crew(crew, COMPOSER_JOB)
        if composer:
            return composer
    return ""


def select_trailer(videos: tuple[Video, ...]) -> str:
    """
    URL de la bande-annonce canonique.

    Parmi les videos YouTube officielles de type Trailer, retient la plus
    ancienne ; chaine vide si aucune.
    """
    trailers = [
        video
        for video in videos
        if video.type == "Trailer" and video.site == "YouTube" and video.official
    ]
    if not trailers:
        return ""
    # Dates absentes en dernier
    earliest = min(trailers, key=lambda v: (not v.published_at, v.published_at))
    return f"{YOUTUBE_WATCH_URL}{earliest.key}"


def poster_url(path: Optional[str]) -> str:
    return f"{TMDB_POSTER_BASE_URL}{path}" if path else ""


def backdrop_url(path: Optional[str]) -> str:
    return f"{TMDB_BACKDROP_BASE_URL}{path}" if path else ""


def derive_status(show_status: Optional[str], air_date: Optional[str], today: str) -> Optional[str]:
    """
    Statut d'une saison ou d'un episode.

    Une serie annulee impose son statut ; sinon l'element est sorti des que
    la date du jour depasse sa date de diffusion (comparaison de dates ISO).
    """
    if show_status == CANCELED_STATUS:
        return show_status
    if air_date and today > air_date:
        return RELEASED_STATUS
    return show_status


def normalize_movie(movie: MovieRecord) -> NormalizedRecord:
    return NormalizedRecord(
        title=movie.title,
        type=RecordType.MOVIE,
        tmdb_id=movie.id,
        tagline=movie.tagline,
        genres=list(movie.genres),
        runtime=movie.runtime,
        status=movie.status,
        release_date=movie.release_date,
        synopsis=movie.overview,
        director=find_crew(movie.crew, DIRECTOR_JOB),
        composer=find_crew(movie.crew, COMPOSER_JOB),
        cast=list(movie.cast[: CAST_LIMITS["movie"]]),
        poster=poster_url(movie.poster_path),
        backdrop=backdrop_url(movie.backdrop_path),
        trailer=select_trailer(movie.videos),
        rating=movie.vote_average,
    )


def normalize_show(show: ShowRecord) -> NormalizedRecord:
    return NormalizedRecord(
        title=show.title,
        type=RecordType.MINISERIES if show.show_type == "Miniseries" else RecordType.TELEVISION,
        tmdb_id=show.id,
        tagline=show.tagline,
        genres=list(show.genres),
        runtime=show.episode_run_time[0] if show.episode_run_time else None,
        status=show.status,
        release_date=show.first_air_date,
        synopsis=show.overview,
        composer=find_crew(show.crew, COMPOSER_JOB),
        cast=list(show.cast[: CAST_LIMITS["show"]]),
        poster=poster_url(show.poster_path),
        backdrop=backdrop_url(show.backdrop_path),
        trailer=select_trailer(show.videos),
        rating=show.vote_average,
    )


def normalize_season(
    season: SeasonRecord, show: ShowRecord, today: Optional[str] = None
) -> NormalizedRecord:
    today = today or utc_today()

    synopsis = season.overview
    if not synopsis and season.season_number == 1:
        synopsis = show.overview

    return NormalizedRecord(
        title=season.title,
        type=RecordType.SEASON,
        tmdb_id=season.id,
        genres=list(show.genres),
        status=derive_status(show.status, season.air_date, today),
        release_date=season.air_date,
        synopsis=synopsis,
        composer=find_composer(season.crew, show.crew),
        cast=list(season.cast[: CAST_LIMITS["season"]]),
        poster=poster_url(season.poster_path or show.poster_path),
        backdrop=backdrop_url(show.backdrop_path),
        trailer=select_trailer(season.videos),
        rating=season.vote_average,
        season_number=season.season_number,
    )


def normalize_episode(
    episode: EpisodeRecord,
    season: SeasonRecord,
    show: ShowRecord,
    today: Optional[str] = None,
) -> NormalizedRecord:
    today = today or utc_today()

    return NormalizedRecord(
        title=episode.title,
        type=RecordType.EPISODE,
        tmdb_id=episode.id,
        genres=list(show.genres),
        runtime=episode.runtime,
        status=derive_status(show.status, episode.air_date, today),
        release_date=episode.air_date,
        synopsis=episode.overview,
        director=find_crew(episode.crew, DIRECTOR_JOB),
        composer=find_composer(episode.crew, season.crew, show.crew),
        cast=list(episode.cast[: CAST_LIMITS["episode"]]),
        poster=poster_url(season.poster_path or show.poster_path),
        backdrop=backdrop_url(show.backdrop_path),
        trailer=select_trailer(episode.videos),
        rating=episode.vote_average,
        season_number=episode.season_number,
        episode_number=episode.episode_number,
    )


def normalize(
    record: ExternalRecord,
    show: Optional[ShowRecord] = None,
    season: Optional[SeasonRecord] = None,
    today: Optional[str] = None,
) -> NormalizedRecord:
    """
    Normalise un enregistrement selon son type.

    Les saisons requierent leur serie, les episodes leur saison et leur serie.

    Raises:
        ValueError: Si un parent requis est absent
    """
    if record.kind == MediaKind.MOVIE:
        return normalize_movie(record)
    if record.kind == MediaKind.SHOW:
        return normalize_show(record)
    if show is None:
        raise ValueError(f"{record.kind.value} {record.id}: serie parente requise")
    if record.kind == MediaKind.SEASON:
        return normalize_season(record, show, today)
    if season is None:
        raise ValueError(f"episode {record.id}: saison parente requise")
    return normalize_episode(record, season, show, today)
