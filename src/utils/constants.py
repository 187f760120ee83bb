"""
Constantes globales pour la synchronisation TMDB -> Notion.

Ce module contient les constantes utilisees dans l'application:
- URLs de base TMDB (API, images, bandes-annonces)
- Noms des proprietes du schema de la base Notion
- Statuts de sortie terminaux
- Limites de casting par niveau
"""

# URLs TMDB
TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
TMDB_BACKDROP_BASE_URL = "https://image.tmdb.org/t/p/original"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="

# Credits recherches dans l'equipe technique
DIRECTOR_JOB = "Director"
COMPOSER_JOB = "Original Music Composer"

# Nombre d'acteurs conserves par niveau (ordre de generique)
CAST_LIMITS = {
    "movie": 10,
    "show": 20,
    "season": 15,
    "episode": 10,
}

# Statuts
RELEASED_STATUS = "Released"
CANCELED_STATUS = "Canceled"
TERMINAL_STATUSES = ("Released", "Ended", "Canceled")

# Saison 0 = episodes speciaux
SPECIALS_SEASON_NUMBER = 0

# API Notion
NOTION_BASE_URL = "https://api.notion.com/v1"
NOTION_VERSION = "2022-06-28"
NOTION_PAGE_SIZE = 100

# Proprietes du schema Notion
PROP_TITLE = "Title"
PROP_TAGLINE = "Tagline"
PROP_GENRE = "Genre"
PROP_RELEASE_DATE = "Release Date"
PROP_RELEASE_STATUS = "Release Status"
PROP_RUNTIME = "Runtime"
PROP_SYNOPSIS = "Synopsis"
PROP_DIRECTOR = "Director"
PROP_COMPOSER = "Composer"
PROP_CAST = "Cast"
PROP_TRAILER = "Trailer"
PROP_RATING = "TMDB Rating"
PROP_TMDB_ID = "TMDB ID"
PROP_TYPE = "Type"
PROP_SEASON_NUMBER = "Season Number"
PROP_EPISODE_NUMBER = "Episode Number"
PROP_REFRESH = "Refresh"

# Couleurs des callouts d'annotation
ERROR_CALLOUT_COLOR = "red_background"
NOTICE_CALLOUT_COLOR = "yellow_background"
ANNOTATION_COLORS = frozenset({ERROR_CALLOUT_COLOR, NOTICE_CALLOUT_COLOR})

QUERY_FORMAT_HELP = (
    "Title[year=XXXX, type=movie|tv, season=X, episode=X, language=XX, "
    "all_seasons=true|false, all_episodes=true|false];"
)
