"""
Client API TMDB et infrastructure partagee des clients HTTP.

- TMDBClient: The Movie Database (films, series, saisons, episodes)
- APICache: Cache persistant des recherches
- RateLimitError / with_retry / request_with_retry: backoff exponentiel sur 429
  (egalement utilise par le client Notion)
"""

from src.adapters.api.cache import APICache
from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.tmdb_client import TMDBClient

__all__ = [
    "APICache",
    "RateLimitError",
    "TMDBClient",
    "request_with_retry",
    "with_retry",
]
