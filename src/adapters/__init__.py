"""
Couche adaptateurs (infrastructure).

Les adaptateurs implémentent les ports définis dans core/ports/ et fournissent
des implémentations concrètes pour les systèmes externes.

Sous-packages :
- api/ : Client TMDB (httpx + tenacity + cache diskcache des recherches)
- notion/ : Client REST Notion et IDestinationStore basé sur une base Notion

Chaque adaptateur dépend de core/ mais core/ ne dépend jamais des adaptateurs.
"""

from src.adapters.api import TMDBClient
from src.adapters.notion import NotionClient, NotionStore

__all__ = [
    "NotionClient",
    "NotionStore",
    "TMDBClient",
]
