"""
Cache persistant des recherches TMDB.

Le cache utilise diskcache pour la persistence sur disque. Seuls les
resultats de recherche sont caches : les details doivent rester frais pour
que les rafraichissements voient les nouvelles saisons et les changements
de statut.
"""

import asyncio
from functools import partial
from typing import Any, Optional

from diskcache import Cache


class APICache:
    """
    Cache asynchrone avec TTL pour les recherches.

    Utilise diskcache pour la persistence et run_in_executor pour
    les operations asynchrones non-bloquantes.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_search("tmdb:search:movie:alien:1979:None", results)
        data = await cache.get("tmdb:search:movie:alien:1979:None")
    """

    SEARCH_TTL = 24 * 60 * 60  # 24 heures

    def __init__(self, cache_dir: str = ".cache/api", search_ttl: Optional[int] = None) -> None:
        """
        Args:
            cache_dir: Chemin vers le repertoire du cache (cree si inexistant)
            search_ttl: Duree de vie des recherches en secondes (defaut: 24h)
        """
        self._cache = Cache(cache_dir)
        self._search_ttl = search_ttl if search_ttl is not None else self.SEARCH_TTL

    async def get(self, key: str) -> Optional[Any]:
        """Recupere une valeur du cache, None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur dans le cache avec un TTL en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_search(self, key: str, value: Any) -> None:
        """Stocke un resultat de recherche avec le TTL de recherche."""
        await self.set(key, value, self._search_ttl)

    def close(self) -> None:
        """Ferme la connexion au cache (a appeler a la fin)."""
        self._cache.close()
