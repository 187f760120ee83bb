"""
Client HTTP bas niveau pour l'API REST Notion.

Expose les quelques endpoints consommes par la synchronisation
(requete de base paginee, pages, blocs). Meme infrastructure que le client
TMDB : httpx.AsyncClient paresseux et retry sur 429.

Usage:
    client = NotionClient(token="secret_xxx", database_id="abc123")
    pages = await client.query_database({"property": "Title", "title": {"ends_with": ";"}})
    await client.close()
"""

from typing import Any, Optional

import httpx

from src.adapters.api.retry import request_with_retry
from src.utils.constants import NOTION_BASE_URL, NOTION_PAGE_SIZE, NOTION_VERSION


class NotionClient:
    """
    Client de l'API Notion limite a une base de donnees.

    Les erreurs HTTP sont propagees (httpx.HTTPError) ; l'adaptateur
    NotionStore les convertit en StoreError.
    """

    def __init__(self, token: str, database_id: str) -> None:
        """
        Args:
            token: Secret d'integration Notion
            database_id: ID de la base synchronisee
        """
        self._token = token
        self._database_id = database_id
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=NOTION_BASE_URL,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Notion-Version": NOTION_VERSION,
                    "Content-Type": "application/json",
                },
                timeout=30.0,
            )
        return self._client

    async def _request(self, method: str, url: str, **kwargs) -> dict[str, Any]:
        response = await request_with_retry(self._get_client(), method, url, **kwargs)
        return response.json()

    async def query_database(
        self,
        filter: Optional[dict[str, Any]] = None,
        sorts: Optional[list[dict[str, Any]]] = None,
    ) -> list[dict[str, Any]]:
        """
        Interroge la base et suit la pagination par curseur.

        Args:
            filter: Filtre Notion (optionnel)
            sorts: Tris Notion (optionnel)

        Returns:
            Toutes les pages correspondantes
        """
        body: dict[str, Any] = {"page_size": NOTION_PAGE_SIZE}
        if filter:
            body["filter"] = filter
        if sorts:
            body["sorts"] = sorts

        results: list[dict[str, Any]] = []
        while True:
            data = await self._request(
                "POST", f"/databases/{self._database_id}/query", json=body
            )
            results.extend(data.get("results", []))
            next_cursor = data.get("next_cursor")
            if not data.get("has_more") or not next_cursor:
                break
            body["start_cursor"] = next_cursor
        return results

    async def retrieve_page(self, page_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/pages/{page_id}")

    async def create_page(
        self,
        properties: dict[str, Any],
        icon: Optional[dict[str, Any]] = None,
        cover: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Cree une page dans la base."""
        body: dict[str, Any] = {
            "parent": {"database_id": self._database_id},
            "properties": properties,
        }
        if icon:
            body["icon"] = icon
        if cover:
            body["cover"] = cover
        return await self._request("POST", "/pages", json=body)

    async def update_page(
        self,
        page_id: str,
        properties: Optional[dict[str, Any]] = None,
        icon: Optional[dict[str, Any]] = None,
        cover: Optional[dict[str, Any]] = None,
        archived: Optional[bool] = None,
    ) -> dict[str, Any]:
        """Met a jour les proprietes (et/ou icone, couverture, archivage) d'une page."""
        body: dict[str, Any] = {}
        if properties:
            body["properties"] = properties
        if icon:
            body["icon"] = icon
        if cover:
            body["cover"] = cover
        if archived is not None:
            body["archived"] = archived
        return await self._request("PATCH", f"/pages/{page_id}", json=body)

    async def append_block_children(
        self, block_id: str, children: list[dict[str, Any]]
    ) -> dict[str, Any]:
        return await self._request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children}
        )

    async def list_block_children(self, block_id: str) -> list[dict[str, Any]]:
        """Liste les blocs enfants, toutes pages de resultats confondues."""
        params: dict[str, Any] = {"page_size": NOTION_PAGE_SIZE}
        blocks: list[dict[str, Any]] = []
        while True:
            data = await self._request("GET", f"/blocks/{block_id}/children", params=params)
            blocks.extend(data.get("results", []))
            next_cursor = data.get("next_cursor")
            if not data.get("has_more") or not next_cursor:
                break
            params["start_cursor"] = next_cursor
        return blocks

    async def delete_block(self, block_id: str) -> None:
        await self._request("DELETE", f"/blocks/{block_id}")

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
