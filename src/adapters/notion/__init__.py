"""
Adaptateur de la base Notion (stockage de destination).

- NotionClient: client HTTP bas niveau (requetes, pages, blocs)
- NotionStore: implementation de IDestinationStore
"""

from src.adapters.notion.notion_client import NotionClient
from src.adapters.notion.notion_store import NotionStore

__all__ = [
    "NotionClient",
    "NotionStore",
]
