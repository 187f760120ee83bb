"""
Interface port pour le stockage de destination (base Notion).

Le moteur de reconciliation et la boucle de synchronisation ne connaissent
que ce contrat. L'adaptateur Notion (adapters/notion/notion_store.py)
traduit ces operations en appels REST.
"""

from abc import ABC, abstractmethod
from typing import Optional

from src.core.entities.media import NormalizedRecord, RecordType
from src.core.entities.page import DestinationPage, Relation


class StoreError(Exception):
    """Echec d'une operation sur le stockage de destination."""


class IDestinationStore(ABC):
    """
    Contrat du stockage de destination.

    Toutes les operations levent StoreError en cas d'echec.
    """

    # Requetes

    @abstractmethod
    async def find_pending_pages(self) -> list[DestinationPage]:
        """Pages dont le titre se termine par le delimiteur."""
        ...

    @abstractmethod
    async def find_unreleased_pages(self, today: str) -> list[DestinationPage]:
        """Pages synchronisees non sorties (date >= today) ou au statut non terminal."""
        ...

    @abstractmethod
    async def find_refresh_requested_pages(self) -> list[DestinationPage]:
        """Pages dont la case ``Refresh`` est cochee."""
        ...

    @abstractmethod
    async def find_catalog_pages(self) -> list[DestinationPage]:
        """Pages synchronisees de premier niveau (films, series, mini-series)."""
        ...

    @abstractmethod
    async def find_by_tmdb_id(
        self, tmdb_id: int, record_type: RecordType
    ) -> list[DestinationPage]:
        """Pages portant cet ID TMDB pour ce type, triees par date de creation."""
        ...

    @abstractmethod
    async def find_children(
        self, parent_id: str, relation: Relation
    ) -> list[DestinationPage]:
        """Pages liees a ``parent_id`` par la relation donnee."""
        ...

    @abstractmethod
    async def get_page(self, page_id: str) -> DestinationPage:
        """Recupere une page par son id."""
        ...

    # Ecritures

    @abstractmethod
    async def create_page(
        self, record: NormalizedRecord, relations: dict[Relation, str]
    ) -> DestinationPage:
        """Cree une page enfant a partir d'un enregistrement normalise."""
        ...

    @abstractmethod
    async def update_page(
        self,
        page_id: str,
        record: NormalizedRecord,
        relations: Optional[dict[Relation, str]] = None,
        clear_refresh: bool = False,
    ) -> None:
        """Ecrit les proprietes d'un enregistrement sur une page existante."""
        ...

    @abstractmethod
    async def rename_page(self, page_id: str, title: str) -> None:
        """Remplace le titre d'une page."""
        ...

    @abstractmethod
    async def clear_refresh_flag(self, page_id: str) -> None:
        """Decoche la case ``Refresh`` sans toucher aux autres proprietes."""
        ...

    @abstractmethod
    async def archive_page(self, page_id: str) -> None:
        """Archive (suppression douce) une page."""
        ...

    # Annotations

    @abstractmethod
    async def clear_annotations(self, page_id: str) -> None:
        """Supprime les annotations d'erreur et de notice de la page."""
        ...

    @abstractmethod
    async def add_error_annotation(self, page_id: str, message: str) -> None:
        """Ajoute une annotation d'erreur avec l'aide au format de requete."""
        ...

    @abstractmethod
    async def add_duplicate_notice(self, page_id: str, existing_page_id: str) -> None:
        """Ajoute une notice de doublon avec un lien vers la page existante."""
        ...

    @abstractmethod
    async def add_warning_notice(self, page_id: str, messages: list[str]) -> None:
        """Ajoute une notice listant les branches non resolues."""
        ...
