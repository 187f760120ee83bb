"""
Fixtures pytest partagees pour les tests de synchronisation.

Ce module contient les fixtures communes utilisees dans les tests:
- Mock du client de metadonnees (IMetadataClient)
- Base de destination en memoire (IDestinationStore)
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.config import Settings
from src.core.ports.api_clients import IMetadataClient
from tests.fixtures.fake_store import InMemoryStore


@pytest.fixture
def mock_metadata_client() -> AsyncMock:
    """
    Mock de IMetadataClient pour les tests.

    Les valeurs de retour (ou side_effect) doivent etre configurees dans
    chaque test.
    """
    mock = AsyncMock(spec=IMetadataClient)
    mock.search.return_value = []
    return mock


@pytest.fixture
def store() -> InMemoryStore:
    """Base Notion en memoire, delimiteur ';'."""
    return InMemoryStore(delimiter=";")


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Le fichier .env eventuel est ignore pour isoler les tests.
    """
    return Settings(
        _env_file=None,
        tmdb_api_key="test_api_key",
        notion_api_token="secret_test",
        notion_database_id="db123",
        search_cache_dir=tmp_path / "cache",
        log_file=tmp_path / "test.log",
        duplicate_archive_delay=0,
    )
