"""
Ports (interfaces abstraites) définissant les contrats pour les adaptateurs.

Ports client API : Contrats pour le service de métadonnées
- IMetadataClient : Recherche et détails (films, séries, saisons, épisodes)
- SearchResult : Résultat de recherche depuis l'API

Ports stockage : Contrats pour la base de destination
- IDestinationStore : Requêtes, écritures et annotations de pages
- StoreError : Échec d'une opération de stockage
"""

from src.core.ports.api_clients import (
    IMetadataClient,
    SearchResult,
)
from src.core.ports.destination_store import (
    IDestinationStore,
    StoreError,
)

__all__ = [
    # Client API
    "IMetadataClient",
    "SearchResult",
    # Stockage
    "IDestinationStore",
    "StoreError",
]
