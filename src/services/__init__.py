"""
Couche services (cas d'utilisation).

- query_parser : DSL de requête saisi dans le titre d'une page
- normalizer : conversion des enregistrements TMDB en enregistrements normalisés
- resolver : recherche et récupération hiérarchique (série, saisons, épisodes)
- reconciler : création / mise à jour des pages de destination
- sync_loop : déclencheurs périodiques et garde des pages en cours

Les services dépendent des ports de core/, jamais des adaptateurs concrets.
"""

from src.services.query_parser import parse_query, validate_query
from src.services.reconciler import (
    PageState,
    ReconciliationEngine,
    ReconciliationError,
    SyncMode,
)
from src.services.resolver import FetchRequest, MetadataResolver, ResolutionError
from src.services.sync_loop import CycleStats, InFlightGuard, SyncLoop

__all__ = [
    "CycleStats",
    "FetchRequest",
    "InFlightGuard",
    "MetadataResolver",
    "PageState",
    "ReconciliationEngine",
    "ReconciliationError",
    "ResolutionError",
    "SyncLoop",
    "SyncMode",
    "parse_query",
    "validate_query",
]
