"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- FilterKey : Cles de filtre canoniques d'une requete
- MediaScope : Perimetre de recherche (film, serie, multi)
- Query : Requete analysee (titre principal + filtres)
"""

from src.core.value_objects.query import (
    FilterKey,
    MediaScope,
    Query,
)

__all__ = [
    "FilterKey",
    "MediaScope",
    "Query",
]
