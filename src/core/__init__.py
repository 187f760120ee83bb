"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, HTTP).

Sous-packages :
- entities/ : Enregistrements TMDB, enregistrement normalisé, page de destination
- ports/ : Interfaces abstraites (IMetadataClient, IDestinationStore)
- value_objects/ : Objets valeur immutables (Query, FilterKey, MediaScope)
"""
