"""
mediasync - Synchronisation des métadonnées TMDB vers une base Notion.

Ce package surveille une base Notion, résout les requêtes saisies par
l'utilisateur auprès de TMDB et écrit les métadonnées normalisées (films,
séries, saisons, épisodes) dans la base.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (parsing, résolution, réconciliation, boucle)
- adapters/ : Couche infrastructure (clients TMDB et Notion)
"""
