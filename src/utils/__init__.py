"""
Constantes partagées (URLs, noms de propriétés Notion, limites).
"""
