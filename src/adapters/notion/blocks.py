"""
Blocs d'annotation ajoutes en tete de page.

Les annotations sont des callouts reconnus a leur couleur : rouge pour les
erreurs, jaune pour les notices (doublon, branches non resolues). Elles
sont supprimees au debut de chaque traitement de la page.
"""

from typing import Any, Optional

from src.utils.constants import (
    ANNOTATION_COLORS,
    ERROR_CALLOUT_COLOR,
    NOTICE_CALLOUT_COLOR,
    QUERY_FORMAT_HELP,
)


def _callout(
    rich_text: list[dict[str, Any]],
    emoji: str,
    color: str,
    children: Optional[list[dict[str, Any]]] = None,
) -> dict[str, Any]:
    callout: dict[str, Any] = {
        "rich_text": rich_text,
        "icon": {"type": "emoji", "emoji": emoji},
        "color": color,
    }
    if children:
        callout["children"] = children
    return {"object": "block", "type": "callout", "callout": callout}


def error_callout(message: str) -> dict[str, Any]:
    """Callout d'erreur avec le format de requete attendu en bloc de code."""
    text = (
        f"{message} Ensure your query is spelled correctly and ends with a semicolon. "
        "Your query should be formatted as follows (all filters are optional):\n"
    )
    code = {
        "object": "block",
        "type": "code",
        "code": {
            "rich_text": [{"type": "text", "text": {"content": QUERY_FORMAT_HELP}}],
            "language": "plain text",
        },
    }
    return _callout(
        [{"type": "text", "text": {"content": text}}], "❗", ERROR_CALLOUT_COLOR, [code]
    )


def duplicate_callout(existing_page_id: str) -> dict[str, Any]:
    """Notice de doublon avec une mention de la page existante."""
    return _callout(
        [
            {"type": "text", "text": {"content": "This entry already exists: "}},
            {"type": "mention", "mention": {"type": "page", "page": {"id": existing_page_id}}},
            {"type": "text", "text": {"content": ". This page will be archived shortly."}},
        ],
        "⚠️",
        NOTICE_CALLOUT_COLOR,
    )


def warning_callout(messages: list[str]) -> dict[str, Any]:
    """Notice listant les saisons/episodes qui n'ont pas pu etre recuperes."""
    text = "Some entries could not be synced:\n" + "\n".join(f"- {m}" for m in messages)
    return _callout(
        [{"type": "text", "text": {"content": text}}], "⚠️", NOTICE_CALLOUT_COLOR
    )


def is_annotation(block: dict[str, Any]) -> bool:
    """Vrai pour un callout d'erreur ou de notice pose par la synchronisation."""
    if block.get("type") != "callout":
        return False
    return block.get("callout", {}).get("color") in ANNOTATION_COLORS
