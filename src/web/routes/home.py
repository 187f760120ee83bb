"""
Route de sante du serveur.

Repond en texte brut tant que le processus est vivant ; l'etat de la
synchronisation est expose en JSON sur /status.
"""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def home() -> str:
    """Sonde de vivacite."""
    return "TMDB-Notion Sync Server is running"


@router.get("/status")
async def status(request: Request) -> dict:
    """Etat de la boucle de synchronisation."""
    sync_task = getattr(request.app.state, "sync_task", None)
    guard = getattr(request.app.state, "guard", None)
    return {
        "sync_running": sync_task is not None and not sync_task.done(),
        "in_flight": len(guard) if guard is not None else 0,
    }
