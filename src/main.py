"""
Point d'entrée CLI du serveur de synchronisation TMDB -> Notion.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

from typing import Annotated, Optional

import typer
from loguru import logger

from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="mediasync",
    help="Synchronisation des métadonnées TMDB vers une base Notion",
)
container = Container()


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    config = get_config()
    logger.info("Configuration mediasync")
    typer.echo(f"API TMDB : {'activée' if config.tmdb_enabled else 'désactivée'}")
    typer.echo(f"Base Notion : {'activée' if config.notion_enabled else 'désactivée'}")
    typer.echo(f"Délimiteur de requête : {config.title_delimiter!r}")
    typer.echo(f"Intervalle de scrutation : {config.poll_interval_seconds}s")
    typer.echo(f"Rafraîchissement des sorties : {config.unreleased_interval_minutes} min")
    typer.echo(f"Rafraîchissement du catalogue : {config.catalog_refresh_hours} h")
    typer.echo(f"Cache des recherches : {config.search_cache_dir}")
    typer.echo(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo("mediasync v0.1.0")


@app.command()
def serve(
    host: Annotated[Optional[str], typer.Option(help="Adresse d'écoute")] = None,
    port: Annotated[Optional[int], typer.Option(help="Port d'écoute")] = None,
    reload: Annotated[bool, typer.Option(help="Rechargement automatique")] = False,
) -> None:
    """Lance le serveur web et la boucle de synchronisation."""
    import uvicorn

    config = get_config()
    host = host or config.host
    port = port or config.port
    typer.echo(f"Démarrage du serveur sur {host}:{port}")
    uvicorn.run("src.web.app:app", host=host, port=port, reload=reload)


def main() -> None:
    """Point d'entrée de l'application."""
    settings = container.config()
    configure_logging(
        log_level=settings.log_level,
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )

    logger.info("Démarrage de mediasync", version="0.1.0")

    app()


if __name__ == "__main__":
    main()
