"""
Configuration du logging de l'application via loguru.

Sortie console coloree pour le suivi en direct, fichier JSON avec rotation
pour l'analyse. Chaque message emis pendant le traitement d'une page porte
le declencheur (``trigger``) et l'ID de page (``page_id``) lies par la
boucle de synchronisation via ``logger.contextualize``.
"""

import sys
from pathlib import Path

from loguru import logger

# Valeurs par defaut hors traitement d'une page
SYNC_CONTEXT_DEFAULTS = {"trigger": "-", "page_id": "-"}


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/mediasync.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Args :
        log_level : Niveau minimum pour la console (DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier de log JSON
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conserves
    """
    logger.remove()
    logger.configure(extra=SYNC_CONTEXT_DEFAULTS)

    logger.add(
        sys.stderr,
        level=log_level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[trigger]}</magenta>:<magenta>{extra[page_id]}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    # Le contexte de synchronisation est serialise dans "extra"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,
    )

    logger.debug("Logging configure", log_file=str(log_file), rotation=rotation_size)
