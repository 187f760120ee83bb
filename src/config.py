"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe
MEDIASYNC_, et peut optionnellement être fournie via un fichier .env.

Les identifiants TMDB et Notion sont optionnels au chargement : la
synchronisation n'est lancée que si les deux sont configurés.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Exemple : MEDIASYNC_POLL_INTERVAL_SECONDS=10
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIASYNC_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Identifiants (OPTIONNELS - synchronisation désactivée si non définis)
    tmdb_api_key: Optional[str] = Field(default=None)
    notion_api_token: Optional[str] = Field(default=None)
    notion_database_id: Optional[str] = Field(default=None)

    # Requêtes
    title_delimiter: str = Field(default=";", min_length=1)

    # Cadence de synchronisation
    poll_interval_seconds: float = Field(default=5, gt=0)
    unreleased_interval_minutes: float = Field(default=60, gt=0)
    catalog_refresh_hours: float = Field(default=24, gt=0)
    pending_lookback_minutes: Optional[int] = Field(default=None, ge=1)
    duplicate_archive_delay: float = Field(default=30, ge=0)
    refresh_includes_episodes: bool = Field(default=True)

    # Cache des recherches TMDB
    search_cache_dir: Path = Field(default=Path(".cache/api"))
    search_cache_ttl: int = Field(default=24 * 60 * 60, ge=0)

    # Serveur
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/mediasync.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("search_cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tmdb_enabled(self) -> bool:
        """Vérifie si l'API TMDB est configurée."""
        return bool(self.tmdb_api_key)

    @property
    def notion_enabled(self) -> bool:
        """Vérifie si la base Notion est configurée."""
        return bool(self.notion_api_token and self.notion_database_id)

    @property
    def sync_enabled(self) -> bool:
        return self.tmdb_enabled and self.notion_enabled
