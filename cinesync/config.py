"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe CINESYNC_,
et peut optionnellement être fournie via un fichier .env.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de cinesync/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe CINESYNC_.
    Exemple : CINESYNC_API_BASE_URL=https://catalog.example.org
    """

    model_config = SettingsConfigDict(
        env_prefix="CINESYNC_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Service de catalogue distant
    api_base_url: str = Field(default="http://localhost:8080")
    request_timeout: float = Field(default=30.0, gt=0)

    # Recherche incrementale
    search_debounce_ms: int = Field(default=500, ge=0)
    suggestion_debounce_ms: int = Field(default=300, ge=0)
    min_query_length: int = Field(default=2, ge=1)
    suggestions_per_type: int = Field(default=3, ge=0)

    # Pagination (limite de pages imposée par le fournisseur)
    pagination_radius: int = Field(default=2, ge=0)
    max_total_pages: int = Field(default=500, ge=1)

    # Plateformes de diffusion
    default_region: str = Field(default="US")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/cinesync.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5)

    @field_validator("log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def search_delay(self) -> float:
        """Anti-rebond de la recherche principale, en secondes."""
        return self.search_debounce_ms / 1000

    @property
    def suggestion_delay(self) -> float:
        """Anti-rebond des suggestions, en secondes."""
        return self.suggestion_debounce_ms / 1000
