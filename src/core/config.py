"""Configuration management for taskmaster."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Storage Configuration
    sqlite_db_path: str = Field(default="data/taskmaster.db", description="Path to the SQLite database file")

    # Pydantic Logfire Configuration (optional)
    logfire_token: str | None = Field(default=None, description="Pydantic Logfire token for observability")

    environment: str = Field(default="development", description="Deployment environment name")

    # Preference defaults (used until preferences are stored)
    default_language: str = Field(default="pt", description="Language for history and report text (pt or en)")
    default_date_format: str = Field(default="DD/MM/YYYY", description="Date format (DD/MM/YYYY or MM/DD/YYYY)")
    default_timezone: str = Field(default="America/Sao_Paulo", description="Display timezone")

    # Invite backend Configuration
    invite_backend_url: str | None = Field(
        default=None, description="Base URL of the service that e-mails calendar invites"
    )
    invite_backend_api_key: str | None = Field(default=None, description="API key for the invite backend (optional)")

    @property
    def is_production(self) -> bool:
        """Whether the app runs in production."""
        return self.environment.lower() == "production"

    def require_credential(self, field_name: str, service_name: str) -> str:
        """Validate that a required credential is set, raising a clear error if missing.

        Args:
            field_name: Name of the field to check
            service_name: Human-readable service name for error message

        Returns:
            The credential value

        Raises:
            ValueError: If the credential is None or empty
        """
        value = getattr(self, field_name)
        if not value:
            raise ValueError(
                f"{service_name} credential not configured. "
                f"Set {field_name.upper()} environment variable or add to .env file."
            )
        return value


# Application Constants
class Constants:
    """Application-wide constants."""

    # API Configuration
    API_TIMEOUT_SECONDS: int = 30

    # HTTP Status Codes
    HTTP_OK: int = 200
    HTTP_BAD_REQUEST: int = 400
    HTTP_SERVER_ERROR: int = 500

    # Invite delivery
    INVITE_MAX_RETRIES: int = 3
    INVITE_RETRY_DELAY_SECONDS: float = 1.0
    INVITE_ENDPOINT_PATH: str = "/api/invites"

    # Calendar
    ICS_PRODUCT_ID: str = "-//GerenciadorDeTarefas//EN"
    ICS_UID_DOMAIN: str = "gerenciador.tarefas"

    # Dashboard
    ACTIVITY_WINDOW_DAYS: int = 7

    # Pagination Defaults
    DEFAULT_PER_PAGE_LIMIT: int = 1000  # Lists are loaded whole, like the original app

    # Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent.parent


def get_settings() -> Settings:
    """Get application settings (singleton pattern)."""
    return Settings()


# Global settings instance
settings = get_settings()
constants = Constants()
