"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List, Optional

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.core.exceptions import ConfigurationError

# Settings that must be present before the service may start serving.
REQUIRED_SETTINGS = {
    "gcloud_project_id": "GCLOUD_PROJECT_ID",
    "gcloud_location": "GCLOUD_LOCATION",
    "google_application_credentials": "GOOGLE_APPLICATION_CREDENTIALS",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App settings
    app_name: str = "Document Summarizer"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8080

    # Google Cloud / Vertex AI
    gcloud_project_id: Optional[str] = None
    gcloud_location: Optional[str] = None
    google_application_credentials: Optional[str] = None
    gemini_model: str = "gemini-2.5-pro"

    # Pipeline limits
    max_upload_bytes: int = 50 * 1024 * 1024
    max_prompt_chars: int = 3_000_000
    generation_timeout_seconds: float = 300.0

    # Rate limiting (fixed window per client)
    rate_limit_max_requests: int = 100
    rate_limit_window_seconds: int = 15 * 60

    # Web
    cors_origins: str = "*"
    static_dir: str = "public"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def validate_required_settings(settings: Settings) -> None:
    """Fail fast when required Google Cloud settings are missing.

    Raises:
        ConfigurationError: Naming every missing environment variable.
    """
    missing = [
        env_name
        for field_name, env_name in REQUIRED_SETTINGS.items()
        if not getattr(settings, field_name)
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variable(s): {', '.join(missing)}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
