"""
Centralized configuration for the Hifz backend.

All settings are loaded from environment variables with sensible defaults.
Variables are prefixed with HIFZ_ (e.g., HIFZ_SUPABASE_URL, HIFZ_ADMIN_EMAILS).
"""

from datetime import timedelta
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HIFZ_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Hifz API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings (bearer tokens only, no cookies)
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""
    profiles_table: str = "profiles"

    # License authority (Gumroad)
    gumroad_product_id: str = ""
    license_verify_url: str = "https://api.gumroad.com/v2/licenses/verify"
    license_authority_timeout_seconds: float = 5.0

    # Entitlement policy
    premium_window_days: int = 30
    admin_emails: list[str] = []

    # Identity
    require_confirmed_email: bool = True
    session_resolve_timeout_seconds: float = 5.0

    # Trial gate (device-local counters)
    trial_game_limit: int = 3
    trial_game_window_hours: int | None = 24
    trial_analysis_limit: int = 1
    trial_analysis_window_hours: int | None = 24
    trial_state_path: str = ".hifz/trial_usage.json"

    @field_validator("admin_emails", mode="after")
    @classmethod
    def normalize_admin_emails(cls, value: list[str]) -> list[str]:
        return [email.strip().lower() for email in value if email.strip()]

    @property
    def premium_window(self) -> timedelta:
        """Flat premium window granted by every purchase ping or activation."""
        return timedelta(days=self.premium_window_days)

    @property
    def admin_allowlist(self) -> frozenset[str]:
        """Normalized admin emails, immutable for the life of the process."""
        return frozenset(self.admin_emails)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
