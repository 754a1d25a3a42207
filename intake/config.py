"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache), single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Empty redis_url selects the in-process TTL cache (single-instance only)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Document store
    database_url: str = "postgresql+asyncpg://intake:intake@db:5432/intake"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Ephemeral cache
    redis_url: str = ""
    redis_socket_timeout_seconds: float = 5.0

    # OTP
    otp_ttl_seconds: int = 300
    otp_sender_name: str = "Job Application"

    # Brevo transactional email
    brevo_api_key: str = "brevo-placeholder"
    brevo_api_url: str = "https://api.brevo.com/v3/smtp/email"
    brevo_timeout_seconds: float = 15.0

    # Notifications
    mail_from: str = "noreply@example.com"
    admin_email: str = ""
    notification_sender_name: str = "Job Application"
    confirmation_sender_name: str = "LHCPL Recruitment"
    company_name: str = "Lavish Healthcare Pvt Ltd."
    signature_name: str = "Sunil Bajaj"
    signature_title: str = "Recruitment Head"

    # API
    cors_origins: list[str] = ["*"]
    max_body_bytes: int = 10 * 1024 * 1024

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    workers: int = 1

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def admin_recipient(self) -> str:
        """Admin inbox; defaults to the sender address."""
        return self.admin_email or self.mail_from


@lru_cache
def get_settings() -> Settings:
    return Settings()
