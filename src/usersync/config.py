"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # System Configuration
    api_v1_prefix: str = "/api/v1"
    debug: bool = False
    log_level: str = "INFO"

    # Webhook Configuration (Clerk Dashboard -> Webhooks -> Signing Secret)
    webhook_secret: str | None = None

    # Clerk Backend API Configuration
    clerk_secret_key: str | None = None
    clerk_api_url: str = "https://api.clerk.com/v1"
    clerk_timeout_seconds: float = 10.0

    # Supabase Configuration
    supabase_url: str = "https://test.supabase.co"
    supabase_service_role_key: str = "test-service-role-key"
    users_table: str = "users"

    # PostHog Configuration
    posthog_api_key: str | None = None
    posthog_host: str = "https://app.posthog.com"


settings = Settings()
