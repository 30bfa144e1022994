from pydantic_settings import BaseSettings, SettingsConfigDict

import os

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./influencer_hub.db"
    environment: str = "local"
    log_level: str = "INFO"
    timezone: str = "UTC"
    uploads_dir: str = "uploads"

    public_base_url: str = os.getenv("BASE_URL", "http://localhost:8000")
    cors_origins: str = "*"

    secret_key: str = os.getenv("JWT_SECRET", "change-me-in-production-for-jwt")
    access_token_days: int = 7

    # Restores the old "always auto-login" demo flow. Never enable in production.
    demo_auto_login: bool = False
    demo_email: str = "demo@influencer-hub.local"

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7

    axiom_token: str | None = None
    axiom_dataset: str | None = None
    axiom_url: str = "https://api.axiom.co"
    axiom_org_id: str | None = None

settings = Settings()
