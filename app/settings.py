"""Application settings using Pydantic BaseSettings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Externally reachable base URL (enables the keep-alive self-ping)
    app_base_url: str | None = None
    keep_alive_interval_seconds: int = 600

    # LLM (Gemini) - reserved for client risk insights, not wired yet
    gemini_api_key: str = ""

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    api_prefix: str = "/api"
    static_dir: str = "dist"

    # CRM behaviour
    display_timezone: str = "Asia/Jerusalem"
    wait_time_critical_hours: float = 2.0
    seed_demo_data: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
