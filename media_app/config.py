from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # Application
    app_name: str = "Media Streaming Service"
    app_version: str = "1.0.0"
    secret_key: str = "your-secret-key-here-change-in-production"

    # Auth (bearer JWT verification)
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    # Database
    database_url: str = "sqlite:///./media.db"
    database_timeout_seconds: int = 5

    # Streaming links
    stream_link_ttl_seconds: int = 10 * 60  # Fixed 10 minute window
    stream_path_prefix: str = "/media/stream"
    link_id_strategy: str = "uuid4"  # Options: "uuid4", "token"
    link_token_bytes: int = 16  # 128 bits for the "token" strategy
    single_use_links: bool = False
    record_view_on_redeem: bool = False

    # Analytics
    analytics_window_days: int = 30
    analytics_top_sources_limit: int = 10

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
