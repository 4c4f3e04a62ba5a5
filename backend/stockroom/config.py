"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Stockroom"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./data/stockroom.sqlite"

    # Session collaborator hands over the resolved user id in this header
    user_id_header: str = "X-User-Id"

    # Groups
    invite_code_length: int = 16
    invite_code_max_attempts: int = 5

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:3000"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
