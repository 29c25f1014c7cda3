"""Application configuration."""

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    posts_dir: Path = Path("posts")
    debug: bool = False
    app_title: str = "devsite"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    chess_enabled: bool = True
    lichess_api_url: str = "https://lichess.org/api/account"
    lichess_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("DEVSITE_LICHESS_API_KEY", "LICHESS_API_KEY"),
    )
    lichess_timeout: float = 10.0

    model_config = SettingsConfigDict(
        env_prefix="DEVSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
