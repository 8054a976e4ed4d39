from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Project-wide settings sourced from .env and environment variables."""

    config_path: str | None = None
    log_level: str = "WARNING"
    type_key: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="DMK_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

settings = Settings()
