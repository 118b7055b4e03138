from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Validation defaults
    DISCARD_UNKNOWN_FIELDS: bool = False
    MAX_SCHEMA_DEPTH: int = 64  # Deeper schema documents are rejected as malformed

    model_config = SettingsConfigDict(env_prefix="SHAPEGUARD_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
