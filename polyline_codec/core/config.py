from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "Polyline Codec API"
    LOG_LEVEL: str = "INFO"

    DEFAULT_PRECISION: float = 1e5
    MAX_COORDINATES: int = 100_000

    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
