from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORAGE_BACKEND: str = "local"
    STORAGE_DIR: str = "./data"

    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "versecast:"

    # empty secret disables uploads entirely
    UPLOAD_SECRET: str = ""
    ALLOWED_EXTENSIONS: List[str] = [".mp3"]

    ASSUMED_BITRATE_BPS: int = 128_000
    AUDIO_CONTENT_TYPE: str = "audio/mpeg"
    CACHE_MAX_AGE: int = 3600

    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()


def get_settings() -> Settings:
    return settings
