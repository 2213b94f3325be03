# seedgraph/config.py
from __future__ import annotations
import os
from pydantic_settings import BaseSettings, SettingsConfigDict


def _as_bool(v: str | None, default: bool = False) -> bool:
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseSettings):
    # Mongo
    mongo_uri: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    mongo_db: str = os.getenv("MONGO_DB", "seedgraph")

    # Seeding
    seed_active: bool = _as_bool(os.getenv("SEED_ACTIVE"), default=True)
    seed_path: str = os.getenv("SEED_PATH", "seeds")
    seed_suffix: str = os.getenv("SEED_SUFFIX", "_seed")
    seed_env: str = os.getenv("SEED_ENV", os.getenv("APP_ENV", "development"))

    # Identity / logging
    service_name: str = os.getenv("SERVICE_NAME", "seedgraph")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")


settings = Settings()
