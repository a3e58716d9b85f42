from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]

_TRUTHY = {"1", "true", "yes"}


def _first_existing(name: str) -> Path | None:
    for base in (Path.cwd(), PROJECT_ROOT):
        candidate = base / name
        if candidate.exists():
            return candidate
    return None


def load_env() -> None:
    """Load ``.env`` then let ``.env.<APP_ENV>`` override it."""
    base_env = _first_existing(".env")
    if base_env:
        load_dotenv(base_env)

    env_name = os.getenv("APP_ENV", "development")
    overlay = _first_existing(f".env.{env_name}")
    if overlay:
        load_dotenv(overlay, override=True)


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    auto_create_schema: bool = False


load_env()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip()
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL is not set. Create a .env file with your connection string.")

SETTINGS = Settings(
    database_url=DATABASE_URL,
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    api_host=os.getenv("API_HOST", "127.0.0.1").strip() or "127.0.0.1",
    api_port=int(os.getenv("API_PORT", "8000")),
    auto_create_schema=os.getenv("AUTO_CREATE_SCHEMA", "").strip().lower() in _TRUTHY,
)
