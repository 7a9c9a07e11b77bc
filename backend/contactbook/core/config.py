# backend/contactbook/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BACKEND_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # ---- Core ----
    PROJECT_NAME: str = "Contact Book API"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # ---- Database ----
    # Any async SQLAlchemy URL (e.g. sqlite+aiosqlite:///./data/contacts.sqlite3)
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/contacts.sqlite3"
    DATABASE_ECHO: bool = False

    # ---- CORS / frontend ----
    # Comma-separated allowed origins, "*" for any
    CORS_ORIGINS: str = "*"
    PUBLIC_DIR: Path = BACKEND_DIR / "public"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        cleaned: list[str] = []
        for v in self.CORS_ORIGINS.replace("\n", ",").split(","):
            v = v.strip().rstrip("/")
            if v and v not in cleaned:
                cleaned.append(v)
        return cleaned


@lru_cache
def get_settings() -> Settings:
    return Settings()
