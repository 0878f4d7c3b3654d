"""StoreIt configuration — Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings; one instance is built per process and passed to services."""

    app_name: str = "StoreIt"
    debug: bool = True
    environment: str = "development"
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = [
        "http://localhost:3000",
    ]

    # Storage backend: "local" (SQLite + filesystem) or "appwrite" (remote REST)
    storage_backend: str = "local"

    # Remote backend (Appwrite-compatible REST API)
    appwrite_endpoint: str = "http://localhost/v1"
    appwrite_project_id: str = ""
    appwrite_api_key: str = ""

    # Collection / bucket identifiers (shared by both backends)
    database_id: str = "storeit"
    files_collection_id: str = "files"
    users_collection_id: str = "users"
    bucket_id: str = "files"

    # Local backend paths (relative resolved from backend/ at runtime)
    data_dir: str = "./data"
    blob_dir: str = "./data/blobs"
    database_path: str = "./data/storeit.db"

    # Auth — bearer tokens issued by the session layer
    secret_key: str = "change-me-in-prod"
    token_algorithm: str = "HS256"

    # Page-cache invalidation hook of the web frontend
    revalidate_url: str = ""
    revalidate_secret: str = ""
    revalidate_timeout_seconds: float = 5.0

    # Base URL clients use to reach this service (local blob URLs)
    public_url: str = "http://localhost:8000"

    # Remote calls
    request_timeout_seconds: float = 30.0
    usage_page_size: int = 100

    uvicorn_workers: int = 1
    max_db_connections: int = 5

    @property
    def is_local_backend(self) -> bool:
        return self.storage_backend == "local"

    model_config = SettingsConfigDict(
        env_file=(".env", "../.env"),
        env_file_encoding="utf-8",
        env_prefix="STOREIT_",
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, value: list[str] | str) -> list[str]:
        if isinstance(value, str) and not value.startswith("["):
            return [o.strip() for o in value.split(",") if o.strip()]
        if isinstance(value, list):
            return value
        return ["http://localhost:3000"]

    @field_validator("storage_backend")
    @classmethod
    def check_storage_backend(cls, value: str) -> str:
        value = value.lower()
        if value not in ("local", "appwrite"):
            raise ValueError(f"Unknown storage backend: {value}")
        return value

    @model_validator(mode="after")
    def resolve_paths(self) -> "Settings":
        """Ensure data directories are absolute."""
        base = Path(__file__).resolve().parent.parent  # backend/
        for field in ("data_dir", "blob_dir", "database_path"):
            val = getattr(self, field)
            if not Path(val).is_absolute():
                setattr(self, field, str(base / val))
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
