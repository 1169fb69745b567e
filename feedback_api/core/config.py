# feedback_api/core/config.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FBK_", env_file=".env", extra="ignore")

    # Paths
    repo_root: str = "."
    logs_dir: str = "logs"

    # stores/
    store_backend: Literal["sqlite", "memory"] = "sqlite"
    sqlite_path: str = "artifacts/stores/feedback_store.sqlite"

    # Logging
    log_path: str = "logs/feedback_api.jsonl"

    # -------------------------
    # Feedback links
    # -------------------------
    # public_origin wins over the request origin when set (e.g. behind a proxy)
    public_origin: Optional[str] = None
    fallback_origin: str = "https://feedback.app"

    qr_service_url: str = "https://chart.googleapis.com/chart"
    qr_size: int = 300

    entity_id_prefix: str = "rest"

    # --- derived helpers ---
    def root_path(self) -> Path:
        return Path(self.repo_root).resolve()

    def logs_path(self) -> Path:
        return (self.root_path() / self.logs_dir).resolve()

    def abs_log_path(self) -> Path:
        return (self.root_path() / self.log_path).resolve()

    def abs_sqlite_path(self) -> Path:
        return (self.root_path() / self.sqlite_path).resolve()


@lru_cache
def get_settings() -> Settings:
    return Settings()
