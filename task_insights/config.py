from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

def _resolve_project_root() -> Path:
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


PROJECT_ROOT = _resolve_project_root()


def load_env() -> None:
    env_name = os.getenv("APP_ENV", "development")
    candidates = [Path.cwd(), PROJECT_ROOT]
    for base in candidates:
        env_path = base / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            break

    for base in candidates:
        env_specific = base / f".env.{env_name}"
        if env_specific.exists():
            load_dotenv(env_specific, override=True)
            break


@dataclass(frozen=True)
class Settings:
    database_url: str
    log_level: str = "INFO"
    log_dir: str = "logs"
    search_history_key: str = "task-insights-search-history"
    search_history_limit: int = 10
    productivity_timeframe_days: int = 30
    week_start: int = 6


load_env()

DATABASE_URL = os.getenv("DATABASE_URL", "").strip() or f"sqlite:///{PROJECT_ROOT / 'task_insights.db'}"

SETTINGS = Settings(
    database_url=DATABASE_URL,
    log_level=os.getenv("LOG_LEVEL", "INFO"),
    log_dir=os.getenv("LOG_DIR", "logs"),
    search_history_key=os.getenv("SEARCH_HISTORY_KEY", "").strip() or "task-insights-search-history",
    search_history_limit=int(os.getenv("SEARCH_HISTORY_LIMIT", "10")),
    productivity_timeframe_days=int(os.getenv("PRODUCTIVITY_TIMEFRAME_DAYS", "30")),
    week_start=int(os.getenv("WEEK_START", "6")),
)
