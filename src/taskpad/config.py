# src/taskpad/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (server and console client).
- Nothing required at import time: every value has a local default.
- Accept the bare PORT / DATABASE_URL names used by hosting platforms.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

ENV_PREFIX = "TASKPAD"

SQLITE_SCHEME = "sqlite"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def sqlite_path_from_url(url: str) -> Path:
    """
    Resolve a store connection string to a SQLite file path.

    Accepted forms:
    - sqlite:///relative/path.sqlite3
    - sqlite:////absolute/path.sqlite3
    - a plain filesystem path (no scheme)
    """
    raw = (url or "").strip()
    if not raw:
        raise ValueError("Store URL is empty.")

    if "://" not in raw:
        return Path(raw).expanduser()

    parts = urlsplit(raw)
    if parts.scheme != SQLITE_SCHEME:
        raise ValueError(f"Unsupported store URL scheme: {parts.scheme!r} (expected 'sqlite').")

    # sqlite:///x -> path "/x" (relative "x"); sqlite:////x -> path "//x" (absolute "/x")
    path = parts.path[1:] if parts.path.startswith("/") else parts.path
    if not path:
        raise ValueError(f"Store URL has no database path: {raw!r}")
    return Path(path).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- HTTP server ----
    host: str
    port: int
    cors_origins: list[str]

    # ---- Store ----
    data_dir: Path
    store_url: str

    # ---- Console client ----
    api_base_url: str
    theme: str

    @property
    def tasks_db_path(self) -> Path:
        return sqlite_path_from_url(self.store_url)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskpad") or "taskpad"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        host = _env(_k("HOST"), "127.0.0.1")
        # Prefer the prefixed name; fall back to the platform-wide PORT.
        port = _env_int(_k("PORT"), _env_int("PORT", 5000))
        cors_origins = _env_list(_k("CORS_ORIGINS"), ["*"])

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskpad"))
        store_url = _first_env(
            _k("STORE_URL"),
            "DATABASE_URL",
            default=f"{SQLITE_SCHEME}:///{(data_dir / 'tasks.sqlite3').as_posix()}",
        ) or ""

        api_base_url = _env(_k("API_URL"), f"http://localhost:{port}/api/tasks")
        theme = _env(_k("THEME"), "light").strip().lower() or "light"

        return Settings(
            app_name=app_name,
            log_level=log_level,
            host=host,
            port=port,
            cors_origins=cors_origins,
            data_dir=data_dir,
            store_url=store_url.strip(),
            api_base_url=api_base_url.strip(),
            theme=theme,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
