"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


DEFAULT_BACKEND_URL = "http://localhost:3000"
DEFAULT_SEARCH_DEBOUNCE_MS = 300
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
DEFAULT_MONTH = 3
DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS = (10, 20, 50)


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def _int_env(name: str, default: int) -> int:
    raw_value = (get_env(name, "") or "").strip()
    if not raw_value:
        return default
    try:
        return int(raw_value)
    except ValueError:
        logger.warning("invalid_int_env name=%s value=%r default=%s", name, raw_value, default)
        return default


def _float_env(name: str, default: float) -> float:
    raw_value = (get_env(name, "") or "").strip()
    if not raw_value:
        return default
    try:
        value = float(raw_value)
    except ValueError:
        logger.warning("invalid_float_env name=%s value=%r default=%s", name, raw_value, default)
        return default
    if value <= 0:
        logger.warning("non_positive_float_env name=%s value=%r default=%s", name, raw_value, default)
        return default
    return value


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with safe environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if app_env().strip().lower() in {"dev", "local"}:
        return ["http://localhost:5173", "http://127.0.0.1:5173"]

    ui_origin = (get_env("UI_ORIGIN", "") or "").strip()
    if ui_origin:
        return [ui_origin]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS or UI_ORIGIN",
        app_env(),
    )

    return []


def catalog_backend_url() -> str:
    """Return the catalog query interface base URL without trailing slash."""
    raw_value = (get_env("CATALOG_BACKEND_URL", "") or "").strip()
    return (raw_value or DEFAULT_BACKEND_URL).rstrip("/")


def search_debounce_ms() -> int:
    """Return the search-text quiet period in milliseconds."""
    value = _int_env("CATALOG_SEARCH_DEBOUNCE_MS", DEFAULT_SEARCH_DEBOUNCE_MS)
    if value < 0:
        logger.warning("negative_search_debounce_ms value=%s default=%s", value, DEFAULT_SEARCH_DEBOUNCE_MS)
        return DEFAULT_SEARCH_DEBOUNCE_MS
    return value


def fetch_timeout_seconds() -> float:
    """Return the upper bound for a single catalog fetch."""
    return _float_env("CATALOG_FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT_SECONDS)


def default_month() -> int:
    """Return the month both controllers start on (0 means all months)."""
    value = _int_env("CATALOG_DEFAULT_MONTH", DEFAULT_MONTH)
    if not 0 <= value <= 12:
        logger.warning("invalid_default_month value=%s default=%s", value, DEFAULT_MONTH)
        return DEFAULT_MONTH
    return value


def default_page_size() -> int:
    """Return the initial page size, restricted to the supported options."""
    value = _int_env("CATALOG_DEFAULT_PAGE_SIZE", DEFAULT_PAGE_SIZE)
    if value not in PAGE_SIZE_OPTIONS:
        logger.warning("invalid_default_page_size value=%s default=%s", value, DEFAULT_PAGE_SIZE)
        return DEFAULT_PAGE_SIZE
    return value


def catalog_seed_path() -> str | None:
    """Return the JSON seed file used by the development catalog service."""
    raw_value = (get_env("CATALOG_SEED_PATH", "") or "").strip()
    return raw_value or None
