from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    ats_server_url: str
    ats_request_timeout_s: float
    ats_upload_delay_s: float
    ats_max_upload_bytes: int
    rate_limit: str
    rate_limit_enabled: bool
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    onboarding_default_return_to: str
    scoring_config_path: str | None


settings = Settings(
    ats_server_url=(_get_env("ATS_SERVER_URL", "http://localhost:5000") or "http://localhost:5000").rstrip("/"),
    ats_request_timeout_s=_get_env_float("ATS_REQUEST_TIMEOUT_S", 20.0),
    ats_upload_delay_s=_get_env_float("ATS_UPLOAD_DELAY_S", 1.5),
    ats_max_upload_bytes=_get_env_int("ATS_MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
    rate_limit=_get_env("RATE_LIMIT", "60/minute") or "60/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://[::1]:3000",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX", r"^https:\/\/[a-z0-9-]+-.*\.vercel\.app$"),
    cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
    onboarding_default_return_to=_get_env("ONBOARDING_DEFAULT_RETURN_TO", "/dashboard") or "/dashboard",
    scoring_config_path=_get_env("SCORING_CONFIG_PATH"),
)

if settings.ats_request_timeout_s <= 0:
    raise RuntimeError("ATS_REQUEST_TIMEOUT_S must be a positive number of seconds.")

if settings.ats_upload_delay_s < 0:
    raise RuntimeError("ATS_UPLOAD_DELAY_S must not be negative.")

if not settings.onboarding_default_return_to.startswith("/"):
    raise RuntimeError("ONBOARDING_DEFAULT_RETURN_TO must be a site-relative path such as '/dashboard'.")
