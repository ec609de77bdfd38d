"""
Environment-driven settings.

Everything is read from environment variables at call time, so tests can
monkeypatch the environment without reloading modules.
"""

from __future__ import annotations

import os
import ssl

DEFAULT_PORT = 3000
DEFAULT_HOST = "0.0.0.0"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def port() -> int:
    return _env_int("PORT", DEFAULT_PORT)


def host() -> str:
    return os.environ.get("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST


def app_env() -> str:
    return os.environ.get("APP_ENV", "development").strip().lower() or "development"


def is_production() -> bool:
    return app_env() == "production"


def log_level() -> str:
    return os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def cors_allow_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*")
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or ["*"]


def pool_min_size() -> int:
    # 0 keeps pool creation lazy: no connection is opened until first use.
    return max(0, _env_int("DB_POOL_MIN_SIZE", 0))


def pool_max_size() -> int:
    return max(1, _env_int("DB_POOL_MAX_SIZE", 10), pool_min_size())


def command_timeout() -> float:
    timeout = _env_float("DB_COMMAND_TIMEOUT", 30.0)
    return timeout if timeout > 0 else 30.0


def database_ssl() -> ssl.SSLContext | str:
    """
    Transport security for the pool.

    Production connects over TLS without verifying the server certificate
    (managed Postgres hosts commonly present certificates that do not chain
    to a public CA). Everywhere else TLS is off.
    """
    if not is_production():
        return "disable"
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context
