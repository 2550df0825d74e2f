from __future__ import annotations

import os
from dataclasses import dataclass

VALID_APP_ENVS = {"local", "dev", "stg", "prod"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class Settings:
    app_name: str = "wordsim"
    app_env: str = "local"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    model_path: str = ""
    model_lazy: bool = False
    cache_enabled: bool = True
    multi_max_workers: int = 0
    default_top_n: int = 10
    server_host: str = "127.0.0.1"
    server_port: int = 1234
    remote_url: str = "http://localhost:1234"
    client_timeout_seconds: float = 30.0


_settings: Settings | None = None


def _validate_settings(settings: Settings) -> None:
    if settings.app_env not in VALID_APP_ENVS:
        allowed = ", ".join(sorted(VALID_APP_ENVS))
        raise ValueError(
            f"Invalid APP_ENV '{settings.app_env}'. Expected one of: {allowed}."
        )

    if settings.log_level not in VALID_LOG_LEVELS:
        allowed = ", ".join(sorted(VALID_LOG_LEVELS))
        raise ValueError(f"LOG_LEVEL must be one of: {allowed}.")

    if settings.app_env != "local" and not settings.model_path.strip():
        raise ValueError(
            "MODEL_PATH must be set and non-empty when APP_ENV is not 'local'."
        )

    if settings.multi_max_workers < 0:
        raise ValueError("MULTI_MAX_WORKERS must be >= 0.")

    if settings.default_top_n < 0:
        raise ValueError("DEFAULT_TOP_N must be >= 0.")

    if not settings.server_host.strip():
        raise ValueError("SERVER_HOST must be set and non-empty.")

    if not 1 <= settings.server_port <= 65535:
        raise ValueError("SERVER_PORT must be between 1 and 65535.")

    remote_url = settings.remote_url.strip()
    if not (remote_url.startswith("http://") or remote_url.startswith("https://")):
        raise ValueError("REMOTE_URL must start with http:// or https://.")

    if settings.client_timeout_seconds <= 0:
        raise ValueError("CLIENT_TIMEOUT_SECONDS must be > 0.")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    global _settings

    if _settings is None:
        candidate = Settings(
            app_name=os.getenv("APP_NAME", "wordsim"),
            app_env=os.getenv("APP_ENV", "local"),
            app_version=os.getenv("APP_VERSION", "0.1.0"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            model_path=os.getenv("MODEL_PATH", ""),
            model_lazy=_env_bool("MODEL_LAZY", False),
            cache_enabled=_env_bool("CACHE_ENABLED", True),
            multi_max_workers=int(os.getenv("MULTI_MAX_WORKERS", "0")),
            default_top_n=int(os.getenv("DEFAULT_TOP_N", "10")),
            server_host=os.getenv("SERVER_HOST", "127.0.0.1"),
            server_port=int(os.getenv("SERVER_PORT", "1234")),
            remote_url=os.getenv("REMOTE_URL", "http://localhost:1234"),
            client_timeout_seconds=float(os.getenv("CLIENT_TIMEOUT_SECONDS", "30")),
        )
        _validate_settings(candidate)
        _settings = candidate

    return _settings


def clear_settings_cache() -> None:
    global _settings
    _settings = None
