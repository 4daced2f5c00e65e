"""Application settings and environment loading utilities."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

DEFAULT_POH_API_BASE_URL = "https://poh-api.linea.build/poh/v2"


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    for line in env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


_load_dotenv()


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise RuntimeError(f"Environment variable {name} must be positive, got {value}")
    return value


def _optional_seconds(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise RuntimeError(f"Environment variable {name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration derived from environment variables."""

    port: int = 3000
    cache_ttl_ms: int = 300_000
    rate_limit_window_ms: int = 60_000
    rate_limit_max_requests: int = 100
    poh_api_base_url: str = DEFAULT_POH_API_BASE_URL
    # None means requests waits on the upstream indefinitely.
    poh_api_timeout_seconds: Optional[float] = None
    log_level: str = "INFO"
    service_name: str = "Linea PoH API Proxy"
    version: str = "1.0.0"

    @classmethod
    def from_env(cls) -> "Settings":
        base_url = (os.getenv("POH_API_BASE_URL") or DEFAULT_POH_API_BASE_URL).rstrip("/")

        return cls(
            port=_positive_int("PORT", 3000),
            cache_ttl_ms=_positive_int("CACHE_TTL_MS", 300_000),
            rate_limit_window_ms=_positive_int("RATE_LIMIT_WINDOW_MS", 60_000),
            rate_limit_max_requests=_positive_int("RATE_LIMIT_MAX_REQUESTS", 100),
            poh_api_base_url=base_url,
            poh_api_timeout_seconds=_optional_seconds("POH_API_TIMEOUT_SECONDS"),
            log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        )


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings.from_env()
