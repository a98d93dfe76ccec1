"""
Application settings.

Settings are read once from the environment (and an optional .env file next
to this module) into an immutable value that is passed to the components
that need it. Nothing reads os.environ after start-up.

Environment variables:
- APP_ENV (fallback ENVIRONMENT): development, test or production
- SUPABASE_URL / SUPABASE_KEY: storage credentials (server-side key)
- MEDIA_BASE_URL: absolute prefix for media paths (optional)
- MEDIA_BUCKET: Supabase storage bucket used when MEDIA_BASE_URL is unset
- REQUEST_TIMEOUT_SECONDS: per-request deadline for storage calls
- ENRICHMENT_WORKERS: threads used to gather order bumps, reviews, etc.
- LOG_LEVEL
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv


@dataclass(frozen=True, slots=True)
class Settings:
    app_env: str = "development"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    media_base_url: Optional[str] = None
    media_bucket: str = "public"
    request_timeout_seconds: float = 10.0
    enrichment_workers: int = 5
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() in {"production", "prod"}

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() in {"development", "dev"}

    @property
    def is_test(self) -> bool:
        return self.app_env.lower() in {"test", "testing"}

    def media_base(self) -> str:
        """
        Base URL that relative media paths are appended to.

        Falls back to the Supabase public storage URL for MEDIA_BUCKET.
        Always ends with a slash when non-empty.
        """

        base = self.media_base_url
        if not base and self.supabase_url:
            base = f"{self.supabase_url.rstrip('/')}/storage/v1/object/public/{self.media_bucket}"
        if not base:
            return ""
        return base if base.endswith("/") else base + "/"


def _env(environ: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    value = environ.get(key)
    if value is None or value.strip() == "":
        return default
    return value.strip()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    When environ is None, the .env file beside this module is loaded first
    and os.environ is used.
    """

    if environ is None:
        load_dotenv(dotenv_path=Path(__file__).parent / ".env")
        environ = os.environ

    app_env = _env(environ, "APP_ENV") or _env(environ, "ENVIRONMENT", "development")

    try:
        timeout = float(_env(environ, "REQUEST_TIMEOUT_SECONDS", "10"))
    except ValueError as exc:
        raise RuntimeError("REQUEST_TIMEOUT_SECONDS must be a number of seconds") from exc

    try:
        workers = int(_env(environ, "ENRICHMENT_WORKERS", "5"))
    except ValueError as exc:
        raise RuntimeError("ENRICHMENT_WORKERS must be an integer") from exc

    if timeout <= 0:
        raise RuntimeError("REQUEST_TIMEOUT_SECONDS must be positive")
    if workers < 1:
        raise RuntimeError("ENRICHMENT_WORKERS must be at least 1")

    return Settings(
        app_env=app_env.lower(),
        supabase_url=_env(environ, "SUPABASE_URL"),
        supabase_key=_env(environ, "SUPABASE_KEY"),
        media_base_url=_env(environ, "MEDIA_BASE_URL"),
        media_bucket=_env(environ, "MEDIA_BUCKET", "public"),
        request_timeout_seconds=timeout,
        enrichment_workers=workers,
        log_level=_env(environ, "LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


__all__ = ["Settings", "load_settings", "configure_logging"]
