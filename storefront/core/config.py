"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_ENVIRONMENT = "development"
DEFAULT_DATABASE_URL = "sqlite:///./storefront.db"
DEFAULT_UPLOAD_FOLDER = "products"
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024
DEFAULT_MAX_UPLOAD_FILES = 10
DEFAULT_KEEPALIVE_INTERVAL_SECONDS = 14 * 60.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 10.0
DEFAULT_ALLOWED_ORIGINS = ("http://localhost:3000",)

PRODUCTION_ENVIRONMENT = "production"


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(item.strip().rstrip("/") for item in raw.split(",") if item.strip())


def load_allowed_origins() -> tuple[str, ...]:
    """Configured CORS origins plus the storefront frontend URL, if set."""
    origins = _get_list_env("STOREFRONT_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS)
    frontend_url = os.getenv("FRONTEND_URL", "").strip().rstrip("/")
    if frontend_url and frontend_url not in origins:
        origins = (*origins, frontend_url)
    return origins


def redact_secret(secret: str) -> str:
    """Return a non-recoverable placeholder for sensitive values."""
    if not secret:
        return "<empty>"
    return "<redacted>"


@dataclass(frozen=True)
class CloudinarySettings:
    """Credentials for the hosted image service."""

    cloud_name: str = ""
    api_key: str = ""
    api_secret: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the storefront API."""

    environment: str = DEFAULT_ENVIRONMENT
    database_url: str = DEFAULT_DATABASE_URL
    cloudinary: CloudinarySettings = CloudinarySettings()
    upload_folder: str = DEFAULT_UPLOAD_FOLDER
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_upload_files: int = DEFAULT_MAX_UPLOAD_FILES
    keepalive_url: str = ""
    keepalive_interval_seconds: float = DEFAULT_KEEPALIVE_INTERVAL_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    allowed_origins: tuple[str, ...] = DEFAULT_ALLOWED_ORIGINS

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == PRODUCTION_ENVIRONMENT

    def safe_for_logging(self) -> dict[str, str | int | float | bool]:
        """Return settings safe for logs."""
        return {
            "environment": self.environment,
            "database_url": self.database_url.split("@")[-1],
            "cloudinary_cloud_name": self.cloudinary.cloud_name,
            "cloudinary_api_key": redact_secret(self.cloudinary.api_key),
            "cloudinary_api_secret": redact_secret(self.cloudinary.api_secret),
            "upload_folder": self.upload_folder,
            "max_upload_bytes": self.max_upload_bytes,
            "max_upload_files": self.max_upload_files,
            "keepalive_enabled": bool(self.keepalive_url),
            "keepalive_interval_seconds": self.keepalive_interval_seconds,
            "http_timeout_seconds": self.http_timeout_seconds,
            "allowed_origins": ",".join(self.allowed_origins),
        }


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        environment=os.getenv("STOREFRONT_ENV", DEFAULT_ENVIRONMENT),
        database_url=os.getenv("STOREFRONT_DATABASE_URL", DEFAULT_DATABASE_URL),
        cloudinary=CloudinarySettings(
            cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
            api_key=os.getenv("CLOUDINARY_API_KEY", ""),
            api_secret=os.getenv("CLOUDINARY_API_SECRET", ""),
        ),
        upload_folder=os.getenv("STOREFRONT_UPLOAD_FOLDER", DEFAULT_UPLOAD_FOLDER),
        max_upload_bytes=_get_int_env("STOREFRONT_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
        max_upload_files=_get_int_env("STOREFRONT_MAX_UPLOAD_FILES", DEFAULT_MAX_UPLOAD_FILES),
        keepalive_url=os.getenv("STOREFRONT_KEEPALIVE_URL", ""),
        keepalive_interval_seconds=_get_float_env(
            "STOREFRONT_KEEPALIVE_INTERVAL_SECONDS",
            DEFAULT_KEEPALIVE_INTERVAL_SECONDS,
        ),
        http_timeout_seconds=_get_float_env("STOREFRONT_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        allowed_origins=load_allowed_origins(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from the environment once per process."""
    return load_settings()
