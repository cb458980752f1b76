"""Application configuration."""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class DocumentSourceConfig:
    """Where the OpenAPI document comes from and how to fetch it."""

    url: str = ""
    token: str = ""  # Bearer token, optional
    timeout: int = 30
    cache_dir: Optional[str] = None  # Disk cache disabled when empty
    cache_ttl: int = 3600

    @classmethod
    def from_env(cls) -> "DocumentSourceConfig":
        """Load config from environment variables."""
        return cls(
            url=os.getenv("OPENAPI_EXPLORER_URL", ""),
            token=os.getenv("OPENAPI_EXPLORER_TOKEN", ""),
            timeout=int(os.getenv("OPENAPI_EXPLORER_TIMEOUT", "30")),
            cache_dir=os.getenv("OPENAPI_EXPLORER_CACHE_DIR") or None,
            cache_ttl=int(os.getenv("OPENAPI_EXPLORER_CACHE_TTL", "3600")),
        )


@dataclass
class AppConfig:
    """Application configuration."""

    source: DocumentSourceConfig = None
    fallback_origin: Optional[str] = None  # Used for relative server URLs
    log_level: str = "WARNING"

    def __post_init__(self):
        """Fill default values."""
        if self.source is None:
            self.source = DocumentSourceConfig()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            source=DocumentSourceConfig.from_env(),
            fallback_origin=os.getenv("OPENAPI_EXPLORER_ORIGIN") or None,
            log_level=os.getenv("OPENAPI_EXPLORER_LOG_LEVEL", "WARNING").upper(),
        )
