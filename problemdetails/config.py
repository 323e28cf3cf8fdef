"""Response layer configuration."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Settings for rendering problem documents as HTTP responses.

    Read from ``PROBLEM_*`` environment variables (or ``.env``); other keys
    belong to the host application and are ignored.
    """

    # Media types (RFC 7807 section 6)
    JSON_MEDIA_TYPE: str = "application/problem+json"
    XML_MEDIA_TYPE: str = "application/problem+xml"

    # Prepend <?xml version="1.0" encoding="UTF-8"?> to XML response bodies.
    XML_DECLARATION: bool = False

    # Status line used when a problem carries a status HTTP cannot send (e.g. 0).
    FALLBACK_HTTP_STATUS: int = 500

    class Config:
        env_prefix = "PROBLEM_"
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
