"""API configuration loaded from environment variables."""
from pathlib import Path

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """API configuration loaded from environment variables.

    Attributes:
        host: Bind address for the API server.
        port: Port number for the API server.
        debug: Enable debug mode and API documentation.
        cors_origins_raw: Raw comma-separated CORS origins string.
        content_root: Directory holding the markdown document tree.
        docs_base_url: Site route that renders a single document.
        http_timeout: Seconds before an outbound request is abandoned.
        video_cache_ttl: Seconds a video metadata lookup stays cached.
        video_cache_size: Maximum number of cached video lookups.
        video_api_url: Upstream video lookup endpoint.
        user_agent: User-Agent header sent to the video upstream.
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCSITE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    cors_origins_raw: str = "http://localhost:3000"

    content_root: Path = Path("content")
    docs_base_url: str = "/docs"

    http_timeout: float = 10.0
    video_cache_ttl: float = 3600.0
    video_cache_size: int = 1024
    video_api_url: str = "https://api.bilibili.com/x/web-interface/view"
    user_agent: str = BROWSER_USER_AGENT

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string.

        Returns:
            List of allowed origin URLs.
        """
        return [
            origin.strip()
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
