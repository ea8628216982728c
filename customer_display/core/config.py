"""Customer Display Configuration"""

from functools import lru_cache

import httpx
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Display settings loaded from environment"""

    # POS API
    api_base_url: str = "https://pos-candy-kush.vercel.app/api"

    # Polling
    poll_interval_seconds: float = 2.0

    # Each phase of a request is bounded independently
    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 10.0
    write_timeout_seconds: float = 10.0
    pool_timeout_seconds: float = 10.0

    class Config:
        env_prefix = "CUSTOMER_DISPLAY_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def http_timeout(self) -> httpx.Timeout:
        """Request timeout built from the per-phase settings"""
        return httpx.Timeout(
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
            write=self.write_timeout_seconds,
            pool=self.pool_timeout_seconds,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
