"""Application configuration settings."""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv(Path(__file__).parent.parent / ".env")


DEFAULT_SYMBOLS = ["AAPL", "MSFT", "GOOGL", "AMZN", "TSLA"]


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """Application settings loaded from environment variables.

    Built once at startup and handed to the proxy handlers; nothing reads
    the environment at request time.
    """

    def __init__(self, **overrides):
        # Twelve Data Configuration
        self.TWELVE_DATA_API_KEY: str = os.getenv(
            "TWELVE_DATA_API_KEY", os.getenv("NEXT_PUBLIC_TWELVE_DATA_API_KEY", "")
        )
        self.TWELVE_DATA_BASE_URL: str = os.getenv(
            "TWELVE_DATA_BASE_URL", "https://api.twelvedata.com"
        )
        self.HTTP_TIMEOUT: float = float(os.getenv("HTTP_TIMEOUT", "30"))

        # Dashboard Configuration
        self.STOCK_SYMBOLS: List[str] = _split_csv(os.getenv("STOCK_SYMBOLS", "")) or list(DEFAULT_SYMBOLS)
        self.REFRESH_INTERVAL: float = float(os.getenv("REFRESH_INTERVAL", "60"))

        # Server Configuration
        self.CORS_ORIGINS: List[str] = _split_csv(os.getenv("CORS_ORIGINS", "*"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def api_key_configured(self) -> bool:
        return bool(self.TWELVE_DATA_API_KEY)

    @property
    def upstream_config(self) -> dict:
        """Return keyword arguments for the upstream httpx client."""
        return {
            "base_url": self.TWELVE_DATA_BASE_URL,
            "timeout": self.HTTP_TIMEOUT,
            "follow_redirects": True,
        }
