"""Configuration loading and validation"""
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from .models import PushoverCredentials
from .utils.logger import setup_logger

logger = setup_logger(__name__)

# Load optional tunables from a .env file
load_dotenv()

DEFAULT_POLL_INTERVAL_MS = 100
DEFAULT_PUSHOVER_API_URL = "https://api.pushover.net/1/messages.json"


class Config:
    """Application configuration

    The watch directory and push credentials come from the command line;
    everything else is an optional environment setting.
    """

    def __init__(self, watch_dir: str, pushover_token: str, pushover_user: str):
        """
        Load and validate configuration

        Args:
            watch_dir: Directory where new mail files are delivered
            pushover_token: Pushover application token
            pushover_user: Pushover user key
        """
        self.watch_dir = Path(watch_dir).expanduser().resolve()
        self.credentials = PushoverCredentials(
            token=pushover_token.strip(),
            user=pushover_user.strip()
        )

        # Watcher settings
        self.poll_interval_ms = self._get_int("POLL_INTERVAL_MS", DEFAULT_POLL_INTERVAL_MS)

        # HTTP settings
        self.fetch_timeout = self._get_optional_float("FETCH_TIMEOUT")
        self.pushover_api_url = os.getenv("PUSHOVER_API_URL", DEFAULT_PUSHOVER_API_URL)

        self._validate()
        logger.info("Configuration loaded successfully")

    @property
    def poll_interval(self) -> float:
        """Polling cadence in seconds"""
        return self.poll_interval_ms / 1000.0

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable"""
        value = os.getenv(key, str(default))
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got '{value}'")

    def _get_optional_float(self, key: str) -> Optional[float]:
        """Get optional float environment variable"""
        value = os.getenv(key, "").strip()
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            raise ValueError(f"{key} must be a number of seconds, got '{value}'")

    def _validate(self):
        """Validate configuration values"""
        if not self.watch_dir.is_dir():
            raise ValueError(f"Watch directory {self.watch_dir} does not exist or is not a directory")

        if not self.credentials.token:
            raise ValueError("Pushover token must not be empty")

        if not self.credentials.user:
            raise ValueError("Pushover user must not be empty")

        if self.poll_interval_ms < 1:
            raise ValueError("POLL_INTERVAL_MS must be at least 1 millisecond")

        if self.fetch_timeout is not None and self.fetch_timeout <= 0:
            raise ValueError("FETCH_TIMEOUT must be positive")

        logger.info(f"Watch directory: {self.watch_dir}")
        logger.info(f"Poll interval: {self.poll_interval_ms} ms")
        if self.fetch_timeout:
            logger.info(f"Fetch timeout: {self.fetch_timeout} s")
        else:
            logger.info("Fetch timeout: none")
