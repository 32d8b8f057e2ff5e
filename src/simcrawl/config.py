from dotenv import load_dotenv
from dataclasses import dataclass
from pathlib import Path
import json
import os

from .constants import (
    DEFAULT_ACQUIRE_TIMEOUT_SECONDS,
    DEFAULT_DEADLINE_SECONDS,
    DEFAULT_INTERACTION_TIMEOUT_MS,
    DEFAULT_MAX_SESSIONS,
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    MAX_TEXT_LENGTH,
    MIN_TEXT_LENGTH,
)

load_dotenv()  # Loads variables from .env file


class Settings:
    """
    Manages application settings loaded from environment variables.
    """
    HEADLESS = os.getenv("SIMCRAWL_HEADLESS", "true").lower() not in ("0", "false", "no")
    BROWSER_TYPE = os.getenv("SIMCRAWL_BROWSER_TYPE", "chromium")
    USER_AGENT = os.getenv("SIMCRAWL_USER_AGENT")
    LOG_LEVEL = os.getenv("SIMCRAWL_LOG_LEVEL", "INFO")
    LOG_FILE = os.getenv("SIMCRAWL_LOG_FILE")


settings = Settings()


@dataclass
class CrawlerConfig:
    """Tunables for the crawl pipeline and session pool."""

    target: str = "plagium"
    default_deadline_seconds: float = DEFAULT_DEADLINE_SECONDS
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS
    interaction_timeout_ms: int = DEFAULT_INTERACTION_TIMEOUT_MS
    max_sessions: int = DEFAULT_MAX_SESSIONS
    acquire_timeout_seconds: float = DEFAULT_ACQUIRE_TIMEOUT_SECONDS
    min_text_length: int = MIN_TEXT_LENGTH
    max_text_length: int = MAX_TEXT_LENGTH

    @classmethod
    def from_env(cls) -> "CrawlerConfig":
        """Load configuration from environment variables.

        Environment variables are prefixed with SIMCRAWL_
        e.g., SIMCRAWL_MAX_SESSIONS=8

        Returns:
            CrawlerConfig with values from environment
        """
        config = cls()
        prefix = "SIMCRAWL_"

        for field_name in config.__dataclass_fields__:
            env_key = f"{prefix}{field_name.upper()}"
            env_value = os.getenv(env_key)

            if env_value is not None:
                field_type = config.__dataclass_fields__[field_name].type
                try:
                    if field_type == int:
                        setattr(config, field_name, int(env_value))
                    elif field_type == float:
                        setattr(config, field_name, float(env_value))
                    else:
                        setattr(config, field_name, env_value)
                except ValueError:
                    pass  # Keep default if conversion fails

        return config

    @classmethod
    def from_file(cls, path: str) -> "CrawlerConfig":
        """Load configuration from a JSON file.

        Keys may sit at the top level or under a "crawler" object. A missing
        file yields the defaults.

        Args:
            path: Path to JSON configuration file

        Returns:
            CrawlerConfig with values from file
        """
        config = cls()
        file_path = Path(path)

        if not file_path.exists():
            return config

        with open(file_path, 'r') as f:
            data = json.load(f)

        crawler_config = data.get('crawler', data)

        for field_name in config.__dataclass_fields__:
            if field_name in crawler_config:
                setattr(config, field_name, crawler_config[field_name])

        return config

    def to_dict(self) -> dict:
        """Convert configuration to dictionary.

        Returns:
            Dictionary of all configuration values
        """
        return {
            field_name: getattr(self, field_name)
            for field_name in self.__dataclass_fields__
        }

