"""Logging configuration for the similarity crawler."""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Loggers that drown out crawl progress at DEBUG/INFO
NOISY_LOGGERS = ('asyncio', 'playwright')


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> None:
    """Configure the root logger for the CLI and embedding services.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional log file path, parent directories are created
        format_string: Optional custom format string
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=numeric_level,
        format=format_string or DEFAULT_FORMAT,
        handlers=handlers,
        force=True  # Override any existing configuration
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


class CrawlLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the id of the crawl that emitted it."""

    def process(self, msg, kwargs):
        return f"[crawl {self.extra['crawl_id']}] {msg}", kwargs


def get_crawl_logger(name: str, crawl_id: str) -> CrawlLoggerAdapter:
    """Get a logger bound to one crawl.

    Args:
        name: Logger name (usually __name__)
        crawl_id: Short id shared by all log lines of one crawl

    Returns:
        Adapter that tags each record with the crawl id
    """
    return CrawlLoggerAdapter(logging.getLogger(name), {"crawl_id": crawl_id})
