"""
Browser configuration for the Playwright session pool.

This module provides a validated Pydantic configuration model for the browser
process and the isolated contexts created for each crawl, plus pre-configured
instances for common use cases.
"""
import random
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# User agent pool for rotation
USER_AGENTS = [
    # Chrome on Windows
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    # Chrome on Mac
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    # Firefox on Windows
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
    # Safari on Mac
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.2 Safari/605.1.15",
]


def get_random_user_agent() -> str:
    """Get a random user agent from the pool."""
    return random.choice(USER_AGENTS)


class BrowserConfig(BaseModel):
    """
    Configuration for the browser behind the session pool.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    model_config = ConfigDict(validate_assignment=True)

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode (no visible UI)"
    )

    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to launch"
    )

    launch_args: List[str] = Field(
        default_factory=list,
        description="Additional browser launch arguments (e.g., '--disable-http2')"
    )

    user_agent: Optional[str] = Field(
        default=None,
        description="Custom user agent. If None and rotate_user_agent=True, a random one is used."
    )

    rotate_user_agent: bool = Field(
        default=False,
        description="Pick a random user agent for each new context"
    )

    locale: str = Field(
        default="en-US",
        description="Locale reported by each context"
    )

    timezone_id: str = Field(
        default="America/New_York",
        description="Timezone reported by each context"
    )

    ignore_https_errors: bool = Field(
        default=True,
        description="Accept invalid TLS certificates on the target site"
    )

    default_timeout_ms: int = Field(
        default=30000,
        description="Default timeout for context operations in milliseconds",
        ge=1000,
        le=300000
    )

    def get_user_agent(self) -> Optional[str]:
        """Get the user agent to use for a new context (None keeps the browser's own)."""
        if self.user_agent:
            return self.user_agent
        if self.rotate_user_agent:
            return get_random_user_agent()
        return None

    def context_options(self) -> dict[str, Any]:
        """Keyword arguments for browser.new_context()."""
        options: dict[str, Any] = {
            "ignore_https_errors": self.ignore_https_errors,
            "locale": self.locale,
            "timezone_id": self.timezone_id,
            "java_script_enabled": True,
        }
        user_agent = self.get_user_agent()
        if user_agent:
            options["user_agent"] = user_agent
        return options

    def launch_options(self) -> dict[str, Any]:
        """Keyword arguments for browser_type.launch()."""
        options: dict[str, Any] = {"headless": self.headless}
        if self.launch_args:
            options["args"] = self.launch_args
        return options


# --- Pre-configured Instances for Common Use Cases ---

DEFAULT_CONFIG = BrowserConfig()
"""
Headless Chromium with the browser's own user agent.
"""

HEADED_CONFIG = BrowserConfig(
    headless=False,
    default_timeout_ms=60000,
)
"""
Visible browser for debugging selector or layout problems on the target page.
"""

CONTAINER_CONFIG = BrowserConfig(
    headless=True,
    launch_args=[
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
    ],
)
"""
Headless Chromium with flags needed inside Docker and similar sandboxes.
"""
