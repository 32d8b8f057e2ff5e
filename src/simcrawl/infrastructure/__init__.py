"""
Infrastructure Package.

Provides the bounded pool of isolated browser sessions used by every crawl.
"""

from .session_pool import (
    SessionPool,
    PoolStatus,
)

__all__ = [
    "SessionPool",
    "PoolStatus",
]
