"""
Crawl Targets Package.

Each target encapsulates one external page's interaction protocol behind
the CrawlTarget contract.

Usage:
    from simcrawl.targets import get_target

    target = get_target("plagium")
"""

from .base import (
    CrawlTarget,
    TargetSelectors,
    Viewport,
    parse_count,
    parse_percent,
)
from .plagium import PlagiumTarget

_TARGETS: dict[str, type[CrawlTarget]] = {}


def register_target(target_cls: type[CrawlTarget]) -> type[CrawlTarget]:
    """
    Register a target class under its name. Usable as a class decorator.

    Raises:
        ValueError: If the class has no name or the name is taken
    """
    name = target_cls.name.lower()
    if not name:
        raise ValueError(f"{target_cls.__name__} must define a name")
    if name in _TARGETS and _TARGETS[name] is not target_cls:
        raise ValueError(f"Crawl target already registered: {name}")

    _TARGETS[name] = target_cls
    return target_cls


def get_target(name: str = "plagium") -> CrawlTarget:
    """
    Get a crawl target instance.

    Args:
        name: Registered target name

    Returns:
        Target instance

    Raises:
        ValueError: If no target is registered under that name
    """
    target_cls = _TARGETS.get(name.lower())
    if target_cls is None:
        raise ValueError(f"Unknown crawl target: {name}")
    return target_cls()


def available_targets() -> list[CrawlTarget]:
    """All registered targets, sorted by name."""
    return [_TARGETS[name]() for name in sorted(_TARGETS)]


register_target(PlagiumTarget)

__all__ = [
    "CrawlTarget",
    "TargetSelectors",
    "Viewport",
    "PlagiumTarget",
    "parse_count",
    "parse_percent",
    "register_target",
    "get_target",
    "available_targets",
]
