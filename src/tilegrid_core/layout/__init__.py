"""Layout engine for the masonry grid.

This module provides the column packing strategies and lookup by name, so
the strategy used for each growth direction can be chosen in configuration.
"""

from typing import Dict, Type

from ..interfaces import AppendStrategy, PrependStrategy
from .strategies import (
    ShortestColumnPacking,
    ReverseRoundRobinPacking,
    TallestTopPacking,
    seed_frontiers,
    seed_tops,
)

APPEND_STRATEGIES: Dict[str, Type[AppendStrategy]] = {
    ShortestColumnPacking.name: ShortestColumnPacking,
}

PREPEND_STRATEGIES: Dict[str, Type[PrependStrategy]] = {
    ReverseRoundRobinPacking.name: ReverseRoundRobinPacking,
    TallestTopPacking.name: TallestTopPacking,
}


def get_append_strategy(name: str) -> AppendStrategy:
    """Create the append strategy registered under name."""
    key = name.lower()
    if key not in APPEND_STRATEGIES:
        raise ValueError(f"Unknown append strategy: {name}. "
                         f"Valid strategies: {', '.join(APPEND_STRATEGIES)}")
    return APPEND_STRATEGIES[key]()


def get_prepend_strategy(name: str) -> PrependStrategy:
    """Create the prepend strategy registered under name."""
    key = name.lower()
    if key not in PREPEND_STRATEGIES:
        raise ValueError(f"Unknown prepend strategy: {name}. "
                         f"Valid strategies: {', '.join(PREPEND_STRATEGIES)}")
    return PREPEND_STRATEGIES[key]()


__all__ = [
    "ShortestColumnPacking",
    "ReverseRoundRobinPacking",
    "TallestTopPacking",
    "seed_frontiers",
    "seed_tops",
    "APPEND_STRATEGIES",
    "PREPEND_STRATEGIES",
    "get_append_strategy",
    "get_prepend_strategy",
]
