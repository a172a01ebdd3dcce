"""Raw content sources for tilegrid-core.

1. SimulatedContentSource:
   Generated tiles served from memory with a fake delay
2. HttpContentSource:
   Tiles fetched from a remote tiles endpoint
"""

from .simulated import SimulatedContentSource
from .http import HttpContentSource
from .factory import create_content_source

__all__ = [
    "SimulatedContentSource",
    "HttpContentSource",
    "create_content_source",
]
