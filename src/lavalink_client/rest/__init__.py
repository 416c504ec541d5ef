"""
REST API components for the Lavalink client.
"""

from .client import RestClient
from .models import (
    LoadException,
    LoadResult,
    LoadType,
    LoadedTrack,
    LoadedTrackInfo,
    PlaylistInfo,
)

__all__ = [
    "RestClient",
    "LoadException",
    "LoadResult",
    "LoadType",
    "LoadedTrack",
    "LoadedTrackInfo",
    "PlaylistInfo",
]
