"""
Lavalink Client - async Python client for Lavalink audio nodes.

This package talks to Lavalink (v3 protocol) nodes over their websocket and
REST APIs, so that a Discord bot can offload audio streaming and transcoding
to a standalone server.

Key Features:
- Websocket node connection with automatic reconnection
- Per-guild audio players with event listeners
- Track loading and decoding over REST
- Local decoding of lavaplayer track blobs
- Load balancing across several nodes
- discord.py voice integration

Architecture:
- Core: Protocol model, track decoder, players and node manager
- Websockets: Node connection and message handlers
- Rest: REST API client and models
- Integrations: discord.py voice protocol
- Config: Configuration management
- Infrastructure: Logging and exceptions
"""

__version__ = "0.3.0"
__author__ = "Lavalink Client Team"

# Core components
from .core.opcodes import Opcode
from .core.model import Destroy, Pause, Play, Seek, Stop, VoiceUpdate, Volume
from .core.stats import RemoteStats
from .core.decoder import DecodedTrack, decode_track, decode_track_base64
from .core.listener import AudioPlayerListener
from .core.player import AudioPlayer, AudioPlayerManager
from .core.node_manager import NodeManager

# Networking components
from .websockets.client import LavalinkNode
from .rest import RestClient, LoadResult, LoadType, LoadedTrack, LoadedTrackInfo

# Integrations
from .integrations import LavalinkVoiceClient

# Configuration
from .config import LavalinkConfig, ConfigManager, config_manager

# Infrastructure
from .infrastructure.logging import setup_logging, get_logger
from .infrastructure.exceptions import (
    LavalinkError,
    ConfigurationError,
    NetworkError,
    WebSocketError,
    NodeNotConnectedError,
    RestError,
    MessageParseError,
    TrackDecodeError,
    PlayerError,
    PlayerAlreadyExistsError,
)

__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core components
    "Opcode",
    "Destroy",
    "Pause",
    "Play",
    "Seek",
    "Stop",
    "VoiceUpdate",
    "Volume",
    "RemoteStats",
    "DecodedTrack",
    "decode_track",
    "decode_track_base64",
    "AudioPlayerListener",
    "AudioPlayer",
    "AudioPlayerManager",
    "NodeManager",
    # Networking components
    "LavalinkNode",
    "RestClient",
    "LoadResult",
    "LoadType",
    "LoadedTrack",
    "LoadedTrackInfo",
    # Integrations
    "LavalinkVoiceClient",
    # Configuration
    "LavalinkConfig",
    "ConfigManager",
    "config_manager",
    # Infrastructure
    "setup_logging",
    "get_logger",
    "LavalinkError",
    "ConfigurationError",
    "NetworkError",
    "WebSocketError",
    "NodeNotConnectedError",
    "RestError",
    "MessageParseError",
    "TrackDecodeError",
    "PlayerError",
    "PlayerAlreadyExistsError",
]
