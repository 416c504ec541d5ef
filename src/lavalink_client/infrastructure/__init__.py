"""
Infrastructure components for the Lavalink client.

This package contains infrastructure concerns including:
- Environment-aware logging setup
- Custom exception definitions
"""

from .logging import setup_logging, get_logger
from .logging_manager import LoggingManager, Environment
from .exceptions import (
    LavalinkError,
    ConfigurationError,
    NetworkError,
    WebSocketError,
    NodeNotConnectedError,
    RestError,
    MessageParseError,
    UnknownEventError,
    TrackDecodeError,
    PlayerError,
    PlayerAlreadyExistsError,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "LoggingManager",
    "Environment",
    # Exceptions
    "LavalinkError",
    "ConfigurationError",
    "NetworkError",
    "WebSocketError",
    "NodeNotConnectedError",
    "RestError",
    "MessageParseError",
    "UnknownEventError",
    "TrackDecodeError",
    "PlayerError",
    "PlayerAlreadyExistsError",
]
