"""
Custom exceptions for the Lavalink client.

This module defines all custom exceptions used throughout the client,
providing clear error categorization and handling.
"""

from typing import Optional


class LavalinkError(Exception):
    """Base exception for all Lavalink client related errors."""

    pass


class ConfigurationError(LavalinkError):
    """Raised when there are configuration-related errors."""

    pass


class NetworkError(LavalinkError):
    """Raised when there are network communication errors."""

    pass


class WebSocketError(NetworkError):
    """Raised when there are WebSocket communication errors."""

    pass


class NodeNotConnectedError(NetworkError):
    """Raised when a message is sent to a node that has no open connection."""

    pass


class RestError(NetworkError):
    """Raised when a node's REST API answers with a non-success status."""

    def __init__(self, status: int, message: Optional[str] = None):
        self.status = status
        self.message = message or f"HTTP {status}"
        super().__init__(f"Lavalink REST request failed ({status}): {self.message}")


class MessageParseError(LavalinkError):
    """Raised when a message received from a node cannot be parsed."""

    pass


class UnknownEventError(MessageParseError):
    """Raised when a node dispatches an event type the client does not know."""

    pass


class TrackDecodeError(LavalinkError):
    """Raised when a lavaplayer track blob cannot be decoded."""

    pass


class PlayerError(LavalinkError):
    """Raised when there are audio player related errors."""

    pass


class PlayerAlreadyExistsError(PlayerError):
    """Raised when a player already exists for the guild."""

    def __init__(self, guild_id: int):
        self.guild_id = guild_id
        super().__init__(f"Player already exists for guild {guild_id}")
