"""
Common types and constants for the Lavalink client.

This module centralizes wire constants, header names and environment
variable names to avoid hardcoding throughout the codebase.
"""

from typing import Final

# Handshake Header Names
HEADER_AUTHORIZATION: Final[str] = "Authorization"
HEADER_USER_ID: Final[str] = "User-Id"
HEADER_NUM_SHARDS: Final[str] = "Num-Shards"
HEADER_CLIENT_NAME: Final[str] = "Client-Name"
HEADER_RESUME_KEY: Final[str] = "Resume-Key"

# REST Routes
REST_LOAD_TRACKS: Final[str] = "/loadtracks"
REST_DECODE_TRACK: Final[str] = "/decodetrack"
REST_DECODE_TRACKS: Final[str] = "/decodetracks"

# Event Types (payload "type" of an "event" op)
EVENT_TRACK_START: Final[str] = "TrackStartEvent"
EVENT_TRACK_END: Final[str] = "TrackEndEvent"
EVENT_TRACK_EXCEPTION: Final[str] = "TrackExceptionEvent"
EVENT_TRACK_STUCK: Final[str] = "TrackStuckEvent"
EVENT_WEBSOCKET_CLOSED: Final[str] = "WebSocketClosedEvent"

# Environment Variable Names (from .env file)
ENV_LAVALINK_HOST: Final[str] = "LAVALINK_HOST"
ENV_LAVALINK_PORT: Final[str] = "LAVALINK_PORT"
ENV_LAVALINK_PASSWORD: Final[str] = "LAVALINK_PASSWORD"
ENV_LAVALINK_SECURE: Final[str] = "LAVALINK_SECURE"
ENV_LAVALINK_USER_ID: Final[str] = "LAVALINK_USER_ID"
ENV_LAVALINK_NUM_SHARDS: Final[str] = "LAVALINK_NUM_SHARDS"
ENV_LAVALINK_NODE_ID: Final[str] = "LAVALINK_NODE_ID"
ENV_LAVALINK_CLIENT_NAME: Final[str] = "LAVALINK_CLIENT_NAME"
ENV_LAVALINK_RESUME_KEY: Final[str] = "LAVALINK_RESUME_KEY"
ENV_LAVALINK_MAX_RETRIES: Final[str] = "LAVALINK_MAX_RETRIES"
ENV_LAVALINK_RETRY_DELAY: Final[str] = "LAVALINK_RETRY_DELAY"
ENV_LOG_LEVEL: Final[str] = "LOG_LEVEL"

# Default Values
DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 2333
DEFAULT_NODE_ID: Final[str] = "main"
DEFAULT_CLIENT_NAME: Final[str] = "lavalink-client"
DEFAULT_VOLUME: Final[int] = 100
MIN_VOLUME: Final[int] = 0
MAX_VOLUME: Final[int] = 1000
