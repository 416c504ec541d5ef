"""
Messages received from a Lavalink node.

This module parses raw websocket text frames into typed objects: player
position updates, node statistics and player events.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from lavalink_client.infrastructure.exceptions import (
    MessageParseError,
    UnknownEventError,
)

from .opcodes import Opcode
from .stats import RemoteStats
from .types import (
    EVENT_TRACK_END,
    EVENT_TRACK_EXCEPTION,
    EVENT_TRACK_START,
    EVENT_TRACK_STUCK,
    EVENT_WEBSOCKET_CLOSED,
)


@dataclass
class PlayerState:
    """Position information of a player at a point in time."""

    time: int
    position: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerState":
        return cls(time=int(data.get("time", 0)), position=int(data.get("position", 0)))


@dataclass
class PlayerUpdate:
    """A periodic position update for a guild's player."""

    guild_id: int
    state: PlayerState


@dataclass
class TrackStartEvent:
    guild_id: int
    track: str


@dataclass
class TrackEndEvent:
    guild_id: int
    track: str
    reason: str


@dataclass
class TrackExceptionEvent:
    guild_id: int
    track: str
    error: str


@dataclass
class TrackStuckEvent:
    guild_id: int
    track: str
    threshold_ms: int


@dataclass
class WebSocketClosedEvent:
    """The node's voice websocket to Discord was closed."""

    guild_id: int
    code: int
    reason: str
    by_remote: bool


PlayerEvent = Union[
    TrackStartEvent,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStuckEvent,
    WebSocketClosedEvent,
]


def _exception_message(data: Dict[str, Any]) -> str:
    """Extract the error text from either the v3.0 or the v3.3+ layout."""
    if "error" in data:
        return str(data["error"])
    exception = data.get("exception") or {}
    return str(exception.get("message") or exception.get("cause") or "unknown error")


def parse_event(data: Dict[str, Any]) -> PlayerEvent:
    """
    Build a typed player event from an ``op: event`` payload.

    Raises:
        UnknownEventError: If the event type is not known
        MessageParseError: If a required field is missing
    """
    event_type = data.get("type")
    try:
        guild_id = int(data["guildId"])

        if event_type == EVENT_TRACK_START:
            return TrackStartEvent(guild_id=guild_id, track=data["track"])
        if event_type == EVENT_TRACK_END:
            return TrackEndEvent(
                guild_id=guild_id, track=data["track"], reason=data.get("reason", "")
            )
        if event_type == EVENT_TRACK_EXCEPTION:
            return TrackExceptionEvent(
                guild_id=guild_id, track=data["track"], error=_exception_message(data)
            )
        if event_type == EVENT_TRACK_STUCK:
            return TrackStuckEvent(
                guild_id=guild_id,
                track=data["track"],
                threshold_ms=int(data.get("thresholdMs", 0)),
            )
        if event_type == EVENT_WEBSOCKET_CLOSED:
            return WebSocketClosedEvent(
                guild_id=guild_id,
                code=int(data.get("code", 0)),
                reason=data.get("reason", ""),
                by_remote=bool(data.get("byRemote", False)),
            )
    except (KeyError, TypeError, ValueError) as e:
        raise MessageParseError(f"Malformed {event_type} payload: {e}") from e

    raise UnknownEventError(f"Unknown event type: {event_type}")


def parse_message(
    raw: Union[str, bytes],
) -> Tuple[Opcode, Union[PlayerUpdate, RemoteStats, PlayerEvent, Dict[str, Any]]]:
    """
    Parse a websocket text frame received from a node.

    Returns:
        The opcode and its typed payload. Unknown opcodes return the raw dict.

    Raises:
        MessageParseError: If the frame is not a JSON object or is malformed
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MessageParseError(f"Invalid JSON from node: {e}") from e

    if not isinstance(data, dict):
        raise MessageParseError(f"Expected a JSON object, got {type(data).__name__}")

    opcode = Opcode.from_str(data.get("op", ""))

    if opcode == Opcode.PLAYER_UPDATE:
        try:
            guild_id = int(data["guildId"])
            state: Optional[Dict[str, Any]] = data.get("state") or {}
            update = PlayerUpdate(guild_id=guild_id, state=PlayerState.from_dict(state))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MessageParseError(f"Malformed playerUpdate payload: {e}") from e
        return opcode, update

    if opcode == Opcode.STATS:
        try:
            return opcode, RemoteStats.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            raise MessageParseError(f"Malformed stats payload: {e}") from e

    if opcode == Opcode.EVENT:
        return opcode, parse_event(data)

    return opcode, data
