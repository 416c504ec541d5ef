"""
Messages sent from the client to a Lavalink node.

Each message is an immutable dataclass that knows its opcode and how to
serialize itself into the camelCase JSON payload the node expects.
"""

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from .opcodes import Opcode
from .types import MAX_VOLUME, MIN_VOLUME

GuildId = Union[int, str]


def _normalize_guild_id(message: Any) -> None:
    """Store the guild id as a string; the node always expects strings."""
    object.__setattr__(message, "guild_id", str(message.guild_id))


class _Message(ABC):
    """Serialization helpers shared by every outgoing message."""

    opcode: Opcode

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """The camelCase payload sent to the node."""

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class Pause(_Message):
    """A message that modifies the pause state of a guild's player."""

    guild_id: GuildId
    pause: bool
    opcode: Opcode = field(default=Opcode.PAUSE, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"op": str(self.opcode), "guildId": self.guild_id, "pause": self.pause}


@dataclass(frozen=True)
class Play(_Message):
    """
    A message that plays an audio track through a guild's player.

    ``track`` is not a URL or song name but the base64 encoded track blob
    returned by the node's REST API. Missing start and end times are sent
    as ``0``, which the node reads as "from the beginning" and "until the
    track ends".
    """

    guild_id: GuildId
    track: str
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    no_replace: bool = False
    opcode: Opcode = field(default=Opcode.PLAY, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "op": str(self.opcode),
            "guildId": self.guild_id,
            "track": self.track,
            "startTime": self.start_time or 0,
            "endTime": self.end_time or 0,
        }
        if self.no_replace:
            payload["noReplace"] = True
        return payload


@dataclass(frozen=True)
class Seek(_Message):
    """A message that seeks a guild's player to a position in milliseconds."""

    guild_id: GuildId
    position: int
    opcode: Opcode = field(default=Opcode.SEEK, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "op": str(self.opcode),
            "guildId": self.guild_id,
            "position": self.position,
        }


@dataclass(frozen=True)
class Stop(_Message):
    """A message that stops a guild's player."""

    guild_id: GuildId
    opcode: Opcode = field(default=Opcode.STOP, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"op": str(self.opcode), "guildId": self.guild_id}


@dataclass(frozen=True)
class Destroy(_Message):
    """A message that destroys a guild's player on the node."""

    guild_id: GuildId
    opcode: Opcode = field(default=Opcode.DESTROY, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)

    def to_dict(self) -> Dict[str, Any]:
        return {"op": str(self.opcode), "guildId": self.guild_id}


@dataclass(frozen=True)
class Volume(_Message):
    """
    A message that sets the volume of a guild's player.

    The volume replaces the current setting; it is not an increment.
    """

    guild_id: GuildId
    volume: int
    opcode: Opcode = field(default=Opcode.VOLUME, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)
        if not MIN_VOLUME <= self.volume <= MAX_VOLUME:
            raise ValueError(
                f"volume must be between {MIN_VOLUME} and {MAX_VOLUME}, got {self.volume}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {"op": str(self.opcode), "guildId": self.guild_id, "volume": self.volume}


@dataclass(frozen=True)
class VoiceUpdateEvent:
    """Discord voice server data relayed inside a ``VoiceUpdate``."""

    token: str
    guild_id: str
    endpoint: str

    def to_dict(self) -> Dict[str, Any]:
        # Discord's own snake_case keys are forwarded untouched
        return {"token": self.token, "guild_id": self.guild_id, "endpoint": self.endpoint}


@dataclass(frozen=True)
class VoiceUpdate(_Message):
    """A message relaying a voice state update received from Discord."""

    session_id: str
    guild_id: GuildId
    token: str
    endpoint: str
    opcode: Opcode = field(default=Opcode.VOICE_UPDATE, init=False, repr=False)

    def __post_init__(self):
        _normalize_guild_id(self)

    @property
    def event(self) -> VoiceUpdateEvent:
        return VoiceUpdateEvent(
            token=self.token, guild_id=self.guild_id, endpoint=self.endpoint
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "op": str(self.opcode),
            "guildId": self.guild_id,
            "sessionId": self.session_id,
            "event": self.event.to_dict(),
        }
