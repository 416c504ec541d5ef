"""
Core components of the Lavalink client.

This package contains the protocol model (opcodes, outgoing messages,
incoming events, statistics), the track decoder, and the player layer.
"""

from .opcodes import Opcode
from .model import Destroy, Pause, Play, Seek, Stop, VoiceUpdate, VoiceUpdateEvent, Volume
from .events import (
    PlayerState,
    PlayerUpdate,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    WebSocketClosedEvent,
    parse_event,
    parse_message,
)
from .stats import CpuStats, FrameStats, MemoryStats, RemoteStats
from .decoder import DecodedTrack, decode_track, decode_track_base64
from .listener import AudioPlayerListener
from .player import AudioPlayer, AudioPlayerManager

__all__ = [
    "Opcode",
    "Destroy",
    "Pause",
    "Play",
    "Seek",
    "Stop",
    "VoiceUpdate",
    "VoiceUpdateEvent",
    "Volume",
    "PlayerState",
    "PlayerUpdate",
    "TrackEndEvent",
    "TrackExceptionEvent",
    "TrackStartEvent",
    "TrackStuckEvent",
    "WebSocketClosedEvent",
    "parse_event",
    "parse_message",
    "CpuStats",
    "FrameStats",
    "MemoryStats",
    "RemoteStats",
    "DecodedTrack",
    "decode_track",
    "decode_track_base64",
    "AudioPlayerListener",
    "AudioPlayer",
    "AudioPlayerManager",
]
