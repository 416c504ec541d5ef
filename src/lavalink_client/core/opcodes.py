"""
Opcodes exchanged between the Lavalink client and a node.

Every websocket message carries an ``op`` field naming its type. Some are
only sent by the client (play, stop, ...) and some only by the node
(playerUpdate, stats, event).
"""

from enum import Enum


class Opcode(str, Enum):
    """An opcode used to indicate the type of a websocket message."""

    # client -> node
    DESTROY = "destroy"
    PAUSE = "pause"
    PLAY = "play"
    SEEK = "seek"
    STOP = "stop"
    VOICE_UPDATE = "voiceUpdate"
    VOLUME = "volume"

    # node -> client
    EVENT = "event"
    PLAYER_UPDATE = "playerUpdate"
    STATS = "stats"

    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> "Opcode":
        """
        Resolve a wire value into an opcode.

        Unrecognized values (including the literal "unknown") resolve to
        ``Opcode.UNKNOWN`` instead of raising.
        """
        try:
            opcode = cls(value)
        except ValueError:
            return cls.UNKNOWN
        return opcode
