"""
Audio players and their registry.

An ``AudioPlayer`` mirrors the state of one guild's player on a node and
sends control messages through that node. The ``AudioPlayerManager`` keeps
at most one player per guild.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from lavalink_client.infrastructure.exceptions import PlayerAlreadyExistsError

from .events import (
    PlayerEvent,
    PlayerState,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    WebSocketClosedEvent,
)
from .listener import AudioPlayerListener
from .model import Destroy, Pause, Play, Seek, Stop, Volume
from .types import DEFAULT_VOLUME

if TYPE_CHECKING:
    from lavalink_client.websockets.client.node_client import LavalinkNode

logger = logging.getLogger(__name__)


class AudioPlayer:
    """The client-side view of a guild's audio player on a node."""

    def __init__(
        self,
        node: "LavalinkNode",
        guild_id: int,
        listener: Optional[AudioPlayerListener] = None,
    ):
        self.node = node
        self.guild_id: int = guild_id
        self.listener: AudioPlayerListener = listener or AudioPlayerListener()

        self.track: Optional[str] = None
        self.time: int = 0
        self.position: int = 0
        self.paused: bool = False
        self.volume: int = DEFAULT_VOLUME

    @property
    def is_playing(self) -> bool:
        return self.track is not None and not self.paused

    async def _send(self, message: Any, action: str) -> None:
        try:
            await self.node.send(message)
        except Exception as e:
            logger.error(f"[guild {self.guild_id}] {action} failed: {e}")
            raise

    async def play(
        self,
        track: str,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
        no_replace: bool = False,
    ) -> None:
        """Play a base64 encoded track, optionally within a time window."""
        await self._send(
            Play(self.guild_id, track, start_time, end_time, no_replace), "play"
        )
        self.track = track
        self.paused = False
        logger.debug(f"[guild {self.guild_id}] Playing track {track[:24]}...")

    async def stop(self) -> None:
        await self._send(Stop(self.guild_id), "stop")
        logger.debug(f"[guild {self.guild_id}] Stopped track {self.track}")
        self.track = None

    async def pause(self, pause: bool = True) -> None:
        """Set the pause state and notify the listener."""
        await self._send(Pause(self.guild_id, pause), "pause")
        self.paused = pause

        if pause:
            await self.listener.player_pause(self)
        else:
            await self.listener.player_resume(self)

        logger.debug(f"[guild {self.guild_id}] Pause state: {pause}")

    async def resume(self) -> None:
        await self.pause(False)

    async def seek(self, position: int) -> None:
        """Seek the current track to a position in milliseconds."""
        await self._send(Seek(self.guild_id, position), "seek")
        self.position = position

    async def set_volume(self, volume: int) -> None:
        # Volume validates its range before anything is sent
        message = Volume(self.guild_id, volume)
        await self._send(message, "volume")
        self.volume = volume
        logger.debug(f"[guild {self.guild_id}] Volume set to {volume}")

    async def destroy(self) -> None:
        """Destroy the player on the node. The manager entry is left untouched."""
        await self._send(Destroy(self.guild_id), "destroy")
        self.track = None

    def handle_state(self, state: PlayerState) -> None:
        """Apply a position update reported by the node."""
        self.time = state.time
        self.position = state.position

    async def handle_event(self, event: PlayerEvent) -> None:
        """Apply a node event to the player state and notify the listener."""
        if isinstance(event, TrackStartEvent):
            self.track = event.track
            await self.listener.track_start(self, event.track)
        elif isinstance(event, TrackEndEvent):
            # A replacing play() ends the previous track after the new one is set
            if self.track == event.track:
                self.track = None
                self.position = 0
            await self.listener.track_end(self, event.track, event.reason)
        elif isinstance(event, TrackExceptionEvent):
            await self.listener.track_exception(self, event.track, event.error)
        elif isinstance(event, TrackStuckEvent):
            await self.listener.track_stuck(self, event.track, event.threshold_ms)
        elif isinstance(event, WebSocketClosedEvent):
            await self.listener.websocket_closed(
                self, event.code, event.reason, event.by_remote
            )

    def __repr__(self) -> str:
        return (
            f"<AudioPlayer guild_id={self.guild_id} node={getattr(self.node, 'node_id', None)!r} "
            f"track={self.track!r} position={self.position} paused={self.paused} "
            f"volume={self.volume}>"
        )


class AudioPlayerManager:
    """Registry holding one ``AudioPlayer`` per guild."""

    def __init__(self, listener: Optional[AudioPlayerListener] = None):
        self.listener: AudioPlayerListener = listener or AudioPlayerListener()
        self.players: Dict[int, AudioPlayer] = {}

    def create_player(
        self, node: "LavalinkNode", guild_id: Union[int, str]
    ) -> AudioPlayer:
        """
        Create a player for a guild on the given node.

        Raises:
            PlayerAlreadyExistsError: If the guild already has a player
        """
        guild_id = int(guild_id)
        if guild_id in self.players:
            raise PlayerAlreadyExistsError(guild_id)

        player = AudioPlayer(node, guild_id, self.listener)
        self.players[guild_id] = player
        logger.debug(f"Created player for guild {guild_id}")
        return player

    def get_player(self, guild_id: Union[int, str]) -> Optional[AudioPlayer]:
        return self.players.get(int(guild_id))

    def has_player(self, guild_id: Union[int, str]) -> bool:
        return int(guild_id) in self.players

    def remove_player(self, guild_id: Union[int, str]) -> Optional[AudioPlayer]:
        return self.players.pop(int(guild_id), None)

    def players_for_node(self, node: "LavalinkNode") -> List[AudioPlayer]:
        return [player for player in self.players.values() if player.node is node]

    def __len__(self) -> int:
        return len(self.players)

    def __repr__(self) -> str:
        return f"<AudioPlayerManager players={list(self.players.values())!r}>"
