"""
Player event listener interface.

Subclass ``AudioPlayerListener`` and override the hooks you care about; the
defaults do nothing.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .player import AudioPlayer


class AudioPlayerListener:
    """Receives lifecycle notifications for audio players."""

    async def player_pause(self, player: "AudioPlayer") -> None:
        pass

    async def player_resume(self, player: "AudioPlayer") -> None:
        pass

    async def track_start(self, player: "AudioPlayer", track: str) -> None:
        pass

    async def track_end(self, player: "AudioPlayer", track: str, reason: str) -> None:
        pass

    async def track_exception(
        self, player: "AudioPlayer", track: str, exception: str
    ) -> None:
        pass

    async def track_stuck(
        self, player: "AudioPlayer", track: str, threshold_ms: int
    ) -> None:
        pass

    async def websocket_closed(
        self, player: "AudioPlayer", code: int, reason: str, by_remote: bool
    ) -> None:
        pass
