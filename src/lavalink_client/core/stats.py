"""
Statistics reported by a Lavalink node.

Nodes push a ``stats`` message roughly once a minute. The penalty computed
from it is used to pick the least loaded node for new players.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class FrameStats:
    """Audio frame averages per minute on the node."""

    sent: int = 0
    nulled: int = 0
    deficit: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FrameStats":
        return cls(
            sent=int(data.get("sent", 0)),
            nulled=int(data.get("nulled", 0)),
            deficit=int(data.get("deficit", 0)),
        )


@dataclass
class MemoryStats:
    """
    Memory usage of the node's JVM, in bytes.

    ``used`` excludes cache and buffers and is usually more useful than
    ``allocated``.
    """

    free: int = 0
    used: int = 0
    allocated: int = 0
    reservable: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MemoryStats":
        return cls(
            free=int(data.get("free", 0)),
            used=int(data.get("used", 0)),
            allocated=int(data.get("allocated", 0)),
            reservable=int(data.get("reservable", 0)),
        )


@dataclass
class CpuStats:
    """CPU information of the node's host."""

    cores: int = 0
    system_load: float = 0.0
    lavalink_load: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CpuStats":
        return cls(
            cores=int(data.get("cores", 0)),
            system_load=float(data.get("systemLoad", 0.0)),
            lavalink_load=float(data.get("lavalinkLoad", 0.0)),
        )


@dataclass
class RemoteStats:
    """A full statistics snapshot of a node."""

    players: int = 0
    playing_players: int = 0
    uptime: int = 0
    memory: MemoryStats = field(default_factory=MemoryStats)
    cpu: CpuStats = field(default_factory=CpuStats)
    # Absent until the node has collected a minute of frame data
    frame_stats: Optional[FrameStats] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteStats":
        frame_stats = data.get("frameStats")
        return cls(
            players=int(data.get("players", 0)),
            playing_players=int(data.get("playingPlayers", 0)),
            uptime=int(data.get("uptime", 0)),
            memory=MemoryStats.from_dict(data.get("memory") or {}),
            cpu=CpuStats.from_dict(data.get("cpu") or {}),
            frame_stats=FrameStats.from_dict(frame_stats) if frame_stats else None,
        )

    @property
    def penalty(self) -> float:
        """Load-balancing penalty; lower means less loaded."""
        player_penalty = self.playing_players
        cpu_penalty = 1.05 ** (100 * self.cpu.system_load) * 10 - 10

        deficit_frame_penalty = 0.0
        null_frame_penalty = 0.0
        if self.frame_stats is not None:
            deficit_frame_penalty = (
                1.03 ** (500 * (self.frame_stats.deficit / 3000)) * 600 - 600
            )
            null_frame_penalty = (
                1.03 ** (500 * (self.frame_stats.nulled / 3000)) * 300 - 300
            ) * 2

        return player_penalty + cpu_penalty + deficit_frame_penalty + null_frame_penalty
