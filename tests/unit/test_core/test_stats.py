"""
Unit tests for node statistics.
"""

import pytest

from lavalink_client.core.stats import CpuStats, FrameStats, RemoteStats

STATS_PAYLOAD = {
    "op": "stats",
    "players": 12,
    "playingPlayers": 4,
    "uptime": 86400000,
    "memory": {
        "free": 100,
        "used": 200,
        "allocated": 300,
        "reservable": 400,
    },
    "cpu": {"cores": 8, "systemLoad": 0.25, "lavalinkLoad": 0.05},
    "frameStats": {"sent": 6000, "nulled": 10, "deficit": 30},
}


class TestRemoteStats:
    """Test cases for RemoteStats."""

    @pytest.mark.unit
    def test_from_dict(self):
        stats = RemoteStats.from_dict(STATS_PAYLOAD)

        assert stats.players == 12
        assert stats.playing_players == 4
        assert stats.uptime == 86400000
        assert stats.memory.used == 200
        assert stats.memory.reservable == 400
        assert stats.cpu == CpuStats(cores=8, system_load=0.25, lavalink_load=0.05)
        assert stats.frame_stats == FrameStats(sent=6000, nulled=10, deficit=30)

    @pytest.mark.unit
    def test_missing_sections_default_to_zero(self):
        stats = RemoteStats.from_dict({"players": 1})

        assert stats.playing_players == 0
        assert stats.memory.free == 0
        assert stats.cpu.cores == 0
        assert stats.frame_stats is None

    @pytest.mark.unit
    def test_idle_node_has_zero_penalty(self):
        assert RemoteStats().penalty == pytest.approx(0.0)

    @pytest.mark.unit
    def test_penalty_without_frame_stats(self):
        stats = RemoteStats(playing_players=3, cpu=CpuStats(system_load=0.5))

        expected = 3 + (1.05 ** 50 * 10 - 10)
        assert stats.penalty == pytest.approx(expected)

    @pytest.mark.unit
    def test_penalty_with_frame_stats(self):
        stats = RemoteStats.from_dict(STATS_PAYLOAD)

        expected = (
            4
            + (1.05 ** 25 * 10 - 10)
            + (1.03 ** (500 * 30 / 3000) * 600 - 600)
            + (1.03 ** (500 * 10 / 3000) * 300 - 300) * 2
        )
        assert stats.penalty == pytest.approx(expected)

    @pytest.mark.unit
    def test_busier_node_has_higher_penalty(self):
        idle = RemoteStats(playing_players=1, cpu=CpuStats(system_load=0.1))
        busy = RemoteStats(playing_players=20, cpu=CpuStats(system_load=0.9))

        assert busy.penalty > idle.penalty
