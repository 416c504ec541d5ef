"""
Unit tests for the node message handlers.
"""

import logging

import pytest
from unittest.mock import MagicMock

from lavalink_client.core.events import (
    PlayerState,
    PlayerUpdate,
    TrackEndEvent,
    TrackStartEvent,
)
from lavalink_client.core.stats import RemoteStats
from lavalink_client.websockets.client.process_messages import (
    PlayerMessageHandler,
    StatsMessageHandler,
)


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


@pytest.fixture
def player_handler(player_manager, mock_logger):
    return PlayerMessageHandler("test-node", player_manager, mock_logger)


class TestPlayerMessageHandler:
    """Test cases for PlayerMessageHandler class."""

    @pytest.mark.unit
    def test_player_update(self, player_handler, player_manager, mock_node, guild_id):
        player = player_manager.create_player(mock_node, guild_id)

        player_handler.process_player_update(
            PlayerUpdate(guild_id, PlayerState(time=10, position=20))
        )

        assert player.time == 10
        assert player.position == 20

    @pytest.mark.unit
    def test_player_update_for_unknown_guild(self, player_handler, mock_logger):
        player_handler.process_player_update(PlayerUpdate(1, PlayerState(time=10)))

        mock_logger.debug.assert_called_once()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_event(
        self, player_handler, player_manager, mock_node, mock_listener, guild_id
    ):
        player = player_manager.create_player(mock_node, guild_id)

        await player_handler.process_event(TrackStartEvent(guild_id, "track-a"))

        mock_listener.track_start.assert_awaited_once_with(player, "track-a")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_event_for_unknown_guild(
        self, player_handler, mock_listener, mock_logger
    ):
        await player_handler.process_event(TrackStartEvent(1, "track-a"))

        mock_listener.track_start.assert_not_awaited()
        mock_logger.warning.assert_called_once()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_listener_error_is_logged(
        self, player_handler, player_manager, mock_node, mock_listener, mock_logger, guild_id
    ):
        player_manager.create_player(mock_node, guild_id)
        mock_listener.track_end.side_effect = RuntimeError("listener bug")

        await player_handler.process_event(TrackEndEvent(guild_id, "t", "FINISHED"))

        mock_logger.error.assert_called_once()
        assert "listener bug" in mock_logger.error.call_args.args[0]
        assert mock_logger.error.call_args.kwargs["exc_info"] is True


class TestStatsMessageHandler:
    """Test cases for StatsMessageHandler class."""

    @pytest.mark.unit
    def test_process_and_reset(self, mock_logger):
        handler = StatsMessageHandler("test-node", mock_logger)
        stats = RemoteStats(players=3, playing_players=2)

        handler.process_stats(stats)

        assert handler.stats is stats
        assert handler.last_update is not None

        handler.reset()

        assert handler.stats is None
        assert handler.last_update is None
