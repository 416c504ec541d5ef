"""
Unit tests for parsing messages received from a node.
"""

import json

import pytest

from lavalink_client.core.events import (
    PlayerUpdate,
    TrackEndEvent,
    TrackExceptionEvent,
    TrackStartEvent,
    TrackStuckEvent,
    WebSocketClosedEvent,
    parse_event,
    parse_message,
)
from lavalink_client.core.opcodes import Opcode
from lavalink_client.core.stats import RemoteStats
from lavalink_client.infrastructure.exceptions import (
    MessageParseError,
    UnknownEventError,
)


class TestParseMessage:
    """Test cases for parse_message."""

    @pytest.mark.unit
    def test_player_update(self):
        raw = json.dumps(
            {
                "op": "playerUpdate",
                "guildId": "381880193251409931",
                "state": {"time": 1500467109, "position": 60000},
            }
        )

        opcode, payload = parse_message(raw)

        assert opcode is Opcode.PLAYER_UPDATE
        assert isinstance(payload, PlayerUpdate)
        assert payload.guild_id == 381880193251409931
        assert payload.state.time == 1500467109
        assert payload.state.position == 60000

    @pytest.mark.unit
    def test_player_update_without_position(self):
        raw = json.dumps({"op": "playerUpdate", "guildId": "1", "state": {"time": 10}})

        _, payload = parse_message(raw)

        assert payload.state.position == 0

    @pytest.mark.unit
    def test_stats(self):
        raw = json.dumps(
            {
                "op": "stats",
                "players": 3,
                "playingPlayers": 1,
                "uptime": 123456,
                "memory": {"free": 1, "used": 2, "allocated": 3, "reservable": 4},
                "cpu": {"cores": 4, "systemLoad": 0.5, "lavalinkLoad": 0.1},
            }
        )

        opcode, payload = parse_message(raw)

        assert opcode is Opcode.STATS
        assert isinstance(payload, RemoteStats)
        assert payload.playing_players == 1
        assert payload.frame_stats is None

    @pytest.mark.unit
    def test_event(self):
        raw = json.dumps(
            {"op": "event", "type": "TrackStartEvent", "guildId": "7", "track": "abc"}
        )

        opcode, payload = parse_message(raw)

        assert opcode is Opcode.EVENT
        assert payload == TrackStartEvent(guild_id=7, track="abc")

    @pytest.mark.unit
    def test_unknown_op_returns_raw_dict(self):
        opcode, payload = parse_message('{"op": "ready", "resumed": false}')

        assert opcode is Opcode.UNKNOWN
        assert payload == {"op": "ready", "resumed": False}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[1, 2]",
            "",
            '{"op": "playerUpdate", "guildId": "1", "state": {"time": "x"}}',
            '{"op": "playerUpdate", "guildId": "1", "state": {"position": null}}',
            '{"op": "playerUpdate", "guildId": "1", "state": [1]}',
        ],
    )
    def test_malformed_frames(self, raw):
        with pytest.raises(MessageParseError):
            parse_message(raw)

    @pytest.mark.unit
    def test_player_update_without_guild(self):
        with pytest.raises(MessageParseError):
            parse_message('{"op": "playerUpdate", "state": {"time": 1}}')


class TestParseEvent:
    """Test cases for parse_event."""

    @pytest.mark.unit
    def test_track_end(self):
        event = parse_event(
            {"type": "TrackEndEvent", "guildId": "7", "track": "abc", "reason": "FINISHED"}
        )

        assert event == TrackEndEvent(guild_id=7, track="abc", reason="FINISHED")

    @pytest.mark.unit
    def test_track_exception_v30_layout(self):
        event = parse_event(
            {"type": "TrackExceptionEvent", "guildId": "7", "track": "abc", "error": "boom"}
        )

        assert event == TrackExceptionEvent(guild_id=7, track="abc", error="boom")

    @pytest.mark.unit
    def test_track_exception_v33_layout(self):
        event = parse_event(
            {
                "type": "TrackExceptionEvent",
                "guildId": "7",
                "track": "abc",
                "exception": {"message": "Video unavailable", "severity": "COMMON"},
            }
        )

        assert event.error == "Video unavailable"

    @pytest.mark.unit
    def test_track_stuck(self):
        event = parse_event(
            {"type": "TrackStuckEvent", "guildId": "7", "track": "abc", "thresholdMs": 10000}
        )

        assert event == TrackStuckEvent(guild_id=7, track="abc", threshold_ms=10000)

    @pytest.mark.unit
    def test_websocket_closed(self):
        event = parse_event(
            {
                "type": "WebSocketClosedEvent",
                "guildId": "7",
                "code": 4006,
                "reason": "Your session is no longer valid.",
                "byRemote": True,
            }
        )

        assert event == WebSocketClosedEvent(
            guild_id=7, code=4006, reason="Your session is no longer valid.", by_remote=True
        )

    @pytest.mark.unit
    def test_unknown_event_type(self):
        with pytest.raises(UnknownEventError, match="SegmentSkipped"):
            parse_event({"type": "SegmentSkipped", "guildId": "7"})

    @pytest.mark.unit
    def test_missing_track(self):
        with pytest.raises(MessageParseError):
            parse_event({"type": "TrackStartEvent", "guildId": "7"})
