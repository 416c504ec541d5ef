"""
Client-side message processing modules.

This package contains handlers for the different types of websocket
messages a Lavalink node sends to the client.
"""

from .player_message import PlayerMessageHandler
from .stats_message import StatsMessageHandler

__all__ = ["PlayerMessageHandler", "StatsMessageHandler"]
