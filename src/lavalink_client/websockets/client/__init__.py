"""
WebSocket client components for the Lavalink client.

This module provides the node connection used to send player commands and
receive player updates, events and statistics.
"""

from .node_client import LavalinkNode

__all__ = ["LavalinkNode"]
