"""
Client-side player message handler.

This module routes ``playerUpdate`` and ``event`` messages to the player
that owns the guild they refer to.
"""

import logging

from lavalink_client.core.events import PlayerEvent, PlayerUpdate
from lavalink_client.core.player import AudioPlayerManager


class PlayerMessageHandler:
    """Handles player state updates and player events for a node."""

    def __init__(
        self,
        node_id: str,
        player_manager: AudioPlayerManager,
        logger: logging.Logger,
    ) -> None:
        """
        Initialize the player message handler.

        Args:
            node_id: Identifier of the node the messages come from
            player_manager: Registry used to look up the target player
            logger: Logger instance
        """
        self.node_id: str = node_id
        self.player_manager: AudioPlayerManager = player_manager
        self.logger: logging.Logger = logger

    def process_player_update(self, update: PlayerUpdate) -> None:
        """Apply a position update to the guild's player."""
        player = self.player_manager.get_player(update.guild_id)
        if player is None:
            self.logger.debug(
                f"[{self.node_id}] playerUpdate for unknown guild {update.guild_id}"
            )
            return

        player.handle_state(update.state)

    async def process_event(self, event: PlayerEvent) -> None:
        """Dispatch a node event to the guild's player and its listener."""
        player = self.player_manager.get_player(event.guild_id)
        if player is None:
            self.logger.warning(
                f"[{self.node_id}] {type(event).__name__} for unknown guild {event.guild_id}"
            )
            return

        self.logger.debug(f"[{self.node_id}] {type(event).__name__}: {event}")
        try:
            await player.handle_event(event)
        except Exception as e:
            # A failing listener must not take down the node's receive loop
            self.logger.error(
                f"[{self.node_id}] Listener error on {type(event).__name__}: {e}",
                exc_info=True,
            )
