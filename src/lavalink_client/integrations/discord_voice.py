"""
discord.py integration for the Lavalink client.

Lavalink needs the bot's Discord voice session to stream audio on its
behalf. ``LavalinkVoiceClient`` is a ``discord.VoiceProtocol`` that joins
voice channels through the gateway and relays the resulting voice session
to the node, instead of opening a voice connection itself.

Usage:
    bot.lavalink = NodeManager.from_config(config)
    await bot.lavalink.connect_all()
    voice = await channel.connect(cls=LavalinkVoiceClient)
"""

import logging
from typing import Any, Dict, Optional

import discord

from lavalink_client.core.model import VoiceUpdate
from lavalink_client.core.node_manager import NodeManager
from lavalink_client.core.player import AudioPlayer
from lavalink_client.infrastructure.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LavalinkVoiceClient(discord.VoiceProtocol):
    """Voice protocol that forwards Discord voice sessions to a Lavalink node."""

    def __init__(self, client: discord.Client, channel: discord.abc.Connectable):
        super().__init__(client, channel)
        self.guild_id: int = channel.guild.id
        self.lavalink: NodeManager = self._resolve_manager(client)

        self._session_id: Optional[str] = None
        self._voice_server: Optional[Dict[str, Any]] = None

    @staticmethod
    def _resolve_manager(client: discord.Client) -> NodeManager:
        manager = getattr(client, "lavalink", None)
        if manager is None:
            raise ConfigurationError(
                "client.lavalink must be set to a NodeManager before joining voice"
            )
        return manager

    @property
    def player(self) -> Optional[AudioPlayer]:
        return self.lavalink.get_player(self.guild_id)

    async def on_voice_server_update(self, data: Dict[str, Any]) -> None:
        """Store the voice server token and endpoint sent by Discord."""
        self._voice_server = {"token": data["token"], "endpoint": data.get("endpoint")}
        logger.debug(f"[guild {self.guild_id}] Voice server update received")
        await self._dispatch_voice_update()

    async def on_voice_state_update(self, data: Dict[str, Any]) -> None:
        """Store the voice session id, or tear down when the bot left voice."""
        channel_id = data.get("channel_id")
        if channel_id is None:
            logger.info(f"[guild {self.guild_id}] Left voice, destroying player")
            await self._teardown()
            return

        channel = self.client.get_channel(int(channel_id))
        if channel is not None:
            self.channel = channel

        self._session_id = data["session_id"]
        logger.debug(f"[guild {self.guild_id}] Voice state update received")
        await self._dispatch_voice_update()

    async def _dispatch_voice_update(self) -> None:
        """Send the voice session to the node once both halves are known."""
        if not self._session_id or not self._voice_server:
            return

        # Discord sends a null endpoint while the voice server is reallocated
        endpoint = self._voice_server.get("endpoint")
        if not endpoint:
            return

        player = self.player
        if player is None:
            player = await self.lavalink.create_player(self.guild_id)

        await player.node.send(
            VoiceUpdate(
                session_id=self._session_id,
                guild_id=self.guild_id,
                token=self._voice_server["token"],
                endpoint=endpoint,
            )
        )
        logger.info(
            f"[guild {self.guild_id}] Voice session forwarded to node {player.node.node_id}"
        )

    async def connect(
        self,
        *,
        timeout: float,
        reconnect: bool,
        self_deaf: bool = False,
        self_mute: bool = False,
    ) -> None:
        """Join the voice channel through the gateway."""
        await self.channel.guild.change_voice_state(
            channel=self.channel, self_mute=self_mute, self_deaf=self_deaf
        )

    async def disconnect(self, *, force: bool = False) -> None:
        """Leave the voice channel and destroy the guild's player."""
        await self.channel.guild.change_voice_state(channel=None)
        await self._teardown()

    async def _teardown(self) -> None:
        await self.lavalink.destroy_player(self.guild_id)
        self._session_id = None
        self._voice_server = None
        self.cleanup()
