"""
Node manager coordinating several Lavalink nodes.

This module owns the node connections and the shared player registry, and
places new players on the least loaded node.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from lavalink_client.infrastructure.exceptions import NodeNotConnectedError
from lavalink_client.rest.models import LoadResult
from lavalink_client.websockets.client.node_client import LavalinkNode

from .listener import AudioPlayerListener
from .player import AudioPlayer, AudioPlayerManager
from .types import DEFAULT_CLIENT_NAME

logger = logging.getLogger(__name__)


class NodeManager:
    """
    Entry point of the client.

    Keeps a pool of nodes sharing one ``AudioPlayerManager`` so that a guild
    has at most one player across all nodes.
    """

    def __init__(
        self,
        user_id: Union[int, str],
        num_shards: int = 1,
        listener: Optional[AudioPlayerListener] = None,
        client_name: str = DEFAULT_CLIENT_NAME,
    ):
        """
        Initialize the node manager.

        Args:
            user_id: Discord user ID of the bot
            num_shards: Total number of shards the bot runs
            listener: Listener notified about every player's events
            client_name: Name reported to nodes in the handshake
        """
        self.user_id: int = int(user_id)
        self.num_shards: int = num_shards
        self.client_name: str = client_name
        self.players: AudioPlayerManager = AudioPlayerManager(listener)
        self.nodes: Dict[str, LavalinkNode] = {}

    @classmethod
    def from_config(
        cls, config, listener: Optional[AudioPlayerListener] = None
    ) -> "NodeManager":
        """
        Build a manager with a single node described by a ``LavalinkConfig``.
        """
        manager = cls(
            user_id=config.user_id,
            num_shards=config.num_shards,
            listener=listener,
            client_name=config.client_name,
        )
        manager.add_node(
            node_id=config.node_id,
            host=config.host,
            port=config.port,
            password=config.password,
            secure=config.secure,
            resume_key=config.resume_key,
        )
        return manager

    def add_node(
        self,
        node_id: str,
        host: str,
        port: int,
        password: str,
        secure: bool = False,
        resume_key: Optional[str] = None,
    ) -> LavalinkNode:
        """
        Register a node. Call ``connect_all`` or ``node.connect`` afterwards.

        Raises:
            ValueError: If a node with the same id is already registered
        """
        if node_id in self.nodes:
            raise ValueError(f"Node {node_id} is already registered")

        node = LavalinkNode(
            node_id=node_id,
            host=host,
            port=port,
            password=password,
            user_id=self.user_id,
            num_shards=self.num_shards,
            secure=secure,
            client_name=self.client_name,
            resume_key=resume_key,
            player_manager=self.players,
            logger=logging.getLogger(f"{__name__}.{node_id}"),
        )
        self.nodes[node_id] = node
        logger.info(f"Added node {node_id} ({node.ws_url})")
        return node

    async def remove_node(self, node_id: str) -> None:
        """Disconnect a node and drop the players it hosted."""
        node = self.nodes.pop(node_id, None)
        if node is None:
            logger.warning(f"Node {node_id} is not registered")
            return

        for player in self.players.players_for_node(node):
            self.players.remove_player(player.guild_id)

        await node.disconnect()
        logger.info(f"Removed node {node_id}")

    async def connect_all(
        self, max_retries: int = 5, retry_delay: float = 1.0
    ) -> Dict[str, bool]:
        """
        Connect every registered node concurrently.

        Returns:
            Dict mapping node id to whether it connected
        """
        node_ids = list(self.nodes)
        results = await asyncio.gather(
            *(
                self.nodes[node_id].connect(max_retries=max_retries, retry_delay=retry_delay)
                for node_id in node_ids
            )
        )
        outcome = dict(zip(node_ids, results))
        logger.info(
            f"Connected {sum(results)}/{len(results)} nodes: {outcome}"
        )
        return outcome

    @property
    def available_nodes(self) -> List[LavalinkNode]:
        return [node for node in self.nodes.values() if node.is_connected]

    def best_node(self) -> LavalinkNode:
        """
        Get the connected node with the lowest load penalty.

        Raises:
            NodeNotConnectedError: If no node is connected
        """
        available = self.available_nodes
        if not available:
            raise NodeNotConnectedError("No Lavalink node is connected")
        return min(available, key=lambda node: node.penalty)

    async def create_player(self, guild_id: Union[int, str]) -> AudioPlayer:
        """
        Create a player for a guild on the least loaded node.

        Raises:
            NodeNotConnectedError: If no node is connected
            PlayerAlreadyExistsError: If the guild already has a player
        """
        node = self.best_node()
        player = self.players.create_player(node, guild_id)
        logger.info(f"Created player for guild {player.guild_id} on node {node.node_id}")
        return player

    def get_player(self, guild_id: Union[int, str]) -> Optional[AudioPlayer]:
        return self.players.get_player(guild_id)

    async def destroy_player(self, guild_id: Union[int, str]) -> None:
        """Destroy the guild's player on its node and forget it."""
        player = self.players.remove_player(guild_id)
        if player is None:
            return

        if player.node.is_connected:
            await player.destroy()
        logger.info(f"Destroyed player for guild {player.guild_id}")

    async def load_tracks(self, identifier: str) -> LoadResult:
        """Load tracks through the least loaded node."""
        return await self.best_node().rest.load_tracks(identifier)

    async def close(self) -> None:
        """Disconnect all nodes."""
        for node in list(self.nodes.values()):
            await node.disconnect()
        logger.info("Node manager closed")

    def get_status(self) -> Dict[str, Any]:
        return {
            "nodes": {node_id: node.get_status() for node_id, node in self.nodes.items()},
            "players": len(self.players),
        }
