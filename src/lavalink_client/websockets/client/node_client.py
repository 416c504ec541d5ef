"""
WebSocket client for a single Lavalink node.

This module provides the node connection: handshake, message dispatch,
sending player commands and automatic reconnection.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Optional, Union

import websockets
import websockets.exceptions
from websockets.asyncio.client import connect, ClientConnection

from lavalink_client.core.events import parse_message
from lavalink_client.core.opcodes import Opcode
from lavalink_client.core.player import AudioPlayerManager
from lavalink_client.core.stats import RemoteStats
from lavalink_client.core.types import (
    DEFAULT_CLIENT_NAME,
    HEADER_AUTHORIZATION,
    HEADER_CLIENT_NAME,
    HEADER_NUM_SHARDS,
    HEADER_RESUME_KEY,
    HEADER_USER_ID,
)
from lavalink_client.infrastructure.exceptions import (
    MessageParseError,
    NodeNotConnectedError,
    WebSocketError,
)
from lavalink_client.rest.client import RestClient

from .process_messages import PlayerMessageHandler, StatsMessageHandler

# Handshake statuses that mean the credentials were refused
AUTH_REJECTED_STATUSES = (401, 403)


class LavalinkNode:
    """
    Connection to one Lavalink node.

    The node pushes player updates, events and statistics over the
    websocket; the client sends player commands back over it. A REST
    client for the same node is available as ``rest``.
    """

    def __init__(
        self,
        node_id: str,
        host: str,
        port: int,
        password: str,
        user_id: Union[int, str],
        num_shards: int = 1,
        secure: bool = False,
        client_name: str = DEFAULT_CLIENT_NAME,
        resume_key: Optional[str] = None,
        player_manager: Optional[AudioPlayerManager] = None,
        logger: Optional[logging.Logger] = None,
        rest_timeout: float = 10.0,
    ) -> None:
        """
        Initialize the node client.

        Args:
            node_id: Unique node identifier
            host: Node hostname or IP address
            port: Node port
            password: Node password
            user_id: Discord user ID of the bot
            num_shards: Total number of shards the bot runs
            secure: Use wss:// and https:// instead of ws:// and http://
            client_name: Name reported to the node in the handshake
            resume_key: Key of a session to resume, if resuming is configured
            player_manager: Player registry shared with other nodes
            logger: Logger instance (defaults to this module's logger)
            rest_timeout: Timeout for REST requests in seconds
        """
        if not node_id:
            raise ValueError("node_id cannot be empty")
        if not host:
            raise ValueError("host cannot be empty")
        if num_shards < 1:
            raise ValueError("num_shards must be at least 1")

        self.node_id: str = node_id
        self.host: str = host
        self.port: int = int(port)
        self.password: str = password
        self.user_id: int = int(user_id)
        self.num_shards: int = num_shards
        self.secure: bool = secure
        self.client_name: str = client_name
        self.resume_key: Optional[str] = resume_key
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self.player_manager: AudioPlayerManager = (
            player_manager if player_manager is not None else AudioPlayerManager()
        )

        self.rest: RestClient = RestClient(self.rest_url, password, timeout=rest_timeout)

        # WebSocket connection
        self.websocket: Optional[ClientConnection] = None
        self.is_connected: bool = False

        # Message processing handlers
        self.player_handler: PlayerMessageHandler = PlayerMessageHandler(
            node_id=node_id,
            player_manager=self.player_manager,
            logger=self.logger,
        )
        self.stats_handler: StatsMessageHandler = StatsMessageHandler(
            node_id=node_id, logger=self.logger
        )

        # Connection management
        self._connection_task: Optional[asyncio.Task[None]] = None
        self._reconnect_task: Optional[asyncio.Task[None]] = None
        self._should_reconnect: bool = True
        self._auth_rejected: bool = False
        self.reconnect_base_delay: float = 1.0
        self.reconnect_max_delay: float = 60.0

        # Performance tracking
        self._messages_sent: int = 0
        self._messages_received: int = 0
        self._connection_errors: int = 0

    @property
    def ws_url(self) -> str:
        scheme = "wss" if self.secure else "ws"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def rest_url(self) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def stats(self) -> Optional[RemoteStats]:
        return self.stats_handler.stats

    @property
    def penalty(self) -> float:
        """Load penalty of the node; infinite while disconnected."""
        if not self.is_connected:
            return float("inf")
        if self.stats is None:
            return 0.0
        return self.stats.penalty

    def _get_handshake_headers(self) -> Dict[str, str]:
        headers = {
            HEADER_AUTHORIZATION: self.password,
            HEADER_USER_ID: str(self.user_id),
            HEADER_NUM_SHARDS: str(self.num_shards),
            HEADER_CLIENT_NAME: self.client_name,
        }
        if self.resume_key:
            headers[HEADER_RESUME_KEY] = self.resume_key
        return headers

    async def connect(self, max_retries: int = 5, retry_delay: float = 1.0) -> bool:
        """
        Connect to the node with retry logic.

        Args:
            max_retries: Maximum number of connection attempts
            retry_delay: Initial delay between retries (exponential backoff)

        Returns:
            True if connection successful, False otherwise
        """
        if self.is_connected:
            self.logger.debug(f"[{self.node_id}] Already connected, skipping connect")
            return True

        for attempt in range(max_retries):
            try:
                self.logger.info(
                    f"[{self.node_id}] Connecting to {self.ws_url} (attempt {attempt + 1}/{max_retries})"
                )

                self.websocket = await connect(
                    self.ws_url,
                    additional_headers=self._get_handshake_headers(),
                    compression=None,
                )

                self.is_connected = True
                self._should_reconnect = True
                self._auth_rejected = False
                self._connection_task = asyncio.create_task(self._process_messages())

                self.logger.info(f"[{self.node_id}] Node ready")
                return True

            except websockets.exceptions.InvalidStatus as e:
                self._connection_errors += 1
                status = e.response.status_code
                if status in AUTH_REJECTED_STATUSES:
                    self._auth_rejected = True
                    self.logger.error(
                        f"[{self.node_id}] Node rejected credentials (HTTP {status})"
                    )
                    return False
                self.logger.error(
                    f"[{self.node_id}] Handshake failed with HTTP {status} (attempt {attempt + 1})"
                )

            except (
                OSError,
                asyncio.TimeoutError,
                websockets.exceptions.WebSocketException,
            ) as e:
                self._connection_errors += 1
                self.logger.error(
                    f"[{self.node_id}] Error connecting (attempt {attempt + 1}): {e}"
                )

            if attempt < max_retries - 1:
                await asyncio.sleep(retry_delay)
                retry_delay *= 2

        return False

    async def _process_messages(self) -> None:
        """Process incoming messages from the node."""
        websocket = self.websocket
        try:
            async for message in websocket:
                self._messages_received += 1
                if isinstance(message, bytes):
                    self.logger.warning(
                        f"[{self.node_id}] Ignoring unexpected binary frame ({len(message)} bytes)"
                    )
                    continue
                await self._dispatch(message)
        except websockets.exceptions.ConnectionClosed as e:
            self.logger.warning(f"[{self.node_id}] Connection closed by node: {e}")
        except Exception as e:
            self.logger.error(
                f"[{self.node_id}] Error processing messages: {e}", exc_info=True
            )
        finally:
            self.is_connected = False
            self.stats_handler.reset()

            # The loop can also end on a handler error while the socket is still open
            try:
                await websocket.close()
            except websockets.exceptions.WebSocketException as e:
                self.logger.error(f"[{self.node_id}] Error closing connection: {e}")

            if self._should_reconnect and not self._reconnect_task:
                self._reconnect_task = asyncio.create_task(self._handle_reconnection())

    async def _dispatch(self, message: str) -> None:
        """Route a text frame to the handler for its opcode."""
        try:
            opcode, payload = parse_message(message)
        except MessageParseError as e:
            self.logger.warning(f"[{self.node_id}] Dropping message: {e}")
            return

        if opcode == Opcode.PLAYER_UPDATE:
            self.player_handler.process_player_update(payload)
        elif opcode == Opcode.EVENT:
            await self.player_handler.process_event(payload)
        elif opcode == Opcode.STATS:
            self.stats_handler.process_stats(payload)
        else:
            self.logger.warning(f"[{self.node_id}] Unknown message op: {payload.get('op')}")

    async def send(self, message: Any) -> None:
        """
        Send a message to the node.

        Args:
            message: A model message (anything with ``to_json()``) or a dict

        Raises:
            NodeNotConnectedError: If the node has no open connection
            WebSocketError: If the connection closes while sending
        """
        if not self.is_connected or not self.websocket:
            raise NodeNotConnectedError(f"Node {self.node_id} is not connected")

        payload = json.dumps(message) if isinstance(message, dict) else message.to_json()

        try:
            await self.websocket.send(payload)
        except websockets.exceptions.ConnectionClosed as e:
            self.is_connected = False
            raise WebSocketError(
                f"Connection to node {self.node_id} closed while sending"
            ) from e

        self._messages_sent += 1
        self.logger.debug(f"[{self.node_id}] Sent {payload}")

    async def _handle_reconnection(self) -> None:
        """Handle automatic reconnection with exponential backoff."""
        retry_count = 0

        try:
            while self._should_reconnect and not self._auth_rejected:
                retry_count += 1
                delay = min(
                    self.reconnect_base_delay * (2 ** (retry_count - 1)),
                    self.reconnect_max_delay,
                )

                self.logger.info(
                    f"[{self.node_id}] Attempting reconnection #{retry_count} in {delay:.1f}s..."
                )
                await asyncio.sleep(delay)

                if await self.connect(max_retries=1):
                    self.logger.info(
                        f"[{self.node_id}] Reconnection successful after {retry_count} attempts"
                    )
                    return
        finally:
            self._reconnect_task = None

    async def disconnect(self) -> None:
        """Disconnect from the node and release the REST session."""
        self._should_reconnect = False

        if self._reconnect_task:
            self._reconnect_task.cancel()
            try:
                await self._reconnect_task
            except asyncio.CancelledError:
                pass
            self._reconnect_task = None

        if self._connection_task:
            self._connection_task.cancel()
            try:
                await self._connection_task
            except asyncio.CancelledError:
                pass
            self._connection_task = None

        if self.websocket:
            try:
                await self.websocket.close()
            except websockets.exceptions.WebSocketException as e:
                self.logger.error(f"[{self.node_id}] Error disconnecting: {e}")
            finally:
                self.websocket = None
                self.is_connected = False

        self.stats_handler.reset()
        await self.rest.close()
        self.logger.info(f"[{self.node_id}] Disconnected from node")

    def get_status(self) -> Dict[str, Any]:
        """Get node status and performance information."""
        return {
            "node_id": self.node_id,
            "ws_url": self.ws_url,
            "is_connected": self.is_connected,
            "players": len(self.player_manager.players_for_node(self)),
            "penalty": self.penalty,
            "stats": self.stats,
            "messages_sent": self._messages_sent,
            "messages_received": self._messages_received,
            "connection_errors": self._connection_errors,
        }

    def __repr__(self) -> str:
        return f"<LavalinkNode node_id={self.node_id!r} url={self.ws_url!r} connected={self.is_connected}>"
