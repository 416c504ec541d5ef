"""
Pytest configuration and shared fixtures for the Lavalink client test suite.

This module provides common fixtures and configuration for all tests.
"""

import asyncio
import struct
from typing import Optional

import pytest
from unittest.mock import AsyncMock, MagicMock

from lavalink_client.config.settings import LavalinkConfig
from lavalink_client.core.listener import AudioPlayerListener
from lavalink_client.core.player import AudioPlayerManager

GUILD_ID = 381880193251409931


def _write_utf(value: str) -> bytes:
    encoded = value.encode("utf-8")
    return struct.pack(">H", len(encoded)) + encoded


def build_track_blob(
    title: str = "Never Gonna Give You Up",
    author: str = "Rick Astley",
    length: int = 212000,
    identifier: str = "dQw4w9WgXcQ",
    is_stream: bool = False,
    uri: Optional[str] = "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    source: str = "youtube",
    position: int = 0,
    version: int = 2,
    source_payload: bytes = b"",
) -> bytes:
    """Encode a track the way lavaplayer's DataOutput writes it."""
    body = b""
    if version > 1:
        body += struct.pack(">B", version)
    body += _write_utf(title)
    body += _write_utf(author)
    body += struct.pack(">q", length)
    body += _write_utf(identifier)
    body += struct.pack(">?", is_stream)
    if version >= 2:
        body += b"\x01" + _write_utf(uri) if uri is not None else b"\x00"
    if version >= 3:
        body += b"\x00\x00"
    body += _write_utf(source)
    body += source_payload
    body += struct.pack(">q", position)

    flags = 1 if version > 1 else 0
    header = struct.pack(">i", (flags << 30) | len(body))
    return header + body


@pytest.fixture
def track_blob_factory():
    """Factory building binary lavaplayer track blobs."""
    return build_track_blob


@pytest.fixture
def guild_id():
    return GUILD_ID


@pytest.fixture
def mock_config():
    """Create a configuration for testing."""
    return LavalinkConfig(
        password="youshallnotpass",
        user_id=170939974227591168,
        host="127.0.0.1",
        port=2333,
        num_shards=1,
        node_id="test-node",
        log_level="DEBUG",
    )


@pytest.fixture
def mock_node():
    """Create a mock connected node for testing."""
    node = MagicMock()
    node.node_id = "test-node"
    node.is_connected = True
    node.send = AsyncMock()
    return node


@pytest.fixture
def mock_listener():
    """Create a listener whose hooks record their calls."""
    return AsyncMock(spec=AudioPlayerListener)


@pytest.fixture
def player_manager(mock_listener):
    return AudioPlayerManager(mock_listener)


@pytest.fixture
def wait_until():
    """Poll a predicate until it is true or the timeout expires."""

    async def _wait_until(predicate, timeout: float = 2.0) -> bool:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() >= deadline:
                return False
            await asyncio.sleep(0.01)
        return True

    return _wait_until


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
