"""
Unit tests for configuration loading.
"""

import os

import pytest
from unittest.mock import patch

from lavalink_client.config.settings import ConfigManager, LavalinkConfig
from lavalink_client.infrastructure.exceptions import ConfigurationError

LAVALINK_ENV_VARS = [
    "LAVALINK_HOST",
    "LAVALINK_PORT",
    "LAVALINK_PASSWORD",
    "LAVALINK_SECURE",
    "LAVALINK_USER_ID",
    "LAVALINK_NUM_SHARDS",
    "LAVALINK_NODE_ID",
    "LAVALINK_CLIENT_NAME",
    "LAVALINK_RESUME_KEY",
    "LAVALINK_MAX_RETRIES",
    "LAVALINK_RETRY_DELAY",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in LAVALINK_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def manager(clean_env, tmp_path):
    return ConfigManager(env_file_path=str(tmp_path / "missing.env"))


class TestLavalinkConfig:
    """Test cases for LavalinkConfig class."""

    @pytest.mark.unit
    def test_defaults(self):
        config = LavalinkConfig(password="pw", user_id=1)

        assert config.host == "127.0.0.1"
        assert config.port == 2333
        assert config.secure is False
        assert config.num_shards == 1
        assert config.node_id == "main"
        assert config.resume_key is None

    @pytest.mark.unit
    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port(self, port):
        with pytest.raises(ConfigurationError, match="port"):
            LavalinkConfig(password="pw", user_id=1, port=port)

    @pytest.mark.unit
    def test_invalid_num_shards(self):
        with pytest.raises(ConfigurationError):
            LavalinkConfig(password="pw", user_id=1, num_shards=0)


class TestConfigManager:
    """Test cases for ConfigManager class."""

    @pytest.mark.unit
    def test_minimal_environment(self, manager, clean_env):
        clean_env.setenv("LAVALINK_PASSWORD", "youshallnotpass")
        clean_env.setenv("LAVALINK_USER_ID", "170939974227591168")

        config = manager.get_config()

        assert config.password == "youshallnotpass"
        assert config.user_id == 170939974227591168
        assert config.host == "127.0.0.1"
        assert config.port == 2333
        assert config.max_retries == 5
        assert config.retry_delay == 1.0

    @pytest.mark.unit
    def test_full_environment(self, manager, clean_env):
        clean_env.setenv("LAVALINK_PASSWORD", "pw")
        clean_env.setenv("LAVALINK_USER_ID", "42")
        clean_env.setenv("LAVALINK_HOST", "lavalink.example.org")
        clean_env.setenv("LAVALINK_PORT", "443")
        clean_env.setenv("LAVALINK_SECURE", "true")
        clean_env.setenv("LAVALINK_NUM_SHARDS", "4")
        clean_env.setenv("LAVALINK_NODE_ID", "eu-1")
        clean_env.setenv("LAVALINK_CLIENT_NAME", "my-bot")
        clean_env.setenv("LAVALINK_RESUME_KEY", "resume-me")
        clean_env.setenv("LAVALINK_MAX_RETRIES", "2")
        clean_env.setenv("LAVALINK_RETRY_DELAY", "0.5")
        clean_env.setenv("LOG_LEVEL", "WARNING")

        config = manager.get_config()

        assert config.host == "lavalink.example.org"
        assert config.port == 443
        assert config.secure is True
        assert config.num_shards == 4
        assert config.node_id == "eu-1"
        assert config.client_name == "my-bot"
        assert config.resume_key == "resume-me"
        assert config.max_retries == 2
        assert config.retry_delay == 0.5
        assert config.log_level == "WARNING"

    @pytest.mark.unit
    def test_missing_password(self, manager, clean_env):
        clean_env.setenv("LAVALINK_USER_ID", "42")

        with pytest.raises(ConfigurationError, match="LAVALINK_PASSWORD"):
            manager.get_config()

    @pytest.mark.unit
    def test_missing_user_id(self, manager, clean_env):
        clean_env.setenv("LAVALINK_PASSWORD", "pw")

        with pytest.raises(ConfigurationError, match="LAVALINK_USER_ID"):
            manager.get_config()

    @pytest.mark.unit
    def test_non_numeric_port(self, manager, clean_env):
        clean_env.setenv("LAVALINK_PASSWORD", "pw")
        clean_env.setenv("LAVALINK_USER_ID", "42")
        clean_env.setenv("LAVALINK_PORT", "http")

        with pytest.raises(ConfigurationError, match="integer"):
            manager.get_config()

    @pytest.mark.unit
    def test_loads_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("LAVALINK_PASSWORD=from-file\nLAVALINK_USER_ID=7\n")

        with patch.dict(os.environ, {}, clear=False):
            config = ConfigManager(env_file_path=str(env_file)).get_config()

        assert config.password == "from-file"
        assert config.user_id == 7
