"""
Integrations with Discord libraries.
"""

from .discord_voice import LavalinkVoiceClient

__all__ = ["LavalinkVoiceClient"]
