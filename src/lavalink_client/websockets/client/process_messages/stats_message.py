"""
Client-side stats message handler.
"""

import logging
import time
from typing import Optional

from lavalink_client.core.stats import RemoteStats


class StatsMessageHandler:
    """Keeps the latest statistics reported by a node."""

    def __init__(self, node_id: str, logger: logging.Logger) -> None:
        self.node_id: str = node_id
        self.logger: logging.Logger = logger
        self.stats: Optional[RemoteStats] = None
        self.last_update: Optional[float] = None

    def process_stats(self, stats: RemoteStats) -> None:
        self.stats = stats
        self.last_update = time.time()
        self.logger.debug(
            f"[{self.node_id}] Stats: {stats.playing_players}/{stats.players} playing, "
            f"cpu {stats.cpu.system_load:.2f}, penalty {stats.penalty:.2f}"
        )

    def reset(self) -> None:
        self.stats = None
        self.last_update = None
