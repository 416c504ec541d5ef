#!/usr/bin/env python3
"""
Connectivity check for a Lavalink node.

This script connects to the node configured in the environment (or .env),
optionally loads tracks for an identifier, waits for a stats message and
prints a short report.

Usage:
    python check_node.py
    python check_node.py --identifier "ytsearch:lofi hip hop"
"""

import argparse
import asyncio
import sys

from lavalink_client import (
    ConfigurationError,
    LavalinkError,
    NodeManager,
    config_manager,
    setup_logging,
)

logger = setup_logging(component_name="check_node")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Check a Lavalink node")
    parser.add_argument(
        "--identifier",
        help="Identifier to resolve through /loadtracks (URL or search query)",
    )
    parser.add_argument(
        "--stats-timeout",
        type=float,
        default=65.0,
        help="Seconds to wait for the node's first stats message",
    )
    return parser.parse_args(argv)


async def wait_for_stats(node, timeout: float):
    """Poll until the node has reported statistics or the timeout expires."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while node.stats is None and loop.time() < deadline:
        await asyncio.sleep(0.5)
    return node.stats


async def check_node(identifier=None, stats_timeout: float = 65.0) -> bool:
    """Run the check against the configured node."""
    config = config_manager.get_config()
    setup_logging(component_name="lavalink_client", log_level=config.log_level)
    manager = NodeManager.from_config(config)
    node = manager.nodes[config.node_id]

    try:
        if not await node.connect(config.max_retries, config.retry_delay):
            logger.error(f"Could not connect to {node.ws_url}")
            return False

        print(f"Connected to {node.ws_url}")

        if identifier:
            result = await node.rest.load_tracks(identifier)
            print(f"Load type: {result.load_type.value}")
            for i, track in enumerate(result.tracks, 1):
                print(f"{i:2d}. {track.info.author} - {track.info.title} ({track.info.length} ms)")
            if result.exception:
                print(f"Load failed: {result.exception.message} ({result.exception.severity})")

        stats = await wait_for_stats(node, stats_timeout)
        if stats is None:
            print("No stats received before the timeout")
        else:
            print(f"Players: {stats.playing_players}/{stats.players} playing")
            print(f"Uptime: {stats.uptime // 1000}s")
            print(f"CPU: {stats.cpu.cores} cores, system load {stats.cpu.system_load:.2%}")
            print(f"Memory used: {stats.memory.used // (1024 * 1024)} MiB")
            print(f"Penalty: {stats.penalty:.2f}")

        return True
    finally:
        await manager.close()


if __name__ == "__main__":
    args = parse_args()
    try:
        ok = asyncio.run(check_node(args.identifier, args.stats_timeout))
    except KeyboardInterrupt:
        print("\nCheck interrupted")
        sys.exit(130)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        sys.exit(2)
    except LavalinkError as e:
        logger.critical(f"Node check failed: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(0 if ok else 1)
