"""
WebSocket components for the Lavalink client.
"""
