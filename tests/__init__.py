"""
Test suite for the Lavalink client.

This package contains tests organized by type:
- Unit tests for individual components
- Integration tests against in-process fake nodes
- Test fixtures and utilities
"""
