"""Pinboard Digest MCP Server.

Top pins of any public Pinterest board — fetched, deduplicated, and ranked by
likes, saves, or a combined score — plus a relay for the board's images.
"""

__version__ = "0.1.0"
