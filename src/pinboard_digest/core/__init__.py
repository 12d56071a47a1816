"""Core business logic — board parsing, the Pinterest clients, normalization, ranking.

This module is framework-agnostic. It has no dependency on MCP, Starlette,
or any server framework; the server module only maps requests onto it.
"""
