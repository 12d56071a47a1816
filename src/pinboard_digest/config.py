"""Runtime settings read from the environment.

Values are read on each call so tests and long-running servers pick up
changes without a restart.
"""

from __future__ import annotations

import logging
import os

import httpx

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
CONNECT_TIMEOUT_SECONDS = 10.0
DEFAULT_TRANSPORT = "streamable-http"
TRANSPORTS = ("streamable-http", "sse", "stdio")
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def get_http_timeout() -> httpx.Timeout:
    """Timeout applied to every outbound Pinterest request."""
    raw = os.environ.get("PINBOARD_HTTP_TIMEOUT", "")
    seconds = DEFAULT_HTTP_TIMEOUT_SECONDS
    if raw:
        try:
            seconds = float(raw)
        except ValueError:
            logger.warning("Ignoring invalid PINBOARD_HTTP_TIMEOUT=%r", raw)
        else:
            if seconds <= 0:
                logger.warning("Ignoring non-positive PINBOARD_HTTP_TIMEOUT=%r", raw)
                seconds = DEFAULT_HTTP_TIMEOUT_SECONDS
    return httpx.Timeout(seconds, connect=min(CONNECT_TIMEOUT_SECONDS, seconds))


def get_transport() -> str:
    transport = os.environ.get("PINBOARD_TRANSPORT", DEFAULT_TRANSPORT).strip().lower()
    if transport not in TRANSPORTS:
        logger.warning("Unknown PINBOARD_TRANSPORT=%r, using %s", transport, DEFAULT_TRANSPORT)
        return DEFAULT_TRANSPORT
    return transport


def configure_logging() -> None:
    """Install the process-wide log format once, at server start."""
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
