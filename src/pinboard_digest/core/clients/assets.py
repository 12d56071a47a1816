"""Same-origin relay for Pinterest image assets.

Only ``i.pinimg.com`` is reachable. Anything else is rejected before a
request is made, so the relay cannot be used to probe other hosts.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from ...config import get_http_timeout
from ..errors import BadRequestError, UpstreamError
from ..models import RelayedAsset

logger = logging.getLogger(__name__)

ALLOWED_HOSTS = frozenset({"i.pinimg.com"})
DEFAULT_CONTENT_TYPE = "image/jpeg"
# Pinned image URLs are content-addressed; a fetched asset never changes.
CACHE_CONTROL = "public, max-age=31536000, immutable"

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/123 Safari/537.36"
    ),
}


def validate_asset_url(target_url: Optional[str]) -> str:
    """Return the target URL if it is an absolute URL on an allow-listed host.

    Raises:
        BadRequestError: for a missing or malformed URL, or a foreign host.
    """
    if not target_url or not target_url.strip():
        raise BadRequestError("Missing url parameter.")
    target_url = target_url.strip()
    try:
        parts = urlsplit(target_url)
        host = parts.hostname
    except ValueError as exc:
        raise BadRequestError("Invalid url parameter.") from exc
    if parts.scheme.lower() not in ("http", "https") or not host:
        raise BadRequestError("Invalid url parameter.")
    if host not in ALLOWED_HOSTS:
        logger.warning("Relay refused non-allow-listed host %s", host)
        raise BadRequestError("Only Pinterest image hosts are supported.")
    return target_url


async def _download(client: httpx.AsyncClient, url: str) -> RelayedAsset:
    try:
        response = await client.get(url, headers=REQUEST_HEADERS)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Relay fetch failed for %s: %s", url, exc)
        raise UpstreamError("Failed to retrieve image from Pinterest.") from exc

    return RelayedAsset(
        content=response.content,
        content_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
        cache_control=CACHE_CONTROL,
    )


async def relay_asset(target_url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> RelayedAsset:
    """Fetch one image from the allow-listed Pinterest CDN.

    The whole body is buffered; payloads are single images. No retries.

    Raises:
        BadRequestError: if the URL is malformed or not on the allowed host.
        UpstreamError: if the CDN answers with an error or cannot be reached.
    """
    url = validate_asset_url(target_url)
    if client is not None:
        return await _download(client, url)
    async with httpx.AsyncClient(timeout=get_http_timeout()) as owned:
        return await _download(owned, url)
