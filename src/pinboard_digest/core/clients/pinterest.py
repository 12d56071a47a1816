"""Pinterest widgets board feed client.

Endpoint: https://widgets.pinterest.com/v3/pidgets/boards/{owner}/{slug}/pins/
No authentication required; only public boards are reachable. Pages are
chained with an opaque ``bookmark`` cursor.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ...config import get_http_timeout
from ..boards import encode_segment
from ..errors import UpstreamError
from ..models import RawRecord

logger = logging.getLogger(__name__)

API_BASE = "https://widgets.pinterest.com/v3/pidgets/boards"

# Hard ceiling on page requests per fetch, whatever the upstream claims.
MAX_PAGES = 10

REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/123 Safari/537.36"
    ),
    "Accept": "application/json",
}

UPSTREAM_ERROR_MESSAGE = "Pinterest responded with an error. Verify the board is public and try again."

# Known locations of the pin list and of the next-page cursor, in priority order.
_RECORD_PATHS: tuple[tuple[str, ...], ...] = (
    ("data", "pins"),
    ("resource_response", "data"),
)
_CURSOR_PATHS: tuple[tuple[str, ...], ...] = (
    ("bookmark",),
    ("resource_response", "bookmark"),
    ("resource", "options", "bookmark"),
)


def board_pins_url(owner: str, slug: str) -> str:
    """Build the feed URL, normalising any percent-encoding already present."""
    return f"{API_BASE}/{encode_segment(owner)}/{encode_segment(slug)}/pins/"


def _dig(payload: Any, path: tuple[str, ...]) -> Any:
    node = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def extract_records(payload: dict[str, Any]) -> list[Any]:
    """Return the first non-empty pin list found in a page, or an empty list."""
    for path in _RECORD_PATHS:
        records = _dig(payload, path)
        if isinstance(records, list) and records:
            return records
    return []


def extract_cursor(payload: dict[str, Any]) -> Optional[str]:
    """Return the next-page bookmark, or None at the end of the board."""
    for path in _CURSOR_PATHS:
        cursor = _dig(payload, path)
        if isinstance(cursor, str) and cursor:
            return cursor
    return None


def _record_id(record: RawRecord) -> Optional[str]:
    pin_id = record.get("id")
    if pin_id is None or pin_id == "":
        return None
    return str(pin_id)


async def _fetch_page(client: httpx.AsyncClient, url: str, cursor: Optional[str]) -> dict[str, Any]:
    params = {"bookmark": cursor} if cursor else None
    try:
        response = await client.get(url, params=params, headers=REQUEST_HEADERS)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.warning("Pinterest board feed returned HTTP %s for %s", exc.response.status_code, url)
        raise UpstreamError(UPSTREAM_ERROR_MESSAGE) from exc
    except httpx.HTTPError as exc:
        logger.warning("Pinterest board feed request failed for %s: %s", url, exc)
        raise UpstreamError(UPSTREAM_ERROR_MESSAGE) from exc

    try:
        payload = response.json()
    except ValueError as exc:
        logger.warning("Pinterest board feed returned a non-JSON body for %s", url)
        raise UpstreamError("Pinterest returned a malformed response.") from exc
    if not isinstance(payload, dict):
        logger.warning("Pinterest board feed returned %s instead of an object for %s", type(payload).__name__, url)
        raise UpstreamError("Pinterest returned a malformed response.")
    return payload


async def _paginate(client: httpx.AsyncClient, owner: str, slug: str, target_count: int) -> list[RawRecord]:
    url = board_pins_url(owner, slug)
    collected: list[RawRecord] = []
    seen_ids: set[str] = set()
    cursor: Optional[str] = None
    iterations = 0

    while len(collected) < target_count and iterations < MAX_PAGES:
        payload = await _fetch_page(client, url, cursor)
        records = extract_records(payload)
        if not records:
            logger.debug("Board %s/%s: empty page after %d requests", owner, slug, iterations + 1)
            break

        added = 0
        for record in records:
            if not isinstance(record, dict):
                continue
            pin_id = _record_id(record)
            if pin_id is not None:
                if pin_id in seen_ids:
                    continue
                seen_ids.add(pin_id)
            collected.append(record)
            added += 1

        iterations += 1
        cursor = extract_cursor(payload)
        logger.debug(
            "Board %s/%s page %d: raw=%d new=%d total=%d more=%s",
            owner, slug, iterations, len(records), added, len(collected), cursor is not None,
        )
        if not cursor:
            break

    logger.info(
        "Board %s/%s: collected %d pins in %d page(s) (target %d)",
        owner, slug, len(collected), iterations, target_count,
    )
    return collected[:target_count]


async def fetch_pins(
    owner: str,
    slug: str,
    target_count: int,
    client: Optional[httpx.AsyncClient] = None,
) -> list[RawRecord]:
    """Collect up to ``target_count`` unique raw pins from a public board.

    Follows bookmarks page by page, dropping records whose id was already
    seen (records without an id are always kept), and stops at the target,
    at the end of the board, or after MAX_PAGES requests.

    Args:
        owner: Board owner's username.
        slug: Board slug.
        target_count: Maximum number of raw records to return.
        client: Optional shared client; a short-lived one is created otherwise.

    Raises:
        UpstreamError: if any page request fails. Pins gathered from earlier
            pages are discarded.
    """
    if target_count <= 0:
        return []
    if client is not None:
        return await _paginate(client, owner, slug, target_count)
    async with httpx.AsyncClient(timeout=get_http_timeout()) as owned:
        return await _paginate(owned, owner, slug, target_count)
