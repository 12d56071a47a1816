"""Board aggregation: parse → fetch → normalize → rank → truncate."""

from __future__ import annotations

import logging
import re
from typing import Any, Optional

import httpx

from .boards import board_info, parse_board
from .clients import pinterest
from .errors import EmptyResultError
from .models import ResultSet, SortMode
from .normalize import normalize_pin
from .ranking import rank_pins

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 12
MIN_LIMIT = 1
MAX_LIMIT = 48
# Raw records requested per returned pin; some are dropped for lacking images.
OVERFETCH_FACTOR = 2

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp_limit(value: Any) -> int:
    """Parse a requested result size and clamp it to [MIN_LIMIT, MAX_LIMIT].

    Only the leading integer counts, so "3.5" and "12px" give 3 and 12.
    Missing values, or values with no leading digits, give DEFAULT_LIMIT.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_LIMIT
    if isinstance(value, int):
        limit = value
    else:
        match = _LEADING_INT.match(str(value))
        if match is None:
            return DEFAULT_LIMIT
        limit = int(match.group(1))
    return min(max(limit, MIN_LIMIT), MAX_LIMIT)


async def aggregate_board(
    board_input: Optional[str],
    limit: Any = DEFAULT_LIMIT,
    sort: str | SortMode | None = SortMode.COMBINED,
    client: Optional[httpx.AsyncClient] = None,
) -> ResultSet:
    """Fetch, normalize and rank the pins of one public board.

    Args:
        board_input: Board URL or ``owner/slug`` shorthand.
        limit: Requested number of pins, clamped to [1, 48].
        sort: ``likes``, ``saves``, or anything else for the combined score.
        client: Optional shared HTTP client for the upstream requests.

    Raises:
        InvalidInputError: if the board reference cannot be parsed.
        UpstreamError: if any page request fails.
        EmptyResultError: if no fetched pin has a usable image.
    """
    board = parse_board(board_input)
    size = clamp_limit(limit)
    mode = SortMode.coerce(sort)

    raw_pins = await pinterest.fetch_pins(board.owner, board.slug, size * OVERFETCH_FACTOR, client=client)
    summaries = [pin for pin in (normalize_pin(raw, board) for raw in raw_pins) if pin is not None]
    logger.info(
        "Board %s/%s: %d raw pins, %d usable, %d dropped",
        board.owner, board.slug, len(raw_pins), len(summaries), len(raw_pins) - len(summaries),
    )

    if not summaries:
        raise EmptyResultError("No pins found. Confirm the board is public and has content.")

    return ResultSet(board=board_info(board), pins=rank_pins(summaries, mode)[:size])
