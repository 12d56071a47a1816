"""Board identifier parsing.

Accepts either a full board URL (``https://www.pinterest.com/alice/travel/``)
or the ``alice/travel`` shorthand and reduces it to a BoardReference.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote, unquote, urlsplit

from .errors import InvalidInputError
from .models import BoardInfo, BoardReference

_URL_PREFIX = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.IGNORECASE)

PINTEREST_WEB_BASE = "https://www.pinterest.com"


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def parse_board(value: Optional[str]) -> BoardReference:
    """Extract the owner and board slug from user input.

    Only the first two non-empty path segments are used; trailing segments,
    query strings and fragments are ignored. No percent-decoding is applied.

    Raises:
        InvalidInputError: if the input is empty or does not name both an
            owner and a board.
    """
    if value is None:
        raise InvalidInputError(
            "Missing board parameter. Provide a Pinterest board URL or username/board slug."
        )
    trimmed = value.strip()
    if not trimmed:
        raise InvalidInputError("Pinterest board cannot be empty.")

    if _URL_PREFIX.match(trimmed):
        try:
            parts = urlsplit(trimmed)
        except ValueError as exc:
            raise InvalidInputError(
                "Invalid Pinterest URL. Provide a valid board link or username/board combination."
            ) from exc
        if not parts.netloc:
            raise InvalidInputError(
                "Invalid Pinterest URL. Provide a valid board link or username/board combination."
            )
        segments = _segments(parts.path)
        if len(segments) < 2:
            raise InvalidInputError(
                "Pinterest board URL must contain the username and board slug."
            )
    else:
        segments = _segments(trimmed)
        if len(segments) < 2:
            raise InvalidInputError(
                "Board input should follow username/board format when not using a full URL."
            )

    return BoardReference(owner=segments[0], slug=segments[1])


def encode_segment(segment: str) -> str:
    """Percent-encode a path segment exactly once, whether or not it arrived encoded."""
    return quote(unquote(segment), safe="")


def board_info(board: BoardReference) -> BoardInfo:
    """Display metadata for a board: a readable name and its canonical URL."""
    return BoardInfo(
        name=unquote(board.slug).replace("-", " "),
        owner=board.owner,
        url=f"{PINTEREST_WEB_BASE}/{encode_segment(board.owner)}/{encode_segment(board.slug)}/",
    )
