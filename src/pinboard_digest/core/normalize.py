"""Raw pin → PinSummary normalization.

Pinterest records are loosely typed: fields go missing, change type, or move
between pages. Every lookup here tolerates that, and a record that cannot be
displayed yields None instead of raising.
"""

from __future__ import annotations

import math
from typing import Any, Optional
from urllib.parse import urlsplit

from .boards import PINTEREST_WEB_BASE
from .models import BoardReference, PinSummary, RawRecord

# Largest first.
IMAGE_VARIANTS = ("orig", "736x", "474x", "170x")


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _first_text(*values: Any) -> str:
    for value in values:
        text = _text(value)
        if text:
            return text
    return ""


def _count(value: Any) -> int:
    """Coerce an engagement counter; anything that is not a real number is 0."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, int(value))


def _is_web_url(value: Any) -> bool:
    if not isinstance(value, str) or not value:
        return False
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme.lower() in ("http", "https") and bool(parts.netloc)


def select_image_url(record: RawRecord) -> Optional[str]:
    """Return the URL of the largest image variant that has one."""
    images = record.get("images")
    if not isinstance(images, dict):
        return None
    for variant in IMAGE_VARIANTS:
        image = images.get(variant)
        if isinstance(image, dict):
            url = _text(image.get("url"))
            if url:
                return url
    return None


def pin_page_url(pin_id: str, board: BoardReference) -> str:
    return f"{PINTEREST_WEB_BASE}/pin/{pin_id}/?board={board.owner}/{board.slug}"


def normalize_pin(record: RawRecord, board: BoardReference) -> Optional[PinSummary]:
    """Convert one raw record into a PinSummary, or None if it has no image.

    Title prefers rich metadata, then the pin note, then its description;
    description prefers rich metadata, then description, then note.
    The pin's own link is kept only when it is an absolute http(s) URL.
    """
    if not isinstance(record, dict):
        return None
    image_url = select_image_url(record)
    if image_url is None:
        return None

    rich = record.get("rich_metadata")
    if not isinstance(rich, dict):
        rich = {}

    raw_id = record.get("id")
    pin_id = "" if raw_id is None else str(raw_id)
    link = record.get("link")

    return PinSummary(
        id=pin_id,
        title=_first_text(rich.get("title"), record.get("note"), record.get("description")),
        description=_first_text(rich.get("description"), record.get("description"), record.get("note")),
        image_url=image_url,
        pin_url=link if _is_web_url(link) else pin_page_url(pin_id, board),
        likes=_count(record.get("like_count")),
        saves=_count(record.get("repin_count")),
    )
