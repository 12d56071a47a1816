"""Pin ranking.

Every mode sorts descending. Python's sort is stable, so exact ties keep
their fetch order.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .models import PinSummary, SortMode

_SCORERS: dict[SortMode, Callable[[PinSummary], int]] = {
    SortMode.LIKES: lambda pin: pin.likes,
    SortMode.SAVES: lambda pin: pin.saves,
    SortMode.COMBINED: lambda pin: pin.combined_score,
}


def rank_pins(pins: Iterable[PinSummary], mode: str | SortMode | None = SortMode.COMBINED) -> list[PinSummary]:
    """Return a new list of pins ordered by the requested mode.

    Unknown modes fall back to the combined score instead of failing.
    """
    scorer = _SCORERS[SortMode.coerce(mode)]
    return sorted(pins, key=scorer, reverse=True)
