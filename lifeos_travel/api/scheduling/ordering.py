# lifeos_travel/api/scheduling/ordering.py
"""Ordering of stops that share a day.

Precedence, first non-tie wins:

1. ``manual_order`` when both stops have one (ascending);
2. a stop with ``manual_order`` before one without;
3. the effective HH:MM sort key (string compare, zero-padded);
4. ``name`` (ordinal, case-sensitive).
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List, Tuple

from lifeos_travel.api.errors import OrderingConflict
from lifeos_travel.api.models import Stop, TimeMode
from lifeos_travel.api.scheduling.time_buckets import bucket_sort_key

logger = logging.getLogger(__name__)

NO_TIME_SORT_KEY = "23:59"

UP = "up"
DOWN = "down"


def effective_sort_key(stop: Stop) -> str:
    """HH:MM used to order ``stop`` when manual order does not decide."""
    if stop.time_mode == TimeMode.FIXED and stop.time:
        return stop.time
    if stop.time_mode == TimeMode.BUCKET and stop.time_bucket:
        return bucket_sort_key(stop.time_bucket)
    return NO_TIME_SORT_KEY


def stop_sort_key(stop: Stop) -> Tuple[int, int, str, str]:
    """Tuple key equivalent to :func:`compare_stops`."""
    has_manual = stop.manual_order is not None
    return (
        0 if has_manual else 1,
        stop.manual_order if has_manual else 0,
        effective_sort_key(stop),
        stop.name,
    )


def compare_stops(a: Stop, b: Stop) -> int:
    """Three-way comparison for two stops of the same day group."""
    key_a, key_b = stop_sort_key(a), stop_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_stops(stops: Iterable[Stop]) -> List[Stop]:
    """Return a new list of ``stops`` in display order."""
    return sorted(stops, key=stop_sort_key)


def move_stop(stops: List[Stop], index: int, direction: str) -> List[Stop]:
    """Swap the stop at ``index`` with its neighbour and pin the new order.

    Returns a new list of copies in which every stop carries ``manual_order``
    equal to its position, so regrouping keeps what the user arranged. Moving
    past either end returns the stops unchanged.

    Raises:
        OrderingConflict: both stops are on the same date and the move would
            put a stop before one with an earlier time slot (up) or after one
            with a later time slot (down).
        ValueError: unknown direction.
    """
    if direction not in (UP, DOWN):
        raise ValueError(f"Unknown direction: {direction!r}")

    target = index - 1 if direction == UP else index + 1
    if index < 0 or index >= len(stops) or target < 0 or target >= len(stops):
        return list(stops)

    current, neighbour = stops[index], stops[target]
    if current.date and neighbour.date and current.date == neighbour.date:
        current_key = effective_sort_key(current)
        neighbour_key = effective_sort_key(neighbour)
        if direction == UP and neighbour_key < current_key:
            logger.warning(f"Refusing to move {current.id} above {neighbour.id} ({neighbour_key} < {current_key})")
            raise OrderingConflict(
                "Cannot move a stop before one with an earlier time slot on the same day"
            )
        if direction == DOWN and neighbour_key > current_key:
            logger.warning(f"Refusing to move {current.id} below {neighbour.id} ({neighbour_key} > {current_key})")
            raise OrderingConflict(
                "Cannot move a stop after one with a later time slot on the same day"
            )

    reordered = list(stops)
    reordered[index], reordered[target] = reordered[target], reordered[index]
    return [replace(stop, manual_order=position) for position, stop in enumerate(reordered)]


__all__ = [
    "NO_TIME_SORT_KEY",
    "UP",
    "DOWN",
    "effective_sort_key",
    "stop_sort_key",
    "compare_stops",
    "sort_stops",
    "move_stop",
]
