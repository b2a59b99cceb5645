from __future__ import annotations

import logging


LOGGER = logging.getLogger(__name__)


def budget_durations(frame_count: int, delay: int, max_duration: int = 0) -> list[int]:
    """Per-frame durations in ms, clamped so the total stays within `max_duration`.

    A `max_duration` of 0 (or less) means unlimited. The first frame is always
    kept, even when the budget is smaller than one delay.
    """
    durations: list[int] = []
    remaining = max_duration
    for _ in range(frame_count):
        duration = delay
        if max_duration > 0:
            duration = min(duration, remaining)
            remaining -= duration
        durations.append(duration)
        if max_duration > 0 and remaining <= 0:
            break
    LOGGER.debug(
        "Budgeted %d of %d frames; delay=%dms max_duration=%dms",
        len(durations),
        frame_count,
        delay,
        max_duration,
    )
    return durations
