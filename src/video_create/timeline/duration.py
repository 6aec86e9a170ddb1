"""Total composition length derived from the placed items."""

from __future__ import annotations

from typing import Iterable

from video_create.timeline.models import TimelineItem


def last_end(items: Iterable[TimelineItem]) -> int:
    return max((item.end for item in items), default=0)


def recompute(clips: Iterable[TimelineItem], overlays: Iterable[TimelineItem]) -> int:
    """Return the furthest exclusive end frame over both collections (0 when empty)."""
    return max(last_end(clips), last_end(overlays))


def playable_duration(total_duration: int) -> int:
    # playback backends reject zero-length compositions
    return max(1, total_duration)
