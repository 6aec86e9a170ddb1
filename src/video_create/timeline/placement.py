"""Auto-placement of new items at the end of the shared timeline axis."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any, Iterable, Mapping, cast

from video_create.timeline import duration
from video_create.timeline.errors import InvalidItemError
from video_create.timeline.models import (
    DEFAULT_DURATIONS,
    ID_PREFIXES,
    AnyItem,
    ItemKind,
    MediaClip,
    TextOverlay,
    TimelineSnapshot,
    normalize_kind,
)

logger = logging.getLogger(__name__)

DEFAULT_CLIP_SOURCE = "https://example.com/media/open-source-video.mp4"
DEFAULT_TEXT = "BUILD."

_PAYLOAD_KEYS: dict[ItemKind, frozenset[str]] = {
    ItemKind.MEDIA: frozenset({"source", "duration"}),
    ItemKind.TEXT: frozenset({"text", "duration"}),
}


@dataclass(slots=True, frozen=True)
class _Span:
    start: int
    duration: int

    @property
    def end(self) -> int:
        return self.start + self.duration


ORIGIN = _Span(start=0, duration=0)


def pick_latest_end(latest: Any, item: Any) -> Any:
    """Keep whichever operand ends later; on a tie the accumulator wins."""
    if item.start + item.duration > latest.start + latest.duration:
        return item
    return latest


def find_anchor(items: Iterable[AnyItem]) -> AnyItem | _Span:
    return reduce(pick_latest_end, items, ORIGIN)


def next_start(snapshot: TimelineSnapshot) -> int:
    # clips and overlays share one axis, so the search spans both
    anchor = find_anchor(snapshot.items())
    return anchor.start + anchor.duration


def append_item(
    snapshot: TimelineSnapshot,
    kind: ItemKind | str,
    payload: Mapping[str, Any] | None = None,
) -> tuple[AnyItem, TimelineSnapshot]:
    """Place a new item after the furthest current end and return the new snapshot.

    The input snapshot is left untouched; the affected collection is
    replaced by a new tuple and the total duration recomputed before
    returning.

    Raises:
        InvalidKindError: ``kind`` is not ``media`` or ``text``.
        InvalidItemError: the payload is malformed or the item would be invalid.
    """
    item_kind = normalize_kind(kind)
    fields = dict(payload or {})
    unknown = set(fields) - _PAYLOAD_KEYS[item_kind]
    if unknown:
        raise InvalidItemError(f"unsupported payload fields for {item_kind.value}: {sorted(unknown)}")

    item_duration = fields.get("duration", DEFAULT_DURATIONS[item_kind])
    start = next_start(snapshot)

    if item_kind is ItemKind.MEDIA:
        item: AnyItem = MediaClip(
            id=f"{ID_PREFIXES[item_kind]}-{len(snapshot.clips) + 1}",
            start=start,
            duration=item_duration,
            row=0,
            source=fields.get("source", DEFAULT_CLIP_SOURCE),
        )
    else:
        item = TextOverlay(
            id=f"{ID_PREFIXES[item_kind]}-{len(snapshot.text_overlays) + 1}",
            start=start,
            duration=item_duration,
            row=0,
            text=fields.get("text", DEFAULT_TEXT),
        )

    if item.id in snapshot.ids():
        raise InvalidItemError(f"id '{item.id}' is already placed on the timeline")

    if isinstance(item, MediaClip):
        updated = replace(snapshot, clips=(*snapshot.clips, item))
    else:
        updated = replace(snapshot, text_overlays=(*snapshot.text_overlays, item))
    updated = replace(updated, total_duration=duration.recompute(updated.clips, updated.text_overlays))

    logger.info(
        "placed %s at frames [%d, %d), total_duration=%d",
        item.id,
        item.start,
        item.end,
        updated.total_duration,
    )
    return item, updated


def append_media_clip(
    snapshot: TimelineSnapshot,
    source: str | None = None,
) -> tuple[MediaClip, TimelineSnapshot]:
    payload = {} if source is None else {"source": source}
    item, updated = append_item(snapshot, ItemKind.MEDIA, payload)
    return cast(MediaClip, item), updated


def append_text_overlay(
    snapshot: TimelineSnapshot,
    text: str | None = None,
) -> tuple[TextOverlay, TimelineSnapshot]:
    payload = {} if text is None else {"text": text}
    item, updated = append_item(snapshot, ItemKind.TEXT, payload)
    return cast(TextOverlay, item), updated
