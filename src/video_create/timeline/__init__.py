"""Timeline domain exports."""

from video_create.timeline.composition import (
    CompositionCache,
    FrameLayer,
    MediaPayload,
    RenderBlock,
    TextPayload,
    build_composition,
    resolve_frame,
)
from video_create.timeline.duration import playable_duration, recompute
from video_create.timeline.errors import (
    BackendUnavailableError,
    EngineDisposedError,
    InvalidItemError,
    InvalidKindError,
    TimelineError,
)
from video_create.timeline.models import ItemKind, MediaClip, TextOverlay, TimelineItem, TimelineSnapshot
from video_create.timeline.placement import append_item, append_media_clip, append_text_overlay

__all__ = [
    "BackendUnavailableError",
    "CompositionCache",
    "EngineDisposedError",
    "FrameLayer",
    "InvalidItemError",
    "InvalidKindError",
    "ItemKind",
    "MediaClip",
    "MediaPayload",
    "RenderBlock",
    "TextOverlay",
    "TextPayload",
    "TimelineError",
    "TimelineItem",
    "TimelineSnapshot",
    "append_item",
    "append_media_clip",
    "append_text_overlay",
    "build_composition",
    "playable_duration",
    "recompute",
    "resolve_frame",
]
