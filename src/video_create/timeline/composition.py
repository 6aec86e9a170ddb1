"""Ordered render sequence built from the placed items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from video_create.animation.overlay import OverlayAnimation, animate
from video_create.timeline.models import AnyItem, ItemKind, MediaClip, TextOverlay


@dataclass(slots=True, frozen=True)
class MediaPayload:
    source: str


@dataclass(slots=True, frozen=True)
class TextPayload:
    text: str


RenderPayload = MediaPayload | TextPayload


@dataclass(slots=True, frozen=True)
class RenderBlock:
    id: str
    from_frame: int
    duration_in_frames: int
    payload: RenderPayload

    @property
    def kind(self) -> ItemKind:
        if isinstance(self.payload, MediaPayload):
            return ItemKind.MEDIA
        return ItemKind.TEXT

    @property
    def end_frame(self) -> int:
        return self.from_frame + self.duration_in_frames

    def contains(self, frame: int) -> bool:
        return self.from_frame <= frame < self.end_frame


@dataclass(slots=True, frozen=True)
class FrameLayer:
    block: RenderBlock
    local_frame: int
    animation: OverlayAnimation | None = None


def to_render_block(item: AnyItem) -> RenderBlock:
    if isinstance(item, MediaClip):
        payload: RenderPayload = MediaPayload(source=item.source)
    elif isinstance(item, TextOverlay):
        payload = TextPayload(text=item.text)
    else:
        raise TypeError(f"unsupported timeline item {type(item).__name__}")
    return RenderBlock(
        id=item.id,
        from_frame=item.start,
        duration_in_frames=item.duration,
        payload=payload,
    )


def build_composition(
    clips: Sequence[MediaClip],
    overlays: Sequence[TextOverlay],
) -> tuple[RenderBlock, ...]:
    """Merge clips then overlays and order them by start frame.

    ``sorted`` is stable, so items sharing a start frame keep their merge
    order (clips before overlays, each in append order).
    """
    merged: list[AnyItem] = [*clips, *overlays]
    ordered = sorted(merged, key=lambda item: item.start)
    return tuple(to_render_block(item) for item in ordered)


def resolve_frame(blocks: Sequence[RenderBlock], frame: int, fps: float) -> list[FrameLayer]:
    """Layers visible at ``frame``, bottom to top, with overlay animation applied."""
    layers: list[FrameLayer] = []
    for block in blocks:
        if not block.contains(frame):
            continue
        local_frame = frame - block.from_frame
        animation = animate(local_frame, fps) if isinstance(block.payload, TextPayload) else None
        layers.append(FrameLayer(block=block, local_frame=local_frame, animation=animation))
    return layers


class CompositionCache:
    """Memoizes ``build_composition`` on the identity of the input collections."""

    def __init__(self) -> None:
        self._clips: Sequence[MediaClip] | None = None
        self._overlays: Sequence[TextOverlay] | None = None
        self._blocks: tuple[RenderBlock, ...] = ()
        self.builds = 0

    def get(
        self,
        clips: Sequence[MediaClip],
        overlays: Sequence[TextOverlay],
    ) -> tuple[RenderBlock, ...]:
        if clips is self._clips and overlays is self._overlays:
            return self._blocks
        self._blocks = build_composition(clips, overlays)
        self._clips = clips
        self._overlays = overlays
        self.builds += 1
        return self._blocks
