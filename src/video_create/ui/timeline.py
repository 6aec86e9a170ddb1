"""Timeline view math: timecodes, ruler markers, item geometry and zoom."""

from __future__ import annotations

from dataclasses import dataclass

from video_create.timeline.models import ItemKind, TimelineItem

TRACK_LABELS: dict[ItemKind, str] = {
    ItemKind.MEDIA: "V1",
    ItemKind.TEXT: "V2",
}
TRACK_ROWS: dict[ItemKind, int] = {
    ItemKind.MEDIA: 0,
    ItemKind.TEXT: 1,
}

ZOOM_MIN = 0.5
ZOOM_MAX = 3.0
ZOOM_STEP = 0.25
MAX_RULER_MARKERS = 20


def format_timecode(frame: int, fps: int = 30, with_frames: bool = False) -> str:
    """Render ``frame`` as ``MM:SS`` or, with ``with_frames``, ``MM:SS.FF``."""
    if fps <= 0:
        raise ValueError("fps must be positive")
    frame = max(int(frame), 0)
    seconds, frames = divmod(frame, fps)
    minutes, seconds = divmod(seconds, 60)
    text = f"{minutes:02d}:{seconds:02d}"
    if with_frames:
        text += f".{frames:02d}"
    return text


@dataclass(slots=True, frozen=True)
class RulerMarker:
    frame: int
    ratio: float
    label: str


def ruler_markers(total_duration: int, fps: int = 30, max_markers: int = MAX_RULER_MARKERS) -> list[RulerMarker]:
    if fps <= 0:
        raise ValueError("fps must be positive")
    if max_markers <= 0:
        raise ValueError("max_markers must be positive")
    total = max(total_duration, 1)
    total_seconds = total / fps
    interval = max(1, int(total_seconds // max_markers))
    markers: list[RulerMarker] = []
    second = 0
    while second <= total_seconds:
        frame = second * fps
        markers.append(RulerMarker(frame=frame, ratio=frame / total, label=format_timecode(frame, fps, with_frames=True)))
        second += interval
    return markers


@dataclass(slots=True, frozen=True)
class ItemGeometry:
    item_id: str
    left_percent: float
    width_percent: float
    track_row: int
    track_label: str


def item_geometry(item: TimelineItem, total_duration: int) -> ItemGeometry:
    total = max(total_duration, 1)
    return ItemGeometry(
        item_id=item.id,
        left_percent=item.start / total * 100.0,
        width_percent=item.duration / total * 100.0,
        track_row=TRACK_ROWS[item.kind],
        track_label=TRACK_LABELS[item.kind],
    )


class TimelineZoom:
    def __init__(self, level: float = 1.0) -> None:
        self.level = 1.0
        self.set_level(level)

    def set_level(self, level: float) -> None:
        self.level = min(max(float(level), ZOOM_MIN), ZOOM_MAX)

    def zoom_in(self) -> float:
        self.set_level(self.level + ZOOM_STEP)
        return self.level

    def zoom_out(self) -> float:
        self.set_level(self.level - ZOOM_STEP)
        return self.level

    def label(self) -> str:
        return f"{round(self.level * 100)}%"
