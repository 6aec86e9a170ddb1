"""Timeline item domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from video_create.timeline.errors import InvalidItemError, InvalidKindError


class ItemKind(str, Enum):
    MEDIA = "media"
    TEXT = "text"


DEFAULT_DURATIONS: dict[ItemKind, int] = {
    ItemKind.MEDIA: 200,
    ItemKind.TEXT: 100,
}

ID_PREFIXES: dict[ItemKind, str] = {
    ItemKind.MEDIA: "clip",
    ItemKind.TEXT: "text",
}


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass but never a valid frame value
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidItemError(f"{name} must be an integer frame value, got {value!r}")
    return value


@dataclass(slots=True, frozen=True, kw_only=True)
class TimelineItem:
    """A placed element occupying the half-open frame range [start, end)."""

    kind: ClassVar[ItemKind]

    id: str
    start: int
    duration: int
    row: int = 0

    def __post_init__(self) -> None:
        if type(self) is TimelineItem:
            raise TypeError("TimelineItem is abstract; construct a MediaClip or TextOverlay")
        if not isinstance(self.id, str) or not self.id:
            raise InvalidItemError("id must be a non-empty string")
        if _require_int("start", self.start) < 0:
            raise InvalidItemError(f"start must be >= 0, got {self.start}")
        if _require_int("duration", self.duration) <= 0:
            raise InvalidItemError(f"duration must be > 0, got {self.duration}")
        if _require_int("row", self.row) < 0:
            raise InvalidItemError(f"row must be >= 0, got {self.row}")

    @property
    def end(self) -> int:
        return self.start + self.duration

    def overlaps(self, other: TimelineItem) -> bool:
        return self.start < other.end and other.start < self.end


@dataclass(slots=True, frozen=True, kw_only=True)
class MediaClip(TimelineItem):
    kind: ClassVar[ItemKind] = ItemKind.MEDIA

    source: str

    def __post_init__(self) -> None:
        TimelineItem.__post_init__(self)
        if not isinstance(self.source, str):
            raise InvalidItemError("source must be a string")


@dataclass(slots=True, frozen=True, kw_only=True)
class TextOverlay(TimelineItem):
    kind: ClassVar[ItemKind] = ItemKind.TEXT

    text: str

    def __post_init__(self) -> None:
        TimelineItem.__post_init__(self)
        if not isinstance(self.text, str):
            raise InvalidItemError("text must be a string")


AnyItem = MediaClip | TextOverlay


def normalize_kind(kind: ItemKind | str) -> ItemKind:
    try:
        return ItemKind(kind)
    except ValueError as exc:
        raise InvalidKindError(f"Unsupported item kind '{kind}'") from exc


@dataclass(slots=True, frozen=True)
class TimelineSnapshot:
    """Immutable view of both item collections and their derived length.

    ``total_duration`` is the raw aggregate (0 for an empty timeline); use
    ``playable_duration`` wherever a strictly positive length is required.
    """

    clips: tuple[MediaClip, ...] = ()
    text_overlays: tuple[TextOverlay, ...] = ()
    total_duration: int = 0

    @staticmethod
    def empty() -> TimelineSnapshot:
        return TimelineSnapshot()

    def items(self) -> tuple[AnyItem, ...]:
        return (*self.clips, *self.text_overlays)

    def ids(self) -> set[str]:
        return {item.id for item in self.items()}

    @property
    def playable_duration(self) -> int:
        return max(1, self.total_duration)
