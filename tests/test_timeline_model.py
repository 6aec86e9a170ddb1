import pytest

from video_create.timeline.errors import InvalidItemError, InvalidKindError
from video_create.timeline.models import ItemKind, MediaClip, TextOverlay, TimelineItem, TimelineSnapshot, normalize_kind


def test_media_clip_exposes_exclusive_end_and_kind() -> None:
    clip = MediaClip(id="clip-1", start=10, duration=200, source="file:///a.mp4")

    assert clip.end == 210
    assert clip.row == 0
    assert clip.kind is ItemKind.MEDIA


def test_text_overlay_kind() -> None:
    overlay = TextOverlay(id="text-1", start=0, duration=100, text="BUILD.")
    assert overlay.kind is ItemKind.TEXT
    assert overlay.end == 100


@pytest.mark.parametrize("duration", [0, -5])
def test_non_positive_duration_is_rejected(duration: int) -> None:
    with pytest.raises(InvalidItemError):
        MediaClip(id="clip-1", start=0, duration=duration, source="a.mp4")


def test_negative_start_is_rejected() -> None:
    with pytest.raises(InvalidItemError):
        TextOverlay(id="text-1", start=-1, duration=10, text="x")


def test_negative_row_and_empty_id_are_rejected() -> None:
    with pytest.raises(InvalidItemError):
        TextOverlay(id="text-1", start=0, duration=10, row=-1, text="x")
    with pytest.raises(InvalidItemError):
        TextOverlay(id="", start=0, duration=10, text="x")


def test_non_integer_frames_are_rejected() -> None:
    with pytest.raises(InvalidItemError):
        MediaClip(id="clip-1", start=0, duration=1.5, source="a.mp4")  # type: ignore[arg-type]
    with pytest.raises(InvalidItemError):
        MediaClip(id="clip-1", start=True, duration=10, source="a.mp4")  # type: ignore[arg-type]


def test_invalid_item_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        MediaClip(id="clip-1", start=0, duration=0, source="a.mp4")


def test_base_item_cannot_be_constructed_directly() -> None:
    with pytest.raises(TypeError):
        TimelineItem(id="item-1", start=0, duration=10)


def test_items_are_immutable() -> None:
    clip = MediaClip(id="clip-1", start=0, duration=10, source="a.mp4")
    with pytest.raises(AttributeError):
        clip.start = 5  # type: ignore[misc]


def test_overlaps_uses_half_open_intervals() -> None:
    first = MediaClip(id="clip-1", start=0, duration=200, source="a.mp4")
    touching = TextOverlay(id="text-1", start=200, duration=100, text="x")
    inside = TextOverlay(id="text-2", start=50, duration=10, text="y")

    assert not first.overlaps(touching)
    assert first.overlaps(inside)
    assert inside.overlaps(first)


def test_normalize_kind_accepts_enum_and_value() -> None:
    assert normalize_kind("media") is ItemKind.MEDIA
    assert normalize_kind(ItemKind.TEXT) is ItemKind.TEXT
    with pytest.raises(InvalidKindError):
        normalize_kind("audio")


def test_empty_snapshot_has_playable_floor() -> None:
    snapshot = TimelineSnapshot.empty()

    assert snapshot.items() == ()
    assert snapshot.total_duration == 0
    assert snapshot.playable_duration == 1
