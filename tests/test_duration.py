from video_create.timeline.duration import last_end, playable_duration, recompute
from video_create.timeline.models import MediaClip, TextOverlay


def test_recompute_empty_is_zero_and_playable_floor_is_one() -> None:
    assert recompute([], []) == 0
    assert playable_duration(recompute([], [])) == 1
    assert playable_duration(250) == 250


def test_recompute_takes_max_end_across_collections() -> None:
    clips = [
        MediaClip(id="clip-1", start=0, duration=200, source="a.mp4"),
        MediaClip(id="clip-2", start=10, duration=50, source="b.mp4"),
    ]
    overlays = [TextOverlay(id="text-1", start=50, duration=100, text="x")]

    assert last_end(clips) == 200
    assert last_end(overlays) == 150
    assert recompute(clips, overlays) == 200
    assert recompute([], overlays) == 150
