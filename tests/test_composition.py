import pytest

from video_create.timeline.composition import (
    CompositionCache,
    MediaPayload,
    TextPayload,
    build_composition,
    resolve_frame,
    to_render_block,
)
from video_create.timeline.models import ItemKind, MediaClip, TextOverlay, TimelineSnapshot
from video_create.timeline.placement import append_media_clip, append_text_overlay


def _scenario() -> TimelineSnapshot:
    snapshot = TimelineSnapshot.empty()
    _, snapshot = append_text_overlay(snapshot)
    _, snapshot = append_media_clip(snapshot)
    _, snapshot = append_text_overlay(snapshot)
    return snapshot


def test_build_orders_by_start_and_tags_variants() -> None:
    snapshot = _scenario()
    blocks = build_composition(snapshot.clips, snapshot.text_overlays)

    assert [block.id for block in blocks] == ["text-1", "clip-1", "text-2"]
    assert [block.from_frame for block in blocks] == [0, 100, 300]
    assert [block.kind for block in blocks] == [ItemKind.TEXT, ItemKind.MEDIA, ItemKind.TEXT]
    assert blocks[1].payload == MediaPayload(source=snapshot.clips[0].source)
    assert blocks[0].payload == TextPayload(text="BUILD.")
    assert blocks[1].duration_in_frames == 200
    assert blocks[1].end_frame == 300


def test_equal_starts_keep_merge_order() -> None:
    clips = (
        MediaClip(id="z-clip", start=0, duration=30, source="z.mp4"),
        MediaClip(id="a-clip", start=0, duration=10, source="a.mp4"),
    )
    overlays = (
        TextOverlay(id="m-text", start=0, duration=5, text="m"),
        TextOverlay(id="b-text", start=0, duration=50, text="b"),
    )

    blocks = build_composition(clips, overlays)

    assert [block.id for block in blocks] == ["z-clip", "a-clip", "m-text", "b-text"]


def test_build_output_is_sorted_and_deterministic() -> None:
    clips = (
        MediaClip(id="clip-1", start=90, duration=10, source="a.mp4"),
        MediaClip(id="clip-2", start=0, duration=10, source="b.mp4"),
    )
    overlays = (TextOverlay(id="text-1", start=45, duration=10, text="x"),)

    first = build_composition(clips, overlays)
    second = build_composition(clips, overlays)

    starts = [block.from_frame for block in first]
    assert starts == sorted(starts)
    assert first == second


def test_render_block_interval_is_half_open() -> None:
    block = to_render_block(TextOverlay(id="text-1", start=10, duration=5, text="x"))

    assert not block.contains(9)
    assert block.contains(10)
    assert block.contains(14)
    assert not block.contains(15)


def test_unknown_item_type_is_rejected() -> None:
    with pytest.raises(TypeError):
        to_render_block(object())  # type: ignore[arg-type]


def test_resolve_frame_returns_visible_layers_with_text_animation() -> None:
    clips = (MediaClip(id="clip-1", start=0, duration=200, source="a.mp4"),)
    overlays = (TextOverlay(id="text-1", start=50, duration=100, text="x"),)
    blocks = build_composition(clips, overlays)

    layers = resolve_frame(blocks, 50, fps=30)

    assert [layer.block.id for layer in layers] == ["clip-1", "text-1"]
    assert layers[0].animation is None
    assert layers[0].local_frame == 50
    assert layers[1].local_frame == 0
    assert layers[1].animation is not None
    assert layers[1].animation.opacity == 0.0
    assert resolve_frame(blocks, 200, fps=30) == []


def test_resolve_frame_is_identical_after_backward_seek() -> None:
    overlays = (TextOverlay(id="text-1", start=0, duration=100, text="x"),)
    blocks = build_composition((), overlays)

    forward = [resolve_frame(blocks, frame, fps=30) for frame in range(0, 40)]
    backward = [resolve_frame(blocks, frame, fps=30) for frame in reversed(range(0, 40))]

    assert forward == list(reversed(backward))


def test_cache_rebuilds_only_when_collections_are_replaced() -> None:
    snapshot = _scenario()
    cache = CompositionCache()

    first = cache.get(snapshot.clips, snapshot.text_overlays)
    again = cache.get(snapshot.clips, snapshot.text_overlays)
    assert again is first
    assert cache.builds == 1

    _, updated = append_media_clip(snapshot)
    rebuilt = cache.get(updated.clips, updated.text_overlays)
    assert rebuilt is not first
    assert len(rebuilt) == len(first) + 1
    assert cache.builds == 2
