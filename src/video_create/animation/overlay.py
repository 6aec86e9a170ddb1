"""Entrance animation for text overlays."""

from __future__ import annotations

from dataclasses import dataclass

from video_create.animation.spring import spring

ENTRANCE_FRAMES = 30
OPACITY_FROM, OPACITY_TO = 0.0, 1.0
SCALE_FROM, SCALE_TO = 0.8, 1.0


@dataclass(slots=True, frozen=True)
class OverlayAnimation:
    opacity: float
    scale: float


def animate(local_frame: float, fps: float) -> OverlayAnimation:
    """Opacity and scale of an overlay ``local_frame`` frames after its start."""
    return OverlayAnimation(
        opacity=spring(
            local_frame,
            fps,
            from_value=OPACITY_FROM,
            to_value=OPACITY_TO,
            duration_in_frames=ENTRANCE_FRAMES,
        ),
        scale=spring(
            local_frame,
            fps,
            from_value=SCALE_FROM,
            to_value=SCALE_TO,
            duration_in_frames=ENTRANCE_FRAMES,
        ),
    )
