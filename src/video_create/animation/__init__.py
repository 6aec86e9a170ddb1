"""Stateless animation curves."""

from video_create.animation.overlay import ENTRANCE_FRAMES, OverlayAnimation, animate
from video_create.animation.spring import SpringConfig, natural_duration_in_frames, spring

__all__ = [
    "ENTRANCE_FRAMES",
    "OverlayAnimation",
    "SpringConfig",
    "animate",
    "natural_duration_in_frames",
    "spring",
]
