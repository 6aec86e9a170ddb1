"""Playback backend contract and an in-process reference player."""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Protocol, Sequence

from video_create.timeline.composition import RenderBlock
from video_create.timeline.errors import BackendUnavailableError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class PlaybackBackend(Protocol):
    """Control surface of the external player; it owns the current frame."""

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek_to(self, frame: int) -> None: ...

    def get_current_frame(self) -> int | None: ...

    def set_composition(self, blocks: Sequence[RenderBlock], duration_in_frames: int) -> None: ...


class ClockPlayer:
    """Frame clock that advances from a monotonic timer while playing.

    Playback stops on the last frame of the composition. After ``close()``
    every call raises ``BackendUnavailableError``.
    """

    def __init__(self, fps: int = 30, clock: Clock | None = None) -> None:
        if fps <= 0:
            raise ValueError("fps must be positive")
        self.fps = fps
        self._clock = clock or time.perf_counter
        self._lock = threading.Lock()
        self._blocks: tuple[RenderBlock, ...] = ()
        self._duration_in_frames = 1
        self._base_frame = 0
        self._started_at: float | None = None
        self._closed = False

    @property
    def blocks(self) -> tuple[RenderBlock, ...]:
        return self._blocks

    @property
    def duration_in_frames(self) -> int:
        return self._duration_in_frames

    def is_playing(self) -> bool:
        with self._lock:
            self._ensure_open()
            self._settle()
            return self._started_at is not None

    def set_composition(self, blocks: Sequence[RenderBlock], duration_in_frames: int) -> None:
        if duration_in_frames <= 0:
            raise ValueError("duration_in_frames must be positive")
        with self._lock:
            self._ensure_open()
            self._blocks = tuple(blocks)
            self._duration_in_frames = duration_in_frames
            self._settle()
            if self._started_at is None:
                self._base_frame = min(self._base_frame, self._last_frame())

    def play(self) -> None:
        with self._lock:
            self._ensure_open()
            self._settle()
            if self._started_at is not None:
                return
            if self._base_frame >= self._last_frame():
                self._base_frame = 0
            self._started_at = self._clock()

    def pause(self) -> None:
        with self._lock:
            self._ensure_open()
            self._base_frame = self._frame_now()
            self._started_at = None

    def seek_to(self, frame: int) -> None:
        with self._lock:
            self._ensure_open()
            self._base_frame = min(max(int(frame), 0), self._last_frame())
            if self._started_at is not None:
                self._started_at = self._clock()

    def get_current_frame(self) -> int | None:
        with self._lock:
            self._ensure_open()
            self._settle()
            return self._frame_now()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._started_at = None

    def _ensure_open(self) -> None:
        if self._closed:
            raise BackendUnavailableError("player is closed")

    def _last_frame(self) -> int:
        return self._duration_in_frames - 1

    def _frame_now(self) -> int:
        if self._started_at is None:
            return self._base_frame
        elapsed = max(self._clock() - self._started_at, 0.0)
        frame = self._base_frame + int(elapsed * self.fps)
        return min(frame, self._last_frame())

    def _settle(self) -> None:
        if self._started_at is None:
            return
        frame = self._frame_now()
        if frame >= self._last_frame():
            self._base_frame = frame
            self._started_at = None
            logger.debug("playback reached the last frame (%d)", frame)
