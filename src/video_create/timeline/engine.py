"""Timeline engine: owns the item collections and the playback state."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Mapping, cast

from video_create.config import EditorSettings
from video_create.playback.backend import PlaybackBackend
from video_create.playback.sync import FrameSynchronizer, TickerFactory, ThreadTicker
from video_create.timeline import placement
from video_create.timeline.composition import CompositionCache, FrameLayer, RenderBlock, resolve_frame
from video_create.timeline.errors import BackendUnavailableError, EngineDisposedError
from video_create.timeline.models import AnyItem, ItemKind, MediaClip, TextOverlay, TimelineSnapshot, normalize_kind

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class EngineState:
    current_frame: int
    total_duration: int
    is_playing: bool
    clips: tuple[MediaClip, ...]
    text_overlays: tuple[TextOverlay, ...]

    @property
    def playhead_ratio(self) -> float:
        return min(max(self.current_frame / self.total_duration, 0.0), 1.0)


StateListener = Callable[[EngineState], None]


class TimelineEngine:
    def __init__(
        self,
        settings: EditorSettings | None = None,
        backend: PlaybackBackend | None = None,
        ticker_factory: TickerFactory = ThreadTicker,
    ) -> None:
        self.settings = settings or EditorSettings()
        self._lock = threading.RLock()
        self._snapshot = TimelineSnapshot.empty()
        self._compositions = CompositionCache()
        self._current_frame = 0
        self._is_playing = False
        self._backend: PlaybackBackend | None = None
        self._listeners: list[StateListener] = []
        self._disposed = False
        self._sync = FrameSynchronizer(
            backend_provider=lambda: self._backend,
            on_frame=self._on_sampled_frame,
            interval_sec=self.settings.sync_interval_sec,
            ticker_factory=ticker_factory,
        )
        if backend is not None:
            self.attach_backend(backend)

    @classmethod
    def create(
        cls,
        settings: EditorSettings | None = None,
        backend: PlaybackBackend | None = None,
        ticker_factory: TickerFactory = ThreadTicker,
    ) -> TimelineEngine:
        engine = cls(settings=settings, backend=backend, ticker_factory=ticker_factory)
        logger.info("timeline engine created (fps=%d)", engine.settings.fps)
        return engine

    # -- observable state -------------------------------------------------

    @property
    def snapshot(self) -> TimelineSnapshot:
        return self._snapshot

    @property
    def clips(self) -> tuple[MediaClip, ...]:
        return self._snapshot.clips

    @property
    def text_overlays(self) -> tuple[TextOverlay, ...]:
        return self._snapshot.text_overlays

    @property
    def total_duration(self) -> int:
        return self._snapshot.playable_duration

    @property
    def current_frame(self) -> int:
        return self._current_frame

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def playhead_ratio(self) -> float:
        return self.state().playhead_ratio

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def composition(self) -> tuple[RenderBlock, ...]:
        with self._lock:
            return self._compositions.get(self._snapshot.clips, self._snapshot.text_overlays)

    def state(self) -> EngineState:
        with self._lock:
            return EngineState(
                current_frame=self._current_frame,
                total_duration=self._snapshot.playable_duration,
                is_playing=self._is_playing,
                clips=self._snapshot.clips,
                text_overlays=self._snapshot.text_overlays,
            )

    def frame_layers(self, frame: int | None = None) -> list[FrameLayer]:
        target = self._current_frame if frame is None else frame
        return resolve_frame(self.composition, target, self.settings.fps)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # -- mutations ---------------------------------------------------------

    def append_item(self, kind: ItemKind | str, payload: Mapping[str, Any] | None = None) -> AnyItem:
        item_kind = normalize_kind(kind)
        fields = dict(payload or {})
        if item_kind is ItemKind.MEDIA:
            fields.setdefault("source", self.settings.default_clip_source)
        else:
            fields.setdefault("text", self.settings.default_text)

        with self._lock:
            self._ensure_alive()
            item, updated = placement.append_item(self._snapshot, item_kind, fields)
            self._snapshot = updated
            self._push_composition()
        self._notify()
        return item

    def append_media_clip(self, source: str | None = None) -> MediaClip:
        payload = {} if source is None else {"source": source}
        return cast(MediaClip, self.append_item(ItemKind.MEDIA, payload))

    def append_text_overlay(self, text: str | None = None) -> TextOverlay:
        payload = {} if text is None else {"text": text}
        return cast(TextOverlay, self.append_item(ItemKind.TEXT, payload))

    # -- playback ----------------------------------------------------------

    def attach_backend(self, backend: PlaybackBackend) -> None:
        with self._lock:
            self._ensure_alive()
            self._backend = backend
            self._push_composition()
        self._sync.reset()
        logger.info("playback backend attached: %s", type(backend).__name__)

    def detach_backend(self) -> None:
        with self._lock:
            self._backend = None
            self._is_playing = False
        self._notify()

    def start(self) -> None:
        """Begin sampling the backend's current frame."""
        self._ensure_alive()
        self._sync.start()

    def stop(self) -> None:
        """Stop sampling without disposing; the engine stays usable."""
        self._sync.stop()

    @property
    def is_sampling(self) -> bool:
        return self._sync.is_running()

    def sync_now(self) -> int | None:
        return self._sync.sample_once()

    def play(self) -> None:
        if self._command(lambda backend: backend.play()):
            self._set_playing(True)

    def pause(self) -> None:
        if self._command(lambda backend: backend.pause()):
            self._set_playing(False)

    def toggle_playback(self) -> None:
        if self._is_playing:
            self.pause()
        else:
            self.play()

    def seek(self, frame: int) -> None:
        target = min(max(int(frame), 0), self._snapshot.playable_duration - 1)
        self._command(lambda backend: backend.seek_to(target))

    # -- lifecycle ---------------------------------------------------------

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            self._listeners.clear()
        # outside the lock: the sampling thread may be waiting on it
        self._sync.dispose()
        logger.info("timeline engine disposed")

    def __enter__(self) -> TimelineEngine:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.dispose()

    # -- internals ---------------------------------------------------------

    def _ensure_alive(self) -> None:
        if self._disposed:
            raise EngineDisposedError("timeline engine has been disposed")

    def _command(self, action: Callable[[PlaybackBackend], None]) -> bool:
        self._ensure_alive()
        backend = self._backend
        if backend is None:
            logger.debug("no playback backend mounted; command skipped")
            return False
        try:
            action(backend)
        except BackendUnavailableError:
            logger.debug("playback backend unavailable; command skipped")
            return False
        return True

    def _set_playing(self, playing: bool) -> None:
        with self._lock:
            self._is_playing = playing
        self._notify()

    def _push_composition(self) -> None:
        backend = self._backend
        if backend is None:
            return
        blocks = self._compositions.get(self._snapshot.clips, self._snapshot.text_overlays)
        try:
            backend.set_composition(blocks, self._snapshot.playable_duration)
        except BackendUnavailableError:
            logger.debug("playback backend unavailable; composition not pushed")

    def _on_sampled_frame(self, frame: int) -> None:
        with self._lock:
            if self._disposed:
                return
            self._current_frame = frame
        self._notify()

    def _notify(self) -> None:
        state = self.state()
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(state)
