"""Republishes the backend's current frame on a fixed sampling cadence."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Protocol

from video_create.playback.backend import PlaybackBackend
from video_create.timeline.errors import BackendUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SEC = 0.033

BackendProvider = Callable[[], PlaybackBackend | None]
FrameCallback = Callable[[int], None]


class Ticker(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def is_active(self) -> bool: ...


TickerFactory = Callable[[float, Callable[[], None]], Ticker]


class ThreadTicker:
    """Calls ``callback`` every ``interval_sec`` on a daemon thread until stopped."""

    def __init__(self, interval_sec: float, callback: Callable[[], None]) -> None:
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self.interval_sec = interval_sec
        self._callback = callback
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="frame-sync", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def is_active(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._stopped.is_set()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval_sec):
            try:
                self._callback()
            except Exception:
                logger.exception("frame sampling callback failed")


class FrameSynchronizer:
    """Samples the playback backend and publishes frame changes.

    The backend stays the only clock: nothing here advances time. A missing
    or unavailable backend makes the sample a no-op. Once ``dispose()``
    returns, ``on_frame`` is never called again.
    """

    def __init__(
        self,
        backend_provider: BackendProvider,
        on_frame: FrameCallback,
        interval_sec: float = DEFAULT_INTERVAL_SEC,
        ticker_factory: TickerFactory = ThreadTicker,
    ) -> None:
        self._backend_provider = backend_provider
        self._on_frame = on_frame
        self._interval_sec = interval_sec
        self._ticker_factory = ticker_factory
        self._ticker: Ticker | None = None
        self._lock = threading.RLock()
        self._last_frame: int | None = None
        self._disposed = False

    @property
    def interval_sec(self) -> float:
        return self._interval_sec

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def last_frame(self) -> int | None:
        return self._last_frame

    def is_running(self) -> bool:
        return self._ticker is not None and self._ticker.is_active()

    def start(self) -> None:
        with self._lock:
            if self._disposed:
                raise RuntimeError("synchronizer has been disposed")
            if self._ticker is not None:
                return
            self._ticker = self._ticker_factory(self._interval_sec, self.sample_once)
            self._ticker.start()
        logger.debug("frame sampling started every %.3fs", self._interval_sec)

    def sample_once(self) -> int | None:
        """Take one sample; returns the published frame, or None when nothing changed."""
        with self._lock:
            if self._disposed:
                return None
            backend = self._backend_provider()
            if backend is None:
                logger.debug("no playback backend mounted; sample skipped")
                return None
            try:
                frame = backend.get_current_frame()
            except BackendUnavailableError:
                logger.debug("playback backend unavailable; sample skipped")
                return None
            if frame is None or frame == self._last_frame:
                return None
            self._last_frame = frame
            self._on_frame(frame)
            return frame

    def stop(self) -> None:
        """Stop sampling; ``start()`` may be called again afterwards."""
        with self._lock:
            ticker = self._ticker
            self._ticker = None
        if ticker is not None:
            ticker.stop()
            logger.debug("frame sampling stopped")

    def reset(self) -> None:
        with self._lock:
            self._last_frame = None

    def dispose(self) -> None:
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            ticker = self._ticker
            self._ticker = None
        if ticker is not None:
            ticker.stop()
        logger.debug("frame sampling disposed")

    def __enter__(self) -> FrameSynchronizer:
        self.start()
        return self

    def __exit__(self, *_exc: object) -> None:
        self.dispose()
