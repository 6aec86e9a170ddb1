"""Playback backend contract and frame synchronization.

``ThreadTicker`` drives sampling for headless hosts. Desktop hosts running a
Qt event loop pass ``QtFrameTicker`` as the engine's ``ticker_factory``; it
is imported on first access and needs the ``desktop`` extra (PySide6).
"""

from typing import Any

from video_create.playback.backend import ClockPlayer, PlaybackBackend
from video_create.playback.sync import DEFAULT_INTERVAL_SEC, FrameSynchronizer, ThreadTicker, Ticker

__all__ = [
    "ClockPlayer",
    "DEFAULT_INTERVAL_SEC",
    "FrameSynchronizer",
    "PlaybackBackend",
    "QtFrameTicker",
    "ThreadTicker",
    "Ticker",
]


def __getattr__(name: str) -> Any:
    if name == "QtFrameTicker":
        from video_create.playback.qt_ticker import QtFrameTicker

        return QtFrameTicker
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
