"""Shared fixtures for timeline engine tests."""

from __future__ import annotations

from typing import Sequence

import pytest

from video_create.timeline.composition import RenderBlock


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualTicker:
    def __init__(self, interval_sec: float, callback) -> None:
        self.interval_sec = interval_sec
        self.callback = callback
        self.active = False

    def start(self) -> None:
        self.active = True

    def stop(self) -> None:
        self.active = False

    def is_active(self) -> bool:
        return self.active

    def tick(self) -> None:
        if self.active:
            self.callback()


class ManualTickerFactory:
    def __init__(self) -> None:
        self.tickers: list[ManualTicker] = []

    def __call__(self, interval_sec: float, callback) -> ManualTicker:
        ticker = ManualTicker(interval_sec, callback)
        self.tickers.append(ticker)
        return ticker

    @property
    def last(self) -> ManualTicker:
        return self.tickers[-1]


class ScriptedBackend:
    """Backend whose reported frame is set directly by the test."""

    def __init__(self, frame: int | None = 0) -> None:
        self.frame = frame
        self.calls: list[str] = []
        self.blocks: tuple[RenderBlock, ...] = ()
        self.duration_in_frames = 0

    def play(self) -> None:
        self.calls.append("play")

    def pause(self) -> None:
        self.calls.append("pause")

    def seek_to(self, frame: int) -> None:
        self.calls.append(f"seek:{frame}")
        self.frame = frame

    def get_current_frame(self) -> int | None:
        return self.frame

    def set_composition(self, blocks: Sequence[RenderBlock], duration_in_frames: int) -> None:
        self.blocks = tuple(blocks)
        self.duration_in_frames = duration_in_frames


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def ticker_factory() -> ManualTickerFactory:
    return ManualTickerFactory()


@pytest.fixture
def scripted_backend() -> ScriptedBackend:
    return ScriptedBackend()
