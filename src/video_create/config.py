"""Editor settings and logging setup."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

from video_create.timeline.placement import DEFAULT_CLIP_SOURCE, DEFAULT_TEXT

LOGGER_NAME = "video_create"


@dataclass(slots=True, frozen=True)
class EditorSettings:
    fps: int = 30
    width: int = 1920
    height: int = 1080
    sync_interval_ms: int = 33
    default_clip_source: str = DEFAULT_CLIP_SOURCE
    default_text: str = DEFAULT_TEXT
    log_level: str = "INFO"

    @property
    def sync_interval_sec(self) -> float:
        return self.sync_interval_ms / 1000.0

    @staticmethod
    def from_env() -> EditorSettings:
        fps = _int_from_env("VIDEO_CREATE_FPS", 30)
        interval_ms = _int_from_env("VIDEO_CREATE_SYNC_INTERVAL_MS", 33)
        source = os.getenv("VIDEO_CREATE_DEFAULT_CLIP_SOURCE", "").strip()
        text = os.getenv("VIDEO_CREATE_DEFAULT_TEXT", "").strip()
        level = os.getenv("VIDEO_CREATE_LOG_LEVEL", "INFO").strip().upper()
        if level not in logging.getLevelNamesMapping():
            level = "INFO"
        return EditorSettings(
            fps=fps if fps > 0 else 30,
            sync_interval_ms=interval_ms if interval_ms > 0 else 33,
            default_clip_source=source or DEFAULT_CLIP_SOURCE,
            default_text=text or DEFAULT_TEXT,
            log_level=level,
        )


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default)).strip()
    try:
        return int(raw)
    except ValueError:
        return default


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not any(getattr(handler, "_video_create", False) for handler in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._video_create = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
