"""QTimer-driven sampling ticker for embedding the engine in a Qt event loop."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer


class QtFrameTicker:
    """Fires ``callback`` from the Qt event loop; must be used on the GUI thread."""

    def __init__(
        self,
        interval_sec: float,
        callback: Callable[[], None],
        parent: QObject | None = None,
    ) -> None:
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self._timer = QTimer(parent)
        self._timer.setInterval(max(1, int(round(interval_sec * 1000))))
        self._timer.timeout.connect(callback)

    def interval_ms(self) -> int:
        return self._timer.interval()

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def is_active(self) -> bool:
        return self._timer.isActive()
