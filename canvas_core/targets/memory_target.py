from __future__ import annotations

import threading

from .base import DisplayFrame, RenderTarget


class MemoryTarget(RenderTarget):
    """Keeps presented frames in memory, newest last."""

    def __init__(self, max_frames: int = 8) -> None:
        if max_frames <= 0:
            raise ValueError("max_frames must be > 0")
        self._max_frames = max_frames
        self._frames: list[DisplayFrame] = []
        self._lock = threading.Lock()
        self.started = False
        self.presented_count = 0

    def start(self) -> None:
        self.started = True

    def present_frame(self, frame: DisplayFrame) -> None:
        if not self.started:
            raise RuntimeError("memory target not started")
        with self._lock:
            self._frames.append(frame)
            if len(self._frames) > self._max_frames:
                del self._frames[0]
            self.presented_count += 1

    def stop(self) -> None:
        self.started = False

    @property
    def last_frame(self) -> DisplayFrame | None:
        with self._lock:
            return self._frames[-1] if self._frames else None

    def frames(self) -> list[DisplayFrame]:
        with self._lock:
            return list(self._frames)
