from __future__ import annotations

import logging
import threading
from typing import Callable

from canvas_core.engines.base import Engine
from canvas_core.targets.base import DisplayFrame, RenderTarget, build_frame
from canvas_core.targets.memory_target import MemoryTarget

from .domain import DomainModel
from .mapper import CanvasSize

LOGGER = logging.getLogger(__name__)

Renderer = Callable[[DomainModel], None]
EngineFactory = Callable[[int, int], Engine]


class RenderJob:
    """Handle for one render cycle; coalesced update requests share it."""

    def __init__(self, job_id: int) -> None:
        self.job_id = job_id
        self.passes = 0
        self.revision: int | None = None
        self.error: Exception | None = None
        self._done = threading.Event()

    @property
    def done(self) -> bool:
        return self._done.is_set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._done.wait(timeout=timeout)


class ChartView:
    """Owns the canvas size, engine and render target, and serializes renders."""

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        *,
        target: RenderTarget | None = None,
        threaded: bool = True,
    ) -> None:
        self._size = CanvasSize(width=int(width), height=int(height))
        self.target = target or MemoryTarget()
        self.threaded = threaded
        self.engine: Engine | None = None
        self._renderer: Renderer | None = None
        self._lock = threading.Lock()
        self._render_lock = threading.Lock()
        self._present_lock = threading.Lock()
        self._job: RenderJob | None = None
        self._pending = False
        self._latest_domain = DomainModel()
        self._next_job_id = 1
        self._revision = 0
        self._target_started = False
        self._last_error: Exception | None = None
        self._stopping = False

    @property
    def size(self) -> CanvasSize:
        return self._size

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def is_rendering(self) -> bool:
        with self._lock:
            return self._job is not None and not self._job.done

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    def create(self, engine_type: EngineFactory, renderer: Renderer) -> Engine:
        engine = engine_type(int(self._size.width), int(self._size.height))
        with self._render_lock:
            self.engine = engine
            self._renderer = renderer
        with self._lock:
            self._stopping = False
        if not self._target_started:
            self.target.start()
            self._target_started = True
        return engine

    def resize(self, width: int, height: int) -> None:
        size = CanvasSize(width=int(width), height=int(height))
        with self._render_lock:
            self._size = size
            if self.engine is not None:
                self.engine.resize(int(width), int(height))

    def update(self, domain: DomainModel) -> RenderJob:
        with self._lock:
            self._latest_domain = domain
            if self._job is not None and not self._job.done:
                self._pending = True
                return self._job
            job = RenderJob(self._next_job_id)
            self._next_job_id += 1
            self._job = job
        if self.threaded:
            thread = threading.Thread(target=self._run, args=(job,), name=f"canvas-render-{job.job_id}", daemon=True)
            thread.start()
        else:
            self._run(job)
        return job

    def stop(self, timeout: float | None = 1.0) -> None:
        with self._lock:
            self._stopping = True
            job = self._job
        if job is not None:
            job.wait(timeout=timeout)
        with self._present_lock:
            if self._target_started:
                self.target.stop()
                self._target_started = False

    def _run(self, job: RenderJob) -> None:
        try:
            while True:
                with self._lock:
                    self._pending = False
                    domain = self._latest_domain
                frame = self._render_once(domain)
                job.passes += 1
                if frame is not None:
                    job.revision = frame.revision
                with self._lock:
                    if not self._pending:
                        job._done.set()
                        return
        except Exception as exc:  # noqa: BLE001
            job.error = exc
            self._last_error = exc
            LOGGER.exception("ChartView render failed: %s", exc)
            with self._lock:
                job._done.set()

    def _render_once(self, domain: DomainModel) -> DisplayFrame | None:
        with self._render_lock:
            if self.engine is None or self._renderer is None:
                LOGGER.debug("skipping render: engine not created")
                return None
            self._renderer(domain)
            with self._present_lock:
                if self._stopping:
                    LOGGER.debug("view stopped; dropping rendered frame")
                    return None
                self._revision += 1
                frame = build_frame(self.engine.to_rgba(), self._revision)
                self.target.present_frame(frame)
        LOGGER.debug("presented frame revision=%d", frame.revision)
        return frame
