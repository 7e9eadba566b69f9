from __future__ import annotations

from typing import Sequence

import numpy as np

from canvas_core.core.mapper import PixelPoint
from canvas_core.engines.base import RGBA, Engine, ShapeStyle
from canvas_plot.raster import (
    draw_markers,
    draw_polyline,
    draw_text,
    fill_polygon,
    fill_rect,
    new_canvas,
    text_size,
)


def _pixel_arrays(points: Sequence[PixelPoint]) -> tuple[np.ndarray, np.ndarray]:
    xs = np.rint(np.asarray([p.x for p in points], dtype=np.float64)).astype(np.int32)
    ys = np.rint(np.asarray([p.y for p in points], dtype=np.float64)).astype(np.int32)
    return xs, ys


class RasterEngine(Engine):
    """Engine drawing into an in-memory RGBA uint8 canvas."""

    def __init__(self, width: int, height: int, background: RGBA = (255, 255, 255, 255)) -> None:
        super().__init__(width, height)
        self.background = background
        self._canvas = new_canvas(self.width, self.height, background)

    def clear(self) -> None:
        self._canvas = new_canvas(self.width, self.height, self.background)

    def create_line(self, points: Sequence[PixelPoint], style: ShapeStyle) -> None:
        xs, ys = _pixel_arrays(points)
        draw_polyline(self._canvas, xs, ys, color=style.color, width=max(1, int(round(style.size))))

    def create_box(self, points: Sequence[PixelPoint], style: ShapeStyle) -> None:
        if len(points) < 2:
            raise ValueError("box needs two corner points")
        xs, ys = _pixel_arrays(points[:2])
        fill_rect(self._canvas, int(xs[0]), int(ys[0]), int(xs[1]), int(ys[1]), style.color)

    def create_circle(self, point: PixelPoint, style: ShapeStyle) -> None:
        xs, ys = _pixel_arrays([point])
        draw_markers(self._canvas, xs, ys, color=style.color, size=max(1, int(round(style.size))))

    def create_shape(self, points: Sequence[PixelPoint], style: ShapeStyle) -> None:
        xs = np.asarray([p.x for p in points], dtype=np.float64)
        ys = np.asarray([p.y for p in points], dtype=np.float64)
        fill_polygon(self._canvas, xs, ys, style.color)

    def create_label(self, point: PixelPoint, text: str, style: ShapeStyle) -> None:
        draw_text(self._canvas, int(round(point.x)), int(round(point.y)), text, style.color, font_size_px=style.size)

    def get_content_measure(self, text: str, size: float) -> tuple[int, int]:
        return text_size(text, font_size_px=size)

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()
