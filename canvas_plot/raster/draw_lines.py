from __future__ import annotations

import numpy as np

from canvas_core.engines.base import RGBA

from .canvas import draw_pixel, fill_rect


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        _draw_segment(dst, int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1]), color=color, width=width)


def _draw_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA, width: int) -> None:
    # Bresenham over all octants.
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _stamp(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _stamp(dst: np.ndarray, x: int, y: int, color: RGBA, width: int) -> None:
    if width <= 1:
        draw_pixel(dst, x, y, color)
        return
    r = width // 2
    fill_rect(dst, x - r, y - r, x + r, y + r, color)


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, size: int = 1) -> None:
    r = max(0, size // 2)
    for x, y in zip(xs.tolist(), ys.tolist(), strict=False):
        _draw_disc(dst, int(x), int(y), r, color)


def _draw_disc(dst: np.ndarray, cx: int, cy: int, radius: int, color: RGBA) -> None:
    if radius == 0:
        draw_pixel(dst, cx, cy, color)
        return
    for dy in range(-radius, radius + 1):
        half = int((radius * radius - dy * dy) ** 0.5)
        fill_rect(dst, cx - half, cy + dy, cx + half, cy + dy, color)
