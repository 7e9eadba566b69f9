from __future__ import annotations

import math

import numpy as np

from canvas_core.engines.base import RGBA

from .canvas import draw_hline


def fill_polygon(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA) -> None:
    """Even-odd scanline fill, sampling each row at its pixel centre."""
    if xs.size < 3 or xs.shape != ys.shape:
        return
    px = xs.astype(np.float64)
    py = ys.astype(np.float64)
    qx = np.roll(px, -1)
    qy = np.roll(py, -1)

    top = max(0, int(math.floor(float(py.min()))))
    bottom = min(dst.shape[0] - 1, int(math.ceil(float(py.max()))))
    for row in range(top, bottom + 1):
        yc = row + 0.5
        # Half-open edge test keeps shared vertices from being counted twice.
        crosses = ((py <= yc) & (qy > yc)) | ((qy <= yc) & (py > yc))
        if not np.any(crosses):
            continue
        ex0, ey0, ex1, ey1 = px[crosses], py[crosses], qx[crosses], qy[crosses]
        hits = np.sort(ex0 + (yc - ey0) * (ex1 - ex0) / (ey1 - ey0))
        for left, right in zip(hits[0::2], hits[1::2], strict=False):
            x0 = int(math.ceil(left - 0.5))
            x1 = int(math.floor(right - 0.5))
            if x1 >= x0:
                draw_hline(dst, x0, x1, row, color)
