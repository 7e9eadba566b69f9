from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .domain import DomainModel


@dataclass(frozen=True)
class DataPoint:
    index: float
    value: float


@dataclass(frozen=True)
class PixelPoint:
    x: float
    y: float


@dataclass(frozen=True)
class CanvasSize:
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas width and height must be > 0")


def padded_value_bounds(domain: DomainModel, padding: float) -> tuple[float, float]:
    if padding < 0:
        raise ValueError("padding must be >= 0")
    lo, hi = domain.value_domain
    pad = (hi - lo) * padding
    return (lo - pad, hi + pad)


def to_pixels(domain: DomainModel, canvas: CanvasSize, padding: float, point: DataPoint) -> PixelPoint:
    lo_y, hi_y = padded_value_bounds(domain, padding)
    lo_x, hi_x = domain.index_domain

    # A degenerate axis maps everything to the far edge.
    nx = 1.0 if lo_x == hi_x else (point.index - lo_x) / (hi_x - lo_x)
    ny = 1.0 if lo_y == hi_y else (point.value - lo_y) / (hi_y - lo_y)

    return PixelPoint(x=canvas.width * nx, y=canvas.height - canvas.height * ny)


def to_value(domain: DomainModel, canvas: CanvasSize, padding: float, pixel: PixelPoint) -> DataPoint:
    lo_y, hi_y = padded_value_bounds(domain, padding)
    lo_x, hi_x = domain.index_domain

    nx = pixel.x / canvas.width
    ny = (canvas.height - pixel.y) / canvas.height

    return DataPoint(index=lo_x + (hi_x - lo_x) * nx, value=lo_y + (hi_y - lo_y) * ny)


@dataclass(frozen=True)
class CoordinateMapper:
    """Binds a domain, a canvas size and a padding fraction for repeated conversions."""

    domain: DomainModel
    canvas: CanvasSize
    padding: float = 0.0

    def __post_init__(self) -> None:
        if self.padding < 0:
            raise ValueError("padding must be >= 0")

    def to_pixels(self, index: float, value: float) -> PixelPoint:
        return to_pixels(self.domain, self.canvas, self.padding, DataPoint(index=index, value=value))

    def to_value(self, x: float, y: float) -> DataPoint:
        return to_value(self.domain, self.canvas, self.padding, PixelPoint(x=x, y=y))

    def to_pixel_arrays(self, indices: np.ndarray, values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        ix = np.asarray(indices, dtype=np.float64)
        vy = np.asarray(values, dtype=np.float64)
        if ix.shape != vy.shape:
            raise ValueError(f"indices and values shape mismatch: {ix.shape} != {vy.shape}")
        lo_y, hi_y = padded_value_bounds(self.domain, self.padding)
        lo_x, hi_x = self.domain.index_domain
        nx = np.ones_like(ix) if lo_x == hi_x else (ix - lo_x) / float(hi_x - lo_x)
        ny = np.ones_like(vy) if lo_y == hi_y else (vy - lo_y) / (hi_y - lo_y)
        return (self.canvas.width * nx, self.canvas.height - self.canvas.height * ny)
