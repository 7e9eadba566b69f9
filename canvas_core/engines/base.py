from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

import numpy as np

if TYPE_CHECKING:
    from canvas_core.core.mapper import PixelPoint


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class ShapeStyle:
    color: RGBA = (50, 50, 50, 255)
    size: float = 1.0


class Engine(ABC):
    """Drawing backend consumed by shapes and decorators; coordinates are in pixels."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = int(width)
        self.height = int(height)

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_line(self, points: Sequence[PixelPoint], style: ShapeStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_box(self, points: Sequence[PixelPoint], style: ShapeStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_circle(self, point: PixelPoint, style: ShapeStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_shape(self, points: Sequence[PixelPoint], style: ShapeStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def create_label(self, point: PixelPoint, text: str, style: ShapeStyle) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_content_measure(self, text: str, size: float) -> tuple[int, int]:
        raise NotImplementedError

    @abstractmethod
    def to_rgba(self) -> np.ndarray:
        raise NotImplementedError

    def resize(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        self.width = int(width)
        self.height = int(height)
        self.clear()
