from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from canvas_core.core.mapper import CoordinateMapper, PixelPoint
from canvas_core.core.ticks import Tick
from canvas_core.engines.base import Engine, ShapeStyle


@dataclass
class GridDecorator:
    """Grid lines and captions at the tick positions."""

    line: ShapeStyle = ShapeStyle(color=(200, 200, 200, 255), size=1.0)
    caption: ShapeStyle = ShapeStyle(color=(50, 50, 50, 255), size=10.0)
    show_captions: bool = True
    caption_pad: int = 3

    def draw(
        self,
        engine: Engine,
        mapper: CoordinateMapper,
        index_markers: Sequence[Tick],
        value_markers: Sequence[Tick],
    ) -> None:
        width = float(engine.width)
        height = float(engine.height)
        for tick in index_markers:
            engine.create_line([PixelPoint(tick.position, 0.0), PixelPoint(tick.position, height - 1)], self.line)
        for tick in value_markers:
            engine.create_line([PixelPoint(0.0, tick.position), PixelPoint(width - 1, tick.position)], self.line)
        if not self.show_captions:
            return

        for tick in index_markers:
            w, h = engine.get_content_measure(tick.label, self.caption.size)
            engine.create_label(
                PixelPoint(tick.position - w / 2.0, height - h - self.caption_pad),
                tick.label,
                self.caption,
            )
        for tick in value_markers:
            _, h = engine.get_content_measure(tick.label, self.caption.size)
            engine.create_label(
                PixelPoint(float(self.caption_pad), tick.position - h - self.caption_pad),
                tick.label,
                self.caption,
            )
