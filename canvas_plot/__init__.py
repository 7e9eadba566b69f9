from canvas_plot.adapters import group_series, series_to_shapes
from canvas_plot.decorators import GridDecorator
from canvas_plot.engine import RasterEngine
from canvas_plot.shapes import AreaShape, BarShape, DotShape, GroupShape, LineShape

__all__ = [
    "AreaShape",
    "BarShape",
    "DotShape",
    "GridDecorator",
    "GroupShape",
    "LineShape",
    "RasterEngine",
    "group_series",
    "series_to_shapes",
]
