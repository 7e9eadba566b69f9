from __future__ import annotations

import importlib.util
import unittest
from unittest import mock

import numpy as np
import torch

from canvas_core.core import ChartDataError, ChartView, Composer, DomainModel, ShapeContext
from canvas_core.core.mapper import CanvasSize, CoordinateMapper, PixelPoint
from canvas_core.core.ticks import Tick
from canvas_core.engines import Engine, ShapeStyle
from canvas_plot import (
    AreaShape,
    BarShape,
    DotShape,
    GridDecorator,
    GroupShape,
    LineShape,
    RasterEngine,
    group_series,
    series_to_shapes,
)
from canvas_plot.raster import fill_polygon, new_canvas, text_size
from canvas_plot.shapes import resolve

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)
BLACK = (0, 0, 0, 255)


class _RecordingEngine(Engine):
    def __init__(self, width: int = 100, height: int = 100) -> None:
        super().__init__(width, height)
        self.calls: list[tuple] = []

    def clear(self) -> None:
        self.calls.clear()

    def create_line(self, points, style) -> None:
        self.calls.append(("line", list(points)))

    def create_box(self, points, style) -> None:
        self.calls.append(("box", list(points)))

    def create_circle(self, point, style) -> None:
        self.calls.append(("circle", point))

    def create_shape(self, points, style) -> None:
        self.calls.append(("shape", list(points)))

    def create_label(self, point, text, style) -> None:
        self.calls.append(("label", point, text))

    def get_content_measure(self, text, size):
        return (6 * len(text), 10)

    def to_rgba(self) -> np.ndarray:
        return new_canvas(self.width, self.height)


def _context(engine: Engine) -> ShapeContext:
    mapper = CoordinateMapper(DomainModel.explicit(0, 10, 0.0, 10.0), CanvasSize(100, 100))
    return ShapeContext(engine=engine, mapper=mapper, item_size=0.5)


class RasterEngineTests(unittest.TestCase):
    def test_new_engine_is_background_filled(self) -> None:
        engine = RasterEngine(20, 10)
        rgba = engine.to_rgba()
        self.assertEqual(rgba.shape, (10, 20, 4))
        self.assertEqual(rgba.dtype, np.uint8)
        self.assertTrue(np.all(rgba == 255))

    def test_box_fills_between_corners(self) -> None:
        engine = RasterEngine(20, 10)
        engine.create_box([PixelPoint(2, 2), PixelPoint(5, 5)], ShapeStyle(color=RED))
        rgba = engine.to_rgba()
        self.assertEqual(rgba[3, 3].tolist(), list(RED))
        self.assertEqual(rgba[8, 8].tolist(), [255, 255, 255, 255])
        with self.assertRaises(ValueError):
            engine.create_box([PixelPoint(1, 1)], ShapeStyle())

    def test_line_and_circle(self) -> None:
        engine = RasterEngine(20, 10)
        engine.create_line([PixelPoint(0, 5), PixelPoint(19, 5)], ShapeStyle(color=BLACK))
        engine.create_circle(PixelPoint(10, 2), ShapeStyle(color=BLUE, size=3))
        rgba = engine.to_rgba()
        self.assertEqual(rgba[5, 10].tolist(), list(BLACK))
        self.assertEqual(rgba[2, 10].tolist(), list(BLUE))
        self.assertEqual(rgba[2, 11].tolist(), list(BLUE))

    def test_polygon_fill(self) -> None:
        engine = RasterEngine(12, 12)
        square = [PixelPoint(2, 2), PixelPoint(8, 2), PixelPoint(8, 8), PixelPoint(2, 8)]
        engine.create_shape(square, ShapeStyle(color=BLUE))
        rgba = engine.to_rgba()
        self.assertEqual(rgba[5, 5].tolist(), list(BLUE))
        self.assertEqual(rgba[0, 0].tolist(), [255, 255, 255, 255])
        self.assertEqual(rgba[5, 10].tolist(), [255, 255, 255, 255])

    def test_translucent_fill_blends(self) -> None:
        canvas = new_canvas(6, 6, color=(255, 255, 255, 255))
        fill_polygon(canvas, np.asarray([0.0, 6.0, 6.0, 0.0]), np.asarray([0.0, 0.0, 6.0, 6.0]), (0, 0, 0, 128))
        self.assertTrue(0 < int(canvas[3, 3, 0]) < 255)
        self.assertEqual(int(canvas[3, 3, 3]), 255)

    def test_labels_and_measure(self) -> None:
        engine = RasterEngine(60, 30)
        self.assertEqual(engine.get_content_measure("", 10.0), (0, 10))
        w, h = engine.get_content_measure("123", 12.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)
        engine.create_label(PixelPoint(2, 2), "88", ShapeStyle(color=BLACK, size=14.0))
        self.assertTrue(np.any(engine.to_rgba()[:, :, 0] < 255))

    def test_text_falls_back_to_default_font(self) -> None:
        with mock.patch("canvas_plot.raster.draw_text._find_font", return_value=None):
            w, h = text_size("fallback", font_size_px=13.25)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)

    def test_clear_and_resize(self) -> None:
        engine = RasterEngine(10, 10, background=(0, 0, 0, 255))
        engine.create_box([PixelPoint(0, 0), PixelPoint(9, 9)], ShapeStyle(color=RED))
        engine.clear()
        self.assertTrue(np.all(engine.to_rgba()[:, :, 0] == 0))
        engine.resize(4, 3)
        self.assertEqual(engine.to_rgba().shape, (3, 4, 4))


class ShapeTests(unittest.TestCase):
    def test_extents(self) -> None:
        self.assertEqual(LineShape(y=5.0).extent(0, []), (5.0, 5.0))
        self.assertEqual(DotShape(y=-1.0).extent(0, []), (-1.0, -1.0))
        self.assertEqual(BarShape(y=-3.0).extent(0, []), (-3.0, 0.0))
        self.assertEqual(AreaShape(y=4.0).extent(0, []), (0.0, 4.0))
        self.assertIsNone(LineShape().extent(0, []))

    def test_group_extent_merges_children(self) -> None:
        group = GroupShape(groups={"a": LineShape(y=5.0), "b": BarShape(y=-2.0), "c": DotShape()})
        self.assertEqual(group.extent(0, [group]), (-2.0, 5.0))
        self.assertIsNone(GroupShape().extent(0, []))

    def test_resolve_walks_key_path(self) -> None:
        leaf = LineShape(y=1.0)
        items = [GroupShape(groups={"outer": GroupShape(groups={"x": leaf})})]
        self.assertIs(resolve(items, 0, ("outer", "x")), leaf)
        self.assertIsNone(resolve(items, 0, ("outer", "y")))
        self.assertIsNone(resolve(items, 0, ("outer", "x", "deeper")))
        self.assertIsNone(resolve(items, 1, ()))
        self.assertIsNone(resolve(items, -1, ()))

    def test_line_connects_to_previous_item(self) -> None:
        engine = _RecordingEngine()
        ctx = _context(engine)
        items = [LineShape(y=2.0), LineShape(y=4.0)]
        items[0].draw(ctx, 0, items)
        self.assertEqual(engine.calls, [])
        items[1].draw(ctx, 1, items)
        self.assertEqual(engine.calls, [("line", [PixelPoint(0.0, 80.0), PixelPoint(10.0, 60.0)])])

    def test_gaps_break_lines(self) -> None:
        engine = _RecordingEngine()
        items = [LineShape(y=2.0), LineShape(), LineShape(y=4.0)]
        for i, item in enumerate(items):
            item.draw(_context(engine), i, items)
        self.assertEqual(engine.calls, [])

    def test_bar_spans_item_size_down_to_zero(self) -> None:
        engine = _RecordingEngine()
        BarShape(y=5.0).draw(_context(engine), 2, [])
        self.assertEqual(engine.calls, [("box", [PixelPoint(17.5, 50.0), PixelPoint(22.5, 100.0)])])

    def test_area_and_dot(self) -> None:
        engine = _RecordingEngine()
        items = [AreaShape(y=2.0), AreaShape(y=4.0)]
        items[1].draw(_context(engine), 1, items)
        DotShape(y=5.0).draw(_context(engine), 3, [])
        kind, points = engine.calls[0]
        self.assertEqual(kind, "shape")
        self.assertEqual(len(points), 4)
        self.assertEqual(engine.calls[1], ("circle", PixelPoint(30.0, 50.0)))

    def test_group_children_pair_by_name(self) -> None:
        engine = _RecordingEngine()
        items = [
            GroupShape(groups={"close": LineShape(y=1.0), "volume": BarShape(y=3.0)}),
            GroupShape(groups={"close": LineShape(y=2.0), "volume": BarShape(y=4.0)}),
        ]
        items[1].draw(_context(engine), 1, items)
        self.assertEqual([call[0] for call in engine.calls], ["line", "box"])


class GridDecoratorTests(unittest.TestCase):
    def test_lines_and_captions_at_ticks(self) -> None:
        engine = _RecordingEngine(100, 50)
        mapper = CoordinateMapper(DomainModel.explicit(0, 10, 0.0, 1.0), CanvasSize(100, 50))
        index_markers = [Tick(30.0, 3.0, "3"), Tick(70.0, 7.0, "7")]
        value_markers = [Tick(25.0, 0.5, "0.5")]
        GridDecorator().draw(engine, mapper, index_markers, value_markers)
        kinds = [call[0] for call in engine.calls]
        self.assertEqual(kinds.count("line"), 3)
        self.assertEqual([call[2] for call in engine.calls if call[0] == "label"], ["3", "7", "0.5"])
        self.assertEqual(engine.calls[0][1], [PixelPoint(30.0, 0.0), PixelPoint(30.0, 49.0)])

    def test_captions_can_be_hidden(self) -> None:
        engine = _RecordingEngine()
        mapper = CoordinateMapper(DomainModel.explicit(0, 10, 0.0, 1.0), CanvasSize(100, 100))
        GridDecorator(show_captions=False).draw(engine, mapper, [Tick(50.0, 5.0, "5")], [])
        self.assertEqual([call[0] for call in engine.calls], ["line"])


class AdapterTests(unittest.TestCase):
    def test_list_input_with_gaps(self) -> None:
        shapes = series_to_shapes([1, float("nan"), None, 3])
        self.assertEqual([s.y for s in shapes], [1.0, None, None, 3.0])
        self.assertTrue(all(isinstance(s, LineShape) for s in shapes))

    def test_numpy_and_torch_inputs(self) -> None:
        bars = series_to_shapes(np.asarray([2, 4], dtype=np.int64), kind="bar")
        self.assertEqual([type(s) for s in bars], [BarShape, BarShape])
        dots = series_to_shapes(torch.tensor([0.5, 1.5]), kind="dot", style=ShapeStyle(color=RED, size=3.0))
        self.assertEqual([s.y for s in dots], [0.5, 1.5])
        self.assertEqual(dots[0].style.color, RED)

    def test_invalid_inputs(self) -> None:
        with self.assertRaises(ChartDataError):
            series_to_shapes([1, 2], kind="pie")
        with self.assertRaises(ChartDataError):
            series_to_shapes(None)
        with self.assertRaises(ChartDataError):
            series_to_shapes([])
        with self.assertRaises(ChartDataError):
            series_to_shapes(np.zeros((2, 2)))
        with self.assertRaises(ChartDataError):
            series_to_shapes(["a", "b"])
        with self.assertRaises(ChartDataError):
            series_to_shapes("123")

    def test_group_series_zips_columns(self) -> None:
        items = group_series({"close": [1, 2, 3], "volume": [10, 20, 30]}, kinds={"volume": "bar"})
        self.assertEqual(len(items), 3)
        self.assertIsInstance(items[0].groups["close"], LineShape)
        self.assertIsInstance(items[2].groups["volume"], BarShape)
        self.assertEqual(items[2].groups["volume"].y, 30.0)

    def test_group_series_rejects_mismatch(self) -> None:
        with self.assertRaises(ChartDataError):
            group_series({"a": [1, 2], "b": [1]})
        with self.assertRaises(ChartDataError):
            group_series({})

    @unittest.skipUnless(importlib.util.find_spec("pandas") is not None, "pandas not installed")
    def test_pandas_columns(self) -> None:
        import pandas as pd

        frame = pd.DataFrame({"price": [1.0, 2.0], "name": ["a", "b"]})
        self.assertEqual([s.y for s in series_to_shapes("price", data=frame)], [1.0, 2.0])
        self.assertEqual([s.y for s in series_to_shapes(data=frame)], [1.0, 2.0])
        with self.assertRaises(ChartDataError):
            series_to_shapes("missing", data=frame)


class EndToEndTests(unittest.TestCase):
    def test_grouped_chart_renders_into_frame(self) -> None:
        items = group_series(
            {"close": [3.0, 5.0, 4.0, 6.0, 7.0], "volume": [1.0, 2.0, 1.5, 3.0, 2.5]},
            kinds={"volume": "bar"},
        )
        view = ChartView(120, 80, threaded=False)
        composer = Composer(name="prices", items=items, view=view, decorators=[GridDecorator()])
        job = composer.create(RasterEngine)
        self.assertIsNone(job.error)
        frame = view.target.last_frame
        self.assertEqual(tuple(frame.rgba.shape), (80, 120, 4))
        self.assertFalse(bool(torch.all(frame.rgba == 255)))
        self.assertEqual(composer.domain.value_domain, (0.0, 7.0))


if __name__ == "__main__":
    unittest.main()
