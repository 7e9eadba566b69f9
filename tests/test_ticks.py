from __future__ import annotations

import unittest

from canvas_core.core.domain import DomainModel
from canvas_core.core.mapper import CanvasSize, CoordinateMapper
from canvas_core.core.ticks import format_tick, index_ticks, value_ticks


def _mapper(min_index: int, max_index: int, min_value: float, max_value: float) -> CoordinateMapper:
    return CoordinateMapper(DomainModel.explicit(min_index, max_index, min_value, max_value), CanvasSize(100, 100))


class IndexTickTests(unittest.TestCase):
    def test_ticks_grow_outward_from_centre_and_skip_edges(self) -> None:
        ticks = list(index_ticks(_mapper(0, 10, 0.0, 1.0), 5))
        self.assertEqual([t.value for t in ticks], [5.0, 3.0, 7.0, 1.0, 9.0])
        self.assertEqual([t.position for t in ticks], [50.0, 30.0, 70.0, 10.0, 90.0])
        self.assertEqual([t.label for t in ticks], ["5", "3", "7", "1", "9"])

    def test_centre_rounds_half_to_even(self) -> None:
        ticks = list(index_ticks(_mapper(0, 5, 0.0, 1.0), 5))
        self.assertEqual(ticks[0].value, 2.0)
        self.assertEqual(sorted(t.value for t in ticks), [1.0, 2.0, 3.0, 4.0])

    def test_zero_step_yields_centre_only(self) -> None:
        ticks = list(index_ticks(_mapper(0, 4, 0.0, 1.0), 9))
        self.assertEqual([t.value for t in ticks], [2.0])

    def test_values_are_unique(self) -> None:
        ticks = list(index_ticks(_mapper(0, 100, 0.0, 1.0), 9))
        values = [t.value for t in ticks]
        self.assertEqual(len(values), len(set(values)))
        self.assertTrue(all(0 < v < 100 for v in values))

    def test_degenerate_window_yields_nothing(self) -> None:
        self.assertEqual(list(index_ticks(_mapper(5, 5, 0.0, 1.0), 9)), [])

    def test_custom_formatter(self) -> None:
        ticks = list(index_ticks(_mapper(0, 10, 0.0, 1.0), 5, formatter=lambda v: f"#{int(v)}"))
        self.assertEqual(ticks[0].label, "#5")

    def test_tick_count_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            list(index_ticks(_mapper(0, 10, 0.0, 1.0), 0))


class ValueTickTests(unittest.TestCase):
    def test_ticks_use_plain_float_step(self) -> None:
        ticks = list(value_ticks(_mapper(0, 10, 0.0, 30.0), 3))
        self.assertEqual([t.value for t in ticks], [15.0, 5.0, 25.0])
        self.assertEqual([t.label for t in ticks], ["15", "5", "25"])
        self.assertEqual(ticks[0].position, 50.0)

    def test_sub_unit_ranges_get_centre_only(self) -> None:
        ticks = list(value_ticks(_mapper(0, 10, 0.0, 0.5), 3))
        self.assertEqual([t.value for t in ticks], [0.25])

    def test_step_count_is_bounded_by_span(self) -> None:
        ticks = list(value_ticks(_mapper(0, 10, 0.0, 2.0), 8))
        self.assertEqual([t.value for t in ticks], [1.0, 0.75, 1.25, 0.5, 1.5])

    def test_degenerate_range_yields_nothing(self) -> None:
        self.assertEqual(list(value_ticks(_mapper(0, 10, 0.0, 0.0), 3)), [])

    def test_tick_count_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            list(value_ticks(_mapper(0, 10, 0.0, 1.0), -1))


class FormatTickTests(unittest.TestCase):
    def test_decimals_follow_step(self) -> None:
        self.assertEqual(format_tick(2.5, step=0.5), "2.5")
        self.assertEqual(format_tick(2.0, step=0.5), "2")

    def test_integer_trailing_zeros_are_kept(self) -> None:
        self.assertEqual(format_tick(30.0, step=10.0), "30")

    def test_near_zero_snaps_to_zero(self) -> None:
        self.assertEqual(format_tick(-4.4409e-16, step=1.0), "0")

    def test_large_values_use_scientific_notation(self) -> None:
        self.assertEqual(format_tick(1234567.0), "1.2346e+06")

    def test_max_decimals_caps_precision(self) -> None:
        self.assertEqual(format_tick(1.0 / 3.0, step=0.001, max_decimals=2), "0.33")


if __name__ == "__main__":
    unittest.main()
