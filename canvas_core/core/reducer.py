from __future__ import annotations

from dataclasses import replace
from typing import Any, Protocol, Sequence

from .domain import DomainModel


_MIN_RELATIVE_SPAN = 1e-12


class ExtentSource(Protocol):
    def extent(self, index: int, items: Sequence[Any], path: tuple[str, ...] = ()) -> tuple[float, float] | None:
        ...


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def _can_widen(bounds: tuple[float, float], divisor: float) -> bool:
    """Whether one widening step from ``bounds`` still moves both bounds in float precision."""
    lo, hi = bounds
    span = hi - lo
    if span <= _MIN_RELATIVE_SPAN * max(abs(lo), abs(hi)):
        return False
    increment = span / divisor
    return lo - increment < lo and hi + increment > hi


def zoom_value(domain: DomainModel, delta: float, *, divisor: float = 100.0) -> tuple[float, float]:
    """Widen (delta > 0) or narrow (delta < 0) the value range by 1/divisor of its span per side."""
    if divisor <= 0:
        raise ValueError("divisor must be > 0")
    lo, hi = domain.value_domain
    if lo == hi or delta == 0:
        return (lo, hi)

    increment = abs((hi - lo) / divisor)
    if delta > 0:
        return (lo - increment, hi + increment)
    # Narrowing must leave more than two increments, otherwise the range would invert.
    if (hi - lo) - 2.0 * increment <= 2.0 * increment:
        return (lo, hi)
    narrowed = (lo + increment, hi - increment)
    if not _can_widen(narrowed, divisor):
        return (lo, hi)
    return narrowed


def zoom_index(domain: DomainModel, delta: float, tick_count: int, *, guard_factor: int = 2) -> tuple[int, int]:
    """Expand (delta > 0) or shrink (delta < 0) the index window by one index per side."""
    if tick_count <= 0:
        raise ValueError("tick_count must be > 0")
    lo, hi = domain.index_domain
    if lo == hi:
        return (lo, hi)

    increment = -_sign(delta)
    if increment == 0:
        return (lo, hi)
    if hi - lo > guard_factor * tick_count * increment:
        return (lo + increment, hi - increment)
    return (lo, hi)


def pan_index(domain: DomainModel, delta: float) -> tuple[int, int]:
    lo, hi = domain.index_domain
    if lo == hi:
        return (lo, hi)
    shift = _sign(delta)
    return (lo + shift, hi + shift)


def auto_scale(items: Sequence[ExtentSource | None], min_index: int, max_index: int) -> tuple[float, float] | None:
    """Scan item extents over [min_index, max_index) and derive the auto value range."""
    lo = float("inf")
    hi = float("-inf")
    for i in range(max(0, min_index), min(len(items), max_index)):
        item = items[i]
        if item is None:
            continue
        extent = item.extent(i, items)
        if extent is None:
            continue
        lo = min(lo, extent[0])
        hi = max(hi, extent[1])

    if lo > hi:
        return None
    if lo == hi:
        return (min(0.0, lo), max(0.0, hi))
    if lo < 0.0 < hi:
        # Signed series keep zero centred.
        extreme = max(abs(lo), abs(hi))
        return (-extreme, extreme)
    return (lo, hi)


def compose_domain(domain: DomainModel, items: Sequence[ExtentSource | None]) -> DomainModel:
    """Refresh the auto bounds of ``domain`` from ``items``."""
    staged = replace(domain, auto_index_domain=(0, len(items)), auto_value_domain=None)
    auto_value = auto_scale(items, staged.min_index, staged.max_index)
    if auto_value is None:
        return staged
    return replace(staged, auto_value_domain=auto_value)
