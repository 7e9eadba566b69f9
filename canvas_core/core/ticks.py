from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math
from typing import Callable, Iterator

from .mapper import CoordinateMapper


Formatter = Callable[[float], str]


@dataclass(frozen=True)
class Tick:
    position: float
    value: float
    label: str


def index_ticks(mapper: CoordinateMapper, tick_count: int, formatter: Formatter | None = None) -> Iterator[Tick]:
    """Yield index ticks outward from the window centre, skipping both window edges.

    Index ticks favour whole positions: the centre is rounded half-to-even and
    the step is truncated toward zero.
    """
    if tick_count <= 0:
        raise ValueError("tick_count must be > 0")
    lo, hi = mapper.domain.index_domain
    span = float(hi - lo)
    center = float(round(lo + span / 2.0))
    step = float(math.trunc(span / tick_count))
    fmt = formatter or _step_formatter(step)

    for value in _outward(center, step, min(tick_count, span)):
        if lo < value < hi:
            yield Tick(position=mapper.to_pixels(value, 0.0).x, value=value, label=fmt(value))


def value_ticks(mapper: CoordinateMapper, tick_count: int, formatter: Formatter | None = None) -> Iterator[Tick]:
    """Yield value ticks outward from the range centre with a plain float step.

    Like index ticks, at most `min(tick_count, span)` steps are taken each way,
    so sub-unit ranges only get their centre tick.
    """
    if tick_count <= 0:
        raise ValueError("tick_count must be > 0")
    lo, hi = mapper.domain.value_domain
    span = hi - lo
    center = lo + span / 2.0
    step = span / tick_count
    fmt = formatter or _step_formatter(step)

    for value in _outward(center, step, min(tick_count, span)):
        if lo < value < hi:
            yield Tick(position=mapper.to_pixels(0.0, value).y, value=value, label=fmt(value))


def _outward(center: float, step: float, steps: float) -> Iterator[float]:
    yield center
    if step == 0:
        return
    i = 1
    while i <= steps:
        yield center - i * step
        yield center + i * step
        i += 1


def _step_formatter(step: float) -> Formatter:
    return lambda value: format_tick(value, step=step if step > 0 else None, max_decimals=2)


def format_tick(value: float, *, step: float | None = None, max_decimals: int = 12) -> str:
    if not math.isfinite(value):
        return str(value)
    if step is not None and math.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = min(max_decimals, _decimals_from_step(step) if step is not None else 6)
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only fractional parts lose trailing zeros; 30 stays 30.
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not math.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
