from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Generic, TypeAlias, TypeVar


T = TypeVar("T", int, float)


@dataclass(frozen=True)
class Auto:
    """Axis bounds follow the auto-computed extent."""


@dataclass(frozen=True)
class Explicit(Generic[T]):
    lo: T
    hi: T

    def __post_init__(self) -> None:
        if not (math.isfinite(self.lo) and math.isfinite(self.hi)):
            raise ValueError(f"range bounds must be finite: {self.lo}, {self.hi}")
        if self.lo > self.hi:
            raise ValueError(f"range lower bound must be <= upper bound: {self.lo} > {self.hi}")

    def as_tuple(self) -> tuple[T, T]:
        return (self.lo, self.hi)


AUTO = Auto()

IndexRange: TypeAlias = Explicit[int] | Auto
ValueRange: TypeAlias = Explicit[float] | Auto


@dataclass(frozen=True)
class DomainModel:
    """Visible data window: index range x value range plus their auto bounds."""

    index_range: IndexRange = AUTO
    value_range: ValueRange = AUTO
    auto_index_domain: tuple[int, int] = (0, 0)
    auto_value_domain: tuple[float, float] | None = None

    @classmethod
    def explicit(cls, min_index: int, max_index: int, min_value: float, max_value: float) -> "DomainModel":
        return cls(
            index_range=Explicit(int(min_index), int(max_index)),
            value_range=Explicit(float(min_value), float(max_value)),
        )

    @property
    def index_domain(self) -> tuple[int, int]:
        if isinstance(self.index_range, Explicit):
            return self.index_range.as_tuple()
        return self.auto_index_domain

    @property
    def value_domain(self) -> tuple[float, float]:
        if isinstance(self.value_range, Explicit):
            return self.value_range.as_tuple()
        if self.auto_value_domain is not None:
            return self.auto_value_domain
        return (0.0, 0.0)

    @property
    def min_index(self) -> int:
        return self.index_domain[0]

    @property
    def max_index(self) -> int:
        return self.index_domain[1]

    @property
    def min_value(self) -> float:
        return self.value_domain[0]

    @property
    def max_value(self) -> float:
        return self.value_domain[1]

    @property
    def index_span(self) -> int:
        lo, hi = self.index_domain
        return hi - lo

    @property
    def value_span(self) -> float:
        lo, hi = self.value_domain
        return hi - lo

    @property
    def is_index_degenerate(self) -> bool:
        lo, hi = self.index_domain
        return lo == hi

    @property
    def is_value_degenerate(self) -> bool:
        lo, hi = self.value_domain
        return lo == hi

    def with_index(self, lo: int, hi: int) -> "DomainModel":
        return replace(self, index_range=Explicit(int(lo), int(hi)))

    def with_value(self, lo: float, hi: float) -> "DomainModel":
        return replace(self, value_range=Explicit(float(lo), float(hi)))

    def with_auto_index(self) -> "DomainModel":
        return replace(self, index_range=AUTO)

    def with_auto_value(self) -> "DomainModel":
        return replace(self, value_range=AUTO)
