"""Chart item variants.

Every variant satisfies the composer's item protocol: ``extent`` feeds
auto-scaling, ``draw`` turns the item at one index into engine calls. Leaf
items that connect to their neighbour (lines, areas) find the previous item
through the same key path inside the item list, so a group tree at index
``i - 1`` and one at index ``i`` pair their children by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence, TypeAlias

from canvas_core.core.composer import ShapeContext
from canvas_core.engines.base import ShapeStyle


Path: TypeAlias = tuple[str, ...]


def resolve(items: Sequence[Any], index: int, path: Path = ()) -> Any:
    if index < 0 or index >= len(items):
        return None
    node = items[index]
    for key in path:
        if not isinstance(node, GroupShape):
            return None
        node = node.groups.get(key)
        if node is None:
            return None
    return node


def _value_of(node: Any) -> float | None:
    return getattr(node, "y", None)


@dataclass
class LineShape:
    y: float | None = None
    style: ShapeStyle = ShapeStyle(color=(30, 144, 255, 255), size=1.0)

    def extent(self, index: int, items: Sequence[Any], path: Path = ()) -> tuple[float, float] | None:
        if self.y is None:
            return None
        return (self.y, self.y)

    def draw(self, ctx: ShapeContext, index: int, items: Sequence[Any], path: Path = ()) -> None:
        previous = _value_of(resolve(items, index - 1, path))
        if self.y is None or previous is None:
            return
        points = [ctx.mapper.to_pixels(index - 1, previous), ctx.mapper.to_pixels(index, self.y)]
        ctx.engine.create_line(points, self.style)


@dataclass
class BarShape:
    y: float | None = None
    style: ShapeStyle = ShapeStyle(color=(0, 191, 255, 255), size=1.0)

    def extent(self, index: int, items: Sequence[Any], path: Path = ()) -> tuple[float, float] | None:
        if self.y is None:
            return None
        return (min(0.0, self.y), max(0.0, self.y))

    def draw(self, ctx: ShapeContext, index: int, items: Sequence[Any], path: Path = ()) -> None:
        if self.y is None:
            return
        half = ctx.item_size / 2.0
        points = [ctx.mapper.to_pixels(index - half, self.y), ctx.mapper.to_pixels(index + half, 0.0)]
        ctx.engine.create_box(points, self.style)


@dataclass
class DotShape:
    y: float | None = None
    style: ShapeStyle = ShapeStyle(color=(255, 69, 0, 255), size=5.0)

    def extent(self, index: int, items: Sequence[Any], path: Path = ()) -> tuple[float, float] | None:
        if self.y is None:
            return None
        return (self.y, self.y)

    def draw(self, ctx: ShapeContext, index: int, items: Sequence[Any], path: Path = ()) -> None:
        if self.y is None:
            return
        ctx.engine.create_circle(ctx.mapper.to_pixels(index, self.y), self.style)


@dataclass
class AreaShape:
    y: float | None = None
    style: ShapeStyle = ShapeStyle(color=(0, 191, 255, 120), size=1.0)

    def extent(self, index: int, items: Sequence[Any], path: Path = ()) -> tuple[float, float] | None:
        if self.y is None:
            return None
        return (min(0.0, self.y), max(0.0, self.y))

    def draw(self, ctx: ShapeContext, index: int, items: Sequence[Any], path: Path = ()) -> None:
        previous = _value_of(resolve(items, index - 1, path))
        if self.y is None or previous is None:
            return
        to_pixels = ctx.mapper.to_pixels
        points = [
            to_pixels(index - 1, previous),
            to_pixels(index, self.y),
            to_pixels(index, 0.0),
            to_pixels(index - 1, 0.0),
        ]
        ctx.engine.create_shape(points, self.style)


@dataclass
class GroupShape:
    groups: dict[str, Any] = field(default_factory=dict)

    def extent(self, index: int, items: Sequence[Any], path: Path = ()) -> tuple[float, float] | None:
        lo = float("inf")
        hi = float("-inf")
        for key, child in self.groups.items():
            child_extent = child.extent(index, items, path + (key,))
            if child_extent is None:
                continue
            lo = min(lo, child_extent[0])
            hi = max(hi, child_extent[1])
        if lo > hi:
            return None
        return (lo, hi)

    def draw(self, ctx: ShapeContext, index: int, items: Sequence[Any], path: Path = ()) -> None:
        for key, child in self.groups.items():
            child.draw(ctx, index, items, path + (key,))
