from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Any, Callable, Literal, Protocol, Sequence

from canvas_core.engines.base import Engine

from . import reducer
from .domain import DomainModel
from .events import ViewEvent
from .mapper import CoordinateMapper, DataPoint, PixelPoint
from .settings import ComposerSettings
from .ticks import Formatter, Tick, index_ticks, value_ticks
from .view import ChartView, EngineFactory, RenderJob

LOGGER = logging.getLogger(__name__)

ComposerState = Literal["idle", "rendering"]
RenderObserver = Callable[[DomainModel, "str | None"], None]


@dataclass(frozen=True)
class ShapeContext:
    engine: Engine
    mapper: CoordinateMapper
    item_size: float


class Item(Protocol):
    def extent(self, index: int, items: Sequence[Any], path: tuple[str, ...] = ()) -> tuple[float, float] | None:
        ...

    def draw(self, ctx: ShapeContext, index: int, items: Sequence[Any], path: tuple[str, ...] = ()) -> None:
        ...


class Decorator(Protocol):
    def draw(
        self,
        engine: Engine,
        mapper: CoordinateMapper,
        index_markers: Sequence[Tick],
        value_markers: Sequence[Tick],
    ) -> None:
        ...


@dataclass(frozen=True)
class GestureState:
    move_anchor: ViewEvent | None = None
    scale_anchor: ViewEvent | None = None


class Composer:
    """Owns the domain of one chart and turns gestures into domain updates."""

    def __init__(
        self,
        *,
        name: str = "",
        items: Sequence[Item | None] | None = None,
        settings: ComposerSettings | None = None,
        view: ChartView | None = None,
        on_render: RenderObserver | None = None,
        show_index: Formatter | None = None,
        show_value: Formatter | None = None,
        decorators: Sequence[Decorator] = (),
    ) -> None:
        self.name = name
        self.items: list[Item | None] = list(items or [])
        self.settings = settings or ComposerSettings()
        self.view = view or ChartView()
        self.on_render: RenderObserver = on_render or (lambda domain, source: None)
        self.show_index = show_index
        self.show_value = show_value
        self.decorators = list(decorators)
        self.index_markers: list[Tick] = []
        self.value_markers: list[Tick] = []
        self._domain = DomainModel()
        self._gestures = GestureState()

    @property
    def domain(self) -> DomainModel:
        return self._domain

    @property
    def engine(self) -> Engine | None:
        return self.view.engine

    @property
    def gestures(self) -> GestureState:
        return self._gestures

    @property
    def state(self) -> ComposerState:
        return "rendering" if self.view.is_rendering else "idle"

    def create(self, engine_type: EngineFactory) -> RenderJob:
        self.view.create(engine_type, self.render)
        return self.update()

    def update(self, domain: DomainModel | None = None, source: str | None = None) -> RenderJob:
        self._domain = reducer.compose_domain(domain or self._domain, self.items)
        LOGGER.debug(
            "composer %r domain index=%s value=%s source=%s",
            self.name,
            self._domain.index_domain,
            self._domain.value_domain,
            source,
        )
        self.on_render(self._domain, source)
        return self.view.update(self._domain)

    def render(self, domain: DomainModel) -> None:
        engine = self.view.engine
        if engine is None:
            raise RuntimeError("composer engine is not created; call create() first")
        engine.clear()

        mapper = self.mapper(domain)
        self.index_markers = list(index_ticks(mapper, self.settings.index_count, self.show_index))
        self.value_markers = list(value_ticks(mapper, self.settings.value_count, self.show_value))
        for decorator in self.decorators:
            decorator.draw(engine, mapper, self.index_markers, self.value_markers)

        ctx = ShapeContext(engine=engine, mapper=mapper, item_size=self.settings.item_size)
        for i in range(domain.min_index, domain.max_index):
            item = self._item_at(i)
            if item is None:
                continue
            item.draw(ctx, i, self.items)

    def mapper(self, domain: DomainModel | None = None) -> CoordinateMapper:
        return CoordinateMapper(domain=domain or self._domain, canvas=self.view.size, padding=self.settings.padding)

    def get_item_position(self, index: float, value: float) -> PixelPoint:
        return self.mapper().to_pixels(index, value)

    def get_item_value(self, x: float, y: float) -> DataPoint:
        return self.mapper().to_value(x, y)

    def zoom_value(self, delta: float) -> tuple[float, float]:
        return reducer.zoom_value(self._domain, delta, divisor=self.settings.value_zoom_divisor)

    def zoom_index(self, delta: float) -> tuple[int, int]:
        return reducer.zoom_index(
            self._domain,
            delta,
            self.settings.index_count,
            guard_factor=self.settings.index_guard_factor,
        )

    def pan_index(self, delta: float) -> tuple[int, int]:
        return reducer.pan_index(self._domain, delta)

    def on_wheel(self, e: ViewEvent) -> None:
        if e.delta_y == 0:
            return
        direction = 1 if e.delta_y > 0 else -1
        lo, hi = self.zoom_index(direction) if e.is_zoom else self.pan_index(direction)
        self.update(self._domain.with_index(lo, hi), self.name)

    def on_mouse_move(self, e: ViewEvent) -> None:
        anchor = self._gestures.move_anchor or e
        if e.is_move:
            delta_x = anchor.x - e.x
            domain = self._domain
            if delta_x != 0:
                domain = domain.with_index(*self.pan_index(1 if delta_x > 0 else -1))
            self.update(domain, self.name)
        self._gestures = replace(self._gestures, move_anchor=e)

    def on_scale(self, e: ViewEvent, orientation: int = 0) -> None:
        anchor = self._gestures.scale_anchor or e
        if e.is_move:
            delta_x = anchor.x - e.x
            delta_y = anchor.y - e.y
            domain = self._domain
            source: str | None = self.name
            if orientation > 0 and delta_x != 0:
                domain = domain.with_index(*self.zoom_index(1 if delta_x > 0 else -1))
            if orientation < 0 and delta_y != 0:
                # Dragging up narrows the value range.
                domain = domain.with_value(*self.zoom_value(-1 if delta_y > 0 else 1))
                source = None
            self.update(domain, source)
        self._gestures = replace(self._gestures, scale_anchor=e)

    def on_mouse_down(self, e: ViewEvent) -> None:
        if e.is_control:
            self.update(self._domain.with_auto_value())

    def on_mouse_leave(self, e: ViewEvent) -> None:
        self._gestures = GestureState()

    def _item_at(self, index: int) -> Item | None:
        if 0 <= index < len(self.items):
            return self.items[index]
        return None


def link_composers(composers: Sequence[Composer]) -> None:
    """Share index-window changes between composers.

    Only updates tagged with the originating composer's name are relayed, and
    peers receive them tagged with that same name, so relays never bounce back.
    """

    names = [composer.name for composer in composers]
    if any(not name for name in names) or len(set(names)) != len(names):
        raise ValueError("linked composers need unique non-empty names")
    for composer in composers:
        peers = [peer for peer in composers if peer is not composer]
        composer.on_render = _relay(composer, peers, composer.on_render)


def _relay(origin: Composer, peers: list[Composer], previous: RenderObserver) -> RenderObserver:
    def on_render(domain: DomainModel, source: str | None) -> None:
        previous(domain, source)
        if source is None or source != origin.name:
            return
        for peer in peers:
            peer.update(replace(peer.domain, index_range=domain.index_range), origin.name)

    return on_render
