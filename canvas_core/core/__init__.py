from .composer import Composer, ComposerState, GestureState, ShapeContext, link_composers
from .domain import AUTO, Auto, DomainModel, Explicit
from .errors import ChartDataError
from .events import ViewEvent, parse_view_event
from .mapper import CanvasSize, CoordinateMapper, DataPoint, PixelPoint, to_pixels, to_value
from .reducer import auto_scale, compose_domain, pan_index, zoom_index, zoom_value
from .settings import ComposerSettings, load_settings
from .ticks import Tick, format_tick, index_ticks, value_ticks
from .view import ChartView, RenderJob

__all__ = [
    "AUTO",
    "Auto",
    "CanvasSize",
    "ChartDataError",
    "ChartView",
    "Composer",
    "ComposerSettings",
    "ComposerState",
    "CoordinateMapper",
    "DataPoint",
    "DomainModel",
    "Explicit",
    "GestureState",
    "PixelPoint",
    "RenderJob",
    "ShapeContext",
    "Tick",
    "ViewEvent",
    "auto_scale",
    "compose_domain",
    "format_tick",
    "index_ticks",
    "link_composers",
    "load_settings",
    "pan_index",
    "parse_view_event",
    "to_pixels",
    "to_value",
    "value_ticks",
    "zoom_index",
    "zoom_value",
]
