from .canvas import draw_hline, draw_pixel, fill_rect, new_canvas
from .draw_lines import draw_markers, draw_polyline
from .draw_polygon import fill_polygon
from .draw_text import draw_text, text_size

__all__ = [
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
]
