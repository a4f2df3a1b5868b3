from .canvas import ClipRect, draw_hline, draw_vline, fill_rect, hex_to_rgba, new_canvas
from .draw_lines import draw_polyline
from .draw_text import draw_text, text_size

__all__ = [
    "ClipRect",
    "draw_hline",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "fill_rect",
    "hex_to_rgba",
    "new_canvas",
    "text_size",
]
