from .canvas import draw_filled_rect, draw_hline, draw_rect_outline, draw_vline, new_canvas
from .shapes import distance_to_segment, draw_arrow_head, draw_markers, draw_polyline, draw_segment
from .text import draw_text, text_size

__all__ = [
    "distance_to_segment",
    "draw_arrow_head",
    "draw_filled_rect",
    "draw_hline",
    "draw_markers",
    "draw_polyline",
    "draw_rect_outline",
    "draw_segment",
    "draw_text",
    "draw_vline",
    "new_canvas",
    "text_size",
]
