"""Building blocks of the console frame."""

from .chrome import render_box, render_hidden_box, render_status_bar, render_tab_strip
from .input_line import InputLine
from .scroll_surface import Axis, NavKey, ScrollSurface, crop_cells, crop_text, decode_line

__all__ = [
    "Axis",
    "InputLine",
    "NavKey",
    "ScrollSurface",
    "crop_cells",
    "crop_text",
    "decode_line",
    "render_box",
    "render_hidden_box",
    "render_status_bar",
    "render_tab_strip",
]
