"""Frame geometry for the console.

The frame is, top to bottom::

    margin          1 row
    status bar      1 row
    tab bar         1 row
    surface border  1 row   ╭──────╮
    surface         N rows  │ .... │
    surface border  1 row   ╰──────╯
    input area      3 rows  (blank border around one line)
    help            1 row
    margin          1 row

Horizontally the frame has a 2-column margin on each side, the surface a
1-column border and 1 column of padding on each side, and the input a
1-column blank border on each side plus its prompt.
"""

from __future__ import annotations

from dataclasses import dataclass

# Layout constants
MARGIN_V = 1
MARGIN_H = 2
STATUS_HEIGHT = 1
TAB_BAR_HEIGHT = 1
SURFACE_BORDER = 1
SURFACE_PADDING = 1
INPUT_AREA_HEIGHT = 3
INPUT_BORDER = 1
HELP_HEIGHT = 1

CHROME_HEIGHT = (
    2 * MARGIN_V
    + STATUS_HEIGHT
    + TAB_BAR_HEIGHT
    + 2 * SURFACE_BORDER
    + INPUT_AREA_HEIGHT
    + HELP_HEIGHT
)


@dataclass(frozen=True)
class Geometry:
    """Computed sizes for the current terminal size."""

    term_width: int
    term_height: int
    content_width: int
    surface_width: int
    surface_height: int
    input_width: int


def calculate_geometry(width: int, height: int, prompt_width: int = 0) -> Geometry:
    """Derive component sizes from the terminal size.

    Every derived size is floored at zero so extreme resizes never produce
    negative dimensions.
    """
    content_width = max(0, width - 2 * MARGIN_H)
    surface_width = max(0, content_width - 2 * (SURFACE_BORDER + SURFACE_PADDING))
    surface_height = max(0, height - CHROME_HEIGHT)
    input_width = max(0, content_width - 2 * INPUT_BORDER - prompt_width)
    return Geometry(
        term_width=max(0, width),
        term_height=max(0, height),
        content_width=content_width,
        surface_width=surface_width,
        surface_height=surface_height,
        input_width=input_width,
    )
