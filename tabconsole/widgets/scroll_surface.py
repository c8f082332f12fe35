"""Scrollable text viewport used for each console tab."""

from __future__ import annotations

import re
from enum import Enum

from rich.ansi import AnsiDecoder
from rich.cells import cell_len, chop_cells, get_character_cell_size, set_cell_size
from rich.text import Text

from ..constants import TAB_SIZE

# C0 controls and DEL, except tab and newline
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


class Axis(Enum):
    """Scroll direction."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class NavKey(Enum):
    """Navigation keys a surface reacts to."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"


def decode_line(line: str, decoder: AnsiDecoder | None = None) -> Text:
    """Turn one line of terminal output into styled text.

    SGR colour codes become styles and a carriage return keeps only what
    was written after it.  Every other escape sequence or control character
    is dropped, so each remaining character occupies its measured cells.
    Pass a shared *decoder* to carry an open style over to the next line.
    """
    text = (decoder or AnsiDecoder()).decode_line(line)
    if _CONTROL_CHARS.search(text.plain):
        kept: list[Text] = []
        position = 0
        for match in _CONTROL_CHARS.finditer(text.plain):
            kept.append(text[position : match.start()])
            position = match.end()
        kept.append(text[position:])
        text = Text("").join(kept)
    text.expand_tabs(TAB_SIZE)
    text.end = ""
    return text


def _cell_window(line: str, start: int, width: int) -> tuple[int, int, int]:
    """Locate the *width*-cell window of *line* beginning at cell *start*.

    Returns ``(lead, first, last)``: the blank cells left by a wide character
    straddling the left edge, then the character slice ``line[first:last]``.
    """
    lead = 0
    used = 0
    position = 0
    first: int | None = None
    for index, char in enumerate(line):
        size = get_character_cell_size(char)
        if first is None:
            if position < start:
                position += size
                if position > start:
                    # Right half of a wide character straddling the left edge
                    lead = used = position - start
                continue
            first = index
        if used + size > width:
            return lead, first, index
        used += size
    if first is None:
        return lead, len(line), len(line)
    return lead, first, len(line)


def crop_cells(line: str, start: int, width: int) -> str:
    """Return the *width*-cell window of *line* beginning at cell *start*.

    The result is padded with spaces to exactly *width* cells.  A wide
    character cut by either edge is replaced with spaces.
    """
    if width <= 0:
        return ""
    lead, first, last = _cell_window(line, start, width)
    return set_cell_size(" " * lead + line[first:last], width)


def crop_text(line: Text, start: int, width: int) -> Text:
    """Styled counterpart of :func:`crop_cells`."""
    cropped = Text(end="")
    if width <= 0:
        return cropped
    lead, first, last = _cell_window(line.plain, start, width)
    cropped.append(" " * lead)
    cropped.append_text(line[first:last])
    cropped.pad_right(max(0, width - cell_len(cropped.plain)))
    return cropped


def _fold(line: Text, width: int) -> list[Text]:
    offsets: list[int] = []
    position = 0
    for piece in chop_cells(line.plain, width)[:-1]:
        position += len(piece)
        offsets.append(position)
    return list(line.divide(offsets))


class ScrollSurface:
    """A fixed-size window over laid-out text.

    Content is decoded (see :func:`decode_line`) and split into lines on
    every :meth:`set_content`.  With ``word_wrap`` the lines are additionally
    folded to the surface width, which leaves nothing to scroll horizontally.
    Both offsets are clamped after every mutation, so they always index into
    the current layout.
    """

    def __init__(self, width: int = 0, height: int = 0, *, word_wrap: bool = False) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self.word_wrap = word_wrap
        self.y_offset = 0
        self.x_offset = 0
        self._content = ""
        self._styled: list[Text] = [Text(end="")]
        self._lines: list[str] = [""]
        self._content_width = 0

    # -- Content -------------------------------------------------------------

    @property
    def content(self) -> str:
        return self._content

    @property
    def lines(self) -> list[str]:
        """The laid-out lines as plain text (a copy)."""
        return list(self._lines)

    @property
    def content_width(self) -> int:
        """Cell width of the longest laid-out line."""
        return self._content_width

    def set_content(self, text: str) -> None:
        """Replace the content and lay it out again at the current width."""
        self._content = text
        self._reflow()

    def set_size(self, width: int, height: int) -> None:
        """Resize the viewport and lay the current content out again."""
        self.width = max(0, width)
        self.height = max(0, height)
        self._reflow()

    def _reflow(self) -> None:
        decoder = AnsiDecoder()
        lines: list[Text] = []
        for raw in self._content.replace("\r\n", "\n").split("\n"):
            line = decode_line(raw, decoder)
            if self.word_wrap and self.width > 0 and cell_len(line.plain) > self.width:
                lines.extend(_fold(line, self.width))
            else:
                lines.append(line)
        self._styled = lines
        self._lines = [line.plain for line in lines]
        self._content_width = max((cell_len(line) for line in self._lines), default=0)
        self._clamp()

    # -- Offsets -------------------------------------------------------------

    @property
    def max_y_offset(self) -> int:
        return max(0, len(self._lines) - self.height)

    @property
    def max_x_offset(self) -> int:
        if self.word_wrap:
            return 0
        return max(0, self._content_width - self.width)

    @property
    def at_top(self) -> bool:
        return self.y_offset <= 0

    @property
    def at_bottom(self) -> bool:
        return self.y_offset >= self.max_y_offset

    def _clamp(self) -> None:
        self.y_offset = min(max(0, self.y_offset), self.max_y_offset)
        self.x_offset = min(max(0, self.x_offset), self.max_x_offset)

    def scroll_by(self, delta: int, axis: Axis = Axis.VERTICAL) -> None:
        """Move the viewport by *delta* lines or columns."""
        if axis is Axis.HORIZONTAL:
            self.x_offset += delta
        else:
            self.y_offset += delta
        self._clamp()

    def scroll_to_top(self) -> None:
        self.y_offset = 0

    def scroll_to_bottom(self) -> None:
        self.y_offset = self.max_y_offset

    def handle_key(self, key: NavKey) -> None:
        """Apply a navigation key: arrows move by one, pages by a screenful."""
        if key is NavKey.UP:
            self.scroll_by(-1)
        elif key is NavKey.DOWN:
            self.scroll_by(1)
        elif key is NavKey.PAGE_UP:
            self.scroll_by(-max(1, self.height))
        elif key is NavKey.PAGE_DOWN:
            self.scroll_by(max(1, self.height))
        elif key is NavKey.LEFT:
            self.scroll_by(-1, Axis.HORIZONTAL)
        elif key is NavKey.RIGHT:
            self.scroll_by(1, Axis.HORIZONTAL)

    # -- Rendering -----------------------------------------------------------

    def render(self) -> list[str]:
        """Return exactly ``height`` rows, each exactly ``width`` cells wide."""
        visible = self._lines[self.y_offset : self.y_offset + self.height]
        rows = [crop_cells(line, self.x_offset, self.width) for line in visible]
        blank = " " * self.width
        rows.extend(blank for _ in range(self.height - len(rows)))
        return rows

    def render_text(self) -> list[Text]:
        """Styled rows with the same geometry as :meth:`render`."""
        visible = self._styled[self.y_offset : self.y_offset + self.height]
        rows = [crop_text(line, self.x_offset, self.width) for line in visible]
        rows.extend(Text(" " * self.width, end="") for _ in range(self.height - len(rows)))
        return rows
