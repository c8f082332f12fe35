"""Status bar, tab strip and borders around the console frame."""

from __future__ import annotations

from collections.abc import Sequence

from rich import box
from rich.text import Text


def render_status_bar(text: str, width: int, style: str = "") -> Text:
    """A full-width bar with one cell of padding either side."""
    bar = Text(f" {text} ", style=style, end="")
    bar.truncate(width, pad=True)
    return bar


def render_tab_strip(
    names: list[str],
    active_index: int,
    width: int,
    *,
    active_style: str = "bold",
    inactive_style: str = "",
    rule_style: str = "",
) -> Text:
    """Tab labels on one line behind a left rule; the active tab is styled apart."""
    strip = Text(box.SQUARE.mid_left, style=rule_style, end="")
    for i, name in enumerate(names):
        strip.append(f" {name} ", style=active_style if i == active_index else inactive_style)
    strip.truncate(width, pad=True)
    return strip


def render_box(
    rows: Sequence[str | Text],
    inner_width: int,
    *,
    style: str = "",
    padding: int = 1,
    border: box.Box = box.ROUNDED,
) -> list[Text]:
    """Wrap pre-sized *rows* in a border with horizontal padding."""
    span = inner_width + 2 * padding
    pad = " " * padding
    lines = [Text(border.top_left + border.top * span + border.top_right, style=style, end="")]
    for row in rows:
        line = Text(border.mid_left, style=style, end="")
        line.append(pad)
        line.append(row)
        line.append(pad)
        line.append(border.mid_right, style=style)
        lines.append(line)
    lines.append(
        Text(border.bottom_left + border.bottom * span + border.bottom_right, style=style, end="")
    )
    return lines


def render_hidden_box(content: Text, inner_width: int) -> list[Text]:
    """Surround *content* with a one-cell blank border."""
    blank = Text(" " * (inner_width + 2), end="")
    line = Text(" ", end="")
    line.append_text(content)
    line.truncate(inner_width + 1, pad=True)
    line.append(" ")
    return [blank, line, blank.copy()]
