"""Events consumed by the session controller.

The terminal front end turns keys, mouse wheel notches and window size
changes into these values; the controller never sees a Textual event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .widgets.scroll_surface import NavKey


@dataclass(frozen=True)
class Quit:
    """Leave the console."""


@dataclass(frozen=True)
class NextTab:
    """Activate the next tab, wrapping around."""


@dataclass(frozen=True)
class Submit:
    """Run the input line's text against the active tab."""


@dataclass(frozen=True)
class ScrollLeft:
    """Shift the active tab's view left by the horizontal step."""


@dataclass(frozen=True)
class ScrollRight:
    """Shift the active tab's view right by the horizontal step."""


@dataclass(frozen=True)
class Navigate:
    """Arrow or page key for the active tab's view."""

    key: NavKey


@dataclass(frozen=True)
class MouseScroll:
    """Mouse wheel movement; negative is up."""

    delta: int


@dataclass(frozen=True)
class Edit:
    """Any other key, for the input line."""

    key: str
    character: str | None = None


@dataclass(frozen=True)
class Paste:
    """Text pasted into the terminal, for the input line."""

    text: str


@dataclass(frozen=True)
class Resize:
    """New terminal size in cells."""

    width: int
    height: int


ConsoleEvent = Union[
    Quit,
    NextTab,
    Submit,
    ScrollLeft,
    ScrollRight,
    Navigate,
    MouseScroll,
    Edit,
    Paste,
    Resize,
]
