"""Key routing for Tab Console.

This table is the only place that decides where a key goes.  Arrow and
page keys become :class:`Navigate` events for the active tab's view, so
they never reach the input line's cursor handling; every key not listed
here becomes an :class:`Edit` event for the input line.
"""

from __future__ import annotations

from .events import (
    ConsoleEvent,
    Edit,
    Navigate,
    NextTab,
    Quit,
    ScrollLeft,
    ScrollRight,
    Submit,
)
from .widgets.scroll_surface import NavKey

KEY_EVENTS: dict[str, ConsoleEvent] = {
    "ctrl+c": Quit(),
    "escape": Quit(),
    "tab": NextTab(),
    "enter": Submit(),
    "ctrl+left": ScrollLeft(),
    "ctrl+right": ScrollRight(),
    "up": Navigate(NavKey.UP),
    "down": Navigate(NavKey.DOWN),
    "left": Navigate(NavKey.LEFT),
    "right": Navigate(NavKey.RIGHT),
    "pageup": Navigate(NavKey.PAGE_UP),
    "pagedown": Navigate(NavKey.PAGE_DOWN),
}


def event_for_key(key: str, character: str | None = None) -> ConsoleEvent:
    """Translate a Textual key name into a console event."""
    event = KEY_EVENTS.get(key)
    if event is not None:
        return event
    return Edit(key, character)
