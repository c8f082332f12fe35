"""Session controller: the console's state machine.

The controller owns every piece of mutable state (tabs, the active index,
one scroll surface per tab, the input line, the terminal size) and changes
it only in :meth:`SessionController.handle`, one event at a time.  Rendering
reads that state without touching it.

Phases::

    Initializing --(first Resize)--> Ready --(any event)--> Ready

Scroll surfaces only exist inside :class:`Ready`, so there is no way to
render or scroll a tab before the terminal size is known.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from rich.cells import cell_len
from rich.text import Text

from .constants import (
    CLEAR_COMMAND,
    HELP_TEXT,
    INITIALIZING_TEXT,
    LOADING_TEXT,
    STATUS_TEMPLATE,
)
from .events import (
    ConsoleEvent,
    Edit,
    MouseScroll,
    Navigate,
    NextTab,
    Paste,
    Quit,
    Resize,
    ScrollLeft,
    ScrollRight,
    Submit,
)
from .layout import MARGIN_H, MARGIN_V, Geometry, calculate_geometry
from .log import logger
from .preferences import DisplayPreferences
from .theme import ConsoleTheme, get_theme
from .widgets.chrome import (
    render_box,
    render_hidden_box,
    render_status_bar,
    render_tab_strip,
)
from .widgets.input_line import InputLine
from .widgets.scroll_surface import Axis, ScrollSurface

Failure = Union[BaseException, str, None]
ExecuteCommand = Callable[[str, str], tuple[str, Failure]]
"""Runs *command* on the tab named *tab* and returns ``(output, failure)``."""


class EmptyTabListError(ValueError):
    """Raised when a session is created without any tab names."""


class Effect(Enum):
    """What the front end should do after an event."""

    RENDER = "render"
    QUIT = "quit"


@dataclass
class Tab:
    """A named output stream; ``index`` is its position in creation order."""

    name: str
    index: int
    buffer: str = ""


@dataclass(frozen=True)
class Initializing:
    """Waiting for the first terminal size."""


@dataclass(frozen=True)
class Ready:
    """Terminal size known; one surface per tab, in tab order."""

    geometry: Geometry
    surfaces: tuple[ScrollSurface, ...]


Phase = Union[Initializing, Ready]


def append_block(buffer: str, output: str, failure: Failure = None) -> str:
    """Append one newline-terminated result block to *buffer*.

    A separating newline is added first only when *buffer* is non-empty and
    does not already end with one.  A failure message follows the output
    directly, before the block's trailing newline.
    """
    if buffer and not buffer.endswith("\n"):
        buffer += "\n"
    buffer += output
    if failure is not None:
        buffer += str(failure)
    return buffer + "\n"


class SessionController:
    """Owns the console state and turns events into state changes."""

    def __init__(
        self,
        tab_names: Sequence[str],
        execute: ExecuteCommand,
        *,
        display: DisplayPreferences | None = None,
    ) -> None:
        if not tab_names:
            raise EmptyTabListError("at least one tab name is required")

        self.display = display or DisplayPreferences()
        self.tabs = [Tab(name=name, index=i) for i, name in enumerate(tab_names)]
        self.active = 0
        self.execute = execute
        self.width = 0
        self.height = 0
        self.phase: Phase = Initializing()
        self.quit_requested = False

        self.input = InputLine(
            placeholder=self.display.placeholder, prompt=self.display.prompt
        )
        self.input.focus()

        # Event type -> handler.  Key routing lives in keymap.py; this only
        # maps already-classified events onto state changes.
        self._handlers: dict[type, Callable[..., None]] = {
            NextTab: self._on_next_tab,
            Submit: self._on_submit,
            ScrollLeft: self._on_scroll_left,
            ScrollRight: self._on_scroll_right,
            Navigate: self._on_navigate,
            MouseScroll: self._on_mouse_scroll,
            Edit: self._on_edit,
            Paste: self._on_paste,
            Resize: self._on_resize,
        }

    # -- Read-only views -----------------------------------------------------

    @property
    def ready(self) -> bool:
        return isinstance(self.phase, Ready)

    @property
    def surfaces(self) -> tuple[ScrollSurface, ...]:
        """Per-tab surfaces; empty until the first resize."""
        if isinstance(self.phase, Ready):
            return self.phase.surfaces
        return ()

    @property
    def active_tab(self) -> Tab:
        return self.tabs[self.active]

    @property
    def active_surface(self) -> ScrollSurface | None:
        if isinstance(self.phase, Ready):
            return self.phase.surfaces[self.active]
        return None

    def buffer(self, index: int) -> str:
        return self.tabs[index].buffer

    # -- Event handling ------------------------------------------------------

    def handle(self, event: ConsoleEvent) -> Effect:
        """Apply one event and report what the front end should do next."""
        if self.quit_requested:
            return Effect.QUIT
        if isinstance(event, Quit):
            logger.debug("Quit requested")
            self.quit_requested = True
            return Effect.QUIT

        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"unsupported console event: {event!r}")
        handler(event)
        return Effect.RENDER

    def _on_next_tab(self, event: NextTab) -> None:
        self.active = (self.active + 1) % len(self.tabs)
        logger.debug("Switched to tab %d (%s)", self.active, self.active_tab.name)
        surface = self.active_surface
        if surface is not None:
            surface.set_content(self.active_tab.buffer)
        self.input.focus()

    def _on_submit(self, event: Submit) -> None:
        if not self.input.focused or not self.input.value:
            return
        command = self.input.value
        tab = self.active_tab
        surface = self.active_surface

        if command == CLEAR_COMMAND:
            logger.debug("Clearing tab %s", tab.name)
            tab.buffer = ""
            if surface is not None:
                surface.set_content(tab.buffer)
                surface.scroll_to_top()
        else:
            output, failure = self._run(tab.name, command)
            tab.buffer = append_block(tab.buffer, output, failure)
            if surface is not None:
                surface.set_content(tab.buffer)
                surface.scroll_to_bottom()

        self.input.reset()
        self.input.focus()

    def _run(self, tab_name: str, command: str) -> tuple[str, Failure]:
        """Call the executor; a raised exception becomes an inline failure."""
        logger.debug("Executing %r on tab %s", command, tab_name)
        try:
            output, failure = self.execute(tab_name, command)
        except Exception as exc:
            logger.warning("Command %r on tab %s raised", command, tab_name, exc_info=True)
            return "", exc
        if failure is not None:
            logger.warning("Command %r on tab %s failed: %s", command, tab_name, failure)
        return output or "", failure

    def _on_scroll_left(self, event: ScrollLeft) -> None:
        surface = self.active_surface
        if surface is not None:
            surface.scroll_by(-self.display.horizontal_step, Axis.HORIZONTAL)

    def _on_scroll_right(self, event: ScrollRight) -> None:
        surface = self.active_surface
        if surface is not None:
            surface.scroll_by(self.display.horizontal_step, Axis.HORIZONTAL)

    def _on_navigate(self, event: Navigate) -> None:
        surface = self.active_surface
        if surface is not None:
            surface.handle_key(event.key)

    def _on_mouse_scroll(self, event: MouseScroll) -> None:
        surface = self.active_surface
        if surface is not None:
            surface.scroll_by(event.delta, Axis.VERTICAL)

    def _on_edit(self, event: Edit) -> None:
        self.input.handle_key(event.key, event.character)

    def _on_paste(self, event: Paste) -> None:
        self.input.paste(event.text)

    def _on_resize(self, event: Resize) -> None:
        self.width, self.height = event.width, event.height
        geometry = calculate_geometry(
            event.width, event.height, cell_len(self.input.prompt)
        )

        if isinstance(self.phase, Ready):
            surfaces = self.phase.surfaces
            for tab, surface in zip(self.tabs, surfaces):
                surface.set_size(geometry.surface_width, geometry.surface_height)
                surface.set_content(tab.buffer)
        else:
            surfaces = tuple(
                self._new_surface(tab, geometry) for tab in self.tabs
            )
            logger.debug("First layout: %d surfaces", len(surfaces))

        self.phase = Ready(geometry=geometry, surfaces=surfaces)
        self.input.set_width(geometry.input_width)
        logger.debug("Resized to %dx%d", event.width, event.height)

    def _new_surface(self, tab: Tab, geometry: Geometry) -> ScrollSurface:
        surface = ScrollSurface(
            geometry.surface_width,
            geometry.surface_height,
            word_wrap=self.display.word_wrap,
        )
        surface.set_content(tab.buffer)
        return surface

    # -- Rendering -----------------------------------------------------------

    def status_text(self) -> str:
        if not self.ready:
            return INITIALIZING_TEXT
        return STATUS_TEMPLATE.format(name=self.active_tab.name, count=len(self.tabs))

    def render(self, theme: ConsoleTheme | None = None) -> Text:
        """Compose the full frame.  Pure: reads state, never changes it."""
        theme = theme or get_theme(None)
        margin = " " * MARGIN_H

        if not isinstance(self.phase, Ready):
            lines = [Text("", end="")] * MARGIN_V + [Text(margin + LOADING_TEXT, end="")]
            return Text("\n", end="").join(lines)

        geometry = self.phase.geometry
        width = geometry.content_width
        surface = self.phase.surfaces[self.active]

        body: list[Text] = [
            render_status_bar(self.status_text(), width, theme.status_bar),
            render_tab_strip(
                [tab.name for tab in self.tabs],
                self.active,
                width,
                active_style=theme.active_tab,
                inactive_style=theme.inactive_tab,
                rule_style=theme.tab_rule,
            ),
        ]
        body.extend(render_box(surface.render_text(), surface.width, style=theme.border))
        body.extend(
            render_hidden_box(
                self.input.render(theme.placeholder, theme.cursor),
                max(0, width - 2),
            )
        )
        help_line = Text(HELP_TEXT, style=theme.help, end="")
        help_line.truncate(width, pad=True)
        body.append(help_line)

        blank = Text(" " * geometry.term_width, end="")
        lines = [blank] * MARGIN_V
        for line in body:
            framed = Text(margin, end="")
            framed.append_text(line)
            framed.append(margin)
            lines.append(framed)
        lines.extend([blank] * MARGIN_V)
        return Text("\n", end="").join(lines)
