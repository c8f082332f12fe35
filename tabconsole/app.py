"""Textual front end for Tab Console.

The app is only the terminal boundary: it turns Textual key, paste,
mouse-wheel and resize events into console events, hands them to the
:class:`~tabconsole.session.SessionController`, and shows the frame the
controller renders.  All state lives in the controller.
"""

from __future__ import annotations

from collections.abc import Sequence

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .constants import MOUSE_WHEEL_DELTA
from .events import ConsoleEvent, MouseScroll, Paste, Resize
from .keymap import KEY_EVENTS, event_for_key
from .log import logger
from .preferences import Preferences
from .session import Effect, ExecuteCommand, SessionController
from .theme import TEXTUAL_THEMES, get_theme


class ConsoleApp(App):
    """Tabbed command console."""

    TITLE = "Tab Console"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        overflow: hidden;
    }
    #frame {
        width: 100%;
        height: 100%;
    }
    """

    # Routed keys are bound with priority so Textual's own bindings
    # (focus cycling on Tab, help on Ctrl+C) never see them first.
    BINDINGS = [
        Binding(key, f"console_key('{key}')", show=False, priority=True)
        for key in KEY_EVENTS
    ]

    def __init__(
        self,
        tab_names: Sequence[str],
        execute: ExecuteCommand,
        *,
        preferences: Preferences | None = None,
    ) -> None:
        super().__init__()
        self._prefs = preferences or Preferences()
        self.session = SessionController(tab_names, execute, display=self._prefs.display)
        self.console_theme = get_theme(self._prefs.theme)

    # ── Layout ──────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        yield Static(id="frame")

    def on_mount(self) -> None:
        textual_theme = TEXTUAL_THEMES.get(self._prefs.theme)
        if textual_theme is not None:
            self.register_theme(textual_theme)
            self.theme = textual_theme.name
        self._refresh_frame()
        # The driver reports the size too; a second Resize is harmless.
        self.send_console_event(Resize(self.size.width, self.size.height))

    # ── Event translation ───────────────────────────────────────

    def on_resize(self, event: events.Resize) -> None:
        self.send_console_event(Resize(event.size.width, event.size.height))

    def action_console_key(self, key: str) -> None:
        self.send_console_event(event_for_key(key))

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self.send_console_event(event_for_key(event.key, event.character))

    def on_paste(self, event: events.Paste) -> None:
        event.stop()
        self.send_console_event(Paste(event.text))

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self.send_console_event(MouseScroll(MOUSE_WHEEL_DELTA))

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self.send_console_event(MouseScroll(-MOUSE_WHEEL_DELTA))

    # ── Dispatch ────────────────────────────────────────────────

    def send_console_event(self, event: ConsoleEvent) -> None:
        """Hand *event* to the session, then quit or redraw."""
        if self.session.handle(event) is Effect.QUIT:
            logger.debug("Exiting console")
            self.exit()
            return
        self._refresh_frame()

    def _refresh_frame(self) -> None:
        self.query_one("#frame", Static).update(self.session.render(self.console_theme))


def run_app(
    tab_names: Sequence[str],
    execute: ExecuteCommand,
    preferences: Preferences | None = None,
) -> None:
    """Run the console and block until the user quits."""
    app = ConsoleApp(tab_names, execute, preferences=preferences)
    app.run()
