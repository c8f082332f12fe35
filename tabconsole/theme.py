"""Theme definitions for Tab Console.

Each preset has two halves: a :class:`ConsoleTheme` of Rich style strings
used when the session renders its frame, and a Textual ``Theme`` that
controls the app background behind that frame.  The console theme is
passed to ``SessionController.render`` explicitly; nothing here is
mutated at runtime.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual.theme import Theme


@dataclass(frozen=True)
class ConsoleTheme:
    """Rich styles for every part of the console frame."""

    name: str
    status_bar: str
    active_tab: str
    inactive_tab: str
    tab_rule: str
    border: str
    help: str
    placeholder: str
    cursor: str = "reverse"


CONSOLE_THEMES: dict[str, ConsoleTheme] = {
    "dark": ConsoleTheme(
        name="dark",
        status_bar="color(6) on color(0)",
        active_tab="bold color(5) on color(0)",
        inactive_tab="color(2) on color(0)",
        tab_rule="color(8)",
        border="color(8)",
        help="color(240)",
        placeholder="color(240)",
    ),
    "light": ConsoleTheme(
        name="light",
        status_bar="#1a1a1a on #dddddd",
        active_tab="bold #cc6600 on #eeeeee",
        inactive_tab="#338855 on #eeeeee",
        tab_rule="#aaaaaa",
        border="#888888",
        help="#777777",
        placeholder="#999999",
    ),
    "solarized": ConsoleTheme(
        name="solarized",
        status_bar="#2aa198 on #073642",
        active_tab="bold #d33682 on #073642",
        inactive_tab="#859900 on #073642",
        tab_rule="#586e75",
        border="#586e75",
        help="#657b83",
        placeholder="#586e75",
    ),
}

# Textual Theme objects for each built-in preset.
# Keys match CONSOLE_THEMES.
TEXTUAL_THEMES: dict[str, Theme] = {
    "dark": Theme(
        name="tabconsole-dark",
        primary="#cc7700",
        secondary="#5599dd",
        background="black",
        surface="#111111",
        panel="#555555",
        dark=True,
    ),
    "light": Theme(
        name="tabconsole-light",
        primary="#cc6600",
        secondary="#4488aa",
        background="#fafafa",
        surface="#f0f0f0",
        panel="#cccccc",
        dark=False,
    ),
    "solarized": Theme(
        name="tabconsole-solarized",
        primary="#b58900",
        secondary="#268bd2",
        background="#002b36",
        surface="#073642",
        panel="#586e75",
        dark=True,
    ),
}

DEFAULT_THEME = "dark"


def get_theme(name: str | None) -> ConsoleTheme:
    """Return the named console theme, falling back to the default."""
    return CONSOLE_THEMES.get(name or DEFAULT_THEME, CONSOLE_THEMES[DEFAULT_THEME])
