"""User preferences for Tab Console.

Loads settings from ~/.tabconsole/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import HORIZONTAL_STEP, INPUT_PLACEHOLDER, INPUT_PROMPT
from .log import logger
from .theme import CONSOLE_THEMES, DEFAULT_THEME

PREFS_PATH = Path.home() / ".tabconsole" / "preferences.yaml"

_DEFAULT_YAML = """\
# Tab Console Preferences
# Delete this file to reset to defaults.

theme: "dark"                    # dark, light or solarized

# Tabs opened when no --tab option is given (empty = built-in demo tabs)
tabs: []

display:
  word_wrap: false               # fold long lines instead of scrolling sideways
  horizontal_step: 5             # columns per Ctrl+Left / Ctrl+Right
  prompt: "> "
  placeholder: "Type something and press Enter..."

logging:
  level: "WARNING"               # DEBUG, INFO, WARNING, ERROR
  file: ""                       # log file path (empty = no log file)
"""


@dataclass
class DisplayPreferences:
    """Settings for the tab viewports and the input line."""

    word_wrap: bool = False
    horizontal_step: int = HORIZONTAL_STEP
    prompt: str = INPUT_PROMPT
    placeholder: str = INPUT_PLACEHOLDER


@dataclass
class LoggingPreferences:
    """Where and how much to log."""

    level: str = "WARNING"
    file: str = ""


@dataclass
class Preferences:
    """Top-level console preferences."""

    theme: str = DEFAULT_THEME
    tabs: list[str] = field(default_factory=list)
    display: DisplayPreferences = field(default_factory=DisplayPreferences)
    logging: LoggingPreferences = field(default_factory=LoggingPreferences)

    def apply_theme(self, name: str) -> bool:
        """Select a built-in theme by name. Returns False if unknown."""
        if name not in CONSOLE_THEMES:
            return False
        self.theme = name
        return True


def _apply(prefs: Preferences, data: dict) -> None:
    if isinstance(data.get("theme"), str):
        prefs.apply_theme(data["theme"])
    if isinstance(data.get("tabs"), list):
        prefs.tabs = [str(name) for name in data["tabs"] if str(name).strip()]
    if isinstance(data.get("display"), dict):
        ddata = data["display"]
        if "word_wrap" in ddata:
            prefs.display.word_wrap = bool(ddata["word_wrap"])
        if "horizontal_step" in ddata:
            prefs.display.horizontal_step = max(1, int(ddata["horizontal_step"]))
        if "prompt" in ddata:
            prefs.display.prompt = str(ddata["prompt"] or "")
        if "placeholder" in ddata:
            prefs.display.placeholder = str(ddata["placeholder"] or "")
    if isinstance(data.get("logging"), dict):
        ldata = data["logging"]
        if "level" in ldata:
            prefs.logging.level = str(ldata["level"]).upper()
        if "file" in ldata:
            prefs.logging.file = str(ldata["file"] or "")


def load_preferences(path: Path | None = None, *, create: bool = True) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run unless *create* is False.
    """
    path = path or PREFS_PATH
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
            if isinstance(data, dict):
                _apply(prefs, data)
        except (OSError, ValueError, TypeError, yaml.YAMLError):
            logger.debug("Invalid preferences file %s, using defaults", path, exc_info=True)
            prefs = Preferences()
    elif create:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_DEFAULT_YAML)
        except OSError:
            logger.debug("Could not write default preferences to %s", path, exc_info=True)

    return prefs


def save_theme_name(name: str, path: Path | None = None) -> None:
    """Persist the theme name to the preferences file.

    Surgically updates only the theme line, preserving the rest of the
    file (including user comments) as-is.
    """
    path = path or PREFS_PATH
    try:
        if path.exists():
            text = path.read_text()
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            text = _DEFAULT_YAML

        value = f'"{name}"'
        if re.search(r"^theme:", text, re.MULTILINE):
            text = re.sub(
                r'^theme:[ \t]*(?:"[^"]*"|\S+)?',
                f"theme: {value}",
                text,
                count=1,
                flags=re.MULTILINE,
            )
        else:
            text = text.rstrip() + f"\n\ntheme: {value}\n"

        path.write_text(text)
    except OSError:
        logger.debug("Failed to save theme preference", exc_info=True)
