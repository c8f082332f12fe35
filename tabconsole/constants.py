"""Module-level constants for Tab Console."""

from __future__ import annotations

# Literal command that wipes the active tab instead of running anything
CLEAR_COMMAND = "clear"

# Columns moved per Ctrl+Left / Ctrl+Right
HORIZONTAL_STEP = 5

# Lines moved per mouse wheel notch
MOUSE_WHEEL_DELTA = 3

INPUT_PLACEHOLDER = "Type something and press Enter..."
INPUT_PROMPT = "> "

LOADING_TEXT = "Loading..."
INITIALIZING_TEXT = "Initializing..."
STATUS_TEMPLATE = (
    "Active: {name} | Total: {count} | Ctrl+C to quit | Type clear to clear tab"
)
HELP_TEXT = (
    "Use Tab to switch, Ctrl+Left/Right to scroll horizontally, "
    "Arrows to scroll vertically. Enter in input field."
)

TAB_SIZE = 4
