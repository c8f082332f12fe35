"""Single-line command input for Tab Console."""

from __future__ import annotations

from rich.cells import cell_len, get_character_cell_size, set_cell_size
from rich.style import Style
from rich.text import Text

from ..constants import INPUT_PLACEHOLDER, INPUT_PROMPT

_PASTE_WHITESPACE = str.maketrans({"\n": " ", "\r": " ", "\t": " "})


class InputLine:
    """Editable one-line text field with a cursor.

    Key handling follows the readline/emacs conventions of a shell prompt:

    ================  =====================================
    printable char    insert at cursor
    backspace         delete before cursor
    delete            delete under cursor
    home / ctrl+a     cursor to start
    end / ctrl+e      cursor to end
    ctrl+b / ctrl+f   cursor back / forward one character
    ctrl+u            delete from start to cursor
    ctrl+k            delete from cursor to end
    ctrl+w            delete the word before the cursor
    ================  =====================================

    Pasted text goes through :meth:`paste`, which flattens it to one line.

    Arrow keys are deliberately absent: the console routes them to the
    active tab's scroll surface.
    """

    def __init__(
        self,
        width: int = 0,
        *,
        placeholder: str = INPUT_PLACEHOLDER,
        prompt: str = INPUT_PROMPT,
    ) -> None:
        self.width = max(0, width)
        self.placeholder = placeholder
        self.prompt = prompt
        self._value = ""
        self._cursor = 0
        self._focused = False

    # -- State ---------------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def focused(self) -> bool:
        return self._focused

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    def set_width(self, width: int) -> None:
        self.width = max(0, width)

    def set_value(self, value: str) -> None:
        """Replace the text and move the cursor to its end."""
        self._value = value
        self._cursor = len(value)

    def reset(self) -> None:
        self.set_value("")

    # -- Editing -------------------------------------------------------------

    def insert(self, text: str) -> None:
        self._value = self._value[: self._cursor] + text + self._value[self._cursor :]
        self._cursor += len(text)

    def paste(self, text: str) -> bool:
        """Insert pasted *text* at the cursor.  Returns True if anything was inserted.

        Trailing line breaks are dropped, inner line breaks and tabs become
        spaces, and other unprintable characters are removed.
        """
        if not self._focused:
            return False
        flat = text.rstrip("\r\n").replace("\r\n", " ").translate(_PASTE_WHITESPACE)
        cleaned = "".join(char for char in flat if char.isprintable())
        if not cleaned:
            return False
        self.insert(cleaned)
        return True

    def _delete_word_back(self) -> None:
        start = self._cursor
        while start > 0 and self._value[start - 1].isspace():
            start -= 1
        while start > 0 and not self._value[start - 1].isspace():
            start -= 1
        self._value = self._value[:start] + self._value[self._cursor :]
        self._cursor = start

    def handle_key(self, key: str, character: str | None = None) -> bool:
        """Apply an editing key.  Returns True if the key was used."""
        if not self._focused:
            return False

        value, cursor = self._value, self._cursor
        if key == "backspace":
            if cursor > 0:
                self._value = value[: cursor - 1] + value[cursor:]
                self._cursor = cursor - 1
        elif key == "delete":
            self._value = value[:cursor] + value[cursor + 1 :]
        elif key in ("home", "ctrl+a"):
            self._cursor = 0
        elif key in ("end", "ctrl+e"):
            self._cursor = len(value)
        elif key == "ctrl+b":
            self._cursor = max(0, cursor - 1)
        elif key == "ctrl+f":
            self._cursor = min(len(value), cursor + 1)
        elif key == "ctrl+u":
            self._value = value[cursor:]
            self._cursor = 0
        elif key == "ctrl+k":
            self._value = value[:cursor]
        elif key == "ctrl+w":
            self._delete_word_back()
        elif character and character.isprintable():
            self.insert(character)
        else:
            return False
        return True

    # -- Rendering -----------------------------------------------------------

    def _window_start(self) -> int:
        """First character index shown so the cursor cell stays visible."""
        start = self._cursor
        used = 1  # the cursor cell
        while start > 0:
            size = get_character_cell_size(self._value[start - 1])
            if used + size > self.width:
                break
            used += size
            start -= 1
        return start

    def render(
        self,
        placeholder_style: Style | str = "dim",
        cursor_style: Style | str = "reverse",
    ) -> Text:
        """Render the prompt plus a ``width``-cell window of the value."""
        text = Text(self.prompt, end="")
        if self.width <= 0:
            return text

        if not self._value:
            shown = set_cell_size(self.placeholder, self.width)
            if self._focused:
                text.append(shown[:1], style=cursor_style)
                text.append(shown[1:], style=placeholder_style)
            else:
                text.append(shown, style=placeholder_style)
            return text

        start = self._window_start()
        before = self._value[start : self._cursor]
        under = self._value[self._cursor : self._cursor + 1] or " "
        after = self._value[self._cursor + 1 :]
        if self._focused:
            text.append(before)
            text.append(under, style=cursor_style)
            text.append(after)
        else:
            text.append(self._value[start:])
        text.truncate(cell_len(self.prompt) + self.width, pad=True)
        return text
