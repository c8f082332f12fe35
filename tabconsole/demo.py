"""Demo command executor.

Stands in for a real backend: it echoes each command back, pretends tab
``Tab2`` misbehaves, and serves the bundled license texts on the
``License`` tab.
"""

from __future__ import annotations

from functools import lru_cache
from importlib import resources

DEFAULT_TABS: tuple[str, ...] = ("Tab1", "Tab2", "Tab3", "License")

LICENSE_TAB = "License"
LICENSE_USAGE = "Enter 'license' or 'third-party' to see the respective license information."

_LICENSE_FILES = {
    "license": "LICENSE",
    "third-party": "LICENSE-THIRD-PARTY",
}


@lru_cache(maxsize=None)
def read_license(filename: str) -> str:
    """Return the text of a license file bundled in ``tabconsole/data``."""
    return (resources.files("tabconsole") / "data" / filename).read_text(encoding="utf-8")


def execute(tab: str, command: str) -> tuple[str, None]:
    """Run *command* on *tab*; never fails."""
    if tab == LICENSE_TAB:
        filename = _LICENSE_FILES.get(command)
        if filename is None:
            return LICENSE_USAGE, None
        return read_license(filename), None

    output = f"You have Executed command '{command}' on tab '{tab}'"
    if tab == "Tab2":
        output += " with a random error message"
    return output, None
