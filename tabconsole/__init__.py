"""Tab Console - a tabbed command console for the terminal."""

from .session import EmptyTabListError, SessionController

__version__ = "0.1.0"

__all__ = ["EmptyTabListError", "SessionController", "__version__"]
