"""Entry point for the Tab Console CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .log import configure_logging, logger
from .preferences import load_preferences, save_theme_name
from .theme import CONSOLE_THEMES


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tabconsole",
        description="Tab Console - run commands in named, scrollable tabs",
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"tabconsole {__version__}",
    )
    parser.add_argument(
        "--tab",
        "-t",
        dest="tabs",
        action="append",
        metavar="NAME",
        help="Open a tab with this name (repeat for more tabs)",
    )
    parser.add_argument(
        "--theme",
        choices=sorted(CONSOLE_THEMES),
        help="Color theme for this run",
    )
    parser.add_argument(
        "--save-theme",
        action="store_true",
        help="Remember --theme in the preferences file",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Preferences file (default: ~/.tabconsole/preferences.yaml)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write log messages to this file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run Tab Console."""
    parser = build_parser()
    args = parser.parse_args(argv)

    prefs = load_preferences(args.config)
    if args.theme:
        prefs.apply_theme(args.theme)
        if args.save_theme:
            save_theme_name(args.theme, args.config)

    configure_logging(
        "DEBUG" if args.debug else prefs.logging.level,
        args.log_file or prefs.logging.file or None,
    )

    from .demo import DEFAULT_TABS, execute

    tab_names = args.tabs or prefs.tabs or list(DEFAULT_TABS)
    tab_names = [name for name in tab_names if name.strip()]
    if not tab_names:
        parser.error("at least one non-empty tab name is required")

    try:
        from .app import run_app

        run_app(tab_names, execute, preferences=prefs)
    except (KeyboardInterrupt, SystemExit):
        pass
    except Exception:
        logger.debug("Fatal error in tabconsole", exc_info=True)
        import traceback

        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
