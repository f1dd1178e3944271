"""Terminal session: curses setup on entry, guaranteed restore on exit."""

from __future__ import annotations

import curses
from types import TracebackType
from typing import Any


class TerminalSession:
    """Context manager yielding a blocking curses window.

    Mirrors ``curses.wrapper``: the terminal is restored on every exit
    path, including exceptions and ``KeyboardInterrupt``.
    """

    def __init__(self) -> None:
        self.stdscr: Any | None = None

    def __enter__(self) -> Any:
        self.stdscr = curses.initscr()
        try:
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            # Blocking reads: one frame per key press
            self.stdscr.nodelay(False)
            self.stdscr.timeout(-1)
            try:
                curses.curs_set(0)
            except curses.error:
                pass  # Terminal cannot hide the cursor
        except BaseException:
            self.restore()
            raise
        return self.stdscr

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.restore()

    def restore(self) -> None:
        if self.stdscr is None:
            return
        try:
            self.stdscr.keypad(False)
            curses.echo()
            curses.nocbreak()
        finally:
            curses.endwin()
            self.stdscr = None
