"""Curses drawing surface for hostdash regions.

One accent colour on a dark background, used for every panel. Writes
that fall outside the window are dropped so a shrinking terminal never
aborts a frame.
"""

from __future__ import annotations

import curses
from typing import Any

from hostdash.models import ConfigError
from hostdash.render import (
    STYLE_ALT,
    STYLE_HEADER,
    Gauge,
    Panel,
    Region,
    Table,
    TextBlock,
)

# ── Constants ──────────────────────────────────────────────────────────────

BAR_FILL = "█"
BAR_EMPTY = "░"

# Accent colours; the background is always black
ACCENT_COLORS: dict[str, int] = {
    "red": curses.COLOR_RED,
    "green": curses.COLOR_GREEN,
    "yellow": curses.COLOR_YELLOW,
    "blue": curses.COLOR_BLUE,
    "magenta": curses.COLOR_MAGENTA,
    "cyan": curses.COLOR_CYAN,
    "white": curses.COLOR_WHITE,
}
BACKGROUND = curses.COLOR_BLACK

# Curses colour-pair IDs
C_ACCENT = 1
C_INVERSE = 2


# ── Colour helpers ─────────────────────────────────────────────────────────


def resolve_color(name: str) -> int:
    try:
        return ACCENT_COLORS[name.lower()]
    except KeyError:
        raise ConfigError(
            f"unknown accent colour {name!r} (choose from {', '.join(ACCENT_COLORS)})"
        ) from None


def init_colors(theme: dict[str, str]) -> None:
    accent = resolve_color(theme.get("accent", "red"))
    curses.start_color()
    curses.init_pair(C_ACCENT, accent, BACKGROUND)
    curses.init_pair(C_INVERSE, BACKGROUND, accent)


# ── Drawing primitives ─────────────────────────────────────────────────────


def _safe(win: Any, *args: Any) -> None:
    """addstr wrapper that swallows out-of-bounds errors."""
    try:
        win.addstr(*args)
    except curses.error:
        pass


class CursesSurface:
    """Paints ``hostdash.render`` regions onto a curses window."""

    def __init__(self, win: Any) -> None:
        self.win = win

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the window."""
        max_y, max_x = self.win.getmaxyx()
        return max_x, max_y

    def clear(self) -> None:
        self.win.erase()
        self.win.bkgd(" ", curses.color_pair(C_ACCENT))

    def refresh(self) -> None:
        self.win.refresh()

    def paint(self, region: Region) -> None:
        if isinstance(region, Gauge):
            self._paint_gauge(region)
        elif isinstance(region, Table):
            self._paint_table(region)
        elif isinstance(region, TextBlock):
            self._paint_text(region)
        else:
            raise TypeError(f"cannot paint {type(region).__name__}")

    # ── Region kinds ───────────────────────────────────────────────────────

    def _draw_box(self, panel: Panel) -> Any | None:
        """Draw a bordered box and return its sub-window."""
        r = panel.rect
        max_y, max_x = self.win.getmaxyx()
        h = min(r.height, max_y - r.y)
        w = min(r.width, max_x - r.x)
        if h < 2 or w < 2:
            return None
        try:
            sub = self.win.subwin(h, w, r.y, r.x)
            sub.attrset(curses.color_pair(C_ACCENT))
            sub.box()
            if panel.title and len(panel.title) + 2 < w:
                _safe(sub, 0, 1, panel.title, curses.color_pair(C_ACCENT))
            return sub
        except curses.error:
            return None

    def _paint_text(self, block: TextBlock) -> None:
        box = self._draw_box(block.panel)
        if not box:
            return
        max_y, max_x = box.getmaxyx()
        accent = curses.color_pair(C_ACCENT)
        for row, (label, value) in enumerate(block.lines, start=1):
            if row >= max_y - 1:
                break
            _safe(box, row, 1, label[: max_x - 2], accent | curses.A_BOLD)
            room = max_x - 2 - len(label)
            if room > 0:
                _safe(box, row, 1 + len(label), value[:room], accent)

    def _paint_gauge(self, gauge: Gauge) -> None:
        box = self._draw_box(gauge.panel)
        if not box:
            return
        max_y, max_x = box.getmaxyx()
        width = max_x - 2
        if max_y < 3 or width < 1:
            return
        filled = width * gauge.percent // 100
        bar = BAR_FILL * filled + BAR_EMPTY * (width - filled)
        _safe(box, 1, 1, bar, curses.color_pair(C_ACCENT))
        label = gauge.label[:width]
        _safe(
            box,
            1,
            1 + (width - len(label)) // 2,
            label,
            curses.color_pair(C_INVERSE) | curses.A_BOLD,
        )

    def _paint_table(self, table: Table) -> None:
        box = self._draw_box(table.panel)
        if not box:
            return
        max_y, max_x = box.getmaxyx()
        width = max_x - 2
        if width < 1:
            return
        col_w = width // 2
        for row_no, row in enumerate(table.rows, start=1):
            if row_no >= max_y - 1:
                break
            first, second = (row.cells + ("", ""))[:2]
            line = f"{first[: col_w - 1]:<{col_w}}{second}"[:width]
            if row.style == STYLE_HEADER:
                attr = curses.color_pair(C_INVERSE) | curses.A_BOLD
            elif row.style == STYLE_ALT:
                attr = curses.color_pair(C_ACCENT) | curses.A_DIM
            else:
                attr = curses.color_pair(C_ACCENT)
            _safe(box, row_no, 1, f"{line:<{width}}", attr)


def paint_all(surface: CursesSurface, regions: list[Region]) -> None:
    surface.clear()
    for region in regions:
        surface.paint(region)
    surface.refresh()
