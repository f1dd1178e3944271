"""Frame layout and display values for the hostdash screen.

``render`` is a pure function of a snapshot, the terminal area and the
interaction state. It returns region descriptions; painting them is the
drawing surface's job (see ``hostdash.surface``).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from hostdash.models import InteractionState, MetricsSnapshot, ProcessInfo

logger = logging.getLogger(__name__)

# ── Constants ──────────────────────────────────────────────────────────────

TOP_PROCESSES = 10
GIB = 2**30

SYSTEM_INFO_HEIGHT = 6  # 4 lines + border
GAUGE_HEIGHT = 3
PROCESS_TABLE_HEIGHT = 13

TABLE_HEADER = ("Name", "Memory Usage")

# Row styles understood by the surface
STYLE_HEADER = "header"
STYLE_ALT = "alt"
STYLE_NORMAL = "normal"


# ── Geometry ───────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(slots=True, frozen=True)
class Layout:
    """Named regions of one frame."""

    system_info: Rect
    specs: Rect
    memory_gauge: Rect
    cpu_gauge: Rect
    process_table: Rect
    reserved: Rect


def split_horizontal(area: Rect) -> tuple[Rect, Rect]:
    """Split *area* into left and right halves that cover it exactly."""
    left_w = area.width // 2
    left = Rect(area.x, area.y, left_w, area.height)
    right = Rect(area.x + left_w, area.y, area.width - left_w, area.height)
    return left, right


def split_vertical(area: Rect, heights: list[int | None]) -> list[Rect]:
    """Stack rows of fixed height; ``None`` takes whatever is left.

    Fixed rows are capped at the space remaining, so a short terminal
    yields zero-height rows instead of overlapping ones.
    """
    fixed = sum(h for h in heights if h is not None)
    fills = sum(1 for h in heights if h is None)
    spare = max(0, area.height - fixed)

    rects: list[Rect] = []
    y = area.y
    bottom = area.y + area.height
    for h in heights:
        if h is None:
            h = spare // fills if fills else 0
        h = max(0, min(h, bottom - y))
        rects.append(Rect(area.x, y, area.width, h))
        y += h
    return rects


def compute_layout(area: Rect) -> Layout:
    left, right = split_horizontal(area)
    system_info, specs = split_vertical(left, [SYSTEM_INFO_HEIGHT, None])
    memory, cpu, table, reserved = split_vertical(
        right, [GAUGE_HEIGHT, GAUGE_HEIGHT, PROCESS_TABLE_HEIGHT, None]
    )
    return Layout(
        system_info=system_info,
        specs=specs,
        memory_gauge=memory,
        cpu_gauge=cpu,
        process_table=table,
        reserved=reserved,
    )


# ── Derived values ─────────────────────────────────────────────────────────


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def clamp_percent(value: int) -> int:
    return max(0, min(100, value))


def memory_percent(used: int, total: int) -> int:
    if total == 0:
        logger.warning("total memory reported as 0 bytes; showing 0%")
        return 0
    return round_half_up(100 * used / total)


def cpu_gauge_fill(usage: float) -> int:
    """Gauge fill truncates the raw usage."""
    return clamp_percent(int(usage))


def cpu_label(usage: float) -> str:
    """The label rounds the raw usage, independently of the fill."""
    return f"{round_half_up(usage)}%"


def rank_processes(
    processes: tuple[ProcessInfo, ...] | list[ProcessInfo], n: int = TOP_PROCESSES
) -> list[ProcessInfo]:
    """Top *n* by resident memory; equal memory keeps provider order."""
    return sorted(processes, key=lambda p: p.memory_rss, reverse=True)[:n]


def process_percent(rss: int, total: int) -> str:
    if total == 0:
        return "0%"
    return f"{100 * rss // total}%"


def fmt_gib(n: int) -> str:
    return f"{n / GIB:.2f} GB"


# ── Regions ────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class Panel:
    """Bordered, titled box every region is drawn inside."""

    rect: Rect
    title: str


@dataclass(slots=True, frozen=True)
class TextBlock:
    panel: Panel
    lines: tuple[tuple[str, str], ...]  # (label, value)


@dataclass(slots=True, frozen=True)
class Gauge:
    panel: Panel
    percent: int
    label: str


@dataclass(slots=True, frozen=True)
class TableRow:
    cells: tuple[str, ...]
    style: str = STYLE_NORMAL


@dataclass(slots=True, frozen=True)
class Table:
    panel: Panel
    rows: tuple[TableRow, ...]  # header first


Region = TextBlock | Gauge | Table


def memory_gauge(snapshot: MetricsSnapshot, rect: Rect) -> Gauge:
    pct = memory_percent(snapshot.memory_used, snapshot.memory_total)
    return Gauge(Panel(rect, "Used Memory"), clamp_percent(pct), f"{pct}%")


def cpu_gauge(snapshot: MetricsSnapshot, rect: Rect) -> Gauge:
    usage = snapshot.cpu_percent
    return Gauge(Panel(rect, "CPU Usage"), cpu_gauge_fill(usage), cpu_label(usage))


def process_table(snapshot: MetricsSnapshot, rect: Rect) -> Table:
    rows = [TableRow(TABLE_HEADER, STYLE_HEADER)]
    for i, proc in enumerate(rank_processes(snapshot.processes)):
        rows.append(
            TableRow(
                (proc.name, process_percent(proc.memory_rss, snapshot.memory_total)),
                STYLE_ALT if i % 2 == 0 else STYLE_NORMAL,
            )
        )
    return Table(Panel(rect, "Processes"), tuple(rows))


def system_info(snapshot: MetricsSnapshot, rect: Rect) -> TextBlock:
    return TextBlock(
        Panel(rect, "System Information"),
        (
            ("System Name: ", snapshot.os_name),
            ("Host Name: ", snapshot.host_name),
            ("OS Version: ", snapshot.os_version),
            ("Kernel Version: ", snapshot.kernel_version),
        ),
    )


def specs(snapshot: MetricsSnapshot, rect: Rect) -> TextBlock:
    return TextBlock(
        Panel(rect, "Specs"),
        (
            ("Core Count: ", str(snapshot.physical_cores)),
            ("Total RAM: ", fmt_gib(snapshot.memory_total)),
        ),
    )


def render(
    snapshot: MetricsSnapshot, area: Rect, state: InteractionState
) -> list[Region]:
    """Describe every region of one frame, in paint order.

    ``state`` is accepted so the frame is a function of everything the
    loop owns; ``selected_index`` does not change the picture yet.
    """
    layout = compute_layout(area)
    return [
        memory_gauge(snapshot, layout.memory_gauge),
        cpu_gauge(snapshot, layout.cpu_gauge),
        process_table(snapshot, layout.process_table),
        system_info(snapshot, layout.system_info),
        specs(snapshot, layout.specs),
    ]
