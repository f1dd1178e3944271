"""Interactive terminal dashboard — hostdash's single-screen host monitor.

Shows host identity, core count, total RAM, memory and CPU gauges and the
ten largest processes by resident memory. The screen is redrawn after
every key press; ``q`` quits, ←/→ move the pane selection.

Usage:
    hostdash
    hostdash --config path/to/config.toml --log-file /tmp/hostdash.log
"""

from __future__ import annotations

import argparse
import curses
import logging
import sys
from pathlib import Path
from typing import Any

from hostdash.config import dump_default_config, load_config
from hostdash.models import ConfigError, HostdashError, InteractionState
from hostdash.provider import MetricsProvider, PsutilProvider, acquire
from hostdash.render import Rect, render
from hostdash.surface import CursesSurface, init_colors, paint_all
from hostdash.terminal import TerminalSession

logger = logging.getLogger(__name__)

QUIT_KEY = ord("q")


# ── Input handling ─────────────────────────────────────────────────────────


def handle_key(state: InteractionState, key: int) -> None:
    """Apply one key press to *state*; unknown keys are ignored."""
    if key == QUIT_KEY:
        state.request_exit()
    elif key == curses.KEY_RIGHT:
        state.select_next()
    elif key == curses.KEY_LEFT:
        state.select_previous()


# ── Main loop ──────────────────────────────────────────────────────────────


def draw_frame(
    surface: CursesSurface, provider: MetricsProvider, state: InteractionState
) -> None:
    snapshot = acquire(provider)
    width, height = surface.size
    paint_all(surface, render(snapshot, Rect(0, 0, width, height), state))


def run(stdscr: Any, provider: MetricsProvider, state: InteractionState | None = None) -> int:
    """Draw, then block for one key, until quit is requested.

    Returns the process exit status.
    """
    if state is None:
        state = InteractionState()
    surface = CursesSurface(stdscr)
    while True:
        draw_frame(surface, provider, state)
        handle_key(state, stdscr.getch())
        if state.exit_requested:
            return 0


# ── Logging ────────────────────────────────────────────────────────────────


def configure_logging(level: str, path: str | Path | None) -> None:
    """Route log records to *path*, or nowhere; stderr belongs to curses."""
    root = logging.getLogger()
    try:
        root.setLevel(level.upper())
    except ValueError:
        raise ConfigError(f"unknown log level {level!r}") from None
    if path:
        handler: logging.Handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)


# ── CLI entry point ────────────────────────────────────────────────────────


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Single-screen terminal dashboard for host metrics.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to TOML config file",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write log records to PATH (default: from config, else off)",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the default configuration as TOML and exit",
    )
    args = parser.parse_args(argv)

    if args.print_config:
        print(dump_default_config(), end="")
        return

    status = 0
    try:
        config = load_config(args.config)
        log_cfg = config["log"]
        configure_logging(log_cfg["level"], args.log_file or log_cfg["file"])
        provider = PsutilProvider()
        with TerminalSession() as stdscr:
            init_colors(config["theme"])
            logger.info("dashboard started")
            status = run(stdscr, provider)
    except KeyboardInterrupt:
        pass
    except (HostdashError, curses.error, OSError) as e:
        print(f"hostdash: {e}", file=sys.stderr)
        logger.error("fatal: %s", e)
        raise SystemExit(1) from e
    logger.info("dashboard stopped")
    raise SystemExit(status)


if __name__ == "__main__":
    main()
