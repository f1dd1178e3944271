"""hostdash — single-screen terminal dashboard for host metrics."""

import logging

__version__ = "0.1.0"

# Silent until the CLI routes records somewhere; stderr belongs to curses
logging.getLogger(__name__).addHandler(logging.NullHandler())
