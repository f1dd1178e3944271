"""Data types shared by the acquirer, renderer and loop controller."""

from __future__ import annotations

from dataclasses import dataclass

SELECTABLE_PANES = 3


# ── Errors ─────────────────────────────────────────────────────────────────


class HostdashError(Exception):
    """Base class for fatal hostdash errors."""


class MissingFieldError(HostdashError):
    """A required host field was reported absent by the metrics provider."""

    def __init__(self, field: str) -> None:
        super().__init__(f"required host field not available: {field}")
        self.field = field


class ProviderError(HostdashError):
    """The metrics provider could not produce a reading."""


class ConfigError(HostdashError):
    """The configuration holds a value hostdash cannot use."""


# ── Snapshot ───────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class ProcessInfo:
    """One row of the provider's process table."""

    pid: int
    name: str
    memory_rss: int  # Bytes


@dataclass(slots=True, frozen=True)
class MetricsSnapshot:
    """Immutable, fully-populated read of the host for one frame."""

    os_name: str
    host_name: str
    os_version: str
    kernel_version: str
    memory_total: int
    memory_used: int
    cpu_percent: float  # 0.0 - 100.0, may overshoot on multi-core bursts
    physical_cores: int
    processes: tuple[ProcessInfo, ...]


# ── Interaction state ──────────────────────────────────────────────────────


@dataclass
class InteractionState:
    """The only state that survives between frames."""

    exit_requested: bool = False
    selected_index: int = 0

    def request_exit(self) -> None:
        self.exit_requested = True

    def select_next(self) -> None:
        self.selected_index = (self.selected_index + 1) % SELECTABLE_PANES

    def select_previous(self) -> None:
        self.selected_index = (self.selected_index + SELECTABLE_PANES - 1) % SELECTABLE_PANES
