"""Metrics provider and snapshot acquisition.

``PsutilProvider`` reads the host through psutil (CPU, memory, process
table, core count) and the standard library (host identity). ``acquire``
turns one full refresh of any provider into a ``MetricsSnapshot``.
"""

from __future__ import annotations

import logging
import platform
import socket
from collections.abc import Iterable
from typing import Protocol

import psutil

from hostdash.models import MetricsSnapshot, MissingFieldError, ProcessInfo, ProviderError

logger = logging.getLogger(__name__)


class MetricsProvider(Protocol):
    """Capability object the acquirer reads from.

    ``refresh_all`` must be called before any getter is read. Identity
    getters and ``physical_core_count`` return ``None`` when absent.
    """

    def refresh_all(self) -> None: ...

    def cpu_percent(self) -> float: ...

    def memory_used(self) -> int: ...

    def memory_total(self) -> int: ...

    def processes(self) -> Iterable[ProcessInfo]: ...

    def os_name(self) -> str | None: ...

    def host_name(self) -> str | None: ...

    def os_version(self) -> str | None: ...

    def kernel_version(self) -> str | None: ...

    def physical_core_count(self) -> int | None: ...


def _or_none(value: str) -> str | None:
    return value or None


class PsutilProvider:
    """Metrics provider backed by psutil."""

    def __init__(self) -> None:
        self._cpu: float | None = None
        self._mem_used = 0
        self._mem_total = 0
        self._procs: list[ProcessInfo] = []
        # Prime CPU percent (first non-blocking call returns 0.0)
        psutil.cpu_percent(interval=None)

    def refresh_all(self) -> None:
        """Re-sample every subsystem in one pass."""
        try:
            cpu = psutil.cpu_percent(interval=None)
            mem = psutil.virtual_memory()
        except (psutil.Error, OSError) as e:
            raise ProviderError(f"cannot read host metrics: {e}") from e
        self._cpu = cpu
        # Used is total minus available, not psutil's kernel-specific `used`
        self._mem_used = mem.total - mem.available
        self._mem_total = mem.total
        self._procs = self._collect_processes()
        logger.debug(
            "refreshed: cpu=%.1f%% mem=%d/%d procs=%d",
            self._cpu,
            self._mem_used,
            self._mem_total,
            len(self._procs),
        )

    def _collect_processes(self) -> list[ProcessInfo]:
        procs: list[ProcessInfo] = []
        for proc in psutil.process_iter(["pid", "name", "memory_info"]):
            try:
                info = proc.info
                mem_info = info.get("memory_info")
                procs.append(
                    ProcessInfo(
                        pid=info.get("pid", 0),
                        name=info.get("name") or "?",
                        memory_rss=mem_info.rss if mem_info else 0,
                    )
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                logger.debug("skipping process %s", getattr(proc, "pid", "?"))
                continue
        return procs

    def _require_refresh(self) -> None:
        if self._cpu is None:
            raise ProviderError("metrics read before refresh_all()")

    def cpu_percent(self) -> float:
        self._require_refresh()
        return float(self._cpu)

    def memory_used(self) -> int:
        self._require_refresh()
        return self._mem_used

    def memory_total(self) -> int:
        self._require_refresh()
        return self._mem_total

    def processes(self) -> list[ProcessInfo]:
        self._require_refresh()
        return list(self._procs)

    def os_name(self) -> str | None:
        return _or_none(platform.system())

    def host_name(self) -> str | None:
        return _or_none(socket.gethostname())

    def os_version(self) -> str | None:
        return _or_none(platform.version())

    def kernel_version(self) -> str | None:
        return _or_none(platform.release())

    def physical_core_count(self) -> int | None:
        return psutil.cpu_count(logical=False)


def _required(field: str, value: str | int | None) -> str | int:
    if value is None:
        raise MissingFieldError(field)
    return value


def acquire(provider: MetricsProvider) -> MetricsSnapshot:
    """Fully refresh *provider* and read it into a fresh snapshot.

    Raises:
        MissingFieldError: If any identity string or the physical core
            count is absent.
    """
    provider.refresh_all()
    return MetricsSnapshot(
        os_name=str(_required("os_name", provider.os_name())),
        host_name=str(_required("host_name", provider.host_name())),
        os_version=str(_required("os_version", provider.os_version())),
        kernel_version=str(_required("kernel_version", provider.kernel_version())),
        memory_total=provider.memory_total(),
        memory_used=provider.memory_used(),
        cpu_percent=provider.cpu_percent(),
        physical_cores=int(_required("physical_cores", provider.physical_core_count())),
        processes=tuple(provider.processes()),
    )
