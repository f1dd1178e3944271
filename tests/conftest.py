"""Shared fakes for the hostdash test suite."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

import pytest

from hostdash.models import MetricsSnapshot, ProcessInfo


def make_snapshot(**overrides: Any) -> MetricsSnapshot:
    base = MetricsSnapshot(
        os_name="Linux",
        host_name="testhost",
        os_version="#1 SMP",
        kernel_version="6.1.0",
        memory_total=16_000_000_000,
        memory_used=8_000_000_000,
        cpu_percent=37.8,
        physical_cores=8,
        processes=(),
    )
    return replace(base, **overrides)


class FakeProvider:
    """In-memory metrics provider; counts full refreshes."""

    def __init__(self, **fields: Any) -> None:
        self.fields: dict[str, Any] = {
            "cpu_percent": 37.8,
            "memory_used": 8_000_000_000,
            "memory_total": 16_000_000_000,
            "processes": [],
            "os_name": "Linux",
            "host_name": "testhost",
            "os_version": "#1 SMP",
            "kernel_version": "6.1.0",
            "physical_core_count": 8,
        }
        self.fields.update(fields)
        self.refreshes = 0

    def refresh_all(self) -> None:
        self.refreshes += 1

    def cpu_percent(self) -> float:
        return self.fields["cpu_percent"]

    def memory_used(self) -> int:
        return self.fields["memory_used"]

    def memory_total(self) -> int:
        return self.fields["memory_total"]

    def processes(self) -> list[ProcessInfo]:
        return list(self.fields["processes"])

    def os_name(self) -> str | None:
        return self.fields["os_name"]

    def host_name(self) -> str | None:
        return self.fields["host_name"]

    def os_version(self) -> str | None:
        return self.fields["os_version"]

    def kernel_version(self) -> str | None:
        return self.fields["kernel_version"]

    def physical_core_count(self) -> int | None:
        return self.fields["physical_core_count"]


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def provider_factory() -> type[FakeProvider]:
    return FakeProvider


@pytest.fixture
def snapshot_factory() -> Any:
    return make_snapshot
