"""Tests for hostdash.provider."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import psutil
import pytest

from hostdash.models import MissingFieldError, ProcessInfo, ProviderError
from hostdash.provider import PsutilProvider, acquire

# ── acquire ────────────────────────────────────────────────────────────────


class TestAcquire:
    def test_full_snapshot(self, provider_factory) -> None:
        procs = [ProcessInfo(1, "init", 100), ProcessInfo(2, "sh", 50)]
        provider = provider_factory(processes=procs, cpu_percent=12.5)
        snap = acquire(provider)
        assert provider.refreshes == 1
        assert snap.cpu_percent == 12.5
        assert snap.memory_total == 16_000_000_000
        assert snap.memory_used == 8_000_000_000
        assert snap.physical_cores == 8
        assert snap.kernel_version == "6.1.0"
        assert snap.processes == tuple(procs)

    def test_refreshes_every_call(self, provider) -> None:
        acquire(provider)
        acquire(provider)
        assert provider.refreshes == 2

    @pytest.mark.parametrize(
        ("getter", "field"),
        [
            ("os_name", "os_name"),
            ("host_name", "host_name"),
            ("os_version", "os_version"),
            ("kernel_version", "kernel_version"),
            ("physical_core_count", "physical_cores"),
        ],
    )
    def test_absent_field_is_fatal(self, provider_factory, getter: str, field: str) -> None:
        provider = provider_factory(**{getter: None})
        with pytest.raises(MissingFieldError) as exc_info:
            acquire(provider)
        assert exc_info.value.field == field


# ── PsutilProvider (mocked) ────────────────────────────────────────────────


def _proc(pid: int, name: str | None, rss: int | None) -> MagicMock:
    p = MagicMock()
    p.pid = pid
    p.info = {
        "pid": pid,
        "name": name,
        "memory_info": MagicMock(rss=rss) if rss is not None else None,
    }
    return p


class _Vanished:
    """Process that exits between listing and reading."""

    pid = 999

    @property
    def info(self) -> dict:
        raise psutil.NoSuchProcess(999)


@patch("hostdash.provider.psutil.virtual_memory")
@patch("hostdash.provider.psutil.process_iter")
@patch("hostdash.provider.psutil.cpu_percent")
def test_psutil_refresh(
    mock_cpu: MagicMock, mock_iter: MagicMock, mock_vm: MagicMock
) -> None:
    mock_cpu.return_value = 42.0
    mock_vm.return_value = MagicMock(
        used=3 * 1024**3, available=4 * 1024**3, total=8 * 1024**3
    )
    mock_iter.return_value = [_proc(1, "init", 2048), _Vanished(), _proc(7, None, None)]

    provider = PsutilProvider()
    provider.refresh_all()

    assert provider.cpu_percent() == 42.0
    assert provider.memory_used() == 4 * 1024**3
    assert provider.memory_total() == 8 * 1024**3
    assert provider.processes() == [
        ProcessInfo(pid=1, name="init", memory_rss=2048),
        ProcessInfo(pid=7, name="?", memory_rss=0),
    ]
    mock_iter.assert_called_once_with(["pid", "name", "memory_info"])


@patch("hostdash.provider.psutil.cpu_percent", return_value=0.0)
def test_psutil_read_before_refresh(mock_cpu: MagicMock) -> None:
    provider = PsutilProvider()
    with pytest.raises(ProviderError):
        provider.memory_total()


@patch("hostdash.provider.psutil.cpu_count", return_value=None)
@patch("hostdash.provider.psutil.cpu_percent", return_value=0.0)
def test_psutil_cores_absent(mock_cpu: MagicMock, mock_count: MagicMock) -> None:
    assert PsutilProvider().physical_core_count() is None
    mock_count.assert_called_once_with(logical=False)


@patch("hostdash.provider.platform.release", return_value="")
@patch("hostdash.provider.psutil.cpu_percent", return_value=0.0)
def test_psutil_empty_identity_is_absent(mock_cpu: MagicMock, mock_release: MagicMock) -> None:
    assert PsutilProvider().kernel_version() is None


@patch("hostdash.provider.socket.gethostname", return_value="box")
@patch("hostdash.provider.platform.system", return_value="Linux")
@patch("hostdash.provider.psutil.cpu_percent", return_value=0.0)
def test_psutil_identity(mock_cpu: MagicMock, mock_system: MagicMock, mock_host: MagicMock) -> None:
    provider = PsutilProvider()
    assert provider.os_name() == "Linux"
    assert provider.host_name() == "box"
