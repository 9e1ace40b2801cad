"""Tests for the CounterReader class."""

import logging
import subprocess
from collections import namedtuple

import psutil
import pytest

from pyfree.counters import CounterReader
from pyfree.errors import SwapQueryError
from pyfree.models import ReportModel

GiB = 1024**3

svmem = namedtuple("svmem", ["total", "available", "free", "active"])
svmem_no_active = namedtuple("svmem", ["total", "available", "free"])
sswap = namedtuple("sswap", ["total", "used", "free", "percent", "sin", "sout"])


@pytest.fixture
def fake_psutil(monkeypatch, tmp_path):
    """Patch psutil queries with fixed Linux-like counters."""
    monkeypatch.setattr(
        psutil, "virtual_memory", lambda: svmem(16 * GiB, 10 * GiB, 6 * GiB, 4 * GiB)
    )
    monkeypatch.setattr(
        psutil, "swap_memory", lambda: sswap(2 * GiB, GiB, GiB, 50.0, 0, 0)
    )
    monkeypatch.setattr(psutil, "LINUX", True)
    shmmax = tmp_path / "shmmax"
    shmmax.write_text("68719476736\n")
    return shmmax


class TestCounterReader:
    """Tests for CounterReader."""

    def test_collect(self, fake_psutil):
        """Test collect fills every field in bytes."""
        model = CounterReader(shmmax_path=fake_psutil).collect(decimal=False)

        assert isinstance(model, ReportModel)
        assert model.total_ram == 16 * GiB
        assert model.free_ram == 6 * GiB
        assert model.used_ram == 10 * GiB
        assert model.buffer == 4 * GiB
        assert model.total_swap == 2 * GiB
        assert model.used_swap == GiB
        assert model.free_swap == GiB

    def test_shared_divisor(self, fake_psutil):
        """Test the shared ceiling is divided by the collection base."""
        reader = CounterReader(shmmax_path=fake_psutil)
        assert reader.shared_ceiling(decimal=True) == 68719476736 // 1000
        assert reader.shared_ceiling(decimal=False) == 68719476736 // 1024

    def test_missing_field_is_unavailable(self, fake_psutil, monkeypatch):
        """Test a platform without 'active' degrades only the buffer field."""
        monkeypatch.setattr(
            psutil, "virtual_memory", lambda: svmem_no_active(8 * GiB, 4 * GiB, 2 * GiB)
        )
        model = CounterReader(shmmax_path=fake_psutil).collect(decimal=False)

        assert model.buffer is None
        assert model.total_ram == 8 * GiB
        assert model.free_ram == 2 * GiB

    def test_memory_query_failure(self, fake_psutil, monkeypatch, caplog):
        """Test a failing RAM query is logged and not raised."""

        def broken():
            raise OSError("no access")

        monkeypatch.setattr(psutil, "virtual_memory", broken)
        caplog.set_level(logging.DEBUG, logger="pyfree.counters")

        model = CounterReader(shmmax_path=fake_psutil).collect(decimal=False)

        assert model.total_ram is None
        assert model.free_ram is None
        assert model.buffer is None
        assert model.used_ram is None
        assert model.total_swap == 2 * GiB
        assert "cannot read memory counter" in caplog.text

    def test_swap_failure_is_fatal(self, fake_psutil, monkeypatch):
        """Test a failing swap query raises SwapQueryError."""

        def broken():
            raise RuntimeError("swap info unavailable")

        monkeypatch.setattr(psutil, "swap_memory", broken)

        with pytest.raises(SwapQueryError, match="swap info unavailable"):
            CounterReader(shmmax_path=fake_psutil).collect(decimal=False)

    def test_missing_shmmax_file(self, fake_psutil, tmp_path):
        """Test an unreadable shmmax file leaves shared unavailable."""
        reader = CounterReader(shmmax_path=tmp_path / "missing")
        assert reader.shared_ceiling(decimal=True) is None

    def test_bsd_sysctl(self, monkeypatch):
        """Test the BSD path reads kern.ipc.shmmax through sysctl."""
        monkeypatch.setattr(psutil, "LINUX", False)
        monkeypatch.setattr(psutil, "BSD", True)
        calls = []

        def fake_run(cmd, **kwargs):
            calls.append(cmd)
            return subprocess.CompletedProcess(cmd, 0, stdout="536870912\n", stderr="")

        monkeypatch.setattr(subprocess, "run", fake_run)

        assert CounterReader().shared_ceiling(decimal=False) == 536870912 // 1024
        assert calls == [["sysctl", "-n", "kern.ipc.shmmax"]]

    def test_bsd_sysctl_failure(self, monkeypatch):
        """Test a failing sysctl leaves shared unavailable."""
        monkeypatch.setattr(psutil, "LINUX", False)
        monkeypatch.setattr(psutil, "BSD", True)

        def fake_run(cmd, **kwargs):
            raise subprocess.CalledProcessError(1, cmd)

        monkeypatch.setattr(subprocess, "run", fake_run)

        assert CounterReader().shared_ceiling(decimal=True) is None

    def test_unsupported_platform(self, monkeypatch):
        """Test platforms without a shmmax source report it unavailable."""
        monkeypatch.setattr(psutil, "LINUX", False)
        monkeypatch.setattr(psutil, "BSD", False)
        monkeypatch.setattr(psutil, "MACOS", False)

        assert CounterReader().shared_ceiling(decimal=True) is None


def test_real_system_counters():
    """Test the reader works against the running system."""
    model = CounterReader().collect(decimal=False)

    assert model.total_ram is not None and model.total_ram > 0
    assert model.free_ram is not None
    assert model.used_ram == model.total_ram - model.free_ram
    assert model.total_swap >= 0
    assert model.used_swap + model.free_swap == model.total_swap
