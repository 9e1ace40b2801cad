"""Memory and swap counter queries for pyfree."""

import logging
import subprocess
from pathlib import Path

import psutil

from pyfree.errors import SwapQueryError
from pyfree.models import ReportModel

log = logging.getLogger(__name__)

SHMMAX_PATH = Path("/proc/sys/kernel/shmmax")
SHMMAX_SYSCTL = "kern.ipc.shmmax"


class CounterReader:
    """
    Reads RAM, swap and shared-memory counters using psutil.

    RAM and shared-memory failures are tolerated: the field is left as None
    and the remaining counters are still collected. A swap failure raises
    SwapQueryError.
    """

    def __init__(self, shmmax_path: Path = SHMMAX_PATH) -> None:
        self._shmmax_path = shmmax_path

    def collect(self, decimal: bool) -> ReportModel:
        """Fill a fresh ReportModel, dividing the shared ceiling by the base."""
        total_swap, used_swap = self.swap()
        return ReportModel(
            total_ram=self.memory_counter("total"),
            free_ram=self.memory_counter("free"),
            buffer=self.memory_counter("active"),
            shared=self.shared_ceiling(decimal),
            total_swap=total_swap,
            used_swap=used_swap,
        )

    def memory_counter(self, name: str) -> int | None:
        """
        Query one field of psutil.virtual_memory(), in bytes.

        psutil converts the kernel page counts to bytes. Returns None if the
        query fails or the platform does not provide the field.
        """
        try:
            value = getattr(psutil.virtual_memory(), name)
        except (OSError, psutil.Error, AttributeError) as exc:
            log.debug("cannot read memory counter %r: %s", name, exc)
            return None
        return int(value)

    def swap(self) -> tuple[int, int]:
        """Return (total, used) swap in bytes, summed over all swap areas."""
        try:
            swap = psutil.swap_memory()
        except (OSError, psutil.Error, RuntimeError) as exc:
            raise SwapQueryError(f"cannot query swap usage: {exc}") from exc
        return int(swap.total), int(swap.used)

    def shared_ceiling(self, decimal: bool) -> int | None:
        """
        Read the tunable shared-memory segment limit.

        This is the configured ceiling (shmmax), not shared memory in use.
        The result is divided by 1000 or 1024.
        """
        raw = self._read_shmmax()
        if raw is None:
            return None
        return raw // (1000 if decimal else 1024)

    def _read_shmmax(self) -> int | None:
        if psutil.LINUX:
            try:
                return int(self._shmmax_path.read_text().split()[0])
            except (OSError, ValueError, IndexError) as exc:
                log.debug("cannot read %s: %s", self._shmmax_path, exc)
                return None

        if psutil.BSD or psutil.MACOS:
            try:
                out = subprocess.run(
                    ["sysctl", "-n", SHMMAX_SYSCTL],
                    capture_output=True,
                    text=True,
                    check=True,
                ).stdout
                return int(out.strip())
            except (OSError, subprocess.CalledProcessError, ValueError) as exc:
                log.debug("cannot read sysctl %s: %s", SHMMAX_SYSCTL, exc)
                return None

        log.debug("shared memory ceiling is not supported on this platform")
        return None
