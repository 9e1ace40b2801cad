"""Data models for pyfree."""

from dataclasses import dataclass
from enum import Enum


def add_optional(a: int | None, b: int | None) -> int | None:
    """Sum two counters, keeping the result unavailable if either is."""
    if a is None or b is None:
        return None
    return a + b


def sub_optional(a: int | None, b: int | None) -> int | None:
    """Subtract two counters, keeping the result unavailable if either is."""
    if a is None or b is None:
        return None
    return a - b


class RenderMode(Enum):
    """Kinds of table a reporting cycle can print."""

    FIXED = "fixed"
    HUMAN = "human"
    DEFAULT = "default"


@dataclass(slots=True)
class ReportModel:
    """
    Memory and swap counters collected for one table, in bytes.

    A counter that could not be queried is None. ``shared`` is the
    shared-memory ceiling already divided by the collection base.
    """

    total_ram: int | None = None
    free_ram: int | None = None
    buffer: int | None = None
    shared: int | None = None
    total_swap: int | None = None
    used_swap: int | None = None

    @property
    def used_ram(self) -> int | None:
        return sub_optional(self.total_ram, self.free_ram)

    @property
    def free_swap(self) -> int | None:
        return sub_optional(self.total_swap, self.used_swap)

    @property
    def total_all(self) -> int | None:
        return add_optional(self.total_ram, self.total_swap)

    @property
    def free_all(self) -> int | None:
        return add_optional(self.free_ram, self.free_swap)

    @property
    def used_all(self) -> int | None:
        return add_optional(self.used_ram, self.used_swap)


@dataclass(slots=True, frozen=True)
class Configuration:
    """Immutable settings parsed from the command line."""

    unit: int | None = None  # fixed-unit divisor, e.g. 1000 for --kilo
    human: bool = False
    decimal: bool = False
    show_total: bool = False
    interval: int | None = None  # seconds
    count: int | None = None

    @property
    def base(self) -> int:
        """Divisor base for human and default tables."""
        return 1000 if self.decimal else 1024

    @property
    def modes(self) -> list[RenderMode]:
        """Tables printed by one cycle, in output order."""
        modes: list[RenderMode] = []
        if self.unit is not None:
            modes.append(RenderMode.FIXED)
        if self.human:
            modes.append(RenderMode.HUMAN)
        if not modes:
            modes.append(RenderMode.DEFAULT)
        return modes

    @property
    def repeats(self) -> bool:
        return self.interval is not None or self.count is not None
