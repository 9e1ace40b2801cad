"""Table rendering for pyfree."""

import sys
from gettext import gettext as _
from typing import Callable, TextIO

from pyfree.counters import CounterReader
from pyfree.formatting import fixed_cell, pretty_format
from pyfree.models import Configuration, RenderMode, ReportModel

HEADER = "               total        free        used        buffer       shared"


class Reporter:
    """
    Collects counters and writes the memory tables of one reporting cycle.

    Every table gets a freshly collected ReportModel; nothing is carried
    over between tables or cycles.
    """

    def __init__(
        self,
        reader: CounterReader | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._reader = reader if reader is not None else CounterReader()
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so redirected stdout is honoured.
        return self._stream if self._stream is not None else sys.stdout

    def write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def collect(self, decimal: bool) -> ReportModel:
        return self._reader.collect(decimal)

    def report(self, config: Configuration) -> None:
        """Write every table requested by ``config``, fixed-unit first."""
        for mode in config.modes:
            # Fixed-unit tables always use the decimal shared divisor.
            decimal = True if mode is RenderMode.FIXED else config.decimal
            model = self.collect(decimal)
            self.write(self.render(model, mode, config))

    def render(self, model: ReportModel, mode: RenderMode, config: Configuration) -> str:
        """Render one table as text, one line per row."""
        cell = self._cell_formatter(mode, config)

        lines = [
            HEADER,
            "{} {:>15} {:>11} {:>11} {:>13} {:>12}".format(
                _("Mem:"),
                cell(model.total_ram),
                cell(model.free_ram),
                cell(model.used_ram),
                cell(model.buffer),
                cell(model.shared),
            ),
            "{} {:>14} {:>11} {:>11}".format(
                _("Swap:"),
                cell(model.total_swap),
                cell(model.free_swap),
                cell(model.used_swap),
            ),
        ]
        if config.show_total:
            lines.append(
                "{} {:>13} {:>11} {:>11}".format(
                    _("Total:"),
                    cell(model.total_all),
                    cell(model.free_all),
                    cell(model.used_all),
                )
            )
        return "\n".join(lines) + "\n"

    def _cell_formatter(
        self, mode: RenderMode, config: Configuration
    ) -> Callable[[int | None], str]:
        if mode is RenderMode.HUMAN:
            return lambda value: pretty_format(value, config.decimal)
        if mode is RenderMode.FIXED:
            assert config.unit is not None
            unit = config.unit
        else:
            unit = config.base
        return lambda value: fixed_cell(value, unit)
