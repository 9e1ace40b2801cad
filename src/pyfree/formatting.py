"""Byte count formatting for pyfree."""

import math

DECIMAL_SUFFIXES = ("B", "K", "M", "G", "T", "P", "E", "Z", "Y")
BINARY_SUFFIXES = ("B", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi")

# Marker printed in place of a counter that could not be read.
UNAVAILABLE = "-"

UNITS = {
    "bytes": 1,
    "kilo": 1000,
    "mega": 1000**2,
    "giga": 1000**3,
    "tera": 1000**4,
    "peta": 1000**5,
    "kibi": 1024,
    "mibi": 1024**2,
    "gibi": 1024**3,
    "tibi": 1024**4,
    "pibi": 1024**5,
}


def _round_half_up(value: float) -> float:
    """Round to one decimal, halves away from zero (C ``round`` semantics)."""
    return math.floor(value * 10.0 + 0.5) / 10.0


def pretty_format(nbytes: int | None, decimal: bool = False) -> str:
    """
    Format a byte count as a human-readable string.

    The magnitude is picked from the logarithm in base 1000 (decimal) or
    1024 (binary) and printed with one decimal digit, e.g. 1985596000
    gives "2.0G" in decimal and "1.8Gi" in binary.
    """
    if nbytes is None:
        return UNAVAILABLE
    if nbytes <= 0:
        return "0B"

    base = 1000.0 if decimal else 1024.0
    suffixes = DECIMAL_SUFFIXES if decimal else BINARY_SUFFIXES

    exponent = math.log10(float(nbytes)) / math.log10(base)
    idx = int(math.floor(exponent))
    if idx >= len(suffixes):
        idx = len(suffixes) - 1
        res = _round_half_up(nbytes / base**idx)
    else:
        res = _round_half_up(base ** (exponent - idx))

    return f"{res:.1f}{suffixes[idx]}"


def format_fixed(nbytes: int | None, unit: int) -> int | None:
    """Divide a byte count by ``unit``, truncating."""
    if nbytes is None:
        return None
    return nbytes // unit


def fixed_cell(nbytes: int | None, unit: int) -> str:
    """Table cell for a byte count in fixed-unit output."""
    value = format_fixed(nbytes, unit)
    return UNAVAILABLE if value is None else str(value)
