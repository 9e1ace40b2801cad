"""Exception classes raised by pyfree."""


class PyfreeError(Exception):
    """Base exception class. All other pyfree exceptions inherit from this."""


class ArgumentError(PyfreeError):
    """A command line argument has a bad value."""


class SwapQueryError(PyfreeError):
    """Swap usage could not be queried. Always fatal."""

    def __init__(self, msg: str = "") -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg or "cannot query swap usage"
