"""pyfree - display the amount of free and used RAM and swap."""

__version__ = "0.1"
