"""
exceptions.py - Error types raised by the Connect Four engine

Only construction can fail. Rejected moves (bad column, full column,
finished game) are reported as MoveOutcome values, never raised.
"""


class Connect4Error(Exception):
    """Base class for all Connect Four errors."""


class InvalidDimensionError(Connect4Error, ValueError):
    """Board width or height is not a positive integer."""

    def __init__(self, name: str, value):
        self.name = name
        self.value = value
        super().__init__(f"{name.capitalize()} must be positive integer, got {value!r}")


class InvalidPlayersError(Connect4Error, ValueError):
    """The players passed to a board are not exactly players 1 and 2."""
