"""
config.py - Game configuration for Connect Four

A GameConfig carries what a presentation layer may choose before a game
starts: board dimensions and an optional display color for each player.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from connect4.debug import debug
from connect4.exceptions import Connect4Error, InvalidDimensionError
from connect4.utils import DEFAULT_HEIGHT, DEFAULT_WIDTH, Player, is_positive_int

# Colors offered by the terminal color selection
SUPPORTED_COLORS = ("red", "yellow", "blue", "green", "purple", "orange")


@dataclass
class GameConfig:
    """Settings for one game session."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    colors: Tuple[Optional[str], Optional[str]] = field(default=(None, None))

    def validate(self) -> 'GameConfig':
        """
        Check the settings, raising on the first problem found.

        Returns:
            self, so calls can be chained

        Raises:
            InvalidDimensionError: width or height is not a positive integer
            Connect4Error: colors are malformed or shared by both players
        """
        if not is_positive_int(self.width):
            raise InvalidDimensionError("width", self.width)
        if not is_positive_int(self.height):
            raise InvalidDimensionError("height", self.height)

        if not isinstance(self.colors, (tuple, list)) or len(self.colors) != 2:
            raise Connect4Error(f"Expected a pair of player colors, got {self.colors!r}")
        for color in self.colors:
            if color is not None and not isinstance(color, str):
                raise Connect4Error(f"Player color must be a string or None, got {color!r}")

        first, second = (c.lower() if c else None for c in self.colors)
        if first and first == second:
            raise Connect4Error(f"Both players cannot use the color {first!r}")

        debug.debug(f"Validated config {self.width}x{self.height}, colors={self.colors}", "config")
        return self

    def players(self) -> Tuple[Player, Player]:
        """Build the two players described by this config."""
        first, second = self.colors
        return Player(1, first), Player(2, second)
