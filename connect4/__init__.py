"""
connect4 - Two-player Connect Four game engine

This package provides the board engine (grid, turns, drop placement and
win/tie detection), a game session manager, a Gymnasium environment and
a terminal interface for hot-seat play.
"""

# Version number
__version__ = '0.2.0'
