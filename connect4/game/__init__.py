"""
connect4.game - Core game mechanics for Connect Four

This package contains the board engine, the session manager and the
Gymnasium environment built on top of it.
"""

from connect4.game.board import Board, create, drop_piece
from connect4.game.rules import ConnectFourGame, ConnectFourEnv

__all__ = ['Board', 'create', 'drop_piece', 'ConnectFourGame', 'ConnectFourEnv']
