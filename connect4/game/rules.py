"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, the session object a presentation layer drives
2. ConnectFourEnv, a gymnasium-compatible view of the same engine
"""

from typing import Dict, List, Optional, Tuple, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from connect4.config import GameConfig
from connect4.debug import debug
from connect4.game.board import Board
from connect4.utils import MoveOutcome, OutcomeKind, Player


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    Holds the board of the current game and replaces it when a new game
    starts. Presentation layers call make_move with the clicked or typed
    column and render the returned outcome.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """Initialize a session and start its first game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.config = config or GameConfig()
        self.board = self._make_board()

    def _make_board(self) -> Board:
        self.config.validate()
        return Board(self.config.width, self.config.height, self.config.players())

    def new_game(self, config: Optional[GameConfig] = None) -> Board:
        """
        Discard the current game and start a fresh one.

        Args:
            config: New settings; keeps the current ones when omitted

        Returns:
            The new board
        """
        if config is not None:
            self.config = config
        debug.debug("Starting new game", "game")
        self.board = self._make_board()
        return self.board

    def make_move(self, column: int) -> MoveOutcome:
        """
        Make a move in the game.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            The outcome reported by the board
        """
        outcome = self.board.drop_piece(column)
        if outcome.kind.is_rejection():
            debug.warning(f"Move in column {column!r} rejected: {outcome.kind.name}", "game")
        return outcome

    def get_state(self) -> Board:
        return self.board

    def is_game_over(self) -> bool:
        return self.board.finished

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or tie
        """
        return self.board.winner

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        return self.board.get_valid_moves()

    def status_message(self) -> str:
        """One line describing the game: whose turn it is or how it ended."""
        if self.board.winner is not None:
            return f"{self.board.winner.label} won!"
        if self.board.finished:
            return "Tie game"
        return f"{self.board.current_player.label}'s turn"

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    Each step plays one piece for whichever player is to move; the caller
    drives both seats. Rewards are from the point of view of the player
    who made the move.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None,
                 config: Optional[GameConfig] = None):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            config: Board size and player colors (defaults to 7x6)
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        if render_mode is not None and render_mode not in self.metadata['render_modes']:
            raise ValueError(f"Unsupported render mode: {render_mode}")

        self.config = (config or GameConfig()).validate()
        self.board = Board(self.config.width, self.config.height, self.config.players())
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(self.config.width)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.config.height, self.config.width), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = 0.0

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        self.board.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Take a step in the environment by making a move.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        outcome = self.board.drop_piece(action)

        if outcome.kind.is_rejection():
            debug.warning(f"Invalid action {action}: {outcome.kind.name}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            info['outcome'] = outcome.kind.name
            return self._get_observation(), self.reward_invalid_move, False, True, info

        reward = self.reward_step
        terminated = False
        if outcome.kind == OutcomeKind.WIN:
            debug.info(f"Game over: {outcome.player.label} wins", "env")
            reward = self.reward_win
            terminated = True
        elif outcome.kind == OutcomeKind.TIE:
            debug.info("Game over: tie", "env")
            reward = self.reward_draw
            terminated = True

        if self.render_mode == "human":
            self.render()

        info = self._get_info()
        info['outcome'] = outcome.kind.name
        return self._get_observation(), reward, terminated, False, info

    def render(self) -> Optional[Union[str, np.ndarray]]:
        """
        Render the current state of the environment.

        Returns:
            The ASCII board in "ascii" mode, otherwise None
        """
        if self.render_mode == "ascii":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.board.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.board.current_player.number,
            'finished': self.board.finished,
            'winner': self.board.winner.number if self.board.winner else None,
            'moves_made': self.board.moves_made,
            'winning_line': self.board.get_winning_line(),
            'last_move': self.board.last_move,
        }
