"""
Mini Splendor Setup - Creates the starting game state.

A new game always looks the same: two players with no chips and no
score, the full 15-card table, player 1 to move.
"""

from __future__ import annotations

from ...engine_core.state import GameState
from .cards import create_starting_cards


def setup_mini_splendor_game(state: GameState | None = None) -> GameState:
    """
    Reset `state` (or a fresh one) to the starting position.

    Returns the state that was reset.
    """
    if state is None:
        state = GameState()
    state.new_game(create_starting_cards())
    return state
