"""
Mini Splendor - The two-player chip and card game.

Key mechanics:
- Five chip colors
- On a turn, take two chips of one color or three of different colors,
  or buy one card from the table
- Cards cost chips and are worth points

This module contains:
- The fixed starting card table
- Game setup
"""

from .cards import CARD_TABLE, STARTING_CARD_COUNT, create_starting_cards
from .setup import setup_mini_splendor_game

__all__ = [
    "CARD_TABLE",
    "STARTING_CARD_COUNT",
    "create_starting_cards",
    "setup_mini_splendor_game",
]
