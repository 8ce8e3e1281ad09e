"""
Action Generator - Lists every legal action from a game state.

Used by:
1. The presentation layer to show what can be done
2. Tests, as a cross-check on validate()

Generates fully-specified actions, not just action types.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import GameState
from .action import Action, TakeChip, BuyCard
from .rules import can_buy, legal_chip_colors


@dataclass
class ActionGenerator:
    """
    Generates legal actions for the current player.

    Chip takes come first in color order, then affordable cards in table
    order. Once the turn's chip taking has started, buying is still
    offered: a purchase simply ends the turn.
    """
    include_purchases: bool = True

    def generate(self, state: GameState) -> list[Action]:
        player = state.current_player
        if player is None:
            return []

        actions: list[Action] = [TakeChip(color) for color in legal_chip_colors(state.chips_taken)]

        if self.include_purchases:
            actions.extend(
                BuyCard(card.card_id)
                for card in state.cards
                if can_buy(player, card)
            )

        return actions


def legal_actions(state: GameState) -> list[Action]:
    """Convenience function: all legal actions for the current player."""
    return ActionGenerator().generate(state)
