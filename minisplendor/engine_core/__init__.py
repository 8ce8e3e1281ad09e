"""
Engine Core - Game state, actions and rules.

The engine:
1. Holds the GameState (players, cards, turn, chips taken this turn)
2. Defines the two actions (TakeChip, BuyCard)
3. Checks legality with pure rule functions
4. Lists legal actions

The ActionProcessor in engine_core.processor ties these together with
saving and game setup; import it from there.
"""

from .state import GameState, Player, Card, ChipColor, TokenBag
from .action import Action, ActionType, ActionResult, BuyCard, ErrorCode, TakeChip
from .rules import (
    ChipPhase,
    can_buy,
    can_take_chip,
    chip_phase,
    legal_chip_colors,
    turn_complete_by_chips,
)
from .action_generator import ActionGenerator, legal_actions

__all__ = [
    "GameState",
    "Player",
    "Card",
    "ChipColor",
    "TokenBag",
    "Action",
    "ActionType",
    "ActionResult",
    "BuyCard",
    "ErrorCode",
    "TakeChip",
    "ChipPhase",
    "can_buy",
    "can_take_chip",
    "chip_phase",
    "legal_chip_colors",
    "turn_complete_by_chips",
    "ActionGenerator",
    "legal_actions",
]
