"""
Action System - Action requests and results.

Two kinds of action exist:
1. TakeChip - take one chip of a color
2. BuyCard - spend chips on a card in play, referenced by id

Actions are transient: the presentation layer builds one, the
ActionProcessor consumes it, and nothing keeps it afterwards.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .state import ChipColor


class ActionType(Enum):
    """Types of actions a player can request."""
    TAKE_CHIP = "take_chip"
    BUY_CARD = "buy_card"


@dataclass(frozen=True)
class TakeChip:
    """Take one chip of the given color."""
    color: ChipColor

    @property
    def action_type(self) -> ActionType:
        return ActionType.TAKE_CHIP

    def describe(self) -> str:
        return f"take {self.color.value}"


@dataclass(frozen=True)
class BuyCard:
    """Buy the card in play with the given id."""
    card_id: int

    @property
    def action_type(self) -> ActionType:
        return ActionType.BUY_CARD

    def describe(self) -> str:
        return f"buy card {self.card_id}"


Action = Union[TakeChip, BuyCard]


class ErrorCode(str, Enum):
    """
    Why a request failed.

    The processor rejects actions with the first five; front ends add
    the request and save file codes.
    """
    ILLEGAL_CHIP_TAKE = "ILLEGAL_CHIP_TAKE"
    UNAFFORDABLE_CARD = "UNAFFORDABLE_CARD"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    NO_ACTIVE_GAME = "NO_ACTIVE_GAME"
    UNSUPPORTED_ACTION = "UNSUPPORTED_ACTION"
    INVALID_REQUEST = "INVALID_REQUEST"
    SAVE_FAILED = "SAVE_FAILED"
    LOAD_FAILED = "LOAD_FAILED"


@dataclass
class ActionResult:
    """
    Result of submitting an action.

    Contains:
    - Whether the action was applied
    - Error message and code (if rejected)
    - Whether the turn passed to the next player
    - Human-readable changes
    """
    success: bool
    error: str | None = None
    error_code: ErrorCode | None = None
    turn_ended: bool = False
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def applied(cls, changes: list[str] | None = None, turn_ended: bool = False) -> ActionResult:
        """Create a success result."""
        return cls(success=True, turn_ended=turn_ended, state_changes=changes or [])
