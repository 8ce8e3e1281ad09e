"""
Action Processor - Validates and applies actions to the live game state.

The processor is the single point of state mutation. A user action maps
to one synchronous sequence:

    validate(action) -> execute(action) -> finalize_turn_if_complete()
                                           or end_turn_now() after a buy

Design principles:
- validate() never mutates
- execute() assumes validate() passed and cannot fail halfway
- a failed load never replaces the live state
- not thread-safe: callers serialize dispatch onto one thread
"""

from __future__ import annotations
from pathlib import Path
from typing import Any
import logging

from .state import GameState
from .action import ActionResult, BuyCard, ErrorCode, TakeChip
from .action_generator import legal_actions
from .rules import can_buy, can_take_chip, turn_complete_by_chips
from ..errors import SaveFileError
from ..games.mini_splendor.setup import setup_mini_splendor_game
from ..persistence.codec import SaveFileCodec

logger = logging.getLogger(__name__)


class ActionProcessor:
    """
    Orchestrates the game: rule checks, state changes, turn flow, saving.

    Usage:
        processor = ActionProcessor()
        processor.new_game()

        action = TakeChip(ChipColor.RED)
        if processor.validate(action):
            processor.execute(action)
            processor.finalize_turn_if_complete()
    """

    def __init__(
        self,
        state: GameState | None = None,
        codec: SaveFileCodec | None = None,
    ):
        self._state = state if state is not None else GameState()
        self._codec = codec or SaveFileCodec()

    @property
    def game_state(self) -> GameState:
        """The live game state. Read it, don't mutate it."""
        return self._state

    def get_game_state(self) -> GameState:
        return self._state

    # -- Action flow ---------------------------------------------------------

    def validate(self, action: Any) -> bool:
        """Check an action against the rules without changing anything."""
        return self._rejection(action) is None

    def execute(self, action: Any):
        """
        Apply an action that validate() accepted.

        TakeChip credits one chip to the current player and records it
        for this turn. BuyCard pays the card's full cost, scores its points
        and removes it from the table. Neither one ends the turn.
        """
        player = self._state.current_player
        if player is None:
            logger.warning("Ignoring %r: no game in progress", action)
            return

        if isinstance(action, TakeChip):
            player.add_token(action.color)
            self._state.record_chip_taken(action.color)
        elif isinstance(action, BuyCard):
            card = self._state.get_card(action.card_id)
            if card is None:
                logger.warning("Ignoring purchase of unknown card %s", action.card_id)
                return
            for color, amount in card.cost.items():
                if amount > 0:
                    player.remove_tokens(color, amount)
            player.add_score(card.points)
            self._state.remove_card(card)
        else:
            logger.warning("Ignoring unsupported action %r", action)

    def finalize_turn_if_complete(self) -> bool:
        """
        End the turn if this turn's chip taking is done.

        Returns True if the turn passed to the next player.
        """
        if turn_complete_by_chips(self._state.chips_taken):
            self._advance()
            return True
        return False

    def end_turn_now(self):
        """End the turn regardless of chips taken (after a buy, or on request)."""
        self._advance()

    def submit(self, action: Any) -> ActionResult:
        """
        Run one complete action: validate, apply, then settle the turn.

        Returns ActionResult with the error code on rejection.
        """
        rejection = self._rejection(action)
        if rejection is not None:
            error, code = rejection
            logger.info("Rejected %r: %s", action, error)
            return ActionResult.failure(error, error_code=code)

        self.execute(action)
        if isinstance(action, BuyCard):
            self.end_turn_now()
            return ActionResult.applied(
                changes=[f"Player {self._previous_player_number()} bought card {action.card_id}"],
                turn_ended=True,
            )

        turn_ended = self.finalize_turn_if_complete()
        player_number = self._previous_player_number() if turn_ended else self._current_player_number()
        return ActionResult.applied(
            changes=[f"Player {player_number} took a {action.color.value} chip"],
            turn_ended=turn_ended,
        )

    def legal_actions(self) -> list:
        return legal_actions(self._state)

    # -- Lifecycle -----------------------------------------------------------

    def new_game(self):
        """Reset to the starting table."""
        setup_mini_splendor_game(self._state)
        logger.debug("New game started")

    def save_game(self, path: str | Path) -> bool:
        """
        Save the game to `path`.

        Returns False (and logs) if the file could not be written. The
        in-memory game is never affected.
        """
        try:
            self._codec.save(self._state, path)
        except SaveFileError as e:
            logger.error("Error saving game: %s", e)
            return False
        return True

    def load_game(self, path: str | Path) -> bool:
        """
        Replace the game with the one saved at `path`.

        Returns False (and logs) on failure, leaving the current game as
        it was.
        """
        try:
            loaded = self._codec.load(path)
        except SaveFileError as e:
            logger.error("Error loading game: %s", e)
            return False
        self._state = loaded
        return True

    # -- Internals -----------------------------------------------------------

    def _rejection(self, action: Any) -> tuple[str, ErrorCode] | None:
        """Return (message, code) if the action is not allowed, else None."""
        if not isinstance(action, (TakeChip, BuyCard)):
            return f"Unsupported action: {action!r}", ErrorCode.UNSUPPORTED_ACTION

        player = self._state.current_player
        if player is None:
            return "No game in progress", ErrorCode.NO_ACTIVE_GAME

        if isinstance(action, TakeChip):
            if not can_take_chip(self._state.chips_taken, action.color):
                return f"Cannot take a {_color_name(action.color)} chip now", ErrorCode.ILLEGAL_CHIP_TAKE
            return None

        card = self._state.get_card(action.card_id)
        if card is None:
            return f"No card with id {action.card_id} on the table", ErrorCode.UNKNOWN_CARD
        if not can_buy(player, card):
            return f"Not enough chips for card {action.card_id}", ErrorCode.UNAFFORDABLE_CARD
        return None

    def _advance(self):
        self._state.advance_to_next_player()
        logger.debug("Turn passed to player %d", self._current_player_number())

    def _current_player_number(self) -> int:
        return self._state.current_player_idx + 1

    def _previous_player_number(self) -> int:
        count = self._state.num_players or 1
        return (self._state.current_player_idx - 1) % count + 1


def _color_name(color: Any) -> str:
    return getattr(color, "value", str(color))
