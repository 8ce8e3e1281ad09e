"""
Game Service - The layer between a front end and the ActionProcessor.

The service:
1. Turns requests into engine actions
2. Runs them through the processor (validate, execute, settle the turn)
3. Words the outcome as a status line
4. Returns a fresh view of the game

No rule logic lives here; every decision is the processor's.
This layer is UI-agnostic (the CLI is one user of it).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from ..engine_core.processor import ActionProcessor
from ..engine_core.action import BuyCard, TakeChip
from .schemas import (
    ActionResponse,
    BuyCardRequest,
    ErrorCode,
    GameStateView,
    TakeChipRequest,
    parse_action_request,
)


@dataclass
class GameService:
    """
    Front-end facing service for one local game.

    Usage:
        service = GameService()
        service.new_game()

        response = service.handle_request(TakeChipRequest(color="Red"))
        print(response.message)
    """
    processor: ActionProcessor = field(default_factory=ActionProcessor)

    def get_state(self) -> GameStateView:
        return GameStateView.from_state(self.processor.game_state)

    def handle_request(
        self, request: Union[TakeChipRequest, BuyCardRequest, dict],
    ) -> ActionResponse:
        """
        Apply a take-chip or buy-card request from the user.

        Raw dicts are validated first; a malformed one is rejected with
        INVALID_REQUEST rather than raised.
        """
        if isinstance(request, dict):
            try:
                request = parse_action_request(request)
            except ValidationError as e:
                return self._respond(
                    False,
                    f"Invalid request: {e.error_count()} error(s)",
                    error_code=ErrorCode.INVALID_REQUEST,
                )

        action = request.to_action()
        result = self.processor.submit(action)
        error_code = result.error_code

        if isinstance(action, TakeChip):
            color = action.color.value
            if result.success:
                message = f"Took a {color} chip."
                if result.turn_ended:
                    message += " Turn ended."
            else:
                message = f"Cannot take {color} chip. Invalid action."
        else:
            message = self._buy_message(action, result.success, error_code)

        return self._respond(
            result.success, message, error_code=error_code, turn_ended=result.turn_ended,
        )

    def end_turn(self) -> ActionResponse:
        if self.processor.game_state.current_player is None:
            return self._respond(False, "No game in progress.", error_code=ErrorCode.NO_ACTIVE_GAME)
        self.processor.end_turn_now()
        return self._respond(True, "Turn ended.", turn_ended=True)

    def new_game(self) -> ActionResponse:
        self.processor.new_game()
        return self._respond(True, "New game started!")

    def save_game(self, path: str | Path) -> ActionResponse:
        if self.processor.save_game(path):
            return self._respond(True, f"Game saved to {path}")
        return self._respond(False, f"Could not save game to {path}", error_code=ErrorCode.SAVE_FAILED)

    def load_game(self, path: str | Path) -> ActionResponse:
        if self.processor.load_game(path):
            return self._respond(True, f"Game loaded from {path}")
        return self._respond(False, f"Could not load game from {path}", error_code=ErrorCode.LOAD_FAILED)

    def _buy_message(self, action: BuyCard, success: bool, error_code: ErrorCode | None) -> str:
        if success:
            return f"Bought card ID {action.card_id}. Turn ended."
        if error_code == ErrorCode.UNKNOWN_CARD:
            return f"Cannot buy card ID {action.card_id}. No such card on the table."
        if error_code == ErrorCode.NO_ACTIVE_GAME:
            return f"Cannot buy card ID {action.card_id}. No game in progress."
        return f"Cannot buy card ID {action.card_id}. Not enough chips."

    def _respond(
        self,
        success: bool,
        message: str,
        error_code: ErrorCode | None = None,
        turn_ended: bool = False,
    ) -> ActionResponse:
        return ActionResponse(
            success=success,
            message=message,
            error_code=error_code,
            turn_ended=turn_ended,
            state=self.get_state(),
        )
