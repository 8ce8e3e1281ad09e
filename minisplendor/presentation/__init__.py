"""
Presentation - What front ends talk to.

A front end:
1. Builds TakeChipRequest / BuyCardRequest from user input
2. Hands them to GameService
3. Shows the returned status message
4. Renders the returned GameStateView

Front ends never build or modify Players, Cards or the GameState.
"""

from .schemas import (
    # Requests
    ActionRequest,
    TakeChipRequest,
    BuyCardRequest,
    parse_action_request,
    # Views and responses
    CardView,
    PlayerView,
    GameStateView,
    ActionResponse,
    # Enums
    ErrorCode,
)
from .service import GameService
from .render import render_state

__all__ = [
    "ActionRequest",
    "TakeChipRequest",
    "BuyCardRequest",
    "parse_action_request",
    "CardView",
    "PlayerView",
    "GameStateView",
    "ActionResponse",
    "ErrorCode",
    "GameService",
    "render_state",
]
