"""
Pydantic Schemas - Request/response models for front ends.

These models define the contract between a front end (the CLI, or any
other UI) and the engine. Front ends build requests from user gestures,
reference cards only by id, and render the views they get back.

Error Codes:
- ILLEGAL_CHIP_TAKE: chip taking rules forbid that color right now
- UNAFFORDABLE_CARD: the current player can't pay for the card
- UNKNOWN_CARD: no card with that id is on the table
- NO_ACTIVE_GAME: no game has been started or loaded
- INVALID_REQUEST: the request itself didn't validate
- SAVE_FAILED / LOAD_FAILED: the save file couldn't be written / read
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from ..engine_core.state import Card, ChipColor, GameState, Player
from ..engine_core.action import BuyCard, ErrorCode, TakeChip
from ..engine_core.rules import can_buy, chip_phase, legal_chip_colors


# =============================================================================
# Request Models
# =============================================================================

class TakeChipRequest(BaseModel):
    """Request to take one chip."""
    kind: Literal["take_chip"] = "take_chip"
    color: ChipColor = Field(..., description="Red, Blue, Green, Black or White")

    @field_validator("color", mode="before")
    @classmethod
    def _parse_color(cls, value: Any) -> Any:
        if isinstance(value, str):
            return ChipColor.parse(value) or value
        return value

    def to_action(self) -> TakeChip:
        return TakeChip(self.color)


class BuyCardRequest(BaseModel):
    """Request to buy a card from the table."""
    kind: Literal["buy_card"] = "buy_card"
    card_id: int = Field(..., ge=0, description="Id of a card on the table")

    def to_action(self) -> BuyCard:
        return BuyCard(self.card_id)


ActionRequest = Annotated[
    Union[TakeChipRequest, BuyCardRequest],
    Field(discriminator="kind"),
]

_action_request_adapter = TypeAdapter(ActionRequest)


def parse_action_request(data: Any) -> Union[TakeChipRequest, BuyCardRequest]:
    """Validate a raw dict (e.g. decoded JSON) into an action request."""
    return _action_request_adapter.validate_python(data)


# =============================================================================
# View Models
# =============================================================================

class CardView(BaseModel):
    """A card on the table."""
    card_id: int
    points: int
    cost: dict[str, int] = Field(default_factory=dict, description="Nonzero costs only")

    @classmethod
    def from_card(cls, card: Card) -> "CardView":
        return cls(
            card_id=card.card_id,
            points=card.points,
            cost={color.value: count for color, count in card.cost.items() if count > 0},
        )


class PlayerView(BaseModel):
    """A player's public state."""
    player_number: int = Field(..., ge=1, description="1-based seat")
    score: int = 0
    chips: dict[str, int] = Field(default_factory=dict)
    is_current_turn: bool = False

    @classmethod
    def from_player(cls, player: Player, index: int, current_idx: int) -> "PlayerView":
        return cls(
            player_number=index + 1,
            score=player.score,
            chips=player.tokens.as_dict(),
            is_current_turn=index == current_idx,
        )


class GameStateView(BaseModel):
    """Everything a front end needs to draw the game."""
    current_player_number: Optional[int] = None
    chips_taken: dict[str, int] = Field(default_factory=dict)
    chip_phase: str
    legal_colors: list[str] = Field(default_factory=list)
    affordable_card_ids: list[int] = Field(default_factory=list)
    players: list[PlayerView] = Field(default_factory=list)
    cards: list[CardView] = Field(default_factory=list)

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateView":
        current = state.current_player
        idx = state.current_player_idx
        taken = state.chips_taken
        return cls(
            current_player_number=idx + 1 if current is not None else None,
            chips_taken=taken.as_dict(),
            chip_phase=chip_phase(taken).value,
            legal_colors=(
                [color.value for color in legal_chip_colors(taken)]
                if current is not None else []
            ),
            affordable_card_ids=[
                card.card_id for card in state.cards if can_buy(current, card)
            ],
            players=[
                PlayerView.from_player(player, i, idx)
                for i, player in enumerate(state.players)
            ],
            cards=[CardView.from_card(card) for card in state.cards],
        )


# =============================================================================
# Response Models
# =============================================================================

class ActionResponse(BaseModel):
    """Outcome of a user request, with a status line and the new view."""
    success: bool
    message: str = Field(..., description="Status line to show the user")
    error_code: Optional[ErrorCode] = None
    turn_ended: bool = False
    state: GameStateView
