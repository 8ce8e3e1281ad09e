"""
Pytest fixtures for Mini Splendor tests.
"""

import pytest

from ..engine_core.state import GameState, Player, Card, ChipColor, TokenBag
from ..engine_core.processor import ActionProcessor
from ..games.mini_splendor import setup_mini_splendor_game
from ..presentation import GameService


def bag(**counts) -> TokenBag:
    """TokenBag from keyword counts, e.g. bag(red=2, blue=1)."""
    return TokenBag.of({ChipColor.parse(name): count for name, count in counts.items()})


@pytest.fixture
def empty_game_state() -> GameState:
    """A state before any game has started."""
    return GameState()


@pytest.fixture
def new_game_state() -> GameState:
    """The starting position: 2 fresh players, 15 cards."""
    return setup_mini_splendor_game()


@pytest.fixture
def processor() -> ActionProcessor:
    """Processor with a new game already started."""
    processor = ActionProcessor()
    processor.new_game()
    return processor


@pytest.fixture
def rich_state() -> GameState:
    """Mid-game state: player 2 to move holding chips, one Blue taken."""
    return GameState(
        players=[
            Player(score=3, tokens=bag(red=1, white=2)),
            Player(score=1, tokens=bag(blue=4, green=2, black=1)),
        ],
        cards=[
            Card(card_id=2, cost=bag(green=2), points=1),
            Card(card_id=9, cost=bag(blue=2, green=2), points=3),
            Card(card_id=14, cost=bag(blue=3, green=3), points=5),
        ],
        current_player_idx=1,
        chips_taken=bag(blue=1),
    )


@pytest.fixture
def service() -> GameService:
    """Service with a new game already started."""
    service = GameService()
    service.new_game()
    return service
