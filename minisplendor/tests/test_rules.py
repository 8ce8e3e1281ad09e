"""
Tests for the rule functions.

Tests:
- Every transition of the chip-taking state machine
- Purchase affordability
- Turn end by chips
- Legal action generation
"""

import pytest

from ..engine_core.state import Card, ChipColor, GameState, Player, TokenBag
from ..engine_core.action import BuyCard, TakeChip
from ..engine_core.action_generator import ActionGenerator, legal_actions
from ..engine_core.rules import (
    ChipPhase,
    can_buy,
    can_take_chip,
    chip_phase,
    legal_chip_colors,
    turn_complete_by_chips,
)
from .conftest import bag

RED, BLUE, GREEN, BLACK, WHITE = ChipColor


def take(taken: TokenBag, color: ChipColor) -> TokenBag:
    """Take a chip after checking it is legal."""
    assert can_take_chip(taken, color)
    return taken.with_added(color)


class TestStart:
    """Nothing taken yet."""

    def test_phase(self):
        assert chip_phase(TokenBag.empty()) == ChipPhase.START

    @pytest.mark.parametrize("color", list(ChipColor))
    def test_any_color_takable_and_leads_to_single(self, color):
        taken = take(TokenBag.empty(), color)
        assert chip_phase(taken) == ChipPhase.SINGLE
        assert taken.nonzero() == [color]

    def test_turn_not_complete(self):
        assert not turn_complete_by_chips(TokenBag.empty())


class TestSingle:
    """One chip taken."""

    def test_same_color_leads_to_done(self):
        taken = take(bag(red=1), RED)
        assert chip_phase(taken) == ChipPhase.DONE
        assert turn_complete_by_chips(taken)

    def test_third_of_same_color_rejected(self):
        taken = take(bag(red=1), RED)
        assert not can_take_chip(taken, RED)

    @pytest.mark.parametrize("color", [BLUE, GREEN, BLACK, WHITE])
    def test_other_color_leads_to_distinct(self, color):
        taken = take(bag(red=1), color)
        assert chip_phase(taken) == ChipPhase.DISTINCT
        assert not turn_complete_by_chips(taken)

    def test_every_color_takable(self):
        assert legal_chip_colors(bag(green=1)) == list(ChipColor)


class TestDistinct:
    """Two different colors taken."""

    def test_phase(self):
        assert chip_phase(bag(red=1, blue=1)) == ChipPhase.DISTINCT

    def test_already_taken_colors_rejected(self):
        taken = bag(red=1, blue=1)
        assert not can_take_chip(taken, RED)
        assert not can_take_chip(taken, BLUE)

    @pytest.mark.parametrize("color", [GREEN, BLACK, WHITE])
    def test_third_color_leads_to_done(self, color):
        taken = take(bag(red=1, blue=1), color)
        assert chip_phase(taken) == ChipPhase.DONE
        assert turn_complete_by_chips(taken)

    def test_legal_colors(self):
        assert legal_chip_colors(bag(red=1, blue=1)) == [GREEN, BLACK, WHITE]


class TestDone:
    """No more chips this turn."""

    @pytest.mark.parametrize("taken", [
        bag(red=2),
        bag(white=2),
        bag(red=1, blue=1, green=1),
        bag(black=1, white=1, blue=1),
    ])
    def test_every_color_rejected(self, taken):
        assert chip_phase(taken) == ChipPhase.DONE
        for color in ChipColor:
            assert not can_take_chip(taken, color)
        assert legal_chip_colors(taken) == []

    @pytest.mark.parametrize("taken", [bag(red=2), bag(red=1, blue=1, green=1), bag(red=3)])
    def test_turn_complete(self, taken):
        assert turn_complete_by_chips(taken)

    @pytest.mark.parametrize("taken", [TokenBag.empty(), bag(red=1), bag(red=1, blue=1)])
    def test_turn_not_complete(self, taken):
        assert not turn_complete_by_chips(taken)


class TestTakeChipInputs:
    """Non-color input."""

    @pytest.mark.parametrize("color", [None, "Red", 0])
    def test_non_color_rejected(self, color):
        assert not can_take_chip(TokenBag.empty(), color)

    def test_repeatable(self):
        taken = bag(red=1, blue=1)
        assert [can_take_chip(taken, GREEN) for _ in range(3)] == [True, True, True]
        assert taken == bag(red=1, blue=1)


class TestCanBuy:
    """Purchase affordability."""

    def test_exact_holdings_affordable(self):
        player = Player(tokens=bag(black=1, white=2))
        card = Card(card_id=3, cost=bag(black=1, white=2), points=1)
        assert can_buy(player, card)

    def test_surplus_affordable(self):
        player = Player(tokens=bag(red=3, blue=1))
        assert can_buy(player, Card(card_id=0, cost=bag(red=2), points=1))

    def test_short_one_color_unaffordable(self):
        player = Player(tokens=bag(black=1, white=1, red=5))
        card = Card(card_id=3, cost=bag(black=1, white=2), points=1)
        assert not can_buy(player, card)

    def test_no_substitution_between_colors(self):
        player = Player(tokens=bag(blue=10))
        assert not can_buy(player, Card(card_id=0, cost=bag(red=1), points=1))

    def test_missing_player_or_card(self):
        card = Card(card_id=0, cost=bag(red=1), points=1)
        assert not can_buy(None, card)
        assert not can_buy(Player(tokens=bag(red=1)), None)

    def test_free_card_affordable(self):
        assert can_buy(Player(), Card(card_id=0, points=1))


class TestLegalActions:
    """Tests for the action generator."""

    def test_empty_state_has_no_actions(self, empty_game_state):
        assert legal_actions(empty_game_state) == []

    def test_new_game_offers_only_chips(self, new_game_state):
        assert legal_actions(new_game_state) == [TakeChip(color) for color in ChipColor]

    def test_rich_state(self, rich_state):
        # Player 2 has taken one Blue: every color still takable
        actions = legal_actions(rich_state)
        assert actions == [TakeChip(color) for color in ChipColor] + [BuyCard(2), BuyCard(9)]

    def test_purchases_can_be_left_out(self, rich_state):
        actions = ActionGenerator(include_purchases=False).generate(rich_state)
        assert all(isinstance(a, TakeChip) for a in actions)

    def test_done_state_offers_only_purchases(self):
        state = GameState(
            players=[Player(tokens=bag(red=2)), Player()],
            cards=[Card(card_id=0, cost=bag(red=2), points=1)],
            chips_taken=bag(red=2),
        )
        assert legal_actions(state) == [BuyCard(0)]
