"""
Game State - Chips, cards, players and the aggregate game state.

Design principles:
- Snapshots on read: every accessor for a container returns a value the
  caller can keep or mutate without touching the live state
- TokenBag is immutable; Player and GameState are mutated in place,
  and only by the ActionProcessor
- No I/O: persistence lives in the codec
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from copy import deepcopy
from enum import Enum
from typing import Iterable, Iterator, Mapping
import logging

logger = logging.getLogger(__name__)

MAX_PLAYERS = 2


class ChipColor(Enum):
    """The five chip colors. Declaration order is the serialization order."""
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    BLACK = "Black"
    WHITE = "White"

    @classmethod
    def parse(cls, text: str) -> ChipColor | None:
        """Resolve a color name case-insensitively, None if unknown."""
        if not isinstance(text, str):
            return None
        wanted = text.strip().lower()
        for color in cls:
            if color.value.lower() == wanted:
                return color
        return None


@dataclass(frozen=True)
class TokenBag:
    """
    Immutable chip counts for all five colors.

    Missing colors are zero; negative counts are rejected.
    """
    _counts: tuple[int, ...] = (0, 0, 0, 0, 0)

    def __post_init__(self):
        if len(self._counts) != len(ChipColor):
            raise ValueError(f"TokenBag needs {len(ChipColor)} counts, got {len(self._counts)}")
        for count in self._counts:
            if count < 0:
                raise ValueError(f"Chip counts cannot be negative: {self._counts}")

    @classmethod
    def empty(cls) -> TokenBag:
        return cls()

    @classmethod
    def of(cls, counts: Mapping[ChipColor, int] | None = None) -> TokenBag:
        """Build a bag from a (possibly partial) color mapping."""
        counts = counts or {}
        return cls(tuple(int(counts.get(color, 0)) for color in ChipColor))

    def __getitem__(self, color: ChipColor) -> int:
        return self._counts[_COLOR_INDEX[color]]

    def __iter__(self) -> Iterator[ChipColor]:
        return iter(ChipColor)

    def __len__(self) -> int:
        return len(self._counts)

    def items(self) -> list[tuple[ChipColor, int]]:
        return list(zip(ChipColor, self._counts))

    @property
    def total(self) -> int:
        return sum(self._counts)

    @property
    def max_count(self) -> int:
        return max(self._counts)

    @property
    def distinct_colors(self) -> int:
        """Number of colors with a nonzero count."""
        return sum(1 for count in self._counts if count > 0)

    def nonzero(self) -> list[ChipColor]:
        return [color for color, count in self.items() if count > 0]

    def covers(self, other: TokenBag) -> bool:
        """True if this bag holds at least `other` in every color."""
        return all(mine >= needed for mine, needed in zip(self._counts, other._counts))

    def with_added(self, color: ChipColor, amount: int = 1) -> TokenBag:
        """Return new bag with `amount` chips of `color` added."""
        counts = list(self._counts)
        counts[_COLOR_INDEX[color]] += amount
        return TokenBag(tuple(counts))

    def with_removed(self, color: ChipColor, amount: int) -> TokenBag:
        """Return new bag with `amount` chips of `color` removed, floored at zero."""
        counts = list(self._counts)
        index = _COLOR_INDEX[color]
        counts[index] = max(0, counts[index] - amount)
        return TokenBag(tuple(counts))

    def as_dict(self) -> dict[str, int]:
        """Counts keyed by color name, in color order."""
        return {color.value: count for color, count in self.items()}


_COLOR_INDEX = {color: index for index, color in enumerate(ChipColor)}


@dataclass(frozen=True)
class Card:
    """A card on the table. Identity is the id; cards never change."""
    card_id: int
    cost: TokenBag = field(default_factory=TokenBag.empty)
    points: int = 0

    def __post_init__(self):
        if self.points < 0:
            raise ValueError(f"Card {self.card_id} has negative points")


@dataclass
class Player:
    """
    A player's score and chips.

    Mutated only by the ActionProcessor.
    """
    score: int = 0
    tokens: TokenBag = field(default_factory=TokenBag.empty)

    def add_token(self, color: ChipColor):
        """Take one chip of `color`. The per-turn limit is a rules concern."""
        self.tokens = self.tokens.with_added(color)

    def remove_tokens(self, color: ChipColor, amount: int):
        """
        Pay `amount` chips of `color`.

        Callers validate affordability first. The count is still floored
        at zero, and hitting the floor is logged since it means a purchase
        got past validation.
        """
        if amount > self.tokens[color]:
            logger.warning(
                "Clamped chip removal: %d %s requested, %d held",
                amount, color.value, self.tokens[color],
            )
        self.tokens = self.tokens.with_removed(color, amount)

    def add_score(self, points: int):
        self.score += points

    def copy(self) -> Player:
        return replace(self)


class GameState:
    """
    Complete game state at a point in time.

    Holds the players in turn order, the cards in play (keyed by id, table
    order preserved), whose turn it is and the chips taken so far this turn.
    """

    def __init__(
        self,
        players: Iterable[Player] | None = None,
        cards: Iterable[Card] | None = None,
        current_player_idx: int = 0,
        chips_taken: TokenBag | None = None,
    ):
        self._players: list[Player] = [p.copy() for p in players or []]
        if len(self._players) > MAX_PLAYERS:
            raise ValueError(f"At most {MAX_PLAYERS} players, got {len(self._players)}")

        self._cards: dict[int, Card] = {}
        for card in cards or []:
            if card.card_id in self._cards:
                raise ValueError(f"Duplicate card id {card.card_id}")
            self._cards[card.card_id] = card

        if self._players and not 0 <= current_player_idx < len(self._players):
            raise ValueError(
                f"Player index {current_player_idx} out of range for {len(self._players)} players"
            )
        if not self._players and current_player_idx != 0:
            raise ValueError("Player index must be 0 when there are no players")
        self._current_player_idx = current_player_idx
        self._chips_taken = chips_taken or TokenBag.empty()

    # -- Read access ---------------------------------------------------------

    @property
    def players(self) -> list[Player]:
        """Copies of the players, in turn order."""
        return [p.copy() for p in self._players]

    @property
    def cards(self) -> list[Card]:
        """Cards in play, in table order."""
        return list(self._cards.values())

    @property
    def current_player_idx(self) -> int:
        return self._current_player_idx

    @property
    def chips_taken(self) -> TokenBag:
        """Chips taken so far in the current turn."""
        return self._chips_taken

    @property
    def num_players(self) -> int:
        return len(self._players)

    @property
    def current_player(self) -> Player | None:
        """
        The live player whose turn it is, or None before a game starts.

        This is the object the ActionProcessor mutates; presentation code
        should read `players` instead.
        """
        if not self._players:
            return None
        return self._players[self._current_player_idx]

    def get_card(self, card_id: int) -> Card | None:
        """Find a card in play by id. Anything but a plain int finds nothing."""
        if isinstance(card_id, bool) or not isinstance(card_id, int):
            return None
        return self._cards.get(card_id)

    # -- Mutation ------------------------------------------------------------

    def new_game(self, cards: Iterable[Card]):
        """Reset to two fresh players, the given table, player 0 to move."""
        replacement = GameState(
            players=[Player() for _ in range(MAX_PLAYERS)],
            cards=cards,
        )
        self._players = replacement._players
        self._cards = replacement._cards
        self._current_player_idx = 0
        self._chips_taken = TokenBag.empty()

    def advance_to_next_player(self):
        """Pass the turn on and clear the per-turn chip counter."""
        if self._players:
            self._current_player_idx = (self._current_player_idx + 1) % len(self._players)
        self._chips_taken = TokenBag.empty()

    def record_chip_taken(self, color: ChipColor):
        self._chips_taken = self._chips_taken.with_added(color)

    def remove_card(self, card: Card | int):
        """Take a card out of play. No-op if it is not on the table."""
        card_id = card.card_id if isinstance(card, Card) else card
        self._cards.pop(card_id, None)

    def clone(self) -> GameState:
        """Deep copy the state."""
        return deepcopy(self)

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return (
            self._players == other._players
            and self.cards == other.cards
            and self._current_player_idx == other._current_player_idx
            and self._chips_taken == other._chips_taken
        )

    def __repr__(self):
        return (
            f"GameState(players={self._players!r}, cards={len(self._cards)}, "
            f"current_player_idx={self._current_player_idx}, "
            f"chips_taken={self._chips_taken.as_dict()!r})"
        )
