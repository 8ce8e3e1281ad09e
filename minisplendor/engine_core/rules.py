"""
Rules - Pure legality checks over the game state.

Nothing here mutates state; every function can be called any number of
times with the same inputs.

Chip taking within one turn follows a small state machine. The phase is
not stored anywhere: it is recomputed from the chips taken this turn.

    START       nothing taken yet          any color      -> SINGLE(c)
    SINGLE(c)   one chip of c              c again        -> DONE (pair)
                                           other color    -> DISTINCT
    DISTINCT    one chip each of 2 colors  untaken color  -> DONE (three)
                                           c1 or c2       rejected
    DONE        a pair, or three colors    every color    rejected

A turn ends by itself once chip taking reaches DONE. Buying a card ends
the turn too, but that is the ActionProcessor's call.
"""

from __future__ import annotations
from enum import Enum

from .state import Card, ChipColor, Player, TokenBag

# A turn's chip taking stops at two of one color or three chips in total.
PAIR_LIMIT = 2
CHIP_LIMIT = 3


class ChipPhase(Enum):
    """Phases of the chip-taking sub-turn."""
    START = "start"
    SINGLE = "single"
    DISTINCT = "distinct"
    DONE = "done"


def chip_phase(taken: TokenBag) -> ChipPhase:
    """Derive the sub-turn phase from the chips taken this turn."""
    if turn_complete_by_chips(taken):
        return ChipPhase.DONE
    distinct = taken.distinct_colors
    if distinct == 0:
        return ChipPhase.START
    if distinct == 1:
        return ChipPhase.SINGLE
    return ChipPhase.DISTINCT


def can_take_chip(taken: TokenBag, color: ChipColor) -> bool:
    """
    Check whether one more chip of `color` may be taken this turn.

    DONE rejects everything; DISTINCT only accepts a color not taken yet;
    START and SINGLE accept any color.
    """
    if not isinstance(color, ChipColor):
        return False

    phase = chip_phase(taken)
    if phase == ChipPhase.DONE:
        return False
    if phase == ChipPhase.DISTINCT:
        return taken[color] == 0
    return True


def legal_chip_colors(taken: TokenBag) -> list[ChipColor]:
    """Colors that can be taken right now, in color order."""
    return [color for color in ChipColor if can_take_chip(taken, color)]


def can_buy(player: Player | None, card: Card | None) -> bool:
    """A card is affordable when the player covers its cost in every color."""
    if player is None or card is None:
        return False
    return player.tokens.covers(card.cost)


def turn_complete_by_chips(taken: TokenBag) -> bool:
    """True once chip taking has reached DONE."""
    return taken.max_count >= PAIR_LIMIT or taken.total >= CHIP_LIMIT
