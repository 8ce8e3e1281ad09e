"""
Mini Splendor Cards - The fixed table of 15 cards.

Each card costs one or two colors (1-3 chips each) and is worth
1-5 points. Ids are assigned in table order starting at 0.
"""

from ...engine_core.state import Card, ChipColor, TokenBag

R, U, G, K, W = (
    ChipColor.RED,
    ChipColor.BLUE,
    ChipColor.GREEN,
    ChipColor.BLACK,
    ChipColor.WHITE,
)

# (points, cost) in table order
CARD_TABLE: list[tuple[int, dict[ChipColor, int]]] = [
    # Single color, 1 point
    (1, {R: 2}),
    (1, {U: 3}),
    (1, {G: 2}),
    # Two colors, 1-2 points
    (1, {K: 1, W: 2}),
    (2, {R: 2, U: 1}),
    (2, {G: 1, K: 2}),
    # Single color, 2-3 points
    (2, {W: 3}),
    (3, {K: 3}),
    (3, {R: 3}),
    # Two colors, 3-4 points
    (3, {U: 2, G: 2}),
    (4, {W: 2, R: 3}),
    (4, {K: 3, U: 2}),
    # High value
    (4, {G: 3, W: 2}),
    (5, {R: 3, K: 3}),
    (5, {U: 3, G: 3}),
]

STARTING_CARD_COUNT = len(CARD_TABLE)


def create_starting_cards() -> list[Card]:
    """Build fresh Card objects for the starting table."""
    return [
        Card(card_id=card_id, cost=TokenBag.of(cost), points=points)
        for card_id, (points, cost) in enumerate(CARD_TABLE)
    ]
