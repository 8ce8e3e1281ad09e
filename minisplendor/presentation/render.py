"""
Text rendering of a GameStateView for terminal front ends.
"""

from .schemas import CardView, GameStateView, PlayerView


def format_chips(chips: dict[str, int], skip_zero: bool = False) -> str:
    parts = [f"{color}={count}" for color, count in chips.items() if count or not skip_zero]
    return " ".join(parts) if parts else "-"


def render_player(player: PlayerView) -> str:
    marker = "*" if player.is_current_turn else " "
    return f"{marker} Player {player.player_number}  score {player.score:>2}  chips {format_chips(player.chips)}"


def render_card(card: CardView, affordable: bool = False) -> str:
    flag = "$" if affordable else " "
    return f"{flag} [{card.card_id:>2}] {card.points} pt  cost {format_chips(card.cost, skip_zero=True)}"


def render_state(view: GameStateView) -> str:
    """Multi-line board: players, chips taken this turn, cards."""
    if view.current_player_number is None:
        return "No game in progress. Type 'new' to start one."

    affordable = set(view.affordable_card_ids)
    lines = ["Players:"]
    lines.extend(render_player(player) for player in view.players)
    lines.append("")
    lines.append(
        f"Player {view.current_player_number} to move. "
        f"Chips taken this turn: {format_chips(view.chips_taken, skip_zero=True)} ({view.chip_phase})"
    )
    lines.append(f"Can take: {', '.join(view.legal_colors) or 'nothing'}")
    lines.append("")
    lines.append(f"Cards ({len(view.cards)}):")
    lines.extend(render_card(card, card.card_id in affordable) for card in view.cards)
    return "\n".join(lines)
