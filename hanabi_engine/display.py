"""Text rendering of cards, hands and game states for the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanabi_engine.cards import Color

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanabi_engine.card_set import CardSet
    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult
    from hanabi_engine.state import GameState

RESET = "\x1b[0m"


def format_card(card: Card, color: bool = True) -> str:
    """Short card label like ``R3``, optionally in ANSI color."""
    if not color:
        return str(card)
    return f"{card.color.ansi}{card}{RESET}"


def format_hand(hand: Sequence[Card], color: bool = True) -> str:
    """Cards in slot order, each prefixed with its slot index."""
    if not hand:
        return "(empty)"
    return " ".join(f"{i}:{format_card(card, color)}" for i, card in enumerate(hand))


def format_fireworks(fireworks: Sequence[int], color: bool = True) -> str:
    parts = []
    for c in Color:
        label = f"{c.letter}{fireworks[c]}"
        parts.append(f"{c.ansi}{label}{RESET}" if color else label)
    return " ".join(parts)


def format_knowledge(knowledge: Sequence[CardSet]) -> str:
    """What each slot could be, as candidate colors and values."""
    lines = []
    for i, possible in enumerate(knowledge):
        colors = sorted({card.color for card in possible})
        values = sorted({card.value for card in possible})
        color_str = "".join(c.letter for c in colors) or "-"
        value_str = "".join(str(v) for v in values) or "-"
        lines.append(f"  slot {i}: colors {color_str}, values {value_str}")
    return "\n".join(lines)


def format_move(player: int, move: Move, result: MoveResult) -> str:
    return f"Player {player}: {move} -> {result}"


def format_state(
    state: GameState,
    viewer: int | None = None,
    color: bool = True,
) -> str:
    """Format game state for display.

    Args:
        state: State to show.
        viewer: If set, that player's own hand is hidden.
        color: Whether to use ANSI colors.
    """
    lines = []

    lines.append("=" * 60)
    lines.append(
        f"Turn {state.turn_number} | Score {state.score} | "
        f"Hints {state.hints} | Mistakes {state.mistakes} | Deck {len(state.deck)}"
    )
    lines.append("=" * 60)
    lines.append(f"Fireworks: {format_fireworks(state.fireworks, color)}")

    for i, hand in enumerate(state.hands):
        prefix = "→ " if i == state.current_player else "  "
        if i == viewer:
            hand_str = " ".join(f"{slot}:??" for slot in range(len(hand)))
        else:
            hand_str = format_hand(hand, color)
        lines.append(f"{prefix}Player {i}: {hand_str}")

    discards = " ".join(format_card(card, color) for card in sorted(state.discard_pile))
    lines.append(f"Discard pile: {discards or '(none)'}")

    score = state.final_score()
    if score is not None:
        lines.append("=" * 60)
        lines.append(f"GAME OVER - final score {score}")
        lines.append("=" * 60)

    return "\n".join(lines)
