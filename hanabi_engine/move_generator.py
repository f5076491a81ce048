"""Legal move generation for Hanabi."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanabi_engine.cards import MAX_VALUE, Color
from hanabi_engine.moves import Discard, Hint, HintColor, HintValue, Move, Play

if TYPE_CHECKING:
    from hanabi_engine.cards import Card
    from hanabi_engine.state import GameState


def generate_legal_moves(state: GameState) -> list[Move]:
    """Generate all legal moves for the current player.

    Order: Play/Discard per slot, then color hints, then value hints. Hints
    need a token and must touch at least one card in the other hand.
    """
    if state.is_game_over:
        return []
    return legal_moves_for(len(state.current_hand), state.other_hand, state.hints)


def legal_moves_for(own_hand_size: int, other_hand: tuple[Card, ...] | list[Card], hints: int) -> list[Move]:
    """Legal moves seen from one player's side of the table.

    Players know their hand size, the other hand and the token count, which
    is all legality depends on, so strategies use this directly.
    """
    moves: list[Move] = []

    for index in range(own_hand_size):
        moves.append(Play(index))
        moves.append(Discard(index))

    if hints > 0:
        colors = {card.color for card in other_hand}
        values = {card.value for card in other_hand}
        moves.extend(HintColor(color) for color in Color if color in colors)
        moves.extend(
            HintValue(value) for value in range(1, MAX_VALUE + 1) if value in values
        )

    return moves


def hinted_indices(hand: tuple[Card, ...] | list[Card], hint: Hint) -> tuple[int, ...]:
    """Slots of ``hand`` touched by the hint."""
    return tuple(i for i, card in enumerate(hand) if hint.matches(card))
