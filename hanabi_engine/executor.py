"""Move execution for Hanabi."""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanabi_engine.moves import (
    Discard,
    DiscardResult,
    Hint,
    HintResult,
    Move,
    MoveResult,
    Play,
    PlayResult,
)
from hanabi_engine.move_generator import hinted_indices
from hanabi_engine.state import MAX_HINTS, GameState

if TYPE_CHECKING:
    from hanabi_engine.cards import Card


class IllegalMoveError(Exception):
    """Raised when an illegal move is attempted.

    A strategy only ever returns legal moves, so this is a programming error
    in the caller rather than a game event.
    """

    pass


def execute_move(state: GameState, move: Move) -> tuple[GameState, MoveResult]:
    """Execute a move and return the new game state.

    Args:
        state: Current game state.
        move: Move to execute.

    Returns:
        Tuple of (new game state, result of the move). The result carries the
        drawn replacement card, which only the other player may see.

    Raises:
        IllegalMoveError: If the move is not legal.
    """
    if state.is_game_over:
        raise IllegalMoveError("Game is already over")

    match move:
        case Play():
            return _execute_play(state, move)
        case Discard():
            return _execute_discard(state, move)
        case Hint():
            return _execute_hint(state, move)
        case _:
            raise IllegalMoveError(f"Unknown move type: {type(move)}")


def _check_slot(state: GameState, index: int) -> None:
    hand_size = len(state.current_hand)
    if not isinstance(index, int) or not 0 <= index < hand_size:
        raise IllegalMoveError(f"Slot {index} out of range for a hand of {hand_size}")


def _remove_and_draw(state: GameState, index: int) -> tuple[GameState, Card, Card | None, bool]:
    """Take the card at ``index`` out of the current hand and draw a replacement.

    Returns:
        (new state, removed card, drawn card or None, whether the deck ran out)
    """
    hand = state.current_hand
    card = hand[index]
    new_hand = hand[:index] + hand[index + 1 :]

    drawn, new_deck = state.deck.draw()
    if drawn is not None:
        new_hand = new_hand + (drawn,)
    emptied_deck = drawn is not None and new_deck.is_empty

    new_state = state.with_hand(state.current_player, new_hand).with_deck(new_deck)
    return new_state, card, drawn, emptied_deck


def _execute_play(state: GameState, move: Play) -> tuple[GameState, MoveResult]:
    """Execute playing a card onto the fireworks."""
    _check_slot(state, move.index)

    new_state, card, drawn, emptied_deck = _remove_and_draw(state, move.index)

    success = state.is_playable(card)
    if success:
        new_state = new_state.with_firework(card.color, card.value)
    else:
        # Failed plays go to the discard pile
        new_state = new_state.with_mistakes(state.mistakes + 1).with_discard(card)

    result = PlayResult(success=success, card=card, drawn=drawn)
    return new_state.next_turn(emptied_deck), result


def _execute_discard(state: GameState, move: Discard) -> tuple[GameState, MoveResult]:
    """Execute discarding a card for a hint token."""
    _check_slot(state, move.index)

    new_state, card, drawn, emptied_deck = _remove_and_draw(state, move.index)
    new_state = new_state.with_discard(card).with_hints(min(state.hints + 1, MAX_HINTS))

    result = DiscardResult(card=card, drawn=drawn)
    return new_state.next_turn(emptied_deck), result


def _execute_hint(state: GameState, move: Hint) -> tuple[GameState, MoveResult]:
    """Execute a color or value hint to the other player."""
    if state.hints <= 0:
        raise IllegalMoveError("No hint tokens left")

    indices = hinted_indices(state.other_hand, move)
    if not indices:
        raise IllegalMoveError(f"{move} touches no card in the other hand")

    new_state = state.with_hints(state.hints - 1)
    return new_state.next_turn(emptied_deck=False), HintResult(indices=indices)
