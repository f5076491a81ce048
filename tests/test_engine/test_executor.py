"""Tests for move execution."""

import pytest

from hanabi_engine.cards import Card, Color
from hanabi_engine.deck import Deck
from hanabi_engine.executor import IllegalMoveError, execute_move
from hanabi_engine.moves import (
    Discard,
    DiscardResult,
    HintColor,
    HintResult,
    HintValue,
    Play,
    PlayResult,
)
from hanabi_engine.state import MAX_HINTS, GameState

R1 = Card.of(Color.RED, 1)
R2 = Card.of(Color.RED, 2)
G1 = Card.of(Color.GREEN, 1)
G2 = Card.of(Color.GREEN, 2)
B3 = Card.of(Color.BLUE, 3)
Y4 = Card.of(Color.YELLOW, 4)
W5 = Card.of(Color.WHITE, 5)


def make_state(hand0, hand1, deck=(), **kwargs):
    return GameState(hands=(tuple(hand0), tuple(hand1)), deck=Deck(tuple(deck)), **kwargs)


class TestPlay:
    def test_successful_play(self):
        state = make_state([R1, B3], [G1], deck=[Y4])

        new_state, result = execute_move(state, Play(0))

        assert new_state.fireworks == (1, 0, 0, 0, 0)
        assert new_state.mistakes == 0
        assert new_state.hands[0] == (B3, Y4)
        assert new_state.discard_pile == ()
        assert new_state.current_player == 1
        assert result == PlayResult(success=True, card=R1, drawn=Y4)

    def test_failed_play(self):
        state = make_state([B3, R1], [G1], deck=[Y4])

        new_state, result = execute_move(state, Play(0))

        assert new_state.fireworks == (0, 0, 0, 0, 0)
        assert new_state.mistakes == 1
        assert new_state.discard_pile == (B3,)
        assert result.success is False
        assert result.card == B3

    def test_play_from_empty_deck(self):
        state = make_state([R1, B3], [G1], final_turns=2)

        new_state, result = execute_move(state, Play(0))

        assert new_state.hands[0] == (B3,)
        assert result.drawn is None
        assert new_state.final_turns == 1

    def test_play_does_not_change_hints(self):
        state = make_state([R1], [G1], deck=[Y4], hints=3)
        new_state, _ = execute_move(state, Play(0))
        assert new_state.hints == 3

    def test_third_mistake_ends_game(self):
        state = make_state([W5], [G1], deck=[Y4, B3], fireworks=(1, 1, 0, 0, 0), mistakes=2)

        new_state, _ = execute_move(state, Play(0))

        assert new_state.mistakes == 3
        assert new_state.final_score() == 2

    def test_last_firework_ends_game(self):
        state = make_state([W5], [G1], deck=[Y4], fireworks=(5, 5, 5, 5, 4))
        new_state, _ = execute_move(state, Play(0))
        assert new_state.final_score() == 25

    @pytest.mark.parametrize("index", [-1, 2, 5])
    def test_slot_out_of_range(self, index):
        state = make_state([R1, B3], [G1], deck=[Y4])
        with pytest.raises(IllegalMoveError):
            execute_move(state, Play(index))


class TestDiscard:
    def test_discard_gains_hint(self):
        state = make_state([R1, B3], [G1], deck=[Y4], hints=5)

        new_state, result = execute_move(state, Discard(1))

        assert new_state.hints == 6
        assert new_state.discard_pile == (B3,)
        assert new_state.hands[0] == (R1, Y4)
        assert result == DiscardResult(card=B3, drawn=Y4)

    def test_discard_with_full_hints_stays_capped(self):
        state = make_state([R1], [G1], deck=[Y4], hints=MAX_HINTS)
        new_state, _ = execute_move(state, Discard(0))
        assert new_state.hints == MAX_HINTS

    def test_discard_slot_out_of_range(self):
        state = make_state([R1], [G1], deck=[Y4])
        with pytest.raises(IllegalMoveError):
            execute_move(state, Discard(1))


class TestHint:
    def test_color_hint(self):
        state = make_state([R1], [G1, R2, G2], deck=[Y4], hints=4)

        new_state, result = execute_move(state, HintColor(Color.GREEN))

        assert new_state.hints == 3
        assert result == HintResult(indices=(0, 2))
        assert new_state.hands == state.hands
        assert new_state.current_player == 1

    def test_value_hint(self):
        state = make_state([R1], [G1, R2, G2], deck=[Y4])
        _, result = execute_move(state, HintValue(2))
        assert result.indices == (1, 2)

    def test_hint_without_tokens(self):
        state = make_state([R1], [G1], deck=[Y4], hints=0)
        with pytest.raises(IllegalMoveError):
            execute_move(state, HintColor(Color.GREEN))

    def test_hint_touching_nothing(self):
        state = make_state([R1], [G1], deck=[Y4])
        with pytest.raises(IllegalMoveError):
            execute_move(state, HintColor(Color.WHITE))

    def test_hint_ticks_final_countdown(self):
        state = make_state([R1], [G1], final_turns=1)
        new_state, _ = execute_move(state, HintValue(1))
        assert new_state.final_turns == 0
        assert new_state.is_game_over


class TestEndGame:
    def test_drawing_last_card_starts_countdown(self):
        state = make_state([R1, B3], [G1, G2], deck=[Y4])

        state, _ = execute_move(state, Discard(1))
        assert state.deck.is_empty
        assert state.final_turns == 2
        assert not state.is_game_over

        # Each player gets exactly one more turn
        state, _ = execute_move(state, Discard(0))
        assert not state.is_game_over
        state, _ = execute_move(state, Discard(0))
        assert state.is_game_over

    def test_move_after_game_over(self):
        state = make_state([R1], [G1], mistakes=3)
        with pytest.raises(IllegalMoveError):
            execute_move(state, Play(0))

    def test_unknown_move_type(self):
        state = make_state([R1], [G1], deck=[Y4])
        with pytest.raises(IllegalMoveError):
            execute_move(state, "play 0")
