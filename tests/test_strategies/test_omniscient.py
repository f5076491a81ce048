"""Tests for the omniscient strategy."""

import pytest

from hanabi_engine.cards import Card, Color
from hanabi_engine.deck import Deck
from hanabi_engine.game import Game
from hanabi_engine.moves import Discard, HintColor, Play
from hanabi_engine.state import GameState
from strategies.omniscient import (
    DiscardRisk,
    OmniscientStrategy,
    discard_risk,
    safest_discard,
)

R1 = Card.of(Color.RED, 1)
R2 = Card.of(Color.RED, 2)
R2b = Card.of(Color.RED, 2, copy=1)
R3 = Card.of(Color.RED, 3)
R3b = Card.of(Color.RED, 3, copy=1)
G4 = Card.of(Color.GREEN, 4)
B3 = Card.of(Color.BLUE, 3)
Y4 = Card.of(Color.YELLOW, 4)
W5 = Card.of(Color.WHITE, 5)
B5 = Card.of(Color.BLUE, 5)
FIREWORKS = (1, 0, 0, 0, 0)


def make_state(hand0, hand1, deck=(Card.of(Color.GREEN, 2),), **kwargs):
    kwargs.setdefault("fireworks", FIREWORKS)
    return GameState(hands=(tuple(hand0), tuple(hand1)), deck=Deck(tuple(deck)), **kwargs)


def decide(state, player=0):
    strategy = OmniscientStrategy()
    strategy.initialize(state.hands[1 - player])
    strategy.reveal(state, player)
    return strategy.decide_move()


class TestDiscardRisk:
    def test_dead_card(self):
        assert discard_risk(R1, [R1], [], [], FIREWORKS) == DiscardRisk.DEAD

    def test_duplicate_in_hand(self):
        assert discard_risk(R3, [R3, R3b], [], [], FIREWORKS) == DiscardRisk.DUPLICATE_IN_HAND

    def test_copy_elsewhere(self):
        assert discard_risk(R3, [R3], [], [R3b], FIREWORKS) == DiscardRisk.COPY_ELSEWHERE
        assert discard_risk(R3, [R3], [R3b], [], FIREWORKS) == DiscardRisk.COPY_ELSEWHERE

    def test_last_copy(self):
        assert discard_risk(W5, [W5], [], [], FIREWORKS) == DiscardRisk.LAST_COPY

    def test_safest_discard_prefers_first_slot_on_ties(self):
        hand = [W5, R1, G4, R1]
        assert safest_discard(hand, [], [], FIREWORKS) == (1, DiscardRisk.DEAD)


class TestDecisions:
    def test_requires_reveal(self):
        strategy = OmniscientStrategy()
        strategy.initialize((R1,))
        with pytest.raises(RuntimeError):
            strategy.decide_move()

    def test_plays_playable_card(self):
        state = make_state([W5, G4, R2], [B3, Y4])
        assert decide(state) == Play(2)

    def test_discards_without_hints(self):
        state = make_state([W5, R1, G4], [B3, Y4], hints=0)
        assert decide(state) == Discard(1)

    def test_stalls_when_partner_can_play(self):
        state = make_state([W5, R1, G4], [B3, R2b], hints=4)
        assert decide(state) == HintColor(Color.BLUE)

    def test_stalls_with_full_hints(self):
        state = make_state([W5, R1, G4], [B3, Y4], hints=8)
        assert decide(state) == HintColor(Color.BLUE)

    def test_stalls_on_empty_deck(self):
        state = make_state([W5, R1, G4], [B3, Y4], deck=(), hints=4, final_turns=2)
        assert decide(state) == HintColor(Color.BLUE)

    def test_discards_when_safer_than_partner(self):
        state = make_state([W5, R1, G4], [B3, Y4], hints=4)
        assert decide(state) == Discard(1)

    def test_keeps_last_copy(self):
        # Both hands hold only last copies: stall instead of losing a card
        state = make_state([W5], [B5], hints=4)
        assert decide(state) == HintColor(Color.BLUE)

    def test_second_player_view(self):
        state = make_state([B3, Y4], [W5, G4, R2], current_player=1)
        assert decide(state, player=1) == Play(2)


class TestFullGames:
    @pytest.mark.parametrize("seed", range(5))
    def test_games_score_well(self, seed):
        score = Game(OmniscientStrategy(), OmniscientStrategy(), seed=seed).play_to_end()
        assert 10 <= score <= 25
