"""Tests for the knowledge tracker."""

import pytest

from hanabi_engine.card_set import CardSet
from hanabi_engine.cards import Card, Color
from hanabi_engine.game import Game
from hanabi_engine.moves import (
    Discard,
    DiscardResult,
    HintColor,
    HintResult,
    HintValue,
    Play,
    PlayResult,
)
from strategies.knowledge import KnowledgeTracker, probability
from strategies.random_strategy import RandomStrategy
from strategies.robert import RobertStrategy

R1 = Card.of(Color.RED, 1)
R1b = Card.of(Color.RED, 1, copy=1)
R2 = Card.of(Color.RED, 2)
G1 = Card.of(Color.GREEN, 1)
G2 = Card.of(Color.GREEN, 2)
B3 = Card.of(Color.BLUE, 3)
Y4 = Card.of(Color.YELLOW, 4)
W5 = Card.of(Color.WHITE, 5)


def tracker(partner_hand=(G1, R2, B3, Y4, W5)):
    k = KnowledgeTracker()
    k.initialize(partner_hand)
    return k


class TestInitialize:
    def test_partner_cards_are_seen(self):
        k = tracker()
        assert k.cards_not_seen.count() == 45
        assert W5 not in k.cards_not_seen
        assert k.public_unknowns == CardSet.full()
        assert len(k.my_knowledge) == 5
        assert len(k.partner_knowledge) == 5


class TestHints:
    def test_received_color_hint_narrows_both_groups(self):
        k = tracker()
        k.apply_partner_move(HintColor(Color.RED), HintResult(indices=(1, 3)))

        assert k.my_knowledge[1] == CardSet.of_color(Color.RED)
        assert k.my_knowledge[3] == CardSet.of_color(Color.RED)
        assert k.my_knowledge[0] == CardSet.not_color(Color.RED)
        assert k.hints_remaining == 7

    def test_given_value_hint_narrows_partner_view(self):
        k = tracker()
        k.apply_own_move(HintValue(1), HintResult(indices=(0,)), False)

        assert k.partner_knowledge[0] == CardSet.of_value(1)
        assert all(s == CardSet.not_value(1) for s in k.partner_knowledge[1:])
        assert k.hints_remaining == 7

    def test_hints_compose(self):
        k = tracker()
        k.apply_partner_move(HintColor(Color.RED), HintResult(indices=(2,)))
        k.apply_partner_move(HintValue(1), HintResult(indices=(2,)))
        assert k.my_knowledge[2] == CardSet.of_card_type(Color.RED, 1)


class TestCardsLeavingHands:
    def test_own_play_shifts_slots(self):
        k = tracker()
        k.apply_partner_move(HintColor(Color.RED), HintResult(indices=(4,)))
        k.apply_own_move(Play(1), PlayResult(success=True, card=R1), True)

        assert k.fireworks == [1, 0, 0, 0, 0]
        assert len(k.my_knowledge) == 5
        # Old slot 4 moved down to slot 3; the new card is unknown
        assert k.my_knowledge[3] == CardSet.of_color(Color.RED)
        assert k.my_knowledge[4] == CardSet.full()
        assert R1 not in k.cards_not_seen
        assert R1 not in k.public_unknowns

    def test_own_failed_play_without_draw(self):
        k = tracker()
        k.apply_own_move(Play(0), PlayResult(success=False, card=B3), False)
        assert k.mistakes_made == 1
        assert k.discard_pile == [B3]
        assert len(k.my_knowledge) == 4

    def test_partner_failed_play_is_a_mistake(self):
        k = tracker()
        k.apply_partner_move(Play(4), PlayResult(success=False, card=W5, drawn=R1b))
        assert k.mistakes_made == 1
        assert k.discard_pile == [W5]
        assert k.fireworks == [0, 0, 0, 0, 0]

    def test_discard_is_not_a_mistake(self):
        k = tracker()
        k.hints_remaining = 5
        k.apply_own_move(Discard(2), DiscardResult(card=Card.of(Color.BLUE, 3, copy=1)), True)
        k.apply_partner_move(Discard(0), DiscardResult(card=G1, drawn=R1b))
        assert k.mistakes_made == 0

    def test_partner_discard_reveals_draw(self):
        k = tracker()
        k.hints_remaining = 3
        k.apply_partner_move(Discard(0), DiscardResult(card=G1, drawn=R1b))

        assert k.partner_hand == [R2, B3, Y4, W5, R1b]
        assert k.partner_knowledge[-1] == CardSet.full()
        assert R1b not in k.cards_not_seen
        assert R1b in k.public_unknowns
        assert G1 not in k.public_unknowns
        assert k.hints_remaining == 4
        assert k.discard_pile == [G1]

    def test_discard_caps_hints(self):
        k = tracker()
        k.apply_own_move(Discard(0), DiscardResult(card=R1), True)
        assert k.hints_remaining == 8

    def test_mismatched_result(self):
        k = tracker()
        with pytest.raises(ValueError):
            k.apply_own_move(Play(0), HintResult(indices=(0,)), False)


class TestCardClasses:
    def test_playable_cards(self):
        k = tracker()
        k.fireworks = [1, 0, 0, 0, 5]
        playable = k.playable_cards()
        assert R2 in playable
        assert G1 in playable
        assert R1 not in playable
        assert W5 not in playable
        assert playable.count() == 2 + 3 + 3 + 3

    def test_playable_with_override(self):
        k = tracker()
        assert R2 in k.playable_cards([1, 0, 0, 0, 0])
        assert R2 not in k.playable_cards()

    def test_discardable_includes_played(self):
        k = tracker()
        k.fireworks = [2, 0, 0, 0, 0]
        useless = k.discardable_cards()
        assert R1 in useless
        assert R2 in useless
        assert Card.of(Color.RED, 3) not in useless

    def test_discardable_includes_blocked(self):
        k = tracker()
        k.discard_pile = [G2, Card.of(Color.GREEN, 2, copy=1)]
        useless = k.discardable_cards()
        assert G1 not in useless
        assert Card.of(Color.GREEN, 3) in useless
        assert Card.of(Color.GREEN, 5) in useless

    def test_critical(self):
        k = tracker()
        k.discard_pile = [G2]
        assert k.is_critical(W5)
        assert k.is_critical(Card.of(Color.GREEN, 2, copy=1))
        assert not k.is_critical(R2)
        assert not k.is_critical(R1)

    def test_certainly_critical(self):
        k = tracker()
        k.apply_partner_move(HintValue(5), HintResult(indices=(0,)))
        k.apply_partner_move(HintValue(1), HintResult(indices=(1,)))
        assert k.certainly_critical(k.my_possibilities(0))
        assert not k.certainly_critical(k.my_possibilities(1))
        assert not k.certainly_critical(CardSet.empty())

    def test_played_five_not_critical(self):
        k = tracker()
        k.fireworks = [0, 0, 0, 0, 5]
        assert not k.is_critical(W5)
        assert k.is_useless(W5)

    def test_distance(self):
        k = tracker()
        k.fireworks = [1, 0, 0, 0, 0]
        assert k.distance(R2) == 0
        assert k.distance(Y4) == 3


class TestProbabilities:
    def test_probability_of_empty_set(self):
        assert probability(CardSet.empty(), CardSet.full()) == 0.0

    def test_my_playable_probability_from_hint(self):
        k = tracker()
        k.apply_partner_move(HintValue(1), HintResult(indices=(0,)))
        # Every 1 is playable at the start
        assert k.my_playable_probability(0) == 1.0
        assert k.certainly_playable(k.my_possibilities(0))

    def test_seen_cards_excluded(self):
        k = tracker(partner_hand=(R1, R1b, G2, B3, Y4))
        k.apply_partner_move(HintColor(Color.RED), HintResult(indices=(0,)))
        k.apply_partner_move(HintValue(1), HintResult(indices=(0,)))
        # Two red 1s are visible in the partner's hand
        assert k.my_possibilities(0).count() == 1
        assert k.exact_card(0) == Card.of(Color.RED, 1, copy=2)

    def test_exact_card_unknown(self):
        k = tracker()
        assert k.exact_card(0) is None

    def test_partner_probability_with_hint(self):
        k = tracker()
        assert k.partner_playable_probability(0) < 0.99
        assert k.partner_playable_probability(0, HintValue(1)) == 1.0
        # A value hint that misses the slot rules ones out for it
        assert k.partner_playable_probability(1, HintValue(1)) == 0.0

    def test_only_copy_left(self):
        k = tracker()
        k.apply_partner_move(HintValue(5), HintResult(indices=(0,)))
        # The white 5 is in the partner's hand; four 5s remain possible, each the last copy
        assert k.only_copy_left_probability(0) == 1.0
        k2 = tracker()
        k2.apply_partner_move(HintValue(1), HintResult(indices=(0,)))
        assert k2.only_copy_left_probability(0) == 0.0


class TestSoundness:
    @pytest.mark.parametrize("seed", range(10))
    @pytest.mark.parametrize("agent", ["random", "robert"])
    def test_view_matches_game(self, seed, agent):
        if agent == "random":
            s0, s1 = RandomStrategy(seed=seed), RandomStrategy(seed=seed + 50)
        else:
            s0, s1 = RobertStrategy(), RobertStrategy()
        game = Game(s0, s1, seed=seed)
        strategies = (s0, s1)

        while game.game_over() is None:
            game.advance()
            for player, strategy in enumerate(strategies):
                k = strategy.knowledge
                own = game.hands[player]
                partner = game.hands[1 - player]
                assert len(k.my_knowledge) == len(own)
                assert list(k.partner_hand) == list(partner)
                for i, card in enumerate(own):
                    assert card in k.my_knowledge[i]
                    assert card in k.my_possibilities(i)
                for i, card in enumerate(partner):
                    assert card in k.partner_possibilities(i)
                assert k.fireworks == list(game.fireworks)
                assert k.hints_remaining == game.hints_remaining
                assert k.mistakes_made == game.mistakes_made
