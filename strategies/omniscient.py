"""Omniscient strategy that sees both hands and the deck.

Not a fair player: it exists to estimate how much score is lost to hidden
information. The game hands it a read-only snapshot before every decision.
"""

from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

from hanabi_engine.moves import Discard, HintColor, Play
from hanabi_engine.state import MAX_HINTS
from strategies.base import Strategy

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult
    from hanabi_engine.state import GameState


class DiscardRisk(IntEnum):
    """How bad it is to throw a card away, from harmless to critical."""

    DEAD = 0
    DUPLICATE_IN_HAND = 1
    COPY_ELSEWHERE = 2
    LAST_COPY = 3


def discard_risk(
    card: Card,
    hand: Sequence[Card],
    partner_hand: Sequence[Card],
    deck: Sequence[Card],
    fireworks: Sequence[int],
) -> DiscardRisk:
    """Classify a card by what is lost if it is discarded."""
    if card.value <= fireworks[card.color]:
        return DiscardRisk.DEAD
    if sum(1 for other in hand if other.same_type(card)) > 1:
        return DiscardRisk.DUPLICATE_IN_HAND
    if any(other.same_type(card) for other in (*partner_hand, *deck)):
        return DiscardRisk.COPY_ELSEWHERE
    return DiscardRisk.LAST_COPY


def safest_discard(
    hand: Sequence[Card],
    partner_hand: Sequence[Card],
    deck: Sequence[Card],
    fireworks: Sequence[int],
) -> tuple[int, DiscardRisk]:
    """The lowest-risk slot of ``hand`` and its risk; the first slot wins ties."""
    risks = [discard_risk(card, hand, partner_hand, deck, fireworks) for card in hand]
    best = min(risks)
    return risks.index(best), best


class OmniscientStrategy(Strategy):
    """Plays with full knowledge of both hands and the deck order."""

    omniscient = True

    def __init__(self):
        self._state: GameState | None = None
        self._player = 0

    @property
    def name(self) -> str:
        return "Omniscient"

    def initialize(self, partner_hand: tuple[Card, ...]) -> None:
        self._state = None

    def reveal(self, state: GameState, player_index: int) -> None:
        self._state = state
        self._player = player_index

    def decide_move(self) -> Move:
        state = self._state
        if state is None:
            raise RuntimeError("OmniscientStrategy needs reveal() before deciding")

        hand = state.hands[self._player]
        partner_hand = state.hands[1 - self._player]
        deck = state.deck.cards
        fireworks = state.fireworks

        for i, card in enumerate(hand):
            if state.is_playable(card):
                return Play(i)

        my_slot, my_risk = safest_discard(hand, partner_hand, deck, fireworks)
        if state.hints == 0:
            return Discard(my_slot)

        stall = HintColor(partner_hand[0].color)
        if state.deck.is_empty or state.hints == MAX_HINTS:
            return stall
        if any(state.is_playable(card) for card in partner_hand):
            return stall

        _, partner_risk = safest_discard(partner_hand, hand, deck, fireworks)
        if my_risk <= partner_risk and my_risk != DiscardRisk.LAST_COPY:
            return Discard(my_slot)
        return stall

    def update_after_own_move(
        self, move: Move, result: MoveResult, drew_replacement: bool
    ) -> None:
        pass

    def update_after_other_player_move(self, move: Move, result: MoveResult) -> None:
        pass
