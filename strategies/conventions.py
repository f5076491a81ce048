"""Rule-priority strategy following common Hanabi conventions.

Priorities:
1. Play a slot known to be playable (newest first)
2. Save the partner's chop card with a value hint if it is critical
3. Give a play clue that tells the partner a card is playable
4. With tokens to spare, give a value clue to a fresh card that is close
   to playable, or a 5
5. Discard the slot least likely to hurt, if a token can be regained
6. Otherwise hint the value of the partner's newest card
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanabi_engine.cards import MAX_VALUE
from hanabi_engine.moves import Discard, HintColor, HintValue, Play
from hanabi_engine.state import HAND_SIZE, MAX_HINTS
from strategies.base import Strategy
from strategies.knowledge import KnowledgeTracker

if TYPE_CHECKING:
    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult

# Distance given to cards that will never be playable
DEAD_DISTANCE = 20
CERTAIN_DISCARD = 1000
HINTED_PENALTY = -1000
CRITICAL_PENALTY = 5000


class ConventionStrategy(Strategy):
    """Strategy that follows a fixed list of conventions."""

    def __init__(self):
        self.knowledge = KnowledgeTracker()
        # Slots that a hint has pointed at, for our hand and the partner's
        self.touched: list[bool] = []
        self.partner_touched: list[bool] = []

    @property
    def name(self) -> str:
        return "Conventions"

    def initialize(self, partner_hand: tuple[Card, ...]) -> None:
        self.knowledge.initialize(partner_hand)
        self.touched = [False] * HAND_SIZE
        self.partner_touched = [False] * len(partner_hand)

    def update_after_own_move(
        self, move: Move, result: MoveResult, drew_replacement: bool
    ) -> None:
        self.knowledge.apply_own_move(move, result, drew_replacement)
        match move:
            case Play(index=index) | Discard(index=index):
                del self.touched[index]
                if drew_replacement:
                    self.touched.append(False)
            case _:
                for i in result.indices:
                    self.partner_touched[i] = True

    def update_after_other_player_move(self, move: Move, result: MoveResult) -> None:
        self.knowledge.apply_partner_move(move, result)
        match move:
            case Play(index=index) | Discard(index=index):
                del self.partner_touched[index]
                if result.drawn is not None:
                    self.partner_touched.append(False)
            case _:
                for i in result.indices:
                    self.touched[i] = True

    def decide_move(self) -> Move:
        k = self.knowledge

        for i in reversed(range(len(k.my_knowledge))):
            if k.certainly_playable(k.my_possibilities(i)):
                return Play(i)

        if k.hints_remaining > 0 and k.partner_hand:
            chop = self._partner_chop()
            if k.is_critical(k.partner_hand[chop]):
                return HintValue(k.partner_hand[chop].value)

            play_clue = self._play_clue()
            if play_clue is not None:
                return play_clue

            if k.hints_remaining > 1:
                setup_clue = self._setup_clue()
                if setup_clue is not None:
                    return setup_clue

        if k.hints_remaining < MAX_HINTS:
            scores = [self.discard_score(i) for i in range(len(k.my_knowledge))]
            return Discard(scores.index(max(scores)))

        if k.partner_hand:
            return HintValue(k.partner_hand[-1].value)
        return Discard(0)

    def _partner_chop(self) -> int:
        """The partner's oldest slot that has never been hinted, or slot 0."""
        for i, touched in enumerate(self.partner_touched):
            if not touched:
                return i
        return 0

    def _play_clue(self) -> Move | None:
        """A hint after which the partner knows a playable card is playable."""
        k = self.knowledge
        for value in range(1, MAX_VALUE + 1):
            for i, card in enumerate(k.partner_hand):
                if card.value != value or not k.is_playable(card):
                    continue
                if k.certainly_playable(k.partner_possibilities(i)):
                    continue
                for hint in (HintColor(card.color), HintValue(card.value)):
                    before = k.partner_possibilities(i)
                    after = k.partner_possibilities(i, hint)
                    if after != before and k.certainly_playable(after):
                        return hint
        return None

    def _setup_clue(self) -> Move | None:
        """A value hint on a fresh partner card that is one step from playable, or a 5."""
        k = self.knowledge
        for i, card in enumerate(k.partner_hand):
            if self.partner_touched[i] or k.is_useless(card):
                continue
            if k.distance(card) <= 1 or card.value == MAX_VALUE:
                return HintValue(card.value)
        return None

    def discard_score(self, index: int) -> int:
        """How safe discarding our slot is; higher is safer."""
        k = self.knowledge
        possible = k.my_possibilities(index)
        if k.certainly_useless(possible):
            return CERTAIN_DISCARD
        if not possible:
            return 0
        if self.touched[index]:
            return HINTED_PENALTY

        critical = k.critical_cards()
        useless = k.discardable_cards()
        total = possible.count()
        critical_count = (possible & critical).count()
        distance_sum = sum(
            DEAD_DISTANCE if card in useless else k.distance(card) for card in possible
        )
        return 100 - int(critical_count / total * CRITICAL_PENALTY) + distance_sum // total
