"""Per-player knowledge of the game, maintained from public information.

Every strategy that reasons about hidden cards owns one KnowledgeTracker.
It records what this player can see (fireworks, tokens, discard pile, the
partner's hand) and, per hand slot, a CardSet of the identities the slot
could still hold. A CardSet for the partner's slots tracks what the partner
itself knows, so an agent can predict how a hint will be read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from hanabi_engine.card_set import CardSet
from hanabi_engine.cards import COPIES_PER_VALUE, MAX_VALUE, Card, Color
from hanabi_engine.move_generator import legal_moves_for
from hanabi_engine.moves import (
    Discard,
    DiscardResult,
    Hint,
    HintResult,
    Play,
    PlayResult,
)
from hanabi_engine.state import HAND_SIZE, MAX_HINTS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanabi_engine.moves import Move, MoveResult


def probability(possible: CardSet, target: CardSet) -> float:
    """Fraction of ``possible`` that lies in ``target``; 0 when nothing is possible."""
    total = possible.count()
    if total == 0:
        return 0.0
    return (possible & target).count() / total


def hint_narrowing(hint: Hint, touched: bool) -> CardSet:
    """The set a slot's knowledge is intersected with after a hint."""
    return hint.touched_set() if touched else hint.untouched_set()


class KnowledgeTracker:
    """What one player knows, updated after every move.

    Attributes:
        fireworks: Highest played value per color.
        hints_remaining: Hint tokens left.
        mistakes_made: Failed plays so far.
        my_knowledge: Per own slot, the identities consistent with every
            hint received about that slot.
        partner_hand: The partner's cards, in slot order.
        partner_knowledge: Per partner slot, what the partner has been told.
        cards_not_seen: Cards this player has not seen anywhere. Own cards
            stay in it until played or discarded.
        public_unknowns: Cards not yet played or discarded. Both players
            know this set, so it bounds the partner's reasoning.
        discard_pile: Discarded cards and failed plays, oldest first.
    """

    def __init__(self):
        self.fireworks: list[int] = [0] * len(Color)
        self.hints_remaining = MAX_HINTS
        self.mistakes_made = 0
        self.my_knowledge: list[CardSet] = [CardSet.full() for _ in range(HAND_SIZE)]
        self.partner_hand: list[Card] = []
        self.partner_knowledge: list[CardSet] = []
        self.cards_not_seen = CardSet.full()
        self.public_unknowns = CardSet.full()
        self.discard_pile: list[Card] = []

    def initialize(self, partner_hand: Sequence[Card]) -> None:
        """Record the partner's dealt hand."""
        self.partner_hand = list(partner_hand)
        self.partner_knowledge = [CardSet.full() for _ in self.partner_hand]
        for card in self.partner_hand:
            self.cards_not_seen.remove(card)

    # --- updates ---

    def apply_own_move(self, move: Move, result: MoveResult, drew_replacement: bool) -> None:
        """Update after our own move. ``result`` never reveals our drawn card."""
        match move, result:
            case Play(index=index), PlayResult():
                self._card_played(result)
                self._drop_own_slot(index, drew_replacement)
            case Discard(index=index), DiscardResult():
                self._card_left_hand(result.card, success=False)
                self.hints_remaining = min(self.hints_remaining + 1, MAX_HINTS)
                self._drop_own_slot(index, drew_replacement)
            case Hint(), HintResult():
                self.hints_remaining -= 1
                self._narrow(self.partner_knowledge, move, result.indices)
            case _:
                raise ValueError(f"Result {result!r} does not match move {move}")

    def apply_partner_move(self, move: Move, result: MoveResult) -> None:
        """Update after the partner's move, including the card they drew."""
        match move, result:
            case Play(index=index), PlayResult():
                self._card_played(result)
                self._drop_partner_slot(index, result.drawn)
            case Discard(index=index), DiscardResult():
                self._card_left_hand(result.card, success=False)
                self.hints_remaining = min(self.hints_remaining + 1, MAX_HINTS)
                self._drop_partner_slot(index, result.drawn)
            case Hint(), HintResult():
                self.hints_remaining -= 1
                self._narrow(self.my_knowledge, move, result.indices)
            case _:
                raise ValueError(f"Result {result!r} does not match move {move}")

    def _card_played(self, result: PlayResult) -> None:
        if not result.success:
            self.mistakes_made += 1
        self._card_left_hand(result.card, success=result.success)

    def _card_left_hand(self, card: Card, success: bool) -> None:
        if success:
            self.fireworks[card.color] += 1
        else:
            self.discard_pile.append(card)
        self.cards_not_seen.remove(card)
        self.public_unknowns.remove(card)

    def _drop_own_slot(self, index: int, drew_replacement: bool) -> None:
        del self.my_knowledge[index]
        if drew_replacement:
            self.my_knowledge.append(CardSet.full())

    def _drop_partner_slot(self, index: int, drawn: Card | None) -> None:
        del self.partner_hand[index]
        del self.partner_knowledge[index]
        if drawn is not None:
            self.partner_hand.append(drawn)
            self.partner_knowledge.append(CardSet.full())
            self.cards_not_seen.remove(drawn)

    @staticmethod
    def _narrow(knowledge: list[CardSet], hint: Hint, indices: tuple[int, ...]) -> None:
        for i in range(len(knowledge)):
            knowledge[i] = knowledge[i] & hint_narrowing(hint, i in indices)

    # --- card classes ---

    def playable_cards(self, fireworks: Sequence[int] | None = None) -> CardSet:
        """Cards that would extend their firework right now."""
        fireworks = self.fireworks if fireworks is None else fireworks
        playable = CardSet.empty()
        for color in Color:
            if fireworks[color] < MAX_VALUE:
                playable = playable | CardSet.of_card_type(color, fireworks[color] + 1)
        return playable

    def discardable_cards(self, fireworks: Sequence[int] | None = None) -> CardSet:
        """Cards that can never be played: already played, or blocked.

        A color is blocked above a value once every copy of that value is in
        the discard pile.
        """
        fireworks = self.fireworks if fireworks is None else fireworks
        discardable = CardSet.empty()
        for color in Color:
            top = fireworks[color]
            blocked_at = next(
                (
                    value
                    for value in range(top + 1, MAX_VALUE + 1)
                    if self._all_copies_discarded(color, value)
                ),
                MAX_VALUE + 1,
            )
            for value in range(1, MAX_VALUE + 1):
                if value <= top or value >= blocked_at:
                    discardable = discardable | CardSet.of_card_type(color, value)
        return discardable

    def critical_cards(self) -> CardSet:
        """Still useful cards with exactly one copy left outside the discard pile."""
        discardable = self.discardable_cards()
        critical = CardSet.empty()
        for color in Color:
            for value in range(1, MAX_VALUE + 1):
                card_type = CardSet.of_card_type(color, value)
                if card_type <= discardable:
                    continue
                if self._discarded_count(color, value) == COPIES_PER_VALUE[value] - 1:
                    critical = critical | card_type
        return critical

    def _discarded_count(self, color: Color, value: int) -> int:
        return sum(1 for card in self.discard_pile if card.card_type == (color, value))

    def _all_copies_discarded(self, color: Color, value: int) -> bool:
        return self._discarded_count(color, value) >= COPIES_PER_VALUE[value]

    # --- per-slot reasoning ---

    def my_possibilities(self, index: int) -> CardSet:
        """Identities our slot could still hold."""
        return self.my_knowledge[index] & self.cards_not_seen

    def partner_possibilities(self, index: int, hint: Hint | None = None) -> CardSet:
        """Identities the partner considers possible for their slot.

        With ``hint``, the view after that hint is given.
        """
        possible = self.partner_knowledge[index] & self.public_unknowns
        if hint is not None:
            possible = possible & hint_narrowing(hint, hint.matches(self.partner_hand[index]))
        return possible

    def my_playable_probability(self, index: int) -> float:
        return probability(self.my_possibilities(index), self.playable_cards())

    def my_discardable_probability(self, index: int) -> float:
        return probability(self.my_possibilities(index), self.discardable_cards())

    def partner_playable_probability(
        self,
        index: int,
        hint: Hint | None = None,
        fireworks: Sequence[int] | None = None,
    ) -> float:
        return probability(self.partner_possibilities(index, hint), self.playable_cards(fireworks))

    def partner_discardable_probability(
        self,
        index: int,
        hint: Hint | None = None,
        fireworks: Sequence[int] | None = None,
    ) -> float:
        return probability(
            self.partner_possibilities(index, hint), self.discardable_cards(fireworks)
        )

    def exact_card(self, index: int) -> Card | None:
        """A card of our slot's type when the type is known for certain."""
        possible = self.my_possibilities(index)
        first = possible.first()
        if first is None:
            return None
        if possible <= CardSet.of_card_type(first.color, first.value):
            return first
        return None

    def only_copy_left_probability(self, index: int) -> float:
        """Chance our slot holds the last unseen copy of its card type."""
        possible = self.my_possibilities(index)
        if not possible:
            return 0.0
        last_copies = sum(
            1
            for card in possible
            if (CardSet.of_card_type(card.color, card.value) & self.cards_not_seen).count() == 1
        )
        return last_copies / possible.count()

    # --- predicates on sets of identities ---

    def is_playable(self, card: Card) -> bool:
        return self.fireworks[card.color] + 1 == card.value

    def is_useless(self, card: Card) -> bool:
        return card in self.discardable_cards()

    def is_critical(self, card: Card) -> bool:
        return card in self.critical_cards()

    def distance(self, card: Card) -> int:
        """How many plays of its color are missing before ``card`` is playable."""
        return card.value - self.fireworks[card.color] - 1

    def certainly_playable(self, possible: CardSet) -> bool:
        return bool(possible) and possible <= self.playable_cards()

    def certainly_useless(self, possible: CardSet) -> bool:
        return bool(possible) and possible <= self.discardable_cards()

    def certainly_critical(self, possible: CardSet) -> bool:
        return bool(possible) and possible <= self.critical_cards()

    # --- moves ---

    def legal_moves(self) -> list[Move]:
        """Our legal moves, in the engine's enumeration order."""
        return legal_moves_for(len(self.my_knowledge), self.partner_hand, self.hints_remaining)
