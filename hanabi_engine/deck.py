"""The draw pile."""

from __future__ import annotations

import random
from dataclasses import dataclass

from hanabi_engine.cards import Card, create_deck


@dataclass(frozen=True, slots=True)
class Deck:
    """An immutable draw pile. The top of the pile is the end of ``cards``."""

    cards: tuple[Card, ...]

    @classmethod
    def full(cls) -> Deck:
        """All 50 cards in id order (unshuffled)."""
        return cls(tuple(create_deck()))

    @classmethod
    def shuffled(cls, seed: int | None = None, rng: random.Random | None = None) -> Deck:
        """A full deck in random order.

        Args:
            seed: Seed for a private RNG (ignored when ``rng`` is given).
            rng: RNG to shuffle with.
        """
        rng = rng or random.Random(seed)
        cards = create_deck()
        rng.shuffle(cards)
        return cls(tuple(cards))

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def draw(self) -> tuple[Card | None, Deck]:
        """Take the top card.

        Returns:
            ``(card, remaining_deck)``; ``card`` is None when the deck is empty.
        """
        if not self.cards:
            return None, self
        return self.cards[-1], Deck(self.cards[:-1])

    def __len__(self) -> int:
        return len(self.cards)
