"""50-bit card sets.

A ``CardSet`` is a subset of the 50 physical cards, stored as an int where
bit ``i`` is set iff card id ``i`` is a member. Set algebra never mutates;
only ``add``/``remove`` change a set in place.
"""

from __future__ import annotations

from typing import Iterator

from hanabi_engine.cards import (
    DECK_SIZE,
    MAX_VALUE,
    Card,
    Color,
    card_type_ids,
    check_value,
    decode,
)

FULL_BITS = (1 << DECK_SIZE) - 1


def _bits_where(predicate) -> int:
    bits = 0
    for card_id in range(DECK_SIZE):
        if predicate(*decode(card_id)):
            bits |= 1 << card_id
    return bits


# Precomputed from the id layout in cards.py
_COLOR_BITS: dict[Color, int] = {
    color: _bits_where(lambda c, v, color=color: c == color) for color in Color
}
_VALUE_BITS: dict[int, int] = {
    value: _bits_where(lambda c, v, value=value: v == value)
    for value in range(1, MAX_VALUE + 1)
}
_CARD_TYPE_BITS: dict[tuple[Color, int], int] = {
    (color, value): sum(1 << card_id for card_id in card_type_ids(color, value))
    for color in Color
    for value in range(1, MAX_VALUE + 1)
}


def _id_of(card: Card | int) -> int:
    card_id = card.id if isinstance(card, Card) else card
    decode(card_id)
    return card_id


class CardSet:
    """A set of card ids drawn from the 50-card universe."""

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0):
        if bits & ~FULL_BITS:
            raise ValueError(f"Card set has bits outside the {DECK_SIZE}-card universe")
        self._bits = bits

    # --- constructors ---

    @classmethod
    def full(cls) -> CardSet:
        return cls(FULL_BITS)

    @classmethod
    def empty(cls) -> CardSet:
        return cls(0)

    @classmethod
    def of_color(cls, color: Color) -> CardSet:
        return cls(_COLOR_BITS[Color(color)])

    @classmethod
    def not_color(cls, color: Color) -> CardSet:
        return cls(FULL_BITS & ~_COLOR_BITS[Color(color)])

    @classmethod
    def of_value(cls, value: int) -> CardSet:
        return cls(_VALUE_BITS[check_value(value)])

    @classmethod
    def not_value(cls, value: int) -> CardSet:
        return cls(FULL_BITS & ~_VALUE_BITS[check_value(value)])

    @classmethod
    def of_card_type(cls, color: Color, value: int) -> CardSet:
        """Every copy of the given color and value."""
        return cls(_CARD_TYPE_BITS[(Color(color), check_value(value))])

    @classmethod
    def of_card(cls, card: Card | int) -> CardSet:
        """The set holding just this one physical card."""
        return cls(1 << _id_of(card))

    @classmethod
    def of_cards(cls, cards) -> CardSet:
        bits = 0
        for card in cards:
            bits |= 1 << _id_of(card)
        return cls(bits)

    # --- queries ---

    @property
    def bits(self) -> int:
        return self._bits

    def count(self) -> int:
        """Number of card ids in the set."""
        return self._bits.bit_count()

    def is_subset_of(self, other: CardSet) -> bool:
        return (self._bits & other._bits) == self._bits

    def first(self) -> Card | None:
        """The member with the lowest id, or None for the empty set."""
        if not self._bits:
            return None
        return Card((self._bits & -self._bits).bit_length() - 1)

    def cards(self) -> list[Card]:
        return list(self)

    # --- algebra ---

    def intersect(self, other: CardSet) -> CardSet:
        return CardSet(self._bits & other._bits)

    def union(self, other: CardSet) -> CardSet:
        return CardSet(self._bits | other._bits)

    def difference(self, other: CardSet) -> CardSet:
        return CardSet(self._bits & ~other._bits)

    def complement(self) -> CardSet:
        return CardSet(FULL_BITS & ~self._bits)

    def copy(self) -> CardSet:
        return CardSet(self._bits)

    # --- in-place ---

    def add(self, card: Card | int) -> None:
        self._bits |= 1 << _id_of(card)

    def remove(self, card: Card | int) -> None:
        self._bits &= ~(1 << _id_of(card))

    # --- dunder ---

    __and__ = intersect
    __or__ = union
    __sub__ = difference
    __invert__ = complement

    def __le__(self, other: CardSet) -> bool:
        return self.is_subset_of(other)

    def __contains__(self, card: object) -> bool:
        if isinstance(card, Card):
            return bool(self._bits >> card.id & 1)
        if isinstance(card, int) and 0 <= card < DECK_SIZE:
            return bool(self._bits >> card & 1)
        return False

    def __iter__(self) -> Iterator[Card]:
        bits = self._bits
        while bits:
            low = bits & -bits
            yield Card(low.bit_length() - 1)
            bits ^= low

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self._bits != 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CardSet):
            return NotImplemented
        return self._bits == other._bits

    __hash__ = None  # mutable via add/remove

    def __repr__(self) -> str:
        return f"CardSet({self._bits:#015x}, count={self.count()})"

    def __str__(self) -> str:
        return "{" + " ".join(str(card) for card in self) + "}"
