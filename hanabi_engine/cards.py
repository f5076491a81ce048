"""Card and Color models for Hanabi.

Every physical card in the deck has its own id in ``0..49``. The tens digit is
the color and the units digit is a copy bucket::

    bucket: 0 1 2 3 4 5 6 7 8 9
    value:  1 1 1 2 2 3 3 4 4 5

so the id space already contains the copy counts (three 1s, two each of
2-4, one 5 per color).
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar

NUM_COLORS = 5
MAX_VALUE = 5
CARDS_PER_COLOR = 10
DECK_SIZE = NUM_COLORS * CARDS_PER_COLOR

# Copy bucket -> card value
BUCKET_VALUES: tuple[int, ...] = (1, 1, 1, 2, 2, 3, 3, 4, 4, 5)

COPIES_PER_VALUE: dict[int, int] = {
    value: BUCKET_VALUES.count(value) for value in range(1, MAX_VALUE + 1)
}


class InvalidCardError(ValueError):
    """Raised when a card id, color or value is outside the fixed card layout."""


class Color(IntEnum):
    """Firework colors, in id order."""

    RED = 0
    GREEN = 1
    BLUE = 2
    YELLOW = 3
    WHITE = 4

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def letter(self) -> str:
        return self.name[0]

    @property
    def ansi(self) -> str:
        """ANSI foreground color escape for terminal display."""
        return {
            Color.RED: "\x1b[31m",
            Color.GREEN: "\x1b[32m",
            Color.BLUE: "\x1b[34m",
            Color.YELLOW: "\x1b[33m",
            Color.WHITE: "\x1b[37m",
        }[self]

    @classmethod
    def parse(cls, text: str) -> Color:
        """Parse a color from its name or first letter (case-insensitive)."""
        text = text.strip().lower()
        for color in cls:
            if text in (color.name.lower(), color.letter.lower()):
                return color
        raise InvalidCardError(f"Unknown color: {text!r}")


def check_value(value: int) -> int:
    if not 1 <= value <= MAX_VALUE:
        raise InvalidCardError(f"Card value must be 1-{MAX_VALUE}, got {value}")
    return value


def decode(card_id: int) -> tuple[Color, int]:
    """Decode a card id into ``(color, value)``.

    Raises:
        InvalidCardError: If the id is outside ``0..49``.
    """
    if not 0 <= card_id < DECK_SIZE:
        raise InvalidCardError(f"Card id must be 0-{DECK_SIZE - 1}, got {card_id}")
    color_index, bucket = divmod(card_id, CARDS_PER_COLOR)
    return Color(color_index), BUCKET_VALUES[bucket]


def card_type_ids(color: Color, value: int) -> tuple[int, ...]:
    """All card ids sharing the given color and value."""
    check_value(value)
    base = int(color) * CARDS_PER_COLOR
    return tuple(
        base + bucket for bucket, v in enumerate(BUCKET_VALUES) if v == value
    )


class Card:
    """A single physical Hanabi card.

    Cards are interned: ``Card(7) is Card(7)``. Two copies of the same color
    and value are different cards with different ids; use ``same_type`` to
    compare what is printed on them.
    """

    __slots__ = ("_id", "_color", "_value")

    _instances: ClassVar[dict[int, Card]] = {}

    def __new__(cls, card_id: int) -> Card:
        instance = cls._instances.get(card_id)
        if instance is None:
            color, value = decode(card_id)
            instance = object.__new__(cls)
            instance._id = card_id
            instance._color = color
            instance._value = value
            cls._instances[card_id] = instance
        return instance

    @classmethod
    def from_id(cls, card_id: int) -> Card:
        return cls(card_id)

    @classmethod
    def of(cls, color: Color, value: int, copy: int = 0) -> Card:
        """The ``copy``-th physical card of the given color and value."""
        ids = card_type_ids(color, value)
        if not 0 <= copy < len(ids):
            raise InvalidCardError(
                f"There are only {len(ids)} copies of {color.name} {value}"
            )
        return cls(ids[copy])

    @property
    def id(self) -> int:
        return self._id

    @property
    def color(self) -> Color:
        return self._color

    @property
    def value(self) -> int:
        return self._value

    @property
    def card_type(self) -> tuple[Color, int]:
        return self._color, self._value

    @property
    def copies(self) -> int:
        """How many cards of this color and value exist in the deck."""
        return COPIES_PER_VALUE[self._value]

    def same_type(self, other: Card) -> bool:
        return self._color == other._color and self._value == other._value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._id == other._id

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._id < other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __reduce__(self) -> tuple:
        """Support pickling for multiprocessing."""
        return (Card, (self._id,))

    def __repr__(self) -> str:
        return f"Card({self._color.name}, {self._value}, id={self._id})"

    def __str__(self) -> str:
        return f"{self._color.letter}{self._value}"


def create_deck() -> list[Card]:
    """Create the full, ordered 50-card deck."""
    return [Card(card_id) for card_id in range(DECK_SIZE)]
