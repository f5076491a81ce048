"""Move and move-result types for Hanabi."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from hanabi_engine.card_set import CardSet
from hanabi_engine.cards import Color

if TYPE_CHECKING:
    from hanabi_engine.cards import Card


class MoveType(IntEnum):
    """Type of move."""

    PLAY = auto()
    DISCARD = auto()
    HINT_COLOR = auto()
    HINT_VALUE = auto()


@dataclass(frozen=True, slots=True)
class Move(ABC):
    """Base class for all moves."""

    @property
    @abstractmethod
    def move_type(self) -> MoveType:
        """The type of this move."""
        ...

    @property
    def is_hint(self) -> bool:
        return False

    @abstractmethod
    def __str__(self) -> str:
        """Human-readable move description."""
        ...


@dataclass(frozen=True, slots=True)
class Play(Move):
    """Play the card at a hand slot onto the fireworks."""

    index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.PLAY

    def __str__(self) -> str:
        return f"Play slot {self.index}"


@dataclass(frozen=True, slots=True)
class Discard(Move):
    """Discard the card at a hand slot to regain a hint token."""

    index: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.DISCARD

    def __str__(self) -> str:
        return f"Discard slot {self.index}"


@dataclass(frozen=True, slots=True)
class Hint(Move):
    """Base class for hints given to the other player."""

    @property
    def is_hint(self) -> bool:
        return True

    @abstractmethod
    def matches(self, card: Card) -> bool:
        """Whether the hint touches this card."""
        ...

    @abstractmethod
    def touched_set(self) -> CardSet:
        """Cards the hint touches, for narrowing touched slots."""
        ...

    @abstractmethod
    def untouched_set(self) -> CardSet:
        """Cards the hint rules in for slots it does not touch."""
        ...


@dataclass(frozen=True, slots=True)
class HintColor(Hint):
    """Tell the other player which of their cards have a color."""

    color: Color

    @property
    def move_type(self) -> MoveType:
        return MoveType.HINT_COLOR

    def matches(self, card: Card) -> bool:
        return card.color == self.color

    def touched_set(self) -> CardSet:
        return CardSet.of_color(self.color)

    def untouched_set(self) -> CardSet:
        return CardSet.not_color(self.color)

    def __str__(self) -> str:
        return f"Hint color {self.color}"


@dataclass(frozen=True, slots=True)
class HintValue(Hint):
    """Tell the other player which of their cards have a value."""

    value: int

    @property
    def move_type(self) -> MoveType:
        return MoveType.HINT_VALUE

    def matches(self, card: Card) -> bool:
        return card.value == self.value

    def touched_set(self) -> CardSet:
        return CardSet.of_value(self.value)

    def untouched_set(self) -> CardSet:
        return CardSet.not_value(self.value)

    def __str__(self) -> str:
        return f"Hint value {self.value}"


@dataclass(frozen=True, slots=True)
class MoveResult(ABC):
    """Outcome of an applied move."""

    @abstractmethod
    def __str__(self) -> str:
        ...


@dataclass(frozen=True, slots=True)
class PlayResult(MoveResult):
    """Outcome of a play.

    Attributes:
        success: Whether the card extended its firework.
        card: The card that was played.
        drawn: The replacement card, or None if the deck was empty or the
            result is the mover's view (players never see their own draws).
    """

    success: bool
    card: Card
    drawn: Card | None = None

    def hidden_from_mover(self) -> PlayResult:
        return replace(self, drawn=None)

    def __str__(self) -> str:
        outcome = "succeeded" if self.success else "failed"
        return f"Played {self.card} ({outcome})"


@dataclass(frozen=True, slots=True)
class DiscardResult(MoveResult):
    """Outcome of a discard."""

    card: Card
    drawn: Card | None = None

    def hidden_from_mover(self) -> DiscardResult:
        return replace(self, drawn=None)

    def __str__(self) -> str:
        return f"Discarded {self.card}"


@dataclass(frozen=True, slots=True)
class HintResult(MoveResult):
    """Outcome of a hint: the touched slots of the other player's hand."""

    indices: tuple[int, ...]

    def __str__(self) -> str:
        slots = ", ".join(str(i) for i in self.indices)
        return f"Touched slots {slots}"
