"""Immutable game state model for Hanabi."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from hanabi_engine.cards import MAX_VALUE, NUM_COLORS
from hanabi_engine.deck import Deck

if TYPE_CHECKING:
    from hanabi_engine.cards import Card, Color

HAND_SIZE = 5
MAX_HINTS = 8
MAX_MISTAKES = 3
MAX_SCORE = NUM_COLORS * MAX_VALUE
NUM_PLAYERS = 2

Hand = tuple["Card", ...]


@dataclass(frozen=True, slots=True)
class GameState:
    """Complete immutable game state.

    Attributes:
        hands: The two players' hands; slot order is draw order.
        deck: Remaining draw pile.
        fireworks: Highest value played so far, per color.
        hints: Hint tokens left (0-8).
        mistakes: Failed plays so far (0-3).
        current_player: 0 or 1, whose turn it is.
        discard_pile: Discarded cards and failed plays, oldest first.
        final_turns: None while the deck has cards; once the last card is
            drawn, the number of turns left before the game ends.
        turn_number: Number of moves applied so far.
    """

    hands: tuple[Hand, Hand]
    deck: Deck
    fireworks: tuple[int, ...] = (0,) * NUM_COLORS
    hints: int = MAX_HINTS
    mistakes: int = 0
    current_player: int = 0
    discard_pile: tuple[Card, ...] = ()
    final_turns: int | None = None
    turn_number: int = 0

    @property
    def other_player(self) -> int:
        return 1 - self.current_player

    @property
    def current_hand(self) -> Hand:
        return self.hands[self.current_player]

    @property
    def other_hand(self) -> Hand:
        return self.hands[self.other_player]

    @property
    def score(self) -> int:
        """Sum of the fireworks."""
        return sum(self.fireworks)

    def is_playable(self, card: Card) -> bool:
        return self.fireworks[card.color] + 1 == card.value

    def final_score(self) -> int | None:
        """The score if the game has ended, otherwise None.

        The game ends at the third mistake, at a perfect score, or once every
        player has taken their last turn after the deck ran out.
        """
        if self.mistakes >= MAX_MISTAKES:
            return self.score
        if self.score == MAX_SCORE:
            return self.score
        if self.final_turns == 0:
            return self.score
        return None

    @property
    def is_game_over(self) -> bool:
        return self.final_score() is not None

    def with_hand(self, player: int, hand: Hand) -> GameState:
        """Return new state with one player's hand replaced."""
        hands = list(self.hands)
        hands[player] = hand
        return replace(self, hands=(hands[0], hands[1]))

    def with_firework(self, color: Color, value: int) -> GameState:
        """Return new state with one firework raised to ``value``."""
        fireworks = list(self.fireworks)
        fireworks[color] = value
        return replace(self, fireworks=tuple(fireworks))

    def with_deck(self, deck: Deck) -> GameState:
        return replace(self, deck=deck)

    def with_hints(self, hints: int) -> GameState:
        return replace(self, hints=hints)

    def with_mistakes(self, mistakes: int) -> GameState:
        return replace(self, mistakes=mistakes)

    def with_discard(self, card: Card) -> GameState:
        return replace(self, discard_pile=self.discard_pile + (card,))

    def next_turn(self, emptied_deck: bool) -> GameState:
        """Pass the turn to the other player and advance the end-game countdown.

        Args:
            emptied_deck: Whether the move just taken drew the last card.
        """
        final_turns = self.final_turns
        if final_turns is not None:
            final_turns -= 1
        elif emptied_deck:
            final_turns = NUM_PLAYERS
        return replace(
            self,
            current_player=self.other_player,
            final_turns=final_turns,
            turn_number=self.turn_number + 1,
        )


def create_initial_state(deck: Deck | None = None, seed: int | None = None) -> GameState:
    """Create the initial game state.

    Args:
        deck: Optional pre-ordered deck (top card last). If None, a new deck
            is shuffled.
        seed: Random seed for shuffling (only used if deck is None).

    Returns:
        Initial game state with five cards dealt to each player, alternating
        and starting with player 0.
    """
    if deck is None:
        deck = Deck.shuffled(seed)
    if len(deck) < HAND_SIZE * NUM_PLAYERS:
        raise ValueError(f"Need at least {HAND_SIZE * NUM_PLAYERS} cards to deal")

    hands: list[list[Card]] = [[], []]
    for _ in range(HAND_SIZE):
        for player in range(NUM_PLAYERS):
            card, deck = deck.draw()
            hands[player].append(card)

    return GameState(
        hands=(tuple(hands[0]), tuple(hands[1])),
        deck=deck,
        final_turns=NUM_PLAYERS if deck.is_empty else None,
    )
