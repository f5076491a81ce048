"""Base strategy interface for Hanabi players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult
    from hanabi_engine.state import GameState


class Strategy(ABC):
    """Abstract base class for player strategies.

    A strategy only sees what its player would see: the partner's hand, the
    public outcome of every move, and hints about its own cards.
    """

    # Strategies that set this receive a ground-truth snapshot via reveal()
    omniscient: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def initialize(self, partner_hand: tuple[Card, ...]) -> None:
        """Called once after dealing, before the first move.

        Args:
            partner_hand: The partner's initial hand, in slot order.
        """
        ...

    @abstractmethod
    def decide_move(self) -> Move:
        """Select the next move. Must be legal in the current state."""
        ...

    @abstractmethod
    def update_after_own_move(
        self, move: Move, result: MoveResult, drew_replacement: bool
    ) -> None:
        """Called after this strategy's own move has been applied.

        Args:
            move: The move that was made.
            result: Its outcome, with the drawn card hidden.
            drew_replacement: Whether a replacement card entered our hand.
        """
        ...

    @abstractmethod
    def update_after_other_player_move(self, move: Move, result: MoveResult) -> None:
        """Called after the partner's move has been applied.

        Args:
            move: The move the partner made.
            result: Its outcome, including the partner's drawn card.
        """
        ...

    def reveal(self, state: GameState, player_index: int) -> None:
        """Receive a read-only snapshot of the full game before deciding.

        Only called when ``omniscient`` is set.

        Args:
            state: Current game state.
            player_index: Which player this strategy controls (0 or 1).
        """
        pass

    def on_game_end(self, score: int) -> None:
        """Called when a game ends.

        Override to handle end-of-game cleanup or learning.
        """
        pass
