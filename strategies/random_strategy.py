"""Random strategy for baseline testing."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from hanabi_engine.moves import Play
from strategies.base import Strategy
from strategies.knowledge import KnowledgeTracker

if TYPE_CHECKING:
    from hanabi_engine.cards import Card
    from hanabi_engine.moves import Move, MoveResult


class RandomStrategy(Strategy):
    """Strategy that selects moves uniformly at random.

    Useful as a baseline and for smoke testing.
    """

    def __init__(self, seed: int | None = None, play_only: bool = False):
        """Initialize the random strategy.

        Args:
            seed: Optional random seed for reproducibility.
            play_only: Only ever choose Play moves.
        """
        self._rng = random.Random(seed)
        self._seed = seed
        self.play_only = play_only
        self.knowledge = KnowledgeTracker()

    @property
    def name(self) -> str:
        return "Random (play only)" if self.play_only else "Random"

    def initialize(self, partner_hand: tuple[Card, ...]) -> None:
        self.knowledge.initialize(partner_hand)

    def decide_move(self) -> Move:
        """Select a random legal move."""
        legal_moves = self.knowledge.legal_moves()
        if self.play_only:
            legal_moves = [move for move in legal_moves if isinstance(move, Play)]
        if not legal_moves:
            raise ValueError("No legal moves available")
        return self._rng.choice(legal_moves)

    def update_after_own_move(
        self, move: Move, result: MoveResult, drew_replacement: bool
    ) -> None:
        self.knowledge.apply_own_move(move, result, drew_replacement)

    def update_after_other_player_move(self, move: Move, result: MoveResult) -> None:
        self.knowledge.apply_partner_move(move, result)

    def reset_seed(self, seed: int | None = None) -> None:
        """Reset the random number generator with a new seed."""
        self._seed = seed
        self._rng = random.Random(seed)
