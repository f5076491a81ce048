"""Driver-facing Hanabi game: the state machine plus the two players."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hanabi_engine.executor import IllegalMoveError, execute_move
from hanabi_engine.move_generator import generate_legal_moves
from hanabi_engine.moves import DiscardResult, PlayResult
from hanabi_engine.state import create_initial_state

if TYPE_CHECKING:
    from hanabi_engine.cards import Card
    from hanabi_engine.deck import Deck
    from hanabi_engine.moves import Move, MoveResult
    from hanabi_engine.state import GameState
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


class Game:
    """A single two-player game.

    Owns the deck and both hands, asks the current player's strategy for a
    move, applies it and reports the outcome to both strategies.
    """

    def __init__(
        self,
        strategy0: Strategy,
        strategy1: Strategy,
        seed: int | None = None,
        deck: Deck | None = None,
    ):
        """Deal a new game and initialize both strategies.

        Args:
            strategy0: Strategy for player 0 (moves first).
            strategy1: Strategy for player 1.
            seed: Random seed for the shuffle.
            deck: Optional pre-ordered deck (top card last); overrides seed.
        """
        self.strategies = (strategy0, strategy1)
        self._state = create_initial_state(deck=deck, seed=seed)
        self.history: list[tuple[int, Move, MoveResult]] = []

        for i, strategy in enumerate(self.strategies):
            strategy.initialize(self._state.hands[1 - i])

    # --- driving ---

    def legal_moves(self) -> list[Move]:
        """Legal moves for the current player."""
        return generate_legal_moves(self._state)

    def advance(self) -> tuple[Move, MoveResult]:
        """Ask the current player's strategy for a move and apply it."""
        player = self._state.current_player
        strategy = self.strategies[player]
        if strategy.omniscient:
            strategy.reveal(self._state, player)
        move = strategy.decide_move()
        return self.apply_move(move)

    def apply_move(self, move: Move) -> tuple[Move, MoveResult]:
        """Apply a move for the current player and notify both strategies.

        Raises:
            IllegalMoveError: If the move is not legal. This is fatal: the
                game state is left unchanged and no strategy is notified.
        """
        player = self._state.current_player
        new_state, result = execute_move(self._state, move)
        self._state = new_state
        self.history.append((player, move, result))
        logger.debug(f"Player {player}: {move} -> {result}")

        mover = self.strategies[player]
        partner = self.strategies[1 - player]

        if isinstance(result, (PlayResult, DiscardResult)):
            drew = result.drawn is not None
            mover.update_after_own_move(move, result.hidden_from_mover(), drew)
        else:
            mover.update_after_own_move(move, result, False)
        partner.update_after_other_player_move(move, result)

        score = self.game_over()
        if score is not None:
            logger.debug(f"Game over after {self._state.turn_number} moves, score {score}")
            for strategy in self.strategies:
                strategy.on_game_end(score)

        return move, result

    def play_to_end(self) -> int:
        """Advance until the game is over and return the final score."""
        while (score := self.game_over()) is None:
            self.advance()
        return score

    def game_over(self) -> int | None:
        """The final score if the game has ended, otherwise None."""
        return self._state.final_score()

    # --- read-only accessors ---

    @property
    def state(self) -> GameState:
        """Immutable snapshot of the current state."""
        return self._state

    def snapshot(self) -> GameState:
        """Read-only ground truth for instrumented strategies and displays."""
        return self._state

    @property
    def hands(self) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
        return self._state.hands

    @property
    def fireworks(self) -> tuple[int, ...]:
        return self._state.fireworks

    @property
    def hints_remaining(self) -> int:
        return self._state.hints

    @property
    def mistakes_made(self) -> int:
        return self._state.mistakes

    @property
    def current_player(self) -> int:
        return self._state.current_player

    @property
    def deck_size(self) -> int:
        return len(self._state.deck)

    @property
    def discard_pile(self) -> tuple[Card, ...]:
        return self._state.discard_pile


__all__ = ["Game", "IllegalMoveError"]
