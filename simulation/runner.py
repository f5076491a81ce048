"""Game runner for Hanabi simulations."""

from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from hanabi_engine.game import Game
from hanabi_engine.state import MAX_MISTAKES, MAX_SCORE
from strategies.factory import StrategyFactory

if TYPE_CHECKING:
    from collections.abc import Sequence

    from hanabi_engine.state import GameState

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    score: int
    fireworks: tuple[int, ...]
    mistakes: int
    hints_remaining: int
    turns: int
    player_strategies: tuple[str, str]
    seed: int | None
    duration_ms: float

    @property
    def is_perfect(self) -> bool:
        return self.score == MAX_SCORE

    @property
    def lost_to_mistakes(self) -> bool:
        return self.mistakes >= MAX_MISTAKES


@dataclass
class MoveRecord:
    """Record of a single move."""

    turn: int
    player: int
    move: str
    result: str
    state_after: dict


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    player_strategies: tuple[str, str]
    initial_state: dict
    moves: list[MoveRecord] = field(default_factory=list)
    result: GameResult | None = None


@dataclass
class BenchmarkSummary:
    """Aggregate statistics over a batch of games."""

    player_strategies: tuple[str, str]
    games: int
    average_score: float
    perfect_games: int
    zero_score_games: int
    games_lost_to_mistakes: int
    min_score: int
    max_score: int

    def __str__(self) -> str:
        names = " + ".join(self.player_strategies)
        return (
            f"{names}: {self.games} games, average score {self.average_score:.3f}, "
            f"{self.perfect_games} perfect, {self.zero_score_games} zero-score, "
            f"{self.games_lost_to_mistakes} lost to mistakes"
        )


def strategy_seed(seed: int | None, player: int) -> int | None:
    """Seed for a player's strategy, distinct per player and per game."""
    if seed is None:
        return None
    return seed * 2 + player


class GameRunner:
    """Runs Hanabi games between two named strategies.

    Strategies keep per-game knowledge, so fresh instances are created for
    every game.
    """

    def __init__(
        self,
        strategy0_name: str,
        strategy1_name: str,
        strategy0_params: dict | None = None,
        strategy1_params: dict | None = None,
        log_moves: bool = True,
    ):
        """Initialize the game runner.

        Args:
            strategy0_name: Factory name of the strategy for player 0.
            strategy1_name: Factory name of the strategy for player 1.
            strategy0_params: Parameters for strategy 0.
            strategy1_params: Parameters for strategy 1.
            log_moves: Whether to log individual moves.
        """
        self.strategy_names = (strategy0_name, strategy1_name)
        self.strategy_params = (strategy0_params or {}, strategy1_params or {})
        self.log_moves = log_moves

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for the deck and any random strategy.

        Returns:
            Tuple of (result, log). Log is None if log_moves is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())

        strategies = [
            StrategyFactory.create(name, params, seed=strategy_seed(seed, i))
            for i, (name, params) in enumerate(zip(self.strategy_names, self.strategy_params))
        ]
        game = Game(strategies[0], strategies[1], seed=seed)
        names = (strategies[0].name, strategies[1].name)

        game_log = None
        if self.log_moves:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                player_strategies=names,
                initial_state=state_to_dict(game.state),
            )

        while (score := game.game_over()) is None:
            turn = game.state.turn_number
            player = game.current_player
            move, result = game.advance()
            if game_log:
                game_log.moves.append(
                    MoveRecord(
                        turn=turn,
                        player=player,
                        move=str(move),
                        result=str(result),
                        state_after=state_to_dict(game.state),
                    )
                )

        duration_ms = (time.perf_counter() - start_time) * 1000
        state = game.state

        result = GameResult(
            game_id=game_id,
            score=score,
            fireworks=state.fireworks,
            mistakes=state.mistakes,
            hints_remaining=state.hints,
            turns=state.turn_number,
            player_strategies=names,
            seed=seed,
            duration_ms=duration_ms,
        )
        logger.debug(f"Game {game_id} (seed {seed}) ended with score {score}")

        if game_log:
            game_log.result = result

        return result, game_log


def state_to_dict(state: GameState) -> dict:
    """Convert game state to a dictionary for logging."""
    return {
        "turn": state.turn_number,
        "current_player": state.current_player,
        "deck_size": len(state.deck),
        "fireworks": list(state.fireworks),
        "hints": state.hints,
        "mistakes": state.mistakes,
        "hands": [[str(c) for c in hand] for hand in state.hands],
        "discard_pile": [str(c) for c in state.discard_pile],
    }


def save_game_log(log: GameLog, base_dir: str = "logs/games") -> Path:
    """Write ``log`` as JSON under ``base_dir/<date>/`` and return the file path."""
    day_dir = Path(base_dir) / log.timestamp[:10]
    day_dir.mkdir(parents=True, exist_ok=True)

    path = day_dir / f"game_{log.game_id}.json"
    path.write_text(json.dumps(asdict(log), indent=2))
    return path


def run_batch(
    strategy0_name: str,
    strategy1_name: str,
    num_games: int,
    start_seed: int = 0,
    strategy0_params: dict | None = None,
    strategy1_params: dict | None = None,
    log_moves: bool = False,
) -> list[GameResult]:
    """Play seeds ``start_seed`` .. ``start_seed + num_games - 1`` in this process."""
    runner = GameRunner(
        strategy0_name,
        strategy1_name,
        strategy0_params,
        strategy1_params,
        log_moves=log_moves,
    )
    return [runner.run_game(seed=seed)[0] for seed in range(start_seed, start_seed + num_games)]


def summarize(results: Sequence[GameResult]) -> BenchmarkSummary:
    """Average score and outcome counts over a batch.

    Raises:
        ValueError: If ``results`` is empty.
    """
    if not results:
        raise ValueError("Cannot summarize an empty batch")

    scores = [r.score for r in results]
    return BenchmarkSummary(
        player_strategies=results[0].player_strategies,
        games=len(results),
        average_score=sum(scores) / len(scores),
        perfect_games=sum(1 for r in results if r.is_perfect),
        zero_score_games=sum(1 for s in scores if s == 0),
        games_lost_to_mistakes=sum(1 for r in results if r.lost_to_mistakes),
        min_score=min(scores),
        max_score=max(scores),
    )
