"""Process-pool benchmark runner.

A Hanabi game takes a few milliseconds, so work is shipped to the workers
in chunks of consecutive seeds rather than one future per game.
"""

from __future__ import annotations

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from simulation.runner import run_batch

if TYPE_CHECKING:
    from simulation.runner import GameResult

logger = logging.getLogger(__name__)

# Chunks per worker; more chunks give smoother progress reports
CHUNKS_PER_WORKER = 8


@dataclass
class BatchProgress:
    """Where a running benchmark stands."""

    completed: int
    total: int
    elapsed_seconds: float
    total_score: int

    @property
    def completion_rate(self) -> float:
        return self.completed / self.total if self.total > 0 else 0.0

    @property
    def games_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.completed / self.elapsed_seconds

    @property
    def average_score(self) -> float:
        return self.total_score / self.completed if self.completed > 0 else 0.0


def seed_chunks(start_seed: int, num_games: int, chunk_size: int) -> list[tuple[int, int]]:
    """Split ``num_games`` consecutive seeds into ``(first_seed, count)`` pairs."""
    chunks = []
    for offset in range(0, num_games, chunk_size):
        chunks.append((start_seed + offset, min(chunk_size, num_games - offset)))
    return chunks


class ParallelGameRunner:
    """Spread self-contained games over worker processes.

    Every game is fully determined by its seed, so the results equal those
    of a sequential ``run_batch`` over the same seeds.
    """

    def __init__(self, num_workers: int | None = None):
        self.num_workers = num_workers or os.cpu_count() or 4

    def run_games(
        self,
        strategy0_name: str,
        strategy1_name: str,
        num_games: int,
        strategy0_params: dict | None = None,
        strategy1_params: dict | None = None,
        callback: Callable[[GameResult, BatchProgress], None] | None = None,
        start_seed: int = 0,
    ) -> list[GameResult]:
        """Play seeds ``start_seed`` .. ``start_seed + num_games - 1``.

        Args:
            strategy0_name: Factory name for player 0 (e.g. "robert").
            strategy1_name: Factory name for player 1.
            num_games: How many games to play.
            strategy0_params: Factory parameters for player 0.
            strategy1_params: Factory parameters for player 1.
            callback: Called once per finished game with the result and the
                progress so far. Games arrive chunk by chunk, not in seed order.
            start_seed: Seed of the first game.

        Returns:
            One GameResult per seed, sorted by seed.

        Raises:
            Exception: Whatever a worker raised; one failing game aborts the batch.
        """
        chunk_size = max(1, -(-num_games // (self.num_workers * CHUNKS_PER_WORKER)))
        chunks = seed_chunks(start_seed, num_games, chunk_size)
        logger.info(
            f"{strategy0_name} + {strategy1_name}: {num_games} games in "
            f"{len(chunks)} chunks on {self.num_workers} workers"
        )

        started = time.perf_counter()
        results: list[GameResult] = []
        total_score = 0

        with ProcessPoolExecutor(max_workers=self.num_workers) as pool:
            pending = [
                pool.submit(
                    _run_chunk,
                    strategy0_name,
                    strategy1_name,
                    strategy0_params or {},
                    strategy1_params or {},
                    first_seed,
                    count,
                )
                for first_seed, count in chunks
            ]

            for future in as_completed(pending):
                for result in future.result():
                    results.append(result)
                    total_score += result.score
                    if callback:
                        callback(
                            result,
                            BatchProgress(
                                completed=len(results),
                                total=num_games,
                                elapsed_seconds=time.perf_counter() - started,
                                total_score=total_score,
                            ),
                        )

        results.sort(key=lambda r: r.seed)
        return results


def _run_chunk(
    strategy0_name: str,
    strategy1_name: str,
    strategy0_params: dict,
    strategy1_params: dict,
    first_seed: int,
    count: int,
) -> list[GameResult]:
    """Worker entry point; module level so it pickles."""
    return run_batch(
        strategy0_name,
        strategy1_name,
        count,
        start_seed=first_seed,
        strategy0_params=strategy0_params,
        strategy1_params=strategy1_params,
    )
