"""Simulation and benchmark running."""

from simulation.runner import (
    BenchmarkSummary,
    GameResult,
    GameLog,
    GameRunner,
    MoveRecord,
    save_game_log,
    run_batch,
    summarize,
)
from simulation.parallel_runner import BatchProgress, ParallelGameRunner

__all__ = [
    # runner
    "BenchmarkSummary",
    "GameResult",
    "GameLog",
    "GameRunner",
    "MoveRecord",
    "save_game_log",
    "run_batch",
    "summarize",
    # parallel_runner
    "BatchProgress",
    "ParallelGameRunner",
]
