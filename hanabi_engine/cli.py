"""Command-line interface for Hanabi."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from hanabi_engine.display import format_move, format_state
from hanabi_engine.game import Game

logger = logging.getLogger(__name__)

DEFAULT_PARAMS_FILE = "robert_params.txt"
DEFAULT_GAMES = 10000


def strategy_params(name: str, params_file: str) -> dict:
    """Factory parameters for a strategy given the CLI options."""
    if name == "robert":
        return {"params_file": params_file}
    return {}


def select_strategies(selectors: list[str] | None) -> list[str]:
    """Resolve selectors to factory names; no selectors means every automatic strategy."""
    from strategies.factory import StrategyFactory

    if not selectors:
        return [name for name in StrategyFactory.AVAILABLE_STRATEGIES if name != "human"]

    names: list[str] = []
    for selector in selectors:
        for name in StrategyFactory.matching(selector):
            if name not in names:
                names.append(name)
    return names


def play_single(name: str, seed: int | None, params_file: str, color: bool = True) -> int:
    """Play one game with ``name`` in both seats, printing every move."""
    from strategies.factory import StrategyFactory

    params = strategy_params(name, params_file)
    game = Game(
        StrategyFactory.create(name, params, seed=seed),
        StrategyFactory.create(name, params, seed=None if seed is None else seed + 1),
        seed=seed,
    )

    print(format_state(game.state, color=color))
    while (score := game.game_over()) is None:
        player = game.current_player
        move, result = game.advance()
        print(f"\n{format_move(player, move, result)}")
        print(format_state(game.state, color=color))

    print(f"\nFinal score: {score}")
    return score


def run_benchmark(
    names: list[str],
    num_games: int,
    start_seed: int,
    num_workers: int | None,
    params_file: str,
) -> None:
    """Run ``num_games`` self-play games per strategy and print a summary line each."""
    from simulation.parallel_runner import ParallelGameRunner
    from simulation.runner import summarize

    runner = ParallelGameRunner(num_workers=num_workers)
    report_every = max(num_games // 10, 1)

    def on_progress(result, progress) -> None:
        if progress.completed % report_every == 0 or progress.completed == progress.total:
            logger.info(
                f"{progress.completed}/{progress.total} games, "
                f"average {progress.average_score:.2f}, "
                f"{progress.games_per_second:.0f} games/s"
            )

    for name in names:
        if name == "human":
            logger.warning("Skipping the human strategy in a benchmark")
            continue
        params = strategy_params(name, params_file)
        results = runner.run_games(
            name,
            name,
            num_games,
            strategy0_params=params,
            strategy1_params=params,
            callback=on_progress,
            start_seed=start_seed,
        )
        print(summarize(results))


def play_interactive(partner: str, seed: int | None, params_file: str) -> None:
    """Play as player 0 against an automatic partner."""
    from strategies.factory import StrategyFactory
    from strategies.human import HumanQuit, HumanStrategy

    human = HumanStrategy()
    agent = StrategyFactory.create(partner, strategy_params(partner, params_file), seed=seed)
    game = Game(human, agent, seed=seed)

    print("\nWelcome to Hanabi!")
    print(f"You are Player 0, playing with {agent.name}. Type 'q' to quit.\n")

    try:
        while (score := game.game_over()) is None:
            print(format_state(game.state, viewer=0))
            player = game.current_player
            move, result = game.advance()
            if player == 0:
                print(f"\n{format_move(player, move, result)}\n")
    except HumanQuit:
        print("Goodbye!")
        return

    print(format_state(game.state))
    print(f"\nFinal score: {score}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the CLI."""
    load_dotenv()

    parser = argparse.ArgumentParser(description="Two-player Hanabi simulator")
    parser.add_argument(
        "--log-level",
        default=os.getenv("HANABI_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    parser.add_argument(
        "--params",
        default=os.getenv("HANABI_PARAMS_FILE", DEFAULT_PARAMS_FILE),
        help="Robert parameter file (key = value lines)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Single command
    single_parser = subparsers.add_parser("single", help="Watch one self-play game")
    single_parser.add_argument("--strategy", default="robert", help="Strategy name or word")
    single_parser.add_argument("--seed", type=int, help="Random seed")
    single_parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")

    # Benchmark command
    bench_parser = subparsers.add_parser("benchmark", help="Run many games per strategy")
    bench_parser.add_argument(
        "--strategies", nargs="*", help="Strategies to run (full name or a word of it)"
    )
    bench_parser.add_argument(
        "--games", type=int, default=DEFAULT_GAMES, help="Games per strategy"
    )
    bench_parser.add_argument("--seed", type=int, default=0, help="Starting seed")
    bench_parser.add_argument(
        "--workers",
        type=int,
        default=int(os.getenv("HANABI_WORKERS", "0")) or None,
        help="Worker processes (default: CPU count)",
    )

    # Play command
    play_parser = subparsers.add_parser("play", help="Play with an AI partner")
    play_parser.add_argument("--partner", default="robert", help="Partner strategy")
    play_parser.add_argument("--seed", type=int, help="Random seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "single":
        names = select_strategies([args.strategy])
        if not names:
            parser.error(f"No strategy matches '{args.strategy}'")
        play_single(names[0], args.seed, args.params, color=not args.no_color)
    elif args.command == "benchmark":
        names = select_strategies(args.strategies)
        if not names:
            parser.error("No strategy matches the selection")
        run_benchmark(names, args.games, args.seed, args.workers, args.params)
    elif args.command == "play":
        play_interactive(args.partner, args.seed, args.params)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
